"""
Pipeline orchestrator.

Runs an ordered list of agents over one conversation under a single
wall-clock deadline and classifies the result.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from zkstudy.agent.runner import Agent
from zkstudy.graph.build import create_pipeline_graph
from zkstudy.graph.config import DEFAULT_GRAPH_CONFIG, PipelineGraphConfig
from zkstudy.graph.deadline import DeadlineExceeded, race_deadline
from zkstudy.graph.router import COMPLETE
from zkstudy.shared.contracts.pipeline_result import PipelineOutcome, PipelineResult
from zkstudy.shared.logging.config import log_pipeline_event
from zkstudy.shared.schemas.conversation import ConversationState, MessageRole


logger = logging.getLogger(__name__)


async def run_pipeline(
    agents: Sequence[Agent],
    initial_state: ConversationState,
    deadline_seconds: float,
    config: Optional[PipelineGraphConfig] = None,
) -> PipelineResult:
    """
    Run agents strictly in sequence over `initial_state`.

    Agent i+1 sees every message appended by agents 1..i. The whole run
    races against `deadline_seconds`; on timeout the in-flight turn is
    abandoned and the conversation is sealed so nothing can be appended
    after the result is returned.

    Args:
        agents: Agents in execution order
        initial_state: Seeded conversation (must hold at least one message)
        deadline_seconds: Wall-clock budget for the whole run
        config: Optional graph configuration

    Returns:
        PipelineResult with outcome ok (content = last message), timeout,
        model_error or tool_error

    Raises:
        ValueError: If the agent list or the initial state is empty
    """
    if len(initial_state) == 0:
        raise ValueError("Initial conversation state must contain at least one message")
    if deadline_seconds <= 0:
        raise ValueError("deadline_seconds must be positive")

    config = config or DEFAULT_GRAPH_CONFIG
    session_id = initial_state.session_id
    _log = f"[session={session_id}] [graph=pipeline] [orchestrator=run] "

    graph = create_pipeline_graph(agents, initial_state)
    graph_input = {
        "session_id": session_id,
        "current_agent": "starting",
        "completed_agents": [],
        "failure": None,
    }

    logger.info(
        f"{_log}Pipeline starting | agents={[a.name for a in agents]}, "
        f"deadline={deadline_seconds:g}s"
    )
    start_time = time.perf_counter()

    try:
        final_state = await race_deadline(
            graph.ainvoke(
                graph_input,
                config={"recursion_limit": config.limit_for(len(agents))},
            ),
            deadline_seconds,
        )
    except DeadlineExceeded as e:
        initial_state.seal()
        duration_ms = (time.perf_counter() - start_time) * 1000
        progress = _progress_at_timeout(agents, initial_state)
        logger.warning(
            f"{_log}Pipeline timed out | duration={duration_ms:.0f}ms, "
            f"messages={len(initial_state)}, in_flight={progress['current_agent']}, "
            f"completed={progress['completed_agents']}"
        )
        log_pipeline_event(
            "run_timeout",
            progress,
            extra={"duration_ms": round(duration_ms, 2)},
        )
        return PipelineResult(outcome=PipelineOutcome.TIMEOUT, detail=str(e))

    duration_ms = (time.perf_counter() - start_time) * 1000
    failure = final_state.get("failure")

    if failure:
        logger.warning(
            f"{_log}Pipeline failed | agent={failure['agent']}, "
            f"outcome={failure['outcome']}, duration={duration_ms:.0f}ms"
        )
        log_pipeline_event("run_failed", final_state, extra={"duration_ms": round(duration_ms, 2)})
        return PipelineResult(
            outcome=PipelineOutcome(failure["outcome"]),
            detail=failure["detail"],
        )

    last_message = initial_state.last_message
    logger.info(
        f"{_log}Pipeline finished | duration={duration_ms:.0f}ms, "
        f"messages={len(initial_state)}, last_origin={last_message.origin_agent}"
    )
    log_pipeline_event("run_complete", final_state, extra={"duration_ms": round(duration_ms, 2)})
    return PipelineResult(outcome=PipelineOutcome.OK, content=last_message.content)


def _progress_at_timeout(
    agents: Sequence[Agent], conversation: ConversationState
) -> Dict[str, Any]:
    """
    Rebuild run progress from the conversation after a timeout.

    The graph state is lost with the cancelled task. Every finished turn
    ends with exactly one agent message, so the agent messages give the
    completed agents in order.
    """
    completed: List[str] = []
    for message in conversation.messages:
        if message.role == MessageRole.AGENT and message.origin_agent not in completed:
            completed.append(message.origin_agent)

    in_flight = agents[len(completed)].name if len(completed) < len(agents) else COMPLETE
    return {
        "session_id": conversation.session_id,
        "current_agent": in_flight,
        "completed_agents": completed,
        "failure": None,
    }
