"""
Routing logic for the pipeline graph.

Determines which agent node runs next based on how many agents have
completed and whether any of them failed.
"""

import logging
from typing import Sequence

from zkstudy.graph.state import PipelineGraphState


logger = logging.getLogger(__name__)

COMPLETE = "complete"
FAILED = "failed"


def route_next_agent(state: PipelineGraphState, node_names: Sequence[str]) -> str:
    """
    Determine the next node to execute.

    Routing logic:
    1. If a node recorded a failure -> "failed" (ends the run)
    2. If fewer agents completed than configured -> next agent node
    3. Otherwise -> "complete"

    Args:
        state: Current graph state
        node_names: Agent node names in execution order

    Returns:
        Name of the next node, "failed" or "complete"
    """
    session_id = state.get("session_id", "unknown")
    completed = len(state.get("completed_agents") or [])
    _log = f"[session={session_id}] [graph=pipeline] [router=route_next_agent] "

    failure = state.get("failure")
    if failure:
        logger.info(
            f"{_log}Routing to '{FAILED}' | agent={failure['agent']}, "
            f"outcome={failure['outcome']}"
        )
        return FAILED

    if completed < len(node_names):
        next_node = node_names[completed]
        logger.info(
            f"{_log}Routing to '{next_node}' | completed={completed}/{len(node_names)}"
        )
        return next_node

    logger.info(f"{_log}Routing to '{COMPLETE}' | completed={completed}/{len(node_names)}")
    return COMPLETE
