"""
Pipeline graph construction.

Builds the graph that runs a fixed, ordered list of agents over one
conversation. Each agent gets a node; after every node the router picks
the next agent, the completion node, or END on failure.

The graph is built per run: agent nodes close over that run's
ConversationState, so no conversation data passes through graph state.
"""

import logging
import re
from typing import Any, Dict, List, Sequence

from langgraph.graph import StateGraph, END

from zkstudy.agent.runner import Agent
from zkstudy.graph.router import COMPLETE, FAILED, route_next_agent
from zkstudy.graph.state import PipelineGraphState
from zkstudy.shared.contracts.pipeline_result import PipelineOutcome
from zkstudy.shared.errors import ModelError, ToolError
from zkstudy.shared.schemas.conversation import ConversationState


logger = logging.getLogger(__name__)


def agent_node_name(agent_name: str) -> str:
    """Derive a graph node name from an agent name ("Research Agent" -> "agent_research_agent")."""
    slug = re.sub(r"[^a-z0-9]+", "_", agent_name.lower()).strip("_")
    return f"agent_{slug or 'unnamed'}"


def _make_agent_node(agent: Agent, conversation: ConversationState):
    """
    Create the node function for one agent.

    The node hands the conversation to the agent for one turn. ModelError
    and ToolError are recorded in graph state so the router can stop the
    run; anything else propagates.
    """

    async def _agent_node(state: PipelineGraphState) -> Dict[str, Any]:
        session_id = state.get("session_id", "unknown")
        _log = f"[session={session_id}] [graph=pipeline] [node={agent_node_name(agent.name)}] "

        logger.info(f"{_log}Entering node | history={len(conversation)}")

        try:
            appended = await agent.take_turn(conversation)
        except ModelError as e:
            logger.error(f"{_log}Agent failed with model error: {e}")
            return {
                "current_agent": f"{agent.name} failed",
                "failure": {
                    "outcome": PipelineOutcome.MODEL_ERROR.value,
                    "agent": agent.name,
                    "detail": str(e),
                },
            }
        except ToolError as e:
            logger.error(f"{_log}Agent failed with tool error: {e}")
            return {
                "current_agent": f"{agent.name} failed",
                "failure": {
                    "outcome": PipelineOutcome.TOOL_ERROR.value,
                    "agent": agent.name,
                    "detail": str(e),
                },
            }

        logger.info(f"{_log}Agent finished | appended={len(appended)}")
        return {
            "current_agent": agent.name,
            "completed_agents": [agent.name],
        }

    return _agent_node


def _complete_node(state: PipelineGraphState) -> Dict[str, Any]:
    """Final node that marks the pipeline as complete."""
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=pipeline] [node=complete] "

    logger.info(
        f"{_log}Pipeline complete | agents={state.get('completed_agents', [])} -> END"
    )
    return {"current_agent": COMPLETE}


def create_pipeline_graph(agents: Sequence[Agent], conversation: ConversationState):
    """
    Create and compile the pipeline graph for one run.

    The graph structure is:
        Entry -> route_next_agent
          -> agent_1 -> route_next_agent
          -> ...
          -> agent_n -> route_next_agent
          -> "complete" -> complete_node -> END
          -> "failed"   -> END

    Args:
        agents: Agents in execution order (names must be unique)
        conversation: The run's conversation state

    Returns:
        Compiled LangGraph application ready for execution.

    Raises:
        ValueError: If no agents are given or agent names collide
    """
    if not agents:
        raise ValueError("Pipeline requires at least one agent")

    node_names: List[str] = [agent_node_name(a.name) for a in agents]
    if len(set(node_names)) != len(node_names):
        raise ValueError(f"Agent names must be unique, got {[a.name for a in agents]}")

    graph = StateGraph(PipelineGraphState)

    for agent, node_name in zip(agents, node_names):
        graph.add_node(node_name, _make_agent_node(agent, conversation))
    graph.add_node(COMPLETE, _complete_node)

    def _route(state: PipelineGraphState) -> str:
        return route_next_agent(state, node_names)

    path_map = {name: name for name in node_names}
    path_map[COMPLETE] = COMPLETE
    path_map[FAILED] = END

    graph.set_conditional_entry_point(_route, path_map)
    for node_name in node_names:
        graph.add_conditional_edges(node_name, _route, path_map)

    graph.add_edge(COMPLETE, END)

    return graph.compile()
