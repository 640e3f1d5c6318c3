"""
Pipeline graph state schema.

The LangGraph state tracks control flow only: which agents have run and
whether one of them failed. The conversation itself lives in a
ConversationState owned by the orchestrator for the run.
"""

from typing import TypedDict, List, Optional, Annotated
import operator


class PipelineFailure(TypedDict):
    """Failure recorded by an agent node."""

    outcome: str  # PipelineOutcome value
    agent: str
    detail: str


class PipelineGraphState(TypedDict):
    """
    State schema for the pipeline graph.

    completed_agents is append-only (operator.add) and doubles as the
    index of the next agent to run.
    """

    session_id: str
    current_agent: str
    completed_agents: Annotated[List[str], operator.add]
    failure: Optional[PipelineFailure]
