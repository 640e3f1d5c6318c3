"""
Error taxonomy for the research pipeline.

Every failure raised inside the pipeline is one of these types. The
request boundary is the only place that turns them into user-visible
responses.
"""

from enum import Enum
from typing import List, Optional


class ToolErrorKind(str, Enum):
    """Why a tool invocation failed."""

    INVALID_ARGUMENTS = "invalid_arguments"
    EXECUTION_FAILURE = "execution_failure"


class ModelErrorKind(str, Enum):
    """Why an agent's model call failed."""

    UPSTREAM_FAILURE = "upstream_failure"


class TopicValidationError(ValueError):
    """Raised when an inbound topic fails validation."""

    def __init__(self, details: List[str]):
        self.details = details
        super().__init__("; ".join(details))


class ToolError(Exception):
    """
    Raised when a tool call cannot be completed.

    Attributes:
        kind: INVALID_ARGUMENTS if the call never reached the tool,
            EXECUTION_FAILURE if the tool itself failed
        tool_id: Id of the tool that was requested
    """

    def __init__(self, kind: ToolErrorKind, tool_id: str, message: str):
        self.kind = kind
        self.tool_id = tool_id
        super().__init__(f"Tool '{tool_id}' failed ({kind.value}): {message}")


class ModelError(Exception):
    """
    Raised when an agent's turn fails because of the language model.

    Attributes:
        kind: Failure category
        agent_name: Name of the agent whose turn failed
    """

    def __init__(
        self,
        agent_name: str,
        message: str,
        kind: ModelErrorKind = ModelErrorKind.UPSTREAM_FAILURE,
        provider: Optional[str] = None,
    ):
        self.kind = kind
        self.agent_name = agent_name
        self.provider = provider
        super().__init__(f"{agent_name}: model call failed ({kind.value}): {message}")


class ConversationClosedError(RuntimeError):
    """Raised when a message is appended to a sealed conversation."""

    pass
