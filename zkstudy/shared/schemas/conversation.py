"""
Conversation state schema.

Defines the message log that is threaded through the agent pipeline.
Messages are immutable; the log only ever grows.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from zkstudy.shared.errors import ConversationClosedError


class MessageRole(str, Enum):
    """Who produced a message."""

    USER = "user"
    AGENT = "agent"
    TOOL = "tool"


class Message(BaseModel):
    """A single entry in the conversation log."""

    model_config = ConfigDict(frozen=True)

    role: MessageRole = Field(description="Producer of the message")
    content: str = Field(description="Message text")
    origin_agent: Optional[str] = Field(
        default=None, description="Name of the agent that produced the message"
    )


def user_message(content: str) -> Message:
    """Create a user message."""
    return Message(role=MessageRole.USER, content=content)


def agent_message(agent_name: str, content: str) -> Message:
    """Create a message produced by an agent."""
    return Message(role=MessageRole.AGENT, content=content, origin_agent=agent_name)


def tool_message(agent_name: str, content: str) -> Message:
    """Create a message holding a tool result, attributed to the calling agent."""
    return Message(role=MessageRole.TOOL, content=content, origin_agent=agent_name)


class ConversationState:
    """
    Append-only conversation state for one pipeline run.

    The orchestrator owns the state for the duration of a run and hands it
    to one agent at a time. Once a run is abandoned (e.g. on timeout) the
    state is sealed and further appends raise ConversationClosedError.

    Attributes:
        description: Workflow description shown to every agent
        output_contract: What the workflow as a whole should produce
        session_id: Run identifier used for log correlation
    """

    def __init__(
        self,
        description: str,
        output_contract: str,
        messages: Optional[List[Message]] = None,
        session_id: Optional[str] = None,
    ):
        self.description = description
        self.output_contract = output_contract
        self.session_id = session_id or "unknown"
        self._messages: List[Message] = list(messages or [])
        self._sealed = False

    @property
    def messages(self) -> Tuple[Message, ...]:
        """Snapshot of the message log in order."""
        return tuple(self._messages)

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def last_message(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    def append(self, message: Message) -> None:
        if self._sealed:
            raise ConversationClosedError(
                f"Conversation {self.session_id} is sealed; "
                f"rejected {message.role.value} message"
            )
        self._messages.append(message)

    def seal(self) -> None:
        self._sealed = True

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return (
            f"ConversationState(session_id={self.session_id!r}, "
            f"messages={len(self._messages)}, sealed={self._sealed})"
        )
