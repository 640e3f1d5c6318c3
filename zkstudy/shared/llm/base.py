"""
Language model collaborator interface.

The pipeline treats the model as an opaque capability: given chat
messages and a tool catalog, return text and/or tool-call requests.
Messages and tools use the OpenAI chat-completions format.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol


@dataclass(frozen=True)
class ModelBinding:
    """Which provider and model an agent talks to."""

    provider: str
    model_name: str


@dataclass(frozen=True)
class ToolCallRequest:
    """A tool call requested by the model."""

    id: str
    name: str
    arguments: str


@dataclass(frozen=True)
class ModelReply:
    """
    One model response.

    Attributes:
        content: Text content (may be None when only tool calls are returned)
        tool_calls: Requested tool calls, in the order the model emitted them
        usage: Token usage (input_tokens, output_tokens, total_tokens) if known
    """

    content: Optional[str] = None
    tool_calls: List[ToolCallRequest] = field(default_factory=list)
    usage: Dict[str, int] = field(default_factory=dict)


class LanguageModel(Protocol):
    """Anything that can answer a chat prompt with a tool catalog."""

    async def generate(
        self,
        binding: ModelBinding,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
    ) -> ModelReply: ...
