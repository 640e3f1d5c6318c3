"""
Deterministic stand-ins for tests.

ScriptedModel replays canned ModelReply objects; RecordingAgent takes
turns without any model and records what it saw.
"""

import asyncio
from typing import Any, Dict, List, Optional

from zkstudy.shared.llm.base import ModelBinding, ModelReply
from zkstudy.shared.schemas.conversation import ConversationState, Message, agent_message


class ScriptedModel:
    """LanguageModel that returns scripted replies in order."""

    def __init__(
        self,
        replies: Optional[List[ModelReply]] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
    ):
        self.replies = list(replies or [])
        self.delay = delay
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def generate(
        self,
        binding: ModelBinding,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
    ) -> ModelReply:
        self.calls.append(
            {
                "binding": binding,
                "messages": [dict(m) for m in messages],
                "tools": list(tools),
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if not self.replies:
            return ModelReply(content="done")
        return self.replies.pop(0)


class RecordingAgent:
    """Agent that appends one fixed message per turn."""

    def __init__(
        self,
        name: str,
        content: Optional[str] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.name = name
        self.content = content
        self.error = error
        self.delay = delay
        self.turns = 0
        self.seen_lengths: List[int] = []

    async def take_turn(self, state: ConversationState) -> List[Message]:
        self.turns += 1
        self.seen_lengths.append(len(state))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        message = agent_message(self.name, self.content or f"{self.name} saw {len(state)} messages")
        state.append(message)
        return [message]
