"""
Generic agent execution.

ModelAgent is the single implementation of the Agent interface: every
role (research, summary, ...) is an AgentSpec consumed by the same
take_turn routine.
"""

import logging
import time
from typing import Any, Dict, List, Protocol

from zkstudy.agent.prompts import build_chat_messages
from zkstudy.agent.spec import AgentSpec
from zkstudy.shared.errors import ModelError, ToolError
from zkstudy.shared.llm.base import LanguageModel, ModelReply
from zkstudy.shared.logging.debug_logger import get_debug_logger
from zkstudy.shared.schemas.conversation import (
    ConversationState,
    Message,
    agent_message,
    tool_message,
)


logger = logging.getLogger(__name__)


class Agent(Protocol):
    """A participant in the pipeline that takes one turn over the state."""

    name: str

    async def take_turn(self, state: ConversationState) -> List[Message]: ...


class ModelAgent:
    """
    Agent driven by a language model.

    A turn builds the prompt from the spec and the full history, then
    alternates model calls and tool calls until the model answers with
    text. Tool results and the final answer are appended to the state.
    """

    def __init__(self, spec: AgentSpec, model: LanguageModel):
        self.spec = spec
        self.model = model

    @property
    def name(self) -> str:
        return self.spec.name

    def __repr__(self) -> str:
        return f"ModelAgent({self.spec.name!r}, tools={list(self.spec.tools)})"

    async def take_turn(self, state: ConversationState) -> List[Message]:
        """
        Take one turn over the conversation.

        Args:
            state: Conversation state; this agent is its sole mutator
                until the call returns

        Returns:
            Messages appended during the turn (tool results, then the
            agent's final message)

        Raises:
            ModelError: If the model call fails or returns no usable answer
            ToolError: If a requested tool is unknown to this agent, its
                arguments are invalid, or it fails
        """
        _log = f"[session={state.session_id}] [graph=pipeline] [agent={self.name}] "
        chat = build_chat_messages(self.spec, state)
        catalog = self.spec.tools.catalog()
        appended: List[Message] = []

        logger.info(
            f"{_log}Turn started | history={len(state)}, tools={list(self.spec.tools)}"
        )

        while True:
            reply = await self._call_model(chat, catalog, _log, state.session_id)

            if not reply.tool_calls:
                content = (reply.content or "").strip()
                if not content:
                    raise ModelError(
                        self.name, "model returned an empty response", provider=self.spec.model.provider
                    )
                message = agent_message(self.name, content)
                state.append(message)
                appended.append(message)
                logger.info(
                    f"{_log}Turn finished | appended={len(appended)}, chars={len(content)}"
                )
                return appended

            chat.append(_assistant_tool_call_message(reply))

            for call in reply.tool_calls:
                output = await self._call_tool(call.name, call.arguments, _log, state.session_id)
                message = tool_message(self.name, output)
                state.append(message)
                appended.append(message)
                chat.append({"role": "tool", "tool_call_id": call.id, "content": output})

    async def _call_model(
        self,
        chat: List[Dict[str, Any]],
        catalog: List[Dict[str, Any]],
        _log: str,
        session_id: str,
    ) -> ModelReply:
        binding = self.spec.model
        logger.info(f"{_log}Calling LLM | provider={binding.provider}, model={binding.model_name}")

        start_time = time.perf_counter()
        try:
            reply = await self.model.generate(binding, chat, catalog)
        except ModelError:
            raise
        except Exception as e:
            logger.error(f"{_log}LLM call failed: {e}")
            raise ModelError(self.name, str(e), provider=binding.provider) from e
        duration_ms = (time.perf_counter() - start_time) * 1000

        if not isinstance(reply, ModelReply):
            raise ModelError(
                self.name,
                f"malformed model response of type {type(reply).__name__}",
                provider=binding.provider,
            )

        logger.info(
            f"{_log}LLM responded | duration={duration_ms:.0f}ms, "
            f"tool_calls={[c.name for c in reply.tool_calls]}"
        )

        debug_logger = get_debug_logger(session_id)
        if debug_logger:
            debug_logger.log_llm_call(
                agent_name=self.name,
                model=binding.model_name,
                duration_ms=duration_ms,
                usage=reply.usage,
                tool_calls=[c.name for c in reply.tool_calls],
                response=reply.content,
            )

        return reply

    async def _call_tool(self, tool_id: str, raw_args: str, _log: str, session_id: str) -> str:
        logger.info(f"{_log}Calling tool | tool={tool_id}")
        debug_logger = get_debug_logger(session_id)

        start_time = time.perf_counter()
        try:
            output = await self.spec.tools.invoke(tool_id, raw_args)
        except ToolError as e:
            logger.warning(f"{_log}Tool failed | tool={tool_id}, kind={e.kind.value}: {e}")
            if debug_logger:
                debug_logger.log_tool_call(
                    self.name, tool_id, (time.perf_counter() - start_time) * 1000, False, str(e)
                )
            raise
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(f"{_log}Tool returned | tool={tool_id}, chars={len(output)}")
        if debug_logger:
            debug_logger.log_tool_call(self.name, tool_id, duration_ms, True)
        return output


def _assistant_tool_call_message(reply: ModelReply) -> Dict[str, Any]:
    """Echo the model's tool-call request back into the chat, OpenAI style."""
    return {
        "role": "assistant",
        "content": reply.content,
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.arguments},
            }
            for call in reply.tool_calls
        ],
    }
