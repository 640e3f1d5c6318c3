"""
OpenAI client with retry logic.

Provides a cached async client, an OpenAI-backed LanguageModel, and a
router that picks a model implementation by provider name.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import openai
from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from zkstudy.shared.llm.base import LanguageModel, ModelBinding, ModelReply, ToolCallRequest
from zkstudy.shared.llm.fixture import FixtureLanguageModel
from zkstudy.shared.settings import Settings, get_settings


logger = logging.getLogger(__name__)


OPENAI_PROVIDER = "OPEN_AI"

# Transient failures worth another attempt when LLM_MAX_ATTEMPTS > 1
RETRYABLE_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)

# Module-level cache for the OpenAI client
_client: Optional[AsyncOpenAI] = None


def get_cached_client(settings: Optional[Settings] = None) -> AsyncOpenAI:
    """
    Returns a cached instance of the async OpenAI client.

    Uses the OPENAI_API_KEY setting for authentication. The client is
    created once and reused for all subsequent calls. SDK-level retries
    are disabled; attempts are governed by LLM_MAX_ATTEMPTS instead.
    """
    global _client
    if _client is None:
        settings = settings or get_settings()
        if not settings.openai_api_key:
            raise ValueError(
                "OPENAI_API_KEY environment variable is not set. "
                "Please set it to your OpenAI API key."
            )
        _client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
        )
    return _client


class OpenAIChatModel:
    """LanguageModel backed by the OpenAI chat completions API."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        max_attempts: int = 1,
        settings: Optional[Settings] = None,
    ):
        self._client = client
        self._settings = settings
        self.max_attempts = max_attempts

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = get_cached_client(self._settings)
        return self._client

    async def generate(
        self,
        binding: ModelBinding,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
    ) -> ModelReply:
        """
        Call the chat completions API, with retries on transient errors.

        Args:
            binding: Provider/model to call
            messages: Chat messages in OpenAI format
            tools: Function tools in OpenAI format (may be empty)

        Returns:
            Parsed ModelReply

        Raises:
            openai.OpenAIError: If the call fails after all attempts
        """
        kwargs: Dict[str, Any] = {"model": binding.model_name, "messages": messages}
        if tools:
            kwargs["tools"] = tools

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            reraise=True,
        ):
            with attempt:
                response = await self.client.chat.completions.create(**kwargs)

        message = response.choices[0].message
        tool_calls = [
            ToolCallRequest(
                id=call.id,
                name=call.function.name,
                arguments=call.function.arguments,
            )
            for call in (message.tool_calls or [])
        ]

        usage = {}
        if response.usage is not None:
            usage = {
                "input_tokens": response.usage.prompt_tokens,
                "output_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return ModelReply(content=message.content, tool_calls=tool_calls, usage=usage)


class ProviderRouter:
    """LanguageModel that dispatches to a per-provider implementation."""

    def __init__(self, providers: Mapping[str, LanguageModel]):
        self._providers = dict(providers)

    async def generate(
        self,
        binding: ModelBinding,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
    ) -> ModelReply:
        model = self._providers.get(binding.provider)
        if model is None:
            raise LookupError(
                f"No model provider configured for '{binding.provider}' "
                f"(available: {sorted(self._providers)})"
            )
        return await model.generate(binding, messages, tools)


def build_language_model(settings: Optional[Settings] = None) -> LanguageModel:
    """
    Build the LanguageModel selected by LLM_BACKEND.

    Args:
        settings: Settings to use. Defaults to the process-wide settings.

    Returns:
        A FixtureLanguageModel for "fixture", otherwise a ProviderRouter
        with the OpenAI provider registered
    """
    settings = settings or get_settings()
    if settings.llm_backend == "fixture":
        logger.info("Using fixture language model (LLM_BACKEND=fixture)")
        return FixtureLanguageModel()

    return ProviderRouter(
        {
            OPENAI_PROVIDER: OpenAIChatModel(
                max_attempts=settings.llm_max_attempts, settings=settings
            ),
        }
    )
