"""LLM client utilities."""

from zkstudy.shared.llm.base import LanguageModel, ModelBinding, ModelReply, ToolCallRequest
from zkstudy.shared.llm.client import (
    OpenAIChatModel,
    ProviderRouter,
    build_language_model,
    get_cached_client,
)
from zkstudy.shared.llm.fixture import FixtureLanguageModel

__all__ = [
    "LanguageModel",
    "ModelBinding",
    "ModelReply",
    "ToolCallRequest",
    "OpenAIChatModel",
    "ProviderRouter",
    "build_language_model",
    "get_cached_client",
    "FixtureLanguageModel",
]
