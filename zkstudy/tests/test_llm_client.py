"""
Tests for the model client layer.

The OpenAI client is replaced by a small fake exposing
chat.completions.create, so no network access is needed.
"""

import asyncio
from types import SimpleNamespace

import pytest

from zkstudy.shared.llm.base import ModelBinding, ModelReply
from zkstudy.shared.llm.client import (
    OPENAI_PROVIDER,
    OpenAIChatModel,
    ProviderRouter,
    build_language_model,
)
from zkstudy.shared.llm.fixture import FixtureLanguageModel
from zkstudy.shared.settings import Settings
from zkstudy.tests.stubs import ScriptedModel


BINDING = ModelBinding(provider=OPENAI_PROVIDER, model_name="gpt-4o-mini")


class _FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def _make_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _make_response(content=None, tool_calls=None, usage=True):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message)],
        usage=SimpleNamespace(prompt_tokens=12, completion_tokens=5, total_tokens=17) if usage else None,
    )


class TestOpenAIChatModel:
    """Tests for response parsing and request shaping."""

    def test_text_response(self):
        completions = _FakeCompletions(_make_response(content="hello"))
        model = OpenAIChatModel(client=_make_client(completions))

        reply = asyncio.run(model.generate(BINDING, [{"role": "user", "content": "hi"}], []))

        assert reply.content == "hello"
        assert reply.tool_calls == []
        assert reply.usage == {"input_tokens": 12, "output_tokens": 5, "total_tokens": 17}
        assert completions.requests[0]["model"] == "gpt-4o-mini"
        assert "tools" not in completions.requests[0]

    def test_tool_call_response(self):
        call = SimpleNamespace(
            id="call_9",
            function=SimpleNamespace(name="fetch-news", arguments='{"topic": "zk"}'),
        )
        completions = _FakeCompletions(_make_response(tool_calls=[call], usage=False))
        model = OpenAIChatModel(client=_make_client(completions))
        tools = [{"type": "function", "function": {"name": "fetch-news"}}]

        reply = asyncio.run(model.generate(BINDING, [], tools))

        assert reply.content is None
        assert reply.tool_calls[0].id == "call_9"
        assert reply.tool_calls[0].arguments == '{"topic": "zk"}'
        assert reply.usage == {}
        assert completions.requests[0]["tools"] == tools

    def test_single_attempt_by_default(self):
        completions = _FakeCompletions(error=RuntimeError("boom"))
        model = OpenAIChatModel(client=_make_client(completions))

        with pytest.raises(RuntimeError):
            asyncio.run(model.generate(BINDING, [], []))

        assert len(completions.requests) == 1


class TestProviderRouter:
    """Tests for provider dispatch."""

    def test_dispatches_by_provider(self):
        scripted = ScriptedModel([ModelReply(content="routed")])
        router = ProviderRouter({OPENAI_PROVIDER: scripted})

        reply = asyncio.run(router.generate(BINDING, [], []))

        assert reply.content == "routed"
        assert scripted.calls[0]["binding"] == BINDING

    def test_unknown_provider(self):
        router = ProviderRouter({})

        with pytest.raises(LookupError, match="OPEN_AI"):
            asyncio.run(router.generate(BINDING, [], []))


class TestBuildLanguageModel:
    """Tests for backend selection."""

    def test_fixture_backend(self):
        assert isinstance(build_language_model(Settings(llm_backend="fixture")), FixtureLanguageModel)

    def test_openai_backend_is_lazy(self):
        """Building the OpenAI backend does not need a key until the first call."""
        model = build_language_model(Settings(llm_backend="openai", llm_max_attempts=2))

        assert isinstance(model, ProviderRouter)
