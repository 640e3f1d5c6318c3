"""
Tests for the tool registry and the fetch-news tool.

Covers argument validation (which must happen before any execution),
fixture determinism and the error kinds the registry reports.
"""

import asyncio
import json
import threading

import pytest
from pydantic import BaseModel

from zkstudy.shared.errors import ToolError, ToolErrorKind
from zkstudy.tools import DEFAULT_TOOLS, FETCH_NEWS_TOOL, FetchNewsArgs
from zkstudy.tools.mock_data import MOCK_ARTICLES
from zkstudy.tools.registry import ToolRegistry, ToolSpec


# ============================================================================
# Test Fixtures
# ============================================================================


def _make_spy_registry():
    """Registry with a fetch-news schema whose executor records every call."""
    calls = []

    def _execute(args):
        calls.append(args)
        return "[]"

    spy = ToolSpec(
        id="fetch-news",
        description="spy",
        input_schema=FetchNewsArgs,
        execute=_execute,
    )
    return ToolRegistry([spy]), calls


class _EchoArgs(BaseModel):
    text: str


def _make_echo_tool(execute, tool_id="echo"):
    return ToolSpec(id=tool_id, description="Echo text", input_schema=_EchoArgs, execute=execute)


# ============================================================================
# fetch-news
# ============================================================================


class TestFetchNews:
    """Tests for the fetch-news tool."""

    def test_limit_three_returns_first_three_in_order(self):
        """limit=3 returns the first three fixture articles in fixture order."""
        output = asyncio.run(
            DEFAULT_TOOLS.invoke("fetch-news", '{"topic": "zkSNARKs", "limit": 3}')
        )

        articles = json.loads(output)
        assert [a["title"] for a in articles] == [a["title"] for a in MOCK_ARTICLES[:3]]
        assert set(articles[0]) == {"title", "content"}

    def test_default_limit_is_three(self):
        """Omitting limit behaves like limit=3."""
        output = asyncio.run(DEFAULT_TOOLS.invoke("fetch-news", {"topic": "zkSNARKs"}))

        assert len(json.loads(output)) == 3

    def test_limit_ten_returns_every_fixture(self):
        """The upper bound is inclusive."""
        output = asyncio.run(DEFAULT_TOOLS.invoke("fetch-news", {"topic": "zk", "limit": 10}))

        assert len(json.loads(output)) == len(MOCK_ARTICLES) == 10

    def test_output_is_deterministic(self):
        """Repeated calls with the same arguments return identical text."""
        first = asyncio.run(DEFAULT_TOOLS.invoke("fetch-news", {"topic": "zk", "limit": 5}))
        second = asyncio.run(DEFAULT_TOOLS.invoke("fetch-news", {"topic": "zk", "limit": 5}))

        assert first == second

    @pytest.mark.parametrize("limit", [0, -1, 11])
    def test_out_of_range_limit_rejected_before_execution(self, limit):
        """An out-of-range limit fails validation and the executor never runs."""
        registry, calls = _make_spy_registry()

        with pytest.raises(ToolError) as exc_info:
            asyncio.run(registry.invoke("fetch-news", {"topic": "zk", "limit": limit}))

        assert exc_info.value.kind == ToolErrorKind.INVALID_ARGUMENTS
        assert exc_info.value.tool_id == "fetch-news"
        assert "limit" in str(exc_info.value)
        assert calls == []

    @pytest.mark.parametrize("limit", [True, "3", 3.5])
    def test_non_integer_limit_rejected(self, limit):
        """limit must be a JSON integer; booleans, strings and floats are not coerced."""
        registry, calls = _make_spy_registry()

        with pytest.raises(ToolError) as exc_info:
            asyncio.run(registry.invoke("fetch-news", {"topic": "zk", "limit": limit}))

        assert exc_info.value.kind == ToolErrorKind.INVALID_ARGUMENTS
        assert calls == []

    def test_missing_topic_rejected(self):
        registry, calls = _make_spy_registry()

        with pytest.raises(ToolError) as exc_info:
            asyncio.run(registry.invoke("fetch-news", '{"limit": 3}'))

        assert exc_info.value.kind == ToolErrorKind.INVALID_ARGUMENTS
        assert calls == []

    def test_malformed_json_rejected(self):
        registry, calls = _make_spy_registry()

        with pytest.raises(ToolError) as exc_info:
            asyncio.run(registry.invoke("fetch-news", '{"topic": "zk", '))

        assert exc_info.value.kind == ToolErrorKind.INVALID_ARGUMENTS
        assert "JSON" in str(exc_info.value)
        assert calls == []

    def test_non_object_arguments_rejected(self):
        registry, calls = _make_spy_registry()

        with pytest.raises(ToolError) as exc_info:
            asyncio.run(registry.invoke("fetch-news", "[1, 2]"))

        assert exc_info.value.kind == ToolErrorKind.INVALID_ARGUMENTS
        assert calls == []

    def test_openai_tool_format(self):
        """The catalog entry exposes the argument schema to the model."""
        rendered = FETCH_NEWS_TOOL.to_openai_tool()

        assert rendered["type"] == "function"
        assert rendered["function"]["name"] == "fetch-news"
        params = rendered["function"]["parameters"]
        assert set(params["properties"]) == {"topic", "limit"}
        assert params["properties"]["limit"]["maximum"] == 10
        assert params["required"] == ["topic"]


# ============================================================================
# Registry
# ============================================================================


class TestToolRegistry:
    """Tests for ToolRegistry lookup and invocation."""

    def test_unknown_tool_is_invalid_arguments(self):
        with pytest.raises(ToolError) as exc_info:
            asyncio.run(DEFAULT_TOOLS.invoke("web-search", {"query": "zk"}))

        assert exc_info.value.kind == ToolErrorKind.INVALID_ARGUMENTS
        assert exc_info.value.tool_id == "web-search"

    def test_duplicate_ids_rejected(self):
        tool = _make_echo_tool(lambda args: args.text)

        with pytest.raises(ValueError, match="Duplicate tool id"):
            ToolRegistry([tool, tool])

    def test_registry_is_read_only(self):
        registry = ToolRegistry([_make_echo_tool(lambda args: args.text)])

        with pytest.raises(TypeError):
            registry["other"] = FETCH_NEWS_TOOL  # type: ignore[index]

    def test_subset(self):
        registry = ToolRegistry(
            [
                _make_echo_tool(lambda args: args.text),
                FETCH_NEWS_TOOL,
            ]
        )

        subset = registry.subset(iter(["fetch-news"]))

        assert list(subset) == ["fetch-news"]
        assert len(registry) == 2

    def test_subset_unknown_id(self):
        with pytest.raises(KeyError):
            DEFAULT_TOOLS.subset(["web-search"])

    def test_async_executor_is_awaited(self):
        async def _execute(args):
            await asyncio.sleep(0)
            return args.text.upper()

        registry = ToolRegistry([_make_echo_tool(_execute)])

        assert asyncio.run(registry.invoke("echo", {"text": "zk"})) == "ZK"

    def test_sync_executor_runs_off_the_event_loop(self):
        threads = []

        def _execute(args):
            threads.append(threading.get_ident())
            return args.text

        registry = ToolRegistry([_make_echo_tool(_execute)])

        assert asyncio.run(registry.invoke("echo", {"text": "zk"})) == "zk"
        assert threads and threads[0] != threading.get_ident()

    def test_executor_exception_is_execution_failure(self):
        def _execute(args):
            raise RuntimeError("upstream feed unavailable")

        registry = ToolRegistry([_make_echo_tool(_execute)])

        with pytest.raises(ToolError) as exc_info:
            asyncio.run(registry.invoke("echo", {"text": "zk"}))

        assert exc_info.value.kind == ToolErrorKind.EXECUTION_FAILURE
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "upstream feed unavailable" in str(exc_info.value)

    def test_non_string_result_is_execution_failure(self):
        registry = ToolRegistry([_make_echo_tool(lambda args: {"text": args.text})])

        with pytest.raises(ToolError) as exc_info:
            asyncio.run(registry.invoke("echo", {"text": "zk"}))

        assert exc_info.value.kind == ToolErrorKind.EXECUTION_FAILURE

    def test_catalog_lists_every_tool(self):
        catalog = DEFAULT_TOOLS.catalog()

        assert [entry["function"]["name"] for entry in catalog] == ["fetch-news"]
        assert ToolRegistry().catalog() == []
