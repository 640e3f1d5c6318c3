"""
Tool registry.

A ToolSpec pairs a pydantic argument schema with an executor. The
registry validates raw model-supplied arguments against the schema
before anything is executed, and wraps every failure in a ToolError.
"""

import asyncio
import inspect
import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, Iterator, List, Mapping, Type, Union

from pydantic import BaseModel, ValidationError

from zkstudy.shared.errors import ToolError, ToolErrorKind


logger = logging.getLogger(__name__)


ToolExecutor = Callable[[BaseModel], Union[str, Awaitable[str]]]


@dataclass(frozen=True)
class ToolSpec:
    """
    A named, schema-validated capability an agent may call.

    Attributes:
        id: Tool name exposed to the model
        description: What the tool does, shown to the model
        input_schema: Pydantic model the raw arguments must validate against
        execute: Called with a validated input_schema instance; returns a
            string or an awaitable resolving to one. Plain functions run in
            a worker thread, coroutine functions on the event loop
    """

    id: str
    description: str
    input_schema: Type[BaseModel]
    execute: ToolExecutor

    def to_openai_tool(self) -> Dict[str, Any]:
        """Render the tool in OpenAI function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.id,
                "description": self.description,
                "parameters": self.input_schema.model_json_schema(),
            },
        }


class ToolRegistry(Mapping[str, ToolSpec]):
    """
    Read-only map of tool id -> ToolSpec.

    Registries are built once at import time and shared by all requests;
    they expose no way to add or remove tools afterwards.
    """

    def __init__(self, tools: Iterable[ToolSpec] = ()):
        specs: Dict[str, ToolSpec] = {}
        for tool in tools:
            if tool.id in specs:
                raise ValueError(f"Duplicate tool id: {tool.id}")
            specs[tool.id] = tool
        self._tools = MappingProxyType(specs)

    def __getitem__(self, tool_id: str) -> ToolSpec:
        return self._tools[tool_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"ToolRegistry({list(self._tools)})"

    def subset(self, tool_ids: Iterable[str]) -> "ToolRegistry":
        """Return a registry restricted to the given tool ids."""
        tool_ids = list(tool_ids)
        missing = [t for t in tool_ids if t not in self._tools]
        if missing:
            raise KeyError(f"Unknown tool ids: {missing}")
        return ToolRegistry(self._tools[t] for t in tool_ids)

    def catalog(self) -> List[Dict[str, Any]]:
        """Return all tools in OpenAI function-calling format."""
        return [tool.to_openai_tool() for tool in self._tools.values()]

    def validate_arguments(self, tool_id: str, raw_args: Union[str, Mapping[str, Any], None]) -> BaseModel:
        """
        Resolve a tool and validate raw arguments against its schema.

        Args:
            tool_id: Requested tool id
            raw_args: JSON string (as emitted by models) or mapping

        Returns:
            Validated input_schema instance

        Raises:
            ToolError: INVALID_ARGUMENTS if the tool is unknown or the
                arguments do not satisfy the schema
        """
        tool = self._tools.get(tool_id)
        if tool is None:
            raise ToolError(
                ToolErrorKind.INVALID_ARGUMENTS,
                tool_id,
                f"unknown tool; available: {sorted(self._tools)}",
            )

        if raw_args is None or (isinstance(raw_args, str) and not raw_args.strip()):
            raw_args = {}
        if isinstance(raw_args, str):
            try:
                raw_args = json.loads(raw_args)
            except json.JSONDecodeError as e:
                raise ToolError(
                    ToolErrorKind.INVALID_ARGUMENTS, tool_id, f"arguments are not valid JSON: {e}"
                ) from e
        if not isinstance(raw_args, Mapping):
            raise ToolError(
                ToolErrorKind.INVALID_ARGUMENTS,
                tool_id,
                f"arguments must be an object, got {type(raw_args).__name__}",
            )

        try:
            return tool.input_schema.model_validate(dict(raw_args))
        except ValidationError as e:
            raise ToolError(
                ToolErrorKind.INVALID_ARGUMENTS,
                tool_id,
                "; ".join(
                    f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                    for err in e.errors()
                ),
            ) from e

    async def invoke(self, tool_id: str, raw_args: Union[str, Mapping[str, Any], None]) -> str:
        """
        Validate arguments and execute a tool.

        Args:
            tool_id: Requested tool id
            raw_args: JSON string or mapping of arguments

        Returns:
            The tool's string result

        Raises:
            ToolError: INVALID_ARGUMENTS before execution, EXECUTION_FAILURE
                if the executor raises or returns a non-string
        """
        args = self.validate_arguments(tool_id, raw_args)
        tool = self._tools[tool_id]

        try:
            if inspect.iscoroutinefunction(tool.execute):
                result = await tool.execute(args)
            else:
                # Sync executors run in the default thread pool, off the event loop
                loop = asyncio.get_running_loop()
                result = await loop.run_in_executor(None, tool.execute, args)
                if inspect.isawaitable(result):
                    result = await result
        except Exception as e:
            logger.warning(f"[tool={tool_id}] Execution failed: {e}")
            raise ToolError(ToolErrorKind.EXECUTION_FAILURE, tool_id, str(e)) from e

        if not isinstance(result, str):
            raise ToolError(
                ToolErrorKind.EXECUTION_FAILURE,
                tool_id,
                f"executor returned {type(result).__name__}, expected str",
            )
        return result
