"""
Debug logger for tracking LLM calls, tool calls, run outcomes, and costs.

Writes one JSON Lines file per pipeline run under DEBUG_LOG_DIR. Only
active when a logger has been registered for the run's session id.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from zkstudy.shared.schemas.conversation import Message


# Token pricing per 1M tokens
MODEL_COSTS = {
    "gpt-4o-mini": {"input": 0.15, "output": 0.60},
    "gpt-4.1-mini": {"input": 0.40, "output": 1.60},
}

# Session-based logger registry to ensure same instance is reused
_logger_registry: Dict[str, "RunDebugLogger"] = {}


def get_or_create_logger(session_id: str, logs_dir: str = "logs") -> "RunDebugLogger":
    """
    Get an existing logger for the run or create a new one.

    Ensures the agents and the API endpoint of one run write to the same
    file and accumulate the same token totals.

    Args:
        session_id: Unique run identifier
        logs_dir: Directory to store log files (default: "logs")

    Returns:
        RunDebugLogger instance for this run
    """
    if session_id not in _logger_registry:
        _logger_registry[session_id] = RunDebugLogger(session_id, logs_dir)
    return _logger_registry[session_id]


def get_debug_logger(session_id: Optional[str]) -> Optional["RunDebugLogger"]:
    """Return the registered logger for a run, or None if debug logging is off."""
    if not session_id:
        return None
    return _logger_registry.get(session_id)


def remove_logger(session_id: str) -> None:
    """
    Remove a logger from the registry (e.g., after the run ends).

    Args:
        session_id: Run ID to remove
    """
    _logger_registry.pop(session_id, None)


def calculate_cost(model: str, input_tokens: int, output_tokens: int) -> float:
    """
    Calculate the cost of an LLM call based on token usage.

    Args:
        model: Model identifier (e.g., "gpt-4o-mini")
        input_tokens: Number of input/prompt tokens
        output_tokens: Number of output/completion tokens

    Returns:
        Cost in USD (0.0 for unknown models)
    """
    costs = MODEL_COSTS.get(model, {"input": 0.0, "output": 0.0})
    input_cost = (input_tokens / 1_000_000) * costs["input"]
    output_cost = (output_tokens / 1_000_000) * costs["output"]
    return input_cost + output_cost


class RunDebugLogger:
    """
    Debug logger that writes a per-run JSON Lines file.

    Tracks LLM calls, tool calls, token usage, cost, the run outcome and
    the final transcript (including partial transcripts of failed or
    timed-out runs).
    """

    def __init__(self, session_id: str, logs_dir: str = "logs"):
        self.session_id = session_id
        self.base_logs_dir = Path(logs_dir)
        self.log_file = self.base_logs_dir / f"{session_id}.jsonl"

        self.base_logs_dir.mkdir(parents=True, exist_ok=True)

        self._total_input_tokens = 0
        self._total_output_tokens = 0
        self._total_cost = 0.0
        self._total_llm_duration_ms = 0.0
        self._llm_call_count = 0
        self._tool_call_count = 0

    def _get_timestamp(self) -> str:
        """Get current UTC timestamp in ISO format."""
        return datetime.now(timezone.utc).isoformat()

    def _append_to_log(self, entry: Dict[str, Any]) -> None:
        entry = {
            "timestamp": self._get_timestamp(),
            "session_id": self.session_id,
            **entry,
        }
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")

    def log_llm_call(
        self,
        agent_name: str,
        model: str,
        duration_ms: float,
        usage: Dict[str, int],
        tool_calls: Iterable[str] = (),
        response: Optional[str] = None,
    ) -> None:
        """
        Log one model call.

        Args:
            agent_name: Agent that made the call
            model: Model identifier
            duration_ms: Time taken for the call in milliseconds
            usage: Token usage dict (input_tokens, output_tokens)
            tool_calls: Names of tools the model requested
            response: Text content of the reply, if any
        """
        input_tokens = usage.get("input_tokens", 0)
        output_tokens = usage.get("output_tokens", 0)
        cost = calculate_cost(model, input_tokens, output_tokens)

        self._total_input_tokens += input_tokens
        self._total_output_tokens += output_tokens
        self._total_cost += cost
        self._total_llm_duration_ms += duration_ms
        self._llm_call_count += 1

        self._append_to_log(
            {
                "type": "llm_call",
                "agent": agent_name,
                "model": model,
                "duration_ms": round(duration_ms, 2),
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "cost_usd": round(cost, 6),
                "tool_calls": list(tool_calls),
                "response": response,
            }
        )

    def log_tool_call(
        self,
        agent_name: str,
        tool_id: str,
        duration_ms: float,
        success: bool,
        error: Optional[str] = None,
    ) -> None:
        """Log one tool invocation."""
        self._tool_call_count += 1
        entry = {
            "type": "tool_call",
            "agent": agent_name,
            "tool": tool_id,
            "duration_ms": round(duration_ms, 2),
            "success": success,
        }
        if error:
            entry["error"] = error
        self._append_to_log(entry)

    def log_run_summary(
        self,
        outcome: str,
        duration_ms: float,
        messages: Iterable[Message],
        detail: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Log and return the run outcome with totals and transcript.

        Args:
            outcome: PipelineOutcome value
            duration_ms: Wall-clock time of the run
            messages: Conversation transcript at the time the run ended
            detail: Failure detail, if any

        Returns:
            Summary dictionary as written to the log
        """
        summary = {
            "type": "run_summary",
            "outcome": outcome,
            "detail": detail,
            "duration_ms": round(duration_ms, 2),
            **self.get_accumulated_stats(),
            "transcript": [m.model_dump(mode="json") for m in messages],
        }
        self._append_to_log(summary)
        return summary

    def get_accumulated_stats(self) -> Dict[str, Any]:
        """Get current accumulated statistics without logging."""
        return {
            "total_input_tokens": self._total_input_tokens,
            "total_output_tokens": self._total_output_tokens,
            "total_tokens": self._total_input_tokens + self._total_output_tokens,
            "total_cost_usd": round(self._total_cost, 6),
            "total_llm_duration_ms": round(self._total_llm_duration_ms, 2),
            "llm_call_count": self._llm_call_count,
            "tool_call_count": self._tool_call_count,
        }
