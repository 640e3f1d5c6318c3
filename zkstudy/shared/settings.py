"""
Process-wide settings.

Loaded once from the environment (and an optional .env file) at startup
and treated as immutable for the lifetime of the process.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv


LLM_BACKENDS = ("openai", "fixture")
LOG_FORMATS = ("text", "json")


@dataclass(frozen=True)
class Settings:
    """
    Service configuration.

    Attributes:
        allowed_origins: Origins allowed to call the API ("*" allows all)
        port: Listen port for the HTTP server
        deadline_seconds: Wall-clock deadline for one pipeline run
        openai_api_key: Credential for the OpenAI provider
        llm_backend: "openai" for live calls, "fixture" for the offline stand-in
        llm_max_attempts: Attempts per model call (1 disables retries)
        llm_timeout_seconds: Per-request timeout passed to the OpenAI client
        log_level: Root log level
        log_format: "text" or "json"
        debug_log_dir: Directory for per-run JSONL debug logs (None disables)
    """

    allowed_origins: Tuple[str, ...] = ("http://localhost:3000",)
    port: int = 3400
    deadline_seconds: float = 60.0
    openai_api_key: Optional[str] = None
    llm_backend: str = "openai"
    llm_max_attempts: int = 1
    llm_timeout_seconds: float = 60.0
    log_level: str = "INFO"
    log_format: str = "text"
    debug_log_dir: Optional[str] = None


def _parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return Settings.allowed_origins
    origins = tuple(o.strip().rstrip("/") for o in raw.split(",") if o.strip())
    return origins or Settings.allowed_origins


def _parse_number(environ: Mapping[str, str], key: str, default, cast):
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading .env.

    Returns:
        Validated Settings instance

    Raises:
        ValueError: If a value is malformed or out of range
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    deadline = _parse_number(
        environ, "PIPELINE_DEADLINE_SECONDS", Settings.deadline_seconds, float
    )
    if deadline <= 0:
        raise ValueError("PIPELINE_DEADLINE_SECONDS must be positive")

    max_attempts = _parse_number(
        environ, "LLM_MAX_ATTEMPTS", Settings.llm_max_attempts, int
    )
    if max_attempts < 1:
        raise ValueError("LLM_MAX_ATTEMPTS must be at least 1")

    llm_backend = environ.get("LLM_BACKEND", Settings.llm_backend).strip().lower()
    if llm_backend not in LLM_BACKENDS:
        raise ValueError(f"LLM_BACKEND must be one of {LLM_BACKENDS}, got {llm_backend!r}")

    log_format = environ.get("LOG_FORMAT", Settings.log_format).strip().lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"LOG_FORMAT must be one of {LOG_FORMATS}, got {log_format!r}")

    return Settings(
        allowed_origins=_parse_origins(environ.get("ALLOWED_ORIGINS")),
        port=_parse_number(environ, "PORT", Settings.port, int),
        deadline_seconds=deadline,
        openai_api_key=environ.get("OPENAI_API_KEY") or None,
        llm_backend=llm_backend,
        llm_max_attempts=max_attempts,
        llm_timeout_seconds=_parse_number(
            environ, "LLM_TIMEOUT_SECONDS", Settings.llm_timeout_seconds, float
        ),
        log_level=environ.get("LOG_LEVEL", Settings.log_level).strip().upper(),
        log_format=log_format,
        debug_log_dir=environ.get("DEBUG_LOG_DIR") or None,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()
