"""
Logging configuration.

Sets up the process-wide log format (plain text or JSON lines) and
provides a helper for structured pipeline events.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from zkstudy.shared.settings import Settings


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"

NOISY_LOGGERS = ("httpcore", "httpx", "openai")


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter that outputs log records as JSON.

    Each log entry includes:
    - timestamp: ISO format datetime
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - extra: Any additional fields passed to the log call
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra"):
            log_entry["extra"] = record.extra

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(settings: Settings) -> None:
    """
    Configure root logging for the service.

    Args:
        settings: Provides log_level and log_format ("text" or "json")
    """
    handler = logging.StreamHandler(sys.stdout)
    if settings.log_format == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        handlers=[handler],
        force=True,  # Override any prior basicConfig calls
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_pipeline_event(
    event: str,
    state: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a pipeline event with a summary of the graph state.

    Args:
        event: Name of the event (e.g., "route", "run_complete")
        state: Current graph state dictionary (key fields are extracted)
        extra: Additional context to include in the log
        logger: Logger instance to use. Defaults to the "zkstudy" logger.
    """
    if logger is None:
        logger = logging.getLogger("zkstudy")

    failure = state.get("failure")
    log_data = {
        "event": event,
        "state_summary": {
            "session_id": state.get("session_id"),
            "current_agent": state.get("current_agent"),
            "completed_agents": list(state.get("completed_agents") or []),
            "failure": failure.get("outcome") if failure else None,
        },
    }

    if extra:
        log_data["extra"] = extra

    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        "",
        0,
        f"Pipeline event: {event}",
        args=(),
        exc_info=None,
    )
    record.extra = log_data

    logger.handle(record)
