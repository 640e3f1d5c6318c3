"""Logging configuration and utilities."""

from zkstudy.shared.logging.config import (
    configure_logging,
    log_pipeline_event,
    StructuredFormatter,
)
from zkstudy.shared.logging.debug_logger import (
    RunDebugLogger,
    get_or_create_logger,
    get_debug_logger,
    remove_logger,
    calculate_cost,
)

__all__ = [
    "configure_logging",
    "log_pipeline_event",
    "StructuredFormatter",
    "RunDebugLogger",
    "get_or_create_logger",
    "get_debug_logger",
    "remove_logger",
    "calculate_cost",
]
