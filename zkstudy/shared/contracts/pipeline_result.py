"""
Pipeline result contract.

Defines the classified outcome that the orchestrator hands back to the
request boundary.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PipelineOutcome(str, Enum):
    """Terminal state of a pipeline run."""

    OK = "ok"
    TIMEOUT = "timeout"
    TOOL_ERROR = "tool_error"
    MODEL_ERROR = "model_error"
    VALIDATION_ERROR = "validation_error"


class PipelineResult(BaseModel):
    """Outcome of a single pipeline run."""

    model_config = ConfigDict(frozen=True)

    outcome: PipelineOutcome = Field(description="Terminal state of the run")
    content: Optional[str] = Field(
        default=None, description="Content of the final message (ok only)"
    )
    detail: Optional[str] = Field(
        default=None, description="Failure detail for non-ok outcomes"
    )

    @property
    def ok(self) -> bool:
        return self.outcome == PipelineOutcome.OK
