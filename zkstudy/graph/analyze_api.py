"""
FastAPI endpoints for the research pipeline.

POST /api/analyze validates the topic, runs the research -> summary
pipeline and maps the classified outcome to an HTTP response.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from zkstudy.graph.pipeline import ResearchPipeline, build_default_pipeline, validate_topic
from zkstudy.shared.contracts.pipeline_result import PipelineOutcome, PipelineResult
from zkstudy.shared.errors import TopicValidationError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])

# Pipeline instance (shared across requests)
_pipeline: Optional[ResearchPipeline] = None


def get_pipeline() -> ResearchPipeline:
    """Get or create the shared pipeline instance."""
    global _pipeline
    if _pipeline is None:
        _pipeline = build_default_pipeline()
    return _pipeline


# ============================================================================
# Request/Response Models
# ============================================================================


class AnalyzeRequest(BaseModel):
    """Request to analyze a research topic."""

    topic: Optional[str] = Field(default=None, description="Research topic (3-200 chars)")


class AnalyzeResponse(BaseModel):
    """Successful analysis."""

    summary: str = Field(description="Summary produced by the last agent")
    topic: str = Field(description="The validated topic")
    timestamp: str = Field(description="ISO 8601 completion time (UTC)")


class ErrorResponse(BaseModel):
    """Error body for every non-success outcome."""

    error: str
    message: Optional[str] = None
    details: Optional[List[Any]] = None


# ============================================================================
# Outcome mapping
# ============================================================================


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_response(result: PipelineResult, topic: Optional[str] = None) -> JSONResponse:
    """
    Map a PipelineResult to an HTTP response.

    ok -> 200, validation_error -> 400, timeout -> 504,
    model_error/tool_error -> 502.
    """
    if result.outcome == PipelineOutcome.OK:
        body: Dict[str, Any] = AnalyzeResponse(
            summary=result.content or "",
            topic=topic or "",
            timestamp=_utc_now(),
        ).model_dump()
        return JSONResponse(status_code=status.HTTP_200_OK, content=body)

    if result.outcome == PipelineOutcome.VALIDATION_ERROR:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error="Invalid topic",
                details=[result.detail] if result.detail else [],
            ).model_dump(exclude_none=True),
        )

    if result.outcome == PipelineOutcome.TIMEOUT:
        return JSONResponse(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            content=ErrorResponse(
                error="Request timeout",
                message="The analysis took too long to complete. Please try again.",
            ).model_dump(exclude_none=True),
        )

    # Upstream error text stays in the server log
    logger.warning(f"[api=analyze] Analysis failed | outcome={result.outcome.value}: {result.detail}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=ErrorResponse(
            error="Analysis failed",
            message="The analysis could not be completed. Please try again.",
        ).model_dump(exclude_none=True),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def analyze(
    request: AnalyzeRequest,
    pipeline: ResearchPipeline = Depends(get_pipeline),
):
    """
    Analyze a research topic.

    Runs the research agent (which fetches source articles) and then the
    summary agent, returning the summary.
    """
    session_id = str(uuid.uuid4())
    _log = f"[session={session_id}] [graph=pipeline] [api=analyze] "

    try:
        topic = validate_topic(request.topic, pipeline.workflow)
    except TopicValidationError as e:
        logger.info(f"{_log}Rejected topic: {e}")
        return build_response(
            PipelineResult(outcome=PipelineOutcome.VALIDATION_ERROR, detail=str(e))
        )

    logger.info(f"{_log}Pipeline starting | topic={topic!r}")

    try:
        result, state = await pipeline.analyze(topic, session_id=session_id)
    except Exception as e:
        logger.exception(f"{_log}Pipeline crashed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                message="An unexpected error occurred while analyzing the topic.",
            ).model_dump(exclude_none=True),
        )

    logger.info(
        f"{_log}Pipeline finished | outcome={result.outcome.value}, messages={len(state)}"
    )
    return build_response(result, topic)


@router.get("/health")
async def health() -> Dict[str, str]:
    """Health check endpoint; does not touch the pipeline."""
    return {"status": "healthy", "timestamp": _utc_now()}
