"""
FastAPI application entry point.

Assembles the FastAPI app with logging, the origin allow-list, CORS and
the pipeline router.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from zkstudy.graph.analyze_api import router as analyze_router
from zkstudy.middleware import OriginAllowListMiddleware
from zkstudy.shared.logging.config import configure_logging
from zkstudy.shared.settings import Settings, get_settings


logger = logging.getLogger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 with field details."""
    logger.info(f"[api={request.url.path}] Invalid request body: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use. Defaults to the process-wide settings.

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="ZK Study Agents",
        description="Research and summary agents for Zero Knowledge Proof topics",
        version="0.1.0",
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Added last so it runs first: disallowed origins never reach CORS or routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials="*" not in settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.allowed_origins)

    app.include_router(analyze_router)

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "ZK Study Agents",
            "version": "0.1.0",
            "agents": {
                "research": {"status": "active", "tools": ["fetch-news"]},
                "summary": {"status": "active"},
            },
            "endpoints": {"analyze": "/api/analyze", "health": "/api/health"},
        }

    logger.info(
        f"App configured | origins={list(settings.allowed_origins)}, "
        f"deadline={settings.deadline_seconds:g}s, llm_backend={settings.llm_backend}"
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
