"""
Origin allow-list middleware.

CORSMiddleware only withholds CORS headers from disallowed origins; this
middleware rejects such requests outright so they never reach a route.
"""

import logging
from typing import Iterable

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse


logger = logging.getLogger(__name__)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Origin header is not in the allow-list."""

    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(o.rstrip("/") for o in allowed_origins)
        self.allow_all = "*" in self.allowed_origins

    def is_allowed(self, origin: str) -> bool:
        return self.allow_all or origin.rstrip("/") in self.allowed_origins

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and not self.is_allowed(origin):
            logger.warning(
                f"[middleware=origin] Rejected request | origin={origin}, "
                f"path={request.url.path}"
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": "Origin not allowed", "message": f"Origin {origin} is not allowed"},
            )
        return await call_next(request)
