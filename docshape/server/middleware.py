"""
Custom middleware for the docshape server.
"""

from __future__ import annotations

import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..utils.logging import get_logger

logger = get_logger("docshape.server")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log request details, timing and pipeline counts.

    Routes that run the document pipeline leave their ``ExecutionStats``
    on ``request.state.stats``; those counts are logged and returned in
    ``X-Documents-*`` headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        logger.info(
            f"Request: {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        stats = getattr(request.state, "stats", None)
        if stats is None:
            logger.info(f"Response: {response.status_code} ({duration_ms:.2f}ms)")
            return response

        logger.info(
            f"Response: {response.status_code} ({duration_ms:.2f}ms), "
            f"{stats.documents_scanned} scanned, {stats.documents_matched} matched, "
            f"{stats.documents_returned} returned "
            f"(filter {stats.filter_time_ms:.2f}ms, sort {stats.sort_time_ms:.2f}ms)"
        )

        response.headers["X-Documents-Scanned"] = str(stats.documents_scanned)
        response.headers["X-Documents-Matched"] = str(stats.documents_matched)
        response.headers["X-Documents-Returned"] = str(stats.documents_returned)

        return response
