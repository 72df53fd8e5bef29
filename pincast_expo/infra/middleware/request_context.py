"""
Request context middleware for structured logging.
"""

from __future__ import annotations

import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from pincast_expo.infra.config.logging_config import (
    bind_context,
    clear_context,
    get_logger,
)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request_id, path and method to every log line of a request.

    Emits ``request.start`` and ``request.end`` (with latency) and echoes the
    request id back in the response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_context(
            request_id=request_id, path=request.url.path, method=request.method
        )
        logger = get_logger("http")
        started = time.perf_counter()

        logger.info(
            "request.start",
            client_ip=request.client.host if request.client else None,
            query=str(request.url.query) or None,
        )
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "request.end",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
            return response
        except Exception:  # pragma: no cover
            logger.exception("request.error", duration_ms=_elapsed_ms(started))
            raise
        finally:
            clear_context()


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
