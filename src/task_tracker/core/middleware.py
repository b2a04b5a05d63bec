"""HTTP middleware binding request ids and writing access log lines."""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .context import REQUEST_ID_HEADER, bind_request_id, reset_request_id

access_logger = logging.getLogger("task_tracker.access")

MAX_REQUEST_ID_LENGTH = 128


def _accepted_request_id(raw: str | None) -> str | None:
    candidate = (raw or "").strip()
    if not candidate or len(candidate) > MAX_REQUEST_ID_LENGTH:
        return None
    return candidate


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Give every request an id, echo it back and log the outcome.

    A client-supplied ``X-Request-ID`` is reused when it is non-empty and
    short enough; otherwise a uuid4 is minted. The id is kept on
    ``request.state.request_id`` for the exception handlers.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _accepted_request_id(request.headers.get(self._header_name)) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = bind_request_id(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            access_logger.info(
                "Request completed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        finally:
            reset_request_id(token)
        response.headers.setdefault(self._header_name, request_id)
        return response


__all__ = ["CorrelationIdMiddleware", "MAX_REQUEST_ID_LENGTH"]
