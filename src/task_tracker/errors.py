"""Application-level exception handling helpers."""

from __future__ import annotations

import logging
from contextvars import Token
from http import HTTPStatus
from typing import Any, Mapping

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER, bind_request_id, reset_request_id
from .schemas.system import ErrorResponse

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "application_error",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.headers = dict(headers) if headers else None


class ValidationError(ApplicationError):
    """Error representing malformed or missing request fields."""

    def __init__(self, message: str = "Validation failed.", *, code: str = "validation_error") -> None:
        super().__init__(message, code=code, status_code=status.HTTP_400_BAD_REQUEST)


class UnauthorizedError(ApplicationError):
    """Error representing bad credentials or a missing/invalid session token."""

    def __init__(self, message: str = "Unauthorized.", *, code: str = "unauthorized") -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers=BEARER_CHALLENGE,
        )


class InvalidTokenError(UnauthorizedError):
    """Error raised when a session token is malformed, forged or expired."""

    def __init__(self, message: str = "Invalid token.", *, code: str = "invalid_token") -> None:
        super().__init__(message, code=code)


class ConflictError(ApplicationError):
    """Error representing a uniqueness violation."""

    def __init__(self, message: str = "Resource already exists.", *, code: str = "conflict") -> None:
        super().__init__(message, code=code, status_code=status.HTTP_409_CONFLICT)


class NotFoundError(ApplicationError):
    """Error representing missing resources."""

    def __init__(self, message: str = "Resource not found.", *, code: str = "not_found") -> None:
        super().__init__(message, code=code, status_code=status.HTTP_404_NOT_FOUND)


class InternalError(ApplicationError):
    """Error representing unexpected server failures."""

    def __init__(self, message: str = "Internal server error.", *, code: str = "server_error") -> None:
        super().__init__(message, code=code, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


_HTTP_STATUS_CODE_MAP: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


def _bind_request_context(request: Request) -> Token[str] | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return None
    return bind_request_id(request_id)


def _reset_request_context(token: Token[str] | None) -> None:
    if token is not None:
        reset_request_id(token)


def _error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    payload = ErrorResponse(error=message)
    response = JSONResponse(status_code=status_code, content=payload.model_dump())
    if headers:
        response.headers.update(headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def _http_exception_message(status_code: int, detail: Any) -> str:
    if isinstance(detail, str) and detail:
        return detail
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _summarise_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Collapse pydantic error entries into one short client-facing message."""

    parts: list[str] = []
    for error in errors:
        location = [str(item) for item in error.get("loc", ()) if item not in ("body", "query", "path")]
        message = str(error.get("msg", "is invalid"))
        parts.append(f"{'.'.join(location)}: {message}" if location else message)
    if not parts:
        return "Request validation failed."
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(
        request: Request,
        exc: ApplicationError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            log = logger.error if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
            log(
                "Application error encountered",
                extra={"code": exc.code, "status_code": exc.status_code, "path": str(request.url.path)},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                message=exc.message,
                headers=exc.headers,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            errors = list(exc.errors())
            logger.warning(
                "Request validation failed",
                extra={"error_count": len(errors), "path": str(request.url.path)},
            )
            return _error_response(
                request,
                status_code=status.HTTP_400_BAD_REQUEST,
                message=_summarise_validation_errors(errors),
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            code = _HTTP_STATUS_CODE_MAP.get(exc.status_code, "http_error")
            log = logger.error if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
            log(
                "HTTP exception raised",
                extra={"code": code, "status_code": exc.status_code, "path": str(request.url.path)},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                message=_http_exception_message(exc.status_code, exc.detail),
                headers=exc.headers or None,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            logger.exception("Unhandled application error.")
            return _error_response(
                request,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message="Internal server error.",
            )
        finally:
            _reset_request_context(token)


__all__ = [
    "ApplicationError",
    "ConflictError",
    "InternalError",
    "InvalidTokenError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "register_exception_handlers",
]
