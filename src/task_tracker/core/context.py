"""Identifiers bound to the request currently being served.

Values live in ``ContextVar`` instances, so each request (and the worker
thread that runs its handler) sees only its own request id and caller.
"""

from __future__ import annotations

from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"
UNBOUND = "-"

_request_id: ContextVar[str] = ContextVar("task_tracker_request_id", default=UNBOUND)
_user_id: ContextVar[str] = ContextVar("task_tracker_user_id", default=UNBOUND)


def get_request_id() -> str:
    return _request_id.get()


def bind_request_id(request_id: str) -> Token[str]:
    return _request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id.reset(token)


def get_user_id() -> str:
    return _user_id.get()


def bind_user_id(user_id: str) -> Token[str]:
    """Record the authenticated caller for the rest of the request."""
    return _user_id.set(user_id)


def reset_user_id(token: Token[str]) -> None:
    _user_id.reset(token)


__all__ = [
    "REQUEST_ID_HEADER",
    "UNBOUND",
    "bind_request_id",
    "bind_user_id",
    "get_request_id",
    "get_user_id",
    "reset_request_id",
    "reset_user_id",
]
