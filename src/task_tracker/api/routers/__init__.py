"""Route registration for the task tracker API."""

from __future__ import annotations

from fastapi import APIRouter, FastAPI

from .auth import router as auth_router
from .health import router as health_router
from .tasks import router as tasks_router
from .users import router as users_router

# Routers mounted beneath the configurable API prefix.
API_ROUTERS: tuple[APIRouter, ...] = (auth_router, tasks_router, users_router)


def include_routers(application: FastAPI, *, prefix: str) -> None:
    """Mount the API routers under ``prefix`` and the health check at the root."""

    for router in API_ROUTERS:
        application.include_router(router, prefix=prefix)
    application.include_router(health_router)


__all__ = [
    "API_ROUTERS",
    "auth_router",
    "health_router",
    "include_routers",
    "tasks_router",
    "users_router",
]
