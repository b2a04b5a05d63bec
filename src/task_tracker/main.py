"""Entry point for the task tracker FastAPI application."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import include_routers
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import CorrelationIdMiddleware
from .deps import SettingsDependency
from .errors import register_exception_handlers
from .schemas.system import RootResponse
from .services import TaskService, TokenService, UserService


def _normalise_prefix(raw_prefix: str) -> str:
    prefix = raw_prefix.strip()
    if prefix and not prefix.startswith("/"):
        prefix = f"/{prefix}"
    prefix = prefix.rstrip("/")
    return "" if prefix == "/" else prefix


def create_app(settings: Settings | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    Each application owns its own credential and task stores, so separate
    instances never share users or tasks.
    """

    settings = settings or get_settings()
    configure_logging(settings)

    router_prefix = _normalise_prefix(settings.api_prefix)

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Multi-user task tracker with token authentication.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=f"{router_prefix}/openapi.json",
    )

    application.state.settings = settings
    application.state.users = UserService(hash_rounds=settings.password_hash_rounds)
    application.state.tasks = TaskService()
    application.state.tokens = TokenService(settings)

    application.add_middleware(CorrelationIdMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    include_routers(application, prefix=router_prefix)

    @application.get("/", response_model=RootResponse, summary="Service metadata")
    def read_root(app_settings: SettingsDependency) -> RootResponse:
        """Expose minimal service metadata for API clients."""

        return RootResponse(
            name=app_settings.project_name,
            environment=app_settings.environment,
            version=app_settings.version,
            api_prefix=router_prefix,
        )

    register_exception_handlers(application)
    return application


def run() -> None:
    """Convenience entry point for the ``task-tracker`` console script."""

    settings: Settings = get_settings()
    uvicorn.run(
        "task_tracker.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )


__all__ = ["create_app", "run"]
