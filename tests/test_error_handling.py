from __future__ import annotations

import pytest
from fastapi import FastAPI, status
from httpx import ASGITransport, AsyncClient

from task_tracker.errors import ApplicationError, ConflictError

pytestmark = pytest.mark.asyncio


async def test_application_error_uses_error_envelope(app: FastAPI, client: AsyncClient) -> None:
    @app.get("/error/application")
    def trigger_application_error() -> None:  # pragma: no cover - defined in test
        raise ApplicationError(
            "Example failure",
            code="example_error",
            status_code=status.HTTP_418_IM_A_TEAPOT,
        )

    response = await client.get("/error/application")

    assert response.status_code == status.HTTP_418_IM_A_TEAPOT
    assert response.json() == {"error": "Example failure"}
    assert response.headers["X-Request-ID"]


async def test_conflict_error_maps_to_409(app: FastAPI, client: AsyncClient) -> None:
    @app.get("/error/conflict")
    def trigger_conflict() -> None:  # pragma: no cover - defined in test
        raise ConflictError("Already there.")

    response = await client.get("/error/conflict")

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"error": "Already there."}


async def test_unknown_route_uses_error_envelope(client: AsyncClient) -> None:
    response = await client.get("/error/not-found")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Not Found"}
    assert response.headers["X-Request-ID"]


async def test_wrong_method_uses_error_envelope(client: AsyncClient) -> None:
    response = await client.patch("/api/register", json={})

    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert response.json() == {"error": "Method Not Allowed"}


async def test_validation_error_maps_to_400(client: AsyncClient) -> None:
    response = await client.post("/api/login", json={"email": "jane@example.com"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "password: Field required"}


async def test_unhandled_error_hides_details(app: FastAPI) -> None:
    @app.get("/error/unhandled")
    def trigger_unhandled_error() -> None:  # pragma: no cover - defined in test
        raise RuntimeError("secret internals")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/error/unhandled")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error."}
    assert "secret internals" not in response.text


async def test_incoming_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


async def test_request_id_is_echoed_on_errors(client: AsyncClient) -> None:
    response = await client.get("/api/user", headers={"X-Request-ID": "req-456"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["X-Request-ID"] == "req-456"


async def test_oversized_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "x" * 200})

    assert response.headers["X-Request-ID"] != "x" * 200
    assert response.headers["X-Request-ID"]
