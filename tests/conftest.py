from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from itertools import count

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from task_tracker.core.config import Settings
from task_tracker.main import create_app

TEST_SECRET = "test-secret-key-for-task-tracker"
DEFAULT_PASSWORD = "StrongPass123!"


@dataclass(slots=True)
class RegisteredUser:
    id: str
    username: str
    email: str
    password: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret_key=TEST_SECRET, environment="test", _env_file=None)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def registered_user(client: AsyncClient) -> Callable[..., Awaitable[RegisteredUser]]:
    counter = count()

    async def _factory(
        *,
        username: str | None = None,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> RegisteredUser:
        index = next(counter)
        actual_username = username or f"user-{index}"
        actual_email = email or f"user-{index}@example.com"

        register_response = await client.post(
            "/api/register",
            json={"username": actual_username, "email": actual_email, "password": password},
        )
        assert register_response.status_code == 201, register_response.text

        login_response = await client.post(
            "/api/login",
            json={"email": actual_email, "password": password},
        )
        assert login_response.status_code == 200, login_response.text

        return RegisteredUser(
            id=register_response.json()["user"]["id"],
            username=actual_username,
            email=actual_email,
            password=password,
            token=login_response.json()["token"],
        )

    return _factory
