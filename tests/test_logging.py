from __future__ import annotations

import io
import json
import logging
from collections.abc import Awaitable, Callable, Iterator

import pytest
from httpx import AsyncClient

from task_tracker.core.config import Settings
from task_tracker.core.context import bind_request_id, reset_request_id
from task_tracker.core.logging import JsonLogFormatter, RequestContextFilter, configure_logging
from task_tracker.errors import UnauthorizedError
from task_tracker.services import UserService


@pytest.fixture
def log_buffer(settings: Settings) -> Iterator[io.StringIO]:
    settings.log_level = "INFO"
    configure_logging(settings)

    root_logger = logging.getLogger()
    handler = next(
        (h for h in root_logger.handlers if isinstance(h.formatter, JsonLogFormatter)),
        None,
    )
    assert handler is not None, "Expected JSON stream handler to be configured"

    buffer = io.StringIO()
    previous_stream = handler.setStream(buffer)
    try:
        yield buffer
    finally:
        handler.flush()
        handler.setStream(previous_stream)


def _records(buffer: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]


def test_configure_logging_outputs_json_with_request_id(
    settings: Settings,
    log_buffer: io.StringIO,
) -> None:
    token = bind_request_id("req-json-1")
    try:
        logger = logging.getLogger("task_tracker.tests.logging")
        logger.info("structured log event", extra={"component": "unit-test"})
    finally:
        reset_request_id(token)

    payload = _records(log_buffer)[-1]

    assert payload["message"] == "structured log event"
    assert payload["request_id"] == "req-json-1"
    assert payload["environment"] == settings.environment
    assert payload["level"] == "INFO"
    assert payload["component"] == "unit-test"
    assert payload["service"] == settings.project_name


def test_request_id_defaults_outside_a_request(log_buffer: io.StringIO) -> None:
    logging.getLogger("task_tracker.tests.logging").warning("no request bound")

    assert _records(log_buffer)[-1]["request_id"] == "-"


def test_exceptions_are_rendered_into_the_payload(log_buffer: io.StringIO) -> None:
    logger = logging.getLogger("task_tracker.tests.logging")
    try:
        raise ValueError("broken")
    except ValueError:
        logger.exception("failure while working")

    payload = _records(log_buffer)[-1]

    assert payload["level"] == "ERROR"
    assert "ValueError: broken" in payload["exception"]


def test_credentials_never_reach_the_logs(log_buffer: io.StringIO) -> None:
    users = UserService(hash_rounds=4)
    users.register(username="jane", email="jane@example.com", password="s3cret-pass")
    with pytest.raises(UnauthorizedError):
        users.authenticate(email="jane@example.com", password="wrong-s3cret")

    output = log_buffer.getvalue()

    assert "User registered" in output
    assert "Authentication failed" in output
    assert "s3cret-pass" not in output
    assert "wrong-s3cret" not in output


def test_request_context_filter_stamps_records() -> None:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)
    token = bind_request_id("req-filter")
    try:
        assert RequestContextFilter().filter(record) is True
    finally:
        reset_request_id(token)

    assert record.request_id == "req-filter"


@pytest.mark.asyncio
async def test_requests_are_logged_with_their_caller(
    client: AsyncClient,
    registered_user: Callable[..., Awaitable["RegisteredUser"]],
    log_buffer: io.StringIO,
) -> None:
    owner = await registered_user()

    response = await client.post(
        "/api/tasks",
        json={"title": "Logged"},
        headers={**owner.headers, "X-Request-ID": "req-task-1"},
    )
    assert response.status_code == 201

    records = [record for record in _records(log_buffer) if record["request_id"] == "req-task-1"]
    created = next(record for record in records if record["message"] == "Task created")
    access = next(record for record in records if record["message"] == "Request completed")

    assert created["user_id"] == owner.id
    assert created["task_id"] == response.json()["id"]
    assert access["method"] == "POST"
    assert access["path"] == "/api/tasks"
    assert access["status_code"] == 201
    assert owner.token not in log_buffer.getvalue()


def test_registration_line_carries_the_new_user_id(log_buffer: io.StringIO) -> None:
    user = UserService(hash_rounds=4).register(
        username="jane",
        email="jane@example.com",
        password="s3cret-pass",
    )

    registered = next(record for record in _records(log_buffer) if record["message"] == "User registered")

    assert registered["user_id"] == user.id
