"""Unit tests for the request logging middleware."""

import logging

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from gitly.middleware.request_logging import get_client_ip


def _request(headers: dict[str, str], client: tuple[str, int] | None = ("10.0.0.9", 51000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


@pytest.mark.parametrize(
    ("headers", "expected"),
    [
        ({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}, "203.0.113.7"),
        ({"X-Forwarded-For": "203.0.113.7", "X-Real-IP": "198.51.100.4"}, "203.0.113.7"),
        ({"X-Real-IP": "198.51.100.4"}, "198.51.100.4"),
        ({"X-Forwarded-For": ""}, "10.0.0.9"),
        ({}, "10.0.0.9"),
    ],
)
def test_client_ip_resolution_order(headers: dict[str, str], expected: str) -> None:
    assert get_client_ip(_request(headers)) == expected


def test_client_ip_unknown_without_connection_info() -> None:
    assert get_client_ip(_request({}, client=None)) == "unknown"


def test_logs_incoming_and_completed_request(client: TestClient, caplog) -> None:
    with caplog.at_level(logging.INFO):
        response = client.get(
            "/api/health", params={"verbose": "1"}, headers={"X-Real-IP": "198.51.100.4"}
        )

    assert response.status_code == 200
    messages = [r.getMessage() for r in caplog.records if r.name == "request_logging"]
    assert messages[0] == "Incoming Request: GET /api/health ?verbose=1 | IP: 198.51.100.4"
    assert messages[1].startswith("Request Completed: GET /api/health | Status: 200 | Duration: ")
    assert messages[1].endswith("ms")


def test_logs_error_when_handler_raises(client: TestClient, caplog) -> None:
    with caplog.at_level(logging.INFO):
        response = client.get("/api/sample/boom")

    assert response.status_code == 500
    records = [r for r in caplog.records if r.name == "request_logging"]
    assert records[-1].levelno == logging.ERROR
    assert records[-1].getMessage().startswith(
        "Request Completed with Exception: GET /api/sample/boom | Status: 500"
    )
    assert records[-1].getMessage().endswith("Exception: database exploded")


def test_client_errors_are_logged_as_normal_completion(client: TestClient, caplog) -> None:
    with caplog.at_level(logging.INFO):
        client.get("/foo")

    records = [r for r in caplog.records if r.name == "request_logging"]
    assert records[-1].levelno == logging.INFO
    assert "Status: 404" in records[-1].getMessage()
