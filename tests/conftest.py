"""Shared pytest fixtures for the Gitly test suites."""

from collections.abc import Callable, Generator
from typing import Optional

import pytest
from fastapi import FastAPI, HTTPException, Query, status
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from gitly.app import create_app
from gitly.utils.exceptions import BusinessException


class ShortenRequest(BaseModel):
    url: str = Field(min_length=1)
    alias: str = Field(pattern=r"^[a-z0-9-]+$")
    expiresInDays: int = Field(ge=1)


def _add_sample_routes(app: FastAPI) -> None:
    """Routes that raise each error category the handlers know about."""

    @app.post("/api/sample/links")
    def shorten(body: ShortenRequest) -> dict:
        return {"alias": body.alias}

    @app.get("/api/sample/links/{link_id}")
    def get_link(link_id: int) -> dict:
        return {"id": link_id}

    @app.get("/api/sample/search")
    def search(limit: int) -> dict:
        return {"limit": limit}

    @app.get("/api/sample/page")
    def page(number: int = Query(ge=1), code: str = Query(default="a", pattern=r"^[a-z]+$")) -> dict:
        return {"number": number, "code": code}

    @app.get("/api/sample/filter")
    def filter_links(limit: Optional[int] = None, offset: int | None = None) -> dict:
        return {"limit": limit, "offset": offset}

    @app.get("/api/sample/alias-taken")
    def alias_taken() -> None:
        raise BusinessException.builder() \
            .message("Alias 'promo' is already taken") \
            .error_code("ALIAS_TAKEN") \
            .http_status(status.HTTP_409_CONFLICT) \
            .build()

    @app.get("/api/sample/rejected")
    def rejected() -> None:
        raise BusinessException("Link limit reached")

    @app.get("/api/sample/forbidden")
    def forbidden() -> None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    @app.get("/api/sample/boom")
    def boom() -> None:
        raise RuntimeError("database exploded")


@pytest.fixture
def make_client() -> Generator[Callable[..., TestClient], None, None]:
    """Factory for clients over a fresh app; 500 responses are returned, not raised."""
    clients: list[TestClient] = []

    def _make(debug: bool = False) -> TestClient:
        app = create_app(debug=debug)
        _add_sample_routes(app)
        test_client = TestClient(app, raise_server_exceptions=False)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> TestClient:
    """API test client with debug mode off."""
    return make_client()
