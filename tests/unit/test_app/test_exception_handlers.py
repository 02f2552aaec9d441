"""Tests for the Problem Details exception handlers."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from catalog_service.app.exception_handlers import configure_exception_handlers
from catalog_service.core.database.exceptions import NotFoundError
from catalog_service.core.exceptions import AppException, NotFoundException


@pytest.fixture
def failing_app() -> FastAPI:
    app = FastAPI()
    configure_exception_handlers(app)

    @app.get("/app-error")
    async def app_error():
        raise AppException(status_code=400, detail="Bad input", type="bad-input")

    @app.get("/missing")
    async def missing():
        raise NotFoundException("Tool 'x' not found", extra={"slug": "x"})

    @app.get("/repo-missing")
    async def repo_missing():
        raise NotFoundError("Tool", {"id": "abc"})

    @app.get("/boom")
    async def boom():
        msg = "database exploded"
        raise RuntimeError(msg)

    @app.get("/typed")
    async def typed(limit: int):
        return {"limit": limit}

    return app


@pytest.fixture
async def failing_client(failing_app):
    transport = ASGITransport(app=failing_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestProblemDetails:
    async def test_app_exception(self, failing_client):
        response = await failing_client.get("/app-error")

        assert response.status_code == 400
        assert response.json() == {
            "type": "bad-input",
            "title": "Bad Request",
            "status": 400,
            "detail": "Bad input",
            "instance": "http://test/app-error",
        }

    async def test_not_found_exception_carries_extra(self, failing_client):
        body = (await failing_client.get("/missing")).json()

        assert body["status"] == 404
        assert body["slug"] == "x"

    async def test_repository_not_found(self, failing_client):
        response = await failing_client.get("/repo-missing")

        assert response.status_code == 404
        assert response.json()["model"] == "Tool"

    async def test_validation_error_lists_fields(self, failing_client):
        response = await failing_client.get("/typed", params={"limit": "many"})

        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Validation Error"
        assert body["errors"] == [
            {
                "field": "query.limit",
                "message": body["errors"][0]["message"],
                "type": "int_parsing",
                "value": "many",
            }
        ]

    async def test_unexpected_error_hides_details(self, failing_client):
        response = await failing_client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "internal-error"
        assert "exploded" not in body["detail"]
