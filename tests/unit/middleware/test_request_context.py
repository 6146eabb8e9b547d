"""
Request Context Middleware Tests.

WHAT: Unit tests for the RequestContextMiddleware and the log filter that
reads from it.

WHY: The request id is how log lines from one request are correlated.
These tests ensure:
- A fresh id is generated when the client sends none
- An upstream X-Request-ID is honoured and echoed
- The id is visible to code running inside the request
- Nothing leaks once the request is finished
"""

import logging

import pytest
from fastapi import FastAPI, Request
from httpx import AsyncClient, ASGITransport

from proposal_desk.core.logging import RequestIdFilter
from proposal_desk.middleware.request_context import (
    RequestContextMiddleware,
    get_request_id,
)


def _make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)

    @app.get("/echo")
    async def echo(request: Request) -> dict:
        return {
            "state": request.state.request_id,
            "context": get_request_id(),
        }

    return app


class TestRequestContextMiddleware:
    """Tests for request id propagation."""

    @pytest.mark.asyncio
    async def test_generates_request_id(self):
        async with AsyncClient(
            transport=ASGITransport(app=_make_app()), base_url="http://test"
        ) as ac:
            response = await ac.get("/echo")

        request_id = response.headers["X-Request-ID"]
        assert len(request_id) == 36
        assert response.json() == {"state": request_id, "context": request_id}

    @pytest.mark.asyncio
    async def test_honours_incoming_request_id(self):
        async with AsyncClient(
            transport=ASGITransport(app=_make_app()), base_url="http://test"
        ) as ac:
            response = await ac.get("/echo", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["context"] == "trace-123"

    @pytest.mark.asyncio
    async def test_each_request_gets_its_own_id(self):
        async with AsyncClient(
            transport=ASGITransport(app=_make_app()), base_url="http://test"
        ) as ac:
            first = await ac.get("/echo")
            second = await ac.get("/echo")

        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]

    def test_no_request_id_outside_request(self):
        assert get_request_id() is None


class TestRequestIdFilter:
    """Tests for stamping log records."""

    def test_outside_request_uses_dash(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)

        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "-"
