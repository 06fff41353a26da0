# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for built-in WebFilter implementations (transaction id, logging, exception translation)."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from cicddemo.container.ordering import HIGHEST_PRECEDENCE, get_order
from cicddemo.kernel.exceptions import ResourceNotFoundException
from cicddemo.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from cicddemo.web.adapters.starlette.filters import (
    CsrfFilter,
    ExceptionTranslationFilter,
    RequestLoggingFilter,
    SecurityHeadersFilter,
    TransactionIdFilter,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _ok_handler(request: Request) -> PlainTextResponse:
    return PlainTextResponse("OK")


async def _tx_id_handler(request: Request) -> PlainTextResponse:
    """Echo back the transaction_id from request state."""
    tx_id = getattr(request.state, "transaction_id", "missing")
    return PlainTextResponse(tx_id)


async def _error_handler(request: Request) -> PlainTextResponse:
    raise ValueError("boom")


async def _not_found_handler(request: Request) -> PlainTextResponse:
    raise ResourceNotFoundException("Greeting not found", code="GREETING_NOT_FOUND", context={"id": "7"})


def _make_app(*filters, routes=None) -> Starlette:
    if routes is None:
        routes = [Route("/test", _ok_handler)]
    return Starlette(
        routes=routes,
        middleware=[Middleware(WebFilterChainMiddleware, filters=list(filters))],
    )


# ---------------------------------------------------------------------------
# TransactionIdFilter
# ---------------------------------------------------------------------------


class TestTransactionIdFilter:
    def test_generates_transaction_id(self):
        client = TestClient(_make_app(TransactionIdFilter()))
        resp = client.get("/test")
        assert resp.status_code == 200
        assert len(resp.headers["X-Transaction-Id"]) == 36

    def test_propagates_existing_transaction_id(self):
        client = TestClient(_make_app(TransactionIdFilter()))
        resp = client.get("/test", headers={"X-Transaction-Id": "custom-123"})
        assert resp.headers["X-Transaction-Id"] == "custom-123"

    def test_sets_request_state(self):
        app = _make_app(TransactionIdFilter(), routes=[Route("/test", _tx_id_handler)])
        resp = TestClient(app).get("/test", headers={"X-Transaction-Id": "my-id"})
        assert resp.text == "my-id"

    def test_order_is_highest_precedence_plus_100(self):
        assert get_order(TransactionIdFilter) == HIGHEST_PRECEDENCE + 100


# ---------------------------------------------------------------------------
# RequestLoggingFilter
# ---------------------------------------------------------------------------


class TestRequestLoggingFilter:
    def test_passes_through(self):
        resp = TestClient(_make_app(RequestLoggingFilter())).get("/test")
        assert resp.status_code == 200
        assert resp.text == "OK"

    def test_propagates_exceptions(self):
        app = _make_app(RequestLoggingFilter(), routes=[Route("/test", _error_handler)])
        resp = TestClient(app, raise_server_exceptions=False).get("/test")
        assert resp.status_code == 500

    def test_order_is_highest_precedence_plus_200(self):
        assert get_order(RequestLoggingFilter) == HIGHEST_PRECEDENCE + 200


# ---------------------------------------------------------------------------
# ExceptionTranslationFilter
# ---------------------------------------------------------------------------


class TestExceptionTranslationFilter:
    def test_unhandled_exception_becomes_500_json(self):
        app = _make_app(ExceptionTranslationFilter(), routes=[Route("/test", _error_handler)])
        resp = TestClient(app).get("/test")
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"]["code"] == "INTERNAL_ERROR"
        assert body["error"]["message"] == "Internal server error"
        assert "boom" not in resp.text

    def test_application_exception_maps_status(self):
        app = _make_app(ExceptionTranslationFilter(), routes=[Route("/test", _not_found_handler)])
        resp = TestClient(app).get("/test")
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"]["code"] == "GREETING_NOT_FOUND"
        assert body["error"]["context"] == {"id": "7"}

    def test_500_passes_back_through_security_headers(self):
        app = _make_app(
            SecurityHeadersFilter(),
            ExceptionTranslationFilter(),
            routes=[Route("/test", _error_handler)],
        )
        resp = TestClient(app).get("/test")
        assert resp.status_code == 500
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"

    def test_error_body_carries_transaction_id(self):
        app = _make_app(
            TransactionIdFilter(),
            ExceptionTranslationFilter(),
            routes=[Route("/test", _error_handler)],
        )
        resp = TestClient(app).get("/test", headers={"X-Transaction-Id": "tx-500"})
        assert resp.json()["error"]["transaction_id"] == "tx-500"
        assert resp.headers["X-Transaction-Id"] == "tx-500"

    def test_order_is_highest_precedence_plus_400(self):
        assert get_order(ExceptionTranslationFilter) == HIGHEST_PRECEDENCE + 400


# ---------------------------------------------------------------------------
# Ordering between built-in filters
# ---------------------------------------------------------------------------


class TestBuiltInFilterOrdering:
    def test_security_headers_wrap_exception_translation(self):
        assert get_order(TransactionIdFilter) < get_order(RequestLoggingFilter)
        assert get_order(RequestLoggingFilter) < get_order(SecurityHeadersFilter)
        assert get_order(SecurityHeadersFilter) < get_order(ExceptionTranslationFilter)

    def test_csrf_runs_inside_security_headers(self):
        assert get_order(SecurityHeadersFilter) < get_order(CsrfFilter)
