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
"""Tests for the global exception handler and status mapping."""

from __future__ import annotations

import pytest
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from cicddemo.core.config import Config
from cicddemo.kernel.exceptions import (
    BusinessException,
    CicdDemoException,
    InfrastructureException,
    InvalidRequestException,
    ResourceNotFoundException,
    ValidationException,
)
from cicddemo.web.app import create_app
from cicddemo.web.errors import get_status_code


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("bad"), 422),
        (ResourceNotFoundException("missing"), 404),
        (InvalidRequestException("nope"), 400),
        (BusinessException("rule"), 400),
        (InfrastructureException("down"), 502),
        (CicdDemoException("generic"), 500),
        (KeyError("k"), 500),
    ],
)
def test_status_mapping(exc: Exception, status: int) -> None:
    assert get_status_code(exc) == status


def make_test_app():
    async def not_found(request: Request) -> PlainTextResponse:
        raise ResourceNotFoundException("Build not found", code="BUILD_NOT_FOUND", context={"id": "123"})

    async def unknown(request: Request) -> PlainTextResponse:
        raise InvalidRequestException("Unsupported pipeline")

    return create_app(
        Config({}),
        extra_routes=[Route("/not-found", not_found), Route("/unknown", unknown)],
    )


class TestGlobalExceptionHandler:
    def setup_method(self):
        self.client = TestClient(make_test_app())

    def test_not_found_returns_404(self):
        resp = self.client.get("/not-found")
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"]["code"] == "BUILD_NOT_FOUND"
        assert body["error"]["message"] == "Build not found"
        assert body["error"]["context"] == {"id": "123"}
        assert body["error"]["status"] == 404

    def test_code_defaults_to_exception_name(self):
        body = self.client.get("/unknown").json()
        assert body["error"]["code"] == "InvalidRequestException"
        assert "context" not in body["error"]

    def test_error_has_transaction_id_and_timestamp(self):
        resp = self.client.get("/not-found", headers={"X-Transaction-Id": "tx-1"})
        body = resp.json()
        assert body["error"]["transaction_id"] == "tx-1"
        assert body["error"]["timestamp"]
        assert body["error"]["path"] == "/not-found"
