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
"""HTTP routes of the demo service."""

from __future__ import annotations

import json

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from cicddemo.config.properties import AppProperties
from cicddemo.kernel.exceptions import InvalidRequestException


def make_routes(app_properties: AppProperties) -> list[Route]:
    """Return the service routes bound to *app_properties*."""

    async def index(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "message": f"Hello from {app_properties.name}",
                "version": app_properties.version,
            }
        )

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "UP"})

    async def echo(request: Request) -> JSONResponse:
        body = await request.body()
        try:
            payload = json.loads(body) if body else None
        except json.JSONDecodeError as exc:
            raise InvalidRequestException(
                "Request body is not valid JSON",
                code="INVALID_JSON",
                context={"position": exc.pos},
            ) from exc
        return JSONResponse({"echo": payload})

    return [
        Route("/", index, methods=["GET"]),
        Route("/health", health, methods=["GET"]),
        Route("/api/echo", echo, methods=["POST"]),
    ]
