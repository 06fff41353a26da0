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
"""Security headers filter — stamps the response security policy on every response."""

from __future__ import annotations

from typing import cast

from starlette.requests import Request
from starlette.responses import Response

from cicddemo.container.ordering import HIGHEST_PRECEDENCE, order
from cicddemo.web.filters import OncePerRequestFilter
from cicddemo.web.ports.filter import CallNext
from cicddemo.web.security_headers import SecurityHeadersConfig


@order(HIGHEST_PRECEDENCE + 300)
class SecurityHeadersFilter(OncePerRequestFilter):
    """Adds the configured security headers to every response.

    Headers are *set*, not appended: a value written further down the chain
    is replaced, and running the filter twice leaves one value per header.
    Status code and body are never touched.
    """

    def __init__(self, config: SecurityHeadersConfig | None = None) -> None:
        self._config = config if config is not None else SecurityHeadersConfig()

    @property
    def config(self) -> SecurityHeadersConfig:
        return self._config

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        response = cast(Response, await call_next(request))
        for name, value in self._config:
            response.headers[name] = value
        return response
