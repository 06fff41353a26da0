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
"""CsrfFilter — double-submit cookie CSRF protection.

* **Safe methods** (GET, HEAD, OPTIONS, TRACE) pass through and set (or
  refresh) the ``XSRF-TOKEN`` cookie on the response.
* **Unsafe methods** compare the ``XSRF-TOKEN`` cookie against the
  ``X-XSRF-TOKEN`` header; a mismatch or a missing value yields 403.

Requests carrying ``Authorization: Bearer …`` are exempt.

Only installed when CSRF protection is left enabled on
:class:`~cicddemo.security.http_security.HttpSecurity`.
"""

from __future__ import annotations

from typing import Any

import structlog
from starlette.responses import JSONResponse

from cicddemo.container.ordering import order
from cicddemo.security.csrf import (
    CSRF_COOKIE_NAME,
    CSRF_HEADER_NAME,
    SAFE_METHODS,
    generate_csrf_token,
    validate_csrf_token,
)
from cicddemo.web.filters import OncePerRequestFilter
from cicddemo.web.ports.filter import CallNext

logger = structlog.get_logger("cicddemo.security")


def _set_csrf_cookie(response: Any, token: str) -> None:
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        httponly=False,  # JS must be able to read the token
        samesite="lax",
        secure=True,
        path="/",
    )


@order(-50)
class CsrfFilter(OncePerRequestFilter):
    """Double-submit cookie CSRF filter."""

    def __init__(self, exclude_patterns: list[str] | None = None) -> None:
        self.exclude_patterns = list(exclude_patterns or [])

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        method: str = request.method

        if method in SAFE_METHODS:
            response = await call_next(request)
            _set_csrf_cookie(response, generate_csrf_token())
            return response

        auth_header: str | None = request.headers.get("authorization")
        if auth_header and auth_header.startswith("Bearer "):
            return await call_next(request)

        cookie_token: str | None = request.cookies.get(CSRF_COOKIE_NAME)
        header_token: str | None = request.headers.get(CSRF_HEADER_NAME)

        if not cookie_token or not header_token:
            logger.info("csrf_rejected", path=request.url.path, reason="missing")
            return JSONResponse({"error": "CSRF token missing"}, status_code=403)

        if not validate_csrf_token(cookie_token, header_token):
            logger.info("csrf_rejected", path=request.url.path, reason="invalid")
            return JSONResponse({"error": "CSRF token invalid"}, status_code=403)

        response = await call_next(request)
        _set_csrf_cookie(response, generate_csrf_token())
        return response
