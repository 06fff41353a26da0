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
"""Exception translation filter — turns downstream exceptions into JSON error responses.

Starlette renders unhandled exceptions in ``ServerErrorMiddleware``, which
sits outside every user middleware.  Translating them here instead keeps
500 responses inside the filter chain, so the outer filters (security
headers, transaction id, request logging) still apply to them.
"""

from __future__ import annotations

from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from cicddemo.container.ordering import HIGHEST_PRECEDENCE, order
from cicddemo.kernel.exceptions import CicdDemoException
from cicddemo.web.errors import get_status_code, global_exception_handler
from cicddemo.web.filters import OncePerRequestFilter
from cicddemo.web.ports.filter import CallNext

logger = structlog.get_logger("cicddemo.web.errors")


@order(HIGHEST_PRECEDENCE + 400)
class ExceptionTranslationFilter(OncePerRequestFilter):
    """Catches any exception raised by the route handler and renders it via
    :func:`global_exception_handler`."""

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        try:
            return cast(Response, await call_next(request))
        except CicdDemoException as exc:
            logger.warning(
                "request_rejected",
                path=request.url.path,
                status_code=get_status_code(exc),
                code=exc.code or type(exc).__name__,
                error=str(exc),
            )
            return await global_exception_handler(request, exc)
        except Exception as exc:
            logger.exception("unhandled_exception", path=request.url.path, error_type=type(exc).__name__)
            return await global_exception_handler(request, exc)
