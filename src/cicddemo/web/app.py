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
"""Web application factory built on Starlette."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from cicddemo.config.properties import AppProperties, WebProperties
from cicddemo.container.ordering import get_order
from cicddemo.core.config import Config
from cicddemo.security.configuration import security_filter_chain
from cicddemo.security.http_security import SecurityFilterChain
from cicddemo.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from cicddemo.web.adapters.starlette.filters import (
    ExceptionTranslationFilter,
    RequestLoggingFilter,
    TransactionIdFilter,
)
from cicddemo.web.ports.filter import WebFilter
from cicddemo.web.routes import make_routes


def create_app(
    config: Config | None = None,
    security: SecurityFilterChain | None = None,
    extra_routes: list[BaseRoute] | None = None,
) -> Starlette:
    """Create the Starlette application.

    Installs a single :class:`WebFilterChainMiddleware` running, outermost
    first: transaction id, request logging, the security filters from
    *security* (defaults to :func:`security_filter_chain`), and exception
    translation.
    """
    config = config or Config.from_sources(".")
    security = security or security_filter_chain()
    app_properties = config.bind(AppProperties)
    web_properties = config.bind(WebProperties)

    filters: list[WebFilter] = [
        TransactionIdFilter(),
        RequestLoggingFilter(),
        *security.filters,
        ExceptionTranslationFilter(),
    ]
    filters.sort(key=lambda f: get_order(type(f)))

    routes: list[BaseRoute] = list(make_routes(app_properties))
    if extra_routes:
        routes.extend(extra_routes)

    app = Starlette(
        debug=web_properties.debug,
        middleware=[Middleware(WebFilterChainMiddleware, filters=filters)],
        routes=routes,
    )
    app.state.security_filter_chain = security
    return app
