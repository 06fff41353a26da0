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
"""Uvicorn ASGI server adapter."""

from __future__ import annotations

from typing import Any

import uvicorn

from cicddemo.config.properties import ServerProperties, WebProperties


class UvicornServerAdapter:
    """Runs an ASGI application with Uvicorn using the bound server properties."""

    def serve(
        self,
        app: str | Any,
        web: WebProperties,
        server: ServerProperties,
        factory: bool = False,
    ) -> None:
        """Start Uvicorn (blocking).

        Multiple workers require *app* to be an import string.
        """
        uvicorn.run(app, factory=factory, **self.build_kwargs(web, server))

    @staticmethod
    def build_kwargs(web: WebProperties, server: ServerProperties) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "host": web.host,
            "port": web.port,
            "workers": max(server.workers, 1),
            "log_level": "warning",
            "timeout_keep_alive": server.keep_alive_timeout,
            # Uvicorn's own access log would duplicate RequestLoggingFilter.
            "access_log": False,
        }
        if server.graceful_timeout:
            kwargs["timeout_graceful_shutdown"] = server.graceful_timeout
        if server.ssl_certfile:
            kwargs["ssl_certfile"] = server.ssl_certfile
        if server.ssl_keyfile:
            kwargs["ssl_keyfile"] = server.ssl_keyfile
        return kwargs
