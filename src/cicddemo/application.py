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
"""Application bootstrap — configuration, logging, and the ASGI app."""

from __future__ import annotations

import os
from pathlib import Path

from starlette.applications import Starlette

from cicddemo.config.properties import AppProperties, ServerProperties, WebProperties
from cicddemo.core.config import Config
from cicddemo.logging.port import LoggingPort
from cicddemo.logging.structlog_adapter import StructlogAdapter
from cicddemo.server.uvicorn_adapter import UvicornServerAdapter
from cicddemo.web.app import create_app

PROFILES_ENV_VAR = "CICDDEMO_PROFILES_ACTIVE"


def resolve_profiles(value: str | None = None) -> list[str]:
    """Parse a comma-separated profile list (defaults to ``$CICDDEMO_PROFILES_ACTIVE``)."""
    raw = value if value is not None else os.environ.get(PROFILES_ENV_VAR, "")
    return [p.strip() for p in raw.split(",") if p.strip()]


class CicdDemoApplication:
    """Loads configuration, configures logging, and builds or serves the app.

    Startup sequence:
    1. Load configuration from *base_dir* with the active profiles
    2. Configure structlog from the ``cicddemo.logging`` section
    3. Build the Starlette app with the security filter chain
    """

    def __init__(self, base_dir: str | Path = ".", active_profiles: list[str] | None = None) -> None:
        self.active_profiles = active_profiles if active_profiles is not None else resolve_profiles()
        self.config = Config.from_sources(base_dir, active_profiles=self.active_profiles)

        self._logging: LoggingPort = StructlogAdapter()
        self._logging.configure(self.config)
        self._logger = self._logging.get_logger("cicddemo.core")

        self.app_properties = self.config.bind(AppProperties)
        self.web_properties = self.config.bind(WebProperties)
        self.server_properties = self.config.bind(ServerProperties)

    def create_app(self) -> Starlette:
        self._logger.info(
            "starting_application",
            app=self.app_properties.name,
            version=self.app_properties.version,
            profiles=self.active_profiles or None,
            config_sources=self.config.loaded_sources,
        )
        return create_app(self.config)

    def run(self) -> None:
        """Serve the application with Uvicorn (blocking).

        Workers re-import :func:`app_factory`, so each one rebuilds the
        app from the same configuration sources.
        """
        self._logger.info(
            "serving",
            host=self.web_properties.host,
            port=self.web_properties.port,
            workers=self.server_properties.workers,
        )
        UvicornServerAdapter().serve(
            "cicddemo.application:app_factory",
            self.web_properties,
            self.server_properties,
            factory=True,
        )


def app_factory() -> Starlette:
    """ASGI application factory (``uvicorn --factory cicddemo.application:app_factory``)."""
    return CicdDemoApplication().create_app()


def main() -> None:
    CicdDemoApplication().run()
