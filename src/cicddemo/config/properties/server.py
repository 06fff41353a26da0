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
"""Application server configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from cicddemo.core.config import config_properties


@config_properties(prefix="cicddemo.server")
@dataclass
class ServerProperties:
    """Configuration for the Uvicorn server (cicddemo.server.*)."""

    workers: int = 1
    keep_alive_timeout: int = 5
    graceful_timeout: int = 30
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None
