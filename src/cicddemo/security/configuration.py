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
"""Application security configuration.

The one place the response security policy is assembled: the full default
header set on every response and CSRF protection turned off.
"""

from __future__ import annotations

import structlog

from cicddemo.security.http_security import HttpSecurity, SecurityFilterChain

logger = structlog.get_logger("cicddemo.security")


def security_filter_chain() -> SecurityFilterChain:
    """Build the application's security filters."""
    http = HttpSecurity()
    http.csrf().disable()

    chain = http.build()
    logger.info(
        "security_filter_chain_built",
        headers=list(chain.headers.headers) if chain.headers else [],
        csrf_enabled=chain.csrf_enabled,
    )
    return chain
