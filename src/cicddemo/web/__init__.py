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
"""Web layer — filter chain, security headers policy, and application factory.

Only framework-agnostic types are exported here; import Starlette-specific
pieces from :mod:`cicddemo.web.app` and :mod:`cicddemo.web.adapters.starlette`.
"""

from cicddemo.web.filters import OncePerRequestFilter
from cicddemo.web.ports.filter import CallNext, WebFilter
from cicddemo.web.security_headers import DEFAULT_SECURITY_HEADERS, SecurityHeadersConfig

__all__ = [
    "DEFAULT_SECURITY_HEADERS",
    "CallNext",
    "OncePerRequestFilter",
    "SecurityHeadersConfig",
    "WebFilter",
]
