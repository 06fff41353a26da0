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
"""HTTP security DSL — builder for the response header policy and CSRF.

Provides a Spring-inspired ``HttpSecurity`` builder whose :meth:`build`
produces the security filters installed in the web filter chain.

Usage::

    http = HttpSecurity()
    http.headers().frame_options("SAMEORIGIN").referrer_policy("no-referrer")
    http.csrf().disable()

    chain = http.build()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cicddemo.web.security_headers import (
    CACHE_CONTROL,
    CROSS_ORIGIN_EMBEDDER_POLICY,
    CROSS_ORIGIN_OPENER_POLICY,
    DEFAULT_SECURITY_HEADERS,
    EXPIRES,
    PRAGMA,
    REFERRER_POLICY,
    X_CONTENT_TYPE_OPTIONS,
    X_FRAME_OPTIONS,
    X_XSS_PROTECTION,
    SecurityHeadersConfig,
)

if TYPE_CHECKING:
    from cicddemo.web.ports.filter import WebFilter


@dataclass(frozen=True)
class SecurityFilterChain:
    """Result of :meth:`HttpSecurity.build`.

    Attributes:
        filters: The security filters to install, unsorted.
        headers: The effective header policy, or ``None`` when disabled.
        csrf_enabled: Whether a :class:`CsrfFilter` is part of ``filters``.
    """

    filters: tuple[WebFilter, ...]
    headers: SecurityHeadersConfig | None
    csrf_enabled: bool


# ---------------------------------------------------------------------------
# Configurers
# ---------------------------------------------------------------------------


class _HeadersConfigurer:
    """Fluent configurer for the response header policy.

    Returned by :meth:`HttpSecurity.headers`.  Every method returns the
    configurer itself for chaining.
    """

    def __init__(self, security: HttpSecurity) -> None:
        self._security = security

    def _set(self, name: str, value: str) -> _HeadersConfigurer:
        # names are case-insensitive; a replaced header keeps its position
        lowered = name.lower()
        updated: dict[str, str] = {}
        for existing, current in self._security._headers.items():
            if existing.lower() == lowered:
                updated[name] = value
            else:
                updated[existing] = current
        updated.setdefault(name, value)
        self._security._headers = updated
        self._security._headers_enabled = True
        return self

    def defaults(self) -> _HeadersConfigurer:
        """Reset to the full default header set."""
        self._security._headers = dict(DEFAULT_SECURITY_HEADERS)
        self._security._headers_enabled = True
        return self

    def header(self, name: str, value: str) -> _HeadersConfigurer:
        """Add or replace an arbitrary header."""
        return self._set(name, value)

    def content_type_options(self) -> _HeadersConfigurer:
        return self._set(X_CONTENT_TYPE_OPTIONS, "nosniff")

    def frame_options(self, value: str = "DENY") -> _HeadersConfigurer:
        return self._set(X_FRAME_OPTIONS, value)

    def cross_origin_isolation(
        self,
        embedder_policy: str = "require-corp",
        opener_policy: str = "same-origin",
    ) -> _HeadersConfigurer:
        self._set(CROSS_ORIGIN_EMBEDDER_POLICY, embedder_policy)
        return self._set(CROSS_ORIGIN_OPENER_POLICY, opener_policy)

    def cache_control(self) -> _HeadersConfigurer:
        """Disable caching: sets ``Cache-Control``, ``Pragma`` and ``Expires`` together."""
        self._set(CACHE_CONTROL, "no-cache, no-store, must-revalidate")
        self._set(PRAGMA, "no-cache")
        return self._set(EXPIRES, "0")

    def referrer_policy(self, value: str = "strict-origin-when-cross-origin") -> _HeadersConfigurer:
        return self._set(REFERRER_POLICY, value)

    def xss_protection(self, value: str = "1; mode=block") -> _HeadersConfigurer:
        return self._set(X_XSS_PROTECTION, value)

    def disable(self) -> HttpSecurity:
        """Emit no security headers at all."""
        self._security._headers = {}
        self._security._headers_enabled = False
        return self._security


class _CsrfConfigurer:
    """Configurer returned by :meth:`HttpSecurity.csrf`."""

    def __init__(self, security: HttpSecurity) -> None:
        self._security = security

    def disable(self) -> HttpSecurity:
        """Turn CSRF protection off: no request is ever rejected for a missing token."""
        self._security._csrf_enabled = False
        return self._security

    def ignoring(self, *patterns: str) -> _CsrfConfigurer:
        """Exclude glob *patterns* from CSRF validation."""
        self._security._csrf_ignored.extend(patterns)
        return self


# ---------------------------------------------------------------------------
# Top-level builder
# ---------------------------------------------------------------------------


@dataclass
class HttpSecurity:
    """HTTP security configuration builder.

    Starts with the default header policy and CSRF protection enabled.
    """

    _headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SECURITY_HEADERS))
    _headers_enabled: bool = True
    _csrf_enabled: bool = True
    _csrf_ignored: list[str] = field(default_factory=list)

    def headers(self) -> _HeadersConfigurer:
        """Start configuring the response header policy."""
        return _HeadersConfigurer(self)

    def csrf(self) -> _CsrfConfigurer:
        """Start configuring CSRF protection."""
        return _CsrfConfigurer(self)

    def build(self) -> SecurityFilterChain:
        """Create the security filters for the accumulated configuration.

        At most one :class:`SecurityHeadersFilter` is emitted.

        Raises:
            SecurityConfigurationException: if a configured header name or
                value is invalid.
        """
        from cicddemo.web.adapters.starlette.filters.csrf_filter import CsrfFilter
        from cicddemo.web.adapters.starlette.filters.security_headers_filter import SecurityHeadersFilter

        filters: list[WebFilter] = []
        headers: SecurityHeadersConfig | None = None

        if self._headers_enabled and self._headers:
            headers = SecurityHeadersConfig(self._headers)
            filters.append(SecurityHeadersFilter(headers))

        if self._csrf_enabled:
            filters.append(CsrfFilter(exclude_patterns=self._csrf_ignored))

        return SecurityFilterChain(
            filters=tuple(filters),
            headers=headers,
            csrf_enabled=self._csrf_enabled,
        )
