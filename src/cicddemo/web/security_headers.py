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
"""Security headers policy — the ordered set of headers stamped on every response.

The default policy covers MIME-sniffing protection, framing denial,
cross-origin isolation, cache prevention, referrer policy and the legacy
XSS auditor header.  It is built once at startup and never mutated;
``with_header()`` / ``without()`` return new instances.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from cicddemo.kernel.exceptions import SecurityConfigurationException

X_CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"
X_FRAME_OPTIONS = "X-Frame-Options"
CROSS_ORIGIN_EMBEDDER_POLICY = "Cross-Origin-Embedder-Policy"
CROSS_ORIGIN_OPENER_POLICY = "Cross-Origin-Opener-Policy"
CACHE_CONTROL = "Cache-Control"
PRAGMA = "Pragma"
EXPIRES = "Expires"
REFERRER_POLICY = "Referrer-Policy"
X_XSS_PROTECTION = "X-XSS-Protection"

DEFAULT_SECURITY_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        X_CONTENT_TYPE_OPTIONS: "nosniff",
        X_FRAME_OPTIONS: "DENY",
        CROSS_ORIGIN_EMBEDDER_POLICY: "require-corp",
        CROSS_ORIGIN_OPENER_POLICY: "same-origin",
        CACHE_CONTROL: "no-cache, no-store, must-revalidate",
        PRAGMA: "no-cache",
        EXPIRES: "0",
        REFERRER_POLICY: "strict-origin-when-cross-origin",
        X_XSS_PROTECTION: "1; mode=block",
    }
)

# RFC 7230 token
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_FORBIDDEN_VALUE_CHARS = ("\r", "\n", "\x00")


def _validate(headers: Mapping[str, str]) -> None:
    seen: set[str] = set()
    for name, value in headers.items():
        if not isinstance(name, str) or not _HEADER_NAME_RE.fullmatch(name):
            raise SecurityConfigurationException(
                f"Invalid response header name: {name!r}",
                code="INVALID_HEADER_NAME",
            )
        if not isinstance(value, str) or any(c in value for c in _FORBIDDEN_VALUE_CHARS):
            raise SecurityConfigurationException(
                f"Invalid value for response header {name}: {value!r}",
                code="INVALID_HEADER_VALUE",
                context={"header": name},
            )
        lowered = name.lower()
        if lowered in seen:
            raise SecurityConfigurationException(
                f"Duplicate response header: {name}",
                code="DUPLICATE_HEADER",
                context={"header": name},
            )
        seen.add(lowered)


@dataclass(frozen=True)
class SecurityHeadersConfig:
    """Immutable, ordered mapping of response header name to value.

    Defaults to :data:`DEFAULT_SECURITY_HEADERS`.  Names must be unique
    (case-insensitively) and values may not contain CR, LF or NUL.
    """

    headers: Mapping[str, str] = field(default_factory=lambda: DEFAULT_SECURITY_HEADERS)

    def __post_init__(self) -> None:
        _validate(self.headers)
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.headers.items())

    def __len__(self) -> int:
        return len(self.headers)

    def get(self, name: str) -> str | None:
        """Return the value for *name* (case-insensitive), or ``None``."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def with_header(self, name: str, value: str) -> SecurityHeadersConfig:
        """Return a copy with *name* set to *value*.

        An existing header with the same name keeps its position.
        """
        lowered = name.lower()
        updated: dict[str, str] = {}
        replaced = False
        for key, current in self.headers.items():
            if key.lower() == lowered:
                updated[name] = value
                replaced = True
            else:
                updated[key] = current
        if not replaced:
            updated[name] = value
        return SecurityHeadersConfig(updated)

    def without(self, name: str) -> SecurityHeadersConfig:
        """Return a copy with *name* removed (no-op if absent)."""
        lowered = name.lower()
        return SecurityHeadersConfig({k: v for k, v in self.headers.items() if k.lower() != lowered})
