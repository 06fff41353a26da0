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
"""Exception hierarchy for cicddemo.

Every application error derives from :class:`CicdDemoException`, which
carries an optional machine-readable code and a context dict that end up
in the JSON error body.
"""

from __future__ import annotations


class CicdDemoException(Exception):
    """Base exception for all application errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_JSON").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(CicdDemoException):
    """Domain rule violations and business logic errors."""


class ValidationException(BusinessException):
    """Input validation failures."""


class ResourceNotFoundException(BusinessException):
    """Requested resource does not exist."""


class InvalidRequestException(BusinessException):
    """Request is syntactically valid but semantically incorrect."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(CicdDemoException):
    """Failures of the runtime environment or a downstream dependency."""


class SecurityConfigurationException(CicdDemoException):
    """The security policy was configured with invalid values (raised at startup)."""
