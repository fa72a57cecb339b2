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
"""Exception hierarchy for scopedsession.

Every error raised by the package inherits from ScopedSessionException.

Categories:
- ConfigurationException: rejected session or store options
- SessionScopeException: scope accessors used outside a request scope
- InfrastructureException: store backend failures

An unknown, expired or tampered session cookie is never an exception; it
resolves to "no session" and the caller starts a fresh one.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class ScopedSessionException(Exception):
    """Base exception for all scopedsession errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "NO_ACTIVE_SESSION_SCOPE").
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
# Programmer errors
# =============================================================================


class ConfigurationException(ScopedSessionException):
    """A session manager or store option was missing or invalid."""

    def __init__(self, message: str, option: str | None = None) -> None:
        super().__init__(
            message,
            code="INVALID_SESSION_CONFIG",
            context={"option": option} if option else None,
        )


class SessionScopeException(ScopedSessionException):
    """Session accessor called while no request scope is active."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"ScopedSession.{operation}() called outside of an active session scope",
            code="NO_ACTIVE_SESSION_SCOPE",
            context={"operation": operation},
        )


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(ScopedSessionException):
    """Infrastructure failures: storage backends, network."""


class SessionStoreException(InfrastructureException):
    """The session store could not read or write a record."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(
            message,
            code="SESSION_STORE_FAILURE",
            context={"operation": operation},
        )
