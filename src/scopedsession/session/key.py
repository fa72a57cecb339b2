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
"""SessionKey — opaque identifier of a stored session record."""

from __future__ import annotations

import secrets
from dataclasses import dataclass

_KEY_BYTES = 32


@dataclass(frozen=True)
class SessionKey:
    """Opaque, unguessable token carried in the session cookie.

    Keys are compared by value. A key parsed from a cookie is never
    validated here; unknown keys simply resolve to no session in the store.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"SessionKey value must be str, got {type(self.value).__name__}")

    @classmethod
    def random(cls) -> SessionKey:
        """Return a fresh key built from a cryptographically secure token."""
        return cls(secrets.token_urlsafe(_KEY_BYTES))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        # Keys are credentials; keep them out of reprs and tracebacks.
        return "SessionKey(...)"
