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
"""Session — one request's session key paired with its data."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field

from scopedsession.session.data import SessionData
from scopedsession.session.key import SessionKey


@dataclass(frozen=True)
class Session:
    """Immutable ``(key, data)`` snapshot.

    ``Session()`` builds a fresh session: a random key and empty data.
    The key only changes when the session is persisted by a store.
    """

    key: SessionKey = field(default_factory=SessionKey.random)
    data: SessionData = field(default_factory=SessionData.empty)

    def __post_init__(self) -> None:
        if self.key is None:
            raise TypeError("Session key must not be None")
        if self.data is None:
            raise TypeError("Session data must not be None")

    def update(self, f: Callable[[SessionData], SessionData]) -> Session:
        """Return a session with the same key and ``f(data)``."""
        return dataclasses.replace(self, data=f(self.data))
