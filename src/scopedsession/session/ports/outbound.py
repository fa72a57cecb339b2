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
"""Session store protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from scopedsession.session.data import SessionData
from scopedsession.session.key import SessionKey


@runtime_checkable
class SessionStore(Protocol):
    """Authoritative mapping from session keys to session data.

    ``read`` returns ``None`` for unknown, expired or otherwise invalid keys;
    absence is a normal outcome, not a failure. Backend failures propagate.

    ``write`` persists *data* and returns the key that resolves to it from now
    on. The stores shipped with this package rotate on every write: the
    returned key is new and *key* stops resolving immediately. Writes for
    different keys may run concurrently.
    """

    async def read(self, key: SessionKey) -> SessionData | None: ...

    async def write(self, key: SessionKey | None, data: SessionData) -> SessionKey: ...
