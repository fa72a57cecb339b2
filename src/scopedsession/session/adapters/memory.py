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
"""In-memory session store with key rotation and optional expiry."""

from __future__ import annotations

import asyncio
import time

from scopedsession.kernel.exceptions import ConfigurationException
from scopedsession.session.data import SessionData
from scopedsession.session.key import SessionKey


class InMemorySessionStore:
    """Process-local session store guarded by an asyncio.Lock.

    Every write stores the data under a fresh random key and drops the
    previous one. Suitable for development, testing and single-process
    applications.

    Args:
        ttl: Seconds a record stays readable after its last write.
            ``None`` keeps records until they are rotated away.
    """

    def __init__(self, ttl: int | None = None) -> None:
        if ttl is not None and ttl <= 0:
            raise ConfigurationException("ttl must be a positive number of seconds", option="ttl")
        self._ttl = ttl
        self._records: dict[str, tuple[SessionData, float | None]] = {}
        self._lock = asyncio.Lock()

    async def read(self, key: SessionKey) -> SessionData | None:
        """Return the data stored under *key*, or ``None`` if missing or expired."""
        async with self._lock:
            entry = self._records.get(key.value)
            if entry is None:
                return None

            data, expires_at = entry
            if expires_at is not None and time.monotonic() > expires_at:
                del self._records[key.value]
                return None

            return data

    async def write(self, key: SessionKey | None, data: SessionData) -> SessionKey:
        """Store *data* under a new key and invalidate *key*."""
        new_key = SessionKey.random()
        now = time.monotonic()
        expires_at = now + self._ttl if self._ttl is not None else None
        async with self._lock:
            if key is not None:
                self._records.pop(key.value, None)
            if self._ttl is not None:
                self._purge_expired(now)
            self._records[new_key.value] = (data, expires_at)
        return new_key

    def _purge_expired(self, now: float) -> None:
        # Abandoned sessions are never read again, so expiry is enforced on write.
        expired = [
            session_id
            for session_id, (_, expires_at) in self._records.items()
            if expires_at is not None and now > expires_at
        ]
        for session_id in expired:
            del self._records[session_id]

    def __len__(self) -> int:
        return len(self._records)
