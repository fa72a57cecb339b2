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
"""Redis-backed session store with key rotation."""

from __future__ import annotations

import json
from typing import Any

import structlog
from redis.exceptions import RedisError

from scopedsession.kernel.exceptions import ConfigurationException, SessionStoreException
from scopedsession.session.data import SessionData
from scopedsession.session.key import SessionKey

logger = structlog.get_logger("scopedsession.session")

DEFAULT_KEY_PREFIX = "scopedsession:session:"
DEFAULT_TTL = 1800  # 30 minutes


class RedisSessionStore:
    """Session store backed by a ``redis.asyncio`` client.

    Records are JSON objects stored under ``<key_prefix><session key>`` with
    a TTL. A write sets the new key before deleting the old one, so a
    concurrent reader sees either the old record or the new one, never a gap.
    Redis errors are raised as :class:`SessionStoreException`.
    """

    def __init__(
        self,
        client: Any,
        ttl: int = DEFAULT_TTL,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        if ttl <= 0:
            raise ConfigurationException("ttl must be a positive number of seconds", option="ttl")
        self._client = client
        self._ttl = ttl
        self._key_prefix = key_prefix

    def _redis_key(self, key: SessionKey) -> str:
        return f"{self._key_prefix}{key.value}"

    async def read(self, key: SessionKey) -> SessionData | None:
        try:
            raw = await self._client.get(self._redis_key(key))
        except RedisError as exc:
            raise SessionStoreException(f"Failed to read session: {exc}", operation="read") from exc
        if raw is None:
            return None

        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
            logger.warning("session_payload_invalid", reason="not valid JSON")
            return None
        if not isinstance(payload, dict):
            logger.warning("session_payload_invalid", reason="not a JSON object")
            return None
        return SessionData.of({str(k): str(v) for k, v in payload.items()})

    async def write(self, key: SessionKey | None, data: SessionData) -> SessionKey:
        new_key = SessionKey.random()
        raw = json.dumps(data.as_dict())
        try:
            await self._client.set(self._redis_key(new_key), raw.encode(), ex=self._ttl)
            if key is not None:
                await self._client.delete(self._redis_key(key))
        except RedisError as exc:
            raise SessionStoreException(f"Failed to write session: {exc}", operation="write") from exc
        return new_key
