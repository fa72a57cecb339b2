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
"""Session configuration properties and factories built on them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

from scopedsession.core.config import Config, config_properties
from scopedsession.kernel.exceptions import ConfigurationException
from scopedsession.logging.port import LoggingPort
from scopedsession.logging.structlog_adapter import StructlogAdapter
from scopedsession.session.adapters.memory import InMemorySessionStore
from scopedsession.session.cookie import SameSite, SetCookie
from scopedsession.session.manager import DEFAULT_COOKIE_NAME, DEFAULT_ROOT, SessionManager
from scopedsession.session.ports.outbound import SessionStore


@config_properties(prefix="scopedsession.session")
@dataclass
class SessionProperties:
    """Configuration for session handling (scopedsession.session.*)."""

    cookie_name: str = DEFAULT_COOKIE_NAME
    root: str = DEFAULT_ROOT
    store: str = "memory"
    ttl: int = 1800
    redis_url: str = "redis://localhost:6379/0"
    http_only: bool = True
    secure: bool = False
    same_site: str = ""

    def customize_cookie(self, cookie: SetCookie) -> None:
        """Apply the configured cookie attributes."""
        cookie.http_only = self.http_only
        cookie.secure = self.secure
        if self.same_site:
            cookie.same_site = cast(SameSite, self.same_site.lower())


def build_store(properties: SessionProperties) -> SessionStore:
    """Create the store selected by ``properties.store``."""
    if properties.store == "memory":
        return InMemorySessionStore(ttl=properties.ttl)
    if properties.store == "redis":
        import redis.asyncio as aioredis

        from scopedsession.session.adapters.redis import RedisSessionStore

        client = aioredis.from_url(properties.redis_url)  # type: ignore[no-untyped-call,unused-ignore]
        return RedisSessionStore(client=client, ttl=properties.ttl)
    raise ConfigurationException(f"Unknown session store {properties.store!r}", option="store")


def session_manager_from_config(config: Config, logging_port: LoggingPort | None = None) -> SessionManager:
    """Bind ``scopedsession.session.*`` and build a ready SessionManager.

    When the config carries a ``scopedsession.logging`` section it is applied
    through *logging_port* (a :class:`StructlogAdapter` by default) first.
    """
    if config.get_section("scopedsession.logging"):
        (logging_port or StructlogAdapter()).configure(config)
    properties = config.bind(SessionProperties)
    return SessionManager.from_properties(properties, store=build_store(properties))
