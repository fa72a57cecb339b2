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
"""SessionManager — maps session cookies to stored sessions and back."""

from __future__ import annotations

import http.cookies
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from scopedsession.kernel.exceptions import ConfigurationException
from scopedsession.session.adapters.memory import InMemorySessionStore
from scopedsession.session.cookie import SET_COOKIE_HEADER, SetCookie, http_only, parse_set_cookie
from scopedsession.session.key import SessionKey
from scopedsession.session.ports.outbound import SessionStore
from scopedsession.session.session import Session

if TYPE_CHECKING:
    from scopedsession.session.properties import SessionProperties

logger = structlog.get_logger("scopedsession.session")

DEFAULT_COOKIE_NAME = "__session_cookie"
DEFAULT_ROOT = "/"

CookieCustomizer = Callable[[SetCookie], None]

# RFC 6265 cookie-name: an HTTP token.
_COOKIE_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class SessionManager:
    """Reads sessions from requests and writes them back as rotated cookies.

    Args:
        store: Where session data lives. Defaults to a new
            :class:`InMemorySessionStore`.
        root: Path attribute of the session cookie.
        cookie_name: Name of the session cookie.
        customize_cookie: Called with every outgoing :class:`SetCookie`
            after name, value and path are set. Defaults to :func:`http_only`.

    Raises:
        ConfigurationException: If any option is invalid. Options are
            checked here, never while a request is being handled.
    """

    def __init__(
        self,
        store: SessionStore | None = None,
        *,
        root: str = DEFAULT_ROOT,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        customize_cookie: CookieCustomizer = http_only,
    ) -> None:
        if store is None:
            store = InMemorySessionStore()
        elif not isinstance(store, SessionStore):
            raise ConfigurationException(
                f"store must implement SessionStore, got {type(store).__name__}", option="store"
            )
        if not isinstance(root, str) or not root.startswith("/"):
            raise ConfigurationException(f"root must be a path starting with '/', got {root!r}", option="root")
        if not isinstance(cookie_name, str) or not _COOKIE_NAME_RE.match(cookie_name):
            raise ConfigurationException(f"Invalid cookie name {cookie_name!r}", option="cookie_name")
        if not callable(customize_cookie):
            raise ConfigurationException("customize_cookie must be callable", option="customize_cookie")

        self._store = store
        self._root = root
        self._cookie_name = cookie_name
        self._customize_cookie = customize_cookie

        # Render a throwaway cookie so a broken customizer fails at startup.
        try:
            self._set_cookie_header(SessionKey.random())
        except (ValueError, TypeError, http.cookies.CookieError) as exc:
            raise ConfigurationException(
                f"customize_cookie produced an invalid cookie: {exc}", option="customize_cookie"
            ) from exc

    @classmethod
    def from_properties(
        cls, properties: SessionProperties, store: SessionStore | None = None
    ) -> SessionManager:
        """Build a manager from bound :class:`SessionProperties`."""
        return cls(
            store,
            root=properties.root,
            cookie_name=properties.cookie_name,
            customize_cookie=properties.customize_cookie,
        )

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def root(self) -> str:
        return self._root

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    async def read(self, request: Any) -> Session | None:
        """Resolve the session named by the request's session cookie.

        Returns ``None`` when the cookie is missing or the store does not
        know its value; both mean the caller should start a fresh session.
        """
        cookies = getattr(request, "cookies", None) or {}
        value = cookies.get(self._cookie_name)
        if not value:
            logger.debug("session_cookie_absent", cookie_name=self._cookie_name)
            return None
        return await self._resolve(SessionKey(value))

    async def read_response(self, response: Any) -> Session | None:
        """Resolve the session named by a ``Set-Cookie`` header already on *response*.

        Lets code that wraps handlers generically find the session a
        response is about to hand out, without the session being threaded
        through to it. Parsing matches :meth:`write`: same cookie name, same
        key format.
        """
        for name, value in response.raw_headers:
            if name.lower() != SET_COOKIE_HEADER.encode("latin-1"):
                continue
            cookies = parse_set_cookie(value.decode("latin-1"))
            if self._cookie_name in cookies:
                return await self._resolve(SessionKey(cookies[self._cookie_name]))
        return None

    async def write(self, session: Session) -> tuple[str, str]:
        """Persist *session* and return the ``Set-Cookie`` header carrying its new key.

        The store rotates the key, so *session* must be treated as consumed
        afterwards: its key no longer resolves to current data.
        """
        new_key = await self._store.write(session.key, session.data)
        logger.debug("session_rotated", cookie_name=self._cookie_name, entries=len(session.data))
        return SET_COOKIE_HEADER, self._set_cookie_header(new_key)

    async def _resolve(self, key: SessionKey) -> Session | None:
        data = await self._store.read(key)
        if data is None:
            logger.debug("session_cookie_unknown", cookie_name=self._cookie_name)
            return None
        logger.debug("session_resolved", cookie_name=self._cookie_name, entries=len(data))
        return Session(key, data)

    def _set_cookie_header(self, key: SessionKey) -> str:
        cookie = SetCookie(self._cookie_name, key.value, path=self._root)
        self._customize_cookie(cookie)
        return cookie.header_value()
