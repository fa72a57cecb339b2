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
"""ScopedSession — request-scoped access to the current session.

Each request handled through :meth:`ScopedSession.wrap` gets its own
:class:`SessionCell`, bound in a :mod:`contextvars` variable. Any code
running inside that request (nested calls, tasks it spawns, threads started
with ``asyncio.to_thread``) reaches the same cell through the static
accessors; concurrently handled requests never see each other's cells.

Usage::

    async def add_to_cart(request):
        ScopedSession.update(lambda d: d.with_value("cart_count", "1"))
        return PlainTextResponse("ok")

    handler = ScopedSession.wrap(manager, add_to_cart)
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog

from scopedsession.kernel.exceptions import SessionScopeException
from scopedsession.session.data import SessionData
from scopedsession.session.manager import SessionManager
from scopedsession.session.session import Session
from scopedsession.web.ports.filter import Handler

logger = structlog.get_logger("scopedsession.session")

_session_cell: ContextVar[SessionCell | None] = ContextVar("scopedsession_cell", default=None)


class SessionCell:
    """Mutable reference to one request's current :class:`Session`.

    :meth:`swap` is a compare-and-set loop: the transformation runs outside
    the lock and is retried if another writer got in first, so it must be
    free of side effects.
    """

    __slots__ = ("_lock", "_session")

    def __init__(self, session: Session) -> None:
        self._session = session
        self._lock = threading.Lock()

    def get(self) -> Session:
        return self._session

    def reset(self, session: Session) -> Session:
        with self._lock:
            self._session = session
        return session

    def swap(self, f: Callable[[Session], Session]) -> Session:
        while True:
            current = self._session
            updated = f(current)
            with self._lock:
                if self._session is current:
                    self._session = updated
                    return updated


class ScopedSession:
    """Static accessors for the session of the request being handled.

    ``get``, ``set``, ``update`` and ``current`` raise
    :class:`SessionScopeException` when no scope is active.
    """

    @staticmethod
    def _cell(operation: str) -> SessionCell:
        cell = _session_cell.get()
        if cell is None:
            raise SessionScopeException(operation)
        return cell

    @staticmethod
    def is_active() -> bool:
        return _session_cell.get() is not None

    @staticmethod
    def current() -> Session:
        """Return the whole active session, key included."""
        return ScopedSession._cell("current").get()

    @staticmethod
    def get() -> SessionData:
        return ScopedSession._cell("get").get().data

    @staticmethod
    def set(data: SessionData) -> None:
        """Replace the session data wholesale; the key is kept."""
        cell = ScopedSession._cell("set")
        # The key never changes within a scope, only the data does.
        cell.reset(Session(cell.get().key, data))

    @staticmethod
    def update(f: Callable[[SessionData], SessionData]) -> SessionData:
        """Atomically apply *f* to the session data and return the result.

        *f* may be called more than once under contention and must be pure.
        """
        return ScopedSession._cell("update").swap(lambda session: session.update(f)).data

    @staticmethod
    @contextmanager
    def scope(session: Session | None = None) -> Iterator[SessionCell]:
        """Bind a new cell holding *session* (or a fresh one) for the block.

        The previous binding, if any, is restored on exit.
        """
        cell = SessionCell(session if session is not None else Session())
        token = _session_cell.set(cell)
        try:
            yield cell
        finally:
            _session_cell.reset(token)

    @staticmethod
    def wrap(manager: SessionManager, handler: Handler) -> Handler:
        """Return a handler that runs *handler* inside a session scope.

        The session is loaded from the request cookie (or started fresh),
        exposed to *handler* through the static accessors, then persisted and
        its rotated cookie appended to the response. If *handler* raises or
        is cancelled nothing is written: the client keeps its previous,
        still valid cookie.
        """

        async def handle(request: Any) -> Any:
            session = await manager.read(request)
            with ScopedSession.scope(session) as cell:
                try:
                    response = await handler(request)
                except Exception as exc:
                    logger.debug("session_write_skipped", error_type=type(exc).__name__)
                    raise
                name, value = await manager.write(cell.get())

            response.raw_headers.append((name.encode("latin-1"), value.encode("latin-1")))
            return response

        return handle
