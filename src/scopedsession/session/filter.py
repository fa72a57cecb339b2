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
"""SessionFilter — runs the rest of the filter chain inside a session scope."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from scopedsession.session.manager import SessionManager
from scopedsession.session.scoped import ScopedSession
from scopedsession.web.filters import OncePerRequestFilter
from scopedsession.web.ports.filter import CallNext


class SessionFilter(OncePerRequestFilter):
    """Applies :meth:`ScopedSession.wrap` to every matching request.

    Endpoints and later filters can use ``ScopedSession.get/set/update``;
    the response leaves with a rotated session cookie.
    """

    def __init__(
        self,
        manager: SessionManager,
        url_patterns: Iterable[str] | None = None,
        exclude_patterns: Iterable[str] | None = None,
    ) -> None:
        self._manager = manager
        if url_patterns is not None:
            self.url_patterns = list(url_patterns)
        if exclude_patterns is not None:
            self.exclude_patterns = list(exclude_patterns)

    @property
    def manager(self) -> SessionManager:
        return self._manager

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        return await ScopedSession.wrap(self._manager, call_next)(request)
