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
"""Session — cookie-keyed server-side sessions with per-request scope.

Import concrete store types from the adapter package::

    from scopedsession.session.adapters.memory import InMemorySessionStore
    from scopedsession.session.adapters.redis import RedisSessionStore
"""

from scopedsession.session.cookie import SetCookie, http_only
from scopedsession.session.data import SessionData
from scopedsession.session.filter import SessionFilter
from scopedsession.session.key import SessionKey
from scopedsession.session.manager import SessionManager
from scopedsession.session.ports.outbound import SessionStore
from scopedsession.session.properties import SessionProperties, session_manager_from_config
from scopedsession.session.scoped import ScopedSession, SessionCell
from scopedsession.session.session import Session

__all__ = [
    "ScopedSession",
    "Session",
    "SessionCell",
    "SessionData",
    "SessionFilter",
    "SessionKey",
    "SessionManager",
    "SessionProperties",
    "SessionStore",
    "SetCookie",
    "http_only",
    "session_manager_from_config",
]
