"""scopedsession — request-scoped server-side sessions with key rotation."""

from scopedsession.session import (
    ScopedSession,
    Session,
    SessionData,
    SessionFilter,
    SessionKey,
    SessionManager,
    SessionStore,
    session_manager_from_config,
)

__version__ = "0.1.0"

__all__ = [
    "ScopedSession",
    "Session",
    "SessionData",
    "SessionFilter",
    "SessionKey",
    "SessionManager",
    "SessionStore",
    "session_manager_from_config",
]
