"""Logging port and its structlog adapter."""

from scopedsession.logging.port import LoggingPort
from scopedsession.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
