"""Web — framework-agnostic filter contracts and the Starlette filter chain."""

from scopedsession.web.filters import OncePerRequestFilter
from scopedsession.web.ports.filter import CallNext, Handler, WebFilter

__all__ = ["CallNext", "Handler", "OncePerRequestFilter", "WebFilter"]
