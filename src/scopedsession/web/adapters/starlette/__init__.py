"""Starlette adapter for the web filter chain."""

from scopedsession.web.adapters.starlette.filter_chain import WebFilterChainMiddleware

__all__ = ["WebFilterChainMiddleware"]
