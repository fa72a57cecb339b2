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
"""End-to-end tests for SessionFilter inside WebFilterChainMiddleware."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from scopedsession.kernel.exceptions import SessionStoreException
from scopedsession.session.adapters.memory import InMemorySessionStore
from scopedsession.session.cookie import parse_set_cookie
from scopedsession.session.data import SessionData
from scopedsession.session.filter import SessionFilter
from scopedsession.session.key import SessionKey
from scopedsession.session.manager import SessionManager
from scopedsession.session.scoped import ScopedSession
from scopedsession.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from scopedsession.web.filters import OncePerRequestFilter

COOKIE = "sid"


def _add_to_cart() -> None:
    ScopedSession.update(lambda d: d.with_value("cart_count", str(int(d.get("cart_count", "0")) + 1)))


async def add_to_cart(request: Request) -> PlainTextResponse:
    _add_to_cart()
    return PlainTextResponse("added")


async def show_cart(request: Request) -> JSONResponse:
    return JSONResponse(ScopedSession.get().as_dict())


def show_cart_sync(request: Request) -> JSONResponse:
    # Sync endpoints run in a worker thread that inherits the request context.
    return JSONResponse({"active": ScopedSession.is_active(), **ScopedSession.get().as_dict()})


async def boom(request: Request) -> PlainTextResponse:
    _add_to_cart()
    raise RuntimeError("handler failed")


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"session": ScopedSession.is_active()})


class SessionPeekFilter(OncePerRequestFilter):
    """Runs outside SessionFilter and inspects the session via the response."""

    def __init__(self, manager: SessionManager) -> None:
        self._manager = manager

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        session = await self._manager.read_response(response)
        response.headers["x-cart-count"] = session.data.get("cart_count", "0") if session else "none"
        return response


class FailingStore:
    async def read(self, key: SessionKey) -> SessionData | None:
        raise SessionStoreException("backend down", operation="read")

    async def write(self, key: SessionKey | None, data: SessionData) -> SessionKey:
        raise SessionStoreException("backend down", operation="write")


def _make_app(manager: SessionManager, *extra_filters) -> Starlette:
    return Starlette(
        routes=[
            Route("/cart/add", add_to_cart, methods=["POST"]),
            Route("/cart", show_cart),
            Route("/cart/sync", show_cart_sync),
            Route("/boom", boom),
            Route("/health", health),
        ],
        middleware=[
            Middleware(
                WebFilterChainMiddleware,
                filters=[*extra_filters, SessionFilter(manager, exclude_patterns=["/health"])],
            )
        ],
    )


def _session_cookie(response) -> str:
    values = response.headers.get_list("set-cookie")
    assert len(values) == 1
    return parse_set_cookie(values[0])[COOKIE]


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def manager(store) -> SessionManager:
    return SessionManager(store, cookie_name=COOKIE)


@pytest.fixture
def client(manager):
    with TestClient(_make_app(manager, SessionPeekFilter(manager))) as client:
        yield client


class TestSessionFilter:
    def test_request_without_cookie_gets_fresh_session_cookie(self, client):
        response = client.get("/cart")
        assert response.status_code == 200
        assert response.json() == {}
        assert "HttpOnly" in response.headers["set-cookie"]
        assert _session_cookie(response)

    def test_cart_scenario_persists_and_rotates(self, client, manager):
        first = client.post("/cart/add")
        first_key = _session_cookie(first)

        second = client.get("/cart")
        assert second.json() == {"cart_count": "1"}
        second_key = _session_cookie(second)
        assert second_key != first_key

    def test_rotated_cookie_resolves_through_manager(self, manager):
        with TestClient(_make_app(manager)) as client:
            key = _session_cookie(client.post("/cart/add"))

        session = asyncio.run(manager.read(SimpleNamespace(cookies={COOKIE: key})))
        assert session.data == SessionData.of({"cart_count": "1"})

    def test_counter_accumulates_across_requests(self, client):
        for _ in range(3):
            client.post("/cart/add")
        assert client.get("/cart").json() == {"cart_count": "3"}

    def test_replayed_cookie_is_rejected(self, manager):
        with TestClient(_make_app(manager)) as client:
            stale = _session_cookie(client.post("/cart/add"))
            client.post("/cart/add")

        with TestClient(_make_app(manager)) as replay:
            response = replay.get("/cart", headers={"cookie": f"{COOKIE}={stale}"})
        assert response.status_code == 200
        assert response.json() == {}

    def test_sync_endpoint_sees_request_scope(self, client):
        client.post("/cart/add")
        assert client.get("/cart/sync").json() == {"active": True, "cart_count": "1"}

    def test_outer_filter_reads_session_from_response(self, client):
        client.post("/cart/add")
        response = client.get("/cart")
        assert response.headers["x-cart-count"] == "1"

    def test_excluded_path_runs_without_session(self, client):
        response = client.get("/health")
        assert response.json() == {"session": False}
        assert "set-cookie" not in response.headers

    def test_handler_failure_keeps_previous_session(self, manager, store):
        with TestClient(_make_app(manager), raise_server_exceptions=False) as client:
            client.post("/cart/add")
            response = client.get("/boom")
            assert response.status_code == 500
            assert "set-cookie" not in response.headers
            assert client.get("/cart").json() == {"cart_count": "1"}
        assert len(store) == 1

    def test_store_outage_fails_the_request(self):
        manager = SessionManager(FailingStore(), cookie_name=COOKIE)
        with TestClient(_make_app(manager), raise_server_exceptions=False) as client:
            response = client.get("/cart", headers={"cookie": f"{COOKIE}=abc"})
        assert response.status_code == 500
