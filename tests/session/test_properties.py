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
"""Tests for SessionProperties binding and the config-driven factories."""

from __future__ import annotations

import logging

import pytest

from scopedsession.core.config import Config
from scopedsession.kernel.exceptions import ConfigurationException
from scopedsession.session.adapters.memory import InMemorySessionStore
from scopedsession.session.adapters.redis import RedisSessionStore
from scopedsession.session.data import SessionData
from scopedsession.session.properties import SessionProperties, build_store, session_manager_from_config
from scopedsession.session.session import Session


class TestSessionProperties:
    def test_defaults(self):
        props = Config({}).bind(SessionProperties)
        assert props.cookie_name == "__session_cookie"
        assert props.root == "/"
        assert props.store == "memory"
        assert props.http_only is True

    def test_binds_kebab_case_keys(self):
        config = Config(
            {"scopedsession": {"session": {"cookie-name": "app_sid", "ttl": "60", "same-site": "Strict"}}}
        )
        props = config.bind(SessionProperties)
        assert props.cookie_name == "app_sid"
        assert props.ttl == 60
        assert props.same_site == "Strict"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SCOPEDSESSION_SESSION_SECURE", "true")
        props = Config({}).bind(SessionProperties)
        assert props.secure is True


class TestFactories:
    def test_memory_store_by_default(self):
        assert isinstance(build_store(SessionProperties()), InMemorySessionStore)

    def test_redis_store_when_selected(self):
        store = build_store(SessionProperties(store="redis", redis_url="redis://localhost:6399/0"))
        assert isinstance(store, RedisSessionStore)

    def test_unknown_store_rejected(self):
        with pytest.raises(ConfigurationException):
            build_store(SessionProperties(store="postgres"))

    @pytest.mark.asyncio
    async def test_manager_from_config_applies_cookie_settings(self):
        config = Config(
            {
                "scopedsession": {
                    "session": {
                        "cookie-name": "app_sid",
                        "root": "/shop",
                        "http-only": False,
                        "secure": True,
                        "same-site": "lax",
                    }
                }
            }
        )
        manager = session_manager_from_config(config)
        name, value = await manager.write(Session(data=SessionData.of({"a": "1"})))

        assert manager.cookie_name == "app_sid"
        assert value.startswith("app_sid=")
        assert "Path=/shop" in value
        assert "Secure" in value
        assert "SameSite=lax" in value
        assert "HttpOnly" not in value

    def test_invalid_cookie_name_rejected_at_startup(self):
        config = Config({"scopedsession": {"session": {"cookie-name": "bad name"}}})
        with pytest.raises(ConfigurationException):
            session_manager_from_config(config)

    def test_invalid_same_site_rejected_at_startup(self):
        config = Config({"scopedsession": {"session": {"same-site": "sometimes"}}})
        with pytest.raises(ConfigurationException):
            session_manager_from_config(config)


class RecordingLoggingPort:
    def __init__(self) -> None:
        self.configured: list[Config] = []

    def configure(self, config: Config) -> None:
        self.configured.append(config)


class TestLoggingWiring:
    def test_logging_section_is_applied(self):
        port = RecordingLoggingPort()
        config = Config({"scopedsession": {"logging": {"format": "json"}}})
        session_manager_from_config(config, logging_port=port)
        assert port.configured == [config]

    def test_no_logging_section_leaves_logging_alone(self):
        port = RecordingLoggingPort()
        session_manager_from_config(Config({}), logging_port=port)
        assert port.configured == []

    def test_default_adapter_sets_session_logger_level(self):
        config = Config({"scopedsession": {"logging": {"level": {"scopedsession.session": "debug"}}}})
        session_manager_from_config(config)
        assert logging.getLogger("scopedsession.session").level == logging.DEBUG
