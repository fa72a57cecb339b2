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
"""Tests for Config loading, env overrides and dataclass binding."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from scopedsession.core.config import Config, config_properties
from scopedsession.kernel.exceptions import ConfigurationException


@config_properties(prefix="scopedsession.sample")
@dataclass
class SampleProperties:
    name: str = "default"
    port: int = 8000
    ratio: float = 0.5
    enabled: bool = False


class TestConfigGet:
    def test_dot_notation(self):
        config = Config({"scopedsession": {"session": {"root": "/app"}}})
        assert config.get("scopedsession.session.root") == "/app"

    def test_missing_key_returns_default(self):
        config = Config({})
        assert config.get("scopedsession.session.root") is None
        assert config.get("scopedsession.session.root", "/") == "/"

    def test_env_var_overrides_file_value(self, monkeypatch):
        monkeypatch.setenv("SCOPEDSESSION_SESSION_COOKIE_NAME", "from_env")
        config = Config({"scopedsession": {"session": {"cookie-name": "from_file"}}})
        assert config.get("scopedsession.session.cookie-name") == "from_env"

    def test_get_section(self):
        config = Config({"scopedsession": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("scopedsession.logging.level") == {"root": "DEBUG"}
        assert config.get_section("scopedsession.missing") == {}


class TestConfigFromFile:
    def test_yaml(self, tmp_path):
        path = tmp_path / "session.yaml"
        path.write_text("scopedsession:\n  session:\n    cookie-name: yaml_sid\n")
        assert Config.from_file(path).get("scopedsession.session.cookie-name") == "yaml_sid"

    def test_toml(self, tmp_path):
        path = tmp_path / "session.toml"
        path.write_text('[scopedsession.session]\ncookie-name = "toml_sid"\n')
        assert Config.from_file(path).get("scopedsession.session.cookie-name") == "toml_sid"

    def test_missing_file_is_empty(self, tmp_path):
        assert Config.from_file(tmp_path / "absent.yaml").to_dict() == {}


class TestConfigBind:
    def test_defaults_when_section_missing(self):
        props = Config({}).bind(SampleProperties)
        assert props == SampleProperties()

    def test_string_values_are_coerced(self):
        config = Config(
            {"scopedsession": {"sample": {"name": "x", "port": "9000", "ratio": "0.25", "enabled": "yes"}}}
        )
        assert config.bind(SampleProperties) == SampleProperties("x", 9000, 0.25, True)

    def test_env_var_overrides_field(self, monkeypatch):
        monkeypatch.setenv("SCOPEDSESSION_SAMPLE_PORT", "7000")
        assert Config({}).bind(SampleProperties).port == 7000

    def test_invalid_number_rejected(self):
        config = Config({"scopedsession": {"sample": {"port": "eighty"}}})
        with pytest.raises(ConfigurationException):
            config.bind(SampleProperties)

    def test_undecorated_class_rejected(self):
        @dataclass
        class Plain:
            value: int = 0

        with pytest.raises(ConfigurationException):
            Config({}).bind(Plain)
