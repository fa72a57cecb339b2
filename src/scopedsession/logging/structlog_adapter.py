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
"""StructlogAdapter — renders session events through structlog."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any

import structlog
from structlog.types import EventDict, WrappedLogger

from scopedsession.core.config import Config, config_properties

_LOGGING_PREFIX = "scopedsession.logging"

# Event fields that may carry a live session key.
SENSITIVE_FIELDS = frozenset({"cookie", "cookies", "set_cookie", "session_key"})
REDACTED = "[redacted]"


@config_properties(prefix=_LOGGING_PREFIX)
@dataclass
class LoggingProperties:
    """Log output settings (scopedsession.logging.*)."""

    format: str = "console"
    redact_session_keys: bool = True


def redact_session_keys(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """structlog processor that masks fields which could leak a session key."""
    for name in SENSITIVE_FIELDS.intersection(event_dict):
        event_dict[name] = REDACTED
    return event_dict


def build_processors(properties: LoggingProperties) -> list[structlog.types.Processor]:
    """Assemble the processor chain for *properties*."""
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if properties.redact_session_keys:
        processors.append(redact_session_keys)
    if properties.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


class StructlogAdapter:
    """Configures structlog and stdlib levels from a :class:`Config`.

    ``scopedsession.logging.level.root`` sets the root level; any other key
    under ``scopedsession.logging.level`` names a logger, e.g.
    ``scopedsession.session: DEBUG`` to see rotation events.
    """

    def __init__(self) -> None:
        self.properties = LoggingProperties()
        self.levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        self.properties = config.bind(LoggingProperties)
        self.properties.format = self.properties.format.lower()
        section = config.get_section(f"{_LOGGING_PREFIX}.level")
        levels = {name: str(level).upper() for name, level in section.items()}
        root_level = levels.pop("root", "INFO")
        self.levels = levels

        structlog.configure(
            processors=build_processors(self.properties),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_level(root_level), force=True)
        for name, level in levels.items():
            logging.getLogger(name).setLevel(_level(level))

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)
