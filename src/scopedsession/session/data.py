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
"""SessionData — immutable key/value content of a session."""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class SessionData(Mapping[str, str]):
    """Immutable mapping of string keys to string values.

    Instances are never changed in place: :meth:`with_value` and
    :meth:`without` return new instances and leave the receiver untouched.
    Construction copies its input, so mutating the source mapping later has
    no effect.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data) if data else {}

    @classmethod
    def of(cls, data: Mapping[str, str]) -> SessionData:
        return cls(data)

    @classmethod
    def empty(cls) -> SessionData:
        return cls()

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def with_value(self, key: str, value: str) -> SessionData:
        """Return a copy with *key* set to *value*."""
        data = dict(self._data)
        data[key] = value
        return SessionData(data)

    def without(self, key: str) -> SessionData:
        """Return a copy with *key* removed (a no-op copy if it is absent)."""
        data = dict(self._data)
        data.pop(key, None)
        return SessionData(data)

    def as_dict(self) -> dict[str, str]:
        return dict(self._data)

    def __repr__(self) -> str:
        return f"SessionData({self._data!r})"
