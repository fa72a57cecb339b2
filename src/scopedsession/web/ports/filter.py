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
"""WebFilter protocol and handler type aliases.

Requests and responses are typed as ``Any`` here; the concrete Starlette
types stay inside the adapter layer and the session filter.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Protocol, runtime_checkable

# A request handler: takes a request, eventually returns a response.
Handler = Callable[[Any], Awaitable[Any]]

# The next step of a filter chain (another filter or the endpoint).
CallNext = Callable[..., Coroutine[Any, Any, Any]]


@runtime_checkable
class WebFilter(Protocol):
    """A step in the request pipeline run by ``WebFilterChainMiddleware``.

    A filter may inspect the request, delegate to ``call_next`` and then
    decorate the response it gets back (e.g. append a ``Set-Cookie`` header).
    """

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Run the filter and return the response."""
        ...

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` to bypass this filter for *request*."""
        ...
