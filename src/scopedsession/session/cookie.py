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
"""Set-Cookie construction and parsing for the session cookie.

Formatting and parsing both go through :mod:`http.cookies`, the same
machinery Starlette's ``Response.set_cookie`` uses, so headers written by
the session manager are always readable by it.
"""

from __future__ import annotations

import http.cookies
from dataclasses import dataclass
from typing import Literal

SameSite = Literal["lax", "strict", "none"]

SET_COOKIE_HEADER = "set-cookie"


@dataclass
class SetCookie:
    """Mutable description of one outgoing ``Set-Cookie`` header.

    The session manager creates it with name, value and path, hands it to
    the configured customizer, and then renders it with :meth:`header_value`.
    """

    name: str
    value: str
    path: str | None = "/"
    domain: str | None = None
    max_age: int | None = None
    secure: bool = False
    http_only: bool = False
    same_site: SameSite | None = None

    def header_value(self) -> str:
        """Render the header value (everything after ``Set-Cookie:``)."""
        cookie: http.cookies.BaseCookie[str] = http.cookies.SimpleCookie()
        cookie[self.name] = self.value
        morsel = cookie[self.name]
        if self.max_age is not None:
            morsel["max-age"] = self.max_age
        if self.path is not None:
            morsel["path"] = self.path
        if self.domain is not None:
            morsel["domain"] = self.domain
        if self.secure:
            morsel["secure"] = True
        if self.http_only:
            morsel["httponly"] = True
        if self.same_site is not None:
            if self.same_site.lower() not in ("lax", "strict", "none"):
                raise ValueError(f"samesite must be 'lax', 'strict' or 'none', got {self.same_site!r}")
            morsel["samesite"] = self.same_site
        return cookie.output(header="").strip()


def http_only(cookie: SetCookie) -> None:
    """Default customizer: hide the session cookie from scripts."""
    cookie.http_only = True


def parse_set_cookie(header_value: str) -> dict[str, str]:
    """Return the ``name -> value`` pairs carried by one Set-Cookie header value.

    Unparsable input yields an empty dict.
    """
    cookie: http.cookies.BaseCookie[str] = http.cookies.SimpleCookie()
    try:
        cookie.load(header_value)
    except http.cookies.CookieError:
        return {}
    return {name: morsel.value for name, morsel in cookie.items()}
