"""Immutable HTTP request metadata.

The shell only needs the path, a few headers and the session cookie, so
the request is frozen metadata with no body access.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep:
            cookies[key.strip()] = value.strip()
    return cookies


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Header names are lower-cased once, in ``from_asgi``.
    """

    method: str
    path: str
    headers: Mapping[str, str]
    cookies: Mapping[str, str]
    client: tuple[str, int] | None = None

    @property
    def is_fragment(self) -> bool:
        """True if this is an htmx fragment request (HX-Request header)."""
        return self.headers.get("hx-request") == "true"

    @property
    def user_agent(self) -> str:
        return self.headers.get("user-agent", "")

    @property
    def locale(self) -> str:
        """The first language tag of Accept-Language, or an empty string."""
        accept = self.headers.get("accept-language", "")
        return accept.split(",", 1)[0].split(";", 1)[0].strip()

    @property
    def client_address(self) -> str:
        return self.client[0] if self.client else ""

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI http scope."""
        headers: dict[str, str] = {}
        for raw_name, raw_value in scope.get("headers", ()):
            # First value wins, as for a plain header lookup.
            headers.setdefault(raw_name.decode("latin-1").lower(), raw_value.decode("latin-1"))
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            cookies=parse_cookies(headers.get("cookie", "")),
            client=tuple(client) if client else None,
        )
