"""Async test client for shelter applications.

Drives the ASGI interface directly (no HTTP involved) and keeps the
session cookie between requests, so fragment requests reach the same
session the way a browser's htmx requests would.
"""

from __future__ import annotations

import inspect
from typing import Any

from shelter.app import ShellApp
from shelter.http.request import parse_cookies
from shelter.http.response import Response


class TestClient:
    """Async test client for shelter applications.

    Usage::

        async with TestClient(app) as client:
            page = await client.get("/tos")             # new session
            frag = await client.fragment("/share-edit")  # same session
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("app", "cookies")

    def __init__(self, app: ShellApp) -> None:
        self.app = app
        self.cookies: dict[str, str] = {}

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        for hook in self.app._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result
        return self

    async def __aexit__(self, *args: object) -> None:
        for hook in self.app._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a full-page GET request (starts a new session)."""
        return await self.request("GET", path, headers=headers)

    async def fragment(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send an htmx fragment request (sets HX-Request header)."""
        return await self.request("GET", path, headers={"HX-Request": "true", **(headers or {})})

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        merged = dict(headers or {})
        if self.cookies and "cookie" not in {k.lower() for k in merged}:
            merged["cookie"] = "; ".join(f"{k}={v}" for k, v in self.cookies.items())

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": b"",
            "root_path": "",
            "headers": [
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in merged.items()
            ],
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        status = 200
        raw_headers: list[tuple[bytes, bytes]] = []
        body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal status, raw_headers
            if message["type"] == "http.response.start":
                status = message["status"]
                raw_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = "text/html; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in raw_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            elif name_str == "set-cookie":
                cookie_pair = value_str.split(";", 1)[0]
                self.cookies.update(parse_cookies(cookie_pair))
                extra_headers.append((name_str, value_str))
            elif name_str != "content-length":
                extra_headers.append((name_str, value_str))

        return Response(
            body=b"".join(body_parts),
            status=status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
