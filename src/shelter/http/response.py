"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from urllib.parse import quote

# Characters allowed unescaped in a URL header value; "%" keeps existing escapes.
_URL_SAFE = "/:?#[]@!$&'()*+,;=%~"


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive attached to a Response."""

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    httponly: bool = True
    samesite: str = "lax"

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={self.value}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_cookie(self, name: str, value: str, **options: object) -> Response:
        """Return a new Response with an additional Set-Cookie."""
        return replace(self, cookies=(*self.cookies, SetCookie(name, value, **options)))

    def with_hx_replace_url(self, url: str) -> Response:
        """Replace the current URL in the browser location bar without a history entry.

        Sets the ``HX-Replace-Url`` response header. Non-ASCII characters
        are percent-encoded so the value is always a valid header.
        """
        return self.with_header("HX-Replace-Url", quote(url, safe=_URL_SAFE))

    def with_hx_push_url(self, url: str) -> Response:
        """Push a URL into the browser history stack.

        Sets the ``HX-Push-Url`` response header, percent-encoded.
        """
        return self.with_header("HX-Push-Url", quote(url, safe=_URL_SAFE))

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive), or None."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
