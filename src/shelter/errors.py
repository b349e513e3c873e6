"""Shelter exception hierarchy.

Shared across the route table, router, views, and the exception boundary
so every module raises and catches the same types.
"""


class ShelterError(Exception):
    """Base for all shelter-specific errors."""


class ConfigurationError(ShelterError):
    """Raised when the shell configuration is invalid.

    Only raised at startup, typically from ``ShellApp._freeze()`` or
    ``RouteTable.build()``. Never caught by the exception boundary.
    """


class ShareError(ShelterError):
    """A domain error whose message is safe to show to the user.

    Raised by views and application logic for expected failure
    conditions. The exception boundary displays the message verbatim.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ShareNotFound(ShareError):  # noqa: N818
    """The requested share does not exist."""

    def __init__(self, message: str = "Share not found") -> None:
        super().__init__(message)


class ShareExpired(ShareError):  # noqa: N818
    """The requested share existed but is no longer available."""

    def __init__(self, message: str = "Share expired") -> None:
        super().__init__(message)


class InvalidInput(ShareError):  # noqa: N818
    """User-supplied input was rejected."""

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message)
