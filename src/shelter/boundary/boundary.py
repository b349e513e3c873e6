"""Exception boundary for one session.

Every inbound event goes through ``ExceptionBoundary.dispatch``. A failure
while processing one event never escapes to the transport and never
leaves the session half-rendered: the outcome is either normal completion,
the domain error's own message, or a fixed generic message. The
original message of an internal fault reaches the log sink only.
"""

import html
import logging
from collections.abc import Callable
from typing import Any, Protocol

from shelter.boundary.outcomes import (
    Completed,
    DomainFailure,
    InternalFault,
    Outcome,
    as_outcome,
    classify,
)
from shelter.config import INTERNAL_ERROR_MESSAGE

logger = logging.getLogger("shelter.ui")


class ErrorSurface(Protocol):
    """Where the boundary puts its single error panel."""

    def show_error(self, message: str) -> None: ...

    def show_plain_error(self, message: str) -> None: ...


def default_error_panel(message: str) -> str:
    """Minimal HTML error panel, used when the error template itself fails."""
    return f'<div class="shelter-error alert alert-danger">{html.escape(message)}</div>'


class ExceptionBoundary:
    """Runs event processing and turns every failure into an error panel.

    Usage::

        boundary = ExceptionBoundary(process_event, display)
        outcome = boundary.dispatch(PathChanged("/tos"))

    ``process`` is the normal event processing. It may raise, or return a
    ``DomainFailure`` / ``InternalFault`` explicitly.
    """

    __slots__ = ("_internal_error_message", "_log", "_process", "_surface")

    def __init__(
        self,
        process: Callable[[Any], object],
        surface: ErrorSurface,
        *,
        internal_error_message: str = INTERNAL_ERROR_MESSAGE,
        log: logging.Logger | None = None,
    ) -> None:
        self._process = process
        self._surface = surface
        self._internal_error_message = internal_error_message
        self._log = log or logger

    def dispatch(self, event: Any) -> Outcome:
        """Process *event*. Never raises ``Exception``.

        Returns the outcome so the caller can tell what was displayed.
        """
        try:
            outcome = as_outcome(self._process(event))
        except Exception as exc:
            outcome = classify(exc)

        match outcome:
            case Completed():
                pass
            case DomainFailure(message=message):
                self._log.warning("Caught an UI exception: %s", message)
                self.display_error(message)
            case InternalFault(message=message, exc=cause):
                self._log.error("Caught exception: %s", message, exc_info=cause)
                # The original message may carry internals: it stays in the log.
                self.display_error(self._internal_error_message)
        return outcome

    def display_error(self, message: str) -> None:
        """Replace everything on display with a single error panel."""
        try:
            self._surface.show_error(message)
        except Exception:
            self._log.exception("Cannot render error panel, using plain fallback")
            self._surface.show_plain_error(message)
