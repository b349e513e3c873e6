"""Inbound session events.

Every event the transport delivers to a session is one of these. The
exception boundary runs ``event.apply(shell)`` as normal processing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from shelter.shell import ShellController


class Event(Protocol):
    def apply(self, shell: ShellController) -> object: ...


@dataclass(frozen=True, slots=True)
class Initialize:
    """Build the views and select the one for the startup path."""

    def apply(self, shell: ShellController) -> object:
        return shell.build()


@dataclass(frozen=True, slots=True)
class PathChanged:
    """The client navigated to *path*."""

    path: str

    def apply(self, shell: ShellController) -> object:
        shell.navigation.observe(self.path)
        return None


@dataclass(frozen=True, slots=True)
class Action:
    """A user action handled by application code.

    The handler receives the session's shell and may raise, or return a
    ``DomainFailure`` / ``InternalFault`` explicitly.
    """

    handler: Callable[[ShellController], Any]
    name: str = ""

    def apply(self, shell: ShellController) -> object:
        return self.handler(shell)
