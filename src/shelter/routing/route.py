"""ViewRoute, ViewSlot and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ViewSlot:
    """One entry in the fixed, ordered view collection.

    Created once per session when the shell initializes, never
    reordered or destroyed before the session ends.
    """

    index: int
    path: str
    view: Any


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    path: str
    index: int
    route_path: str

    @property
    def subpath(self) -> str:
        """The part of the path below the matched route, without leading slash."""
        return self.path[len(self.route_path) :].lstrip("/")


@dataclass(frozen=True, slots=True)
class ViewRoute:
    """A registered view: its path and the factory that builds it per session.

    Created during app setup, compiled into the route table at freeze time.
    """

    path: str
    factory: Callable[..., Any]
    menu_label: str | None = None  # Message key; listed in the navbar when set
