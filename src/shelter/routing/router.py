"""Per-session path router.

Keeps the active view index consistent with the session's navigation
path. Unmatched paths are not errors: the router rewrites the path to
the default route with a history-replacing navigation.
"""

import logging
from collections.abc import Sequence

from shelter.navigation import Navigation
from shelter.routing.route import RouteMatch, ViewSlot
from shelter.routing.table import RouteTable

logger = logging.getLogger("shelter.ui")


class PathRouter:
    """Single-active-view router bound to one session.

    Usage::

        router = PathRouter(table, slots, navigation)
        navigation.connect(router.on_path_changed)
        router.initial_dispatch()
        router.active_index  # -> index of the slot for the startup path
    """

    __slots__ = ("_active_index", "_active_path", "_navigation", "_slots", "_table")

    def __init__(
        self,
        table: RouteTable,
        slots: Sequence[ViewSlot],
        navigation: Navigation,
    ) -> None:
        if len(slots) != len(table):
            msg = f"Route table has {len(table)} routes but {len(slots)} view slots were given."
            raise ValueError(msg)
        self._table = table
        self._slots: tuple[ViewSlot, ...] = tuple(slots)
        self._navigation = navigation
        # Index is valid from construction on; initial_dispatch() settles it.
        self._active_index: int = table.default_index
        self._active_path: str | None = None

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_slot(self) -> ViewSlot:
        return self._slots[self._active_index]

    @property
    def slots(self) -> tuple[ViewSlot, ...]:
        return self._slots

    def initial_dispatch(self) -> None:
        """Select the view for the startup navigation path."""
        self.on_path_changed(self._navigation.path)

    def on_path_changed(self, current_path: str) -> None:
        """Switch to the view registered for *current_path*.

        Falls back to the default path, replacing the history entry, when
        no route matches.
        """
        logger.debug("Internal path changed to %r", current_path)

        match = self._table.match(current_path)
        if match is not None:
            self._activate(match)
            return

        default_path = self._table.default_path
        logger.debug("No view for %r, redirecting to %r", current_path, default_path)
        self._navigation.set_path(default_path, replace=True, emit=False)
        default_match = self._table.match(default_path)
        assert default_match is not None  # guaranteed by RouteTable.build()
        self._activate(default_match)

    def _activate(self, match: RouteMatch) -> None:
        if match.index == self._active_index and match.path == self._active_path:
            return
        self._active_index = match.index
        self._active_path = match.path

        # Views may read path details (e.g. a share id) when they become active.
        # Failures propagate to the exception boundary.
        on_activate = getattr(self._slots[match.index].view, "on_activate", None)
        if on_activate is not None:
            on_activate(match)
