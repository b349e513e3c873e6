"""Per-session navigation state.

Holds the session's internal path, the path-changed signal, and the
record of path writes the shell requested. The transport layer reads
``pending`` after each event to tell the client whether to push or
replace a history entry.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger("shelter.ui")

PathListener = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class PathChange:
    """A path write requested by the shell.

    ``replace=True`` means history-replacing: the client must not create
    a new back-navigation entry for it.
    """

    path: str
    replace: bool = False


class Navigation:
    """The navigation path of one session.

    Usage::

        nav = Navigation("/tos")
        nav.connect(router.on_path_changed)
        nav.set_path("/share-create", replace=True)
        nav.pending  # -> PathChange("/share-create", replace=True)
    """

    __slots__ = ("_listeners", "_path", "_writes")

    def __init__(self, path: str = "") -> None:
        self._path = path
        self._listeners: list[PathListener] = []
        self._writes: list[PathChange] = []

    @property
    def path(self) -> str:
        """The current internal path."""
        return self._path

    def connect(self, listener: PathListener) -> None:
        """Call *listener* with the new path on every path change."""
        self._listeners.append(listener)

    def disconnect_all(self) -> None:
        """Drop every listener (the displayed views are gone)."""
        self._listeners.clear()

    def observe(self, path: str) -> None:
        """Record a path change reported by the client and emit the signal."""
        self._path = path
        self._emit(path)

    def set_path(self, path: str, *, replace: bool = False, emit: bool = True) -> None:
        """Request a path change from the server side.

        Records the write for the transport, then emits the signal if the
        path actually changed and *emit* is set.
        """
        self._writes.append(PathChange(path, replace))
        if path == self._path:
            return
        logger.debug("Setting internal path to %r (replace=%s)", path, replace)
        self._path = path
        if emit:
            self._emit(path)

    @property
    def writes(self) -> tuple[PathChange, ...]:
        """Every path write requested since the last ``take_pending()``."""
        return tuple(self._writes)

    @property
    def pending(self) -> PathChange | None:
        """The last path write requested since the last ``take_pending()``."""
        return self._writes[-1] if self._writes else None

    def take_pending(self) -> PathChange | None:
        """Return the pending write and clear the write record."""
        pending = self.pending
        self._writes.clear()
        return pending

    def _emit(self, path: str) -> None:
        for listener in tuple(self._listeners):
            listener(path)
