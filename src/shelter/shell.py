"""Per-session root controller.

One ShellController serves one session. It owns the session's navigation
state, display, path router, and exception boundary, and receives every
inbound event through ``notify()``. Components that need routing or
error display get an explicit reference to the controller; there is no
process-wide "current session" accessor.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from kida import Environment

from shelter.boundary.boundary import ExceptionBoundary
from shelter.boundary.outcomes import Outcome
from shelter.config import ShellConfig
from shelter.display import Display
from shelter.events import Event, Initialize
from shelter.navigation import Navigation, PathChange
from shelter.routing.route import ViewSlot
from shelter.routing.router import PathRouter
from shelter.routing.table import RouteTable


def create_view(factory: Callable[..., Any], shell: ShellController) -> Any:
    """Call a view factory, passing the shell if the factory accepts it.

    Factories may accept zero arguments or one (the session's shell).
    """
    try:
        params = inspect.signature(factory).parameters
    except (TypeError, ValueError):
        return factory()
    required = [
        p
        for p in params.values()
        if p.default is inspect.Parameter.empty
        and p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if required:
        return factory(shell)
    return factory()


class ShellController:
    """The root controller of one session.

    Usage::

        shell = ShellController(table, env, config, path="/tos")
        shell.initialize()
        shell.notify(PathChanged("/share-edit/abc"))
        html = shell.display.page()
    """

    __slots__ = (
        "_initialized",
        "_router",
        "boundary",
        "config",
        "display",
        "env",
        "navigation",
        "table",
    )

    def __init__(
        self,
        table: RouteTable,
        env: Environment,
        config: ShellConfig,
        *,
        path: str = "",
        log: logging.Logger | None = None,
    ) -> None:
        self.table = table
        self.env = env
        self.config = config
        self.navigation = Navigation(path)
        self.display = Display(env, table)
        self.boundary = ExceptionBoundary(
            self._process,
            self.display,
            internal_error_message=config.internal_error_message,
            log=log,
        )
        self._router: PathRouter | None = None
        self._initialized = False

        # Clearing the display tears down the views; navigation stops reaching them.
        self.display.on_clear(self.navigation.disconnect_all)

    # -- Public API --

    @property
    def router(self) -> PathRouter:
        """The session's path router. Available after ``initialize()``."""
        if self._router is None:
            msg = "Shell not initialized. Call initialize() first."
            raise RuntimeError(msg)
        return self._router

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> Outcome:
        """Build the views and display the one for the startup path.

        Runs inside the exception boundary, like any other event.
        """
        if self._initialized:
            msg = "Shell already initialized."
            raise RuntimeError(msg)
        self._initialized = True
        return self.boundary.dispatch(Initialize())

    def notify(self, event: Event) -> Outcome:
        """Process one inbound event. Never raises ``Exception``."""
        return self.boundary.dispatch(event)

    def display_error(self, message: str) -> None:
        """Replace everything on display with an error panel for *message*."""
        self.boundary.display_error(message)

    def take_path_change(self) -> PathChange | None:
        """Return and clear the path write requested while processing events."""
        return self.navigation.take_pending()

    # -- Event processing --

    def build(self) -> None:
        """Create the view slots and the router, then select the startup view."""
        slots = [
            ViewSlot(index=i, path=route.path, view=create_view(route.factory, self))
            for i, route in enumerate(self.table)
        ]
        self._router = PathRouter(self.table, slots, self.navigation)
        self.navigation.connect(self._router.on_path_changed)
        self._router.initial_dispatch()

    def _process(self, event: Event) -> object:
        result = event.apply(self)
        if self._router is not None and not self.display.has_error:
            self._refresh()
        return result

    def _refresh(self) -> None:
        slot = self.router.active_slot
        self.display.show_main(slot.view.render(self.env), current_path=self.navigation.path)

    def __repr__(self) -> str:
        return f"<ShellController path={self.navigation.path!r} initialized={self._initialized}>"
