"""The root display surface of one session.

Holds either the main layout (navbar plus the active view) or a single
error panel, never a mix. Content is rendered while an event is being
processed, so rendering failures fall inside the exception boundary;
``page()`` and ``fragment()`` only wrap the already-rendered body.
"""

from collections.abc import Callable
from dataclasses import dataclass

from kida import Environment

from shelter.boundary.boundary import default_error_panel
from shelter.routing.table import RouteTable
from shelter.templating import markup, render


@dataclass(frozen=True, slots=True)
class MenuItem:
    """One navbar entry."""

    path: str
    label: str
    active: bool = False


class Display:
    """Session root surface.

    Usage::

        display = Display(env, table)
        display.show_main(view_html, current_path="/tos")
        display.show_error("Share not found")   # replaces everything
        html = display.page()
    """

    __slots__ = ("_body", "_clear_listeners", "_env", "_error", "_table")

    def __init__(self, env: Environment, table: RouteTable) -> None:
        self._env = env
        self._table = table
        self._body: str = ""
        self._error: str | None = None
        self._clear_listeners: list[Callable[[], None]] = []

    # -- State --

    @property
    def body(self) -> str:
        """The rendered body: main layout, error panel, or empty."""
        return self._body

    @property
    def error(self) -> str | None:
        """The message of the displayed error panel, if one is shown."""
        return self._error

    @property
    def has_error(self) -> bool:
        return self._error is not None

    def on_clear(self, listener: Callable[[], None]) -> None:
        """Call *listener* whenever the display is cleared."""
        self._clear_listeners.append(listener)

    # -- Mutation --

    def clear(self) -> None:
        """Remove all displayed content."""
        self._body = ""
        self._error = None
        for listener in tuple(self._clear_listeners):
            listener()

    def show_main(self, contents: str, *, current_path: str) -> None:
        """Display the main layout around the rendered active view."""
        if self._error is not None:
            return
        menu = [
            MenuItem(route.path, route.menu_label, route.path == current_path)
            for route in self._table
            if route.menu_label is not None
        ]
        self._body = render(
            self._env,
            "main.html",
            contents=markup(contents),
            menu=menu,
            default_path=self._table.default_path,
        )

    def show_error(self, message: str) -> None:
        """Replace all displayed content with the error template."""
        self.clear()
        self._error = message
        self._body = render(self._env, "error.html", error=message)

    def show_plain_error(self, message: str) -> None:
        """Replace all displayed content with a template-free error panel."""
        self.clear()
        self._error = message
        self._body = default_error_panel(message)

    # -- Output --

    def page(self, *, replace_url: str | None = None) -> str:
        """The full HTML page around the current body."""
        return render(self._env, "page.html", body=markup(self._body), replace_url=replace_url)

    def fragment(self) -> str:
        """The swappable shell element, for htmx requests."""
        return render(self._env, "fragment.html", body=markup(self._body))
