"""View protocol and the template-backed base view.

Views are opaque to the shell: it only asks the active one to render,
and tells a view when it becomes active for a given path.
"""

from typing import Any, Protocol, runtime_checkable

from kida import Environment

from shelter.routing.route import RouteMatch
from shelter.templating import render


@runtime_checkable
class View(Protocol):
    """Anything the shell can display in a view slot.

    Views may also define ``on_activate(match: RouteMatch)``; the router
    calls it each time the view becomes active for a new path.
    """

    def render(self, env: Environment) -> str: ...


class TemplateView:
    """A view rendered from one kida template.

    Subclasses set ``template_name`` and put per-path state in
    ``context`` from ``on_activate``.
    """

    template_name: str = ""

    def __init__(self, template_name: str | None = None, **context: Any) -> None:
        if template_name is not None:
            self.template_name = template_name
        self.context: dict[str, Any] = context

    def on_activate(self, match: RouteMatch) -> None:  # noqa: ARG002
        """Hook for subclasses; the default view ignores the path."""

    def render(self, env: Environment) -> str:
        return render(env, self.template_name, **self.context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.template_name!r})"
