"""Shared fixtures: a small route table, sessions, and recording views."""

from collections.abc import Callable

import pytest
from kida import DictLoader, Environment

from shelter.config import ShellConfig
from shelter.messages import Messages
from shelter.navigation import Navigation
from shelter.routing.route import RouteMatch, ViewRoute, ViewSlot
from shelter.routing.table import RouteTable
from shelter.templating import create_environment

SHARE_PATHS = ("/share-create", "/share-created", "/share-download", "/share-edit", "/tos")


class RecordingView:
    """A view that remembers every activation and renders its own name."""

    def __init__(self, name: str = "view") -> None:
        self.name = name
        self.activations: list[RouteMatch] = []

    def on_activate(self, match: RouteMatch) -> None:
        self.activations.append(match)

    def render(self, env: Environment) -> str:  # noqa: ARG002
        return f'<div class="recording">{self.name}</div>'


@pytest.fixture
def paths() -> tuple[str, ...]:
    """Registration order of the default file-sharing routes."""
    return SHARE_PATHS


@pytest.fixture
def make_table() -> Callable[..., RouteTable]:
    """Build a table of recording views; defaults to the file-sharing paths."""

    def build(
        paths: tuple[str, ...] = SHARE_PATHS,
        default_path: str = "/share-create",
        *,
        strict: bool = True,
    ) -> RouteTable:
        return RouteTable.build(
            [ViewRoute(path, RecordingView) for path in paths],
            default_path,
            strict=strict,
        )

    return build


@pytest.fixture
def make_slots() -> Callable[[RouteTable], list[ViewSlot]]:
    """One fresh recording view per route, named after its path."""

    def build(table: RouteTable) -> list[ViewSlot]:
        return [
            ViewSlot(index=i, path=route.path, view=RecordingView(route.path))
            for i, route in enumerate(table)
        ]

    return build


@pytest.fixture
def table(make_table) -> RouteTable:
    return make_table()


@pytest.fixture
def navigation() -> Navigation:
    return Navigation("")


@pytest.fixture
def env() -> Environment:
    """The real package templates."""
    return create_environment(ShellConfig())


@pytest.fixture
def dict_env() -> Environment:
    """In-memory templates for display tests that need to break rendering."""
    env = Environment(
        loader=DictLoader(
            {
                "main.html": "<main>{{ contents }}</main>",
                "error.html": "<p class=\"err\">{{ error }}</p>",
                "page.html": "<html>{{ body }}</html>",
                "fragment.html": "<div id=\"shell\">{{ body }}</div>",
            }
        ),
        autoescape=True,
    )
    env.add_global("tr", Messages())
    return env
