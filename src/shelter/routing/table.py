"""Immutable route table.

Built once from the ordered view registry when the app freezes and
shared read-only by every session. All structural problems surface
here, at startup, as ``ConfigurationError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from shelter.errors import ConfigurationError
from shelter.routing.matching import path_matches, routes_overlap, validate_route_path
from shelter.routing.route import RouteMatch, ViewRoute

logger = logging.getLogger("shelter.ui")


class RouteTable:
    """Path to slot-index mapping, validated and frozen at construction.

    Usage::

        table = RouteTable.build(
            [ViewRoute("/share-create", ShareCreate), ViewRoute("/tos", TermsOfService)],
            default_path="/share-create",
        )
        table.match("/tos").index  # -> 1
    """

    __slots__ = ("_default_index", "_default_path", "_routes")

    def __init__(self, routes: Sequence[ViewRoute], default_path: str) -> None:
        self._routes: tuple[ViewRoute, ...] = tuple(routes)
        self._default_path = default_path
        self._default_index = -1  # Set by build() once the default path resolves

    @classmethod
    def build(
        cls,
        routes: Iterable[ViewRoute],
        default_path: str,
        *,
        strict: bool = True,
    ) -> RouteTable:
        """Validate *routes* and return a frozen table.

        Raises ``ConfigurationError`` when a route path is malformed or
        registered twice, when two routes overlap (``strict=True``), or when
        *default_path* does not resolve to a registered route.

        With ``strict=False`` overlapping routes are accepted and the
        first-registered route wins on lookup.
        """
        routes = tuple(routes)
        if not routes:
            msg = "No views registered. Register at least the default view."
            raise ConfigurationError(msg)

        seen: dict[str, int] = {}
        for index, route in enumerate(routes):
            problem = validate_route_path(route.path)
            if problem is not None:
                raise ConfigurationError(problem)
            if route.path in seen:
                msg = (
                    f"Duplicate route {route.path!r}: registered at positions "
                    f"{seen[route.path]} and {index}."
                )
                raise ConfigurationError(msg)
            for earlier_path, earlier_index in seen.items():
                if not routes_overlap(route.path, earlier_path):
                    continue
                if strict:
                    msg = (
                        f"Overlapping routes {earlier_path!r} and {route.path!r}: "
                        "route prefixes must be disjoint."
                    )
                    raise ConfigurationError(msg)
                logger.warning(
                    "Route %r overlaps %r; %r wins as first registered",
                    route.path,
                    earlier_path,
                    routes[earlier_index].path,
                )
            seen[route.path] = index

        table = cls(routes, default_path)
        match = table.match(default_path)
        if match is None:
            msg = (
                f"Default path {default_path!r} does not match any registered view. "
                f"Registered paths: {', '.join(table.paths)}"
            )
            raise ConfigurationError(msg)
        table._default_index = match.index
        return table

    # -- Lookup --

    def match(self, path: str) -> RouteMatch | None:
        """Return the first route *path* falls under, in registration order."""
        for index, route in enumerate(self._routes):
            if path_matches(path, route.path):
                return RouteMatch(path=path, index=index, route_path=route.path)
        return None

    # -- Introspection --

    @property
    def default_path(self) -> str:
        return self._default_path

    @property
    def default_index(self) -> int:
        return self._default_index

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(route.path for route in self._routes)

    @property
    def routes(self) -> tuple[ViewRoute, ...]:
        return self._routes

    def __getitem__(self, index: int) -> ViewRoute:
        return self._routes[index]

    def __iter__(self) -> Iterator[ViewRoute]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({list(self.paths)!r}, default_path={self._default_path!r})"
