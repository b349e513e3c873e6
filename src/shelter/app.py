"""Shelter application class.

Mutable during setup (view registration, lifecycle hooks).
Frozen at runtime when app.run(), __call__() or create_session() is first
invoked: the route table and template environment are built once and
shared read-only by every session.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from kida import Environment

from shelter._internal.asgi import Receive, Scope, Send
from shelter.config import ShellConfig
from shelter.errors import ConfigurationError
from shelter.http.request import Request
from shelter.messages import Messages
from shelter.routing.route import ViewRoute
from shelter.routing.table import RouteTable
from shelter.server.handler import handle_request
from shelter.server.sessions import SessionStore
from shelter.shell import ShellController
from shelter.templating import create_environment

logger = logging.getLogger("shelter.ui")


class ShellApp:
    """The shelter application.

    Usage::

        app = ShellApp.with_default_views(ShellConfig(debug=True))

        @app.view("/about", menu_label="msg-about")
        class About(TemplateView):
            template_name = "about.html"

        app.run()

    Thread safety:
        Setup is single-threaded (decorators at import time). The freeze
        transition uses a Lock + double-check so exactly one thread builds
        the shared route table and template environment.
    """

    __slots__ = (
        "_custom_kida_env",
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_pending_views",
        "_sessions",
        "_shutdown_hooks",
        "_startup_hooks",
        "_table",
        "config",
    )

    def __init__(
        self,
        config: ShellConfig | None = None,
        *,
        views: Iterable[ViewRoute] = (),
        kida_env: Environment | None = None,
    ) -> None:
        self.config: ShellConfig = config or ShellConfig()
        self._pending_views: list[ViewRoute] = list(views)
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._custom_kida_env: Environment | None = kida_env

        # Compiled state, set during _freeze()
        self._table: RouteTable | None = None
        self._kida_env: Environment | None = None
        self._sessions: SessionStore | None = None

    @classmethod
    def with_default_views(cls, config: ShellConfig | None = None) -> ShellApp:
        """Create an app with the file-sharing views registered."""
        from shelter.views.share import DEFAULT_VIEWS

        return cls(config, views=DEFAULT_VIEWS)

    # -- View registration --

    def add_view(
        self,
        path: str,
        factory: Callable[..., Any],
        *,
        menu_label: str | None = None,
    ) -> None:
        """Register a view. Registration order is slot order.

        Args:
            path: Route path. The view is shown for this path and every
                path below it (``/share-edit`` covers ``/share-edit/abc``).
            factory: Builds the view once per session. May accept the
                session's ``ShellController`` as its only argument.
            menu_label: Message key; when set the view is listed in the navbar.
        """
        self._check_not_frozen()
        self._pending_views.append(ViewRoute(path, factory, menu_label))

    def view(
        self,
        path: str,
        *,
        menu_label: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a view factory via decorator."""

        def decorator(factory: Callable[..., Any]) -> Callable[..., Any]:
            self.add_view(path, factory, menu_label=menu_label)
            return factory

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Compiled state --

    @property
    def route_table(self) -> RouteTable:
        self._ensure_frozen()
        assert self._table is not None
        return self._table

    @property
    def sessions(self) -> SessionStore:
        self._ensure_frozen()
        assert self._sessions is not None
        return self._sessions

    # -- Sessions --

    def create_session(
        self,
        path: str = "",
        *,
        log: logging.Logger | None = None,
    ) -> ShellController:
        """Create and initialize the root controller for a new session.

        The controller starts on *path*; unmatched paths fall back to the
        default view.
        """
        self._ensure_frozen()
        assert self._table is not None
        assert self._kida_env is not None
        shell = ShellController(self._table, self._kida_env, self.config, path=path, log=log)
        shell.initialize()
        return shell

    def _create_session_for(self, request: Request) -> ShellController:
        logger.info(
            "Client address = %s, UserAgent = '%s', Locale = %s, path = '%s'",
            request.client_address,
            request.user_agent,
            request.locale,
            request.path,
        )
        return self.create_session(request.path)

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and start serving requests."""
        self._ensure_frozen()

        from shelter.server.run import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._sessions is not None

        await handle_request(
            scope,
            receive,
            send,
            create_shell=self._create_session_for,
            sessions=self._sessions,
            config=self.config,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so configuration errors abort startup
        before the first request, then runs the registered hooks.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    for hook in self._startup_hooks:
                        result = hook()
                        if inspect.isawaitable(result):
                            await result
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    result = hook()
                    if inspect.isawaitable(result):
                        await result
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock. Raises
        ``ConfigurationError`` on any invalid configuration.
        """
        # 1. Route table (validates default path and route disjointness)
        table = RouteTable.build(
            self._pending_views,
            self.config.default_path,
            strict=self.config.strict_routes,
        )

        # 2. Custom terms of service must exist before any session reads it
        tos_custom = self.config.tos_custom
        if tos_custom is not None and not Path(tos_custom).is_file():
            msg = f"Custom terms of service file not found: {tos_custom}"
            raise ConfigurationError(msg)

        # 3. Template environment
        if self._custom_kida_env is not None:
            kida_env = self._custom_kida_env
            kida_env.add_global("tr", Messages.for_config(self.config))
        else:
            kida_env = create_environment(self.config)

        self._table = table
        self._kida_env = kida_env
        self._sessions = SessionStore(self.config.max_sessions)
        self._frozen = True

        logger.debug("Shell frozen with routes %s, default %r", table.paths, table.default_path)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register views and hooks before calling app.run()."
            )
            raise ConfigurationError(msg)
