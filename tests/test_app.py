"""Tests for shelter.app — ShellApp registration, freezing, and lifespan."""

import asyncio
from typing import Any

import pytest
from kida import DictLoader, Environment

from shelter.app import ShellApp
from shelter.config import ShellConfig
from shelter.errors import ConfigurationError
from shelter.navigation import PathChange
from shelter.views.base import TemplateView


class StubView:
    def render(self, env) -> str:
        return "<p>stub</p>"


class TestRegistration:
    def test_default_views(self) -> None:
        app = ShellApp.with_default_views()
        assert app.route_table.paths == (
            "/share-create",
            "/share-created",
            "/share-download",
            "/share-edit",
            "/tos",
        )

    def test_view_decorator(self) -> None:
        app = ShellApp(ShellConfig(default_path="/about"))

        @app.view("/about", menu_label="msg-about")
        class About(TemplateView):
            template_name = "about.html"

        assert app.route_table.paths == ("/about",)
        assert app.route_table[0].factory is About
        assert app.route_table[0].menu_label == "msg-about"

    def test_add_view_appends_in_order(self) -> None:
        app = ShellApp(ShellConfig(default_path="/a"))
        app.add_view("/a", StubView)
        app.add_view("/b", StubView)
        assert app.route_table.paths == ("/a", "/b")

    def test_registration_after_freeze_raises(self) -> None:
        app = ShellApp.with_default_views()
        app.create_session("/tos")
        with pytest.raises(ConfigurationError, match="Cannot modify"):
            app.add_view("/late", StubView)
        with pytest.raises(ConfigurationError):
            app.on_startup(lambda: None)


class TestFreeze:
    def test_no_views(self) -> None:
        with pytest.raises(ConfigurationError):
            ShellApp().create_session()

    def test_default_path_without_view(self) -> None:
        app = ShellApp.with_default_views(ShellConfig(default_path="/home"))
        with pytest.raises(ConfigurationError, match="Default path"):
            app.create_session()

    def test_overlapping_routes_rejected(self) -> None:
        app = ShellApp.with_default_views()
        app.add_view("/share-edit/admin", StubView)
        with pytest.raises(ConfigurationError, match="Overlapping"):
            app.create_session()

    def test_overlapping_routes_allowed_when_lenient(self) -> None:
        app = ShellApp.with_default_views(ShellConfig(strict_routes=False))
        app.add_view("/share-edit/admin", StubView)
        shell = app.create_session("/share-edit/admin")
        # First registered wins.
        assert shell.router.active_slot.path == "/share-edit"

    def test_missing_custom_tos(self, tmp_path) -> None:
        config = ShellConfig(tos_custom=tmp_path / "missing.html")
        with pytest.raises(ConfigurationError, match="terms of service"):
            ShellApp.with_default_views(config).create_session()

    def test_shared_table_across_sessions(self) -> None:
        app = ShellApp.with_default_views()
        first = app.create_session("/tos")
        second = app.create_session("/share-create")
        assert first.table is second.table
        assert first.router is not second.router


class TestCreateSession:
    def test_renders_startup_view(self) -> None:
        shell = ShellApp.with_default_views().create_session("/tos")
        assert shell.initialized
        assert "Terms of Service" in shell.display.body
        assert "without warranty" in shell.display.body

    def test_unknown_path_falls_back(self) -> None:
        shell = ShellApp.with_default_views().create_session("/nope")
        assert shell.navigation.path == "/share-create"
        assert shell.take_path_change() == PathChange("/share-create", replace=True)
        assert "share-create" in shell.display.body

    def test_custom_messages(self) -> None:
        config = ShellConfig(app_name="Vault", messages={"msg-tos": "Rules"})
        shell = ShellApp.with_default_views(config).create_session("/tos")
        assert "Vault" in shell.display.body
        assert "Rules" in shell.display.body

    def test_custom_tos_text(self, tmp_path) -> None:
        tos = tmp_path / "tos.html"
        tos.write_text("<p>Be nice.</p>", encoding="utf-8")
        shell = ShellApp.with_default_views(ShellConfig(tos_custom=tos)).create_session("/tos")
        assert "<p>Be nice.</p>" in shell.display.body
        assert "without warranty" not in shell.display.body

    def test_custom_environment_gets_messages(self) -> None:
        env = Environment(
            loader=DictLoader(
                {
                    "main.html": "{{ tr('msg-app-name') }}|{{ contents }}",
                    "hello.html": "hello",
                }
            )
        )
        app = ShellApp(ShellConfig(default_path="/hello", app_name="Vault"), kida_env=env)
        app.add_view("/hello", lambda: TemplateView("hello.html"))
        shell = app.create_session("/hello")
        assert shell.display.body == "Vault|hello"


async def _lifespan(app: ShellApp) -> list[dict[str, Any]]:
    sent: list[dict[str, Any]] = []
    queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    async def receive() -> dict[str, Any]:
        return await queue.get()

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    task = asyncio.create_task(app({"type": "lifespan"}, receive, send))
    await queue.put({"type": "lifespan.startup"})
    await asyncio.sleep(0.01)
    if any(m["type"] == "lifespan.startup.complete" for m in sent):
        await queue.put({"type": "lifespan.shutdown"})
    await asyncio.wait_for(task, timeout=2.0)
    return sent


class TestLifespan:
    async def test_hooks_run(self) -> None:
        app = ShellApp.with_default_views()
        events: list[str] = []

        @app.on_startup
        async def setup():
            events.append("startup")

        @app.on_shutdown
        def teardown():
            events.append("shutdown")

        sent = await _lifespan(app)

        assert events == ["startup", "shutdown"]
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_configuration_error_fails_startup(self) -> None:
        app = ShellApp.with_default_views(ShellConfig(default_path="/missing"))
        sent = await _lifespan(app)
        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "/missing" in sent[0]["message"]

    async def test_hook_failure_fails_startup(self) -> None:
        app = ShellApp.with_default_views()

        @app.on_startup
        def broken():
            raise RuntimeError("no disk")

        sent = await _lifespan(app)
        assert sent == [{"type": "lifespan.startup.failed", "message": "no disk"}]
