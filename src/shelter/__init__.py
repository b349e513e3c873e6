"""Shelter — the shell of a server-rendered file-sharing application.

Maps navigation paths to a fixed set of views, keeps exactly one of them
on display per session, and isolates every failure during event
processing behind an exception boundary.

Basic usage::

    from shelter import ShellApp, ShellConfig

    app = ShellApp.with_default_views(ShellConfig(default_path="/share-create"))
    app.run()

Driving a session directly::

    shell = app.create_session("/share-edit/abc")
    shell.notify(PathChanged("/tos"))
    html = shell.display.page()
"""

__version__ = "0.1.0"
__all__ = [
    "Action",
    "Completed",
    "ConfigurationError",
    "DomainFailure",
    "InternalFault",
    "InvalidInput",
    "PathChanged",
    "ShareError",
    "ShareExpired",
    "ShareNotFound",
    "ShellApp",
    "ShellConfig",
    "ShellController",
    "ShelterError",
    "TemplateView",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import shelter`` fast while providing a clean top-level API.
    """
    if name == "ShellApp":
        from shelter.app import ShellApp

        return ShellApp

    if name == "ShellConfig":
        from shelter.config import ShellConfig

        return ShellConfig

    if name == "ShellController":
        from shelter.shell import ShellController

        return ShellController

    if name == "TemplateView":
        from shelter.views.base import TemplateView

        return TemplateView

    if name in ("Action", "PathChanged"):
        from shelter import events as _events

        return getattr(_events, name)

    if name in ("Completed", "DomainFailure", "InternalFault"):
        from shelter.boundary import outcomes as _outcomes

        return getattr(_outcomes, name)

    if name in (
        "ConfigurationError",
        "InvalidInput",
        "ShareError",
        "ShareExpired",
        "ShareNotFound",
        "ShelterError",
    ):
        from shelter import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
