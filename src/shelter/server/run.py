"""Server startup.

Starts a pounce ASGI server with the live ShellApp object. Sessions
live in process memory, so the server always runs a single worker.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start a pounce server with the given ShellApp.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but we have a live app object, so ``pounce.Server`` is used directly
    with the ASGI callable.

    Args:
        app: ASGI callable (ShellApp instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        log_level: Server log level.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        log_level=log_level,
    )
    Server(config, app).run()
