"""ASGI handler — turns one HTTP request into one session event.

The only component that touches raw ASGI http scopes. A full-page
request is a fresh page load and starts a new session; an htmx fragment
request carrying a live session cookie is delivered to that session as
a ``PathChanged`` event. The session's exception boundary guarantees the
event itself never raises; anything failing outside it becomes a 500.
"""

import logging
from collections.abc import Callable

from shelter._internal.asgi import Receive, Scope, Send
from shelter.config import ShellConfig
from shelter.events import PathChanged
from shelter.http.request import Request
from shelter.http.response import Response
from shelter.server.sender import send_response
from shelter.server.sessions import Session, SessionStore
from shelter.shell import ShellController

logger = logging.getLogger("shelter.server")

ShellFactory = Callable[[Request], ShellController]


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    create_shell: ShellFactory,
    sessions: SessionStore,
    config: ShellConfig,
) -> None:
    """Process a single HTTP request through the shell."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    try:
        response = respond(request, create_shell=create_shell, sessions=sessions, config=config)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = Response(
            body="Internal Server Error",
            content_type="text/plain; charset=utf-8",
        ).with_status(500)
    await send_response(response, send)


def respond(
    request: Request,
    *,
    create_shell: ShellFactory,
    sessions: SessionStore,
    config: ShellConfig,
) -> Response:
    """Deliver *request* to its session and render the result."""
    if request.method != "GET":
        return (
            Response(body="Method Not Allowed", content_type="text/plain; charset=utf-8")
            .with_status(405)
            .with_header("Allow", "GET")
        )

    session_id = request.cookies.get(config.session_cookie)
    session: Session | None = None
    if request.is_fragment:
        session = sessions.get(session_id)
    elif session_id:
        # A page load replaces the browser's previous session.
        sessions.discard(session_id)

    if session is None:
        session = sessions.add(create_shell(request))
        with session.lock:
            response = _render(session.shell, request)
        return response.with_cookie(config.session_cookie, session.id)

    with session.lock:
        session.shell.notify(PathChanged(request.path))
        return _render(session.shell, request)


def _render(shell: ShellController, request: Request) -> Response:
    change = shell.take_path_change()
    if not request.is_fragment:
        replace_url = change.path if change is not None and change.replace else None
        return Response(body=shell.display.page(replace_url=replace_url))

    response = Response(body=shell.display.fragment())
    if change is None:
        return response
    if change.replace:
        return response.with_hx_replace_url(change.path)
    return response.with_hx_push_url(change.path)
