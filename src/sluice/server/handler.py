"""ASGI handler — matches a request and dispatches it to an event handler.

The only component that touches raw ASGI scope directly. Converts the
scope into a Request, asks the router for a mount, builds the Event, and
hands the handler a ResponseWriter bound to ASGI ``send``.
"""

import logging
from collections.abc import Sequence

from sluice._internal.asgi import Receive, Scope, Send
from sluice._internal.invoke import invoke
from sluice.context import Event, event_var
from sluice.errors import NotFound
from sluice.http.request import Request
from sluice.http.response import Response
from sluice.http.writer import ResponseWriter
from sluice.routing.route import RouteMatch
from sluice.routing.router import Router
from sluice.server.errors import internal_error_response, log_error
from sluice.server.sender import send_response
from sluice.server.static import StaticFiles

logger = logging.getLogger("sluice.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    static: Sequence[StaticFiles] = (),
) -> None:
    """Process a single HTTP request: match, then dispatch or answer 404."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    head = request.method.upper() == "HEAD"

    try:
        match = router.match(request.method, request.path)
    except NotFound as exc:
        response = _static_fallback(request, static)
        if response is None:
            logger.debug("404 %s %s: %s", request.method, request.path, exc.detail)
            response = Response(body=b"", status=exc.status)
        await send_response(response, send, head=head)
        return

    await dispatch(match, request, send)


def _static_fallback(request: Request, static: Sequence[StaticFiles]) -> Response | None:
    for files in static:
        response = files.lookup(request.method, request.path)
        if response is not None:
            return response
    return None


async def dispatch(match: RouteMatch, request: Request, send: Send) -> None:
    """Call the matched handler with a writer and the request's Event.

    The handler may write through the writer, or return a ``Response``
    which is sent if nothing was written yet. The writer is closed when
    the handler returns.
    """
    event = Event(
        name=match.mount.name,
        method=request.method,
        path=match.mount.path,
        path_params=match.path_params,
        function=match.mount.function,
        request=request,
    )
    writer = ResponseWriter(send, head=request.method.upper() == "HEAD")
    logger.debug("%s %s -> %s", request.method, request.path, event.name)

    token = event_var.set(event)
    try:
        result = await invoke(match.handler, writer, event)
    except Exception as exc:
        log_error(exc, request, event_name=event.name)
        if not writer.started:
            await writer.send(internal_error_response())
    else:
        if isinstance(result, Response):
            if writer.started:
                logger.warning(
                    "Handler for %r returned a Response after writing; ignored", event.name
                )
            else:
                await writer.send(result)
    finally:
        event_var.reset(token)

    await writer.close()
