"""Sluice — a local API-gateway route resolver for serverless functions.

Turns a function's declared ``Api`` event sources into a live ASGI
dispatch table with gateway-style path matching: named segments,
greedy ``{proxy+}`` segments, and the ``any`` method.

Basic usage::

    from sluice import FunctionDescriptor, ServerlessRouter

    router = ServerlessRouter()
    router.add_function(
        FunctionDescriptor.from_dict("Items", {
            "Handler": "items.handler",
            "Events": {
                "ListItems": {"Type": "Api", "Properties": {"Path": "/items", "Method": "get"}},
            },
        }),
        handler,
    )
    router.run()
"""

__version__ = "0.1.0"
__all__ = [
    "ApiEvent",
    "ConfigurationError",
    "ErrNoEventsFound",
    "Event",
    "EventKind",
    "EventSource",
    "FunctionDescriptor",
    "HTTPError",
    "InvalidPathPattern",
    "Mount",
    "NoEventsFound",
    "NotFound",
    "Request",
    "Response",
    "ResponseWriter",
    "RouterConfig",
    "ServerlessRouter",
    "SluiceError",
    "get_event",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import sluice`` fast while providing a clean top-level API.
    """
    if name == "ServerlessRouter":
        from sluice.serverless import ServerlessRouter

        return ServerlessRouter

    if name == "RouterConfig":
        from sluice.config import RouterConfig

        return RouterConfig

    if name in ("ApiEvent", "EventKind", "EventSource", "FunctionDescriptor"):
        from sluice import sources as _sources

        return getattr(_sources, name)

    if name == "Mount":
        from sluice.routing.route import Mount

        return Mount

    if name in ("Event", "get_event"):
        from sluice import context as _ctx

        return getattr(_ctx, name)

    if name == "Request":
        from sluice.http.request import Request

        return Request

    if name == "Response":
        from sluice.http.response import Response

        return Response

    if name == "ResponseWriter":
        from sluice.http.writer import ResponseWriter

        return ResponseWriter

    if name in (
        "ConfigurationError",
        "ErrNoEventsFound",
        "HTTPError",
        "InvalidPathPattern",
        "NoEventsFound",
        "NotFound",
        "SluiceError",
    ):
        from sluice import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
