"""The serverless router: function registration plus the ASGI entry point.

Mutable during setup (``add_function``, ``add_static_dir``).
Frozen at runtime when ``run()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from pathlib import Path

from sluice._internal.asgi import Receive, Scope, Send
from sluice._internal.types import EventHandler
from sluice.config import RouterConfig
from sluice.errors import ConfigurationError
from sluice.routing.route import Mount
from sluice.routing.router import Router
from sluice.server.handler import handle_request
from sluice.server.static import StaticFiles
from sluice.sources import FunctionDescriptor, api_events

logger = logging.getLogger("sluice.router")


class ServerlessRouter:
    """Routes HTTP requests to the handlers of registered functions.

    Usage::

        router = ServerlessRouter()
        router.add_function(descriptor, handler)
        router.run()

    ``prefix_mode`` is fixed for the router's lifetime; see
    ``sluice.routing.router.Router`` for what it changes.

    Thread safety:
        Registration is single-threaded setup. The freeze transition uses
        a Lock + double-check so exactly one request compiles the router,
        even when several ASGI workers serve the first requests at once.
        After that the mount table is read-only.
    """

    __slots__ = ("_freeze_lock", "_frozen", "_router", "_static", "config")

    def __init__(self, prefix_mode: bool = False, *, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._router = Router(prefix_mode=prefix_mode)
        self._static: list[StaticFiles] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()

        if self.config.static_dir is not None:
            self.add_static_dir(self.config.static_dir, index=self.config.static_index)

    @property
    def prefix_mode(self) -> bool:
        return self._router.prefix_mode

    @property
    def mounts(self) -> tuple[Mount, ...]:
        """Every mount registered so far, in registration order."""
        return self._router.mounts

    # -- Registration --

    def add_function(self, descriptor: FunctionDescriptor, handler: EventHandler) -> None:
        """Mount every ``Api`` event of *descriptor*, bound to *handler*.

        The handler is called as ``handler(writer, event)`` for each
        matching request.

        Raises ``NoEventsFound`` if the descriptor has no ``Api`` events,
        and ``InvalidPathPattern`` if any declared path is malformed. In
        both cases nothing from this call is mounted.
        """
        self._check_not_frozen()

        entries = [
            (
                Mount(
                    name=name,
                    path=event.path,
                    method=event.method.lower(),
                    function=descriptor.name,
                ),
                handler,
            )
            for name, event in api_events(descriptor)
        ]
        self._router.add_all(entries)

        for mount, _ in entries:
            logger.info(
                "Mounting %s at %s [%s]",
                descriptor.handler or descriptor.name or mount.name,
                mount.path,
                mount.method.upper(),
            )

    def add_static_dir(self, directory: str | Path, *, index: str = "index.html") -> None:
        """Serve files from *directory* for requests no mount matches."""
        self._check_not_frozen()
        path = Path(directory)
        if not path.is_dir():
            msg = f"Static directory {str(directory)!r} does not exist"
            raise ConfigurationError(msg)
        self._static.append(StaticFiles(path, index=index))
        logger.info("Serving static files from %s", path.resolve())

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the mounted functions over HTTP (requires ``sluice[server]``)."""
        self._ensure_frozen()

        _host = host or self.config.host
        _port = port or self.config.port
        for mount in self.mounts:
            logger.info(
                "%s http://%s:%d%s [%s]", mount.name, _host, _port, mount.path, mount.method.upper()
            )

        from sluice.server.dev import run_dev_server

        run_dev_server(
            self,
            _host,
            _port,
            workers=self.config.workers,
            log_level=self.config.log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(scope, receive, send, router=self._router, static=self._static)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self._ensure_frozen()
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._router.compile()
            self._frozen = True
            logger.debug("Router frozen with %d mount(s)", len(self.mounts))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot register functions after the router has started serving."
            raise ConfigurationError(msg)
