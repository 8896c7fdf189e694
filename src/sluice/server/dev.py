"""Local development server.

Starts a pounce ASGI server with the live ServerlessRouter object.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    log_level: str = "info",
) -> None:
    """Start a pounce server for *app*.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:router"``),
    but here we hold a live router object, so ``pounce.Server`` is used
    directly with the ASGI callable.

    Args:
        app: ASGI callable (ServerlessRouter instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count.
        log_level: Log level applied by pounce to its handlers.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level,
    )
    server = Server(config, app)
    server.run()
