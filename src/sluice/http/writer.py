"""Streaming response writer handed to event handlers.

The writer is a thin pass-through to ASGI ``send``: headers go out on
``write_header()`` (or the first ``write()``), every ``write()`` becomes a
body message, and ``close()`` ends the stream. Nothing is buffered.
"""

import logging

from sluice._internal.asgi import Send
from sluice.http.response import Response
from sluice.server.sender import body_allowed, encode_headers

logger = logging.getLogger("sluice.server")

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


class ResponseWriter:
    """Write a response for the current request.

    Usage inside a handler::

        async def handler(writer, event):
            writer.set_header("Content-Type", "application/json")
            await writer.write_header(201)
            await writer.write(b'{"ok": true}')

    Writing without calling ``write_header()`` first implies status 200.
    For ``HEAD`` requests body bytes are discarded.
    """

    __slots__ = ("_closed", "_head", "_headers", "_send", "_started", "_status")

    def __init__(self, send: Send, *, head: bool = False) -> None:
        self._send = send
        self._head = head
        self._headers: list[tuple[str, str]] = []
        self._status = 200
        self._started = False
        self._closed = False

    @property
    def started(self) -> bool:
        """True once the status line and headers have been sent."""
        return self._started

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)

    def set_header(self, name: str, value: str) -> None:
        """Add a response header. Ignored once headers have been sent."""
        if self._started:
            logger.warning("Header %r set after the response started; ignored", name)
            return
        self._headers.append((name, value))

    async def write_header(self, status: int = 200) -> None:
        """Send the status line and headers."""
        if self._started:
            logger.warning(
                "Superfluous write_header(%d); status %d already sent", status, self._status
            )
            return
        self._status = status
        self._started = True

        headers = self._headers
        if not any(name.lower() == "content-type" for name, _ in headers):
            headers = [("Content-Type", DEFAULT_CONTENT_TYPE), *headers]
        await self._send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": encode_headers(headers),
            }
        )

    async def write(self, data: str | bytes) -> None:
        """Send a chunk of the body, sending headers first if needed."""
        if self._closed:
            msg = "Cannot write to a closed response."
            raise RuntimeError(msg)
        if not self._started:
            await self.write_header(200)
        if self._head or not body_allowed(self._status):
            return
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        if chunk:
            await self._send({"type": "http.response.body", "body": chunk, "more_body": True})

    async def send(self, response: Response) -> None:
        """Write a complete ``Response`` (status, headers, body)."""
        if self._started:
            msg = "Cannot send a Response after the response started."
            raise RuntimeError(msg)
        # The Response's content type replaces any set earlier
        self._headers = [
            (name, value)
            for name, value in (*self._headers, *response.headers)
            if name.lower() != "content-type"
        ]
        self._headers.append(("Content-Type", response.content_type))
        await self.write_header(response.status)
        await self.write(response.body_bytes)

    async def close(self) -> None:
        """End the response. Implies ``write_header(200)`` if nothing was sent."""
        if self._closed:
            return
        if not self._started:
            await self.write_header(200)
        self._closed = True
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})
