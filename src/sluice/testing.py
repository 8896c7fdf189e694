"""Test client for sluice routers.

Sends requests through the ASGI interface directly — no HTTP involved —
and returns the same ``Response`` type the router uses itself.
"""

import json as json_module
from typing import Any

from sluice.http.response import Response
from sluice.serverless import ServerlessRouter


class TestClient:
    """Async test client for sluice routers.

    Usage::

        async with TestClient(router) as client:
            response = await client.get("/items")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("app",)

    def __init__(self, app: ServerlessRouter) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        self.app._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        pass

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("HEAD", path, headers=headers)

    async def options(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("OPTIONS", path, headers=headers)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("DELETE", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """Send a POST request, JSON-encoding *json* when given."""
        return await self._send_with_body("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        return await self._send_with_body("PUT", path, headers=headers, body=body, json=json)

    async def patch(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        return await self._send_with_body("PATCH", path, headers=headers, body=body, json=json)

    async def _send_with_body(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None,
        body: bytes | None,
        json: Any,
    ) -> Response:
        extra_headers: dict[str, str] = {}
        request_body = body or b""
        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            extra_headers["content-type"] = "application/json"

        merged = {**extra_headers, **(headers or {})}
        return await self.request(method, path, headers=merged, body=request_body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        if "?" in path:
            path_part, query_string = path.split("?", 1)
        else:
            path_part = path
            query_string = ""

        raw_headers: list[tuple[bytes, bytes]] = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]
        if body:
            raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": body or b"", "more_body": False}
            return {"type": "http.disconnect"}

        status = 200
        response_headers: list[tuple[str, str]] = []
        chunks: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                response_headers.extend(
                    (name.decode("latin-1"), value.decode("latin-1"))
                    for name, value in message.get("headers", [])
                )
            elif message["type"] == "http.response.body":
                chunks.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = "text/plain; charset=utf-8"
        for name, value in response_headers:
            if name == "content-type":
                content_type = value
                break

        return Response(
            body=b"".join(chunks),
            status=status,
            content_type=content_type,
            headers=tuple(response_headers),
        )
