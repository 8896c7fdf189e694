"""Tests for sluice.http.request — frozen Request with async body access."""

import dataclasses

import pytest

from sluice.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 3000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        scope = _make_scope(method="PUT", path="/items/7", query_string=b"dry=1")
        req = Request.from_asgi(scope, _make_receive())

        assert req.method == "PUT"
        assert req.path == "/items/7"
        assert req.url == "/items/7?dry=1"
        assert req.server == ("localhost", 3000)
        assert req.client == ("127.0.0.1", 54321)

    def test_headers_and_content_type(self) -> None:
        scope = _make_scope(headers=[(b"content-type", b"application/json")])
        req = Request.from_asgi(scope, _make_receive())

        assert req.content_type == "application/json"

    def test_missing_client(self) -> None:
        scope = _make_scope()
        del scope["client"]
        req = Request.from_asgi(scope, _make_receive())

        assert req.client is None

    def test_frozen(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())

        with pytest.raises(dataclasses.FrozenInstanceError):
            req.path = "/other"  # type: ignore[misc]


class TestRequestBody:
    async def test_body_joins_chunks(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"ab", b"cd"))
        assert await req.body() == b"abcd"

    async def test_body_cached(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"once"))

        assert await req.body() == b"once"
        assert await req.body() == b"once"

    async def test_json_and_text(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST"), _make_receive(b'{"a": 1}'))

        assert await req.json() == {"a": 1}
        assert await req.text() == '{"a": 1}'

    async def test_stream_stops_on_disconnect(self) -> None:
        messages = iter(
            [
                {"type": "http.request", "body": b"part", "more_body": True},
                {"type": "http.disconnect"},
            ]
        )

        async def receive():
            return next(messages)

        req = Request.from_asgi(_make_scope(method="POST"), receive)
        chunks = [chunk async for chunk in req.stream()]

        assert chunks == [b"part"]
