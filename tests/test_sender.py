"""Tests for sluice.server.sender response emission rules."""

from sluice.http.response import Response
from sluice.server.sender import body_allowed, send_response


class TestSendResponse:
    async def test_200_preserves_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response("ok"), send)

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert headers[b"content-type"] == b"text/plain; charset=utf-8"
        assert messages[1]["type"] == "http.response.body"
        assert messages[1]["body"] == b"ok"

    async def test_404_empty_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response(b"", status=404), send)

        assert messages[0]["status"] == 404
        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_204_drops_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response("unexpected-body").with_status(204), send)

        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_head_keeps_length_drops_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response("hello"), send, head=True)

        assert dict(messages[0]["headers"])[b"content-length"] == b"5"
        assert messages[1]["body"] == b""

    async def test_header_names_lower_cased(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response("x").with_header("X-Request-Id", "abc"), send)

        assert (b"x-request-id", b"abc") in messages[0]["headers"]


class TestBodyAllowed:
    def test_statuses(self) -> None:
        assert body_allowed(200) is True
        assert body_allowed(404) is True
        assert body_allowed(101) is False
        assert body_allowed(204) is False
        assert body_allowed(304) is False
