"""Tests for sluice.http.response — immutable Response with .with_*() chaining."""

import pytest

from sluice.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        r = Response()
        assert r.status == 200
        assert r.content_type == "text/plain; charset=utf-8"
        assert r.headers == ()
        assert r.body_bytes == b""

    def test_chaining_returns_new_instances(self) -> None:
        original = Response("ok")
        changed = original.with_status(201).with_header("Location", "/items/1")

        assert original.status == 200
        assert original.headers == ()
        assert changed.status == 201
        assert changed.headers == (("Location", "/items/1"),)

    def test_with_headers_appends(self) -> None:
        r = Response().with_header("X-A", "1").with_headers({"X-B": "2", "X-C": "3"})
        assert r.headers == (("X-A", "1"), ("X-B", "2"), ("X-C", "3"))

    def test_with_content_type(self) -> None:
        assert Response().with_content_type("application/json").content_type == "application/json"

    def test_header_lookup_case_insensitive(self) -> None:
        r = Response().with_header("X-Trace", "a").with_header("x-trace", "b")
        assert r.header("X-TRACE") == "a"
        assert r.header("missing") is None

    def test_body_conversions(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"bytes").text == "bytes"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 500  # type: ignore[misc]
