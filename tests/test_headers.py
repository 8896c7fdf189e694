"""Tests for sluice.http.headers and sluice.http.query."""

import pytest

from sluice.http.headers import Headers
from sluice.http.query import QueryParams


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers(raw)


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = _h(("Content-Type", "text/html"))
        assert h["content-type"] == "text/html"
        assert h["CONTENT-TYPE"] == "text/html"

    def test_missing_key_raises(self) -> None:
        h = _h(("Accept", "*/*"))
        with pytest.raises(KeyError):
            h["X-Missing"]

    def test_contains_rejects_non_str(self) -> None:
        h = _h(("Accept", "*/*"))
        assert "accept" in h
        assert 42 not in h  # type: ignore[operator]

    def test_len_deduplicates(self) -> None:
        h = _h(("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"))
        assert len(h) == 1

    def test_get_default(self) -> None:
        assert _h().get("x-missing", "fallback") == "fallback"

    def test_single_and_multi_value_views(self) -> None:
        h = _h(("Accept", "text/html"), ("X-Tag", "a"), ("x-tag", "b"))

        assert h["x-tag"] == "a"
        assert dict(h.items()) == {"accept": "text/html", "x-tag": "a"}
        assert h.get_list("X-TAG") == ["a", "b"]

    def test_raw_preserved(self) -> None:
        raw = ((b"Accept", b"*/*"),)
        assert Headers(raw).raw == raw


class TestQueryParams:
    def test_first_value(self) -> None:
        q = QueryParams(b"tag=a&tag=b&page=2")
        assert q["tag"] == "a"
        assert q.get("page") == "2"

    def test_multi_values(self) -> None:
        q = QueryParams(b"tag=a&tag=b")
        assert q.get_list("tag") == ["a", "b"]
        assert q.get_list("missing") == []

    def test_blank_values_kept(self) -> None:
        q = QueryParams(b"flag=&x=1")
        assert q["flag"] == ""
        assert len(q) == 2

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert q.raw == b""
