"""Tests for sluice.server.errors — handler failure reporting."""

import logging

import pytest

from sluice.http.request import Request
from sluice.server.errors import (
    format_compact_traceback,
    format_minimal_error,
    internal_error_response,
    log_error,
)


def _raise(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as caught:
        return caught


def _request() -> Request:
    async def receive() -> dict:
        return {"type": "http.request", "body": b"", "more_body": False}

    scope = {"type": "http", "method": "POST", "path": "/orders", "headers": []}
    return Request.from_asgi(scope, receive)


class TestFormatting:
    def test_compact_has_summary_and_frames(self) -> None:
        exc = _raise(KeyError("order_id"))
        text = format_compact_traceback(exc)

        assert text.startswith("KeyError: 'order_id'")
        assert "Trace (app frames):" in text
        assert "in _raise" in text

    def test_compact_without_traceback(self) -> None:
        assert format_compact_traceback(ValueError("bare")) == "ValueError: bare"

    def test_minimal_is_one_line(self) -> None:
        exc = _raise(ValueError("bad input"))
        text = format_minimal_error(exc)

        assert "\n" not in text
        assert text.startswith("ValueError at ")
        assert text.endswith(": bad input")


class TestLogError:
    def test_compact_default(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SLUICE_TRACEBACK", raising=False)
        with caplog.at_level(logging.ERROR, logger="sluice.server"):
            log_error(_raise(ValueError("boom")), _request(), event_name="CreateOrder")

        record = caplog.records[-1]
        assert record.getMessage().startswith("500 POST /orders (CreateOrder)\nValueError: boom")
        assert record.exc_info is None

    def test_full_attaches_exc_info(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SLUICE_TRACEBACK", "full")
        with caplog.at_level(logging.ERROR, logger="sluice.server"):
            log_error(_raise(ValueError("boom")), _request())

        record = caplog.records[-1]
        assert record.getMessage() == "500 POST /orders"
        assert record.exc_info is not None

    def test_minimal(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SLUICE_TRACEBACK", "MINIMAL")
        with caplog.at_level(logging.ERROR, logger="sluice.server"):
            log_error(_raise(ValueError("boom")))

        message = caplog.records[-1].getMessage()
        assert message.startswith("Handler error: ValueError at ")
        assert "\n" not in message


def test_internal_error_response() -> None:
    response = internal_error_response()

    assert response.status == 500
    assert response.text == "Internal Server Error"
