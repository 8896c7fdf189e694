"""Sluice exception hierarchy.

Shared across the extractor, router, and request handler so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class SluiceError(Exception):
    """Base for all sluice-specific errors."""


class ConfigurationError(SluiceError):
    """Raised when router setup is invalid.

    Typically raised from ``ServerlessRouter.add_function()`` at startup.
    """


class InvalidPathPattern(ConfigurationError):  # noqa: N818
    """A declared API path cannot be compiled into a matcher."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path pattern {path!r}: {reason}")


class NoEventsFound(SluiceError):  # noqa: N818
    """The function descriptor declares no ``Api`` event sources."""

    def __init__(self, function: str = "") -> None:
        self.function = function
        detail = f" for function {function!r}" if function else ""
        super().__init__(f"No API event sources found{detail}")


ErrNoEventsFound = NoEventsFound


@dataclass(frozen=True, slots=True)
class HTTPError(SluiceError):
    """An error that maps directly to an HTTP status code.

    Raised by the router; the request handler turns it into a response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no mount matched the request path and method."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
