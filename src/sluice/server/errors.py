"""Error reporting for handler failures.

Handlers run user code; when one raises, the dispatcher logs the failure
here and answers with a 500 if the response has not started yet.

Traceback verbosity is controlled by the ``SLUICE_TRACEBACK`` environment
variable:

- ``compact`` (default): application frames and the error summary
- ``full``: the complete Python traceback
- ``minimal``: one line with the innermost frame
"""

from __future__ import annotations

import logging
import os
import traceback as _traceback
from typing import TYPE_CHECKING

from sluice.http.response import Response

if TYPE_CHECKING:
    from sluice.http.request import Request

logger = logging.getLogger("sluice.server")

_MAX_APP_FRAMES = 5


def _is_app_frame(filename: str) -> bool:
    """True if the frame is from the application (not stdlib/site-packages/sluice)."""
    if "site-packages" in filename or filename.startswith("<"):
        return False
    if f"{os.sep}sluice{os.sep}" in filename:
        return False
    stdlib_prefix = os.path.dirname(os.__file__)
    return not filename.startswith(stdlib_prefix)


def format_compact_traceback(exc: BaseException) -> str:
    """Format an error with application frames only.

    Falls back to the last three frames when none belong to the application.
    """
    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    app_frames = [f for f in frames if _is_app_frame(f.filename)]
    display_frames = app_frames if app_frames else frames[-3:]

    parts = [f"{type(exc).__name__}: {exc}"]
    if display_frames:
        parts.append("  Trace (app frames):")
        for frame in display_frames[-_MAX_APP_FRAMES:]:
            parts.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
            if frame.line:
                parts.append(f"      {frame.line.strip()}")
    return "\n".join(parts)


def format_minimal_error(exc: BaseException) -> str:
    """One-line error summary."""
    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    last = frames[-1] if frames else None
    location = f" at {last.filename}:{last.lineno}" if last else ""
    return f"{type(exc).__name__}{location}: {exc}"


def log_error(exc: BaseException, request: Request | None = None, *, event_name: str = "") -> None:
    """Log a handler failure using the configured traceback style."""
    prefix = f"500 {request.method} {request.path}" if request is not None else "Handler error"
    if event_name:
        prefix = f"{prefix} ({event_name})"

    style = os.environ.get("SLUICE_TRACEBACK", "compact").lower()
    if style == "full":
        logger.error(prefix, exc_info=exc)
    elif style == "minimal":
        logger.error("%s: %s", prefix, format_minimal_error(exc))
    else:
        logger.error("%s\n%s", prefix, format_compact_traceback(exc))


def internal_error_response() -> Response:
    return Response(body="Internal Server Error", status=500)
