"""Per-request event context.

Provides:
- ``Event``: what a matched handler receives alongside the writer.
- ``event_var``: the current ``Event`` for this task.

``event_var`` is set by the dispatcher before the handler runs and reset
afterwards. Accessing it outside a request raises ``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio. No locks needed.
"""

from contextvars import ContextVar
from dataclasses import dataclass, field

from sluice.http.request import Request


@dataclass(frozen=True, slots=True)
class Event:
    """The request-scoped context handed to a matched handler.

    ``name`` is the mount's event name, ``path`` its declared resource
    path, and ``path_params`` the values captured by ``{name}`` and
    ``{name+}`` segments. ``method`` is the request method as received.
    """

    name: str
    method: str
    path: str
    path_params: dict[str, str] = field(default_factory=dict)
    function: str = ""
    request: Request | None = field(default=None, repr=False, compare=False)


event_var: ContextVar[Event] = ContextVar("sluice_event")
"""The current event. Set by the dispatcher before the handler runs."""


def get_event() -> Event:
    """Return the current event.

    Raises ``LookupError`` if called outside a request context.
    """
    return event_var.get()
