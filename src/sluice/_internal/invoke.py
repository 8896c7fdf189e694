"""Call sync or async handlers uniformly.

Event handlers can be ``def`` or ``async def``; the dispatcher awaits
the result only when the handler returned an awaitable.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
