"""Shared type aliases used across sluice modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Event handler: called as handler(writer, event), sync or async
EventHandler: TypeAlias = Callable[..., Any]
