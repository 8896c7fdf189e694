"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Serving configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(port=8080, static_dir="public")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    workers: int = 1

    # Static files served when no mount matches
    static_dir: str | Path | None = None
    static_index: str = "index.html"

    # Logging (applied by the hosting server)
    log_level: str = "info"
