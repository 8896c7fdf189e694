"""Tests for sluice.config — RouterConfig frozen dataclass."""

from pathlib import Path

import pytest

from sluice.config import RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.host == "127.0.0.1"
        assert cfg.port == 3000
        assert cfg.workers == 1
        assert cfg.static_dir is None
        assert cfg.static_index == "index.html"
        assert cfg.log_level == "info"

    def test_override(self) -> None:
        cfg = RouterConfig(host="0.0.0.0", port=8080, static_dir="public", log_level="debug")

        assert cfg.host == "0.0.0.0"
        assert cfg.port == 8080
        assert cfg.static_dir == "public"
        assert cfg.log_level == "debug"

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.port = 9000  # type: ignore[misc]

    def test_static_dir_as_path(self) -> None:
        cfg = RouterConfig(static_dir=Path("/srv/public"))
        assert cfg.static_dir == Path("/srv/public")
