"""Tests for sluice.__init__ — every public name resolves lazily."""

import pytest

import sluice


@pytest.mark.parametrize("name", sluice.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(sluice, name)
    assert obj is not None, f"sluice.{name} resolved to None"


def test_error_alias_is_same_class() -> None:
    assert sluice.ErrNoEventsFound is sluice.NoEventsFound


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        sluice.__getattr__("ThisDoesNotExist")
