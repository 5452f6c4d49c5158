"""Tests for BundleOptions.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
from ftllexengine.runtime.cache_config import CacheConfig

from ftlcatalog.localization import BundleOptions


def _shout(value: str) -> str:
    return value.upper()


class TestBundleOptions:
    """Test defaults, validation and immutability."""

    def test_defaults(self) -> None:
        """Default options isolate placeables and register nothing."""
        options = BundleOptions()

        assert options.use_isolating is True
        assert options.transform is None
        assert options.formatter is None
        assert dict(options.functions) == {}
        assert options.function_names == frozenset()
        assert options.cache is None

    def test_functions_copied_read_only(self) -> None:
        """The function table is copied and cannot be mutated."""
        table = {"SHOUT": _shout}
        options = BundleOptions(functions=table)
        table["OTHER"] = _shout

        assert options.function_names == {"SHOUT"}
        with pytest.raises(TypeError):
            options.functions["OTHER"] = _shout  # type: ignore[index]

    @pytest.mark.parametrize("name", ["shout", "", "1SHOUT", "SHOUT!", "Shout"])
    def test_invalid_function_name_rejected(self, name: str) -> None:
        """Function names must be uppercase FTL identifiers."""
        with pytest.raises(ValueError, match="uppercase FTL identifier"):
            BundleOptions(functions={name: _shout})

    def test_non_callable_rejected(self) -> None:
        """Function table values must be callable."""
        with pytest.raises(ValueError, match="not callable"):
            BundleOptions(functions={"SHOUT": "nope"})  # type: ignore[dict-item]

    def test_names_with_digits_and_separators_accepted(self) -> None:
        """Digits, underscores and hyphens may follow the first letter."""
        options = BundleOptions(functions={"PHONE_NUMBER": _shout, "ISO-8601": _shout})

        assert options.function_names == {"PHONE_NUMBER", "ISO-8601"}

    def test_frozen(self) -> None:
        """Options cannot be reassigned after construction."""
        options = BundleOptions()

        with pytest.raises(FrozenInstanceError):
            options.use_isolating = False  # type: ignore[misc]

    def test_cache_config_carried(self) -> None:
        """Engine cache configuration is stored as given."""
        config = CacheConfig(size=10)

        assert BundleOptions(cache=config).cache is config
