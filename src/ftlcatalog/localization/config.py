"""Per-bundle configuration attached to every catalog bundle.

Provides a single frozen dataclass that carries every option the build
forwards to the formatting engine, so all bundles of one catalog set are
configured identically.

Python 3.13+.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ftllexengine.runtime.cache_config import CacheConfig

__all__ = ["BundleOptions", "FormatterHook", "TransformHook"]

type TransformHook = Callable[[str], str]
"""Rewrites literal text of every pattern before it is added to a bundle."""

type FormatterHook = Callable[[object, str], str | None]
"""Receives (value, locale); returns replacement text or None to keep the value."""

# FTL function identifiers are uppercase by convention; the engine resolves
# them case-sensitively, so lowercase names would never match a call site.
_FUNCTION_NAME_PATTERN = re.compile(r"^[A-Z][A-Z0-9_-]*$")


@dataclass(frozen=True, slots=True)
class BundleOptions:
    """Immutable configuration for catalog bundles.

    All fields have sensible defaults; constructing ``BundleOptions()`` with
    no arguments produces a usable configuration.

    Attributes:
        use_isolating: Wrap placeables in Unicode bidi isolation marks
            (default: True). Disable only for LTR-only output such as tests
            or plain-text logs.
        transform: Optional hook applied to every text element of every
            pattern before the resource is added to a bundle.
        formatter: Optional hook applied to every argument value before
            formatting. Returning a string replaces the value; returning
            None leaves it to the engine.
        functions: Custom functions registered on every bundle, keyed by
            FTL function name. Stored as a read-only mapping.
        cache: Engine format cache configuration; None disables caching.

    Example:
        >>> options = BundleOptions(use_isolating=False, functions={"UPPER": str.upper})
        >>> sorted(options.functions)
        ['UPPER']
    """

    use_isolating: bool = True
    transform: TransformHook | None = None
    formatter: FormatterHook | None = None
    functions: Mapping[str, Callable[..., object]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    cache: CacheConfig | None = None

    def __post_init__(self) -> None:
        """Validate function names and freeze the function table.

        Raises:
            ValueError: If a function name is not an uppercase FTL identifier
        """
        for name, func in self.functions.items():
            if not isinstance(name, str) or not _FUNCTION_NAME_PATTERN.match(name):
                msg = f"function name must be an uppercase FTL identifier, got {name!r}"
                raise ValueError(msg)
            if not callable(func):
                msg = f"function {name!r} is not callable"
                raise ValueError(msg)
        # Frozen dataclass: bypass __setattr__ to store the defensive copy
        object.__setattr__(self, "functions", MappingProxyType(dict(self.functions)))

    @property
    def function_names(self) -> frozenset[str]:
        """Names of the configured custom functions."""
        return frozenset(self.functions)
