"""Reusable message handle bound to a catalog and key.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from .types import CatalogName, MessageKey

if TYPE_CHECKING:
    from ftllexengine import FluentValue

    from .orchestrator import CatalogLocalization

__all__ = ["Message"]


class Message:
    """A (catalog, key) pair with stored arguments, translatable per locale.

    Call arguments are merged over the stored ones; on a name clash the
    call argument wins.

    Example:
        >>> greeting = Message(l10n, "home", "welcome", {"name": "Alan"})
        >>> greeting.translate("en")
        'Welcome Alan!'
        >>> greeting.translate("en", {"name": "Ada"})
        'Welcome Ada!'
    """

    __slots__ = ("_args", "_catalog", "_key", "_l10n")

    def __init__(
        self,
        l10n: CatalogLocalization,
        catalog: CatalogName,
        key: MessageKey,
        args: Mapping[str, FluentValue] | None = None,
    ) -> None:
        self._l10n = l10n
        self._catalog = catalog
        self._key = key
        self._args: Mapping[str, FluentValue] = MappingProxyType(dict(args or {}))

    @property
    def catalog(self) -> CatalogName:
        return self._catalog

    @property
    def key(self) -> MessageKey:
        return self._key

    @property
    def args(self) -> Mapping[str, FluentValue]:
        """Stored arguments (read-only)."""
        return self._args

    def _merge(self, args: Mapping[str, FluentValue] | None) -> dict[str, FluentValue]:
        merged = dict(self._args)
        if args:
            merged.update(args)
        return merged

    def try_translate(self, locale: str, args: Mapping[str, FluentValue] | None = None) -> str:
        """Format for locale, raising a TranslateError on failure."""
        return self._l10n.try_translate(self._catalog, locale, self._key, self._merge(args))

    def translate(self, locale: str, args: Mapping[str, FluentValue] | None = None) -> str:
        """Format for locale, returning UNEXPECTED_MESSAGE on failure."""
        return self._l10n.translate(self._catalog, locale, self._key, self._merge(args))

    def required_variables(self) -> frozenset[str]:
        """Variables the message needs in every main locale."""
        return self._l10n.required_variables(self._catalog, self._key)

    def missing_arguments(self, args: Mapping[str, FluentValue] | None = None) -> tuple[str, ...]:
        """Required variables absent from the merged arguments, sorted."""
        return self._l10n.missing_arguments(self._catalog, self._key, self._merge(args))

    def __repr__(self) -> str:
        return f"Message(catalog={self._catalog!r}, key={self._key!r}, args={dict(self._args)!r})"
