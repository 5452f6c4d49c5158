"""Locale graph: main locales and their fallback chains.

A Locales value is a validated, immutable list of LocaleEntry pairs
(main locale -> optional fallback locale). Construction enforces three
invariants:

- the list is not empty;
- main locales are pairwise distinct;
- following fallbacks from any entry never revisits a locale.

Queries derive the resolution route of a main locale (most specific
first) and the mandatory locales, the terminal locales of every chain,
which must carry complete content.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from ftlcatalog.diagnostics import (
    DuplicateMainLocaleError,
    EmptyLocalesError,
    FallbackCycleError,
)
from ftlcatalog.locale_utils import canonicalize_locale, region_of, strip_region

from .types import LocaleCode

__all__ = ["LocaleEntry", "Locales"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleEntry:
    """One main locale with its optional fallback.

    Attributes:
        main: Locale that bundles are built for
        fallback: Locale consulted after main, or None for a terminal entry
    """

    main: LocaleCode
    fallback: LocaleCode | None = None

    def __str__(self) -> str:
        if self.fallback is None:
            return self.main
        return f"{self.main} -> {self.fallback}"


class Locales:
    """Validated locale graph.

    Immutable after construction. Supports iteration over entries,
    ``len()``, and ``in`` tests against main locales.

    Example:
        >>> locales = Locales.from_pairs([("en", None), ("en-GB", "en"), ("fr", None)])
        >>> locales.resolution_route("en-GB")
        ('en-GB', 'en')
        >>> sorted(locales.mandatory_locales())
        ['en', 'fr']
    """

    __slots__ = ("_by_main", "_entries")

    def __init__(self, entries: Iterable[LocaleEntry]) -> None:
        """Validate entries and build the graph.

        Entries are compared as given; use the ``from_*`` constructors to
        canonicalize locale tags first.

        Args:
            entries: Locale entries in configuration order

        Raises:
            EmptyLocalesError: If no entry is given
            DuplicateMainLocaleError: If two entries share a main locale
            FallbackCycleError: If a fallback chain revisits a locale
        """
        self._entries: tuple[LocaleEntry, ...] = tuple(entries)
        self._by_main: dict[LocaleCode, LocaleEntry] = {}

        for entry in self._entries:
            if entry.main in self._by_main:
                raise DuplicateMainLocaleError(entry.main)
            self._by_main[entry.main] = entry
            self._check_chain(entry)

        if not self._entries:
            raise EmptyLocalesError

    def _check_chain(self, entry: LocaleEntry) -> None:
        """Walk the fallback chain of one entry over the whole entry list."""
        visited: list[LocaleCode] = [entry.main]
        current: LocaleEntry | None = entry
        while current is not None and current.fallback is not None:
            fallback = current.fallback
            if fallback in visited:
                visited.append(fallback)
                raise FallbackCycleError(visited)
            visited.append(fallback)
            current = self._find(fallback)

    def _find(self, main: LocaleCode) -> LocaleEntry | None:
        # Validation runs before _by_main is complete, so scan the full list.
        for entry in self._entries:
            if entry.main == main:
                return entry
        return None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str | None]]) -> Locales:
        """Build a graph from (main, fallback) tag pairs.

        Raises:
            LocaleParseError: If a tag is not a valid language identifier
            InvariantError: If the graph is invalid
        """
        return cls(
            LocaleEntry(
                canonicalize_locale(main),
                None if fallback is None else canonicalize_locale(fallback),
            )
            for main, fallback in pairs
        )

    @classmethod
    def from_config(cls, values: Iterable[str | Mapping[str, str | None]]) -> Locales:
        """Build a graph from configuration-loader values.

        Each value is a tag string (no fallback) or a mapping with a ``main``
        key and an optional ``fallback`` key.

        Example:
            >>> Locales.from_config(["en", {"main": "en-GB", "fallback": "en"}])
            Locales(['en', 'en-GB -> en'])

        Raises:
            ValueError: If a value has another shape
            LocaleParseError: If a tag is not a valid language identifier
            InvariantError: If the graph is invalid
        """
        pairs: list[tuple[str, str | None]] = []
        for value in values:
            match value:
                case str():
                    pairs.append((value, None))
                case {"main": str(main), **rest} if set(rest) <= {"fallback"}:
                    fallback = rest.get("fallback")
                    if fallback is not None and not isinstance(fallback, str):
                        msg = f"locale fallback must be a string, got {fallback!r}"
                        raise ValueError(msg)
                    pairs.append((main, fallback))
                case _:
                    msg = f"invalid locale configuration entry: {value!r}"
                    raise ValueError(msg)
        return cls.from_pairs(pairs)

    @classmethod
    def from_locales(cls, locales: Iterable[str]) -> Locales:
        """Derive a graph from a flat set of locale tags.

        Region-qualified locales fall back to their region-stripped form
        when that form is present; every other locale has no fallback.
        Entries are sorted, so the result does not depend on input order.

        Example:
            >>> Locales.from_locales(["fr-CA", "en", "en-GB", "fr-CA"])
            Locales(['en', 'en-GB -> en', 'fr-CA'])

        Raises:
            EmptyLocalesError: If no locale is given
            LocaleParseError: If a tag is not a valid language identifier
        """
        available = frozenset(canonicalize_locale(locale) for locale in locales)
        entries: list[LocaleEntry] = []
        for locale in sorted(available):
            fallback: LocaleCode | None = None
            if region_of(locale) is not None:
                stripped = strip_region(locale)
                if stripped in available:
                    fallback = stripped
            entries.append(LocaleEntry(locale, fallback))
        logger.debug("Derived locale graph: %s", ", ".join(str(e) for e in entries))
        return cls(entries)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def entries(self) -> tuple[LocaleEntry, ...]:
        """Entries in configuration order."""
        return self._entries

    def main_locales(self) -> frozenset[LocaleCode]:
        """Locales that bundles are built for."""
        return frozenset(self._by_main)

    def all_locales(self) -> frozenset[LocaleCode]:
        """Every main locale and every fallback mentioned."""
        locales = set(self._by_main)
        locales.update(e.fallback for e in self._entries if e.fallback is not None)
        return frozenset(locales)

    def resolution_route(self, main: LocaleCode) -> tuple[LocaleCode, ...] | None:
        """Locales consulted for a main locale, most specific first.

        The route ends at the terminal locale: an entry without fallback or
        a fallback that is not itself a main locale.

        Returns:
            Route tuple, or None if ``main`` is not a configured main locale
        """
        entry = self._by_main.get(main)
        if entry is None:
            return None
        route: list[LocaleCode] = [entry.main]
        while entry is not None and entry.fallback is not None:
            route.append(entry.fallback)
            entry = self._by_main.get(entry.fallback)
        return tuple(route)

    def mandatory_locale_for(self, main: LocaleCode) -> LocaleCode | None:
        """Terminal locale of the chain starting at ``main``."""
        route = self.resolution_route(main)
        return None if route is None else route[-1]

    def mandatory_locales(self) -> frozenset[LocaleCode]:
        """Terminal locales of every chain; these need complete content."""
        mandatory: set[LocaleCode] = set()
        for entry in self._entries:
            terminal = self.mandatory_locale_for(entry.main)
            if terminal is not None:
                mandatory.add(terminal)
        return frozenset(mandatory)

    # ------------------------------------------------------------------
    # Protocols
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[LocaleEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, locale: object) -> bool:
        return locale in self._by_main

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Locales):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"Locales({[str(e) for e in self._entries]!r})"
