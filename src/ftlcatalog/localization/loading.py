"""Catalog builder: resource discovery, registration and consistency checks.

Components:
    CatalogBuilder - Collects parsed documents into a ResourceStore, either
                     programmatically or by walking a resource tree, then
                     validates and builds a CatalogLocalization

Resource tree layout::

    root/
        _shared.ftl          global document (must be private)
        en/
            _terms.ftl       path document for "" (every catalog of en)
            home.ftl         named document "home"
            shop/
                _terms.ftl   path document for "shop"
                cart.ftl     named document "shop/cart"
        fr/
            ...

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ftllexengine import parse_ftl
from ftllexengine.syntax.ast import Junk, Resource

from ftlcatalog.constants import PATH_SEPARATOR, PRIVATE_PREFIX, RESOURCE_EXTENSION
from ftlcatalog.diagnostics import (
    BuildErrors,
    GlobalNamedResourceError,
    LocaleDirectoryError,
    LocaleParseError,
    MissingLocalesError,
    MissingResourceError,
    ReadPathError,
    ResourceSyntaxError,
)
from ftlcatalog.locale_utils import canonicalize_locale

from .config import BundleOptions
from .locales import Locales
from .resolver import build_bundles
from .store import ResourceStore
from .types import CatalogName, DocumentIndex, FTLSource, LocaleCode

if TYPE_CHECKING:
    from .orchestrator import CatalogLocalization

__all__ = ["CatalogBuilder", "normalize_relative_path"]

logger = logging.getLogger(__name__)


def normalize_relative_path(path: str) -> str:
    """Normalize a relative resource path to '/'-joined segments.

    Backslashes are treated as separators; empty segments and surrounding
    separators are dropped.

    Example:
        >>> normalize_relative_path("/shop\\\\cart/")
        'shop/cart'

    Raises:
        ValueError: If a segment is "." or "..", which would escape the tree
    """
    segments = [s for s in path.replace("\\", PATH_SEPARATOR).split(PATH_SEPARATOR) if s]
    for segment in segments:
        if segment in {".", ".."}:
            msg = f"relative path must not contain '.' or '..' segments: {path!r}"
            raise ValueError(msg)
    return PATH_SEPARATOR.join(segments)


def _join(relative_path: str, name: str) -> str:
    return f"{relative_path}{PATH_SEPARATOR}{name}" if relative_path else name


def _parse_source(source: FTLSource, source_path: str) -> Resource:
    """Parse FTL source, rejecting any syntax error.

    Raises:
        ResourceSyntaxError: If the parser produced Junk entries
    """
    resource = parse_ftl(source)
    junk = [entry for entry in resource.entries if isinstance(entry, Junk)]
    if junk:
        messages: list[str] = []
        for entry in junk:
            if entry.annotations:
                messages.extend(annotation.message for annotation in entry.annotations)
            else:
                messages.append(f"unparsed content {entry.content.strip()[:80]!r}")
        raise ResourceSyntaxError(source_path, messages)
    return resource


def _list_directory(directory: Path) -> list[Path]:
    """Sorted, non-hidden entries of a directory.

    Raises:
        ReadPathError: If the directory cannot be listed
    """
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise ReadPathError(directory, str(e)) from e
    visible = [entry for entry in entries if not entry.name.startswith(".")]
    if len(visible) != len(entries):
        logger.debug("Skipped %d hidden entries in %s", len(entries) - len(visible), directory)
    return visible


def _read(path: Path) -> FTLSource:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, ValueError) as e:
        # ValueError covers UnicodeDecodeError
        raise ReadPathError(path, str(e)) from e


def _is_resource_file(path: Path) -> bool:
    return path.suffix == RESOURCE_EXTENSION and path.is_file()


class CatalogBuilder:
    """Collects resource documents for one locale graph and builds catalogs.

    Build is single threaded. Documents are parsed as they are added; a
    source with syntax errors is rejected immediately.

    Example:
        >>> builder = CatalogBuilder(Locales.from_pairs([("en", None)]))
        >>> builder.add_named_resource("home", "en", "welcome = Welcome!")
        0
        >>> l10n = builder.build()
        >>> l10n.try_translate("home", "en", "welcome")
        'Welcome!'
    """

    __slots__ = ("_locales", "_options", "_store")

    def __init__(
        self,
        locales: Locales,
        *,
        options: BundleOptions | None = None,
        store: ResourceStore | None = None,
    ) -> None:
        """Initialize builder.

        Args:
            locales: Validated locale graph
            options: Bundle configuration (default: BundleOptions())
            store: Pre-populated store to continue from (default: empty)
        """
        self._locales = locales
        self._options = options if options is not None else BundleOptions()
        self._store = store if store is not None else ResourceStore()

    @property
    def locales(self) -> Locales:
        """Locale graph the catalogs are built for."""
        return self._locales

    @property
    def options(self) -> BundleOptions:
        """Configuration attached to every bundle."""
        return self._options

    @property
    def store(self) -> ResourceStore:
        """Documents registered so far."""
        return self._store

    def catalog_names(self) -> tuple[CatalogName, ...]:
        """Catalogs registered at any locale, sorted."""
        return self._store.catalog_names()

    # ------------------------------------------------------------------
    # Programmatic registration
    # ------------------------------------------------------------------

    def add_global_resource(
        self, source: FTLSource, *, source_path: str | None = None
    ) -> DocumentIndex:
        """Register a document shared by every catalog and locale.

        Raises:
            ResourceSyntaxError: If the source has syntax errors
        """
        path = source_path or "<global>"
        return self._store.add_global(
            source, _parse_source(source, path), source_path=path
        )

    def add_path_resource(
        self,
        relative_path: str,
        locale: str,
        source: FTLSource,
        *,
        source_path: str | None = None,
    ) -> DocumentIndex:
        """Register a document shared by catalogs under ``relative_path`` for one locale.

        Args:
            relative_path: Directory inside the locale root ("" for the root)
            locale: Locale tag
            source: FTL source
            source_path: Path used in diagnostics

        Raises:
            LocaleParseError: If locale is not a valid tag
            ValueError: If relative_path escapes the tree
            ResourceSyntaxError: If the source has syntax errors
        """
        canonical = canonicalize_locale(locale)
        normalized = normalize_relative_path(relative_path)
        path = source_path or f"{canonical}/{_join(normalized, '<shared>')}"
        return self._store.add_path(
            normalized, canonical, source, _parse_source(source, path), source_path=path
        )

    def add_named_resource(
        self,
        catalog: CatalogName,
        locale: str,
        source: FTLSource,
        *,
        source_path: str | None = None,
    ) -> DocumentIndex:
        """Register a catalog's own document for one locale.

        Args:
            catalog: Catalog name, relative path plus file stem (e.g., "shop/cart")
            locale: Locale tag
            source: FTL source
            source_path: Path used in diagnostics

        Raises:
            LocaleParseError: If locale is not a valid tag
            ValueError: If the catalog name is empty or escapes the tree
            ResourceSyntaxError: If the source has syntax errors
            DuplicateResourceError: If the catalog already has a document for locale
        """
        canonical = canonicalize_locale(locale)
        name = normalize_relative_path(catalog)
        if not name:
            msg = "catalog name must not be empty"
            raise ValueError(msg)
        path = source_path or f"{canonical}/{name}{RESOURCE_EXTENSION}"
        return self._store.add_named(
            name, canonical, source, _parse_source(source, path), source_path=path
        )

    # ------------------------------------------------------------------
    # Resource tree
    # ------------------------------------------------------------------

    @classmethod
    def parse(
        cls,
        root: str | Path,
        locales: Locales | None = None,
        *,
        options: BundleOptions | None = None,
    ) -> CatalogBuilder:
        """Walk a resource tree and register every resource file.

        Args:
            root: Tree root; its sub-directories are locale tags
            locales: Explicit locale graph, or None to derive one from the
                     locale directories found
            options: Bundle configuration

        Returns:
            Builder holding every document of the tree

        Raises:
            ParserError: If the tree is malformed or cannot be read
            EmptyLocalesError: If no locales given and no locale directory found
        """
        root = Path(root)
        store = ResourceStore()
        allowed = None if locales is None else locales.all_locales()
        visited: set[LocaleCode] = set()

        for entry in _list_directory(root):
            if entry.is_dir():
                locale = cls._locale_of_directory(entry, allowed)
                if locale is None:
                    continue
                visited.add(locale)
                cls._walk_locale(store, entry, locale, "")
            elif _is_resource_file(entry):
                if not entry.name.startswith(PRIVATE_PREFIX):
                    raise GlobalNamedResourceError(entry)
                source = _read(entry)
                store.add_global(source, _parse_source(source, str(entry)), source_path=str(entry))
            else:
                logger.debug("Ignored non-resource entry %s", entry)

        if locales is None:
            locales = Locales.from_locales(visited)
        else:
            missing = locales.mandatory_locales() - visited
            if missing:
                raise MissingLocalesError(missing)

        logger.debug(
            "Parsed resource tree %s: %d documents, %d locales",
            root,
            len(store),
            len(visited),
        )
        return cls(locales, options=options, store=store)

    @staticmethod
    def _locale_of_directory(
        directory: Path, allowed: frozenset[LocaleCode] | None
    ) -> LocaleCode | None:
        """Locale a root directory stands for, or None to skip it.

        Raises:
            LocaleDirectoryError: If no explicit locales and the name is not a tag
        """
        try:
            locale = canonicalize_locale(directory.name)
        except LocaleParseError as e:
            if allowed is None:
                raise LocaleDirectoryError(directory.name, e.reason) from e
            logger.warning("Skipped directory %s: not a locale tag", directory)
            return None
        if allowed is not None and locale not in allowed:
            logger.warning("Skipped directory %s: locale %s is not configured", directory, locale)
            return None
        return locale

    @classmethod
    def _walk_locale(
        cls, store: ResourceStore, directory: Path, locale: LocaleCode, relative_path: str
    ) -> None:
        for entry in _list_directory(directory):
            if entry.is_dir():
                cls._walk_locale(store, entry, locale, _join(relative_path, entry.name))
            elif _is_resource_file(entry):
                source = _read(entry)
                resource = _parse_source(source, str(entry))
                if entry.name.startswith(PRIVATE_PREFIX):
                    store.add_path(
                        relative_path, locale, source, resource, source_path=str(entry)
                    )
                else:
                    store.add_named(
                        _join(relative_path, entry.stem),
                        locale,
                        source,
                        resource,
                        source_path=str(entry),
                    )
            else:
                logger.debug("Ignored non-resource entry %s", entry)

    # ------------------------------------------------------------------
    # Validation and build
    # ------------------------------------------------------------------

    def check_consistency(self) -> list[MissingResourceError]:
        """Find catalogs lacking their own document at a mandatory locale.

        Fallback does not satisfy the requirement: a mandatory locale is the
        end of its own chain.

        Returns:
            One error per incomplete catalog, sorted by catalog (empty if valid)
        """
        mandatory = self._locales.mandatory_locales()
        errors: list[MissingResourceError] = []
        for catalog in self._store.catalog_names():
            missing = mandatory - self._store.named_locales(catalog)
            if missing:
                errors.append(MissingResourceError(catalog, missing))
        return errors

    def build(self) -> CatalogLocalization:
        """Validate the registered documents and build every bundle.

        Returns:
            Immutable CatalogLocalization

        Raises:
            BuildErrors: If any catalog is incomplete; nothing is built
        """
        # Circular: orchestrator imports the builder for from_directory()
        from .orchestrator import CatalogLocalization  # noqa: PLC0415

        errors = self.check_consistency()
        if errors:
            logger.error("Build aborted with %d error(s)", len(errors))
            raise BuildErrors(errors)

        bundles = build_bundles(self._store, self._locales, self._options)
        documents = tuple(self._store)
        logger.info(
            "Built %d catalogs for %d locales: %d documents, %d bundles",
            len(bundles),
            len(self._locales.main_locales()),
            len(documents),
            sum(len(by_locale) for by_locale in bundles.values()),
        )
        return CatalogLocalization(self._locales, documents, bundles, self._options)

    def __repr__(self) -> str:
        return f"CatalogBuilder(locales={self._locales!r}, store={self._store!r})"
