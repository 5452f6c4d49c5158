"""Catalog translation gateway.

CatalogLocalization is the published, read-only result of a build. It
answers (catalog, locale, key) queries from eagerly built bundles and
exposes the static requirement analysis callers use to validate
arguments ahead of time.

Key properties:
- Immutable: no mutators; bundles, documents and locales are fixed at build
- Lock-free read path: queries never change shared state
- Two query surfaces: try_translate() raises a typed TranslateError,
  translate() substitutes UNEXPECTED_MESSAGE so display code stays total

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from ftlcatalog.constants import BUILTIN_FUNCTIONS, UNEXPECTED_MESSAGE
from ftlcatalog.diagnostics import (
    FormatErrors,
    LocaleNotSupportedError,
    LocaleParseError,
    ResourceNotExistsError,
    TranslateError,
)
from ftlcatalog.introspection import collect_functions, collect_variables, missing_arguments
from ftlcatalog.locale_utils import canonicalize_locale

from .config import BundleOptions
from .loading import CatalogBuilder
from .locales import Locales
from .resolver import CatalogBundle, split_key
from .store import Document
from .types import CatalogName, LocaleCode, MessageKey

if TYPE_CHECKING:
    from ftllexengine import FluentValue

__all__ = ["CatalogLocalization"]

logger = logging.getLogger(__name__)


class CatalogLocalization:
    """Read-only catalog set: one layered bundle per (catalog, main locale).

    Instances are produced by CatalogBuilder.build() or from_directory();
    a failed build never produces one.

    Example:
        >>> l10n = CatalogLocalization.from_directory(
        ...     "locales", options=BundleOptions(use_isolating=False)
        ... )
        >>> l10n.try_translate("home", "en", "welcome", {"name": "Alan"})
        'Welcome Alan!'
        >>> l10n.translate("home", "en", "no-such-message")
        'Unexpected message'
    """

    __slots__ = ("_bundles", "_documents", "_functions", "_locales", "_options")

    def __init__(
        self,
        locales: Locales,
        documents: tuple[Document, ...],
        bundles: Mapping[CatalogName, Mapping[LocaleCode, CatalogBundle]],
        options: BundleOptions,
    ) -> None:
        """Initialize from build artifacts.

        Args:
            locales: Locale graph the bundles were built for
            documents: Every parsed document, indexed like the build's store
            bundles: Bundles keyed by catalog then main locale
            options: Configuration the bundles were built with
        """
        self._locales = locales
        self._documents = documents
        self._bundles: Mapping[CatalogName, Mapping[LocaleCode, CatalogBundle]] = (
            MappingProxyType(
                {
                    catalog: MappingProxyType(dict(by_locale))
                    for catalog, by_locale in bundles.items()
                }
            )
        )
        self._options = options
        self._functions = collect_functions(documents)

    @classmethod
    def from_directory(
        cls,
        root: str | Path,
        locales: Locales | None = None,
        *,
        options: BundleOptions | None = None,
    ) -> CatalogLocalization:
        """Parse a resource tree and build it in one call.

        Raises:
            ParserError: If the tree is malformed or cannot be read
            InvariantError: If no locales given and none can be derived
            BuildErrors: If catalogs are incomplete at mandatory locales
        """
        return CatalogBuilder.parse(root, locales, options=options).build()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def locales(self) -> Locales:
        """Locale graph the bundles were built for."""
        return self._locales

    @property
    def options(self) -> BundleOptions:
        """Configuration attached to every bundle."""
        return self._options

    @property
    def catalogs(self) -> tuple[CatalogName, ...]:
        """Catalog names, sorted."""
        return tuple(sorted(self._bundles))

    @property
    def documents(self) -> tuple[Document, ...]:
        """Every parsed document of the build, in registration order."""
        return self._documents

    def __repr__(self) -> str:
        return (
            f"CatalogLocalization(catalogs={len(self._bundles)}, "
            f"locales={sorted(self._locales.main_locales())!r})"
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def has_catalog(self, catalog: CatalogName) -> bool:
        """Check if a catalog exists."""
        return catalog in self._bundles

    def get_bundle(self, catalog: CatalogName, locale: str) -> CatalogBundle:
        """Layered bundle for (catalog, locale).

        Raises:
            ResourceNotExistsError: If the catalog does not exist
            LocaleNotSupportedError: If locale is not a main locale
        """
        by_locale = self._bundles.get(catalog)
        if by_locale is None:
            raise ResourceNotExistsError(catalog)
        try:
            canonical = canonicalize_locale(locale)
        except LocaleParseError as e:
            raise LocaleNotSupportedError(locale) from e
        bundle = by_locale.get(canonical)
        if bundle is None:
            raise LocaleNotSupportedError(canonical)
        return bundle

    def has_message(self, catalog: CatalogName, locale: str, key: MessageKey) -> bool:
        """Check if a key resolves to a pattern for (catalog, locale)."""
        try:
            self.get_bundle(catalog, locale).resolve_pattern(*split_key(key))
        except TranslateError:
            return False
        return True

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _prepare_args(
        self, args: Mapping[str, FluentValue] | None, locale: LocaleCode
    ) -> dict[str, FluentValue]:
        """Copy args, passing each value through the formatter hook if configured."""
        if not args:
            return {}
        formatter = self._options.formatter
        if formatter is None:
            return dict(args)
        prepared: dict[str, FluentValue] = {}
        for name, value in args.items():
            replacement = formatter(value, locale)
            prepared[name] = value if replacement is None else replacement
        return prepared

    def try_translate(
        self,
        catalog: CatalogName,
        locale: str,
        key: MessageKey,
        args: Mapping[str, FluentValue] | None = None,
    ) -> str:
        """Format a message or message attribute.

        Args:
            catalog: Catalog name (e.g., "home", "shop/cart")
            locale: Main locale tag
            key: Message id, or "message-id.attribute"
            args: Variable arguments

        Returns:
            Formatted text

        Raises:
            ResourceNotExistsError: Unknown catalog
            LocaleNotSupportedError: Locale is not a main locale
            MessageIdNotExistsError: Message not defined
            MessageAttributeNotExistsError: Attribute not defined
            MessageIdValueNotExistsError: Message has attributes only
            FormatErrors: The engine reported errors while formatting
        """
        bundle = self.get_bundle(catalog, locale)
        message_id, attribute = split_key(key)
        bundle.resolve_pattern(message_id, attribute)

        text, errors = bundle.bundle.format_pattern(
            message_id, self._prepare_args(args, bundle.locale), attribute=attribute
        )
        if errors:
            raise FormatErrors(errors, text)
        return text

    def translate(
        self,
        catalog: CatalogName,
        locale: str,
        key: MessageKey,
        args: Mapping[str, FluentValue] | None = None,
    ) -> str:
        """Format a message, returning UNEXPECTED_MESSAGE on any failure.

        Failures are logged at WARNING level.
        """
        try:
            return self.try_translate(catalog, locale, key, args)
        except TranslateError as e:
            logger.warning(
                "Translation of %s/%s for locale %s failed: %s", catalog, key, locale, e
            )
            return UNEXPECTED_MESSAGE

    # ------------------------------------------------------------------
    # Static requirements
    # ------------------------------------------------------------------

    def required_variables(self, catalog: CatalogName, key: MessageKey) -> frozenset[str]:
        """Variables a message needs in every main locale (union).

        Raises:
            ResourceNotExistsError: Unknown catalog
            MessageIdNotExistsError: Message missing in some locale
            MessageAttributeNotExistsError: Attribute missing in some locale
            MessageIdValueNotExistsError: Message has attributes only
            CyclicReferenceError: Message or term references form a cycle
        """
        by_locale = self._bundles.get(catalog)
        if by_locale is None:
            raise ResourceNotExistsError(catalog)
        message_id, attribute = split_key(key)
        bundles = [by_locale[locale] for locale in sorted(by_locale)]
        return collect_variables(bundles, message_id, attribute)

    def required_functions(self, catalog: CatalogName | None = None) -> frozenset[str]:
        """Functions referenced anywhere in any parsed document.

        Function availability is a build-wide contract, so the scan covers
        every document. When ``catalog`` is given it must exist.

        Raises:
            ResourceNotExistsError: If catalog is given and unknown
        """
        if catalog is not None and catalog not in self._bundles:
            raise ResourceNotExistsError(catalog)
        return self._functions

    def missing_arguments(
        self,
        catalog: CatalogName,
        key: MessageKey,
        args: Mapping[str, FluentValue] | None = None,
    ) -> tuple[str, ...]:
        """Required variables absent from args, sorted."""
        return missing_arguments(self.required_variables(catalog, key), args)

    def missing_functions(self) -> tuple[str, ...]:
        """Referenced functions neither built into the engine nor configured, sorted."""
        available = BUILTIN_FUNCTIONS | self._options.function_names
        return tuple(sorted(self.required_functions() - available))
