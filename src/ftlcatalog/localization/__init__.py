"""Catalog localization package.

Provides the full catalog stack: locale graph, resource store, builder,
bundle resolver and the read-only translation gateway.

Submodules:
    types        - PEP 695 type aliases (LocaleCode, CatalogName, MessageKey, ...)
    config       - BundleOptions (per-bundle engine configuration)
    locales      - LocaleEntry, Locales (fallback graph)
    store        - Document, ResourceStore (document arena)
    loading      - CatalogBuilder (tree walk, registration, consistency check)
    resolver     - CatalogBundle, layering_order (bundle construction)
    orchestrator - CatalogLocalization (translation gateway)
    message      - Message (reusable message handle)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from ftlcatalog.enums import ContributionKind
from ftlcatalog.localization.config import BundleOptions, FormatterHook, TransformHook
from ftlcatalog.localization.loading import CatalogBuilder, normalize_relative_path
from ftlcatalog.localization.locales import LocaleEntry, Locales
from ftlcatalog.localization.message import Message
from ftlcatalog.localization.orchestrator import CatalogLocalization
from ftlcatalog.localization.resolver import (
    CatalogBundle,
    ancestor_paths,
    build_bundle,
    build_bundles,
    layering_order,
    split_key,
)
from ftlcatalog.localization.store import Document, ResourceStore
from ftlcatalog.localization.types import (
    CatalogName,
    DocumentIndex,
    FTLSource,
    LocaleCode,
    MessageKey,
)

__all__ = [
    # Gateway
    "CatalogLocalization",
    "Message",
    # Build
    "CatalogBuilder",
    "normalize_relative_path",
    # Locale graph
    "LocaleEntry",
    "Locales",
    # Store
    "ContributionKind",
    "Document",
    "ResourceStore",
    # Bundles
    "CatalogBundle",
    "ancestor_paths",
    "build_bundle",
    "build_bundles",
    "layering_order",
    "split_key",
    # Configuration
    "BundleOptions",
    "FormatterHook",
    "TransformHook",
    # Type aliases for user code type annotations
    "CatalogName",
    "DocumentIndex",
    "FTLSource",
    "LocaleCode",
    "MessageKey",
]
