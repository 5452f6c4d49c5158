"""ftlcatalog - Layered Fluent (FTL) catalogs with locale fallback graphs.

Resolves localized messages for (catalog, locale, key) from a tree of
per-locale FTL files. Content is layered from global, directory-scoped and
catalog-specific files, falling back through a configured locale graph.
Parsing and formatting are delegated to ftllexengine.

Public API:
    CatalogLocalization - Read-only gateway: try_translate, translate,
                          required_variables, required_functions
    CatalogBuilder - Tree walk, registration, consistency check, build
    Locales - Validated main/fallback locale graph
    BundleOptions - Configuration attached to every bundle
    Message - Reusable (catalog, key, args) handle

Exceptions:
    CatalogError - Base exception class
    InvariantError, ParserError, BuildErrors - Build time (fatal)
    TranslateError - Query time (recoverable)

Submodules:
    ftlcatalog.localization - Locale graph, store, builder, resolver, gateway
    ftlcatalog.introspection - Static variable and function requirements
    ftlcatalog.diagnostics - Error types and diagnostic codes

Python 3.13+.
"""

from .constants import UNEXPECTED_MESSAGE
from .diagnostics import (
    BuildError,
    BuildErrors,
    CatalogError,
    InvariantError,
    ParserError,
    TranslateError,
)
from .locale_utils import canonicalize_locale
from .localization import (
    BundleOptions,
    CatalogBuilder,
    CatalogLocalization,
    LocaleEntry,
    Locales,
    Message,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("ftlcatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "UNEXPECTED_MESSAGE",
    "BuildError",
    "BuildErrors",
    "BundleOptions",
    "CatalogBuilder",
    "CatalogError",
    "CatalogLocalization",
    "InvariantError",
    "LocaleEntry",
    "Locales",
    "Message",
    "ParserError",
    "TranslateError",
    "__version__",
    "canonicalize_locale",
]
