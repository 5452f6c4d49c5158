"""Type aliases for the catalog domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating CatalogLocalization call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "CatalogName",
    "DocumentIndex",
    "FTLSource",
    "LocaleCode",
    "MessageKey",
]

type LocaleCode = str
"""Canonical BCP-47 locale code (e.g., 'en', 'fr-CA', 'zh-Hant-TW')."""

type CatalogName = str
"""Normalized catalog name: '/'-joined relative path plus file stem (e.g., 'shop/cart')."""

type MessageKey = str
"""Message identifier, optionally followed by '.attribute' (e.g., 'login.title')."""

type FTLSource = str
"""Raw FTL source text as a Python string."""

type DocumentIndex = int
"""Position of a document in the ResourceStore arena."""
