"""Append-only arena of parsed resource documents.

The store owns every parsed document of a build. Everything downstream
(bundle layering, static analysis) refers to documents by their integer
index in the arena, never by holding documents of its own.

Three indices are maintained next to the arena, one per contribution kind:

- global documents, in registration order;
- path documents, keyed by (relative_path, locale), in registration order;
- named documents, keyed by catalog then locale, at most one per pair.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from ftllexengine.syntax.ast import Resource

from ftlcatalog.constants import PATH_SEPARATOR
from ftlcatalog.diagnostics import DuplicateResourceError
from ftlcatalog.enums import ContributionKind

from .types import CatalogName, DocumentIndex, FTLSource, LocaleCode

__all__ = ["Document", "ResourceStore"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Document:
    """One parsed resource registered in the store.

    Attributes:
        index: Position in the arena
        kind: How the document contributes to bundles
        source: FTL source text as read
        resource: Parsed AST of ``source``
        locale: Locale directory the document came from (None for globals)
        relative_path: Directory relative to the locale root ("" for the root)
        name: Catalog name for named documents, None otherwise
        source_path: Path used in diagnostics
    """

    index: DocumentIndex
    kind: ContributionKind
    source: FTLSource
    resource: Resource
    locale: LocaleCode | None = None
    relative_path: str = ""
    name: CatalogName | None = None
    source_path: str | None = None


class ResourceStore:
    """Indexed, append-only collection of parsed documents.

    Documents are only ever added; indices stay valid for the store's
    lifetime.
    """

    __slots__ = ("_documents", "_globals", "_named", "_paths")

    def __init__(self) -> None:
        self._documents: list[Document] = []
        self._globals: list[DocumentIndex] = []
        self._paths: dict[tuple[str, LocaleCode], list[DocumentIndex]] = {}
        self._named: dict[CatalogName, dict[LocaleCode, DocumentIndex]] = {}

    def _register(self, document: Document) -> Document:
        self._documents.append(document)
        logger.debug(
            "Registered %s document #%d (locale=%s, path=%r, source=%s)",
            document.kind,
            document.index,
            document.locale,
            document.name if document.name is not None else document.relative_path,
            document.source_path,
        )
        return document

    def add_global(
        self, source: FTLSource, resource: Resource, *, source_path: str | None = None
    ) -> DocumentIndex:
        """Register a document that applies to every catalog and locale."""
        document = self._register(
            Document(
                index=len(self._documents),
                kind=ContributionKind.GLOBAL_UNNAMED,
                source=source,
                resource=resource,
                source_path=source_path,
            )
        )
        self._globals.append(document.index)
        return document.index

    def add_path(
        self,
        relative_path: str,
        locale: LocaleCode,
        source: FTLSource,
        resource: Resource,
        *,
        source_path: str | None = None,
    ) -> DocumentIndex:
        """Register a document shared by catalogs under ``relative_path`` for one locale."""
        document = self._register(
            Document(
                index=len(self._documents),
                kind=ContributionKind.PATH_UNNAMED,
                source=source,
                resource=resource,
                locale=locale,
                relative_path=relative_path,
                source_path=source_path,
            )
        )
        self._paths.setdefault((relative_path, locale), []).append(document.index)
        return document.index

    def add_named(
        self,
        name: CatalogName,
        locale: LocaleCode,
        source: FTLSource,
        resource: Resource,
        *,
        source_path: str | None = None,
    ) -> DocumentIndex:
        """Register a catalog's own document for one locale.

        Raises:
            DuplicateResourceError: If the catalog already has a document for locale
        """
        by_locale = self._named.setdefault(name, {})
        if locale in by_locale:
            raise DuplicateResourceError(name, locale)
        relative_path, _, _ = name.rpartition(PATH_SEPARATOR)
        document = self._register(
            Document(
                index=len(self._documents),
                kind=ContributionKind.NAMED,
                source=source,
                resource=resource,
                locale=locale,
                relative_path=relative_path,
                name=name,
                source_path=source_path,
            )
        )
        by_locale[locale] = document.index
        return document.index

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def global_documents(self) -> tuple[DocumentIndex, ...]:
        """Global documents in registration order."""
        return tuple(self._globals)

    def path_documents(
        self, relative_path: str, locale: LocaleCode
    ) -> tuple[DocumentIndex, ...]:
        """Path documents registered for (relative_path, locale), in registration order."""
        return tuple(self._paths.get((relative_path, locale), ()))

    def named_document(self, name: CatalogName, locale: LocaleCode) -> DocumentIndex | None:
        """The catalog's own document for locale, if registered."""
        return self._named.get(name, {}).get(locale)

    def named_locales(self, name: CatalogName) -> frozenset[LocaleCode]:
        """Locales the catalog has its own document for."""
        return frozenset(self._named.get(name, {}))

    def catalog_names(self) -> tuple[CatalogName, ...]:
        """Every catalog registered at any locale, sorted."""
        return tuple(sorted(self._named))

    def __getitem__(self, index: DocumentIndex) -> Document:
        return self._documents[index]

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self) -> str:
        return (
            f"ResourceStore(documents={len(self._documents)}, "
            f"catalogs={len(self._named)})"
        )
