"""Tests for the ResourceStore document arena.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from ftllexengine import parse_ftl

from ftlcatalog.diagnostics import DuplicateResourceError
from ftlcatalog.localization import ContributionKind, ResourceStore


def _add_named(store: ResourceStore, name: str, locale: str, source: str = "a = A") -> int:
    return store.add_named(name, locale, source, parse_ftl(source), source_path=f"{locale}/{name}")


class TestResourceStore:
    """Test registration and indexed lookups."""

    def test_indices_follow_registration_order(self) -> None:
        """Each document gets the next arena index."""
        store = ResourceStore()
        first = store.add_global("-t = A", parse_ftl("-t = A"))
        second = store.add_path("shop", "en", "-t = B", parse_ftl("-t = B"))
        third = _add_named(store, "shop/cart", "en")

        assert (first, second, third) == (0, 1, 2)
        assert len(store) == 3
        assert [document.index for document in store] == [0, 1, 2]

    def test_document_fields(self) -> None:
        """Documents record kind, locale, directory and name."""
        store = ResourceStore()
        store.add_global("-t = A", parse_ftl("-t = A"), source_path="_global.ftl")
        store.add_path("shop", "en", "-t = B", parse_ftl("-t = B"))
        _add_named(store, "shop/cart", "en")

        global_doc, path_doc, named_doc = store[0], store[1], store[2]
        assert global_doc.kind is ContributionKind.GLOBAL_UNNAMED
        assert global_doc.locale is None
        assert global_doc.source_path == "_global.ftl"
        assert path_doc.kind is ContributionKind.PATH_UNNAMED
        assert (path_doc.locale, path_doc.relative_path) == ("en", "shop")
        assert named_doc.kind is ContributionKind.NAMED
        assert (named_doc.name, named_doc.relative_path) == ("shop/cart", "shop")

    def test_lookups(self) -> None:
        """Globals, path documents and named documents are indexed separately."""
        store = ResourceStore()
        store.add_global("-a = A", parse_ftl("-a = A"))
        store.add_path("", "en", "-b = B", parse_ftl("-b = B"))
        store.add_path("", "en", "-c = C", parse_ftl("-c = C"))
        store.add_global("-d = D", parse_ftl("-d = D"))
        _add_named(store, "home", "en")
        _add_named(store, "home", "fr")
        _add_named(store, "about", "en")

        assert store.global_documents() == (0, 3)
        assert store.path_documents("", "en") == (1, 2)
        assert store.path_documents("", "fr") == ()
        assert store.named_document("home", "fr") == 5
        assert store.named_document("home", "de") is None
        assert store.named_locales("home") == {"en", "fr"}
        assert store.named_locales("missing") == frozenset()
        assert store.catalog_names() == ("about", "home")

    def test_duplicate_named_document_rejected(self) -> None:
        """A (catalog, locale) pair can only be registered once."""
        store = ResourceStore()
        _add_named(store, "home", "en")

        with pytest.raises(DuplicateResourceError) as exc_info:
            _add_named(store, "home", "en")

        assert (exc_info.value.catalog, exc_info.value.locale) == ("home", "en")
        assert len(store) == 1

    def test_repr(self) -> None:
        """Repr summarizes document and catalog counts."""
        store = ResourceStore()
        _add_named(store, "home", "en")

        assert repr(store) == "ResourceStore(documents=1, catalogs=1)"
