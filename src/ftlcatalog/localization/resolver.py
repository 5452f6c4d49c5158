"""Bundle resolver: layering order and bundle construction.

For each (catalog, main locale) pair, documents are added to one engine
bundle lowest precedence first, each later document overriding
same-named definitions of earlier ones:

1. global documents, in registration order;
2. for each ancestor directory of the catalog, shallow to deep, for each
   locale of the reversed resolution route (most general first), the path
   documents of that (directory, locale);
3. for each locale of the reversed resolution route, the catalog's own
   document for that locale, if any.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, cast

from ftllexengine import FluentBundle, serialize_ftl
from ftllexengine.syntax import ASTTransformer
from ftllexengine.syntax.ast import Message, Pattern, Term, TextElement

from ftlcatalog.constants import KEY_SEPARATOR, PATH_SEPARATOR
from ftlcatalog.diagnostics import (
    LocaleNotSupportedError,
    MessageAttributeNotExistsError,
    MessageIdNotExistsError,
    MessageIdValueNotExistsError,
)

from .config import BundleOptions, TransformHook
from .locales import Locales
from .store import ResourceStore
from .types import CatalogName, DocumentIndex, LocaleCode, MessageKey

if TYPE_CHECKING:
    from ftllexengine.syntax.ast import Resource

__all__ = [
    "CatalogBundle",
    "ancestor_paths",
    "build_bundle",
    "build_bundles",
    "layering_order",
    "split_key",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CatalogBundle:
    """Layered, read-only view of one catalog for one main locale.

    Attributes:
        catalog: Catalog name
        locale: Main locale the bundle formats for
        bundle: Engine bundle holding the layered definitions
        documents: Arena indices layered into the bundle, lowest precedence first
        messages: Effective message definitions (last definition wins)
        terms: Effective term definitions (last definition wins)
    """

    catalog: CatalogName
    locale: LocaleCode
    bundle: FluentBundle
    documents: tuple[DocumentIndex, ...]
    messages: Mapping[str, Message]
    terms: Mapping[str, Term]

    def get_message(self, message_id: str) -> Message | None:
        """Effective definition of a message, or None."""
        return self.messages.get(message_id)

    def get_term(self, term_id: str) -> Term | None:
        """Effective definition of a term (without the leading '-'), or None."""
        return self.terms.get(term_id)

    def resolve_pattern(self, message_id: str, attribute: str | None = None) -> Pattern:
        """Pattern addressed by a message id and optional attribute.

        Raises:
            MessageIdNotExistsError: If the message is not defined
            MessageAttributeNotExistsError: If the attribute is not defined
            MessageIdValueNotExistsError: If no attribute is requested and the
                message has attributes only
        """
        message = self.messages.get(message_id)
        if message is None:
            raise MessageIdNotExistsError(message_id, self.locale)
        if attribute is not None:
            for attr in message.attributes:
                if attr.id.name == attribute:
                    return attr.value
            raise MessageAttributeNotExistsError(attribute, message_id, self.locale)
        if message.value is None or not message.value.elements:
            raise MessageIdValueNotExistsError(message_id, self.locale)
        return message.value


def split_key(key: MessageKey) -> tuple[str, str | None]:
    """Split a message key at its first '.' into (message_id, attribute).

    Example:
        >>> split_key("login.title")
        ('login', 'title')
        >>> split_key("welcome")
        ('welcome', None)
    """
    message_id, separator, attribute = key.partition(KEY_SEPARATOR)
    return message_id, (attribute if separator else None)


class _TextTransformer(ASTTransformer):
    """Applies a text hook to every literal text element of a resource."""

    def __init__(self, hook: TransformHook) -> None:
        super().__init__()
        self._hook = hook

    def visit_TextElement(self, node: TextElement) -> TextElement:  # noqa: N802
        return replace(node, value=self._hook(node.value))


def ancestor_paths(catalog: CatalogName) -> tuple[str, ...]:
    """Directories enclosing a catalog, from the locale root down to its parent.

    Example:
        >>> ancestor_paths("a/b/name")
        ('', 'a', 'a/b')
        >>> ancestor_paths("home")
        ('',)
    """
    segments = catalog.split(PATH_SEPARATOR)[:-1]
    return ("", *(PATH_SEPARATOR.join(segments[:depth]) for depth in range(1, len(segments) + 1)))


def layering_order(
    store: ResourceStore, locales: Locales, catalog: CatalogName, locale: LocaleCode
) -> tuple[DocumentIndex, ...]:
    """Arena indices contributing to (catalog, locale), lowest precedence first.

    Raises:
        LocaleNotSupportedError: If locale is not a main locale
    """
    route = locales.resolution_route(locale)
    if route is None:
        raise LocaleNotSupportedError(locale)
    general_first = route[::-1]

    order: list[DocumentIndex] = list(store.global_documents())
    for directory in ancestor_paths(catalog):
        for route_locale in general_first:
            order.extend(store.path_documents(directory, route_locale))
    for route_locale in general_first:
        index = store.named_document(catalog, route_locale)
        if index is not None:
            order.append(index)
    return tuple(order)


def build_bundle(
    store: ResourceStore,
    locales: Locales,
    options: BundleOptions,
    catalog: CatalogName,
    locale: LocaleCode,
) -> CatalogBundle:
    """Layer the documents of (catalog, locale) into a new engine bundle.

    Raises:
        LocaleNotSupportedError: If locale is not a main locale
    """
    order = layering_order(store, locales, catalog, locale)

    bundle = FluentBundle(
        locale,
        use_isolating=options.use_isolating,
        cache=options.cache,
        strict=False,
    )
    for name, func in options.functions.items():
        bundle.add_function(name, func)

    transformer = _TextTransformer(options.transform) if options.transform else None
    messages: dict[str, Message] = {}
    terms: dict[str, Term] = {}
    for index in order:
        document = store[index]
        resource = document.resource
        source = document.source
        if transformer is not None:
            resource = cast("Resource", transformer.transform(resource))
            source = serialize_ftl(resource)
        bundle.add_resource(source, source_path=document.source_path, allow_overwrite=True)

        for entry in resource.entries:
            match entry:
                case Message():
                    messages[entry.id.name] = entry
                case Term():
                    terms[entry.id.name] = entry

    logger.debug(
        "Layered bundle %s/%s from %d documents: %s",
        catalog,
        locale,
        len(order),
        order,
    )
    return CatalogBundle(
        catalog=catalog,
        locale=locale,
        bundle=bundle,
        documents=order,
        messages=MappingProxyType(messages),
        terms=MappingProxyType(terms),
    )


def build_bundles(
    store: ResourceStore, locales: Locales, options: BundleOptions
) -> dict[CatalogName, dict[LocaleCode, CatalogBundle]]:
    """Build every (catalog, main locale) bundle eagerly.

    Returns:
        Bundles keyed by catalog then main locale, in sorted order
    """
    mains = sorted(locales.main_locales())
    return {
        catalog: {
            locale: build_bundle(store, locales, options, catalog, locale) for locale in mains
        }
        for catalog in store.catalog_names()
    }
