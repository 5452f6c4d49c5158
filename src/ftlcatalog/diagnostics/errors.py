"""Catalog exception hierarchy.

Two phases, never mixed:

- Build time (InvariantError, ParserError, BuildError, BuildErrors) are fatal:
  they are raised to whoever constructs the catalogs and no usable
  CatalogLocalization is published.
- Query time (TranslateError) are per call and recoverable; a failed query
  never changes engine state.

Every exception carries a DiagnosticCode in its ``code`` attribute and keeps
the offending values as attributes for programmatic inspection.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import ClassVar

from .codes import DiagnosticCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base
    "CatalogError",
    # Locale graph
    "InvariantError",
    "EmptyLocalesError",
    "DuplicateMainLocaleError",
    "FallbackCycleError",
    "LocaleParseError",
    # Resource tree
    "ParserError",
    "ReadPathError",
    "LocaleDirectoryError",
    "MissingLocalesError",
    "GlobalNamedResourceError",
    "ResourceSyntaxError",
    "DuplicateResourceError",
    # Build
    "BuildError",
    "MissingResourceError",
    "MissingMessageError",
    "ExtraMessageError",
    "MissingAttributeError",
    "ExtraAttributeError",
    "BuildErrors",
    # Translation
    "TranslateError",
    "ResourceNotExistsError",
    "LocaleNotSupportedError",
    "MessageIdNotExistsError",
    "MessageAttributeNotExistsError",
    "MessageIdValueNotExistsError",
    "FormatErrors",
    "CyclicReferenceError",
    "ReferenceDepthError",
]


def _join(values: Iterable[object], separator: str) -> str:
    return separator.join(str(value) for value in values)


def _for_locales(locales: Sequence[str]) -> str:
    noun = "locale" if len(locales) == 1 else "locales"
    return f"for {noun}: {_join(locales, ', ')}"


class CatalogError(Exception):
    """Base exception for all catalog errors.

    Attributes:
        code: Diagnostic code identifying the error kind
    """

    code: ClassVar[DiagnosticCode]


# ============================================================================
# LOCALE GRAPH
# ============================================================================


class InvariantError(CatalogError, ValueError):
    """Locale configuration violates a graph invariant."""


class EmptyLocalesError(InvariantError):
    """No locale entry was configured."""

    code = DiagnosticCode.LOCALES_EMPTY

    def __init__(self) -> None:
        super().__init__("locale configuration is empty")


class DuplicateMainLocaleError(InvariantError):
    """Two entries share the same main locale."""

    code = DiagnosticCode.LOCALE_MAIN_DUPLICATE

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"main locale duplicate: {locale}")


class FallbackCycleError(InvariantError):
    """Following fallbacks revisits a locale.

    Attributes:
        path: Visited locales in order, ending with the repeated locale
    """

    code = DiagnosticCode.LOCALE_FALLBACK_CYCLE

    def __init__(self, path: Sequence[str]) -> None:
        self.path: tuple[str, ...] = tuple(path)
        super().__init__(f"infinite fallback loop detected: ({_join(self.path, ' -> ')})")


class LocaleParseError(CatalogError, ValueError):
    """Text is not a valid language identifier like "en-US"."""

    code = DiagnosticCode.LOCALE_PARSE_FAILED

    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        self.reason = reason
        super().__init__(f"invalid locale {tag!r}: {reason}")


# ============================================================================
# RESOURCE TREE
# ============================================================================


class ParserError(CatalogError):
    """Resource tree cannot be read into a catalog builder."""


class ReadPathError(ParserError):
    """A file or directory of the tree cannot be read."""

    code = DiagnosticCode.READ_PATH_FAILED

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"impossible to read path `{path}` ({reason})")


class LocaleDirectoryError(ParserError):
    """A root directory name is not a locale tag (no explicit locales given)."""

    code = DiagnosticCode.LOCALE_DIRECTORY_INVALID

    def __init__(self, dir_name: str, reason: str) -> None:
        self.dir_name = dir_name
        self.reason = reason
        super().__init__(
            f"impossible to parse directory `{dir_name}` as a language identifier ({reason})"
        )


class MissingLocalesError(ParserError):
    """Mandatory locales have no directory in the tree."""

    code = DiagnosticCode.MANDATORY_LOCALES_MISSING

    def __init__(self, locales: Iterable[str]) -> None:
        self.locales: tuple[str, ...] = tuple(sorted(locales))
        noun = "directory" if len(self.locales) == 1 else "directories"
        super().__init__(f"missing mandatory locale {noun}: {_join(self.locales, ', ')}")


class GlobalNamedResourceError(ParserError):
    """A resource file at the tree root is not marked private."""

    code = DiagnosticCode.GLOBAL_NAMED_RESOURCE

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f'named resource "{path}" cannot be global, please prefix file name with `_`'
        )


class ResourceSyntaxError(ParserError):
    """A resource contains FTL syntax errors.

    Attributes:
        source_path: Diagnostic path of the resource
        messages: One message per parser annotation
    """

    code = DiagnosticCode.RESOURCE_SYNTAX_ERROR

    def __init__(self, source_path: str, messages: Sequence[str]) -> None:
        self.source_path = source_path
        self.messages: tuple[str, ...] = tuple(messages)
        super().__init__(
            f"parsing errors in {source_path}:\n  - {_join(self.messages, '\n  - ')}"
        )


class DuplicateResourceError(ParserError):
    """A catalog is registered twice for the same locale."""

    code = DiagnosticCode.RESOURCE_DUPLICATE

    def __init__(self, catalog: str, locale: str) -> None:
        self.catalog = catalog
        self.locale = locale
        super().__init__(f'named resource "{catalog}" already exists for locale "{locale}"')


# ============================================================================
# BUILD
# ============================================================================


class BuildError(CatalogError):
    """Cross-locale consistency violation found at build time.

    Build errors compare equal when they have the same type and values, and
    sort by catalog, so aggregated reports are deterministic.
    """

    def _key(self) -> tuple[str, ...]:
        raise NotImplementedError

    @property
    def catalog(self) -> str:
        """Catalog the violation belongs to."""
        return self._key()[0]

    def sort_key(self) -> tuple[str, ...]:
        """Ordering key: catalog first, then the other values."""
        return (*self._key(), type(self).__name__)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BuildError) or type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))


class MissingResourceError(BuildError):
    """A catalog lacks its own file at one or more mandatory locales."""

    code = DiagnosticCode.MISSING_RESOURCE

    def __init__(self, catalog: str, locales: Iterable[str]) -> None:
        self._catalog = catalog
        self.locales: tuple[str, ...] = tuple(sorted(locales))
        super().__init__(f'missing resource "{catalog}" {_for_locales(self.locales)}')

    def _key(self) -> tuple[str, ...]:
        return (self._catalog, *self.locales)


class MissingMessageError(BuildError):
    """A message is missing from a catalog for some locales."""

    code = DiagnosticCode.MISSING_MESSAGE

    def __init__(self, catalog: str, message: str, locales: Iterable[str]) -> None:
        self._catalog = catalog
        self.message = message
        self.locales: tuple[str, ...] = tuple(sorted(locales))
        super().__init__(
            f'missing message "{message}" in resource "{catalog}" '
            f"for locales: {_join(self.locales, ', ')}"
        )

    def _key(self) -> tuple[str, ...]:
        return (self._catalog, self.message, *self.locales)


class ExtraMessageError(BuildError):
    """A message exists only in some locales of a catalog."""

    code = DiagnosticCode.EXTRA_MESSAGE

    def __init__(self, catalog: str, message: str, locales: Iterable[str]) -> None:
        self._catalog = catalog
        self.message = message
        self.locales: tuple[str, ...] = tuple(sorted(locales))
        super().__init__(
            f'extra message "{message}" in resource "{catalog}" '
            f"for locales: {_join(self.locales, ', ')}"
        )

    def _key(self) -> tuple[str, ...]:
        return (self._catalog, self.message, *self.locales)


class MissingAttributeError(BuildError):
    """A message attribute is missing for some locales."""

    code = DiagnosticCode.MISSING_ATTRIBUTE

    def __init__(
        self, catalog: str, message: str, attribute: str, locales: Iterable[str]
    ) -> None:
        self._catalog = catalog
        self.message = message
        self.attribute = attribute
        self.locales: tuple[str, ...] = tuple(sorted(locales))
        super().__init__(
            f'missing attribute "{attribute}" for message "{message}" in resource '
            f'"{catalog}" for locales: {_join(self.locales, ", ")}'
        )

    def _key(self) -> tuple[str, ...]:
        return (self._catalog, self.message, self.attribute, *self.locales)


class ExtraAttributeError(BuildError):
    """A message attribute exists only in some locales."""

    code = DiagnosticCode.EXTRA_ATTRIBUTE

    def __init__(
        self, catalog: str, message: str, attribute: str, locales: Iterable[str]
    ) -> None:
        self._catalog = catalog
        self.message = message
        self.attribute = attribute
        self.locales: tuple[str, ...] = tuple(sorted(locales))
        super().__init__(
            f'extra attribute "{attribute}" for message "{message}" in resource '
            f'"{catalog}" for locales: {_join(self.locales, ", ")}'
        )

    def _key(self) -> tuple[str, ...]:
        return (self._catalog, self.message, self.attribute, *self.locales)


class BuildErrors(CatalogError):
    """All build errors of one build, reported together.

    Attributes:
        errors: Build errors sorted by catalog
    """

    code = DiagnosticCode.BUILD_FAILED

    def __init__(self, errors: Iterable[BuildError]) -> None:
        self.errors: tuple[BuildError, ...] = tuple(sorted(errors, key=BuildError.sort_key))
        super().__init__(f"build errors:\n  - {_join(self.errors, '\n  - ')}")

    def __iter__(self) -> Iterator[BuildError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


# ============================================================================
# TRANSLATION
# ============================================================================


class TranslateError(CatalogError):
    """A single translation query failed."""


class ResourceNotExistsError(TranslateError):
    """Unknown catalog name."""

    code = DiagnosticCode.RESOURCE_NOT_EXISTS

    def __init__(self, catalog: str) -> None:
        self.catalog = catalog
        super().__init__(f'resource "{catalog}" not exists')


class LocaleNotSupportedError(TranslateError):
    """No bundle exists for the requested locale."""

    code = DiagnosticCode.LOCALE_NOT_SUPPORTED

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f'locale "{locale}" not supported')


class MessageIdNotExistsError(TranslateError):
    """The message id is not defined in the bundle."""

    code = DiagnosticCode.MESSAGE_ID_NOT_EXISTS

    def __init__(self, message_id: str, locale: str) -> None:
        self.message_id = message_id
        self.locale = locale
        super().__init__(f'message id: "{message_id}", not exists for locale "{locale}"')


class MessageAttributeNotExistsError(TranslateError):
    """The message exists but does not define the requested attribute."""

    code = DiagnosticCode.MESSAGE_ATTRIBUTE_NOT_EXISTS

    def __init__(self, attribute: str, message_id: str, locale: str) -> None:
        self.attribute = attribute
        self.message_id = message_id
        self.locale = locale
        super().__init__(
            f'attribute: "{attribute}", not exists on message id: "{message_id}", '
            f'for locale "{locale}"'
        )


class MessageIdValueNotExistsError(TranslateError):
    """The message has attributes only and no attribute was requested."""

    code = DiagnosticCode.MESSAGE_VALUE_NOT_EXISTS

    def __init__(self, message_id: str, locale: str) -> None:
        self.message_id = message_id
        self.locale = locale
        super().__init__(f'message value: "{message_id}", not defined for locale "{locale}"')


class FormatErrors(TranslateError):
    """The formatting engine reported errors while interpolating.

    Attributes:
        errors: Errors reported by the engine, in order
        partial: Best-effort output the engine produced despite the errors
    """

    code = DiagnosticCode.FORMAT_ERRORS

    def __init__(self, errors: Sequence[Exception], partial: str) -> None:
        self.errors: tuple[Exception, ...] = tuple(errors)
        self.partial = partial
        super().__init__(f"format errors:\n  - {_join(self.errors, '\n  - ')}")


class CyclicReferenceError(TranslateError):
    """Static analysis followed a reference back into an entry on its own path.

    Attributes:
        path: Entry identifiers visited, ending with the repeated one
    """

    code = DiagnosticCode.CYCLIC_REFERENCE

    def __init__(self, path: Sequence[str]) -> None:
        self.path: tuple[str, ...] = tuple(path)
        super().__init__(f"cyclic reference detected: {_join(self.path, ' -> ')}")


class ReferenceDepthError(TranslateError):
    """Static analysis exceeded the maximum expression or reference depth."""

    code = DiagnosticCode.REFERENCE_DEPTH_EXCEEDED

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"maximum reference depth exceeded ({max_depth})")
