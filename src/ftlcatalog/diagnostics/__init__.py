"""Diagnostic system for catalog errors.

Provides the build-time and query-time exception hierarchies, each error
tagged with a DiagnosticCode.

Python 3.13+. Zero external dependencies.
"""

from .codes import DiagnosticCode
from .errors import (
    BuildError,
    BuildErrors,
    CatalogError,
    CyclicReferenceError,
    DuplicateMainLocaleError,
    DuplicateResourceError,
    EmptyLocalesError,
    ExtraAttributeError,
    ExtraMessageError,
    FallbackCycleError,
    FormatErrors,
    GlobalNamedResourceError,
    InvariantError,
    LocaleDirectoryError,
    LocaleNotSupportedError,
    LocaleParseError,
    MessageAttributeNotExistsError,
    MessageIdNotExistsError,
    MessageIdValueNotExistsError,
    MissingAttributeError,
    MissingLocalesError,
    MissingMessageError,
    MissingResourceError,
    ParserError,
    ReadPathError,
    ReferenceDepthError,
    ResourceNotExistsError,
    ResourceSyntaxError,
    TranslateError,
)

__all__ = [
    "BuildError",
    "BuildErrors",
    "CatalogError",
    "CyclicReferenceError",
    "DiagnosticCode",
    "DuplicateMainLocaleError",
    "DuplicateResourceError",
    "EmptyLocalesError",
    "ExtraAttributeError",
    "ExtraMessageError",
    "FallbackCycleError",
    "FormatErrors",
    "GlobalNamedResourceError",
    "InvariantError",
    "LocaleDirectoryError",
    "LocaleNotSupportedError",
    "LocaleParseError",
    "MessageAttributeNotExistsError",
    "MessageIdNotExistsError",
    "MessageIdValueNotExistsError",
    "MissingAttributeError",
    "MissingLocalesError",
    "MissingMessageError",
    "MissingResourceError",
    "ParserError",
    "ReadPathError",
    "ReferenceDepthError",
    "ResourceNotExistsError",
    "ResourceSyntaxError",
    "TranslateError",
]
