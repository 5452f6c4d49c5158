"""Enumerations for ftlcatalog type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ContributionKind(StrEnum):
    """How a resource document contributes to catalog bundles.

    StrEnum provides automatic string conversion: str(ContributionKind.NAMED) == "named"
    """

    GLOBAL_UNNAMED = "global_unnamed"
    """Root-level private file: applies to every catalog and every locale."""

    PATH_UNNAMED = "path_unnamed"
    """Private file inside a locale directory: applies to catalogs below its path."""

    NAMED = "named"
    """Catalog file: the catalog's own primary content for one locale."""


class ReferenceKind(StrEnum):
    """Kind of entry reference followed during static analysis.

    StrEnum provides automatic string conversion: str(ReferenceKind.TERM) == "term"
    """

    MESSAGE = "message"
    """Reference to a message: { message-id }"""

    TERM = "term"
    """Reference to a term: { -term-id }"""


__all__ = [
    "ContributionKind",
    "ReferenceKind",
]
