"""Diagnostic codes for catalog errors.

Python 3.13+. Zero external dependencies.
"""

from enum import Enum

__all__ = ["DiagnosticCode"]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by phase:
        1000-1999: Locale graph errors (configuration invariants, tags)
        2000-2999: Resource tree errors (filesystem walk, parsing)
        3000-3999: Build errors (cross-locale consistency)
        4000-4999: Translation errors (query time)
    """

    # Locale graph errors (1000-1999)
    LOCALES_EMPTY = 1001
    LOCALE_MAIN_DUPLICATE = 1002
    LOCALE_FALLBACK_CYCLE = 1003
    LOCALE_PARSE_FAILED = 1004

    # Resource tree errors (2000-2999)
    READ_PATH_FAILED = 2001
    LOCALE_DIRECTORY_INVALID = 2002
    MANDATORY_LOCALES_MISSING = 2003
    GLOBAL_NAMED_RESOURCE = 2004
    RESOURCE_SYNTAX_ERROR = 2005
    RESOURCE_DUPLICATE = 2006

    # Build errors (3000-3999)
    BUILD_FAILED = 3000
    MISSING_RESOURCE = 3001
    MISSING_MESSAGE = 3002
    EXTRA_MESSAGE = 3003
    MISSING_ATTRIBUTE = 3004
    EXTRA_ATTRIBUTE = 3005

    # Translation errors (4000-4999)
    RESOURCE_NOT_EXISTS = 4001
    LOCALE_NOT_SUPPORTED = 4002
    MESSAGE_ID_NOT_EXISTS = 4003
    MESSAGE_ATTRIBUTE_NOT_EXISTS = 4004
    MESSAGE_VALUE_NOT_EXISTS = 4005
    FORMAT_ERRORS = 4006
    CYCLIC_REFERENCE = 4007
    REFERENCE_DEPTH_EXCEEDED = 4008
