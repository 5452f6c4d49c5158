"""Shared constants for ftlcatalog.

Centralizes the naming conventions of the resource tree and the fixed
strings returned by the best-effort translation API. Placing them here
avoids circular imports between the localization and introspection
packages.

Constants are grouped by domain:
- Resource tree: file naming conventions
- Message keys: key syntax
- Fallback strings: values returned instead of raising
- Functions: names the engine provides without registration
- Limits: recursion protection for static analysis

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resource tree
    "PRIVATE_PREFIX",
    "RESOURCE_EXTENSION",
    "PATH_SEPARATOR",
    # Message keys
    "KEY_SEPARATOR",
    # Fallback strings
    "UNEXPECTED_MESSAGE",
    # Functions
    "BUILTIN_FUNCTIONS",
    # Limits
    "MAX_DEPTH",
]

# ============================================================================
# RESOURCE TREE
# ============================================================================

# Files whose stem starts with this marker are shared (unnamed) resources.
# At the tree root every resource file must carry it.
PRIVATE_PREFIX: str = "_"

# Only files with this suffix are read; everything else is ignored.
RESOURCE_EXTENSION: str = ".ftl"

# Separator used in normalized catalog names and relative paths.
PATH_SEPARATOR: str = "/"

# ============================================================================
# MESSAGE KEYS
# ============================================================================

# "message-id.attribute" addresses an attribute; split at the first occurrence.
KEY_SEPARATOR: str = "."

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Returned by translate() when the strict API would raise a TranslateError.
UNEXPECTED_MESSAGE: str = "Unexpected message"

# ============================================================================
# FUNCTIONS
# ============================================================================

# Functions every ftllexengine bundle provides without registration.
BUILTIN_FUNCTIONS: frozenset[str] = frozenset({"NUMBER", "DATETIME", "CURRENCY"})

# ============================================================================
# LIMITS
# ============================================================================

# Maximum message/term reference nesting followed by the requirement extractor.
# Matches the engine's own resolution depth limit.
MAX_DEPTH: int = 100
