"""Static analysis of catalog messages.

Collects the variables and functions messages require, without formatting,
so callers can validate arguments and function tables ahead of time.

Python 3.13+.
"""

from .requirements import (
    RequirementCollector,
    collect_functions,
    collect_variables,
    missing_arguments,
)

__all__ = [
    "RequirementCollector",
    "collect_functions",
    "collect_variables",
    "missing_arguments",
]
