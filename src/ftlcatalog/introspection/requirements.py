"""Static requirement extraction for catalog messages.

Walks parsed patterns without formatting them and collects what a caller
must supply: variable names (per message, across every locale) and
function names (across every parsed document).

Traversal is non-evaluating: a select expression contributes its selector
and every variant, whichever variant would be chosen at runtime. Message
and term references are followed into their definitions within the same
bundle; a reference back into an entry already on the current path is a
cycle and raises CyclicReferenceError.

Term bodies are walked in term scope: a term only sees the arguments of
its call, so variables referenced inside it are not caller requirements.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from ftllexengine.core.depth_guard import DepthGuard, DepthLimitExceededError
from ftllexengine.syntax.ast import (
    FunctionReference,
    Message,
    MessageReference,
    NumberLiteral,
    Pattern,
    Placeable,
    SelectExpression,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
)

from ftlcatalog.constants import MAX_DEPTH
from ftlcatalog.diagnostics import CyclicReferenceError, ReferenceDepthError
from ftlcatalog.enums import ReferenceKind

if TYPE_CHECKING:
    from ftllexengine.syntax.ast import CallArguments, Expression, Identifier, InlineExpression

    from ftlcatalog.localization.resolver import CatalogBundle
    from ftlcatalog.localization.store import Document

__all__ = [
    "RequirementCollector",
    "collect_functions",
    "collect_variables",
    "missing_arguments",
]

type _EntryKey = tuple[ReferenceKind, str, str | None]


def _label(key: _EntryKey) -> str:
    kind, entry_id, attribute = key
    prefix = "-" if kind is ReferenceKind.TERM else ""
    suffix = f".{attribute}" if attribute is not None else ""
    return f"{prefix}{entry_id}{suffix}"


class RequirementCollector:
    """Collects variable and function names from patterns.

    With a bundle, message and term references are followed into their
    definitions in that bundle. Without one, only the patterns given are
    walked (function collection over raw documents).

    Attributes:
        variables: Variable names the caller must supply (without '$')
        functions: Function names found
    """

    __slots__ = (
        "_bundle",
        "_depth_guard",
        "_path",
        "_term_scope",
        "_visited",
        "functions",
        "variables",
    )

    def __init__(self, bundle: CatalogBundle | None = None) -> None:
        self._bundle = bundle
        self._depth_guard = DepthGuard(max_depth=MAX_DEPTH)
        self._path: list[_EntryKey] = []
        self._term_scope = 0
        self._visited: set[tuple[_EntryKey, bool]] = set()
        self.variables: set[str] = set()
        self.functions: set[str] = set()

    def visit_entry(self, key: _EntryKey, pattern: Pattern) -> None:
        """Walk an entry's pattern with ``key`` on the current reference path.

        An entry is walked at most once per scope: a message first reached
        from inside a term is walked again when reached from caller scope.

        Raises:
            CyclicReferenceError: If ``key`` is already on the path
        """
        if key in self._path:
            start = self._path.index(key)
            raise CyclicReferenceError([_label(k) for k in (*self._path[start:], key)])
        marker = (key, self._term_scope > 0)
        if marker in self._visited:
            return
        self._path.append(key)
        try:
            self.visit_pattern(pattern)
        finally:
            self._path.pop()
        self._visited.add(marker)

    def collect(self, key: _EntryKey, pattern: Pattern) -> None:
        """Walk a top-level entry from caller scope.

        Raises:
            CyclicReferenceError: If references form a cycle
            ReferenceDepthError: If nesting exceeds the guard's max_depth
        """
        try:
            self.visit_entry(key, pattern)
        except DepthLimitExceededError as exc:
            raise ReferenceDepthError(self._depth_guard.max_depth) from exc

    def visit_pattern(self, pattern: Pattern) -> None:
        """Walk every placeable of a pattern."""
        for element in pattern.elements:
            match element:
                case Placeable(expression=expression):
                    with self._depth_guard:
                        self._visit_expression(expression)
                case TextElement():
                    pass

    def _visit_expression(self, expr: Expression | InlineExpression) -> None:
        match expr:
            case VariableReference(id=identifier):
                if self._term_scope == 0:
                    self.variables.add(identifier.name)
            case FunctionReference(id=identifier, arguments=arguments):
                self.functions.add(identifier.name)
                self._visit_arguments(arguments)
            case MessageReference(id=identifier, attribute=attribute):
                self._follow_message(identifier.name, attribute)
            case TermReference(id=identifier, attribute=attribute, arguments=arguments):
                if arguments is not None:
                    self._visit_arguments(arguments)
                self._follow_term(identifier.name, attribute)
            case SelectExpression(selector=selector, variants=variants):
                with self._depth_guard:
                    self._visit_expression(selector)
                for variant in variants:
                    with self._depth_guard:
                        self.visit_pattern(variant.value)
            case Placeable(expression=inner):
                with self._depth_guard:
                    self._visit_expression(inner)
            case StringLiteral() | NumberLiteral():
                pass

    def _visit_arguments(self, arguments: CallArguments) -> None:
        for positional in arguments.positional:
            with self._depth_guard:
                self._visit_expression(positional)
        for named in arguments.named:
            with self._depth_guard:
                self._visit_expression(named.value)

    def _follow_message(self, message_id: str, attribute: Identifier | None) -> None:
        """Recurse into a referenced message; a broken reference raises."""
        if self._bundle is None:
            return
        attribute_name = attribute.name if attribute is not None else None
        pattern = self._bundle.resolve_pattern(message_id, attribute_name)
        with self._depth_guard:
            self.visit_entry((ReferenceKind.MESSAGE, message_id, attribute_name), pattern)

    def _follow_term(self, term_id: str, attribute: Identifier | None) -> None:
        """Recurse into a referenced term in term scope, if it is defined."""
        if self._bundle is None:
            return
        term = self._bundle.get_term(term_id)
        if term is None:
            return
        attribute_name = attribute.name if attribute is not None else None
        pattern = _entry_pattern(term, attribute_name)
        if pattern is None:
            return
        self._term_scope += 1
        try:
            with self._depth_guard:
                self.visit_entry((ReferenceKind.TERM, term_id, attribute_name), pattern)
        finally:
            self._term_scope -= 1


def _entry_pattern(entry: Message | Term, attribute: str | None) -> Pattern | None:
    if attribute is None:
        if entry.value is None or not entry.value.elements:
            return None
        return entry.value
    for attr in entry.attributes:
        if attr.id.name == attribute:
            return attr.value
    return None


def collect_variables(
    bundles: Iterable[CatalogBundle], message_id: str, attribute: str | None = None
) -> frozenset[str]:
    """Union of the variables a message needs in every given bundle.

    Raises:
        MessageIdNotExistsError: If a bundle lacks the message
        MessageAttributeNotExistsError: If a bundle lacks the attribute
        MessageIdValueNotExistsError: If the message has no value
        CyclicReferenceError: If references form a cycle
        ReferenceDepthError: If nesting exceeds MAX_DEPTH
    """
    variables: set[str] = set()
    for bundle in bundles:
        pattern = bundle.resolve_pattern(message_id, attribute)
        collector = RequirementCollector(bundle)
        collector.collect((ReferenceKind.MESSAGE, message_id, attribute), pattern)
        variables |= collector.variables
    return frozenset(variables)


def collect_functions(documents: Iterable[Document]) -> frozenset[str]:
    """Function names referenced anywhere in the given documents.

    Covers message and term values and attributes, including calls nested
    in arguments, selectors and variants.

    Raises:
        ReferenceDepthError: If a pattern nests deeper than MAX_DEPTH
    """
    collector = RequirementCollector()
    try:
        for document in documents:
            for entry in document.resource.entries:
                match entry:
                    case Message() | Term():
                        if entry.value is not None:
                            collector.visit_pattern(entry.value)
                        for attr in entry.attributes:
                            collector.visit_pattern(attr.value)
    except DepthLimitExceededError as exc:
        raise ReferenceDepthError(MAX_DEPTH) from exc
    return frozenset(collector.functions)


def missing_arguments(
    required: Iterable[str], args: Mapping[str, object] | None
) -> tuple[str, ...]:
    """Required names absent from args, sorted."""
    provided = args or {}
    return tuple(sorted(name for name in required if name not in provided))
