"""Syntax tree node model for parsed stylesheets.

Every node carries its kind and the half-open ``[start, end)`` offset range
it occupies in the analysed source text, so the authored CSS can always be
re-sliced verbatim.
"""

import builtins
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class NodeType(Enum):
    """Closed set of node kinds produced by the parser."""

    STYLESHEET = "StyleSheet"
    ATRULE = "Atrule"
    ATRULE_PRELUDE = "AtrulePrelude"
    RULE = "Rule"
    BLOCK = "Block"
    SELECTOR_LIST = "SelectorList"
    SELECTOR = "Selector"
    TYPE_SELECTOR = "TypeSelector"
    ID_SELECTOR = "IdSelector"
    CLASS_SELECTOR = "ClassSelector"
    ATTRIBUTE_SELECTOR = "AttributeSelector"
    PSEUDO_CLASS_SELECTOR = "PseudoClassSelector"
    PSEUDO_ELEMENT_SELECTOR = "PseudoElementSelector"
    NESTING_SELECTOR = "NestingSelector"
    COMBINATOR = "Combinator"
    NTH = "Nth"
    DECLARATION = "Declaration"
    FEATURE = "Feature"
    VALUE = "Value"
    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    PERCENTAGE = "Percentage"
    DIMENSION = "Dimension"
    HASH = "Hash"
    STRING = "String"
    URL = "Url"
    FUNCTION = "Function"
    OPERATOR = "Operator"
    PARENTHESES = "Parentheses"
    BRACKETS = "Brackets"
    UNICODE_RANGE = "UnicodeRange"
    RAW = "Raw"


@dataclass(eq=False)
class Node:
    """A single syntax tree node.

    Fields are shared across kinds; which ones are populated depends on
    ``type``:

    - Atrule: ``name`` (without ``@``), ``prelude``, ``block``
    - Rule: ``prelude`` (SelectorList or Raw), ``block``
    - Declaration: ``property``, ``important``, ``value`` (a Value node)
    - Feature: ``name``, ``value`` (a Value node or None)
    - Identifier, Function and selector parts: ``name``
    - Dimension: ``value`` (number text) and ``unit``
    - Number, Percentage, Hash, String, Url, Operator, Combinator: ``value``
    - AttributeSelector: ``name`` and ``matcher`` when a value is compared

    Textual fields hold the raw source text, escapes included.
    """

    type: NodeType
    start: int
    end: int
    name: str | None = None
    value: "str | Node | None" = None
    unit: str | None = None
    property: str | None = None
    important: bool | str = False
    matcher: str | None = None
    prelude: "Node | None" = None
    block: "Node | None" = None
    children: list["Node"] = field(default_factory=list)

    def iter_children(self) -> Iterator["Node"]:
        """Yield direct children in document order."""
        if self.prelude is not None:
            yield self.prelude
        if isinstance(self.value, Node):
            yield self.value
        if self.block is not None:
            yield self.block
        yield from self.children

    # the `property` field shadows the builtin in the class body
    @builtins.property
    def first(self) -> "Node | None":
        return self.children[0] if self.children else None

    def __repr__(self) -> str:
        label = self.name or self.property or (
            self.value if isinstance(self.value, str) else None
        )
        suffix = f" {label!r}" if label is not None else ""
        return f"<{self.type.value}{suffix} [{self.start}:{self.end}]>"
