"""Selector list parsing for rule preludes.

Turns the tokens in front of a rule's block into a SelectorList of Selector
nodes made of simple selectors and combinators. Functional pseudo-classes
that take selectors (``:is()``, ``:where()``, ``:not()`` ...) get a nested
SelectorList child.
"""

from .nodes import Node, NodeType
from .source import (
    MAX_NESTING_DEPTH,
    TRIVIA,
    Source,
    Span,
    is_literal,
    significant,
    split_on_literal,
)

# Functional pseudos whose argument is a selector list
SELECTOR_LIST_PSEUDOS = frozenset(
    [
        "is",
        "where",
        "not",
        "has",
        "matches",
        "-webkit-any",
        "-moz-any",
        "host",
        "host-context",
        "slotted",
        "cue",
        "current",
        "past",
        "future",
    ]
)

# Functional pseudos taking an An+B expression, optionally followed by `of S`
NTH_PSEUDOS = frozenset(
    [
        "nth-child",
        "nth-last-child",
        "nth-of-type",
        "nth-last-of-type",
        "nth-col",
        "nth-last-col",
    ]
)

COMBINATORS = frozenset([">", "+", "~"])

ATTRIBUTE_MATCHERS = frozenset(["=", "~=", "|=", "^=", "$=", "*="])


class SelectorParser:
    """Builds selector nodes from prelude spans."""

    def __init__(self, source: Source):
        self.source = source
        self._depth = 0

    def parse_list(self, spans: list[Span], default_offset: int) -> Node:
        """Parse a comma separated selector list.

        Args:
            spans: Prelude spans, trivia included.
            default_offset: Position to use when the prelude is empty.

        Returns:
            A SelectorList node (possibly without children).
        """
        selectors = [
            self.parse_selector(part)
            for part in split_on_literal(spans, ",")
            if significant(part)
        ]
        tokens = significant(spans)
        if tokens:
            start, end = tokens[0][1], tokens[-1][2]
        else:
            start = end = default_offset
        return Node(NodeType.SELECTOR_LIST, start, end, children=selectors)

    def parse_selector(self, spans: list[Span]) -> Node:
        positions = [k for k, span in enumerate(spans) if span[0].type not in TRIVIA]
        spans = spans[positions[0] : positions[-1] + 1]

        children: list[Node] = []
        descendant: tuple[int, int] | None = None
        i = 0
        while i < len(spans):
            token, start, end = spans[i]
            if token.type in TRIVIA:
                # `.a/**/.b` is one compound selector
                if (
                    token.type == "whitespace"
                    and children
                    and children[-1].type is not NodeType.COMBINATOR
                ):
                    descendant = (start, end) if descendant is None else (descendant[0], end)
                i += 1
                continue
            if token.type == "literal" and token.value in COMBINATORS:
                children.append(Node(NodeType.COMBINATOR, start, end, name=token.value))
                descendant = None
                i += 1
                continue
            if descendant is not None:
                children.append(
                    Node(NodeType.COMBINATOR, descendant[0], descendant[1], name=" ")
                )
                descendant = None
            node, i = self._parse_simple(spans, i)
            children.append(node)

        return Node(
            NodeType.SELECTOR, spans[0][1], spans[-1][2], children=children
        )

    def _parse_simple(self, spans: list[Span], i: int) -> tuple[Node, int]:
        token, start, end = spans[i]
        following = spans[i + 1] if i + 1 < len(spans) else None
        text = self.source.text

        if token.type == "ident":
            return Node(NodeType.TYPE_SELECTOR, start, end, name=text(start, end).rstrip()), i + 1
        if token.type == "hash":
            return Node(NodeType.ID_SELECTOR, start, end, name=text(start + 1, end).rstrip()), i + 1
        if is_literal(token, "*"):
            return Node(NodeType.TYPE_SELECTOR, start, end, name="*"), i + 1
        if is_literal(token, "&"):
            return Node(NodeType.NESTING_SELECTOR, start, end, name="&"), i + 1
        if is_literal(token, ".") and following is not None and following[0].type == "ident":
            _, name_start, name_end = following
            node = Node(
                NodeType.CLASS_SELECTOR,
                start,
                name_end,
                name=text(name_start, name_end).rstrip(),
            )
            return node, i + 2
        if is_literal(token, ":") and following is not None:
            if is_literal(following[0], ":") and i + 2 < len(spans):
                return self._parse_pseudo(
                    NodeType.PSEUDO_ELEMENT_SELECTOR, start, spans[i + 2]
                ), i + 3
            if following[0].type in ("ident", "function"):
                return self._parse_pseudo(
                    NodeType.PSEUDO_CLASS_SELECTOR, start, following
                ), i + 2
        if token.type == "[] block":
            return self._parse_attribute(spans[i]), i + 1
        if token.type == "percentage":
            return Node(NodeType.PERCENTAGE, start, end, value=token.representation), i + 1
        if token.type == "number":
            return Node(NodeType.NUMBER, start, end, value=token.representation), i + 1
        return Node(NodeType.RAW, start, end, value=text(start, end)), i + 1

    def _parse_pseudo(self, node_type: NodeType, start: int, span: Span) -> Node:
        token, name_start, end = span
        if token.type == "ident":
            name = self.source.text(name_start, end).rstrip()
            return Node(node_type, start, end, name=name)
        if token.type != "function":
            return Node(NodeType.RAW, start, end, value=self.source.text(start, end))

        paren = self.source.css.find("(", name_start, end)
        name = self.source.text(name_start, paren)
        node = Node(node_type, start, end, name=name)
        inner = self.source.inner(span)
        lower = name.lower()

        nested = lower in SELECTOR_LIST_PSEUDOS or lower in NTH_PSEUDOS
        if nested and self._depth < MAX_NESTING_DEPTH:
            self._depth += 1
            try:
                if lower in SELECTOR_LIST_PSEUDOS:
                    node.children.append(self.parse_list(inner, paren + 1))
                else:
                    node.children.append(self._parse_nth(inner, paren + 1))
            finally:
                self._depth -= 1
        elif significant(inner):
            tokens = significant(inner)
            raw_start, raw_end = tokens[0][1], tokens[-1][2]
            node.children.append(
                Node(NodeType.RAW, raw_start, raw_end, value=self.source.text(raw_start, raw_end))
            )
        return node

    def _parse_nth(self, spans: list[Span], default_offset: int) -> Node:
        tokens = significant(spans)
        if not tokens:
            return Node(NodeType.NTH, default_offset, default_offset)

        of_index = next(
            (
                k
                for k, (token, _, _) in enumerate(tokens)
                if token.type == "ident" and token.lower_value == "of"
            ),
            None,
        )
        formula = tokens if of_index is None else tokens[:of_index]
        node = Node(NodeType.NTH, tokens[0][1], tokens[-1][2])
        if formula:
            raw_start, raw_end = formula[0][1], formula[-1][2]
            node.children.append(
                Node(NodeType.RAW, raw_start, raw_end, value=self.source.text(raw_start, raw_end))
            )
        if of_index is not None:
            of_end = tokens[of_index][2]
            rest = [span for span in spans if span[1] >= of_end]
            node.children.append(self.parse_list(rest, of_end))
        return node

    def _parse_attribute(self, span: Span) -> Node:
        _, start, end = span
        node = Node(NodeType.ATTRIBUTE_SELECTOR, start, end)
        for token, token_start, token_end in significant(self.source.inner(span)):
            if token.type == "literal" and token.value in ATTRIBUTE_MATCHERS:
                node.matcher = token.value
                break
            if token.type == "ident":
                # the last identifier before the matcher wins over a namespace prefix
                node.name = self.source.text(token_start, token_end).rstrip()
        return node
