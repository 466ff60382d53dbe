"""Stylesheet parser built on the tinycss2 tokenizer.

tinycss2 supplies the component value tree (tokens and bracketed blocks with
positions). This module groups it into at-rules, rules, declarations and
values, keeping raw source text for every name so that escapes such as
``\\9`` and ``\\0`` survive for browser hack detection.

The parser is tolerant: fragments it cannot make sense of become Raw nodes
or are dropped, it never raises for malformed CSS.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

import tinycss2
from tinycss2 import ast

from ..analyzer_logging import LogCategory, get_category_logger
from .nodes import Node, NodeType
from .selectors import SelectorParser
from .source import (
    MAX_NESTING_DEPTH,
    TRIVIA,
    Source,
    Span,
    is_literal,
    normalize_newlines,
    significant,
)

logger = get_category_logger(LogCategory.PARSER)

CommentCallback = Callable[[str], None]

# Single characters that old IE accepted in front of a property name
PROPERTY_HACK_PREFIXES = frozenset(["*", "+", "/", "$", "&"])

# At-rules whose parenthesized prelude groups are queries, not declarations
FEATURE_ATRULES = frozenset(["media", "container", "custom-media"])

_IGNORED_TOP_LEVEL = frozenset(["<!--", "-->"])


def parse(css: str, on_comment: CommentCallback | None = None) -> Node:
    """Parse stylesheet text into a StyleSheet node.

    Args:
        css: Stylesheet source. Newlines are normalized (CRLF, CR and form
            feed become LF) before parsing; node offsets refer to the
            normalized text.
        on_comment: Optional callback invoked once per comment with the
            comment text (without the ``/*`` and ``*/`` delimiters).

    Returns:
        The root StyleSheet node.
    """
    source = Source(normalize_newlines(css))
    tokens = tinycss2.parse_component_value_list(source.css, skip_comments=False)
    if on_comment is not None:
        _report_comments(tokens, on_comment)

    builder = StylesheetBuilder(source)
    children = builder.consume_items(source.spans(tokens, len(source)), nested=False)
    logger.debug(f"Parsed {len(children)} top-level items from {len(source)} chars")
    return Node(NodeType.STYLESHEET, 0, len(source), children=children)


def _report_comments(tokens: list[ast.Node], on_comment: CommentCallback) -> None:
    pending = list(reversed(tokens))
    while pending:
        token = pending.pop()
        if token.type == "comment":
            on_comment(token.value)
        elif token.type == "function":
            pending.extend(reversed(token.arguments))
        elif token.type in ("() block", "[] block", "{} block"):
            pending.extend(reversed(token.content))


class StylesheetBuilder:
    """Groups token spans into the stylesheet node tree."""

    def __init__(self, source: Source):
        self.source = source
        self.selectors = SelectorParser(source)
        self._depth = 0

    def text(self, start: int, end: int) -> str:
        return self.source.text(start, end)

    @contextmanager
    def _deeper(self) -> Iterator[bool]:
        """Enter one bracket level, yielding False past MAX_NESTING_DEPTH."""
        self._depth += 1
        try:
            yield self._depth <= MAX_NESTING_DEPTH
        finally:
            self._depth -= 1

    def _raw(self, spans: list[Span]) -> list[Node]:
        """The significant part of ``spans`` as a single Raw node, if any."""
        tokens = significant(spans)
        if not tokens:
            return []
        start, end = tokens[0][1], tokens[-1][2]
        return [Node(NodeType.RAW, start, end, value=self.text(start, end))]

    # Blocks

    def consume_items(self, spans: list[Span], nested: bool) -> list[Node]:
        """Consume a list of rules, at-rules and (when nested) declarations.

        Args:
            spans: Spans of the stylesheet or of a ``{}`` block's content.
            nested: Whether declarations are allowed (inside a block).

        Returns:
            Item nodes in document order.
        """
        items: list[Node] = []
        i = 0
        while i < len(spans):
            token = spans[i][0]
            if token.type in TRIVIA or is_literal(token, ";"):
                i += 1
                continue
            if not nested and token.type == "literal" and token.value in _IGNORED_TOP_LEVEL:
                i += 1
                continue
            if token.type == "at-keyword":
                i = self._consume_atrule(spans, i, items)
                continue

            j = self._find_item_end(spans, i)
            if j < len(spans) and spans[j][0].type == "{} block":
                items.append(self.build_rule(spans[i:j], spans[j]))
            elif nested:
                items.append(self.build_declaration(spans[i:j]))
            i = j + 1
        return items

    def _find_item_end(self, spans: list[Span], i: int) -> int:
        custom_property = self._is_custom_property(spans[i:])
        j = i
        while j < len(spans):
            token = spans[j][0]
            if is_literal(token, ";"):
                break
            if token.type == "{} block" and not custom_property:
                break
            j += 1
        return j

    @staticmethod
    def _is_custom_property(spans: list[Span]) -> bool:
        tokens = significant(spans[:4])
        return (
            len(tokens) >= 2
            and tokens[0][0].type == "ident"
            and tokens[0][0].value.startswith("--")
            and is_literal(tokens[1][0], ":")
        )

    def build_block(self, span: Span) -> Node:
        _, start, end = span
        inner = self.source.inner(span)
        with self._deeper() as allowed:
            if allowed:
                children = self.consume_items(inner, nested=True)
            else:
                children = self._raw(inner)
        return Node(NodeType.BLOCK, start, end, children=children)

    # Rules and at-rules

    def build_rule(self, prelude_spans: list[Span], block_span: Span) -> Node:
        prelude = self.selectors.parse_list(prelude_spans, block_span[1])
        tokens = significant(prelude_spans)
        start = tokens[0][1] if tokens else block_span[1]
        return Node(
            NodeType.RULE,
            start,
            block_span[2],
            prelude=prelude,
            block=self.build_block(block_span),
        )

    def _consume_atrule(self, spans: list[Span], i: int, items: list[Node]) -> int:
        _, start, keyword_end = spans[i]
        name = self.text(start + 1, keyword_end)
        j = i + 1
        while j < len(spans):
            token = spans[j][0]
            if is_literal(token, ";") or token.type == "{} block":
                break
            j += 1

        prelude_spans = spans[i + 1 : j]
        prelude = self.build_atrule_prelude(name, prelude_spans)
        node = Node(NodeType.ATRULE, start, keyword_end, name=name, prelude=prelude)
        if prelude is not None:
            node.end = prelude.end

        if j < len(spans):
            if spans[j][0].type == "{} block":
                node.block = self.build_block(spans[j])
            node.end = spans[j][2]

        items.append(node)
        return j + 1

    def build_atrule_prelude(self, name: str, spans: list[Span]) -> Node | None:
        tokens = significant(spans)
        if not tokens:
            return None
        features = name.lower() in FEATURE_ATRULES
        children = [self._build_prelude_component(span, features) for span in tokens]
        return Node(
            NodeType.ATRULE_PRELUDE, tokens[0][1], tokens[-1][2], children=children
        )

    def _build_prelude_component(self, span: Span, features: bool) -> Node:
        token, start, end = span
        if token.type not in ("() block", "function"):
            return self.build_component(span)

        inner = self.source.inner(span)
        if token.type == "() block":
            node = Node(NodeType.PARENTHESES, start, end)
        else:
            paren = self.source.css.find("(", start, end)
            node = Node(NodeType.FUNCTION, start, end, name=self.text(start, paren))

        with self._deeper() as allowed:
            if not allowed:
                node.children = self._raw(inner)
                return node
            query = self._build_query(inner, features)
            if query is not None:
                node.children.append(query)
            else:
                node.children = [
                    self._build_prelude_component(child, features)
                    for child in significant(inner)
                ]
        return node

    def _build_query(self, spans: list[Span], features: bool) -> Node | None:
        """Build a ``name: value`` query as a Feature or Declaration node."""
        tokens = significant(spans)
        if len(tokens) < 2 or tokens[0][0].type != "ident" or not is_literal(tokens[1][0], ":"):
            return None

        _, start, name_end = tokens[0]
        colon_end = tokens[1][2]
        name = self.text(start, name_end).rstrip()
        value_spans = [span for span in spans if span[1] >= colon_end]

        if features:
            value = self.build_value(value_spans, colon_end)
            return Node(NodeType.FEATURE, start, tokens[-1][2], name=name, value=value)

        value_spans, important = self._split_important(value_spans)
        return Node(
            NodeType.DECLARATION,
            start,
            tokens[-1][2],
            property=name,
            important=important,
            value=self.build_value(value_spans, colon_end),
        )

    # Declarations and values

    def build_declaration(self, spans: list[Span]) -> Node:
        """Build a Declaration, or a Raw node when the shape does not match."""
        tokens = significant(spans)
        start, end = tokens[0][1], tokens[-1][2]

        first, _, first_end = tokens[0]
        property_end = None
        colon = 1
        if first.type in ("ident", "hash"):
            property_end = first_end
        elif (
            first.type == "literal"
            and first.value in PROPERTY_HACK_PREFIXES
            and len(tokens) > 1
            and tokens[1][0].type == "ident"
            and tokens[1][1] == first_end
        ):
            property_end = tokens[1][2]
            colon = 2

        if property_end is None or colon >= len(tokens) or not is_literal(tokens[colon][0], ":"):
            return Node(NodeType.RAW, start, end, value=self.text(start, end))

        colon_end = tokens[colon][2]
        value_spans = [span for span in spans if span[1] >= colon_end]
        value_spans, important = self._split_important(value_spans)
        return Node(
            NodeType.DECLARATION,
            start,
            end,
            property=self.text(start, property_end).rstrip(),
            important=important,
            value=self.build_value(value_spans, colon_end),
        )

    def _split_important(self, spans: list[Span]) -> tuple[list[Span], bool | str]:
        """Strip a trailing ``!important`` (or ``!ie`` style) marker.

        Returns:
            The remaining spans and ``True`` for ``!important``, the marker
            text for any other ``!marker``, or ``False``.
        """
        positions = [k for k, span in enumerate(spans) if span[0].type not in TRIVIA]
        if len(positions) < 2:
            return spans, False

        bang, marker = spans[positions[-2]], spans[positions[-1]]
        if not is_literal(bang[0], "!") or marker[0].type != "ident":
            return spans, False

        if marker[0].lower_value == "important":
            important: bool | str = True
        else:
            important = self.text(marker[1], marker[2]).rstrip()
        return spans[: positions[-2]], important

    def build_value(self, spans: list[Span], default_offset: int) -> Node:
        tokens = significant(spans)
        if not tokens:
            return Node(NodeType.VALUE, default_offset, default_offset)
        return Node(
            NodeType.VALUE,
            tokens[0][1],
            tokens[-1][2],
            children=[self.build_component(span) for span in tokens],
        )

    def build_component(self, span: Span) -> Node:
        """Convert a single component value into a node."""
        token, start, end = span
        kind = token.type
        raw = self.text(start, end)

        if kind == "ident":
            return Node(NodeType.IDENTIFIER, start, end, name=raw.rstrip())
        if kind == "dimension":
            unit = raw[len(token.representation) :].rstrip()
            return Node(NodeType.DIMENSION, start, end, value=token.representation, unit=unit)
        if kind == "number":
            return Node(NodeType.NUMBER, start, end, value=token.representation)
        if kind == "percentage":
            return Node(NodeType.PERCENTAGE, start, end, value=token.representation)
        if kind == "hash":
            return Node(NodeType.HASH, start, end, value=raw[1:].rstrip())
        if kind == "string":
            return Node(NodeType.STRING, start, end, value=raw)
        if kind == "url":
            return Node(NodeType.URL, start, end, value=token.value)
        if kind == "literal":
            return Node(NodeType.OPERATOR, start, end, value=token.value)
        if kind == "unicode-range":
            return Node(NodeType.UNICODE_RANGE, start, end, value=raw)
        if kind == "function":
            return self._build_function(span)
        if kind == "() block":
            return self._build_group(NodeType.PARENTHESES, span)
        if kind == "[] block":
            return self._build_group(NodeType.BRACKETS, span)
        return Node(NodeType.RAW, start, end, value=raw)

    def _build_function(self, span: Span) -> Node:
        token, start, end = span
        inner = significant(self.source.inner(span))
        if token.lower_name == "url":
            strings = [child for child in inner if child[0].type == "string"]
            if strings:
                return Node(NodeType.URL, start, end, value=strings[0][0].value)

        paren = self.source.css.find("(", start, end)
        return Node(
            NodeType.FUNCTION,
            start,
            end,
            name=self.text(start, paren),
            children=self._build_children(inner),
        )

    def _build_group(self, node_type: NodeType, span: Span) -> Node:
        _, start, end = span
        inner = significant(self.source.inner(span))
        return Node(node_type, start, end, children=self._build_children(inner))

    def _build_children(self, inner: list[Span]) -> list[Node]:
        with self._deeper() as allowed:
            if not allowed:
                return self._raw(inner)
            return [self.build_component(child) for child in inner]
