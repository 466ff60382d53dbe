"""Source offset bookkeeping for tinycss2 token trees.

tinycss2 only records where a token starts (line and column). The helpers
here turn that into absolute offsets and pair every token with the end of
its extent, which is the start of whatever follows it.
"""

import re

from tinycss2 import ast

# (token, start, end)
Span = tuple[ast.Node, int, int]

TRIVIA = frozenset(["whitespace", "comment"])

_CLOSERS = {"() block": ")", "[] block": "]", "{} block": "}", "function": ")"}

# Bracket levels parsed into nodes; anything nested deeper is kept as Raw
MAX_NESTING_DEPTH = 64


def normalize_newlines(css: str) -> str:
    """Apply the tokenizer's newline preprocessing so offsets line up."""
    return css.replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n")


def is_literal(token: ast.Node, value: str) -> bool:
    return token.type == "literal" and token.value == value


def significant(spans: list[Span]) -> list[Span]:
    """Drop whitespace and comment tokens."""
    return [span for span in spans if span[0].type not in TRIVIA]


def split_on_literal(spans: list[Span], value: str) -> list[list[Span]]:
    """Split a span list on a top-level literal such as ``,``."""
    parts: list[list[Span]] = [[]]
    for span in spans:
        if is_literal(span[0], value):
            parts.append([])
        else:
            parts[-1].append(span)
    return parts


class Source:
    """The analysed stylesheet text plus a line start index."""

    def __init__(self, css: str):
        self.css = css
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", css)]

    def __len__(self) -> int:
        return len(self.css)

    def text(self, start: int, end: int) -> str:
        return self.css[start:end]

    def offset(self, token: ast.Node) -> int:
        """Absolute offset of a token from its 1-based line and column."""
        line = min(token.source_line, len(self._line_starts))
        return self._line_starts[line - 1] + token.source_column - 1

    def spans(self, tokens: list[ast.Node], end: int) -> list[Span]:
        """Pair each token with its start and end offsets.

        Args:
            tokens: Sibling tokens, whitespace and comments included.
            end: Offset where the enclosing container's content stops.

        Returns:
            List of (token, start, end) tuples.
        """
        if not tokens:
            return []
        starts = [self.offset(token) for token in tokens]
        ends = starts[1:] + [end]
        return list(zip(tokens, starts, ends, strict=True))

    def inner(self, span: Span) -> list[Span]:
        """Spans of a block or function's content, closing bracket excluded."""
        token, _, end = span
        content = token.arguments if token.type == "function" else token.content
        closer = _CLOSERS[token.type]
        inner_end = end - 1 if self.css[end - 1 : end] == closer else end
        return self.spans(content or [], inner_end)
