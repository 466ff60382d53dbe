"""Stylesheet parsing and traversal.

This package provides the syntax tree the analyzer consumes:
- nodes: Node and the closed NodeType enum
- builder: parse() on top of the tinycss2 tokenizer
- selectors: selector list parsing for rule preludes
- walker: depth-first traversal with ancestor context and skip/break signals
"""

from .builder import parse
from .nodes import Node, NodeType
from .walker import BREAK, SKIP, Signal, WalkContext, walk

__all__ = [
    "BREAK",
    "Node",
    "NodeType",
    "SKIP",
    "Signal",
    "WalkContext",
    "parse",
    "walk",
]
