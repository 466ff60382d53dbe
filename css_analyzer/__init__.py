"""CSS Analyzer - structural and stylistic metrics for stylesheets.

Example:
    >>> from css_analyzer import analyze
    >>> report = analyze("a { color: red }")
    >>> report.selectors["total"]
    1
"""

__version__ = "1.0.0"

from .engine import Analyzer, analyze
from .heuristics import Specificity, calculate_specificity, compare_specificity
from .parser import BREAK, SKIP, Node, NodeType, WalkContext, parse, walk
from .report import SECTIONS, AnalysisReport

__all__ = [
    "AnalysisReport",
    "Analyzer",
    "BREAK",
    "Node",
    "NodeType",
    "SECTIONS",
    "SKIP",
    "Specificity",
    "WalkContext",
    "__version__",
    "analyze",
    "calculate_specificity",
    "compare_specificity",
    "parse",
    "walk",
]
