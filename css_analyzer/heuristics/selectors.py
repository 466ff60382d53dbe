"""Selector complexity scoring and accessibility detection."""

from ..parser import BREAK, SKIP, Node, NodeType, WalkContext, walk
from .keywords import KeywordSet
from .vendor import has_vendor_prefix

# Pseudo-classes whose selector list argument is scored selector by selector
PSEUDO_FUNCTIONS = KeywordSet(
    ["not", "is", "where", "has", "matches", "-webkit-any", "-moz-any"]
)

# Node kinds that count once more when their name carries a vendor prefix
_NAMED_PARTS = frozenset(
    [
        NodeType.ID_SELECTOR,
        NodeType.CLASS_SELECTOR,
        NodeType.TYPE_SELECTOR,
        NodeType.PSEUDO_CLASS_SELECTOR,
        NodeType.PSEUDO_ELEMENT_SELECTOR,
    ]
)


def _nested_selectors(node: Node) -> list[Node]:
    for child in node.children:
        if child.type is NodeType.SELECTOR_LIST:
            return child.children
    return []


def get_complexity(selector: Node) -> tuple[int, bool]:
    """Score how hard a selector is to read and match.

    Every part of the selector counts as one: simple selectors, combinators
    and pseudo arguments. Vendor prefixed parts and attribute selectors that
    compare a value count one extra. Selectors nested in ``:is()``,
    ``:not()`` and friends add their own complexity.

    Args:
        selector: A Selector node.

    Returns:
        Tuple of (complexity, whether any part is vendor prefixed).
    """
    complexity = 0
    prefixed = False

    def visit(node: Node, context: WalkContext):
        nonlocal complexity, prefixed
        if node.type in (NodeType.SELECTOR, NodeType.NTH):
            return None

        complexity += 1

        if node.type in _NAMED_PARTS and has_vendor_prefix(node.name or ""):
            prefixed = True
            complexity += 1

        if node.type is NodeType.ATTRIBUTE_SELECTOR:
            if node.matcher is not None:
                complexity += 1
            return SKIP

        if node.type is NodeType.PSEUDO_CLASS_SELECTOR and node.name in PSEUDO_FUNCTIONS:
            nested = _nested_selectors(node)
            if not nested:
                return None
            for child in nested:
                child_complexity, child_prefixed = get_complexity(child)
                complexity += child_complexity
                prefixed = prefixed or child_prefixed
            return SKIP
        return None

    walk(selector, visit)
    return complexity, prefixed


def is_accessibility(selector: Node) -> bool:
    """Check for ``[role]`` or ``[aria-*]`` attribute selectors, nested lists included."""
    found = False

    def visit(node: Node, context: WalkContext):
        nonlocal found
        if node.type is not NodeType.ATTRIBUTE_SELECTOR:
            return None
        name = (node.name or "").lower()
        if name == "role" or name.startswith("aria-"):
            found = True
            return BREAK
        return SKIP

    walk(selector, visit)
    return found
