"""Selector specificity calculation and ordering.

Specificity is a triple ``(a, b, c)``:
- a: id selectors
- b: class selectors, attribute selectors and pseudo-classes
- c: type selectors and pseudo-elements

Selectors Level 4 adjustments apply: ``:where()`` weighs nothing, ``:is()``,
``:not()`` and ``:has()`` weigh as much as their most specific argument, and
``:nth-child(An+B of S)`` adds the weight of ``S`` on top of its own.
"""

from ..parser.nodes import Node, NodeType
from .keywords import KeywordSet

Specificity = tuple[int, int, int]

ZERO_SPECIFICITY: Specificity = (0, 0, 0)

# Pseudo-classes that take the specificity of their most specific argument
FORWARDING_PSEUDO_CLASSES = KeywordSet(
    ["is", "matches", "-webkit-any", "-moz-any", "not", "has"]
)

# Pseudo-elements that browsers still accept with a single colon
LEGACY_PSEUDO_ELEMENTS = KeywordSet(["before", "after", "first-line", "first-letter"])


def compare_specificity(a: Specificity, b: Specificity) -> int:
    """Compare two specificities component by component.

    Returns a negative number when ``b`` is lower than ``a``, a positive
    number when ``b`` is higher and 0 when both are equal, so sorting with
    this comparator (``functools.cmp_to_key``) lists the highest first.
    """
    if a[0] == b[0]:
        if a[1] == b[1]:
            return b[2] - a[2]
        return b[1] - a[1]
    return b[0] - a[0]


def max_specificity(items: list[Specificity]) -> Specificity:
    highest = ZERO_SPECIFICITY
    for item in items:
        if compare_specificity(highest, item) > 0:
            highest = item
    return highest


def _selector_list(node: Node) -> Node | None:
    for child in node.children:
        if child.type is NodeType.SELECTOR_LIST:
            return child
        if child.type is NodeType.NTH:
            return _selector_list(child)
    return None


def _list_specificity(node: Node) -> Specificity:
    selector_list = _selector_list(node)
    if selector_list is None:
        return ZERO_SPECIFICITY
    return max_specificity([calculate_specificity(s) for s in selector_list.children])


def calculate_specificity(selector: Node) -> Specificity:
    """Calculate the specificity of a single Selector node.

    Args:
        selector: A Selector node (one entry of a selector list).

    Returns:
        The (a, b, c) specificity triple.
    """
    a = b = c = 0
    for part in selector.children:
        kind = part.type
        extra = ZERO_SPECIFICITY

        if kind is NodeType.ID_SELECTOR:
            a += 1
        elif kind in (NodeType.CLASS_SELECTOR, NodeType.ATTRIBUTE_SELECTOR):
            b += 1
        elif kind is NodeType.TYPE_SELECTOR:
            if part.name != "*":
                c += 1
        elif kind is NodeType.PSEUDO_ELEMENT_SELECTOR:
            c += 1
            extra = _list_specificity(part)
        elif kind is NodeType.PSEUDO_CLASS_SELECTOR:
            name = part.name
            if name in LEGACY_PSEUDO_ELEMENTS:
                c += 1
            elif name in FORWARDING_PSEUDO_CLASSES:
                extra = _list_specificity(part)
            elif name.lower() != "where":
                b += 1
                extra = _list_specificity(part)

        a, b, c = a + extra[0], b + extra[1], c + extra[2]
    return (a, b, c)
