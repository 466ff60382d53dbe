"""Value classification: keywords, font shorthands and animation lists."""

from collections.abc import Callable
from typing import TypedDict

from ..parser.nodes import Node, NodeType
from .keywords import KeywordSet

Stringify = Callable[[Node], str]

# Global keywords that carry no information about the value itself
VALUE_KEYWORDS = KeywordSet(
    ["auto", "none", "inherit", "initial", "unset", "revert", "revert-layer"]
)

SYSTEM_FONTS = KeywordSet(
    ["caption", "icon", "menu", "message-box", "small-caption", "status-bar"]
)

SIZE_KEYWORDS = KeywordSet(
    [
        "xx-small",
        "x-small",
        "small",
        "medium",
        "large",
        "x-large",
        "xx-large",
        "larger",
        "smaller",
    ]
)

TIMING_KEYWORDS = KeywordSet(
    ["linear", "ease", "ease-in", "ease-out", "ease-in-out", "step-start", "step-end"]
)

TIMING_FUNCTIONS = KeywordSet(["cubic-bezier", "steps"])

IE9_HACK_SUFFIX = "\\9"


def is_value_keyword(value: Node) -> bool:
    """Check whether a value consists of a single global keyword like ``inherit``."""
    if len(value.children) != 1:
        return False
    child = value.children[0]
    return child.type is NodeType.IDENTIFIER and child.name in VALUE_KEYWORDS


def is_ie9_hack(raw_value: str) -> bool:
    """``width: 100px\\9`` only applies in IE9 and below."""
    return raw_value.rstrip().endswith(IE9_HACK_SUFFIX)


def strip_ie9_hack(text: str) -> str:
    if text.endswith(IE9_HACK_SUFFIX):
        return text[: -len(IE9_HACK_SUFFIX)]
    return text


def is_system_font(value: Node) -> bool:
    """Check for ``font: menu`` style values naming a system font."""
    first = value.first
    return (
        first is not None
        and first.type is NodeType.IDENTIFIER
        and first.name in SYSTEM_FONTS
    )


class FontParts(TypedDict):
    font_size: str | None
    line_height: str | None
    font_family: str | None


def _is_operator(node: Node | None, operator: str) -> bool:
    return node is not None and node.type is NodeType.OPERATOR and node.value == operator


def destructure_font(
    value: Node, stringify: Stringify, slice_text: Callable[[int, int], str]
) -> FontParts:
    """Pull font-size, line-height and font-family out of a ``font`` shorthand.

    The shorthand is ``[style] [variant] [weight] size[/line-height] family``,
    so parts are located relative to the ``/`` and the first ``,`` operator.
    Everything from the first family node to the end of the value is the
    family list.

    Args:
        value: The Value node of a ``font`` declaration.
        stringify: Renders a node as trimmed source text.
        slice_text: Returns the source text between two offsets.

    Returns:
        Dict with ``font_size``, ``line_height`` and ``font_family``, each
        None when absent.
    """
    children = value.children
    font_size: str | None = None
    line_height: str | None = None
    family_start: Node | None = None
    family_end: Node | None = None

    for index, node in enumerate(children):
        previous = children[index - 1] if index > 0 else None
        following = children[index + 1] if index + 1 < len(children) else None

        # anything in front of '/' is the font-size
        if _is_operator(following, "/"):
            font_size = stringify(node)
            continue
        # anything after '/' is the line-height
        if _is_operator(previous, "/"):
            line_height = stringify(node)
            continue
        # a node followed by ',' starts the family list
        if _is_operator(following, ",") and family_start is None:
            family_start = node
            if font_size is None and previous is not None:
                font_size = stringify(previous)
            continue
        # numbers left at this point are font weights
        if node.type is NodeType.NUMBER:
            continue
        # the last node always ends the family list
        if following is None:
            family_end = node
            if font_size is None and family_start is None and previous is not None:
                font_size = stringify(previous)
            continue
        if node.type is NodeType.IDENTIFIER and node.name in SIZE_KEYWORDS:
            font_size = node.name

    font_family = None
    first = family_start or family_end
    if first is not None and family_end is not None:
        font_family = slice_text(first.start, family_end.end).strip()

    return {
        "font_size": font_size,
        "line_height": line_height,
        "font_family": font_family,
    }


def analyze_animation(
    children: list[Node], stringify: Stringify
) -> tuple[list[str], list[str]]:
    """Split ``animation``/``transition`` shorthand values.

    Within each comma separated layer the first dimension is the duration
    (a second one would be the delay). Easing keywords and
    ``cubic-bezier()``/``steps()`` calls are timing functions.

    Returns:
        Tuple of (durations, timing functions) as source text.
    """
    durations: list[str] = []
    timing_functions: list[str] = []
    duration_found = False

    for child in children:
        if child.type is NodeType.OPERATOR:
            duration_found = False
        elif child.type is NodeType.DIMENSION and not duration_found:
            duration_found = True
            durations.append(stringify(child))
        elif child.type is NodeType.IDENTIFIER and child.name in TIMING_KEYWORDS:
            timing_functions.append(stringify(child))
        elif child.type is NodeType.FUNCTION and child.name in TIMING_FUNCTIONS:
            timing_functions.append(stringify(child))

    return durations, timing_functions
