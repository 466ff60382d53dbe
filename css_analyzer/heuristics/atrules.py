"""Browser hack detection for ``@media`` and ``@supports`` preludes."""

from ..parser import BREAK, Node, NodeType, WalkContext, walk
from .keywords import KeywordSet

# Media features only understood by a single legacy engine
HACK_MEDIA_FEATURES = KeywordSet(
    ["-moz-images-in-menus", "min--moz-device-pixel-ratio", "-ms-high-contrast"]
)

# (property, value) pairs used to target a single engine from @supports
HACK_SUPPORTS_DECLARATIONS = {
    "-webkit-appearance": "none",
    "-moz-appearance": "meterbar",
}


def _single_value(feature: Node) -> Node | None:
    value = feature.value
    if not isinstance(value, Node) or len(value.children) != 1:
        return None
    return value.children[0]


def _is_media_hack_feature(feature: Node) -> bool:
    name = (feature.name or "").lower()
    if name in HACK_MEDIA_FEATURES:
        return True

    value = _single_value(feature)
    if value is None:
        return False
    # (min-width: 0\0)
    if value.type is NodeType.DIMENSION and value.unit == "\\0":
        return True
    # (min-resolution: .001dpcm)
    if (
        name == "min-resolution"
        and value.type is NodeType.DIMENSION
        and value.value == ".001"
        and value.unit.lower() == "dpcm"
    ):
        return True
    # (-webkit-min-device-pixel-ratio: 0) and (...: 10000)
    if name == "-webkit-min-device-pixel-ratio" and value.type is NodeType.NUMBER:
        return value.value in ("0", "10000")
    return False


def is_media_browserhack(prelude: Node) -> bool:
    """Check a ``@media`` prelude for engine specific hacks.

    Detects ``\\0screen`` and ``screen\\9`` style media types as well as
    media features only a single legacy engine understands.

    Args:
        prelude: The at-rule's prelude node.

    Returns:
        True if the prelude contains a known hack.
    """
    found = False

    def visit(node: Node, context: WalkContext):
        nonlocal found
        if node.type is NodeType.IDENTIFIER:
            name = node.name
            if name.startswith("\\0") or name.endswith("\\9"):
                found = True
                return BREAK
        elif node.type is NodeType.FEATURE and _is_media_hack_feature(node):
            found = True
            return BREAK
        return None

    walk(prelude, visit)
    return found


def is_supports_browserhack(prelude: Node) -> bool:
    """Check a ``@supports`` prelude for engine specific feature tests."""
    found = False

    def visit(node: Node, context: WalkContext):
        nonlocal found
        if node.type is not NodeType.DECLARATION:
            return None
        expected = HACK_SUPPORTS_DECLARATIONS.get(node.property.lower())
        value = node.value
        if (
            expected is not None
            and len(value.children) == 1
            and value.children[0].type is NodeType.IDENTIFIER
            and value.children[0].name.lower() == expected
        ):
            found = True
            return BREAK
        return None

    walk(prelude, visit)
    return found
