"""Depth-first traversal of the stylesheet tree with ancestor context."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from .nodes import Node, NodeType


class Signal(Enum):
    """Control signals a visitor may return."""

    SKIP = "skip"  # do not visit this node's children
    BREAK = "break"  # stop the whole traversal


SKIP = Signal.SKIP
BREAK = Signal.BREAK


@dataclass(frozen=True)
class WalkContext:
    """Ancestor information visible while visiting a node.

    The context passed for a node describes its ancestors only: an Atrule
    is visited with the context of its parent, its prelude and block see the
    Atrule itself.
    """

    atrule: Node | None = None
    atrule_prelude: bool = False
    declaration: Node | None = None


Visitor = Callable[[Node, WalkContext], Signal | None]


def walk(root: Node, visit: Visitor, context: WalkContext | None = None) -> bool:
    """Visit ``root`` and its descendants in document order (pre-order).

    Args:
        root: Node to start from.
        visit: Callback receiving each node and its context. Returning
            ``SKIP`` prunes the node's children, ``BREAK`` ends the walk.
        context: Initial context, empty by default.

    Returns:
        True if the traversal was stopped with ``BREAK``.
    """
    return _walk(root, visit, context or WalkContext())


def _walk(node: Node, visit: Visitor, context: WalkContext) -> bool:
    signal = visit(node, context)
    if signal is BREAK:
        return True
    if signal is SKIP:
        return False

    if node.type is NodeType.ATRULE:
        if node.prelude is not None:
            prelude_context = replace(context, atrule=node, atrule_prelude=True)
            if _walk(node.prelude, visit, prelude_context):
                return True
        if node.block is not None:
            block_context = replace(context, atrule=node, atrule_prelude=False)
            if _walk(node.block, visit, block_context):
                return True
        return False

    if node.type is NodeType.DECLARATION:
        context = replace(context, declaration=node)

    for child in node.iter_children():
        if _walk(child, visit, context):
            return True
    return False
