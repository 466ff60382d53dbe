"""Vendor prefix detection."""

from ..parser.nodes import Node, NodeType


def has_vendor_prefix(keyword: str) -> bool:
    """Check whether a keyword carries a vendor prefix.

    A prefix is a single leading ``-`` (not ``--``) followed by at least one
    character and another ``-``, as in ``-webkit-`` or ``-ms-``.

    Args:
        keyword: Property, at-rule, function or selector name.

    Returns:
        True if the keyword is vendor prefixed.
    """
    if len(keyword) < 3 or keyword[0] != "-" or keyword[1] == "-":
        return False
    return keyword.find("-", 2) != -1


def strip_vendor_prefix(keyword: str) -> str:
    if not has_vendor_prefix(keyword):
        return keyword
    return keyword[keyword.find("-", 2) + 1 :]


def is_ast_vendor_prefixed(node: Node) -> bool:
    """Check a value for prefixed keywords or functions, nested calls included."""
    for child in node.children:
        if child.type is NodeType.IDENTIFIER and has_vendor_prefix(child.name):
            return True
        if child.type is NodeType.FUNCTION:
            if has_vendor_prefix(child.name) or is_ast_vendor_prefixed(child):
                return True
    return False
