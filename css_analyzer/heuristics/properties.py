"""Property name classification."""

from .vendor import has_vendor_prefix, strip_vendor_prefix

# First characters of legacy IE property hacks (`*zoom`, `_height`, ...)
HACK_CHARACTERS = frozenset("/*_+&$#")


def is_custom(property_name: str) -> bool:
    """Custom properties start with ``--`` and have a name after it."""
    return len(property_name) >= 3 and property_name.startswith("--")


def is_hack(property_name: str) -> bool:
    """Check for a legacy browser hack prefix such as ``*`` or ``_``."""
    if is_custom(property_name) or has_vendor_prefix(property_name):
        return False
    return property_name[:1] in HACK_CHARACTERS


def basename(property_name: str) -> str | None:
    """Lowercase property name without vendor prefix or hack character.

    Returns:
        The basename, or None for custom properties which never match a
        standard property.
    """
    if is_custom(property_name):
        return None
    if is_hack(property_name):
        property_name = property_name[1:]
    return strip_vendor_prefix(property_name).lower()

