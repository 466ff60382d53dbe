"""Stateless classification rules applied while analyzing a stylesheet.

- atrules: browser hacks in @media and @supports preludes
- colors: named, keyword and system colors, color and gradient functions
- embeds: data URI sniffing
- properties: vendor prefixed, hacked and custom property names
- selectors: complexity scoring and accessibility detection
- specificity: specificity calculation and ordering
- values: value keywords, font shorthands, animation lists, IE9 hacks
- vendor: vendor prefix detection
"""

from .atrules import is_media_browserhack, is_supports_browserhack
from .embeds import get_embed_type, is_data_uri
from .properties import basename, is_custom, is_hack
from .selectors import get_complexity, is_accessibility
from .specificity import Specificity, calculate_specificity, compare_specificity
from .values import (
    analyze_animation,
    destructure_font,
    is_ie9_hack,
    is_system_font,
    is_value_keyword,
)
from .vendor import has_vendor_prefix, is_ast_vendor_prefixed

__all__ = [
    "Specificity",
    "analyze_animation",
    "basename",
    "calculate_specificity",
    "compare_specificity",
    "destructure_font",
    "get_complexity",
    "get_embed_type",
    "has_vendor_prefix",
    "is_accessibility",
    "is_ast_vendor_prefixed",
    "is_custom",
    "is_data_uri",
    "is_hack",
    "is_ie9_hack",
    "is_media_browserhack",
    "is_supports_browserhack",
    "is_system_font",
    "is_value_keyword",
]
