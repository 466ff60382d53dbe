"""Report assembly.

Turns the final AnalysisState into an immutable AnalysisReport. Everything
here is derived: ratios, histograms of numeric samples and nesting of the
counter summaries into report sections.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any

from .heuristics.specificity import ZERO_SPECIFICITY
from .metrics import FrequencyCounter, NumericAggregator, ratio
from .performance import timed
from .state import AnalysisState

SECTIONS = (
    "stylesheet",
    "atrules",
    "rules",
    "selectors",
    "declarations",
    "properties",
    "values",
)


def freeze(value: Any) -> Any:
    """Recursively convert dicts to read-only mappings and lists to tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of ``freeze``, producing plain JSON-compatible containers."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class AnalysisReport:
    """Immutable result of analyzing one stylesheet.

    Each attribute is a read-only mapping; nested lists are tuples.
    """

    stylesheet: Mapping[str, Any]
    atrules: Mapping[str, Any]
    rules: Mapping[str, Any]
    selectors: Mapping[str, Any]
    declarations: Mapping[str, Any]
    properties: Mapping[str, Any]
    values: Mapping[str, Any]

    def __post_init__(self) -> None:
        for section in fields(self):
            object.__setattr__(self, section.name, freeze(getattr(self, section.name)))

    def to_dict(self, sections: list[str] | None = None) -> dict[str, Any]:
        """Convert the report (or some of its sections) to plain dicts.

        Args:
            sections: Section names to include. All sections when empty.

        Returns:
            Dict keyed by section name, in report order.
        """
        selected = sections or SECTIONS
        return {name: thaw(getattr(self, name)) for name in SECTIONS if name in selected}

    def to_json(self, indent: int | None = 2, sections: list[str] | None = None) -> str:
        return json.dumps(self.to_dict(sections), indent=indent)


def _with_histogram(aggregator: NumericAggregator) -> dict[str, Any]:
    """Aggregate plus raw items and a histogram of distinct values."""
    histogram = FrequencyCounter(aggregator.to_list()).count()
    return {
        **aggregator.aggregate(),
        "items": aggregator.to_list(),
        "unique": histogram["unique"],
        "total_unique": histogram["total_unique"],
        "uniqueness_ratio": histogram["uniqueness_ratio"],
    }


def _with_ratio(counter: FrequencyCounter, total: int) -> dict[str, Any]:
    return {**counter.count(), "ratio": ratio(counter.size(), total)}


def _stylesheet(state: AnalysisState, css: str, size: int) -> dict[str, Any]:
    embed_types_unique = {
        embed_type: {"count": item.count, "size": item.size}
        for embed_type, item in state.embed_types.items()
    }
    return {
        "source_lines_of_code": (
            state.total_atrules
            + state.total_selectors
            + state.total_declarations
            + state.keyframe_selectors.size()
        ),
        "lines_of_code": css.count("\n") + 1,
        "size": size,
        "comments": {
            "total": state.total_comments,
            "size": state.comments_size,
        },
        "embedded_content": {
            **state.embeds.count(),
            "size": {
                "total": state.embed_size,
                "ratio": ratio(state.embed_size, size),
            },
            "types": {
                "total": state.embed_types_total,
                "total_unique": len(embed_types_unique),
                "uniqueness_ratio": ratio(len(embed_types_unique), state.embed_types_total),
                "unique": embed_types_unique,
            },
        },
    }


def _atrules(state: AnalysisState) -> dict[str, Any]:
    total_fontfaces = len(state.fontfaces)
    return {
        "fontface": {
            "total": total_fontfaces,
            "total_unique": total_fontfaces,
            "unique": state.fontfaces,
            "uniqueness_ratio": 1 if total_fontfaces else 0,
        },
        "import": state.imports.count(),
        "media": {
            **state.medias.count(),
            "browserhacks": state.media_browserhacks.count(),
        },
        "charset": state.charsets.count(),
        "supports": {
            **state.supports.count(),
            "browserhacks": state.supports_browserhacks.count(),
        },
        "keyframes": {
            **state.keyframes.count(),
            "prefixed": _with_ratio(state.prefixed_keyframes, state.keyframes.size()),
        },
        "container": state.containers.count(),
        "layer": state.layers.count(),
    }


def _rules(state: AnalysisState) -> dict[str, Any]:
    return {
        "total": state.total_rules,
        "empty": {
            "total": state.empty_rules,
            "ratio": ratio(state.empty_rules, state.total_rules),
        },
        "sizes": _with_histogram(state.rule_sizes),
        "selectors": _with_histogram(state.selectors_per_rule),
        "declarations": _with_histogram(state.declarations_per_rule),
    }


def _selectors(state: AnalysisState) -> dict[str, Any]:
    total = state.total_selectors
    total_unique = len(state.unique_selectors)
    a = state.specificity_a.aggregate()
    b = state.specificity_b.aggregate()
    c = state.specificity_c.aggregate()
    unique_specificities = state.unique_specificities.count()
    complexity_histogram = FrequencyCounter(state.selector_complexities.to_list()).count()

    return {
        "total": total,
        "total_unique": total_unique,
        "uniqueness_ratio": ratio(total_unique, total),
        "specificity": {
            "min": state.min_specificity or ZERO_SPECIFICITY,
            "max": state.max_specificity or ZERO_SPECIFICITY,
            "sum": (a["sum"], b["sum"], c["sum"]),
            "mean": (a["mean"], b["mean"], c["mean"]),
            "mode": (a["mode"], b["mode"], c["mode"]),
            "median": (a["median"], b["median"], c["median"]),
            "items": state.specificities,
            "unique": unique_specificities["unique"],
            "total_unique": unique_specificities["total_unique"],
            "uniqueness_ratio": unique_specificities["uniqueness_ratio"],
        },
        "complexity": {
            **state.selector_complexities.aggregate(),
            **complexity_histogram,
            "items": state.selector_complexities.to_list(),
        },
        "id": _with_ratio(state.ids, total),
        "accessibility": _with_ratio(state.a11y, total),
        "keyframes": state.keyframe_selectors.count(),
        "prefixed": _with_ratio(state.prefixed_selectors, total),
    }


def _declarations(state: AnalysisState) -> dict[str, Any]:
    total = state.total_declarations
    total_unique = len(state.unique_declarations)
    return {
        "total": total,
        "total_unique": total_unique,
        "uniqueness_ratio": ratio(total_unique, total),
        "importants": {
            "total": state.important_declarations,
            "ratio": ratio(state.important_declarations, total),
            "in_keyframes": {
                "total": state.importants_in_keyframes,
                "ratio": ratio(state.importants_in_keyframes, state.important_declarations),
            },
        },
    }


def _properties(state: AnalysisState) -> dict[str, Any]:
    total = state.properties.size()
    return {
        **state.properties.count(),
        "prefixed": _with_ratio(state.property_vendor_prefixes, total),
        "custom": {
            **_with_ratio(state.custom_properties, total),
            "importants": _with_ratio(
                state.important_custom_properties, state.custom_properties.size()
            ),
        },
        "browserhacks": _with_ratio(state.property_hacks, total),
        "complexity": state.property_complexities.aggregate(),
    }


def _values(state: AnalysisState) -> dict[str, Any]:
    return {
        "colors": {
            **state.colors.count(),
            "formats": state.color_formats.count(),
        },
        "gradients": state.gradients.count(),
        "font_families": state.font_families.count(),
        "font_sizes": state.font_sizes.count(),
        "line_heights": state.line_heights.count(),
        "zindexes": state.zindex.count(),
        "text_shadows": state.text_shadows.count(),
        "box_shadows": state.box_shadows.count(),
        "animations": {
            "durations": state.durations.count(),
            "timing_functions": state.timing_functions.count(),
        },
        "prefixes": state.vendor_prefixed_values.count(),
        "browserhacks": state.value_browserhacks.count(),
        "units": state.units.count(),
    }


@timed("build_report")
def build_report(state: AnalysisState, css: str, size: int | None = None) -> AnalysisReport:
    """Assemble the report from the final accumulator state.

    Args:
        state: Accumulators after the walk completed.
        css: The analysed (newline normalized) source text.
        size: Length of the source as given by the caller, defaults to
            ``len(css)``.

    Returns:
        The immutable AnalysisReport.
    """
    if size is None:
        size = len(css)
    return AnalysisReport(
        stylesheet=_stylesheet(state, css, size),
        atrules=_atrules(state),
        rules=_rules(state),
        selectors=_selectors(state),
        declarations=_declarations(state),
        properties=_properties(state),
        values=_values(state),
    )
