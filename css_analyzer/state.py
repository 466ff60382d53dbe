"""Mutable accumulator state owned by a single analysis run."""

from dataclasses import dataclass, field

from .heuristics.specificity import Specificity
from .metrics import ContextCounter, FrequencyCounter, NumericAggregator


@dataclass
class EmbedType:
    """Count and total size of embeds sharing one media type."""

    count: int = 0
    size: int = 0


@dataclass
class AnalysisState:
    """Every accumulator fed during the tree walk.

    A fresh instance is created per ``analyze()`` call and turned into an
    AnalysisReport once the walk completes.
    """

    # Stylesheet
    total_comments: int = 0
    comments_size: int = 0
    embeds: FrequencyCounter = field(default_factory=FrequencyCounter)
    embed_size: int = 0
    embed_types_total: int = 0
    embed_types: dict[str, EmbedType] = field(default_factory=dict)

    # At-rules
    total_atrules: int = 0
    fontfaces: list[dict[str, str]] = field(default_factory=list)
    layers: FrequencyCounter = field(default_factory=FrequencyCounter)
    imports: FrequencyCounter = field(default_factory=FrequencyCounter)
    medias: FrequencyCounter = field(default_factory=FrequencyCounter)
    media_browserhacks: FrequencyCounter = field(default_factory=FrequencyCounter)
    charsets: FrequencyCounter = field(default_factory=FrequencyCounter)
    supports: FrequencyCounter = field(default_factory=FrequencyCounter)
    supports_browserhacks: FrequencyCounter = field(default_factory=FrequencyCounter)
    keyframes: FrequencyCounter = field(default_factory=FrequencyCounter)
    prefixed_keyframes: FrequencyCounter = field(default_factory=FrequencyCounter)
    containers: FrequencyCounter = field(default_factory=FrequencyCounter)

    # Rules
    total_rules: int = 0
    empty_rules: int = 0
    rule_sizes: NumericAggregator = field(default_factory=NumericAggregator)
    selectors_per_rule: NumericAggregator = field(default_factory=NumericAggregator)
    declarations_per_rule: NumericAggregator = field(default_factory=NumericAggregator)

    # Selectors
    keyframe_selectors: FrequencyCounter = field(default_factory=FrequencyCounter)
    unique_selectors: set[str] = field(default_factory=set)
    prefixed_selectors: FrequencyCounter = field(default_factory=FrequencyCounter)
    min_specificity: Specificity | None = None
    max_specificity: Specificity | None = None
    specificity_a: NumericAggregator = field(default_factory=NumericAggregator)
    specificity_b: NumericAggregator = field(default_factory=NumericAggregator)
    specificity_c: NumericAggregator = field(default_factory=NumericAggregator)
    unique_specificities: FrequencyCounter = field(default_factory=FrequencyCounter)
    selector_complexities: NumericAggregator = field(default_factory=NumericAggregator)
    specificities: list[Specificity] = field(default_factory=list)
    ids: FrequencyCounter = field(default_factory=FrequencyCounter)
    a11y: FrequencyCounter = field(default_factory=FrequencyCounter)

    # Declarations
    unique_declarations: set[str] = field(default_factory=set)
    total_declarations: int = 0
    important_declarations: int = 0
    importants_in_keyframes: int = 0
    important_custom_properties: FrequencyCounter = field(default_factory=FrequencyCounter)

    # Properties
    properties: FrequencyCounter = field(default_factory=FrequencyCounter)
    property_hacks: FrequencyCounter = field(default_factory=FrequencyCounter)
    property_vendor_prefixes: FrequencyCounter = field(default_factory=FrequencyCounter)
    custom_properties: FrequencyCounter = field(default_factory=FrequencyCounter)
    property_complexities: NumericAggregator = field(default_factory=NumericAggregator)

    # Values
    vendor_prefixed_values: FrequencyCounter = field(default_factory=FrequencyCounter)
    value_browserhacks: FrequencyCounter = field(default_factory=FrequencyCounter)
    zindex: FrequencyCounter = field(default_factory=FrequencyCounter)
    text_shadows: FrequencyCounter = field(default_factory=FrequencyCounter)
    box_shadows: FrequencyCounter = field(default_factory=FrequencyCounter)
    font_families: FrequencyCounter = field(default_factory=FrequencyCounter)
    font_sizes: FrequencyCounter = field(default_factory=FrequencyCounter)
    line_heights: FrequencyCounter = field(default_factory=FrequencyCounter)
    timing_functions: FrequencyCounter = field(default_factory=FrequencyCounter)
    durations: FrequencyCounter = field(default_factory=FrequencyCounter)
    colors: ContextCounter = field(default_factory=ContextCounter)
    color_formats: FrequencyCounter = field(default_factory=FrequencyCounter)
    units: ContextCounter = field(default_factory=ContextCounter)
    gradients: FrequencyCounter = field(default_factory=FrequencyCounter)

    @property
    def total_selectors(self) -> int:
        return self.selector_complexities.size()

    def track_specificity(self, specificity: Specificity, compare) -> None:
        """Update the running min/max with one comparison each.

        Args:
            specificity: Specificity of the selector just visited.
            compare: Ordering function, see ``compare_specificity``.
        """
        if self.min_specificity is None:
            self.min_specificity = specificity
        if self.max_specificity is None:
            self.max_specificity = specificity

        if compare(self.min_specificity, specificity) < 0:
            self.min_specificity = specificity
        if compare(self.max_specificity, specificity) > 0:
            self.max_specificity = specificity
