"""Single-pass stylesheet analysis.

The Analyzer walks the parsed tree once, dispatching on node type. Each
handler classifies its node with the heuristics package, feeds the
accumulators held in AnalysisState and tells the walker whether to descend
into the node's children.
"""

from collections.abc import Callable
from typing import ClassVar, NamedTuple

from .analyzer_logging import LogCategory, get_category_logger
from .heuristics import (
    analyze_animation,
    basename,
    calculate_specificity,
    compare_specificity,
    destructure_font,
    get_complexity,
    get_embed_type,
    has_vendor_prefix,
    is_accessibility,
    is_ast_vendor_prefixed,
    is_custom,
    is_data_uri,
    is_hack,
    is_ie9_hack,
    is_media_browserhack,
    is_supports_browserhack,
    is_system_font,
    is_value_keyword,
)
from .heuristics.colors import (
    COLOR_FUNCTIONS,
    COLOR_KEYWORDS,
    MAX_COLOR_KEYWORD_LENGTH,
    MIN_COLOR_KEYWORD_LENGTH,
    NAMED_COLORS,
    SYSTEM_COLORS,
    is_gradient,
)
from .heuristics.values import IE9_HACK_SUFFIX, strip_ie9_hack
from .parser import SKIP, Node, NodeType, Signal, WalkContext, parse, walk
from .parser.source import normalize_newlines
from .performance import PerformanceTimer
from .report import AnalysisReport, build_report
from .state import AnalysisState, EmbedType

logger = get_category_logger(LogCategory.ANALYZER)

Handler = Callable[[Node, WalkContext], Signal | None]


def _is_keyframes(name: str | None) -> bool:
    return name is not None and name.lower().endswith("keyframes")


def _in_keyframes(context: WalkContext) -> bool:
    return context.atrule is not None and _is_keyframes(context.atrule.name)


class ValuePolicy(NamedTuple):
    """How the value of one property is recorded.

    Attributes:
        record: Analyzer method storing the value, or None.
        scan_colors: Whether to look for colors and gradients in the value.
        prune: Whether the walker must skip the value's children.
    """

    record: "Callable[[Analyzer, Node], None] | None"
    scan_colors: bool = False
    prune: bool = False


class Analyzer:
    """Collects stylesheet metrics during one tree walk.

    Example:
        >>> analyzer = Analyzer(css)
        >>> state = analyzer.run(parse(css, on_comment=analyzer.on_comment))
    """

    def __init__(self, css: str):
        """Initialize the analyzer.

        Args:
            css: Newline normalized source text the tree offsets refer to.
        """
        self.css = css
        self.state = AnalysisState()
        self._handlers: dict[NodeType, Handler] = {
            NodeType.ATRULE: self.visit_atrule,
            NodeType.RULE: self.visit_rule,
            NodeType.SELECTOR: self.visit_selector,
            NodeType.DIMENSION: self.visit_dimension,
            NodeType.URL: self.visit_url,
            NodeType.VALUE: self.visit_value,
            NodeType.DECLARATION: self.visit_declaration,
        }

    # Source text

    def plain(self, node: Node | None) -> str:
        """Authored source text of a node."""
        if node is None:
            return ""
        return self.css[node.start : node.end]

    def stringify(self, node: Node | None) -> str:
        return self.plain(node).strip()

    def slice_text(self, start: int, end: int) -> str:
        return self.css[start:end]

    # Entry points

    def on_comment(self, comment: str) -> None:
        self.state.total_comments += 1
        self.state.comments_size += len(comment)

    def run(self, root: Node) -> AnalysisState:
        walk(root, self.visit)
        return self.state

    def visit(self, node: Node, context: WalkContext) -> Signal | None:
        handler = self._handlers.get(node.type)
        if handler is None:
            return None
        return handler(node, context)

    # At-rules

    def visit_atrule(self, node: Node, context: WalkContext) -> Signal | None:
        state = self.state
        state.total_atrules += 1
        name = node.name.lower()

        if name == "font-face":
            descriptors: dict[str, str] = {}
            if node.block is not None:
                for descriptor in node.block.children:
                    # Raw nodes are syntax errors
                    if descriptor.type is NodeType.DECLARATION:
                        descriptors[descriptor.property] = self.stringify(descriptor.value)
            state.fontfaces.append(descriptors)
        elif name == "media":
            prelude = self.stringify(node.prelude)
            state.medias.push(prelude)
            if node.prelude is not None and is_media_browserhack(node.prelude):
                state.media_browserhacks.push(prelude)
        elif name == "supports":
            prelude = self.stringify(node.prelude)
            state.supports.push(prelude)
            if node.prelude is not None and is_supports_browserhack(node.prelude):
                state.supports_browserhacks.push(prelude)
        elif _is_keyframes(name):
            keyframes_name = f"@{node.name} {self.stringify(node.prelude)}"
            if has_vendor_prefix(node.name):
                state.prefixed_keyframes.push(keyframes_name)
            state.keyframes.push(keyframes_name)
        elif name == "import":
            state.imports.push(self.stringify(node.prelude))
        elif name == "charset":
            state.charsets.push(self.stringify(node.prelude))
        elif name == "container":
            state.containers.push(self.stringify(node.prelude))
        elif name == "layer":
            for layer in self.stringify(node.prelude).split(","):
                state.layers.push(layer.strip())
        return None

    # Rules and selectors

    def visit_rule(self, node: Node, context: WalkContext) -> Signal | None:
        state = self.state
        num_selectors = len(node.prelude.children) if node.prelude is not None else 0
        num_declarations = len(node.block.children) if node.block is not None else 0

        state.rule_sizes.push(num_selectors + num_declarations)
        state.selectors_per_rule.push(num_selectors)
        state.declarations_per_rule.push(num_declarations)

        state.total_rules += 1
        if num_declarations == 0:
            state.empty_rules += 1
        return None

    def visit_selector(self, node: Node, context: WalkContext) -> Signal | None:
        state = self.state
        selector = self.stringify(node)

        if _in_keyframes(context):
            state.keyframe_selectors.push(selector)
            return SKIP

        specificity = calculate_specificity(node)
        if specificity[0] > 0:
            state.ids.push(selector)

        if is_accessibility(node):
            state.a11y.push(selector)

        complexity, prefixed = get_complexity(node)
        if prefixed:
            state.prefixed_selectors.push(selector)

        state.unique_selectors.add(selector)
        state.selector_complexities.push(complexity)
        state.unique_specificities.push(",".join(str(part) for part in specificity))

        state.specificity_a.push(specificity[0])
        state.specificity_b.push(specificity[1])
        state.specificity_c.push(specificity[2])
        state.track_specificity(specificity, compare_specificity)
        state.specificities.append(specificity)

        # Nested selector lists (:is(), :where()...) are already part of
        # this selector's specificity and complexity
        return SKIP

    # Value literals

    def visit_dimension(self, node: Node, context: WalkContext) -> Signal | None:
        if context.declaration is None:
            return None
        self.state.units.push(strip_ie9_hack(node.unit), context.declaration.property)
        return SKIP

    def visit_url(self, node: Node, context: WalkContext) -> Signal | None:
        embed = node.value
        if not is_data_uri(embed):
            return None

        state = self.state
        size = len(embed)
        embed_type = get_embed_type(embed)

        state.embed_types_total += 1
        state.embed_size += size
        item = state.embed_types.setdefault(embed_type, EmbedType())
        item.count += 1
        item.size += size
        state.embeds.push(embed)
        return None

    def visit_value(self, node: Node, context: WalkContext) -> Signal | None:
        declaration = context.declaration
        # Feature values in @media preludes have no declaration
        if declaration is None or is_value_keyword(node):
            return None

        state = self.state
        property_name = declaration.property

        if is_ast_vendor_prefixed(node):
            state.vendor_prefixed_values.push(self.stringify(node))

        # `property: value !ie`
        if isinstance(declaration.important, str):
            state.value_browserhacks.push(f"{self.plain(node)}!{declaration.important}")

        # `property: value\9`
        if is_ie9_hack(self.plain(node)):
            state.value_browserhacks.push(self.stringify(node))

        policy = self.VALUE_POLICIES.get(basename(property_name), self.DEFAULT_POLICY)
        if policy.record is not None:
            policy.record(self, node)
        if policy.scan_colors:
            self.scan_colors(node, property_name)
        return SKIP if policy.prune else None

    def record_zindex(self, value: Node) -> None:
        self.state.zindex.push(self.stringify(value))

    def record_font(self, value: Node) -> None:
        if is_system_font(value):
            return
        parts = destructure_font(value, self.stringify, self.slice_text)
        if parts["font_family"]:
            self.state.font_families.push(parts["font_family"])
        if parts["font_size"]:
            self.state.font_sizes.push(parts["font_size"])
        if parts["line_height"]:
            self.state.line_heights.push(parts["line_height"])

    def record_font_size(self, value: Node) -> None:
        if not is_system_font(value):
            self.state.font_sizes.push(self.stringify(value))

    def record_font_family(self, value: Node) -> None:
        if not is_system_font(value):
            self.state.font_families.push(self.stringify(value))

    def record_line_height(self, value: Node) -> None:
        self.state.line_heights.push(self.stringify(value))

    def record_animation(self, value: Node) -> None:
        durations, timing_functions = analyze_animation(value.children, self.stringify)
        for duration in durations:
            self.state.durations.push(duration)
        for timing_function in timing_functions:
            self.state.timing_functions.push(timing_function)

    def _split_list(self, value: Node) -> list[str]:
        if len(value.children) > 1:
            return [
                self.stringify(child)
                for child in value.children
                if child.type is not NodeType.OPERATOR
            ]
        return [self.stringify(value)]

    def record_durations(self, value: Node) -> None:
        for duration in self._split_list(value):
            self.state.durations.push(duration)

    def record_timing_functions(self, value: Node) -> None:
        for timing_function in self._split_list(value):
            self.state.timing_functions.push(timing_function)

    def record_text_shadow(self, value: Node) -> None:
        self.state.text_shadows.push(self.stringify(value))

    def record_box_shadow(self, value: Node) -> None:
        self.state.box_shadows.push(self.stringify(value))

    def scan_colors(self, value: Node, property_name: str) -> None:
        """Record colors and gradients found anywhere in a value.

        Args:
            value: The Value node to scan.
            property_name: Property the colors are counted against.
        """
        state = self.state

        def visit(node: Node, context: WalkContext) -> Signal | None:
            if node.type is NodeType.HASH:
                hex_length = len(node.value)
                if node.value.endswith(IE9_HACK_SUFFIX):
                    hex_length -= len(IE9_HACK_SUFFIX)
                state.colors.push(f"#{node.value}", property_name)
                state.color_formats.push(f"hex{hex_length}")
                return SKIP

            if node.type is NodeType.IDENTIFIER:
                name = node.name
                if not MIN_COLOR_KEYWORD_LENGTH <= len(name) <= MAX_COLOR_KEYWORD_LENGTH:
                    return SKIP
                if name in NAMED_COLORS:
                    color_format = "named"
                elif name in COLOR_KEYWORDS:
                    color_format = name.lower()
                elif name in SYSTEM_COLORS:
                    color_format = "system"
                else:
                    return SKIP
                state.colors.push(self.stringify(node), property_name)
                state.color_formats.push(color_format)
                return None

            if node.type is NodeType.FUNCTION:
                name = node.name
                # var() never is a color itself
                if name.lower() == "var":
                    return SKIP
                if name in COLOR_FUNCTIONS:
                    state.colors.push(self.stringify(node), property_name)
                    state.color_formats.push(name.lower())
                elif is_gradient(name):
                    state.gradients.push(self.stringify(node))
                # keep walking: gradients contain colors
                return None
            return None

        walk(value, visit)

    # Declarations

    def visit_declaration(self, node: Node, context: WalkContext) -> Signal | None:
        # @supports (display: grid) is a feature test, not a declaration
        if context.atrule_prelude:
            return SKIP

        state = self.state
        state.total_declarations += 1
        state.unique_declarations.add(self.stringify(node))

        if node.important is True:
            state.important_declarations += 1
            if _in_keyframes(context):
                state.importants_in_keyframes += 1

        property_name = node.property
        state.properties.push(property_name)

        if has_vendor_prefix(property_name):
            state.property_vendor_prefixes.push(property_name)
            state.property_complexities.push(2)
        elif is_hack(property_name):
            state.property_hacks.push(property_name)
            state.property_complexities.push(2)
        elif is_custom(property_name):
            state.custom_properties.push(property_name)
            state.property_complexities.push(2)
            if node.important is True:
                state.important_custom_properties.push(property_name)
        else:
            state.property_complexities.push(1)
        return None

    DEFAULT_POLICY: ClassVar[ValuePolicy] = ValuePolicy(None, scan_colors=True)

    VALUE_POLICIES: ClassVar[dict[str | None, ValuePolicy]] = {
        # no colors possible
        "z-index": ValuePolicy(record_zindex, prune=True),
        "font": ValuePolicy(record_font),
        "font-size": ValuePolicy(record_font_size),
        "font-family": ValuePolicy(record_font_family),
        "line-height": ValuePolicy(record_line_height, scan_colors=True),
        "transition": ValuePolicy(record_animation),
        "animation": ValuePolicy(record_animation),
        "animation-duration": ValuePolicy(record_durations),
        "transition-duration": ValuePolicy(record_durations),
        "animation-timing-function": ValuePolicy(record_timing_functions),
        "transition-timing-function": ValuePolicy(record_timing_functions),
        "text-shadow": ValuePolicy(record_text_shadow, scan_colors=True),
        "box-shadow": ValuePolicy(record_box_shadow, scan_colors=True),
    }


def analyze(css: str) -> AnalysisReport:
    """Analyze a stylesheet.

    Args:
        css: Stylesheet source text.

    Returns:
        The immutable analysis report. Identical input always yields an
        identical report.
    """
    source = normalize_newlines(css)
    analyzer = Analyzer(source)

    with PerformanceTimer("analyze_total"):
        with PerformanceTimer("parse"):
            tree = parse(source, on_comment=analyzer.on_comment)
        with PerformanceTimer("walk"):
            state = analyzer.run(tree)
        report = build_report(state, source, size=len(css))

    logger.debug(
        f"Analyzed {len(css)} chars: {state.total_rules} rules, "
        f"{state.total_selectors} selectors, {state.total_declarations} declarations",
        extra={"size": len(css)},
    )
    return report
