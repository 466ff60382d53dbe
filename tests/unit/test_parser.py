"""Unit tests for the tinycss2 based stylesheet parser."""

from css_analyzer.parser import Node, NodeType, parse
from css_analyzer.parser.source import MAX_NESTING_DEPTH, Source


def types(nodes) -> list[NodeType]:
    return [node.type for node in nodes]


def tree_depth(root: Node) -> int:
    deepest = 0
    pending = [(root, 1)]
    while pending:
        node, depth = pending.pop()
        deepest = max(deepest, depth)
        pending.extend((child, depth + 1) for child in node.iter_children())
    return deepest


class TestStructure:
    """Tests for rules, at-rules and blocks."""

    def test_rule_offsets_slice_source(self) -> None:
        """Node offsets re-slice the authored text."""
        css = "a { color: red }"
        rule = parse(css).children[0]
        declaration = rule.block.children[0]

        assert rule.type is NodeType.RULE
        assert (rule.start, rule.end) == (0, len(css))
        assert css[declaration.start : declaration.end] == "color: red"
        assert rule.prelude.type is NodeType.SELECTOR_LIST

    def test_empty_stylesheet(self) -> None:
        tree = parse("")
        assert tree.type is NodeType.STYLESHEET
        assert tree.children == []

    def test_empty_blocks(self) -> None:
        rule, atrule = parse(".a, .b {} @media print { a{} }").children

        assert rule.block.children == []
        assert atrule.block.children[0].block.children == []
        assert Source("").spans([], 0) == []

    def test_atrule_with_block(self) -> None:
        atrule = parse("@media screen { a {} }").children[0]
        assert atrule.type is NodeType.ATRULE
        assert atrule.name == "media"
        assert atrule.prelude.type is NodeType.ATRULE_PRELUDE
        assert types(atrule.block.children) == [NodeType.RULE]

    def test_statement_atrule_without_block(self) -> None:
        tree = parse('@import "a.css"; a {}')
        assert types(tree.children) == [NodeType.ATRULE, NodeType.RULE]
        assert tree.children[0].block is None

    def test_newlines_are_normalized(self) -> None:
        """CRLF counts as a single character in offsets."""
        second = parse("a{}\r\nb{}").children[1]
        assert second.start == 4

    def test_comments_reported(self) -> None:
        comments: list[str] = []
        parse("/* a */ b { /* cd */ color: red }", on_comment=comments.append)
        assert comments == [" a ", " cd "]

    def test_malformed_declaration_becomes_raw(self) -> None:
        rule = parse("a { 12px; color: red }").children[0]
        assert types(rule.block.children) == [NodeType.RAW, NodeType.DECLARATION]

    def test_custom_property_may_hold_braces(self) -> None:
        rule = parse("a { --x: { b: c }; color: red }").children[0]
        properties = [child.property for child in rule.block.children]
        assert properties == ["--x", "color"]


class TestDeclarations:
    """Tests for declaration and value parsing."""

    def test_important(self) -> None:
        declaration = parse("a { color: red !important }").children[0].block.children[0]
        assert declaration.important is True
        assert types(declaration.value.children) == [NodeType.IDENTIFIER]

    def test_legacy_important_marker(self) -> None:
        """`!ie` style markers are kept as text."""
        declaration = parse("a { color: red !ie }").children[0].block.children[0]
        assert declaration.important == "ie"

    def test_property_hacks(self) -> None:
        rule = parse("a { *zoom: 1; _height: 1px }").children[0]
        assert [child.property for child in rule.block.children] == ["*zoom", "_height"]

    def test_dimension_keeps_raw_unit(self) -> None:
        """Escapes in units survive for hack detection."""
        rule = parse("a { width: 10px\\9 }").children[0]
        dimension = rule.block.children[0].value.children[0]
        assert dimension.type is NodeType.DIMENSION
        assert dimension.value == "10"
        assert dimension.unit == "px\\9"

    def test_value_components(self) -> None:
        css = "a { background: #FFF url(data:image/png;base64,AA) rgba(0, 0, 0, .5) }"
        value = parse(css).children[0].block.children[0].value
        assert types(value.children) == [NodeType.HASH, NodeType.URL, NodeType.FUNCTION]
        assert value.children[0].value == "FFF"
        assert value.children[1].value == "data:image/png;base64,AA"
        function = value.children[2]
        assert function.name == "rgba"
        assert NodeType.OPERATOR in types(function.children)

    def test_quoted_url(self) -> None:
        value = parse('a { background: url("img.png") }').children[0].block.children[0].value
        assert value.children[0].type is NodeType.URL
        assert value.children[0].value == "img.png"


class TestPreludes:
    """Tests for at-rule prelude parsing."""

    def test_media_feature(self) -> None:
        prelude = parse("@media (min-width: 10px) {}").children[0].prelude
        parentheses = prelude.children[0]
        feature = parentheses.children[0]

        assert parentheses.type is NodeType.PARENTHESES
        assert feature.type is NodeType.FEATURE
        assert feature.name == "min-width"
        assert feature.value.children[0].unit == "px"

    def test_supports_condition_is_declaration(self) -> None:
        prelude = parse("@supports (display: grid) {}").children[0].prelude
        declaration = prelude.children[0].children[0]
        assert declaration.type is NodeType.DECLARATION
        assert declaration.property == "display"


class TestSelectors:
    """Tests for selector list parsing."""

    def selector(self, text: str):
        return parse(f"{text} {{}}").children[0].prelude.children[0]

    def test_compound_and_combinators(self) -> None:
        selector = self.selector("a > .b:hover::before")
        assert types(selector.children) == [
            NodeType.TYPE_SELECTOR,
            NodeType.COMBINATOR,
            NodeType.CLASS_SELECTOR,
            NodeType.PSEUDO_CLASS_SELECTOR,
            NodeType.PSEUDO_ELEMENT_SELECTOR,
        ]
        assert selector.children[1].name == ">"
        assert selector.children[4].name == "before"

    def test_descendant_combinator(self) -> None:
        selector = self.selector("a   b")
        assert types(selector.children) == [
            NodeType.TYPE_SELECTOR,
            NodeType.COMBINATOR,
            NodeType.TYPE_SELECTOR,
        ]
        assert selector.children[1].name == " "

    def test_comment_is_not_a_combinator(self) -> None:
        selector = self.selector(".a/**/.b")
        assert types(selector.children) == [
            NodeType.CLASS_SELECTOR,
            NodeType.CLASS_SELECTOR,
        ]

    def test_comment_inside_whitespace(self) -> None:
        selector = self.selector(".a /* x */ .b")
        assert types(selector.children) == [
            NodeType.CLASS_SELECTOR,
            NodeType.COMBINATOR,
            NodeType.CLASS_SELECTOR,
        ]

    def test_selector_list(self) -> None:
        selectors = parse(".a, #b , c {}").children[0].prelude.children
        assert [s.children[0].type for s in selectors] == [
            NodeType.CLASS_SELECTOR,
            NodeType.ID_SELECTOR,
            NodeType.TYPE_SELECTOR,
        ]

    def test_nested_selector_list(self) -> None:
        pseudo = self.selector(":is(.a, .b)").children[0]
        assert pseudo.name == "is"
        assert pseudo.children[0].type is NodeType.SELECTOR_LIST
        assert len(pseudo.children[0].children) == 2

    def test_nth_of_selector(self) -> None:
        pseudo = self.selector(":nth-child(2n+1 of .a)").children[0]
        nth = pseudo.children[0]
        assert nth.type is NodeType.NTH
        assert types(nth.children) == [NodeType.RAW, NodeType.SELECTOR_LIST]

    def test_attribute(self) -> None:
        attribute = self.selector('[aria-label="x"]').children[0]
        assert attribute.type is NodeType.ATTRIBUTE_SELECTOR
        assert attribute.name == "aria-label"
        assert attribute.matcher == "="

    def test_attribute_without_value(self) -> None:
        attribute = self.selector("[href]").children[0]
        assert attribute.name == "href"
        assert attribute.matcher is None


class TestNode:
    """Tests for the Node model."""

    def test_first_child(self) -> None:
        value = parse("a { margin: 1px 2px }").children[0].block.children[0].value
        assert value.first.type is NodeType.DIMENSION
        assert Node(NodeType.VALUE, 0, 0).first is None

    def test_property_field(self) -> None:
        declaration = parse("a { color: red }").children[0].block.children[0]
        assert declaration.property == "color"
        assert "color" in repr(declaration)


class TestNestingDepth:
    """Deeply nested input is cut off into Raw nodes instead of recursing."""

    def test_nested_functions(self) -> None:
        css = "a { width: " + "calc(" * 300 + "1px" + ")" * 300 + " }"
        tree = parse(css)

        assert tree_depth(tree) < 4 * MAX_NESTING_DEPTH
        node = tree.children[0].block.children[0].value.first
        while node.type is NodeType.FUNCTION:
            node = node.first
        assert node.type is NodeType.RAW
        assert node.value.startswith("calc(")

    def test_nested_blocks(self) -> None:
        tree = parse("a{" * 300 + "}" * 300)
        assert tree_depth(tree) < 4 * MAX_NESTING_DEPTH

    def test_nested_selectors(self) -> None:
        tree = parse(":is(" * 300 + "a" + ")" * 300 + " {}")

        assert tree_depth(tree) < 4 * MAX_NESTING_DEPTH
        assert len(tree.children[0].prelude.children) == 1

    def test_nested_prelude(self) -> None:
        tree = parse("@media " + "(" * 300 + ")" * 300 + " {}")
        assert tree_depth(tree) < 4 * MAX_NESTING_DEPTH

    def test_shallow_input_is_unaffected(self) -> None:
        value = parse("a { width: calc(1px + min(2px, 3px)) }").children[0].block.children[0].value
        inner = value.first.children[2]
        assert inner.type is NodeType.FUNCTION
        assert types(inner.children) == [
            NodeType.DIMENSION,
            NodeType.OPERATOR,
            NodeType.DIMENSION,
        ]
