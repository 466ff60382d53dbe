"""Unit tests for the tree walker."""

from css_analyzer.parser import BREAK, SKIP, NodeType, parse, walk


class TestWalk:
    """Tests for traversal order and control signals."""

    def test_document_order(self) -> None:
        seen: list[NodeType] = []
        walk(parse("a { color: red }"), lambda node, context: seen.append(node.type))
        assert seen == [
            NodeType.STYLESHEET,
            NodeType.RULE,
            NodeType.SELECTOR_LIST,
            NodeType.SELECTOR,
            NodeType.TYPE_SELECTOR,
            NodeType.BLOCK,
            NodeType.DECLARATION,
            NodeType.VALUE,
            NodeType.IDENTIFIER,
        ]

    def test_skip_prunes_children(self) -> None:
        seen: list[NodeType] = []

        def visit(node, context):
            seen.append(node.type)
            return SKIP if node.type is NodeType.RULE else None

        assert walk(parse("a { color: red } b {}"), visit) is False
        assert seen == [NodeType.STYLESHEET, NodeType.RULE, NodeType.RULE]

    def test_break_stops_everything(self) -> None:
        seen: list[NodeType] = []

        def visit(node, context):
            seen.append(node.type)
            return BREAK if node.type is NodeType.SELECTOR else None

        assert walk(parse("a { color: red } b {}"), visit) is True
        assert seen[-1] is NodeType.SELECTOR
        assert seen.count(NodeType.RULE) == 1


class TestWalkContext:
    """Tests for the ancestor context handed to visitors."""

    def collect(self, css: str) -> dict:
        contexts: dict = {}

        def visit(node, context):
            contexts.setdefault(node.type, context)

        walk(parse(css), visit)
        return contexts

    def test_declaration_context(self) -> None:
        contexts = self.collect("a { color: red }")
        assert contexts[NodeType.DECLARATION].declaration is None
        assert contexts[NodeType.IDENTIFIER].declaration.property == "color"

    def test_atrule_context(self) -> None:
        """Prelude and block see the at-rule, the at-rule itself does not."""
        contexts = self.collect("@media (min-width: 1px) { a { color: red } }")

        assert contexts[NodeType.ATRULE].atrule is None
        feature = contexts[NodeType.FEATURE]
        assert feature.atrule.name == "media"
        assert feature.atrule_prelude is True
        declaration = contexts[NodeType.DECLARATION]
        assert declaration.atrule.name == "media"
        assert declaration.atrule_prelude is False
