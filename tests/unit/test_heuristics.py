"""Unit tests for the classification heuristics."""

import pytest

from css_analyzer.heuristics import (
    analyze_animation,
    basename,
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
from css_analyzer.heuristics.colors import (
    COLOR_FUNCTIONS,
    NAMED_COLORS,
    SYSTEM_COLORS,
    is_gradient,
)
from css_analyzer.heuristics.keywords import KeywordSet
from css_analyzer.heuristics.vendor import strip_vendor_prefix
from css_analyzer.parser import NodeType, parse


def source_text(css: str):
    """Stringify and slice helpers over the text a test value was parsed from."""

    def stringify(node) -> str:
        return css[node.start : node.end].strip()

    def slice_text(start: int, end: int) -> str:
        return css[start:end]

    return stringify, slice_text


class TestKeywordSet:
    """Tests for case-insensitive keyword sets."""

    def test_case_insensitive(self) -> None:
        keywords = KeywordSet(["Red", "blue"])
        assert "RED" in keywords
        assert "Blue" in keywords
        assert "green" not in keywords
        assert None not in keywords


class TestVendorPrefix:
    """Tests for vendor prefix detection."""

    @pytest.mark.parametrize(
        "keyword", ["-webkit-transition", "-moz-any", "-ms-filter", "-o-x"]
    )
    def test_prefixed(self, keyword: str) -> None:
        assert has_vendor_prefix(keyword)

    @pytest.mark.parametrize("keyword", ["transition", "--custom", "-x", "-", ""])
    def test_not_prefixed(self, keyword: str) -> None:
        assert not has_vendor_prefix(keyword)

    def test_strip(self) -> None:
        assert strip_vendor_prefix("-webkit-box-shadow") == "box-shadow"
        assert strip_vendor_prefix("box-shadow") == "box-shadow"

    def test_prefixed_values(self, value_of) -> None:
        assert is_ast_vendor_prefixed(value_of("-webkit-box"))
        assert is_ast_vendor_prefixed(value_of("-webkit-linear-gradient(red, blue)"))
        assert is_ast_vendor_prefixed(value_of("calc(-moz-calc(1px))"))
        assert not is_ast_vendor_prefixed(value_of("linear-gradient(red, blue)"))


class TestProperties:
    """Tests for property name classification."""

    def test_custom(self) -> None:
        assert is_custom("--brand")
        assert not is_custom("--")
        assert not is_custom("color")

    @pytest.mark.parametrize("name", ["*zoom", "_height", "+width", "/color", "#zoom"])
    def test_hacks(self, name: str) -> None:
        assert is_hack(name)

    @pytest.mark.parametrize("name", ["color", "-webkit-box", "--x"])
    def test_not_hacks(self, name: str) -> None:
        assert not is_hack(name)

    def test_basename(self) -> None:
        assert basename("-webkit-Transition") == "transition"
        assert basename("*zoom") == "zoom"
        assert basename("Z-INDEX") == "z-index"
        assert basename("--x") is None


class TestValues:
    """Tests for value keywords, IE9 hacks and system fonts."""

    @pytest.mark.parametrize("value", ["auto", "NONE", "inherit", "revert-layer"])
    def test_value_keyword(self, value_of, value: str) -> None:
        assert is_value_keyword(value_of(value))

    @pytest.mark.parametrize("value", ["red", "auto auto", "0"])
    def test_not_value_keyword(self, value_of, value: str) -> None:
        assert not is_value_keyword(value_of(value))

    def test_ie9_hack(self) -> None:
        assert is_ie9_hack("100px\\9")
        assert is_ie9_hack("red\\9 ")
        assert not is_ie9_hack("100px")

    def test_system_font(self, value_of) -> None:
        assert is_system_font(value_of("caption"))
        assert is_system_font(value_of("Menu"))
        assert not is_system_font(value_of("12px Arial"))


class TestDestructureFont:
    """Tests for font shorthand destructuring."""

    def destructure(self, value: str) -> dict:
        css = f"a {{ font: {value} }}"
        node = parse(css).children[0].block.children[0].value
        assert node.type is NodeType.VALUE
        stringify, slice_text = source_text(css)
        return destructure_font(node, stringify, slice_text)

    def test_full_shorthand(self) -> None:
        parts = self.destructure("italic bold 12px/30px Georgia, serif")
        assert parts == {
            "font_size": "12px",
            "line_height": "30px",
            "font_family": "Georgia, serif",
        }

    def test_size_before_single_family(self) -> None:
        parts = self.destructure("bold 12px Arial")
        assert parts == {"font_size": "12px", "line_height": None, "font_family": "Arial"}

    def test_size_before_family_list(self) -> None:
        parts = self.destructure('1.2em "Helvetica Neue", Arial, sans-serif')
        assert parts["font_size"] == "1.2em"
        assert parts["font_family"] == '"Helvetica Neue", Arial, sans-serif'

    def test_size_keyword(self) -> None:
        parts = self.destructure("large/1.5 serif")
        assert parts["font_size"] == "large"
        assert parts["line_height"] == "1.5"
        assert parts["font_family"] == "serif"


class TestAnalyzeAnimation:
    """Tests for animation and transition value splitting."""

    def test_durations_and_timing_functions(self, value_of) -> None:
        css_value = "opacity .3s ease-in-out, transform 1s 2s steps(4, end)"
        value = value_of(css_value, "transition")
        css = f"a {{ transition: {css_value} }}"
        stringify, _ = source_text(css)

        durations, timing_functions = analyze_animation(value.children, stringify)
        assert durations == [".3s", "1s"]
        assert timing_functions == ["ease-in-out", "steps(4, end)"]

    def test_no_timing_function(self, value_of) -> None:
        css_value = "spin 2s infinite"
        stringify, _ = source_text(f"a {{ animation: {css_value} }}")
        durations, timing_functions = analyze_animation(
            value_of(css_value, "animation").children, stringify
        )
        assert durations == ["2s"]
        assert timing_functions == []


class TestAtruleBrowserhacks:
    """Tests for @media and @supports hack detection."""

    @pytest.mark.parametrize(
        "css",
        [
            "@media \\0screen {}",
            "@media screen\\9 {}",
            "@media screen and (-ms-high-contrast: active) {}",
            "@media all and (-moz-images-in-menus: 0) {}",
            "@media screen and (min-width: 0\\0) {}",
            "@media screen and (min-resolution: .001dpcm) {}",
            "@media all and (-webkit-min-device-pixel-ratio: 0) {}",
            "@media all and (-webkit-min-device-pixel-ratio: 10000) {}",
        ],
    )
    def test_media_hacks(self, prelude_of, css: str) -> None:
        assert is_media_browserhack(prelude_of(css))

    @pytest.mark.parametrize(
        "css",
        [
            "@media screen {}",
            "@media (min-width: 600px) and (max-width: 900px) {}",
            "@media all and (-webkit-min-device-pixel-ratio: 2) {}",
        ],
    )
    def test_regular_media(self, prelude_of, css: str) -> None:
        assert not is_media_browserhack(prelude_of(css))

    def test_supports_hacks(self, prelude_of) -> None:
        assert is_supports_browserhack(prelude_of("@supports (-webkit-appearance:none) {}"))
        assert is_supports_browserhack(prelude_of("@supports (-moz-appearance: meterbar) {}"))
        assert not is_supports_browserhack(prelude_of("@supports (display: grid) {}"))
        assert not is_supports_browserhack(
            prelude_of("@supports (-webkit-appearance: button) {}")
        )


class TestSelectorComplexity:
    """Tests for get_complexity."""

    @pytest.mark.parametrize(
        ("selector", "expected"),
        [
            ("a", 1),
            (".a .b", 3),
            ("a > b", 3),
            ("a[href]", 2),
            ("a[href='x']", 3),
            (":is(.a, .b) c", 5),
            ("li:nth-child(2n)", 3),
        ],
    )
    def test_complexity(self, selector_of, selector: str, expected: int) -> None:
        complexity, prefixed = get_complexity(selector_of(selector))
        assert complexity == expected
        assert prefixed is False

    def test_prefixed_pseudo_element(self, selector_of) -> None:
        assert get_complexity(selector_of("::-webkit-scrollbar")) == (2, True)

    def test_prefixed_inside_pseudo_function(self, selector_of) -> None:
        complexity, prefixed = get_complexity(selector_of(":is(::-moz-selection)"))
        assert prefixed is True
        assert complexity == 3


class TestAccessibility:
    """Tests for is_accessibility."""

    @pytest.mark.parametrize(
        "selector",
        ["[aria-hidden]", "[role='button']", "button[aria-pressed=true]", ".a:not([aria-busy])"],
    )
    def test_accessibility_selectors(self, selector_of, selector: str) -> None:
        assert is_accessibility(selector_of(selector))

    @pytest.mark.parametrize("selector", [".a", "[href]", "a:focus-visible"])
    def test_other_selectors(self, selector_of, selector: str) -> None:
        assert not is_accessibility(selector_of(selector))


class TestEmbeds:
    """Tests for data URI sniffing."""

    def test_data_uri(self) -> None:
        assert is_data_uri("data:image/png;base64,AA")
        assert is_data_uri("DATA:text/plain,x")
        assert not is_data_uri("img.png")

    @pytest.mark.parametrize(
        ("uri", "expected"),
        [
            ("data:image/png;base64,AAAA", "image/png"),
            ("data:image/svg+xml,<svg;></svg>", "image/svg+xml"),
            ("data:font/woff2;charset=utf-8;base64,AA", "font/woff2"),
            ("data:text/plain", "text/plain"),
        ],
    )
    def test_embed_type(self, uri: str, expected: str) -> None:
        assert get_embed_type(uri) == expected


class TestColors:
    """Tests for color lookups."""

    def test_lookups(self) -> None:
        assert "RebeccaPurple" in NAMED_COLORS
        assert "Canvas" in SYSTEM_COLORS
        assert "oklch" in COLOR_FUNCTIONS
        assert "var" not in COLOR_FUNCTIONS

    def test_gradients(self) -> None:
        assert is_gradient("linear-gradient")
        assert is_gradient("-webkit-repeating-radial-gradient")
        assert not is_gradient("url")
