"""
Shared fixtures for the CSS analyzer test suite.

Provides test fixtures for:
- Parsing helpers returning the first rule, selector or value of a snippet
- A stylesheet exercising most report sections
- Isolation of logging configuration and CSS_ANALYZER_* environment variables
"""

import logging
from collections.abc import Callable, Iterator

import pytest

from css_analyzer.analyzer_logging import LOGGER_NAME
from css_analyzer.config import ENV_VARS
from css_analyzer.parser import Node, NodeType, parse

# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove analyzer environment variables so tests see defaults."""
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging() after each test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _first(node: Node, node_type: NodeType) -> Node:
    if node.type is node_type:
        return node
    for child in node.iter_children():
        try:
            return _first(child, node_type)
        except LookupError:
            continue
    raise LookupError(node_type)


@pytest.fixture()
def first_node() -> Callable[[str, NodeType], Node]:
    """Parse CSS and return the first node of a type in document order."""

    def finder(css: str, node_type: NodeType) -> Node:
        return _first(parse(css), node_type)

    return finder


@pytest.fixture()
def selector_of(first_node) -> Callable[[str], Node]:
    """Parse a selector and return its Selector node."""

    def finder(selector: str) -> Node:
        return first_node(f"{selector} {{}}", NodeType.SELECTOR)

    return finder


@pytest.fixture()
def value_of(first_node) -> Callable[[str], Node]:
    """Parse a declaration value and return its Value node."""

    def finder(value: str, property_name: str = "x") -> Node:
        return first_node(f"a {{ {property_name}: {value} }}", NodeType.VALUE)

    return finder


@pytest.fixture()
def prelude_of(first_node) -> Callable[[str], Node]:
    """Parse an at-rule and return its prelude."""

    def finder(css: str) -> Node:
        return first_node(css, NodeType.ATRULE).prelude

    return finder


# ---------------------------------------------------------------------------
# Sample stylesheet
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_css() -> str:
    """Stylesheet touching most report sections."""
    return """@charset "utf-8";
@import url("print.css") print;
@layer reset, base;

/* Buttons */
.btn, a.btn:hover, #main .btn[aria-pressed="true"] {
  color: #FF0000;
  background: linear-gradient(to right, red, rgba(0, 0, 0, .5));
  font: italic bold 12px/1.5 Georgia, serif;
  transition: opacity .3s ease-in-out, transform 1s linear;
  -webkit-box-shadow: 0 0 2px blue;
  *zoom: 1;
  --brand: tomato !important;
  z-index: 10;
  width: 100px\\9;
}

.empty {}

@media screen and (-ms-high-contrast: active) {
  .btn { border: 1px solid currentColor }
}

@supports (display: grid) {
  .grid { display: grid }
}

@-webkit-keyframes pulse {
  from { opacity: 0 }
  50% { opacity: .5 !important }
  to { opacity: 1 }
}

@font-face {
  font-family: Brand;
  src: url(data:font/woff2;base64,d09GMgABAAAAA) format("woff2");
}
"""
