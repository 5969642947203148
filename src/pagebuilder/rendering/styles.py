"""Base stylesheet and inline style serialisation."""

import math
import re
from collections.abc import Mapping
from typing import Any

BASE_STYLESHEET = """
.wb-container {
  box-sizing: border-box;
}
#page-root p, #page-root h1, #page-root h2, #page-root h3,
#page-root h4, #page-root h5, #page-root h6 {
  margin: 0;
}
.wb-image {
  display: block;
  max-width: 100%;
  height: auto;
}
"""

# Properties that take plain numbers; every other numeric value gets "px"
UNITLESS_PROPERTIES = frozenset({
    "flex",
    "flexGrow",
    "flexShrink",
    "fontWeight",
    "lineHeight",
    "opacity",
    "order",
    "zIndex",
    "zoom",
})

_UPPER = re.compile(r"([A-Z])")
_VENDOR_PREFIXES = ("webkit", "moz", "ms", "o")


def css_property_name(name: str) -> str:
    """Convert a camelCase style key to its CSS property name (backgroundColor -> background-color)."""
    if "-" in name:
        return name.lower()
    kebab = _UPPER.sub(lambda m: "-" + m.group(1).lower(), name).lstrip("-")
    prefix = kebab.split("-", 1)[0]
    if prefix in _VENDOR_PREFIXES and "-" in kebab and (name[:1].isupper() or prefix == "ms"):
        return "-" + kebab
    return kebab


def _number(value: int | float) -> str | None:
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return str(int(value))
    return str(value)


def css_value(name: str, value: Any) -> str | None:
    """Serialise one style value; None drops the declaration."""
    if value is None or isinstance(value, (bool, Mapping, list)):
        return None
    if isinstance(value, (int, float)):
        number = _number(value)
        if number is None or name in UNITLESS_PROPERTIES or number == "0":
            return number
        return f"{number}px"
    text = " ".join(str(value).split())
    return text or None


def style_to_css(style: Any) -> str:
    """Inline ``style`` attribute text for a style mapping, in key order."""
    if not isinstance(style, Mapping):
        return ""

    declarations = []
    for name, value in style.items():
        serialised = css_value(name, value)
        if serialised is not None:
            declarations.append(f"{css_property_name(name)}:{serialised}")
    return ";".join(declarations)
