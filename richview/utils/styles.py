"""
Style resolution for the render surface.

Three layers are merged per property, later layers winning:
builtin defaults, typed convenience overrides, then the freeform style map.
Keys are normalized to kebab-case CSS property names before merging so that
``maxHeight``, ``max_height`` and ``max-height`` all address one property.
"""

import re
from typing import Any, Dict, Mapping, Optional

StyleValue = Any
StyleMap = Dict[str, StyleValue]

DEFAULT_FONT_STACK = (
    '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, '
    '"Helvetica Neue", Arial, sans-serif'
)

DEFAULT_STYLES: Mapping[str, StyleValue] = {
    "font-size": "16px",
    "line-height": "1.6",
    "font-family": DEFAULT_FONT_STACK,
    "color": "#333",
    "border": "1px solid #e5e7eb",
    "border-radius": "8px",
    "padding": "16px",
    "background-color": "#ffffff",
}

OVERFLOW_VALUES = ("visible", "hidden", "scroll", "auto")

# Typed option name -> CSS property it controls
TYPED_STYLE_FIELDS: Mapping[str, str] = {
    "font_size": "font-size",
    "line_height": "line-height",
    "font_family": "font-family",
    "color": "color",
    "border": "border",
    "border_radius": "border-radius",
    "padding": "padding",
    "max_height": "max-height",
    "overflow": "overflow",
    "background_color": "background-color",
}

# Numeric values for these are written without a unit
UNITLESS_PROPERTIES = frozenset(
    {
        "line-height",
        "font-weight",
        "opacity",
        "z-index",
        "flex",
        "flex-grow",
        "flex-shrink",
        "order",
        "orphans",
        "widows",
        "zoom",
        "tab-size",
        "column-count",
    }
)

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def css_property_name(name: str) -> str:
    """Convert camelCase or snake_case style keys to CSS property names."""
    if name.startswith("--"):
        # Custom properties are case-sensitive
        return name
    name = _CAMEL_BOUNDARY_RE.sub(r"-\1", name.strip())
    return name.replace("_", "-").lower()


def format_style_value(prop: str, value: StyleValue) -> str:
    """Render a style value, adding ``px`` to bare numbers where CSS needs a unit."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        if prop in UNITLESS_PROPERTIES or value == 0:
            return f"{value:g}"
        return f"{value:g}px"
    return str(value).strip()


def _normalize(layer: Optional[Mapping[str, StyleValue]], skip_none: bool) -> StyleMap:
    normalized: StyleMap = {}
    if not layer:
        return normalized
    for key, value in layer.items():
        if skip_none and value is None:
            continue
        normalized[css_property_name(key)] = value
    return normalized


def resolve_styles(
    defaults: Optional[Mapping[str, StyleValue]] = None,
    typed: Optional[Mapping[str, StyleValue]] = None,
    freeform: Optional[Mapping[str, StyleValue]] = None,
) -> StyleMap:
    """
    Merge the three style layers into one flat mapping.

    Args:
        defaults: Baseline layer; DEFAULT_STYLES when omitted
        typed: Convenience overrides; None values mean "inherit" and are skipped
        freeform: Caller style map, applied last and verbatim

    Returns:
        dict: CSS property name -> value, later layers overriding per property
    """
    resolved = _normalize(DEFAULT_STYLES if defaults is None else defaults, skip_none=True)
    resolved.update(_normalize(typed, skip_none=True))
    resolved.update(_normalize(freeform, skip_none=False))
    return resolved


def typed_overrides(options: Any) -> StyleMap:
    """Collect the typed style options a caller actually supplied."""
    overrides: StyleMap = {}
    for field_name, prop in TYPED_STYLE_FIELDS.items():
        value = getattr(options, field_name, None)
        if value is not None:
            overrides[prop] = value
    return overrides


def style_attribute(styles: Mapping[str, StyleValue]) -> str:
    """Serialize a resolved mapping into a CSS declaration list."""
    declarations = []
    for prop, value in styles.items():
        if value is None:
            continue
        rendered = format_style_value(prop, value)
        if not rendered:
            continue
        declarations.append(f"{prop}: {rendered}")
    return "; ".join(declarations)
