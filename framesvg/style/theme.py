from __future__ import annotations

from dataclasses import asdict, dataclass
import math
from typing import Any, Mapping


@dataclass(frozen=True)
class StyleTokens:
    """Default presentation attributes for the primitives framesvg emits on its own."""

    root_fill: str = "beige"
    root_stroke: str = "lightgray"
    root_stroke_width: float = 0.4
    frame_fill: str = "none"
    frame_stroke: str = "black"
    frame_stroke_width: float = 1.0
    grid_stroke: str = "lightgrey"
    grid_stroke_width: float = 0.4
    tick_stroke: str = "black"
    tick_stroke_width: float = 1.0
    leader_stroke: str = "black"
    leader_stroke_width: float = 0.5
    # pixel offsets of axis tick labels from the axis line
    x_label_dy: float = 20.0
    y_label_dx: float = -7.0
    y_label_dy: float = 5.0


DEFAULT_TOKENS = StyleTokens()

_COLOR_TOKENS = (
    "root_fill",
    "root_stroke",
    "frame_fill",
    "frame_stroke",
    "grid_stroke",
    "tick_stroke",
    "leader_stroke",
)
_WIDTH_TOKENS = (
    "root_stroke_width",
    "frame_stroke_width",
    "grid_stroke_width",
    "tick_stroke_width",
    "leader_stroke_width",
)
_OFFSET_TOKENS = ("x_label_dy", "y_label_dx", "y_label_dy")


def validate_style_tokens(overrides: Mapping[str, Any] | None = None) -> StyleTokens:
    """Validate and merge user token overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_TOKENS)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not raw[key].strip():
            raise ValueError(f"Token `{key}` must be a non-empty string")

    for key in _WIDTH_TOKENS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) < 0:
            raise ValueError(f"Token `{key}` must be a non-negative number")

    for key in _OFFSET_TOKENS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ValueError(f"Token `{key}` must be a finite number")

    coerced = {key: (float(value) if key in _WIDTH_TOKENS + _OFFSET_TOKENS else value) for key, value in raw.items()}
    return StyleTokens(**coerced)


def merge_attributes(defaults: Mapping[str, Any], overrides: Mapping[str, Any] | None = None) -> dict[str, str]:
    """Overlay caller attributes on defaults; later keys win, order of first appearance is kept."""

    merged = {key: _attr_value(value) for key, value in defaults.items()}
    if overrides:
        for key, value in overrides.items():
            if not isinstance(key, str) or not key:
                raise ValueError(f"attribute names must be non-empty strings, got {key!r}")
            merged[key] = _attr_value(value)
    return merged


def root_style(tokens: StyleTokens, overrides: Mapping[str, Any] | None = None) -> dict[str, str]:
    return merge_attributes(
        {"fill": tokens.root_fill, "stroke": tokens.root_stroke, "stroke-width": tokens.root_stroke_width},
        overrides,
    )


def frame_style(tokens: StyleTokens, overrides: Mapping[str, Any] | None = None) -> dict[str, str]:
    return merge_attributes(
        {"stroke": tokens.frame_stroke, "fill": tokens.frame_fill, "stroke-width": tokens.frame_stroke_width},
        overrides,
    )


def grid_style(tokens: StyleTokens, overrides: Mapping[str, Any] | None = None) -> dict[str, str]:
    return merge_attributes({"stroke": tokens.grid_stroke, "stroke-width": tokens.grid_stroke_width}, overrides)


def tick_style(tokens: StyleTokens, overrides: Mapping[str, Any] | None = None) -> dict[str, str]:
    return merge_attributes({"stroke": tokens.tick_stroke, "stroke-width": tokens.tick_stroke_width}, overrides)


def leader_style(tokens: StyleTokens, overrides: Mapping[str, Any] | None = None) -> dict[str, str]:
    return merge_attributes(
        {"stroke": tokens.leader_stroke, "stroke-width": tokens.leader_stroke_width},
        overrides,
    )


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)
