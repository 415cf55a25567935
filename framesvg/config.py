from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib
from typing import Any, Mapping

from framesvg.style.theme import DEFAULT_TOKENS, StyleTokens, validate_style_tokens


DEFAULT_CANVAS_WIDTH = 600
DEFAULT_CANVAS_HEIGHT = 400
DEFAULT_PRECISION = 4

_DOCUMENT_FIELDS = frozenset(
    {"canvas_width", "canvas_height", "precision", "stylesheet", "style", "root_style", "frame_style"}
)


@dataclass(frozen=True)
class DocumentConfig:
    canvas_width: float = DEFAULT_CANVAS_WIDTH
    canvas_height: float = DEFAULT_CANVAS_HEIGHT
    precision: int = DEFAULT_PRECISION
    stylesheet: str | None = None
    tokens: StyleTokens = DEFAULT_TOKENS
    root_style: Mapping[str, Any] = field(default_factory=dict)
    # defaults for every non-root frame; per-frame styles override them
    frame_style: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("canvas width/height must be > 0")
        if self.precision < 1:
            raise ValueError("precision must be >= 1")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "DocumentConfig":
        unknown = set(raw) - _DOCUMENT_FIELDS
        if unknown:
            raise ValueError(f"unknown document config field(s): {', '.join(sorted(unknown))}")
        return cls(
            canvas_width=_positive_number(raw, "canvas_width", DEFAULT_CANVAS_WIDTH),
            canvas_height=_positive_number(raw, "canvas_height", DEFAULT_CANVAS_HEIGHT),
            precision=_precision(raw),
            stylesheet=_optional_str(raw, "stylesheet"),
            tokens=validate_style_tokens(_table(raw, "style")),
            root_style=dict(_table(raw, "root_style")),
            frame_style=dict(_table(raw, "frame_style")),
        )

    @classmethod
    def from_toml(cls, path: Path) -> "DocumentConfig":
        """Load the `[document]` table of a TOML file."""

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"document config not found: {path}")
        with path.open("rb") as f:
            raw = tomllib.load(f)
        table = raw.get("document", {})
        if not isinstance(table, dict):
            raise ValueError("`document` must be a table")
        return cls.from_mapping(table)


def _positive_number(raw: Mapping[str, Any], field_name: str, default: float) -> float:
    value = raw.get(field_name, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValueError(f"{field_name} must be a positive number")
    return value


def _precision(raw: Mapping[str, Any]) -> int:
    value = raw.get("precision", DEFAULT_PRECISION)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError("precision must be an integer >= 1")
    return value


def _optional_str(raw: Mapping[str, Any], field_name: str) -> str | None:
    value = raw.get(field_name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string if provided")
    return value


def _table(raw: Mapping[str, Any], field_name: str) -> Mapping[str, Any]:
    value = raw.get(field_name, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"{field_name} must be a table")
    return value
