from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from framesvg.geometry import Point


IntentKind = Literal[
    "group_open",
    "group_close",
    "frame_clip_path",
    "frame_area",
    "clip_path",
    "circle",
    "circles",
    "ellipse",
    "rect",
    "line",
    "polyline",
    "polygon",
    "dash",
    "text",
    "text_rotated",
    "label",
    "image",
    "foreign_object",
    "canvas",
    "grid",
    "ticks",
    "axis_labels",
]

# Intents that may run on a frame with no plotted data; unobserved auto bounds of
# such a frame fall back to its percentage placement.
SCAFFOLDING_KINDS = frozenset({"grid", "ticks", "axis_labels"})


@dataclass(frozen=True)
class DrawIntent:
    """One recorded drawing call: raw user-space inputs, resolved to pixels at render time."""

    kind: IntentKind
    points: tuple[Point, ...] = ()
    params: Mapping[str, Any] = field(default_factory=dict)
    attrs: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_scaffolding(self) -> bool:
        return self.kind in SCAFFOLDING_KINDS
