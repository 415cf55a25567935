from __future__ import annotations

import re
from typing import Literal, Mapping, Protocol, Sequence
from xml.sax.saxutils import escape

from framesvg.geometry import PointLike, as_point
from framesvg.markup.numbers import format_number
from framesvg.markup.path import PathBuilder


AttributeMap = Mapping[str, str | int | float]
PolyKind = Literal["polygon", "polyline"]

_ATTR_NAME = re.compile(r"^[A-Za-z_:][-A-Za-z0-9_:.]*$")
_ATTR_ESCAPES = {'"': "&quot;"}


def svg_attributes(attrs: AttributeMap | None = None) -> str:
    """Stringify an attribute map as `key="value"` pairs (insertion order kept)."""

    if not attrs:
        return ""
    parts: list[str] = []
    for key, value in attrs.items():
        if not _ATTR_NAME.match(key):
            raise ValueError(f"invalid SVG attribute name: {key!r}")
        parts.append(f'{key}="{escape(str(value), _ATTR_ESCAPES)}"')
    return " ".join(parts)


def _tag(name: str, fields: Sequence[tuple[str, str]], attrs: AttributeMap | None) -> str:
    items = [f'{k}="{v}"' for k, v in fields]
    extra = svg_attributes(attrs)
    if extra:
        items.append(extra)
    return f"<{name} {' '.join(items)}" if items else f"<{name}"


class MarkupBackend(Protocol):
    """Formats pixel-space primitives. Implementations never transform coordinates."""

    precision: int

    def new_path(self) -> PathBuilder:
        ...

    def circle(self, cx: float, cy: float, r: float, attrs: AttributeMap | None = None) -> str:
        ...

    def ellipse(self, cx: float, cy: float, rx: float, ry: float, attrs: AttributeMap | None = None) -> str:
        ...

    def rect(self, x: float, y: float, width: float, height: float, attrs: AttributeMap | None = None) -> str:
        ...

    def line(self, x1: float, y1: float, x2: float, y2: float, attrs: AttributeMap | None = None) -> str:
        ...

    def path(self, path: PathBuilder, attrs: AttributeMap | None = None) -> str:
        ...

    def poly(self, kind: PolyKind, points: Sequence[PointLike], attrs: AttributeMap | None = None) -> str:
        ...

    def text(self, x: float, y: float, text: str, attrs: AttributeMap | None = None) -> str:
        ...

    def text_rotated(
        self, x: float, y: float, angle: float, text: str, attrs: AttributeMap | None = None
    ) -> str:
        ...

    def image(
        self, href: str, x: float, y: float, width: float, height: float, attrs: AttributeMap | None = None
    ) -> str:
        ...

    def foreign_object(
        self, inner_html: str, x: float, y: float, width: float, height: float, attrs: AttributeMap | None = None
    ) -> str:
        ...

    def canvas(
        self, canvas_id: str, x: float, y: float, width: float, height: float, attrs: AttributeMap | None = None
    ) -> str:
        ...

    def clip_path(self, clip_id: str, path: PathBuilder) -> str:
        ...

    def group_open(self, group_id: str | None = None, attrs: AttributeMap | None = None) -> str:
        ...

    def group_close(self) -> str:
        ...

    def header(self, width: float, height: float, stylesheet: str | None = None) -> str:
        ...

    def footer(self) -> str:
        ...


class SvgMarkupBackend:
    """SVG 1.1 text backend with configurable coordinate precision."""

    def __init__(self, precision: int = 4) -> None:
        if precision < 1:
            raise ValueError("precision must be >= 1")
        self.precision = precision

    def num(self, value: float) -> str:
        return format_number(value, self.precision)

    def new_path(self) -> PathBuilder:
        return PathBuilder(self.precision)

    def circle(self, cx: float, cy: float, r: float, attrs: AttributeMap | None = None) -> str:
        fields = [("cx", self.num(cx)), ("cy", self.num(cy)), ("r", self.num(r))]
        return _tag("circle", fields, attrs) + "/>"

    def ellipse(self, cx: float, cy: float, rx: float, ry: float, attrs: AttributeMap | None = None) -> str:
        fields = [("cx", self.num(cx)), ("cy", self.num(cy)), ("rx", self.num(rx)), ("ry", self.num(ry))]
        return _tag("ellipse", fields, attrs) + "/>"

    def rect(self, x: float, y: float, width: float, height: float, attrs: AttributeMap | None = None) -> str:
        x, y, width, height = _normalize_box(x, y, width, height)
        return _tag("rect", self._box(x, y, width, height), attrs) + "/>"

    def line(self, x1: float, y1: float, x2: float, y2: float, attrs: AttributeMap | None = None) -> str:
        fields = [("x1", self.num(x1)), ("y1", self.num(y1)), ("x2", self.num(x2)), ("y2", self.num(y2))]
        return _tag("line", fields, attrs) + "/>"

    def path(self, path: PathBuilder, attrs: AttributeMap | None = None) -> str:
        return _tag("path", [], attrs) + f' d="{path}"/>'

    def poly(self, kind: PolyKind, points: Sequence[PointLike], attrs: AttributeMap | None = None) -> str:
        if kind not in ("polygon", "polyline"):
            raise ValueError(f"unknown poly kind: {kind}")
        coords = " ".join(f"{self.num(p.x)},{self.num(p.y)}" for p in map(as_point, points))
        return _tag(kind, [], attrs) + f' points="{coords}"/>'

    def text(self, x: float, y: float, text: str, attrs: AttributeMap | None = None) -> str:
        fields = [("x", self.num(x)), ("y", self.num(y))]
        return _tag("text", fields, attrs) + f">{escape(str(text))}</text>"

    def text_rotated(
        self, x: float, y: float, angle: float, text: str, attrs: AttributeMap | None = None
    ) -> str:
        sx, sy = self.num(x), self.num(y)
        fields = [("x", sx), ("y", sy), ("transform", f"rotate({self.num(angle)},{sx},{sy})")]
        return _tag("text", fields, attrs) + f">{escape(str(text))}</text>"

    def image(
        self, href: str, x: float, y: float, width: float, height: float, attrs: AttributeMap | None = None
    ) -> str:
        x, y, width, height = _normalize_box(x, y, width, height)
        fields = self._box(x, y, width, height) + [("href", escape(href, _ATTR_ESCAPES))]
        return _tag("image", fields, attrs) + "/>"

    def foreign_object(
        self, inner_html: str, x: float, y: float, width: float, height: float, attrs: AttributeMap | None = None
    ) -> str:
        x, y, width, height = _normalize_box(x, y, width, height)
        return _tag("foreignObject", self._box(x, y, width, height), attrs) + f">{inner_html}</foreignObject>"

    def canvas(
        self, canvas_id: str, x: float, y: float, width: float, height: float, attrs: AttributeMap | None = None
    ) -> str:
        x, y, width, height = _normalize_box(x, y, width, height)
        inner = (
            f'<canvas xmlns="http://www.w3.org/1999/xhtml" id="{escape(canvas_id, _ATTR_ESCAPES)}" '
            f'width="{self.num(width)}" height="{self.num(height)}">No foreign element supported</canvas>'
        )
        return self.foreign_object(inner, x, y, width, height, attrs)

    def clip_path(self, clip_id: str, path: PathBuilder) -> str:
        return f'<clipPath id="{escape(clip_id, _ATTR_ESCAPES)}"><path d="{path}"/></clipPath>'

    def group_open(self, group_id: str | None = None, attrs: AttributeMap | None = None) -> str:
        fields = [("id", escape(group_id, _ATTR_ESCAPES))] if group_id is not None else []
        return _tag("g", fields, attrs) + ">"

    def group_close(self) -> str:
        return "</g>"

    def header(self, width: float, height: float, stylesheet: str | None = None) -> str:
        w, h = self.num(width), self.num(height)
        svg = (
            '<svg version="1.1" xmlns="http://www.w3.org/2000/svg" '
            'xmlns:xlink="http://www.w3.org/1999/xlink" '
            f'width="{w}" height="{h}" viewBox="0 0 {w} {h}">'
        )
        if stylesheet:
            return f'<?xml-stylesheet type="text/css" href="{escape(stylesheet, _ATTR_ESCAPES)}" ?>\n{svg}'
        return svg

    def footer(self) -> str:
        return "</svg>"

    def _box(self, x: float, y: float, width: float, height: float) -> list[tuple[str, str]]:
        return [
            ("x", self.num(x)),
            ("y", self.num(y)),
            ("width", self.num(width)),
            ("height", self.num(height)),
        ]


def _normalize_box(x: float, y: float, width: float, height: float) -> tuple[float, float, float, float]:
    if width < 0:
        width = abs(width)
        x = x - width
    if height < 0:
        height = abs(height)
        y = y - height
    return x, y, width, height
