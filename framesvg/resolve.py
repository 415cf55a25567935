from __future__ import annotations

import math
from typing import Callable

from framesvg.geometry import Point, ResolvedGeometry, scale
from framesvg.intents import DrawIntent
from framesvg.markup.backend import MarkupBackend
from framesvg.markup.numbers import format_number
from framesvg.markup.path import polygon_path


Resolver = Callable[[DrawIntent, ResolvedGeometry, MarkupBackend], str]

MAX_GRID_LINES = 10_000
_EDGE_EPS = 1e-9


def resolve_intent(intent: DrawIntent, geometry: ResolvedGeometry, backend: MarkupBackend) -> str:
    try:
        resolver = _RESOLVERS[intent.kind]
    except KeyError:
        raise ValueError(f"unknown draw intent kind: {intent.kind}") from None
    return resolver(intent, geometry, backend)


def aligned_multiples(vmin: float, vmax: float, step: float, *, include_min: bool = False) -> list[float]:
    """Multiples of `step` inside `(vmin, vmax)`; `include_min` also admits `vmin` itself."""

    if step <= 0 or not math.isfinite(step):
        return []
    if (vmax - vmin) / step > MAX_GRID_LINES:
        raise ValueError(f"spacing {step} yields more than {MAX_GRID_LINES} lines")
    k = math.ceil(vmin / step - _EDGE_EPS)
    if not include_min and k * step <= vmin + _EDGE_EPS * step:
        k += 1
    values: list[float] = []
    v = k * step
    while v < vmax - _EDGE_EPS * step:
        values.append(v)
        k += 1
        v = k * step
    return values


def _group_open(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    return backend.group_open(intent.params.get("id"), intent.attrs)


def _group_close(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    return backend.group_close()


def _corners(geo: ResolvedGeometry) -> list[Point]:
    b = geo.bounds
    return [
        Point(b.x_min, b.y_min),
        Point(b.x_max, b.y_min),
        Point(b.x_max, b.y_max),
        Point(b.x_min, b.y_max),
    ]


def _frame_clip_path(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    q = scale(geo, *_corners(geo))
    return backend.clip_path(intent.params["id"], polygon_path(q, backend.precision))


def _frame_area(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    b = geo.bounds
    p0, p1 = scale(geo, Point(b.x_min, b.y_min), Point(b.x_max, b.y_max))
    return backend.rect(p0.x, p0.y, p1.x - p0.x, p1.y - p0.y, intent.attrs)


def _clip_path(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    q = scale(geo, *intent.points)
    return backend.clip_path(intent.params["id"], polygon_path(q, backend.precision))


def _circle(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    r = intent.params["r"]
    c, top, right, bottom, left = scale(geo, *intent.points)
    if r < 0:
        # radius given in user units: average the scaled extents of both axes
        r = (abs(top.y - bottom.y) + abs(right.x - left.x)) / 4.0
    return backend.circle(c.x, c.y, r, intent.attrs)


def _circles(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    r = intent.params["r"]
    return "\n".join(backend.circle(p.x, p.y, r, intent.attrs) for p in scale(geo, *intent.points))


def _ellipse(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    (c,) = scale(geo, *intent.points)
    return backend.ellipse(c.x, c.y, intent.params["rx"], intent.params["ry"], intent.attrs)


def _box(intent: DrawIntent, geo: ResolvedGeometry) -> tuple[float, float, float, float]:
    p0, p1 = scale(geo, *intent.points)
    return p0.x, p0.y, p1.x - p0.x, p1.y - p0.y


def _rect(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    return backend.rect(*_box(intent, geo), intent.attrs)


def _image(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    return backend.image(intent.params["href"], *_box(intent, geo), intent.attrs)


def _foreign_object(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    return backend.foreign_object(intent.params["html"], *_box(intent, geo), intent.attrs)


def _canvas(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    return backend.canvas(intent.params["id"], *_box(intent, geo), intent.attrs)


def _line(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    p1, p2 = scale(geo, *intent.points)
    return backend.line(p1.x, p1.y, p2.x, p2.y, intent.attrs)


def _poly(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    return backend.poly(intent.kind, scale(geo, *intent.points), intent.attrs)


def _dash(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    q = scale(geo, *intent.points)
    path = backend.new_path()
    for i in range(0, len(q) - 1, 2):
        path.move_to(q[i])
        path.line_to(q[i + 1])
    return backend.path(path, intent.attrs)


def _text(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    (p,) = scale(geo, *intent.points)
    return backend.text(p.x, p.y, intent.params["text"], intent.attrs)


def _text_rotated(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    (p,) = scale(geo, *intent.points)
    return backend.text_rotated(p.x, p.y, intent.params["angle"], intent.params["text"], intent.attrs)


def _label(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    (q,) = scale(geo, *intent.points)
    angle = math.radians(intent.params["angle"])
    length = intent.params["length"]
    x2 = q.x + length * math.cos(angle)
    y2 = q.y - length * math.sin(angle)
    return "\n".join(
        [
            backend.line(q.x, q.y, x2, y2, intent.params["line_attrs"]),
            backend.text(x2, y2, intent.params["text"], intent.attrs),
        ]
    )


def _grid(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    b = geo.bounds
    path = backend.new_path()
    for x in aligned_multiples(b.x_min, b.x_max, intent.params["dx"]):
        p0, p1 = scale(geo, Point(x, b.y_min), Point(x, b.y_max))
        path.move_to(p0).line_to(p1)
    for y in aligned_multiples(b.y_min, b.y_max, intent.params["dy"]):
        p0, p1 = scale(geo, Point(b.x_min, y), Point(b.x_max, y))
        path.move_to(p0).line_to(p1)
    return backend.path(path, intent.attrs)


def _ticks(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    b = geo.bounds
    size = intent.params["size"]
    path = backend.new_path()
    for x in aligned_multiples(b.x_min, b.x_max, intent.params["dx"]):
        (p,) = scale(geo, Point(x, b.y_min))
        path.move_to(p).line_to(Point(p.x, p.y + size))
    for y in aligned_multiples(b.y_min, b.y_max, intent.params["dy"]):
        (p,) = scale(geo, Point(b.x_min, y))
        path.move_to(p).line_to(Point(p.x - size, p.y))
    return backend.path(path, intent.attrs)


def tick_label(value: float) -> str:
    return format_number(round(value, 4), 4)


def _axis_labels(intent: DrawIntent, geo: ResolvedGeometry, backend: MarkupBackend) -> str:
    b = geo.bounds
    out: list[str] = []
    dx = intent.params["dx"]
    dy = intent.params["dy"]
    if dx > 0:
        out.append(backend.group_open(None, intent.params["x_group"]))
        for x in aligned_multiples(b.x_min, b.x_max, dx, include_min=True):
            (p,) = scale(geo, Point(x, b.y_min))
            out.append(backend.text(p.x, p.y, tick_label(x), intent.attrs))
        out.append(backend.group_close())
    if dy > 0:
        out.append(backend.group_open(None, intent.params["y_group"]))
        # the label at y_min would collide with the x labels
        for y in aligned_multiples(b.y_min, b.y_max, dy):
            (p,) = scale(geo, Point(b.x_min, y))
            out.append(backend.text(p.x, p.y, tick_label(y), intent.attrs))
        out.append(backend.group_close())
    return "\n".join(out)


_RESOLVERS: dict[str, Resolver] = {
    "group_open": _group_open,
    "group_close": _group_close,
    "frame_clip_path": _frame_clip_path,
    "frame_area": _frame_area,
    "clip_path": _clip_path,
    "circle": _circle,
    "circles": _circles,
    "ellipse": _ellipse,
    "rect": _rect,
    "line": _line,
    "polyline": _poly,
    "polygon": _poly,
    "dash": _dash,
    "text": _text,
    "text_rotated": _text_rotated,
    "label": _label,
    "image": _image,
    "foreign_object": _foreign_object,
    "canvas": _canvas,
    "grid": _grid,
    "ticks": _ticks,
    "axis_labels": _axis_labels,
}
