from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping

from PIL import Image

from framesvg.geometry import AutoRange, FrameGeometry, FramePlacement, Point, PointLike, as_points, to_points
from framesvg.intents import DrawIntent, IntentKind
from framesvg.markup.embed import image_data_uri
from framesvg.numeric.spline import to_points_smooth
from framesvg.queue import CommandQueue
from framesvg.style.theme import grid_style, leader_style, merge_attributes, tick_style

if TYPE_CHECKING:
    from framesvg.document import Document


Attrs = Mapping[str, Any] | None


class Frame:
    """A clipped rectangle of the canvas with its own user coordinate system.

    Every drawing call registers its points with the frame's auto range right
    away and records a draw intent; pixel coordinates are only computed by
    `render`. All drawing calls return the frame so they can be chained.
    """

    def __init__(
        self,
        document: "Document",
        index: int,
        frame_id: str,
        placement: FramePlacement,
        auto_range: AutoRange,
        style: dict[str, str],
    ) -> None:
        self.document = document
        self.index = index
        self.id = frame_id
        self.placement = placement
        self.auto_range = auto_range
        self.style = style
        self.queue = CommandQueue()

    def __repr__(self) -> str:
        return f"Frame(id={self.id!r}, index={self.index})"

    @property
    def is_root(self) -> bool:
        return self.index == 0

    # -- structure ---------------------------------------------------------

    def frame(
        self,
        frame_id: str,
        geometry: FrameGeometry | Mapping[str, Any] | None = None,
        style: Attrs = None,
    ) -> "Frame":
        """Add a frame to the document; it paints after every frame created before it."""

        return self.document.add_frame(frame_id, FrameGeometry.coerce(geometry or {}), style)

    def render(self) -> str:
        return self.document.render()

    def render_frame(self) -> str:
        return self.document.render_frame(self)

    # -- groups and clipping -----------------------------------------------

    def g(self, group_id: str | None = None, attrs: Attrs = None) -> "Frame":
        return self._record("group_open", params={"id": group_id}, attrs=attrs)

    def g_end(self) -> "Frame":
        return self._record("group_close")

    def clip(self, group_id: str | None = None) -> "Frame":
        """Open a group clipped to this frame's rectangle; close it with `clip_end`."""

        if group_id:
            return self.g(group_id, {"style": f"clip-path: url(#clip{self.id});"})
        return self.g(None, {"clip-path": f"url(#clip{self.id})"})

    def clip_end(self) -> "Frame":
        return self.g_end()

    def clip_path(self, clip_id: str, points: Iterable[PointLike]) -> "Frame":
        return self._record("clip_path", as_points(points), params={"id": clip_id})

    def frame_area(self, attrs: Attrs = None) -> "Frame":
        """Draw the frame's background and/or outline."""

        return self._record("frame_area", attrs=attrs)

    def frame_clip_path(self, clip_id: str) -> "Frame":
        return self._record("frame_clip_path", params={"id": clip_id})

    # -- shapes ------------------------------------------------------------

    def circle(self, cx: float, cy: float, r: float, attrs: Attrs = None) -> "Frame":
        """Circle with radius `r` in pixels; a negative `r` is a radius of `|r|` user units.

        A pixel radius does not widen the frame's auto range, only the centre
        does. A user-unit radius also registers the four rim points.
        """

        c = Point(float(cx), float(cy))
        rim = (
            Point(c.x, c.y + r),
            Point(c.x + r, c.y),
            Point(c.x, c.y - r),
            Point(c.x - r, c.y),
        )
        self._expand((c, *rim) if r < 0 else (c,))
        return self._record("circle", (c, *rim), params={"r": float(r)}, attrs=attrs, register=False)

    def circles(self, points: Iterable[PointLike], r: float, attrs: Attrs = None) -> "Frame":
        return self._record("circles", as_points(points), params={"r": float(r)}, attrs=attrs, register=True)

    def ellipse(self, cx: float, cy: float, rx: float, ry: float, attrs: Attrs = None) -> "Frame":
        """Ellipse centred in user space; radii are in pixels."""

        return self._record(
            "ellipse",
            (Point(float(cx), float(cy)),),
            params={"rx": float(rx), "ry": float(ry)},
            attrs=attrs,
            register=True,
        )

    def rect(self, x: float, y: float, width: float, height: float, attrs: Attrs = None) -> "Frame":
        p1, p2 = _box_corners(x, y, width, height, top_left=False)
        return self._record("rect", (p1, p2), attrs=attrs, register=True)

    def line(self, xb: float, yb: float, xe: float, ye: float, attrs: Attrs = None) -> "Frame":
        points = (Point(float(xb), float(yb)), Point(float(xe), float(ye)))
        return self._record("line", points, attrs=attrs, register=True)

    def polyline(self, points: Iterable[PointLike], attrs: Attrs = None) -> "Frame":
        return self._record("polyline", as_points(points), attrs=attrs, register=True)

    def polyline_array(self, x: Any, y: Any, attrs: Attrs = None) -> "Frame":
        return self.polyline(to_points(x, y), attrs)

    def polyline_smooth(self, x: Any, y: Any, multiplier: int = 4, attrs: Attrs = None) -> "Frame":
        """Polyline through a spline resampling of `(x, y)` with `len * multiplier` points."""

        return self.polyline(to_points_smooth(x, y, multiplier), attrs)

    def polygon(self, points: Iterable[PointLike], attrs: Attrs = None) -> "Frame":
        return self._record("polygon", as_points(points), attrs=attrs, register=True)

    def polygon_array(self, x: Any, y: Any, attrs: Attrs = None) -> "Frame":
        return self.polygon(to_points(x, y), attrs)

    def dash(self, points: Iterable[PointLike], attrs: Attrs = None) -> "Frame":
        """Disjoint segments between consecutive point pairs."""

        pts = as_points(points)
        if len(pts) % 2:
            raise ValueError("dash needs an even number of points")
        return self._record("dash", pts, attrs=attrs, register=True)

    # -- text --------------------------------------------------------------

    def text(self, x: float, y: float, text: str, attrs: Attrs = None) -> "Frame":
        return self._record("text", (Point(float(x), float(y)),), params={"text": str(text)}, attrs=attrs)

    def text_rotated(self, x: float, y: float, angle: float, text: str, attrs: Attrs = None) -> "Frame":
        return self._record(
            "text_rotated",
            (Point(float(x), float(y)),),
            params={"angle": float(angle), "text": str(text)},
            attrs=attrs,
        )

    def label(self, x: float, y: float, length: float, angle: float, text: str, attrs: Attrs = None) -> "Frame":
        """Text placed `length` pixels away from `(x, y)` at `angle` degrees, with a leader line."""

        tokens = self.document.config.tokens
        text_attrs = {k: v for k, v in (attrs or {}).items() if k not in ("stroke", "stroke-width")}
        return self._record(
            "label",
            (Point(float(x), float(y)),),
            params={
                "length": float(length),
                "angle": float(angle),
                "text": str(text),
                "line_attrs": leader_style(tokens, attrs),
            },
            attrs=text_attrs,
        )

    # -- embedded content --------------------------------------------------

    def image(
        self,
        source: str | Image.Image,
        x: float,
        y: float,
        width: float,
        height: float,
        attrs: Attrs = None,
    ) -> "Frame":
        """Image by href, or a Pillow image embedded as a PNG data URI."""

        href = image_data_uri(source) if isinstance(source, Image.Image) else str(source)
        p1, p2 = _box_corners(x, y, width, height, top_left=True)
        return self._record("image", (p1, p2), params={"href": href}, attrs=attrs, register=True)

    def foreign_object(
        self, inner_html: str, x: float, y: float, width: float, height: float, attrs: Attrs = None
    ) -> "Frame":
        p1, p2 = _box_corners(x, y, width, height, top_left=True)
        return self._record("foreign_object", (p1, p2), params={"html": inner_html}, attrs=attrs, register=True)

    def canvas(self, canvas_id: str, x: float, y: float, width: float, height: float, attrs: Attrs = None) -> "Frame":
        """Foreign object hosting an HTML `<canvas>` element with id `canvas_id`."""

        p1, p2 = _box_corners(x, y, width, height, top_left=True)
        return self._record("canvas", (p1, p2), params={"id": canvas_id}, attrs=attrs, register=True)

    # -- scaffolding -------------------------------------------------------

    def grid(self, dx: float, dy: float, attrs: Attrs = None) -> "Frame":
        """Grid lines at the multiples of `dx`/`dy` strictly inside the frame's range.

        With data from 8 to 93 and a spacing of 10 the lines sit at 10, 20 ... 90.
        A spacing <= 0 disables that direction.
        """

        return self._record(
            "grid",
            params={"dx": float(dx), "dy": float(dy)},
            attrs=grid_style(self.document.config.tokens, attrs),
        )

    def ticks(self, dx: float, dy: float, size: float, attrs: Attrs = None) -> "Frame":
        """Tick marks of `size` pixels below the x range and left of the y range."""

        return self._record(
            "ticks",
            params={"dx": float(dx), "dy": float(dy), "size": float(size)},
            attrs=tick_style(self.document.config.tokens, attrs),
        )

    def axis_labels(self, dx: float, dy: float = 0.0, attrs: Attrs = None) -> "Frame":
        tokens = self.document.config.tokens
        return self._record(
            "axis_labels",
            params={
                "dx": float(dx),
                "dy": float(dy),
                "x_group": {"transform": f"translate(0 {tokens.x_label_dy:g})", "text-anchor": "middle"},
                "y_group": {
                    "transform": f"translate({tokens.y_label_dx:g} {tokens.y_label_dy:g})",
                    "text-anchor": "end",
                },
            },
            attrs=attrs,
        )

    # -- internals ---------------------------------------------------------

    def _expand(self, points: Iterable[Point]) -> None:
        self.auto_range.expand(points)

    def _record(
        self,
        kind: IntentKind,
        points: tuple[Point, ...] = (),
        *,
        params: Mapping[str, Any] | None = None,
        attrs: Attrs = None,
        register: bool = False,
    ) -> "Frame":
        if register:
            self._expand(points)
        self.queue.record(
            DrawIntent(kind=kind, points=points, params=dict(params or {}), attrs=merge_attributes({}, attrs))
        )
        return self


def _box_corners(x: float, y: float, width: float, height: float, *, top_left: bool) -> tuple[Point, Point]:
    """Normalise a user-space box to two corners.

    `top_left=False` returns (min x, min y) and (max x, max y); `top_left=True`
    returns (min x, max y) and (max x, min y), i.e. pixel top-left first.
    """

    x0, x1 = sorted((float(x), float(x) + float(width)))
    y0, y1 = sorted((float(y), float(y) + float(height)))
    if top_left:
        return Point(x0, y1), Point(x1, y0)
    return Point(x0, y0), Point(x1, y1)
