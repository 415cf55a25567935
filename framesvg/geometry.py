from __future__ import annotations

from dataclasses import dataclass, field, fields
import logging
import math
from typing import Any, Iterable, Mapping

import numpy as np

from framesvg.errors import DegenerateGeometryError


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: float
    y: float


PointLike = Point | tuple[float, float]


def as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


def as_points(values: Iterable[PointLike]) -> tuple[Point, ...]:
    return tuple(as_point(v) for v in values)


def paired_arrays(x: Any, y: Any) -> tuple[np.ndarray, np.ndarray]:
    """Flatten two coordinate arrays to float64 and truncate both to the shorter length."""

    xs = np.asarray(x, dtype=np.float64).reshape(-1)
    ys = np.asarray(y, dtype=np.float64).reshape(-1)
    if xs.size != ys.size:
        LOGGER.warning("coordinate arrays differ in length (%d != %d); truncating", xs.size, ys.size)
    n = min(xs.size, ys.size)
    return xs[:n], ys[:n]


def to_points(x: Any, y: Any) -> tuple[Point, ...]:
    """Pair two coordinate arrays, truncating to the shorter one."""

    xs, ys = paired_arrays(x, y)
    return tuple(Point(float(xs[i]), float(ys[i])) for i in range(xs.size))


@dataclass(frozen=True)
class FramePlacement:
    """Frame rectangle in percent of the canvas, measured from the bottom-left corner."""

    left: float = 0.0
    bottom: float = 0.0
    width: float = 100.0
    height: float = 100.0

    def __post_init__(self) -> None:
        for name in ("left", "bottom", "width", "height"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"placement `{name}` must be finite")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("placement width/height must be > 0")


@dataclass(frozen=True)
class Bounds:
    x_min: float
    x_max: float
    y_min: float
    y_max: float


@dataclass(frozen=True)
class RangeSpec:
    """Requested data range of a frame; `None` marks a bound as auto-ranged."""

    x_min: float | None = None
    x_max: float | None = None
    y_min: float | None = None
    y_max: float | None = None


_BOUND_NAMES = ("x_min", "x_max", "y_min", "y_max")


@dataclass(frozen=True)
class FrameGeometry:
    """What a caller asks for when adding a frame: placement plus optional fixed bounds."""

    left: float = 0.0
    bottom: float = 0.0
    width: float = 100.0
    height: float = 100.0
    x_min: float | None = None
    x_max: float | None = None
    y_min: float | None = None
    y_max: float | None = None

    @classmethod
    def coerce(cls, value: "FrameGeometry | Mapping[str, Any]") -> "FrameGeometry":
        if isinstance(value, FrameGeometry):
            return value
        unknown = set(value) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"unknown frame geometry field(s): {', '.join(sorted(unknown))}")
        return cls(**value)

    @property
    def placement(self) -> FramePlacement:
        return FramePlacement(left=self.left, bottom=self.bottom, width=self.width, height=self.height)

    @property
    def ranges(self) -> RangeSpec:
        return RangeSpec(x_min=self.x_min, x_max=self.x_max, y_min=self.y_min, y_max=self.y_max)


@dataclass
class AutoRange:
    """Per-bound auto flags plus the data extrema observed so far.

    Observed values only ever widen. A bound that is not auto is never touched.
    """

    requested: RangeSpec = field(default_factory=RangeSpec)
    observed: dict[str, float] = field(default_factory=dict)

    def is_auto(self, name: str) -> bool:
        return getattr(self.requested, name) is None

    def unobserved(self) -> list[str]:
        """Auto bounds that have not seen any data yet."""

        return [name for name in _BOUND_NAMES if self.is_auto(name) and name not in self.observed]

    def expand(self, points: Iterable[Point]) -> None:
        for p in points:
            self._widen("x_min", p.x, lower=True)
            self._widen("x_max", p.x, lower=False)
            self._widen("y_min", p.y, lower=True)
            self._widen("y_max", p.y, lower=False)

    def _widen(self, name: str, value: float, *, lower: bool) -> None:
        if not self.is_auto(name) or not math.isfinite(value):
            return
        current = self.observed.get(name)
        if current is None or (value < current if lower else value > current):
            self.observed[name] = value

    def resolve(self, fallback: Bounds | None = None, *, frame_id: str = "") -> Bounds:
        """Freeze the bounds for one render pass.

        `fallback` supplies values for auto bounds that never observed data; without
        it such a bound is an error.
        """

        values: dict[str, float] = {}
        for name in _BOUND_NAMES:
            fixed = getattr(self.requested, name)
            if fixed is not None:
                values[name] = float(fixed)
            elif name in self.observed:
                values[name] = self.observed[name]
            elif fallback is not None:
                values[name] = getattr(fallback, name)
            else:
                raise DegenerateGeometryError(f"frame `{frame_id}`: no data observed for auto bound `{name}`")
        bounds = Bounds(**values)
        _check_span(bounds.x_min, bounds.x_max, axis="x", frame_id=frame_id)
        _check_span(bounds.y_min, bounds.y_max, axis="y", frame_id=frame_id)
        return bounds


def _check_span(vmin: float, vmax: float, *, axis: str, frame_id: str) -> None:
    if not (math.isfinite(vmin) and math.isfinite(vmax)):
        raise DegenerateGeometryError(f"frame `{frame_id}`: {axis} range is not finite ({vmin}, {vmax})")
    if vmin == vmax:
        raise DegenerateGeometryError(f"frame `{frame_id}`: {axis} range is empty ({vmin} == {vmax})")


def placement_bounds(placement: FramePlacement) -> Bounds:
    """Bounds equal to the raw percentage placement, used by scaffolding-only frames."""

    return Bounds(
        x_min=placement.left,
        x_max=placement.left + placement.width,
        y_min=placement.bottom,
        y_max=placement.bottom + placement.height,
    )


@dataclass(frozen=True)
class ResolvedGeometry:
    """Placement, canvas size and concrete bounds of one frame for one render pass."""

    placement: FramePlacement
    canvas_width: float
    canvas_height: float
    bounds: Bounds

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("canvas width/height must be > 0")


def pixel_rect(geometry: ResolvedGeometry) -> tuple[float, float, float, float]:
    """Return the frame rectangle as pixel `(left, top, width, height)`."""

    pl = geometry.placement
    px_left = pl.left * geometry.canvas_width / 100
    px_width = pl.width * geometry.canvas_width / 100
    px_bottom = pl.bottom * geometry.canvas_height / 100
    px_height = pl.height * geometry.canvas_height / 100
    px_top = geometry.canvas_height - px_bottom - px_height
    return px_left, px_top, px_width, px_height


def scale(geometry: ResolvedGeometry, *points: PointLike) -> list[Point]:
    px_left, px_top, px_width, px_height = pixel_rect(geometry)
    b = geometry.bounds
    x_span = b.x_max - b.x_min
    y_span = b.y_max - b.y_min
    out: list[Point] = []
    for raw in points:
        p = as_point(raw)
        out.append(
            Point(
                x=(p.x - b.x_min) / x_span * px_width + px_left,
                # pixel y grows downward
                y=(1 - (p.y - b.y_min) / y_span) * px_height + px_top,
            )
        )
    return out
