from __future__ import annotations

from framesvg.geometry import PointLike, as_point
from framesvg.markup.numbers import format_number


class PathBuilder:
    """Accumulates SVG path data (`d` attribute) segments."""

    def __init__(self, precision: int = 4) -> None:
        self.precision = precision
        self._segments: list[str] = []

    def to(self, xy: PointLike) -> "PathBuilder":
        return self._push("", xy)

    def move_to(self, xy: PointLike) -> "PathBuilder":
        return self._push("M", xy)

    def line_to(self, xy: PointLike) -> "PathBuilder":
        return self._push("L", xy)

    def move_by(self, xy: PointLike) -> "PathBuilder":
        return self._push("m", xy)

    def line_by(self, xy: PointLike) -> "PathBuilder":
        return self._push("l", xy)

    def close(self) -> "PathBuilder":
        self._segments.append("z")
        return self

    def __len__(self) -> int:
        return len(self._segments)

    def __str__(self) -> str:
        return " ".join(self._segments)

    def _push(self, action: str, xy: PointLike) -> "PathBuilder":
        p = as_point(xy)
        self._segments.append(
            f"{action}{format_number(p.x, self.precision)} {format_number(p.y, self.precision)}"
        )
        return self


def polygon_path(points: list[PointLike], precision: int = 4) -> PathBuilder:
    path = PathBuilder(precision)
    if not points:
        return path
    path.move_to(points[0])
    for p in points[1:]:
        path.line_to(p)
    return path.close()
