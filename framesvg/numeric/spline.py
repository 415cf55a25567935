from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np

from framesvg.errors import InsufficientSamplesError
from framesvg.geometry import Point, paired_arrays
from framesvg.numeric.linalg import solve


def frange(start: float, step: float, n: int) -> Iterator[float]:
    """Yield `n` values `start, start + step, ...` without accumulating rounding error."""

    for i in range(n):
        yield start + i * step


@dataclass(frozen=True)
class SplineModel:
    """Cubic Hermite spline through `(knots[i], values[i])` with solved knot slopes."""

    knots: np.ndarray
    values: np.ndarray
    slopes: np.ndarray

    def __call__(self, x0: float, dx: float, count: int, scale: float = 1.0) -> np.ndarray:
        """Evaluate at `count` parameters `x0 + j * dx`, which must be non-decreasing."""

        xs = self.knots
        ys = self.values
        ks = self.slopes
        n = xs.size - 1
        out = np.empty(count, dtype=np.float64)
        i = 1
        for j in range(count):
            x = x0 + j * dx
            # samples and knots both increase, so the interval only moves forward
            while i < n and xs[i] < x:
                i += 1
            h = xs[i] - xs[i - 1]
            dy = ys[i] - ys[i - 1]
            t = (x - xs[i - 1]) / h
            a = ks[i - 1] * h - dy
            b = -ks[i] * h + dy
            q = (1 - t) * ys[i - 1] + t * ys[i] + t * (1 - t) * (a * (1 - t) + b * t)
            out[j] = q * scale
        return out

    def sample(self, count: int) -> np.ndarray:
        """Evaluate at `count` evenly spaced parameters spanning the knot range."""

        if count < 2:
            raise ValueError("sample count must be >= 2")
        x0 = float(self.knots[0])
        dx = (float(self.knots[-1]) - x0) / (count - 1)
        return self(x0, dx, count)


def cubic_spline_interpolator(knots: Any, values: Any) -> SplineModel:
    """Fit a natural cubic spline by solving for the slope at every knot."""

    xs = np.asarray(knots, dtype=np.float64).reshape(-1)
    ys = np.asarray(values, dtype=np.float64).reshape(-1)
    if xs.size != ys.size:
        raise ValueError(f"knots and values length mismatch: {xs.size} != {ys.size}")
    if xs.size < 2:
        raise InsufficientSamplesError(f"spline needs at least 2 samples, got {xs.size}")
    if np.any(np.diff(xs) <= 0):
        raise ValueError("knots must be strictly increasing")

    n = xs.size - 1
    a = np.zeros((n + 1, n + 2), dtype=np.float64)
    for i in range(1, n):
        left = 1 / (xs[i] - xs[i - 1])
        right = 1 / (xs[i + 1] - xs[i])
        a[i, i - 1] = left
        a[i, i] = 2 * (left + right)
        a[i, i + 1] = right
        a[i, n + 1] = 3 * ((ys[i] - ys[i - 1]) * left * left + (ys[i + 1] - ys[i]) * right * right)

    first = 1 / (xs[1] - xs[0])
    a[0, 0] = 2 * first
    a[0, 1] = first
    a[0, n + 1] = 3 * (ys[1] - ys[0]) * first * first
    last = 1 / (xs[n] - xs[n - 1])
    a[n, n - 1] = last
    a[n, n] = 2 * last
    a[n, n + 1] = 3 * (ys[n] - ys[n - 1]) * last * last

    return SplineModel(knots=xs, values=ys, slopes=solve(a))


def to_points_smooth(x: Any, y: Any, multiplier: int) -> tuple[Point, ...]:
    """Resample a point sequence to `len * multiplier` points along a smooth curve.

    Both channels are parametrised by knots evenly spaced over [0, 1] and fitted
    independently.
    """

    if int(multiplier) != multiplier or multiplier < 1:
        raise ValueError("multiplier must be an integer >= 1")
    xs, ys = paired_arrays(x, y)
    n = xs.size
    if n < 2:
        raise InsufficientSamplesError(f"smoothing needs at least 2 points, got {n}")
    m = n * int(multiplier)
    knots = np.fromiter(frange(0.0, 1.0 / (n - 1), n), dtype=np.float64, count=n)
    knots[-1] = 1.0
    xcs = cubic_spline_interpolator(knots, xs)(0.0, 1.0 / (m - 1), m)
    ycs = cubic_spline_interpolator(knots, ys)(0.0, 1.0 / (m - 1), m)
    return tuple(Point(float(xcs[i]), float(ycs[i])) for i in range(m))
