from framesvg.numeric.linalg import solve
from framesvg.numeric.spline import SplineModel, cubic_spline_interpolator, frange, to_points_smooth

__all__ = [
    "SplineModel",
    "cubic_spline_interpolator",
    "frange",
    "solve",
    "to_points_smooth",
]
