from __future__ import annotations


class FrameSvgError(Exception):
    """Base class for framesvg failures."""


class DegenerateGeometryError(FrameSvgError, ValueError):
    """A frame's data range cannot be mapped to pixels (unobserved or zero-width axis)."""


class InsufficientSamplesError(FrameSvgError, ValueError):
    """Spline resampling needs at least two samples."""


class SingularSystemError(FrameSvgError, ArithmeticError):
    """Gaussian elimination met a zero (or near-zero) pivot."""
