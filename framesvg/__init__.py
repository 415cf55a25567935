from framesvg.api import svg
from framesvg.config import DocumentConfig
from framesvg.document import Document
from framesvg.errors import DegenerateGeometryError, FrameSvgError, InsufficientSamplesError, SingularSystemError
from framesvg.frame import Frame
from framesvg.geometry import FrameGeometry, Point, ResolvedGeometry, pixel_rect, scale, to_points
from framesvg.numeric import to_points_smooth

__all__ = [
    "DegenerateGeometryError",
    "Document",
    "DocumentConfig",
    "Frame",
    "FrameGeometry",
    "FrameSvgError",
    "InsufficientSamplesError",
    "Point",
    "ResolvedGeometry",
    "SingularSystemError",
    "pixel_rect",
    "scale",
    "svg",
    "to_points",
    "to_points_smooth",
]
