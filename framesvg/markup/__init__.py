from framesvg.markup.backend import AttributeMap, MarkupBackend, SvgMarkupBackend, svg_attributes
from framesvg.markup.embed import image_data_uri
from framesvg.markup.numbers import format_number
from framesvg.markup.path import PathBuilder, polygon_path

__all__ = [
    "AttributeMap",
    "MarkupBackend",
    "PathBuilder",
    "SvgMarkupBackend",
    "format_number",
    "image_data_uri",
    "polygon_path",
    "svg_attributes",
]
