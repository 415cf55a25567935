from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from framesvg.config import DocumentConfig
from framesvg.document import Document
from framesvg.frame import Frame
from framesvg.markup.backend import MarkupBackend


def svg(
    canvas_width: float | None = None,
    canvas_height: float | None = None,
    style: Mapping[str, Any] | None = None,
    *,
    stylesheet: str | None = None,
    config: DocumentConfig | None = None,
    backend: MarkupBackend | None = None,
) -> Frame:
    """Start a document and return its root frame.

    The root frame spans the whole canvas with user coordinates equal to pixel
    coordinates measured from the bottom-left corner.
    """

    cfg = config or DocumentConfig()
    overrides: dict[str, Any] = {}
    if canvas_width is not None:
        overrides["canvas_width"] = canvas_width
    if canvas_height is not None:
        overrides["canvas_height"] = canvas_height
    if stylesheet is not None:
        overrides["stylesheet"] = stylesheet
    if style:
        overrides["root_style"] = {**cfg.root_style, **style}
    if overrides:
        cfg = replace(cfg, **overrides)
    return Document(cfg, backend).root
