from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from framesvg.config import DocumentConfig
from framesvg.frame import Frame
from framesvg.geometry import (
    AutoRange,
    FrameGeometry,
    FramePlacement,
    RangeSpec,
    ResolvedGeometry,
    placement_bounds,
)
from framesvg.markup.backend import MarkupBackend, SvgMarkupBackend
from framesvg.style.theme import frame_style, root_style


LOGGER = logging.getLogger(__name__)

ROOT_FRAME_ID = "canvas"


class Document:
    """One SVG canvas and the frames painted on it.

    Frames live in a single append-only list; paint order is creation order no
    matter which frame a new frame was created from.
    """

    def __init__(self, config: DocumentConfig | None = None, backend: MarkupBackend | None = None) -> None:
        self.config = config or DocumentConfig()
        self.backend = backend or SvgMarkupBackend(precision=self.config.precision)
        self._frames: list[Frame] = []
        self._append(
            ROOT_FRAME_ID,
            FramePlacement(),
            RangeSpec(x_min=0.0, x_max=float(self.canvas_width), y_min=0.0, y_max=float(self.canvas_height)),
            root_style(self.config.tokens, self.config.root_style),
        )

    @property
    def canvas_width(self) -> float:
        return self.config.canvas_width

    @property
    def canvas_height(self) -> float:
        return self.config.canvas_height

    @property
    def root(self) -> Frame:
        return self._frames[0]

    @property
    def frames(self) -> tuple[Frame, ...]:
        return tuple(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def __getitem__(self, index: int) -> Frame:
        return self._frames[index]

    def frame_ids(self) -> list[str]:
        return [f.id for f in self._frames]

    def get(self, frame_id: str) -> Frame:
        for f in self._frames:
            if f.id == frame_id:
                return f
        raise KeyError(frame_id)

    def add_frame(self, frame_id: str, geometry: FrameGeometry, style: Mapping[str, Any] | None = None) -> Frame:
        return self._append(
            frame_id,
            geometry.placement,
            geometry.ranges,
            frame_style(self.config.tokens, {**self.config.frame_style, **(style or {})}),
        )

    def resolve_geometry(self, frame: Frame) -> ResolvedGeometry:
        """Freeze a frame's bounds for rendering.

        Unobserved auto bounds of a frame that only carries grid/tick/label
        scaffolding fall back to the frame's percentage placement.
        """

        fallback = None
        unobserved = frame.auto_range.unobserved()
        if unobserved and frame.queue.has_scaffolding():
            fallback = placement_bounds(frame.placement)
            LOGGER.debug("frame `%s`: no data observed for %s, using placement", frame.id, ", ".join(unobserved))
        bounds = frame.auto_range.resolve(fallback, frame_id=frame.id)
        return ResolvedGeometry(
            placement=frame.placement,
            canvas_width=self.canvas_width,
            canvas_height=self.canvas_height,
            bounds=bounds,
        )

    def render_frame(self, frame: Frame) -> str:
        return frame.queue.resolve(self.resolve_geometry(frame), self.backend)

    def render(self) -> str:
        LOGGER.debug("rendering %d frame(s) on a %gx%g canvas", len(self._frames), self.canvas_width, self.canvas_height)
        body = [self.render_frame(f) for f in self._frames]
        header = self.backend.header(self.canvas_width, self.canvas_height, self.config.stylesheet)
        return "\n".join([header, *body, self.backend.footer()])

    def _append(
        self,
        frame_id: str,
        placement: FramePlacement,
        ranges: RangeSpec,
        style: dict[str, str],
    ) -> Frame:
        if not isinstance(frame_id, str) or not frame_id.strip():
            raise ValueError("frame id must be a non-empty string")
        if any(f.id == frame_id for f in self._frames):
            raise ValueError(f"duplicate frame id: {frame_id}")
        frame = Frame(
            document=self,
            index=len(self._frames),
            frame_id=frame_id,
            placement=placement,
            auto_range=AutoRange(requested=ranges),
            style=style,
        )
        frame.g(frame_id)
        if not frame.is_root:
            frame.frame_clip_path(f"clip{frame_id}")
        frame.frame_area(style)
        frame.queue.seal_preamble()
        self._frames.append(frame)
        return frame
