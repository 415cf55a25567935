from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re
from typing import Optional
import xml.etree.ElementTree as ET


@dataclass(frozen=True)
class SvgRect:
    x: float
    y: float
    width: float
    height: float
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SvgCircle:
    cx: float
    cy: float
    r: float
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SvgEllipse:
    cx: float
    cy: float
    rx: float
    ry: float
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SvgLine:
    x1: float
    y1: float
    x2: float
    y2: float
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SvgPoly:
    kind: str
    points: list[tuple[float, float]]
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SvgPath:
    d: str
    segments: list[tuple[str, float, float]]
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SvgText:
    x: float
    y: float
    text: str
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SvgImage:
    href: str
    x: float
    y: float
    width: float
    height: float
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SvgGroup:
    group_id: Optional[str]
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass
class SvgDocument:
    """Flat view of the primitives in an SVG document, in document order."""

    width: float
    height: float
    viewbox: tuple[float, float, float, float]
    rects: list[SvgRect] = field(default_factory=list)
    circles: list[SvgCircle] = field(default_factory=list)
    ellipses: list[SvgEllipse] = field(default_factory=list)
    lines: list[SvgLine] = field(default_factory=list)
    polys: list[SvgPoly] = field(default_factory=list)
    paths: list[SvgPath] = field(default_factory=list)
    texts: list[SvgText] = field(default_factory=list)
    images: list[SvgImage] = field(default_factory=list)
    groups: list[SvgGroup] = field(default_factory=list)
    clip_paths: dict[str, SvgPath] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: Path) -> "SvgDocument":
        return cls.from_markup(Path(path).read_text(encoding="utf-8"))

    @classmethod
    def from_markup(cls, svg_markup: str) -> "SvgDocument":
        root = ET.fromstring(svg_markup)
        return cls._from_root(root)

    @classmethod
    def _from_root(cls, root: ET.Element) -> "SvgDocument":
        width = _optional_num(root, "width")
        height = _optional_num(root, "height")
        viewbox = _parse_viewbox(root.attrib.get("viewBox"))
        if viewbox is None:
            viewbox = (0.0, 0.0, width or 100.0, height or 100.0)
        doc = cls(
            width=viewbox[2] if width is None else width,
            height=viewbox[3] if height is None else height,
            viewbox=viewbox,
        )
        clip_members: set[int] = set()
        for clip in root.iter():
            if _local_name(clip.tag) != "clipPath":
                continue
            for child in clip:
                if _local_name(child.tag) == "path":
                    doc.clip_paths[clip.attrib.get("id", "")] = _parse_path(child)
                clip_members.add(id(child))
        for elem in root.iter():
            if id(elem) in clip_members:
                continue
            tag = _local_name(elem.tag)
            attrs = _plain_attrs(elem)
            if tag == "rect":
                doc.rects.append(
                    SvgRect(
                        x=_num(elem, "x"),
                        y=_num(elem, "y"),
                        width=_num(elem, "width"),
                        height=_num(elem, "height"),
                        attrs=_without(attrs, "x", "y", "width", "height"),
                    )
                )
            elif tag == "circle":
                doc.circles.append(
                    SvgCircle(cx=_num(elem, "cx"), cy=_num(elem, "cy"), r=_num(elem, "r"),
                              attrs=_without(attrs, "cx", "cy", "r"))
                )
            elif tag == "ellipse":
                doc.ellipses.append(
                    SvgEllipse(
                        cx=_num(elem, "cx"),
                        cy=_num(elem, "cy"),
                        rx=_num(elem, "rx"),
                        ry=_num(elem, "ry"),
                        attrs=_without(attrs, "cx", "cy", "rx", "ry"),
                    )
                )
            elif tag == "line":
                doc.lines.append(
                    SvgLine(
                        x1=_num(elem, "x1"),
                        y1=_num(elem, "y1"),
                        x2=_num(elem, "x2"),
                        y2=_num(elem, "y2"),
                        attrs=_without(attrs, "x1", "y1", "x2", "y2"),
                    )
                )
            elif tag in ("polygon", "polyline"):
                doc.polys.append(
                    SvgPoly(kind=tag, points=_parse_points(elem.attrib.get("points")), attrs=_without(attrs, "points"))
                )
            elif tag == "path":
                doc.paths.append(_parse_path(elem))
            elif tag == "text":
                doc.texts.append(
                    SvgText(x=_num(elem, "x"), y=_num(elem, "y"), text=elem.text or "", attrs=_without(attrs, "x", "y"))
                )
            elif tag == "image":
                doc.images.append(
                    SvgImage(
                        href=attrs.get("href", ""),
                        x=_num(elem, "x"),
                        y=_num(elem, "y"),
                        width=_num(elem, "width"),
                        height=_num(elem, "height"),
                        attrs=_without(attrs, "href", "x", "y", "width", "height"),
                    )
                )
            elif tag == "g":
                doc.groups.append(SvgGroup(group_id=elem.attrib.get("id"), attrs=_without(attrs, "id")))
        return doc


_PATH_TOKEN = re.compile(r"([MLmlz])\s*(?:(-?[\d.eE+-]+)\s+(-?[\d.eE+-]+))?")


def _parse_path(elem: ET.Element) -> SvgPath:
    d = elem.attrib.get("d", "")
    segments: list[tuple[str, float, float]] = []
    for cmd, x, y in _PATH_TOKEN.findall(d):
        if cmd == "z":
            segments.append((cmd, 0.0, 0.0))
        else:
            segments.append((cmd, float(x), float(y)))
    return SvgPath(d=d, segments=segments, attrs=_without(_plain_attrs(elem), "d"))


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _plain_attrs(elem: ET.Element) -> dict[str, str]:
    return {_local_name(k): v for k, v in elem.attrib.items()}


def _without(attrs: dict[str, str], *names: str) -> dict[str, str]:
    return {k: v for k, v in attrs.items() if k not in names}


_SEPARATORS = re.compile(r"[\s,]+")


def _to_float(raw: str, where: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{where}: not a number: {raw!r}") from None


def _optional_num(elem: ET.Element, name: str) -> Optional[float]:
    raw = elem.attrib.get(name)
    if raw is None:
        return None
    return _to_float(raw.strip(), f"<{_local_name(elem.tag)} {name}>")


def _num(elem: ET.Element, name: str) -> float:
    """Numeric attribute of emitted markup; framesvg always writes unitless numbers."""

    value = _optional_num(elem, name)
    return 0.0 if value is None else value


def _split_numbers(value: str, where: str) -> list[float]:
    return [_to_float(part, where) for part in _SEPARATORS.split(value.strip()) if part]


def _parse_viewbox(value: Optional[str]) -> Optional[tuple[float, float, float, float]]:
    if value is None:
        return None
    numbers = _split_numbers(value, "viewBox")
    if len(numbers) != 4:
        raise ValueError(f"viewBox needs 4 numbers, got {len(numbers)}")
    return numbers[0], numbers[1], numbers[2], numbers[3]


def _parse_points(value: Optional[str]) -> list[tuple[float, float]]:
    numbers = _split_numbers(value or "", "points")
    if len(numbers) % 2:
        raise ValueError("points needs an even count of coordinates")
    return list(zip(numbers[::2], numbers[1::2]))
