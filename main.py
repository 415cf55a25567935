from __future__ import annotations

import argparse
import csv
import logging
import math
from pathlib import Path
import sys

import numpy as np

from framesvg import DocumentConfig, Frame, svg, to_points, to_points_smooth


def build_demo(config: DocumentConfig | None = None) -> Frame:
    """Scaffolding frame with fixed bounds plus an auto-ranged data frame on top."""

    root = svg(config=config)
    placement = {"left": 12.0, "bottom": 12.0, "width": 80.0, "height": 76.0}

    x = np.linspace(0.0, 2.0 * math.pi, 9)
    y = np.sin(x)

    axes = root.frame(
        "axes",
        {**placement, "x_min": 0.0, "x_max": 2.0 * math.pi, "y_min": -1.0, "y_max": 1.0},
        style={"fill": "white"},
    )
    axes.grid(1.0, 0.5).ticks(1.0, 0.5, 5.0).axis_labels(1.0, 0.5, {"font-size": "10"})

    data = root.frame("data", {**placement, "x_min": 0.0, "x_max": 2.0 * math.pi}, style={"stroke": "none"})
    data.clip()
    data.polyline_smooth(x, y, 8, {"stroke": "steelblue", "fill": "none", "stroke-width": "1.5"})
    data.circles(to_points(x, y), 3.0, {"fill": "steelblue", "stroke": "none"})
    data.clip_end()
    data.label(math.pi / 2, 1.0, 30.0, 30.0, "max", {"font-size": "10"})
    return root


def _read_xy_csv(path: Path) -> tuple[list[float], list[float]]:
    xs: list[float] = []
    ys: list[float] = []
    with path.open(newline="", encoding="utf-8") as f:
        for lineno, row in enumerate(csv.reader(f), start=1):
            if not row or row[0].lstrip().startswith("#"):
                continue
            if len(row) < 2:
                raise ValueError(f"{path}:{lineno}: expected `x,y`")
            try:
                xs.append(float(row[0]))
                ys.append(float(row[1]))
            except ValueError:
                if lineno == 1:
                    continue  # header row
                raise ValueError(f"{path}:{lineno}: non-numeric value") from None
    return xs, ys


def main() -> None:
    parser = argparse.ArgumentParser(prog="framesvg")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Render a demonstration document.")
    demo.add_argument("--out", type=Path, default=None, help="Output SVG path. Default: stdout.")
    demo.add_argument("--config", type=Path, default=None, help="TOML file with a [document] table.")

    smooth = sub.add_parser("smooth", help="Resample x,y CSV rows along a cubic spline.")
    smooth.add_argument("--input", type=Path, required=True)
    smooth.add_argument("--multiplier", type=int, default=4)
    smooth.add_argument("--out", type=Path, default=None, help="Output CSV path. Default: stdout.")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "demo":
        config = DocumentConfig.from_toml(args.config) if args.config is not None else None
        markup = build_demo(config).render()
        if args.out is None:
            sys.stdout.write(markup + "\n")
        else:
            args.out.write_text(markup + "\n", encoding="utf-8")
            print(f"wrote {args.out}")
        return

    if args.command == "smooth":
        xs, ys = _read_xy_csv(args.input)
        points = to_points_smooth(xs, ys, args.multiplier)
        out = sys.stdout if args.out is None else args.out.open("w", newline="", encoding="utf-8")
        try:
            writer = csv.writer(out)
            writer.writerow(["x", "y"])
            for p in points:
                writer.writerow([f"{p.x:.9g}", f"{p.y:.9g}"])
        finally:
            if out is not sys.stdout:
                out.close()
        return

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    main()
