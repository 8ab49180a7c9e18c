"""Write SVG text from pattern geometry.

One drawing command per segment with shortest round-trip float
formatting, so parsing the output back reproduces every coordinate
exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from xml.sax.saxutils import escape, quoteattr

from kolam.errors import OutOfRange
from kolam.engine.pattern import ConstructionStep, Pattern
from kolam.svg.primitives import CubicBezier, Line, Point, QuadraticBezier, Segment, bounding_box

# Stroke palettes offered by the front-end; paths cycle through the colours.
PALETTES: dict[str, list[str]] = {
    "neon-purple": ["#8B5CF6", "#EC4899"],
    "neon-blue": ["#06B6D4", "#3B82F6"],
    "neon-orange": ["#F97316", "#EC4899"],
    "neon-green": ["#10B981", "#06B6D4"],
}

# Kolam metadata carried on the root element
ATTR_ID = "data-kolam-id"
ATTR_STYLE = "data-kolam-style"
ATTR_GRID = "data-kolam-grid"


@dataclass
class ExportOptions:
    palette: str = "neon-purple"
    stroke_width: float = 2.0
    show_dots: bool = False
    dot_radius: float = 1.5
    background: str | None = None
    title: str = ""


def fmt(value: float) -> str:
    """Shortest string that parses back to the same float."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return "0" if text == "-0" else text


def _xy(p: Point) -> str:
    return f"{fmt(p.x)} {fmt(p.y)}"


def segment_command(seg: Segment) -> str:
    if isinstance(seg, Line):
        return f"L {_xy(seg.end)}"
    if isinstance(seg, QuadraticBezier):
        return f"Q {_xy(seg.control)} {_xy(seg.end)}"
    if isinstance(seg, CubicBezier):
        return f"C {_xy(seg.c1)} {_xy(seg.c2)} {_xy(seg.end)}"
    raise TypeError(f"Unsupported segment type: {type(seg).__name__}")


def path_data(segments: list[Segment] | tuple[Segment, ...], closed: bool = False) -> str:
    """SVG ``d`` attribute for a continuous run of segments."""
    if not segments:
        return ""
    parts = [f"M {_xy(segments[0].start)}"]
    parts.extend(segment_command(seg) for seg in segments)
    if closed:
        parts.append("Z")
    return " ".join(parts)


def serialize_svg(
    elements: list[dict[str, Any]],
    viewbox: tuple[float, float, float, float],
    title: str = "",
    root_attrs: dict[str, str] | None = None,
) -> str:
    """Generate SVG markup from element definitions."""
    x, y, w, h = viewbox
    extra = "".join(f" {k}={quoteattr(v)}" for k, v in (root_attrs or {}).items())
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="{fmt(x)} {fmt(y)} {fmt(w)} {fmt(h)}" xmlns="http://www.w3.org/2000/svg"'
        f' role="img"{extra}>',
    ]
    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    for elem in elements:
        tag = elem.get("tag", "path")
        attrs = {k: v for k, v in elem.items() if k != "tag"}
        attr_str = " ".join(f"{k}={quoteattr(str(v))}" for k, v in attrs.items())
        lines.append(f"  <{tag} {attr_str} />")

    lines.append("</svg>")
    return "\n".join(lines)


def _viewbox(pattern: Pattern) -> tuple[float, float, float, float]:
    lo, hi = pattern.grid.bounds
    xmin, ymin, xmax, ymax = lo.x, lo.y, hi.x, hi.y
    for path in pattern.paths:
        if path.is_empty:
            continue
        pmin, pmax = bounding_box(path)
        xmin, ymin = min(xmin, pmin.x), min(ymin, pmin.y)
        xmax, ymax = max(xmax, pmax.x), max(ymax, pmax.y)
    return (xmin, ymin, xmax - xmin, ymax - ymin)


def _runs(indices: list[int]) -> list[list[int]]:
    """Split sorted indices into consecutive runs."""
    runs: list[list[int]] = []
    for i in indices:
        if runs and i == runs[-1][-1] + 1:
            runs[-1].append(i)
        else:
            runs.append([i])
    return runs


def export_svg(
    pattern: Pattern,
    step_prefix: int | None = None,
    steps: tuple[ConstructionStep, ...] | None = None,
    options: ExportOptions | None = None,
) -> str:
    """Serialize a pattern, or the first ``step_prefix`` construction steps of it."""
    options = options or ExportOptions()
    colors = PALETTES.get(options.palette)
    if colors is None:
        raise ValueError(f"Unknown palette: {options.palette!r}")

    included: dict[int, list[int]] | None = None
    if step_prefix is not None:
        if steps is None:
            from kolam.engine.sequencer import sequence

            steps = sequence(pattern)
        if not 0 <= step_prefix <= len(steps):
            raise OutOfRange(f"Step prefix {step_prefix} outside 0..{len(steps)}")
        included = {}
        for step in steps[:step_prefix]:
            for ref in step.segment_refs:
                included.setdefault(ref.path, []).append(ref.index)

    elements: list[dict[str, Any]] = []
    if options.show_dots:
        for _, _, dot in pattern.grid.dots():
            elements.append({
                "tag": "circle",
                "cx": fmt(dot.x),
                "cy": fmt(dot.y),
                "r": fmt(options.dot_radius),
                "fill": "currentColor",
                "data-role": "grid-dot",
            })

    for p, path in enumerate(pattern.paths):
        if included is None:
            runs = [list(range(len(path.segments)))] if path.segments else []
        else:
            runs = _runs(sorted(included.get(p, [])))
        full = included is None or len(included.get(p, [])) == len(path.segments)
        for run in runs:
            segs = [path.segments[i] for i in run]
            elements.append({
                "tag": "path",
                "d": path_data(segs, closed=path.closed and full),
                "fill": "none",
                "stroke": colors[p % len(colors)],
                "stroke-width": fmt(options.stroke_width),
                "stroke-linecap": "round",
                "stroke-linejoin": "round",
            })

    grid = pattern.grid
    root_attrs = {
        ATTR_ID: pattern.id,
        ATTR_STYLE: pattern.style.value,
        ATTR_GRID: f"{grid.rows} {grid.cols} {fmt(grid.spacing)}",
    }
    if options.background:
        root_attrs["style"] = f"background:{options.background}"
    return serialize_svg(elements, _viewbox(pattern), title=options.title, root_attrs=root_attrs)
