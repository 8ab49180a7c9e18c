"""SVG parser — facade over svgpathtools.

Converts SVG text (exported by this engine or supplied externally) into a
Pattern. Arcs are converted to cubic Béziers; circles become four cubic
quarter arcs.
"""

from __future__ import annotations

import logging
import math
import re

import numpy as np
import svgpathtools
from svgpathtools import parse_path

from kolam.errors import KolamError, SvgParseError
from kolam.engine.grid import GridSpec, make_grid
from kolam.engine.motifs import loop_around
from kolam.engine.pattern import Pattern, PatternStyle, make_pattern
from kolam.svg.primitives import (
    CubicBezier,
    Line,
    Path,
    Point,
    QuadraticBezier,
    Segment,
    build_path,
)
from kolam.svg.serializer import ATTR_GRID, ATTR_ID, ATTR_STYLE

logger = logging.getLogger(__name__)

_SVG_TAG_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_SHAPE_TAG_RE = re.compile(r"<(path|line|polyline|polygon|circle)\b[^>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_SUBPATH_RE = re.compile(r"[Mm][^Mm]*")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Degrees of arc per cubic piece when converting elliptical arcs
_ARC_PIECE_DEG = 90.0


def _extract_attrs(tag_text: str) -> dict[str, str]:
    """Extract attributes from an SVG tag string (either quote style)."""
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(tag_text):
        attrs[m.group(1)] = m.group(2) if m.group(2) is not None else m.group(3)
    return attrs


def _pt(z: complex) -> Point:
    return Point.from_complex(z)


def _arc_to_cubics(arc: svgpathtools.Arc) -> list[CubicBezier]:
    """Hermite cubic fit of an elliptical arc, one piece per quarter turn."""
    pieces = max(1, math.ceil(abs(arc.delta) / _ARC_PIECE_DEG))
    ts = np.linspace(0.0, 1.0, pieces + 1)
    cubics = []
    for t0, t1 in zip(ts, ts[1:]):
        h = (t1 - t0) / 3
        p0, p3 = arc.point(t0), arc.point(t1)
        c1 = p0 + arc.derivative(t0) * h
        c2 = p3 - arc.derivative(t1) * h
        cubics.append(CubicBezier(_pt(p0), _pt(c1), _pt(c2), _pt(p3)))
    # Pin the endpoints to the arc's exact ends
    first, last = cubics[0], cubics[-1]
    cubics[0] = CubicBezier(_pt(arc.start), first.c1, first.c2, first.end)
    cubics[-1] = CubicBezier(cubics[-1].start, last.c1, last.c2, _pt(arc.end))
    return cubics


def convert_segment(seg) -> list[Segment]:
    """svgpathtools segment -> engine segments."""
    if isinstance(seg, svgpathtools.Line):
        return [Line(_pt(seg.start), _pt(seg.end))]
    if isinstance(seg, svgpathtools.QuadraticBezier):
        return [QuadraticBezier(_pt(seg.start), _pt(seg.control), _pt(seg.end))]
    if isinstance(seg, svgpathtools.CubicBezier):
        return [CubicBezier(_pt(seg.start), _pt(seg.control1), _pt(seg.control2), _pt(seg.end))]
    if isinstance(seg, svgpathtools.Arc):
        return _arc_to_cubics(seg)
    raise SvgParseError(f"Unsupported path segment: {type(seg).__name__}")


def paths_from_d(d: str) -> list[Path]:
    """Parse a ``d`` attribute into one Path per moveto subpath.

    Each subpath is parsed on its own, starting from the previous
    subpath's end point, so its closed flag comes from its own trailing
    ``Z`` even when a moveto lands on the current point.
    """
    paths = []
    current = 0j
    for chunk in _SUBPATH_RE.findall(d.strip()):
        sub = parse_path(chunk, current_pos=current)
        if len(sub) == 0:
            values = _floats(chunk[1:])
            if len(values) < 2:
                raise SvgParseError(f"Malformed moveto in path data: {chunk!r}")
            target = complex(values[-2], values[-1])
            current = target if chunk[0] == "M" else current + target
            continue
        current = sub[-1].end
        segments: list[Segment] = []
        for seg in sub:
            segments.extend(convert_segment(seg))
        paths.append(build_path(segments, closed=chunk.rstrip().endswith(("z", "Z"))))
    return paths


def _floats(text: str) -> list[float]:
    return [float(v) for v in _NUMBER_RE.findall(text)]


def _shape_paths(tag: str, attrs: dict[str, str]) -> list[Path]:
    if tag == "path":
        return paths_from_d(attrs["d"])
    if tag == "line":
        start = Point(float(attrs["x1"]), float(attrs["y1"]))
        end = Point(float(attrs["x2"]), float(attrs["y2"]))
        return [build_path([Line(start, end)])]
    if tag in ("polyline", "polygon"):
        values = _floats(attrs["points"])
        pts = [Point(x, y) for x, y in zip(values[::2], values[1::2])]
        if len(pts) < 2:
            return []
        return [build_path([Line(a, b) for a, b in zip(pts, pts[1:])], closed=tag == "polygon")]
    # circle
    center = Point(float(attrs["cx"]), float(attrs["cy"]))
    r = float(attrs["r"])
    if r <= 0:
        return []
    return [loop_around(center, r, "circle")]


def _fallback_grid(paths: list[Path]) -> GridSpec:
    """Single cell spanning the geometry when the SVG carries no grid."""
    coords = [(p.x, p.y) for path in paths for seg in path.segments for p in seg.points]
    if not coords:
        return make_grid(1, 1, 1.0)
    xs, ys = zip(*coords)
    extent = max(max(xs) - min(xs), max(ys) - min(ys))
    return make_grid(1, 1, extent if extent > 0 else 1.0)


def _grid_from_attr(value: str) -> GridSpec:
    parts = value.split()
    if len(parts) != 3:
        raise SvgParseError(f"Malformed {ATTR_GRID}: {value!r}")
    try:
        return make_grid(int(parts[0]), int(parts[1]), float(parts[2]))
    except ValueError as e:
        raise SvgParseError(f"Malformed {ATTR_GRID}: {value!r}") from e


def parse_svg(
    svg_text: str,
    grid: GridSpec | None = None,
    style: PatternStyle | None = None,
) -> Pattern:
    """Parse SVG text into a Pattern.

    ``grid`` and ``style`` override the Kolam metadata on the root element.
    Without either, the pattern gets a single-cell grid around its geometry
    and the freehand (kambi) style.
    """
    root_match = _SVG_TAG_RE.search(svg_text)
    root = _extract_attrs(root_match.group(0)) if root_match else {}

    paths: list[Path] = []
    for match in _SHAPE_TAG_RE.finditer(svg_text):
        tag = match.group(1).lower()
        attrs = _extract_attrs(match.group(0))
        if attrs.get("data-role") == "grid-dot":
            continue
        try:
            paths.extend(_shape_paths(tag, attrs))
        except (KeyError, ValueError, IndexError, KolamError) as e:
            logger.warning("Skipping unparsable <%s>: %s", tag, e)

    if grid is None:
        grid = _grid_from_attr(root[ATTR_GRID]) if ATTR_GRID in root else _fallback_grid(paths)
    if style is None:
        try:
            style = PatternStyle(root.get(ATTR_STYLE, PatternStyle.KAMBI.value))
        except ValueError as e:
            raise SvgParseError(f"Unknown {ATTR_STYLE}: {root.get(ATTR_STYLE)!r}") from e

    pattern = make_pattern(grid, paths, style, pattern_id=root.get(ATTR_ID))
    logger.info("Parsed SVG: %d paths, %d segments", len(pattern.paths), pattern.segment_count)
    return pattern
