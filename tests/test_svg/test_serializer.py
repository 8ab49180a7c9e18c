"""Tests for SVG export."""

import re

import pytest

from kolam.engine.generator import generate, make_params
from kolam.engine.grid import make_grid
from kolam.engine.pattern import PatternStyle
from kolam.errors import OutOfRange
from kolam.svg.primitives import CubicBezier, Line, Point, QuadraticBezier
from kolam.svg.serializer import ExportOptions, export_svg, fmt, path_data


def test_fmt_round_trips():
    assert fmt(10.0) == "10"
    assert fmt(-0.0) == "0"
    assert fmt(0.1) == "0.1"
    assert float(fmt(1 / 3)) == 1 / 3


def test_path_data_commands():
    segs = [
        Line(Point(0, 0), Point(10, 0)),
        QuadraticBezier(Point(10, 0), Point(15, 5), Point(10, 10)),
        CubicBezier(Point(10, 10), Point(8, 12), Point(2, 12), Point(0, 10)),
    ]
    assert path_data(segs, closed=True) == "M 0 0 L 10 0 Q 15 5 10 10 C 8 12 2 12 0 10 Z"


def test_export_carries_metadata():
    pattern = generate(make_params(PatternStyle.PULLI, make_grid(2, 3, 20.0), iterations=1))
    svg = export_svg(pattern)
    assert svg.startswith('<?xml version="1.0"')
    assert f'data-kolam-id="{pattern.id}"' in svg
    assert 'data-kolam-style="pulli"' in svg
    assert 'data-kolam-grid="2 3 20"' in svg
    assert svg.count("<path ") == 6


def test_viewbox_covers_grid():
    pattern = generate(make_params(PatternStyle.PULLI, make_grid(2, 2, 20.0), iterations=1))
    match = re.search(r'viewBox="([^"]+)"', export_svg(pattern))
    values = [float(v) for v in match.group(1).split()]
    assert values == pytest.approx([-10.0, -10.0, 40.0, 40.0])


def test_show_dots_and_title():
    pattern = generate(make_params(PatternStyle.KAMBI, make_grid(2, 2, 20.0), iterations=2))
    svg = export_svg(pattern, options=ExportOptions(show_dots=True, title="Dots & leaves", background="#000"))
    assert svg.count('data-role="grid-dot"') == 4
    assert "<title>Dots &amp; leaves</title>" in svg
    assert 'style="background:#000"' in svg


def test_unknown_palette():
    pattern = generate(make_params(PatternStyle.KAMBI, make_grid(2, 2, 20.0), iterations=1))
    with pytest.raises(ValueError):
        export_svg(pattern, options=ExportOptions(palette="plaid"))


def test_step_prefix_limits_paths():
    pattern = generate(make_params(PatternStyle.PULLI, make_grid(2, 2, 20.0), iterations=1))
    assert export_svg(pattern, step_prefix=0).count("<path ") == 0
    assert export_svg(pattern, step_prefix=1).count("<path ") == 1
    assert export_svg(pattern, step_prefix=4) == export_svg(pattern)


def test_partial_stroke_left_open():
    pattern = generate(make_params(PatternStyle.SIKKU, make_grid(3, 3, 20.0), iterations=3, seed=1))
    partial = export_svg(pattern, step_prefix=1)
    assert partial.count("<path ") == 1
    assert " Z" not in partial
    assert " Z" in export_svg(pattern, step_prefix=3)


@pytest.mark.parametrize("prefix", [-1, 5])
def test_step_prefix_out_of_range(prefix):
    pattern = generate(make_params(PatternStyle.PULLI, make_grid(2, 2, 20.0), iterations=1))
    with pytest.raises(OutOfRange):
        export_svg(pattern, step_prefix=prefix)
