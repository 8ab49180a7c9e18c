"""Tests for the pattern generator and its styles."""

import random

import networkx as nx
import pytest

from kolam.engine.generator import GenerateParams, generate, make_params
from kolam.engine.grid import GridSpec, make_grid
from kolam.engine.pattern import PatternStyle
from kolam.engine.styles.sikku import arc_graph, grow_region, odd_degree_count
from kolam.errors import GenerationError, InvalidDimension, LayerOverflow, NonEulerianConstruction
from kolam.svg.primitives import QuadraticBezier, bounding_box


@pytest.mark.parametrize("style", list(PatternStyle))
def test_deterministic(style):
    params = make_params(style, make_grid(4, 4, 20.0), iterations=3, seed=42)
    first = generate(params)
    second = generate(params)
    assert first == second
    assert first.id == second.id
    assert first.id.startswith(style.value)


def test_seed_changes_kambi():
    grid = make_grid(4, 4, 20.0)
    a = generate(make_params("kambi", grid, iterations=5, seed=1))
    b = generate(make_params("kambi", grid, iterations=5, seed=2))
    assert a.id != b.id


def test_pulli_loops_every_dot():
    pattern = generate(make_params(PatternStyle.PULLI, make_grid(2, 3, 20.0), iterations=2))
    assert len(pattern.paths) == 12
    assert all(p.closed and len(p.segments) == 4 for p in pattern.paths)


def test_pulli_outer_loops_touch_neighbours():
    grid = make_grid(1, 2, 20.0)
    pattern = generate(make_params(PatternStyle.PULLI, grid, iterations=1))
    first, second = pattern.paths
    # East vertex of the first loop is the west vertex of the second
    assert first.segments[0].start.x == pytest.approx(10.0)
    assert second.segments[2].start.x == pytest.approx(10.0)


def test_kambi_motif_count():
    pattern = generate(make_params(PatternStyle.KAMBI, make_grid(2, 2, 20.0), iterations=7, seed=3))
    assert len(pattern.paths) == 7
    assert all(not p.closed for p in pattern.paths)


def test_padi_layers_grow():
    pattern = generate(make_params(PatternStyle.PADI, make_grid(5, 5, 20.0), iterations=4, seed=9))
    assert len(pattern.paths) == 4
    widths = []
    for path in pattern.paths:
        lo, hi = bounding_box(path)
        widths.append(hi.x - lo.x)
    for inner, outer in zip(widths, widths[1:]):
        assert outer == pytest.approx(inner * 1.3)


def test_padi_layer_overflow():
    with pytest.raises(LayerOverflow):
        generate(make_params(PatternStyle.PADI, make_grid(1, 1, 10.0), iterations=2))


def test_padi_single_layer_fits_single_cell():
    pattern = generate(make_params(PatternStyle.PADI, make_grid(1, 1, 10.0), iterations=1))
    assert len(pattern.paths) == 1


def test_sikku_single_closed_stroke():
    pattern = generate(make_params(PatternStyle.SIKKU, make_grid(3, 3, 20.0), iterations=5, seed=4))
    assert len(pattern.paths) == 1
    stroke = pattern.paths[0]
    assert stroke.closed
    assert len(stroke.segments) == 20
    assert all(isinstance(seg, QuadraticBezier) for seg in stroke.segments)
    assert stroke.start == stroke.end


def test_sikku_too_many_iterations():
    with pytest.raises(NonEulerianConstruction):
        generate(make_params(PatternStyle.SIKKU, make_grid(2, 2, 20.0), iterations=5))


def _key(p):
    return (round(p.x, 6), round(p.y, 6))


def _random_triples(n):
    rng = random.Random(1234)
    return [(rng.randint(1, 6), rng.randint(1, 6), rng.randint(1, 20)) for _ in range(n)]


@pytest.mark.parametrize("rows, cols, iterations", _random_triples(30))
def test_sikku_stroke_never_lifts(rows, cols, iterations):
    params = make_params(PatternStyle.SIKKU, make_grid(rows, cols, 10.0), iterations=iterations, seed=rows * 31 + cols)
    try:
        pattern = generate(params)
    except NonEulerianConstruction:
        assert iterations > rows * cols
        return
    region = grow_region(rows, cols, iterations, random.Random(params.seed))
    assert odd_degree_count(arc_graph(region)) <= 2
    assert len(pattern.paths) == 1

    segments = pattern.paths[0].segments
    stroke = nx.MultiGraph()
    seen = set()
    for seg in segments:
        start, end = (_key(p) for p in (seg.points[0], seg.points[-1]))
        arc = (frozenset((start, end)), tuple(_key(p) for p in seg.points[1:-1]))
        assert arc not in seen
        seen.add(arc)
        stroke.add_edge(start, end)
    assert sum(1 for _, d in stroke.degree() if d % 2) <= 2
    assert all(a.points[-1] == b.points[0] for a, b in zip(segments, segments[1:]))
    assert len(pattern.paths[0].segments) == 4 * iterations


def test_grow_region_is_connected():
    region = grow_region(6, 6, 15, random.Random(0))
    assert len(set(region)) == 15
    for r, c in region[1:]:
        earlier = region[: region.index((r, c))]
        assert any(abs(r - r2) + abs(c - c2) == 1 for r2, c2 in earlier)


def test_unknown_style():
    with pytest.raises(GenerationError):
        make_params("rangoli", make_grid(3, 3, 10.0))


@pytest.mark.parametrize("iterations", [0, -1, 1.5, True])
def test_invalid_iterations(iterations):
    with pytest.raises(InvalidDimension):
        make_params(PatternStyle.PULLI, make_grid(3, 3, 10.0), iterations=iterations)


def test_invalid_seed():
    with pytest.raises(InvalidDimension):
        make_params(PatternStyle.PULLI, make_grid(3, 3, 10.0), seed="abc")


def test_hand_built_grid_revalidated():
    params = GenerateParams(style=PatternStyle.PULLI, grid=GridSpec(rows=0, cols=3, spacing=10.0))
    with pytest.raises(InvalidDimension):
        generate(params)
