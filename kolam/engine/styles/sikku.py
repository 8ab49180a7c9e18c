"""Sikku — a single unbroken stroke weaving around a region of dots.

Each encircled dot contributes four quarter arcs between its "gates", the
points half a spacing away along the axes. Orthogonally adjacent dots
share a gate, so the arcs of a 4-connected region form a connected graph
in which every gate has even degree: an Eulerian circuit exists and is
drawn as one closed path.

Gate coordinates are kept in half-spacing integer units so graph nodes
compare exactly.
"""

from __future__ import annotations

import logging
import random

import networkx as nx

from kolam.engine.config import EngineConfig
from kolam.errors import NonEulerianConstruction
from kolam.engine.generator import GenerateParams
from kolam.engine.pattern import PatternStyle
from kolam.engine.registry import style
from kolam.svg.primitives import Path, Point, QuadraticBezier, build_path

logger = logging.getLogger(__name__)

Node = tuple[int, int]

_NEIGHBOURS = ((0, 1), (1, 0), (0, -1), (-1, 0))


def grow_region(rows: int, cols: int, size: int, rng: random.Random) -> list[tuple[int, int]]:
    """Seeded walk adding one orthogonal neighbour dot per step, starting at
    the grid centre. Returns dots (row, col) in the order they were added."""
    if size > rows * cols:
        raise NonEulerianConstruction(
            f"{size} iterations exceed the {rows}x{cols} grid; "
            "continuing would force the stroke to lift"
        )
    region = [(rows // 2, cols // 2)]
    members = set(region)
    while len(region) < size:
        frontier = sorted({
            (r + dr, c + dc)
            for r, c in region
            for dr, dc in _NEIGHBOURS
            if 0 <= r + dr < rows and 0 <= c + dc < cols and (r + dr, c + dc) not in members
        })
        if not frontier:
            raise NonEulerianConstruction("Walk has no reachable dot left to encircle")
        nxt = rng.choice(frontier)
        region.append(nxt)
        members.add(nxt)
    return region


def _gates(r: int, c: int) -> list[Node]:
    """East, south, west, north gates of the dot at (r, c)."""
    x, y = 2 * c, 2 * r
    return [(x + 1, y), (x, y + 1), (x - 1, y), (x, y - 1)]


def arc_graph(region: list[tuple[int, int]]) -> nx.Graph:
    graph = nx.Graph()
    for r, c in region:
        gates = _gates(r, c)
        for a, b in zip(gates, gates[1:] + gates[:1]):
            graph.add_edge(a, b, dot=(2 * c, 2 * r))
    return graph


def odd_degree_count(graph: nx.Graph) -> int:
    return sum(1 for _, d in graph.degree() if d % 2)


@style(PatternStyle.SIKKU, description="Single closed stroke looping around a walk of dots")
def sikku(params: GenerateParams, rng: random.Random, config: EngineConfig) -> list[Path]:
    grid = params.grid
    region = grow_region(grid.rows, grid.cols, params.iterations, rng)
    graph = arc_graph(region)

    if not nx.is_eulerian(graph):
        raise NonEulerianConstruction(
            f"Arc graph has {odd_degree_count(graph)} odd-degree gates "
            f"across {nx.number_connected_components(graph)} components"
        )

    unit = grid.spacing / 2

    def to_point(node: Node) -> Point:
        return Point(node[0] * unit, node[1] * unit)

    r0, c0 = region[0]
    source = _gates(r0, c0)[0]
    segments = []
    for u, v in nx.eulerian_circuit(graph, source=source):
        dot = graph.edges[u, v]["dot"]
        # Tangents at the two gates meet at the cell corner opposite the dot
        corner = (u[0] + v[0] - dot[0], u[1] + v[1] - dot[1])
        segments.append(QuadraticBezier(to_point(u), to_point(corner), to_point(v)))

    logger.debug("Sikku stroke: %d dots, %d arcs", len(region), len(segments))
    return [build_path(segments, closed=True)]
