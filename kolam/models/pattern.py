"""Wire models for pattern geometry."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from kolam.engine.grid import GridSpec, make_grid
from kolam.engine.pattern import Pattern, PatternStyle, make_pattern
from kolam.svg.primitives import Path, Point, build_path, make_segment

_POINT_COUNTS = {"line": 2, "quadratic": 3, "cubic": 4}


class GridModel(BaseModel):
    rows: int = Field(..., description="Dot rows")
    cols: int = Field(..., description="Dot columns")
    spacing: float = Field(..., description="Distance between adjacent dots")

    def to_grid(self) -> GridSpec:
        return make_grid(self.rows, self.cols, self.spacing)

    @classmethod
    def from_grid(cls, grid: GridSpec) -> GridModel:
        return cls(rows=grid.rows, cols=grid.cols, spacing=grid.spacing)


class SegmentModel(BaseModel):
    type: Literal["line", "quadratic", "cubic"]
    points: list[tuple[float, float]] = Field(..., description="Start, control points, end")

    @model_validator(mode="after")
    def _check_point_count(self) -> SegmentModel:
        expected = _POINT_COUNTS[self.type]
        if len(self.points) != expected:
            raise ValueError(f"{self.type} segment needs {expected} points, got {len(self.points)}")
        return self


class PathModel(BaseModel):
    segments: list[SegmentModel] = Field(default_factory=list)
    closed: bool = False

    def to_path(self) -> Path:
        segments = (make_segment(s.type, (Point(x, y) for x, y in s.points)) for s in self.segments)
        return build_path(segments, closed=self.closed)

    @classmethod
    def from_path(cls, path: Path) -> PathModel:
        return cls(
            segments=[
                SegmentModel(type=seg.kind, points=[(p.x, p.y) for p in seg.points])
                for seg in path.segments
            ],
            closed=path.closed,
        )


class PatternModel(BaseModel):
    id: str | None = Field(default=None, description="Derived from the geometry when omitted")
    style: PatternStyle
    grid: GridModel
    paths: list[PathModel] = Field(default_factory=list)

    def to_pattern(self) -> Pattern:
        """Rebuild the engine Pattern, re-checking grid and path continuity."""
        paths = tuple(p.to_path() for p in self.paths)
        return make_pattern(self.grid.to_grid(), paths, self.style, pattern_id=self.id)

    @classmethod
    def from_pattern(cls, pattern: Pattern) -> PatternModel:
        return cls(
            id=pattern.id,
            style=pattern.style,
            grid=GridModel.from_grid(pattern.grid),
            paths=[PathModel.from_path(p) for p in pattern.paths],
        )
