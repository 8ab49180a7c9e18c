"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from kolam.engine.pattern import Analysis, ConstructionStep, PatternStyle, SymmetryReport, Transform
from kolam.engine.sequencer import ordered_refs
from kolam.models.pattern import GridModel, PatternModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    styles: list[str] = Field(default_factory=list)


class PatternResponse(BaseModel):
    pattern: PatternModel
    svg: str | None = None
    processing_time_ms: float = 0.0


class TranslationModel(BaseModel):
    dx: float
    dy: float


class SymmetryModel(BaseModel):
    rotational_order: int
    reflection_axes: list[float] = Field(default_factory=list)
    translational: TranslationModel | None = None
    symmetry_group: str

    @classmethod
    def from_report(cls, report: SymmetryReport) -> SymmetryModel:
        t = report.translational
        return cls(
            rotational_order=report.rotational_order,
            reflection_axes=list(report.reflection_axes),
            translational=TranslationModel(dx=t.dx, dy=t.dy) if t else None,
            symmetry_group=report.symmetry_group,
        )


class TransformModel(BaseModel):
    kind: str
    description: str
    center: tuple[float, float]
    angle: float = 0.0
    axis: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    factor: float = 1.0

    @classmethod
    def from_transform(cls, t: Transform) -> TransformModel:
        return cls(
            kind=t.kind.value,
            description=t.describe(),
            center=(t.center.x, t.center.y),
            angle=t.angle,
            axis=t.axis,
            dx=t.dx,
            dy=t.dy,
            factor=t.factor,
        )


class AnalyzeResponse(BaseModel):
    pattern_id: str
    symmetry: SymmetryModel
    transforms: list[TransformModel] = Field(default_factory=list)
    motif: list[tuple[int, int]] = Field(default_factory=list, description="(path, segment) refs of the base motif")
    placements: int = 0
    centroid: tuple[float, float]
    math_concepts: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0

    @classmethod
    def from_analysis(cls, pattern_id: str, analysis: Analysis, elapsed_ms: float) -> AnalyzeResponse:
        d = analysis.decomposition
        return cls(
            pattern_id=pattern_id,
            symmetry=SymmetryModel.from_report(analysis.symmetry),
            transforms=[TransformModel.from_transform(t) for t in d.transforms],
            motif=[tuple(ref) for ref in d.motif],
            placements=len(d.placements),
            centroid=(analysis.centroid.x, analysis.centroid.y),
            math_concepts=list(analysis.math_concepts),
            processing_time_ms=round(elapsed_ms, 1),
        )


class StepModel(BaseModel):
    index: int
    segment_refs: list[tuple[int, int]]
    description: str

    @classmethod
    def from_step(cls, step: ConstructionStep) -> StepModel:
        return cls(
            index=step.index,
            segment_refs=[tuple(ref) for ref in ordered_refs(step)],
            description=step.description,
        )


class StepsResponse(BaseModel):
    pattern_id: str
    steps: list[StepModel] = Field(default_factory=list)


class GalleryItem(BaseModel):
    id: str
    name: str
    description: str
    style: PatternStyle
    grid: GridModel
    iterations: int
    seed: int


class GalleryResponse(BaseModel):
    items: list[GalleryItem] = Field(default_factory=list)


class GalleryPatternResponse(BaseModel):
    item: GalleryItem
    pattern: PatternModel
    svg: str
