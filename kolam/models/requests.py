"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from kolam.engine.pattern import PatternStyle
from kolam.models.pattern import GridModel, PatternModel
from kolam.svg.serializer import ExportOptions


class GenerateRequest(BaseModel):
    style: PatternStyle
    grid: GridModel
    iterations: int = Field(default=1, description="Style-specific size: walk length, loop depth, motif count or layers")
    seed: int = Field(default=0, description="Seed for every random choice")
    include_svg: bool = Field(default=False, description="Also return the exported SVG")


class AnalyzeRequest(BaseModel):
    pattern: PatternModel | None = Field(default=None, description="Pattern geometry")
    svg: str | None = Field(default=None, description="Raw SVG code, used when no pattern is given")
    grid: GridModel | None = Field(default=None, description="Grid override for SVG input")
    style: PatternStyle | None = Field(default=None, description="Style override for SVG input")

    @model_validator(mode="after")
    def _one_source(self) -> AnalyzeRequest:
        if (self.pattern is None) == (self.svg is None):
            raise ValueError("Provide exactly one of 'pattern' or 'svg'")
        return self


class SequenceRequest(BaseModel):
    pattern: PatternModel


class ExportOptionsModel(BaseModel):
    palette: str = "neon-purple"
    stroke_width: float = Field(default=2.0, gt=0)
    show_dots: bool = False
    dot_radius: float = Field(default=1.5, gt=0)
    background: str | None = None
    title: str = ""

    def to_options(self) -> ExportOptions:
        return ExportOptions(**self.model_dump())


class ExportRequest(BaseModel):
    pattern: PatternModel
    step_prefix: int | None = Field(default=None, description="Render only the first N construction steps")
    options: ExportOptionsModel = Field(default_factory=ExportOptionsModel)
