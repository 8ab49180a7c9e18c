"""Kolam pattern engine: generation, symmetry analysis, step sequencing and export."""

from kolam.engine.analyzer import analyze
from kolam.engine.config import EngineConfig
from kolam.engine.generator import GenerateParams, generate, make_params
from kolam.engine.grid import GridSpec, dot_at, make_grid
from kolam.engine.pattern import Analysis, ConstructionStep, Pattern, PatternStyle, SymmetryReport
from kolam.engine.sequencer import sequence
from kolam.errors import (
    AnalysisInconclusive,
    DiscontinuityError,
    GenerationError,
    InvalidDimension,
    KolamError,
    LayerOverflow,
    NonEulerianConstruction,
    OutOfRange,
)


def export(pattern, step_prefix=None, options=None):
    """SVG text for a pattern, or for its first ``step_prefix`` construction steps."""
    from kolam.svg.serializer import export_svg

    return export_svg(pattern, step_prefix=step_prefix, options=options)


__all__ = [
    "analyze",
    "export",
    "generate",
    "sequence",
    "make_params",
    "make_grid",
    "dot_at",
    "Analysis",
    "ConstructionStep",
    "EngineConfig",
    "GenerateParams",
    "GridSpec",
    "Pattern",
    "PatternStyle",
    "SymmetryReport",
    "KolamError",
    "InvalidDimension",
    "OutOfRange",
    "DiscontinuityError",
    "GenerationError",
    "NonEulerianConstruction",
    "LayerOverflow",
    "AnalysisInconclusive",
]
