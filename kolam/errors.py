"""Engine error taxonomy.

Every error is terminal for the call that raised it. The engine is
deterministic, so retrying with the same input cannot change the outcome.
"""

from __future__ import annotations


class KolamError(Exception):
    """Base class for all engine errors."""

    code = "kolam_error"


class InvalidDimension(KolamError):
    code = "invalid_dimension"


class OutOfRange(KolamError):
    code = "out_of_range"


class DiscontinuityError(KolamError):
    code = "discontinuity"


class AlreadyClosed(KolamError):
    code = "already_closed"


class EmptyPath(KolamError):
    code = "empty_path"


class GenerationError(KolamError):
    """Raised by a style generator when parameters cannot be honoured."""

    code = "generation_error"


class NonEulerianConstruction(GenerationError):
    code = "non_eulerian_construction"


class LayerOverflow(GenerationError):
    code = "layer_overflow"


class AnalysisError(KolamError):
    code = "analysis_error"


class AnalysisInconclusive(AnalysisError):
    code = "analysis_inconclusive"


class SequenceIntegrityError(KolamError):
    """Step sequence does not cover the pattern's segments exactly once."""

    code = "sequence_integrity"


class SvgParseError(KolamError):
    code = "svg_parse_error"
