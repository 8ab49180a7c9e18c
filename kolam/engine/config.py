"""Engine configuration — tolerances, sampling and generator constants."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Controls sampling resolution and coincidence tolerance."""

    # Bezier sampling
    samples_per_segment: int = 32
    max_samples_per_segment: int = 512
    adaptive_sampling: bool = True

    # Symmetry coincidence: fraction of the pattern's bounding-box diagonal
    symmetry_tolerance: float = 0.01
    min_tolerance: float = 1e-6

    # Candidate sets
    rotation_orders: tuple[int, ...] = (2, 3, 4, 6, 8)
    base_reflection_axes: tuple[float, ...] = (0.0, 45.0, 90.0, 135.0)

    # Translational repeat: overlap region must hold this share of samples
    min_translation_overlap: float = 0.25
    max_translation_candidates: int = 48

    # Decomposition
    max_scale_candidates: int = 8

    # Evaluate rotation/reflection candidates in a thread pool
    parallel_candidates: bool = False
    max_workers: int = 4

    # Generator
    padi_scale_factor: float = 1.3

    # Sequencer: segments per step when splitting a continuous stroke
    segments_per_step: int = 4
