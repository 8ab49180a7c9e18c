"""Math helpers — angle snapping and normalisation. No engine imports."""

from __future__ import annotations

CLEAN_ANGLES = [0.0, 15.0, 22.5, 30.0, 45.0, 60.0, 67.5, 90.0, 112.5, 120.0, 135.0, 150.0, 157.5, 180.0]

# Axis angles are reported at this many decimals so repeated runs compare equal.
ANGLE_DECIMALS = 6


def snap_angle(degrees: float, tolerance: float = 1.0) -> float:
    """Snap an angle to the nearest clean angle if within tolerance."""
    for clean in CLEAN_ANGLES:
        if abs(degrees - clean) <= tolerance:
            return clean
    return degrees


def normalize_axis(degrees: float) -> float:
    """Map a line direction to [0, 180). 180 and 0 are the same axis."""
    value = round(degrees % 180.0, ANGLE_DECIMALS)
    if value >= 180.0:
        value = 0.0
    return value + 0.0


def axis_distance(a: float, b: float) -> float:
    """Angular distance between two axes, accounting for the 180° wrap."""
    d = abs(a - b) % 180.0
    return min(d, 180.0 - d)


def unique_axes(angles: list[float], merge_tol: float = 1e-4) -> list[float]:
    """Normalise and de-duplicate axis angles, keeping the first of any
    near-equal group. Order of first appearance is preserved."""
    kept: list[float] = []
    for a in angles:
        norm = normalize_axis(a)
        if all(axis_distance(norm, k) > merge_tol for k in kept):
            kept.append(norm)
    return kept


def relative_close(a: float, b: float, rel: float = 1e-3) -> bool:
    return abs(a - b) <= rel * max(abs(a), abs(b))
