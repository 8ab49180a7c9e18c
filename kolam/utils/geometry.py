"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def bbox_diagonal(points: NDArray[np.float64]) -> float:
    xmin, ymin, xmax, ymax = bbox(points)
    return math.hypot(xmax - xmin, ymax - ymin)


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Compute centroid of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def arc_length_centroid(polylines: list[NDArray[np.float64]]) -> tuple[float, float]:
    """Centroid of sampled curves weighted by arc length, so that splitting a
    curve into more pieces or sampling it more densely does not move it."""
    mids = []
    weights = []
    for pts in polylines:
        if len(pts) < 2:
            continue
        mids.append((pts[1:] + pts[:-1]) / 2)
        steps = pts[1:] - pts[:-1]
        weights.append(np.hypot(steps[:, 0], steps[:, 1]))
    if not mids:
        return centroid(np.vstack(polylines)) if polylines else (0.0, 0.0)
    mid = np.vstack(mids)
    w = np.concatenate(weights)
    total = float(np.sum(w))
    if total <= 0.0:
        return centroid(mid)
    return (float(np.dot(w, mid[:, 0]) / total), float(np.dot(w, mid[:, 1]) / total))


def pca_orientation(points: NDArray[np.float64]) -> float:
    """Major axis angle from PCA (degrees, 0-180)."""
    if len(points) < 3:
        return 0.0
    centered = points - np.mean(points, axis=0)
    cov = np.cov(centered.T)
    eigenvalues, eigenvectors = np.linalg.eigh(cov)
    major_axis = eigenvectors[:, np.argmax(eigenvalues)]
    angle = float(np.arctan2(major_axis[1], major_axis[0]) * 180 / np.pi)
    return angle % 180


def rotate_points(
    points: NDArray[np.float64], degrees: float, center: tuple[float, float]
) -> NDArray[np.float64]:
    """Rotate about ``center``. Positive angles turn +x toward +y."""
    theta = math.radians(degrees)
    c, s = math.cos(theta), math.sin(theta)
    rot = np.array([[c, -s], [s, c]])
    origin = np.asarray(center, dtype=np.float64)
    return (points - origin) @ rot.T + origin


def reflect_points(
    points: NDArray[np.float64], axis_degrees: float, center: tuple[float, float]
) -> NDArray[np.float64]:
    """Mirror across the line through ``center`` at ``axis_degrees``."""
    two_theta = math.radians(2 * axis_degrees)
    c, s = math.cos(two_theta), math.sin(two_theta)
    ref = np.array([[c, s], [s, -c]])
    origin = np.asarray(center, dtype=np.float64)
    return (points - origin) @ ref.T + origin


def translate_points(points: NDArray[np.float64], dx: float, dy: float) -> NDArray[np.float64]:
    return points + np.array([dx, dy])


def scale_points(
    points: NDArray[np.float64], factor: float, center: tuple[float, float]
) -> NDArray[np.float64]:
    origin = np.asarray(center, dtype=np.float64)
    return (points - origin) * factor + origin


def max_nearest_distance(
    query: NDArray[np.float64], tree: cKDTree, upper_bound: float = np.inf
) -> float:
    """Largest distance from a query point to its nearest tree point.

    Queries beyond ``upper_bound`` report ``inf``.
    """
    if len(query) == 0:
        return 0.0
    dists, _ = tree.query(query, distance_upper_bound=upper_bound)
    return float(np.max(dists))


def sets_coincide(
    pts_a: NDArray[np.float64],
    pts_b: NDArray[np.float64],
    tol: float,
    tree_a: cKDTree | None = None,
    tree_b: cKDTree | None = None,
) -> bool:
    """Symmetric nearest-point (Hausdorff) test: every point of each set
    lies within ``tol`` of the other set."""
    if len(pts_a) == 0 or len(pts_b) == 0:
        return len(pts_a) == len(pts_b)
    tree_a = tree_a if tree_a is not None else cKDTree(pts_a)
    tree_b = tree_b if tree_b is not None else cKDTree(pts_b)
    bound = tol * 2
    return (
        max_nearest_distance(pts_a, tree_b, bound) <= tol
        and max_nearest_distance(pts_b, tree_a, bound) <= tol
    )


def rms_radius(points: NDArray[np.float64], center: tuple[float, float]) -> float:
    """Root-mean-square distance of the points from ``center``."""
    if len(points) == 0:
        return 0.0
    d = points - np.asarray(center, dtype=np.float64)
    return float(np.sqrt(np.mean(np.sum(d**2, axis=1))))
