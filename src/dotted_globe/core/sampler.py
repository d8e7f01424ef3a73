"""Deterministic point lattices: full-sphere Fibonacci and bounding-box grids."""

import math

import numpy as np

from .models import BoundingBox

GOLDEN_AZIMUTH = math.pi * (1 + math.sqrt(5))
# Rotates the lattice seam to the far side of the default camera heading
SEAM_OFFSET_DEG = 270.0


def fibonacci_lattice(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Generate n quasi-uniform points over the sphere.

    Args:
        n: Number of points (must be positive).

    Returns:
        (lons, lats) arrays in degrees; lons in [-180, 180), lats in [-90, 90].
    """
    if n <= 0:
        raise ValueError(f"Sample count must be positive, got {n}")

    k = np.arange(n, dtype=np.float64) + 0.5
    phi = np.arccos(1.0 - 2.0 * k / n)
    theta = GOLDEN_AZIMUTH * k

    x = np.cos(theta) * np.sin(phi)
    y = np.sin(theta) * np.sin(phi)
    z = np.clip(np.cos(phi), -1.0, 1.0)

    lats = 90.0 - np.degrees(np.arccos(z))
    lons = np.mod(np.degrees(np.arctan2(y, x)) + SEAM_OFFSET_DEG, 360.0) - 180.0
    return lons, np.clip(lats, -90.0, 90.0)


def grid_size(area_sr: float, density_factor: float) -> int:
    """Rows (== cols) of a square grid holding about area * density points."""
    estimated = math.floor(area_sr * density_factor)
    if estimated <= 0:
        return 0
    return math.isqrt(estimated)


def bbox_grid(bbox: BoundingBox, rows: int, cols: int | None = None) -> tuple[np.ndarray, np.ndarray]:
    """Cell centers of a rows x cols grid spanning a bounding box.

    Points are ordered south to north, then west to east within a row.
    """
    cols = rows if cols is None else cols
    if rows <= 0 or cols <= 0:
        empty = np.empty(0, dtype=np.float64)
        return empty, empty

    lat_step = bbox.lat_range / rows
    lon_step = bbox.lon_range / cols
    lats = bbox.south + np.arange(rows) * lat_step + lat_step / 2
    lons = bbox.west + np.arange(cols) * lon_step + lon_step / 2

    grid_lats, grid_lons = np.meshgrid(lats, lons, indexing="ij")
    return grid_lons.ravel(), grid_lats.ravel()
