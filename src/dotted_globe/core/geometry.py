"""Planar ring geometry in longitude/latitude space.

Rings are numpy arrays of shape (K, 2) holding (lon, lat) pairs in decimal
degrees. Containment is an even-odd ray cast that treats the ring as a flat
polygon, which is accurate enough at country scale.
"""

import math

import numpy as np


class MalformedRingError(ValueError):
    """Raised when a ring cannot be used for a containment test."""


def parse_ring(coords) -> np.ndarray:
    """Convert a GeoJSON ring to a (K, 2) float array.

    Vertices that are not numeric pairs, are non-finite, or fall outside
    [-180, 180] x [-90, 90] are dropped. The result may hold fewer than
    3 vertices; such a ring is kept as-is and rejected at test time.

    Raises:
        MalformedRingError: if coords is not a list of vertices at all.
    """
    if coords is None:
        coords = []
    if not isinstance(coords, (list, tuple)):
        raise MalformedRingError(f"Ring must be a list of positions, got {type(coords).__name__}")
    vertices = []
    for pair in coords:
        try:
            lon = float(pair[0])
            lat = float(pair[1])
        except (TypeError, ValueError, IndexError):
            continue
        if not (math.isfinite(lon) and math.isfinite(lat)):
            continue
        if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
            continue
        vertices.append((lon, lat))
    if not vertices:
        return np.empty((0, 2), dtype=np.float64)
    return np.array(vertices, dtype=np.float64)


def _check_ring(ring: np.ndarray) -> None:
    if not isinstance(ring, np.ndarray) or ring.ndim != 2 or ring.shape[1] != 2:
        raise MalformedRingError("Ring must be an array of (lon, lat) pairs")
    if len(ring) < 3:
        raise MalformedRingError(f"Ring has {len(ring)} vertices, need at least 3")
    if not np.all(np.isfinite(ring)):
        raise MalformedRingError("Ring contains non-finite vertices")


def points_in_ring(ring: np.ndarray, lons, lats):
    """Test if point(s) lie inside a ring using ray casting.

    Args:
        ring: (K, 2) array of lon/lat vertices, closed or open.
        lons: Longitude(s) - scalar or numpy array.
        lats: Latitude(s) - scalar or numpy array, same shape as lons.

    Returns:
        bool or numpy array of bools.

    Raises:
        MalformedRingError: if the ring is degenerate.
    """
    _check_ring(ring)
    lons = np.atleast_1d(np.asarray(lons, dtype=np.float64))
    lats = np.atleast_1d(np.asarray(lats, dtype=np.float64))
    scalar_input = lons.shape == (1,)

    inside = np.zeros(lons.shape, dtype=bool)
    xs = ring[:, 0]
    ys = ring[:, 1]
    xj, yj = xs[-1], ys[-1]

    # Horizontal edges produce 0/0 here but are masked out by `crosses`
    with np.errstate(divide="ignore", invalid="ignore"):
        for xi, yi in zip(xs, ys):
            crosses = (yi > lats) != (yj > lats)
            if crosses.any():
                x_cross = (xj - xi) * (lats - yi) / (yj - yi) + xi
                inside ^= crosses & (lons < x_cross)
            xj, yj = xi, yi

    return bool(inside[0]) if scalar_input else inside


def ring_bounds(ring: np.ndarray) -> tuple[float, float, float, float] | None:
    """Return (west, south, east, north) for a ring, or None if it is empty."""
    if len(ring) == 0:
        return None
    return (
        float(ring[:, 0].min()),
        float(ring[:, 1].min()),
        float(ring[:, 0].max()),
        float(ring[:, 1].max()),
    )


def ring_area(ring: np.ndarray) -> float:
    """Spherical area of a ring on the unit sphere, in steradians.

    Winding order is ignored; the smaller of the two regions the ring
    separates is returned.
    """
    if len(ring) < 3:
        return 0.0
    if np.array_equal(ring[0], ring[-1]):
        ring = ring[:-1]
        if len(ring) < 3:
            return 0.0

    lon = np.radians(ring[:, 0])
    lat = np.radians(ring[:, 1])
    # Sum over (lon[i+1] - lon[i-1]) * sin(lat[i])
    total = np.sum((np.roll(lon, -1) - np.roll(lon, 1)) * np.sin(lat))
    area = abs(float(total)) / 2.0
    full_sphere = 4.0 * math.pi
    return min(area, full_sphere - area)
