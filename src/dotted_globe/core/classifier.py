"""Point classification against the country index.

PointClassifier assigns each coordinate to the first country whose polygon
contains it (or to none, i.e. sea). BorderDetector probes a 3x3
neighborhood around land points to find an adjacent, different country.
"""

import logging
from typing import Optional

import numpy as np

from .geometry import points_in_ring
from .polygon_index import Country, PolygonIndex

logger = logging.getLogger(__name__)


class PointClassifier:
    """First-match point-in-polygon classifier.

    Countries are scanned in index order; the first one containing a point
    owns it. A country whose containment test raises is treated as not
    containing the point and the scan continues.
    """

    def __init__(self, index: PolygonIndex):
        self.index = index
        self.failed: set[str] = set()

    def _test(self, country: Country, lons: np.ndarray, lats: np.ndarray) -> np.ndarray:
        inside = np.zeros(lons.shape, dtype=bool)
        bbox = self.index.bbox(country.id)
        if bbox is None:
            return inside
        candidates = np.flatnonzero(bbox.contains(lons, lats))
        if candidates.size == 0:
            return inside
        sub_lons = lons[candidates]
        sub_lats = lats[candidates]
        hits = np.zeros(candidates.shape, dtype=bool)
        for part in country.parts:
            hits |= points_in_ring(part, sub_lons, sub_lats)
        inside[candidates] = hits
        return inside

    def contains_many(self, country: Country, lons: np.ndarray, lats: np.ndarray) -> np.ndarray:
        """Containment mask for one country; a failing test yields all False."""
        try:
            return self._test(country, lons, lats)
        except (ValueError, FloatingPointError) as exc:
            if country.id not in self.failed:
                logger.warning("Containment test failed for %s, treating as empty: %s", country.id, exc)
                self.failed.add(country.id)
            return np.zeros(lons.shape, dtype=bool)

    def contains(self, country_id: str, lon: float, lat: float) -> bool:
        """Direct containment test of one coordinate against one country."""
        country = self.index.get(country_id)
        if country is None:
            return False
        mask = self.contains_many(country, np.array([lon], dtype=np.float64),
                                  np.array([lat], dtype=np.float64))
        return bool(mask[0])

    def classify_many(self, lons, lats) -> np.ndarray:
        """Owning country id for each coordinate (None for sea).

        Returns:
            Object array of country ids / None, same length as lons.
        """
        lons = np.asarray(lons, dtype=np.float64)
        lats = np.asarray(lats, dtype=np.float64)
        owners = np.full(lons.shape, None, dtype=object)
        unassigned = np.ones(lons.shape, dtype=bool)

        for country in self.index:
            if not unassigned.any():
                break
            pending = np.flatnonzero(unassigned)
            hits = self.contains_many(country, lons[pending], lats[pending])
            matched = pending[hits]
            owners[matched] = country.id
            unassigned[matched] = False
        return owners

    def classify(self, lon: float, lat: float) -> Optional[str]:
        """Owning country id for one coordinate, or None for sea."""
        return self.classify_many([lon], [lat])[0]


class BorderDetector:
    """Flags land points that sit within a buffer of another country."""

    def __init__(self, classifier: PointClassifier, buffer_deg: float = 0.3):
        if buffer_deg <= 0:
            raise ValueError(f"Border buffer must be positive, got {buffer_deg}")
        self.classifier = classifier
        self.buffer_deg = buffer_deg

    @property
    def offsets(self) -> list[tuple[float, float]]:
        """The 8 neighbor offsets, dx outer and dy inner."""
        b = self.buffer_deg
        steps = (-b, 0.0, b)
        return [(dx, dy) for dx in steps for dy in steps if not (dx == 0.0 and dy == 0.0)]

    def detect_many(self, lons, lats, owners) -> np.ndarray:
        """Neighboring country id for each land point (None if not a border).

        Args:
            lons, lats: Coordinates of land points.
            owners: Owning country id of each point.
        """
        lons = np.asarray(lons, dtype=np.float64)
        lats = np.asarray(lats, dtype=np.float64)
        owners = np.asarray(owners, dtype=object)
        neighbors = np.full(lons.shape, None, dtype=object)
        resolved = np.zeros(lons.shape, dtype=bool)

        for dx, dy in self.offsets:
            if resolved.all():
                break
            probe_lons = lons + dx
            probe_lats = lats + dy
            pending = ~resolved
            for country in self.classifier.index:
                candidates = np.flatnonzero(pending & (owners != country.id))
                if candidates.size == 0:
                    continue
                hits = self.classifier.contains_many(
                    country, probe_lons[candidates], probe_lats[candidates],
                )
                found = candidates[hits]
                neighbors[found] = country.id
                pending[found] = False
                resolved[found] = True
        return neighbors

    def detect(self, lon: float, lat: float, country_id: str) -> Optional[str]:
        """Neighboring country id for one land point, or None."""
        return self.detect_many([lon], [lat], [country_id])[0]
