"""Base classification pass: sample the sphere, classify, detect borders."""

import logging

import numpy as np

from ..models import SamplePoint
from ..state import GlobeConfig, Palette
from .classifier import BorderDetector, PointClassifier
from .models import ClassificationResult
from .polygon_index import PolygonIndex
from .presentation import make_point
from .sampler import fibonacci_lattice

logger = logging.getLogger(__name__)


def classify_samples(
    index: PolygonIndex, lons: np.ndarray, lats: np.ndarray,
) -> tuple[np.ndarray, PointClassifier]:
    """Owner id (or None) for each sample."""
    classifier = PointClassifier(index)
    return classifier.classify_many(lons, lats), classifier


def detect_borders(
    classifier: PointClassifier, lons: np.ndarray, lats: np.ndarray,
    owners: np.ndarray, buffer_deg: float,
) -> np.ndarray:
    """Neighbor id (or None) for each sample; only land samples are probed."""
    neighbors = np.full(owners.shape, None, dtype=object)
    land = np.flatnonzero(np.array([o is not None for o in owners], dtype=bool))
    if land.size:
        detector = BorderDetector(classifier, buffer_deg=buffer_deg)
        neighbors[land] = detector.detect_many(lons[land], lats[land], owners[land])
    return neighbors


def assemble_points(
    lons: np.ndarray, lats: np.ndarray, owners: np.ndarray, neighbors: np.ndarray,
    palette: Palette, emit_sea: bool = True,
) -> ClassificationResult:
    """Build the ordered point set: land and border points first, then sea."""
    country_points: list[SamplePoint] = []
    sea_points: list[SamplePoint] = []
    border_count = 0

    for lon, lat, owner, neighbor in zip(lons.tolist(), lats.tolist(), owners, neighbors):
        if owner is None:
            if emit_sea:
                sea_points.append(make_point(lon, lat, "sea", palette))
        elif neighbor is not None:
            country_points.append(make_point(lon, lat, "border", palette, owner, neighbor))
            border_count += 1
        else:
            country_points.append(make_point(lon, lat, "land", palette, owner))

    return ClassificationResult(
        points=country_points + sea_points,
        land_count=len(country_points) - border_count,
        border_count=border_count,
        sea_count=len(sea_points),
    )


def build_classified_set(
    index: PolygonIndex, config: GlobeConfig, palette: Palette,
) -> ClassificationResult:
    """Run the full base pass for the current configuration.

    An empty index yields only sea points (or nothing when sea is not emitted).
    """
    lons, lats = fibonacci_lattice(config.sample_count)
    owners, classifier = classify_samples(index, lons, lats)
    if config.detect_borders:
        neighbors = detect_borders(classifier, lons, lats, owners, config.border_buffer_deg)
    else:
        neighbors = np.full(owners.shape, None, dtype=object)

    result = assemble_points(lons, lats, owners, neighbors, palette, emit_sea=config.emit_sea)
    result.skipped_countries = sorted(classifier.failed)
    logger.info(
        "Classified %d samples: %d land, %d border, %d sea",
        config.sample_count, result.land_count, result.border_count, result.sea_count,
    )
    return result
