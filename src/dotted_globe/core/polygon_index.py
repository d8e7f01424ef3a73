"""Country boundary index built from a GeoJSON feature collection."""

import logging
from typing import Iterator, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .geometry import MalformedRingError, parse_ring, ring_area, ring_bounds
from .models import BoundingBox

logger = logging.getLogger(__name__)

CODE_KEYS = ("ISO_A3", "iso_a3", "ADM0_A3", "adm0_a3", "ISO3")
NAME_KEYS = ("NAME", "name", "ADMIN", "admin")
# Natural Earth uses -99 for "no code assigned"
PLACEHOLDER_CODES = {"-99", ""}
GEOMETRY_TYPES = ("Polygon", "MultiPolygon")


class Country(BaseModel):
    """One country: identity plus the outer ring of each polygon part."""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    id: str = Field(min_length=1)
    name: str = ""
    parts: list[np.ndarray] = Field(min_length=1)

    def largest_part(self) -> np.ndarray:
        """The part with the most vertices (first one on ties)."""
        return max(self.parts, key=len)

    @property
    def vertex_count(self) -> int:
        return sum(len(p) for p in self.parts)


def _properties(feature: dict) -> dict:
    props = feature.get("properties")
    return props if isinstance(props, dict) else {}


def _feature_id(feature: dict) -> Optional[str]:
    fid = feature.get("id")
    if fid is not None and str(fid).strip() not in PLACEHOLDER_CODES:
        return str(fid).strip()
    props = _properties(feature)
    for key in CODE_KEYS + NAME_KEYS:
        value = props.get(key)
        if value is not None and str(value).strip() not in PLACEHOLDER_CODES:
            return str(value).strip()
    return None


def _feature_name(feature: dict, default: str) -> str:
    props = _properties(feature)
    for key in NAME_KEYS:
        if props.get(key):
            return str(props[key])
    return default


def _parse_parts(geometry: dict) -> list[np.ndarray]:
    """Extract outer rings of a Polygon or MultiPolygon; holes are ignored.

    Raises:
        MalformedRingError: if the coordinate nesting is not a list of rings.
    """
    coords = geometry.get("coordinates") or []
    if not isinstance(coords, list):
        raise MalformedRingError("coordinates must be a list")
    polygons = [coords] if geometry["type"] == "Polygon" else coords

    parts = []
    for polygon in polygons:
        if not isinstance(polygon, list):
            raise MalformedRingError(f"polygon must be a list of rings, got {type(polygon).__name__}")
        if not polygon:
            continue
        parts.append(parse_ring(polygon[0]))
    return parts


def _parse_country(feature: dict) -> Optional[Country]:
    if not isinstance(feature, dict):
        logger.warning("Skipping non-object feature: %r", feature)
        return None
    country_id = _feature_id(feature)
    if country_id is None:
        logger.warning("Skipping feature without an id, code or name")
        return None
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict) or geometry.get("type") not in GEOMETRY_TYPES:
        logger.warning("Skipping %s: geometry is not a Polygon or MultiPolygon", country_id)
        return None
    try:
        parts = _parse_parts(geometry)
    except MalformedRingError as exc:
        logger.warning("Skipping %s: malformed coordinates: %s", country_id, exc)
        return None
    if not parts:
        logger.warning("Skipping %s: geometry has no rings", country_id)
        return None
    return Country(id=country_id, name=_feature_name(feature, country_id), parts=parts)


class PolygonIndex:
    """Ordered, read-only collection of countries.

    Iteration order is input order, which decides which country wins when
    polygons overlap. Bounding boxes are computed on first use and cached.
    """

    def __init__(self, countries: list[Country] | None = None):
        self._countries: list[Country] = []
        self._by_id: dict[str, Country] = {}
        self._bbox_cache: dict[str, Optional[BoundingBox]] = {}
        for country in countries or []:
            if country.id in self._by_id:
                logger.warning("Skipping duplicate country id %s", country.id)
                continue
            self._countries.append(country)
            self._by_id[country.id] = country

    def __len__(self) -> int:
        return len(self._countries)

    def __iter__(self) -> Iterator[Country]:
        return iter(self._countries)

    def __contains__(self, country_id: str) -> bool:
        return country_id in self._by_id

    def ids(self) -> list[str]:
        return [c.id for c in self._countries]

    def get(self, country_id: str) -> Optional[Country]:
        return self._by_id.get(country_id)

    def bbox(self, country_id: str) -> Optional[BoundingBox]:
        """Bounding box over all outer rings, or None if no ring has vertices."""
        if country_id not in self._bbox_cache:
            country = self._by_id[country_id]
            bbox = None
            for part in country.parts:
                bounds = ring_bounds(part)
                if bounds is None:
                    continue
                west, south, east, north = bounds
                part_box = BoundingBox(west=west, south=south, east=east, north=north)
                bbox = part_box if bbox is None else bbox.union(part_box)
            self._bbox_cache[country_id] = bbox
        return self._bbox_cache[country_id]

    def area(self, country_id: str) -> float:
        """Spherical area in steradians, summed over outer rings."""
        return sum(ring_area(part) for part in self._by_id[country_id].parts)


def build_polygon_index(data) -> PolygonIndex:
    """Build a PolygonIndex from a FeatureCollection dict or a list of features."""
    if isinstance(data, dict):
        features = data.get("features") or []
    elif isinstance(data, list):
        features = data
    else:
        features = []
    if not isinstance(features, list):
        logger.warning("Ignoring non-list features member: %r", type(features).__name__)
        features = []

    countries = []
    for feature in features:
        country = _parse_country(feature)
        if country is not None:
            countries.append(country)

    index = PolygonIndex(countries)
    logger.info("Built polygon index: %d countries from %d features", len(index), len(features))
    return index
