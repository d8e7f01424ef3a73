"""Approximate country centroid and recommended view distance."""

import math
from typing import Optional

import numpy as np

from .models import CountryView
from .polygon_index import Country

MAX_SAMPLED_VERTICES = 100
MIN_DISTANCE = 0.5
MAX_DISTANCE = 1.8


class CentroidEstimator:
    """Stride-sampled vertex mean of a country's largest ring, memoized by id.

    The mean is not area-weighted; it is a cheap display center. Results
    are stored here, keyed by country id, and never recomputed.
    """

    def __init__(self):
        self._views: dict[str, CountryView] = {}

    def __len__(self) -> int:
        return len(self._views)

    def __contains__(self, country_id: str) -> bool:
        return country_id in self._views

    def estimate(self, country: Country) -> Optional[CountryView]:
        cached = self._views.get(country.id)
        if cached is not None:
            return cached

        ring = country.largest_part()
        if len(ring) == 0:
            return None

        stride = max(1, len(ring) // MAX_SAMPLED_VERTICES)
        sampled = ring[::stride]
        count = len(sampled)
        lon = float(np.clip(sampled[:, 0].mean(), sampled[:, 0].min(), sampled[:, 0].max()))
        lat = float(np.clip(sampled[:, 1].mean(), sampled[:, 1].min(), sampled[:, 1].max()))

        size = math.sqrt(count) / 20
        distance = max(MIN_DISTANCE, min(MAX_DISTANCE, 2.5 / size))

        view = CountryView(
            country_id=country.id, lat=lat, lon=lon,
            distance=distance, sampled_count=count,
        )
        self._views[country.id] = view
        return view
