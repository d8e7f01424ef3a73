"""Selection-driven re-densification of one country's points."""

import logging
from typing import Optional

from ..models import SamplePoint
from ..state import Palette
from .classifier import PointClassifier
from .models import SelectionResult
from .polygon_index import PolygonIndex
from .presentation import make_point, restyle
from .sampler import bbox_grid, grid_size

logger = logging.getLogger(__name__)

DEFAULT_DENSITY_FACTOR = 50_000.0


class SelectionDensifier:
    """Applies a selection change to a classified point set.

    The previous country's points are restored to default styling; the
    newly selected country's points are replaced by an area-proportional
    grid clipped to its polygon and drawn highlighted. Points of every
    other country are passed through untouched.
    """

    def __init__(
        self,
        index: PolygonIndex,
        classifier: Optional[PointClassifier] = None,
        density_factor: float = DEFAULT_DENSITY_FACTOR,
        densify: bool = True,
    ):
        if density_factor <= 0:
            raise ValueError(f"Density factor must be positive, got {density_factor}")
        self.index = index
        self.classifier = classifier or PointClassifier(index)
        self.density_factor = density_factor
        self.densify = densify

    def grid_rows(self, country_id: str) -> int:
        """Rows (== cols) of the densification grid for a country."""
        return grid_size(self.index.area(country_id), self.density_factor)

    def dense_points(self, country_id: str, palette: Palette) -> tuple[int, list[SamplePoint]]:
        """Grid points inside the country, highlighted.

        Returns:
            (rows, points) where rows is the grid size used.
        """
        country = self.index.get(country_id)
        bbox = self.index.bbox(country_id)
        if country is None or bbox is None:
            return 0, []

        rows = self.grid_rows(country_id)
        lons, lats = bbox_grid(bbox, rows)
        if lons.size == 0:
            return rows, []

        inside = self.classifier.contains_many(country, lons, lats)
        points = [
            make_point(lon, lat, "land", palette, country_id=country_id, selected=True)
            for lon, lat in zip(lons[inside].tolist(), lats[inside].tolist())
        ]
        return rows, points

    def apply(
        self,
        points: list[SamplePoint],
        new_id: Optional[str],
        previous_id: Optional[str],
        palette: Palette,
    ) -> SelectionResult:
        """Compute the point set after selecting new_id (None to clear).

        Raises:
            ValueError: if new_id is not in the index.
        """
        if new_id is not None and new_id not in self.index:
            raise ValueError(f"Unknown country id '{new_id}'")

        updated = [
            restyle(p, False, palette) if previous_id is not None and p.country_id == previous_id else p
            for p in points
        ]
        if new_id is None:
            return SelectionResult(points=updated, selected_id=None, restored_id=previous_id)

        others = [p for p in updated if p.country_id != new_id]
        own = [p for p in updated if p.country_id == new_id]

        rows, added = (0, [])
        if self.densify:
            rows, added = self.dense_points(new_id, palette)
        if not added:
            # Empty grid or densify off: highlight the base points, never drop the country
            added = [restyle(p, True, palette) for p in own]

        logger.debug(
            "Selected %s: %d grid rows, %d points (replacing %d)",
            new_id, rows, len(added), len(own),
        )
        return SelectionResult(
            points=others + added,
            selected_id=new_id,
            restored_id=previous_id,
            grid_rows=rows,
            added_count=len(added),
        )
