"""Session state for the dotted-globe MCP server.

Holds all data for the current globe: the country index, engine
configuration, point palette, the classified point set, the current
selection and the memoized country views.
"""

import asyncio
import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator, ConfigDict

from dotted_globe.core.centroid import CentroidEstimator
from dotted_globe.core.polygon_index import PolygonIndex
from dotted_globe.models import SamplePoint

DEFAULT_BOUNDARIES_URL = (
    "https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson"
)


class GlobeConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    sample_count: int = Field(default=12000, gt=0, le=200_000)
    border_buffer_deg: float = Field(default=0.3, gt=0, le=10)
    density_factor: float = Field(default=50_000.0, gt=0)
    emit_sea: bool = True
    detect_borders: bool = True
    densify_selection: bool = True


class Palette(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    land: str = "#D927C2"
    border: str = "#E0E0FF"
    sea: str = "#60A5FA"
    selected: str = "#00FF00"

    @field_validator("land", "border", "sea", "selected", mode="before")
    @classmethod
    def validate_and_normalize_hex(cls, v: str) -> str:
        if not isinstance(v, str):
            raise ValueError("Color must be a string")
        v = v.strip()
        if not re.match(r'^#[0-9A-Fa-f]{6}$', v):
            raise ValueError(f"Invalid hex color '{v}'. Must be #RRGGBB format.")
        return f"#{v[1:].upper()}"

    def as_dict(self) -> dict[str, str]:
        return {
            "land": self.land,
            "border": self.border,
            "sea": self.sea,
            "selected": self.selected,
        }


class Selection(BaseModel):
    selected_id: Optional[str] = None
    previous_id: Optional[str] = None


class SessionState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: PolygonIndex = Field(default_factory=PolygonIndex)
    source: Optional[str] = None
    config: GlobeConfig = Field(default_factory=GlobeConfig)
    palette: Palette = Field(default_factory=Palette)
    points: list[SamplePoint] = []
    points_generated: bool = False
    selection: Selection = Field(default_factory=Selection)
    views: CentroidEstimator = Field(default_factory=CentroidEstimator)
    dataset_version: int = 0
    selection_epoch: int = 0
    load_task: Optional[asyncio.Task] = None

    @property
    def boundaries_loaded(self) -> bool:
        return len(self.index) > 0

    def set_dataset(self, index: PolygonIndex, source: Optional[str]) -> None:
        """Install a new country index and clear everything derived from the old one."""
        self.index = index
        self.source = source
        self.dataset_version += 1
        self.selection_epoch += 1
        self.points = []
        self.points_generated = False
        self.selection = Selection()
        self.views = CentroidEstimator()

    def next_selection_epoch(self) -> int:
        self.selection_epoch += 1
        return self.selection_epoch

    def summary(self) -> dict:
        counts = {"land": 0, "border": 0, "sea": 0}
        for p in self.points:
            counts[p.kind] += 1
        return {
            "boundaries": {
                "loaded": self.boundaries_loaded,
                "source": self.source,
                "countries": len(self.index),
                "dataset_version": self.dataset_version,
            },
            "points": {
                "generated": self.points_generated,
                "total": len(self.points),
                **counts,
            },
            "selection": {
                "selected": self.selection.selected_id,
                "previous": self.selection.previous_id,
            },
            "config": self.config.model_dump(),
            "palette": self.palette.as_dict(),
            "cached_views": len(self.views),
        }


# Global session state: one per MCP server process
state = SessionState()
