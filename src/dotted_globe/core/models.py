"""Pydantic return models for core computation functions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dotted_globe.models import SamplePoint


class BoundingBox(BaseModel):
    """Lon/lat bounding box of a country's outer rings."""
    model_config = ConfigDict(frozen=True)

    west: float = Field(ge=-180, le=180)
    south: float = Field(ge=-90, le=90)
    east: float = Field(ge=-180, le=180)
    north: float = Field(ge=-90, le=90)

    @model_validator(mode="after")
    def check_ordering(self) -> "BoundingBox":
        if self.north < self.south:
            raise ValueError(f"north ({self.north}) must not be below south ({self.south})")
        if self.east < self.west:
            raise ValueError(f"east ({self.east}) must not be west of west ({self.west})")
        return self

    @property
    def lat_range(self) -> float:
        return self.north - self.south

    @property
    def lon_range(self) -> float:
        return self.east - self.west

    @property
    def center_lat(self) -> float:
        return (self.north + self.south) / 2

    @property
    def center_lon(self) -> float:
        return (self.east + self.west) / 2

    def contains(self, lon, lat):
        """Inclusive containment; works on scalars or numpy arrays."""
        return (lon >= self.west) & (lon <= self.east) & (lat >= self.south) & (lat <= self.north)

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            west=min(self.west, other.west),
            south=min(self.south, other.south),
            east=max(self.east, other.east),
            north=max(self.north, other.north),
        )


class CountryView(BaseModel):
    """Approximate centroid and recommended camera altitude for a country."""
    model_config = ConfigDict(frozen=True)

    country_id: str
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    distance: float = Field(ge=0.5, le=1.8)
    sampled_count: int = Field(gt=0)


class PointStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: float = Field(gt=0)
    altitude: float = Field(ge=0)
    color: str


class ClassificationResult(BaseModel):
    """Return type for build_classified_set."""
    points: list[SamplePoint] = []
    land_count: int = 0
    border_count: int = 0
    sea_count: int = 0
    skipped_countries: list[str] = []


class SelectionResult(BaseModel):
    """Return type for SelectionDensifier.apply."""
    points: list[SamplePoint] = []
    selected_id: Optional[str] = None
    restored_id: Optional[str] = None
    grid_rows: int = 0
    added_count: int = 0
