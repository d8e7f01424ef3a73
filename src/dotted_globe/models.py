"""Pydantic domain models for sample points and city features."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

PointKind = Literal["land", "sea", "border"]


class Coordinate(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class SamplePoint(BaseModel):
    """One classified point on the globe.

    Points are replaced, never mutated: restyling or densification builds
    new instances with ``model_copy(update=...)`` or the constructor.
    """
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    kind: PointKind
    country_id: Optional[str] = None
    neighbor_id: Optional[str] = None
    size: float = Field(default=0.2, gt=0)
    altitude: float = Field(default=0.001, ge=0)
    color: str = "#D927C2"

    @model_validator(mode="after")
    def check_ownership(self) -> "SamplePoint":
        if self.kind == "sea":
            if self.country_id is not None:
                raise ValueError("Sea points cannot have an owning country")
        elif self.country_id is None:
            raise ValueError(f"{self.kind} points must have an owning country")
        if self.kind == "border":
            if self.neighbor_id is None:
                raise ValueError("Border points must record a neighboring country")
            if self.neighbor_id == self.country_id:
                raise ValueError(
                    f"Neighbor ({self.neighbor_id}) must differ from owner ({self.country_id})"
                )
        elif self.neighbor_id is not None:
            raise ValueError("Only border points may have a neighboring country")
        return self

    def to_record(self) -> dict:
        """Flat record in the shape the globe renderer consumes."""
        record = {
            "lat": self.lat,
            "lng": self.lon,
            "size": self.size,
            "altitude": self.altitude,
            "color": self.color,
        }
        if self.country_id is not None:
            record["countryId"] = self.country_id
        if self.neighbor_id is not None:
            record["neighborCountryId"] = self.neighbor_id
        return record


class CityProperties(BaseModel):
    name: str
    country: str
    population: Optional[int] = None


class CityFeature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: dict
    properties: CityProperties

    @classmethod
    def from_row(cls, name: str, country: str, lat: float, lon: float,
                 population: Optional[int] = None) -> "CityFeature":
        point = Coordinate(lat=lat, lon=lon)
        return cls(
            geometry={"type": "Point", "coordinates": [point.lon, point.lat]},
            properties=CityProperties(name=name, country=country, population=population),
        )
