"""City CSV to GeoJSON point-feature conversion.

Standalone batch utility: shares no state with the globe engine.
"""

import json
import logging
import math
from pathlib import Path

import pandas as pd

from dotted_globe.models import CityFeature

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("city", "country", "lat", "lng", "population")


def convert_cities(csv_path: str, country: str = "United States") -> list[CityFeature]:
    """Read a city table and keep rows of one country with numeric coordinates.

    Args:
        csv_path: Delimited file with at least city, country, lat, lng, population.
        country: Exact country name to keep.

    Raises:
        ValueError: if required columns are missing.
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in {csv_path}: {', '.join(missing)}")

    df["lat"] = pd.to_numeric(df["lat"], errors="coerce")
    df["lng"] = pd.to_numeric(df["lng"], errors="coerce")
    df["population"] = pd.to_numeric(df["population"], errors="coerce")

    mask = (
        (df["country"] == country)
        & df["lat"].between(-90, 90)
        & df["lng"].between(-180, 180)
    )
    filtered = df.loc[mask]
    logger.info("Kept %d of %d city rows for %s", len(filtered), len(df), country)

    features = []
    for row in filtered.itertuples(index=False):
        pop = row.population
        population = int(pop) if not pd.isna(pop) and math.isfinite(pop) else None
        features.append(CityFeature.from_row(
            name=row.city, country=row.country,
            lat=float(row.lat), lon=float(row.lng),
            population=population,
        ))
    return features


def write_city_collection(features: list[CityFeature], output_path: str) -> Path:
    """Write features as a GeoJSON FeatureCollection."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "type": "FeatureCollection",
        "features": [f.model_dump() for f in features],
    }
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path
