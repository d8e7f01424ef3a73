"""Tests for the city CSV to GeoJSON conversion."""
import json

import pytest

from dotted_globe.core.cities import convert_cities, write_city_collection

CSV = """city,city_ascii,country,lat,lng,population
New York,New York,United States,40.6943,-73.9249,18713220
Toronto,Toronto,Canada,43.6532,-79.3832,5429524
Los Angeles,Los Angeles,United States,34.1139,-118.4068,12750807
Nowhere,Nowhere,United States,abc,-100.0,10
Tiny Town,Tiny Town,United States,35.0,-90.0,
Off Planet,Off Planet,United States,95.0,10.0,5
"""


@pytest.fixture
def cities_csv(tmp_path):
    path = tmp_path / "worldcities.csv"
    path.write_text(CSV)
    return path


def test_filters_by_country(cities_csv):
    features = convert_cities(str(cities_csv))
    names = [f.properties.name for f in features]
    assert names == ["New York", "Los Angeles", "Tiny Town"]
    assert all(f.properties.country == "United States" for f in features)


def test_other_country(cities_csv):
    features = convert_cities(str(cities_csv), country="Canada")
    assert len(features) == 1
    assert features[0].geometry == {"type": "Point", "coordinates": [-79.3832, 43.6532]}
    assert features[0].properties.population == 5429524


def test_missing_population_is_none(cities_csv):
    features = convert_cities(str(cities_csv))
    tiny = next(f for f in features if f.properties.name == "Tiny Town")
    assert tiny.properties.population is None


def test_missing_columns_raise(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("name,lat,lon\nX,1,2\n")
    with pytest.raises(ValueError, match="Missing columns"):
        convert_cities(str(path))


def test_no_matches_is_empty(cities_csv):
    assert convert_cities(str(cities_csv), country="Atlantis") == []


def test_write_collection(cities_csv, tmp_path):
    features = convert_cities(str(cities_csv))
    out = write_city_collection(features, str(tmp_path / "out" / "cities.json"))
    data = json.loads(out.read_text())
    assert data["type"] == "FeatureCollection"
    assert len(data["features"]) == 3
    first = data["features"][0]
    assert first["type"] == "Feature"
    assert first["geometry"]["coordinates"] == [-73.9249, 40.6943]
    assert first["properties"] == {
        "name": "New York", "country": "United States", "population": 18713220,
    }
