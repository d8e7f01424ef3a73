"""Tests for the base classification pass."""
import logging

import numpy as np
import pytest

from conftest import polygon_feature, square_ring
from dotted_globe.core.pipeline import (
    assemble_points,
    build_classified_set,
    classify_samples,
    detect_borders,
)
from dotted_globe.core.classifier import PointClassifier
from dotted_globe.core.polygon_index import build_polygon_index
from dotted_globe.state import GlobeConfig, Palette


@pytest.fixture
def palette():
    return Palette()


class TestTwoSquares:
    def test_twenty_samples(self, two_squares, palette):
        index = build_polygon_index(two_squares)
        result = build_classified_set(index, GlobeConfig(sample_count=20), palette)

        assert len(result.points) == 20
        assert (result.land_count, result.border_count, result.sea_count) == (4, 0, 16)
        per_country = {}
        classifier = PointClassifier(index)
        for p in result.points:
            if p.kind == "sea":
                assert p.country_id is None
                assert p.color == palette.sea
            else:
                assert classifier.contains(p.country_id, p.lon, p.lat)
                per_country[p.country_id] = per_country.get(p.country_id, 0) + 1
        assert per_country == {"A": 2, "B": 2}

    def test_deterministic(self, two_squares, palette):
        index = build_polygon_index(two_squares)
        config = GlobeConfig(sample_count=500)
        first = build_classified_set(index, config, palette)
        second = build_classified_set(index, config, palette)
        assert [p.to_record() for p in first.points] == [p.to_record() for p in second.points]

    def test_gap_between_squares_is_sea(self, two_squares, palette):
        index = build_polygon_index(two_squares)
        result = build_classified_set(index, GlobeConfig(sample_count=2000), palette)
        gap = [p for p in result.points if 0 < p.lon < 30 and -30 < p.lat < 30]
        assert gap
        assert all(p.kind == "sea" for p in gap)

    def test_land_before_sea(self, two_squares, palette):
        index = build_polygon_index(two_squares)
        result = build_classified_set(index, GlobeConfig(sample_count=1000), palette)
        kinds = [p.kind for p in result.points]
        first_sea = kinds.index("sea")
        assert all(k == "sea" for k in kinds[first_sea:])

    def test_separated_squares_have_no_borders(self, two_squares, palette):
        index = build_polygon_index(two_squares)
        result = build_classified_set(index, GlobeConfig(sample_count=2000), palette)
        assert result.border_count == 0
        assert result.land_count > 0


class TestBorders:
    def test_border_points_have_distinct_neighbor(self, adjacent_squares, palette):
        index = build_polygon_index(adjacent_squares)
        config = GlobeConfig(sample_count=50_000, border_buffer_deg=0.5)
        result = build_classified_set(index, config, palette)
        borders = [p for p in result.points if p.kind == "border"]
        assert borders
        for p in borders:
            assert p.neighbor_id is not None
            assert p.neighbor_id != p.country_id
            assert p.color == palette.border

    def test_detection_disabled(self, adjacent_squares, palette):
        index = build_polygon_index(adjacent_squares)
        config = GlobeConfig(sample_count=50_000, border_buffer_deg=0.5, detect_borders=False)
        result = build_classified_set(index, config, palette)
        assert result.border_count == 0
        assert all(p.neighbor_id is None for p in result.points)

    def test_only_land_is_probed(self, adjacent_squares):
        index = build_polygon_index(adjacent_squares)
        lons = np.array([9.9, 10.1, 30.0])
        lats = np.array([5.0, 5.0, 5.0])
        owners, classifier = classify_samples(index, lons, lats)
        assert owners.tolist() == ["A", "B", None]
        neighbors = detect_borders(classifier, lons, lats, owners, 0.3)
        assert neighbors.tolist() == ["B", "A", None]


class TestOptions:
    def test_sea_omitted(self, two_squares, palette):
        index = build_polygon_index(two_squares)
        result = build_classified_set(index, GlobeConfig(sample_count=500, emit_sea=False), palette)
        assert result.sea_count == 0
        assert all(p.kind != "sea" for p in result.points)
        assert len(result.points) == result.land_count + result.border_count

    def test_empty_index_is_all_sea(self, palette):
        result = build_classified_set(build_polygon_index([]), GlobeConfig(sample_count=100), palette)
        assert result.sea_count == 100
        assert result.land_count == 0

    def test_malformed_country_reported(self, palette, caplog):
        features = [
            polygon_feature("BAD", [[-60, -30], [0, 30]]),
            polygon_feature("GOOD", square_ring(-60, -30, 0, 30)),
        ]
        index = build_polygon_index(features)
        with caplog.at_level(logging.WARNING):
            result = build_classified_set(index, GlobeConfig(sample_count=500), palette)
        assert result.skipped_countries == ["BAD"]
        assert result.land_count > 0
        assert all(p.country_id != "BAD" for p in result.points)

    def test_assemble_counts(self, palette):
        lons = np.array([1.0, 2.0, 3.0])
        lats = np.array([0.0, 0.0, 0.0])
        owners = np.array([None, "A", "A"], dtype=object)
        neighbors = np.array([None, None, "B"], dtype=object)
        result = assemble_points(lons, lats, owners, neighbors, palette)
        assert [p.kind for p in result.points] == ["land", "border", "sea"]
        assert (result.land_count, result.border_count, result.sea_count) == (1, 1, 1)
