"""Tests for shared value models."""

from __future__ import annotations

import math

import pytest

from placekit.shared.errors import FormatError
from placekit.shared.models import BatchItemResult, BatchSummary, GeoPoint


class TestGeoPoint:
    def test_unpacks_as_lat_lng(self):
        lat, lng = GeoPoint(37.7371, -122.44283)

        assert (lat, lng) == (37.7371, -122.44283)
        assert GeoPoint(1, 2).to_geojson_tuple() == (2.0, 1.0)

    @pytest.mark.parametrize(
        ("lat", "lng"),
        [(90.5, 0), (-91, 0), (0, 180.1), (math.nan, 0), (0, math.inf)],
    )
    def test_out_of_range(self, lat, lng):
        with pytest.raises(FormatError):
            GeoPoint(lat, lng)

    def test_bounds_are_inclusive(self):
        assert GeoPoint(-90, 180).to_tuple() == (-90.0, 180.0)


class TestBatchSummary:
    def test_add_results(self):
        summary = BatchSummary(total=3)
        summary.add(BatchItemResult.ok(1, "@5vg-7gq-tvz"))
        summary.add(BatchItemResult.ok(2, None))
        summary.add(BatchItemResult.failed(3, {"id": 3}, KeyError("latitude")))

        assert summary.processed == 3
        assert summary.successful == 1
        assert summary.error_count == 1
        assert summary.to_dict()["errors"] == [{"item": {"id": 3}, "error": "'latitude'"}]
