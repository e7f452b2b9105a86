"""Tests for the module-level convenience functions."""

from __future__ import annotations

import pytest

import placekit
from conftest import NULL_ISLAND_H3, NULL_ISLAND_PLACEKEY, SF_H3, SF_PLACEKEY


class TestPackageFunctions:
    def test_geo_round_trip(self):
        placekey = placekit.geo_to_placekey(0.0, 0.0)
        lat, lng = placekit.placekey_to_geo(placekey)

        assert placekey == NULL_ISLAND_PLACEKEY
        assert lat == pytest.approx(0.0, abs=1e-3)
        assert lng == pytest.approx(0.0, abs=1e-3)

    def test_h3_conversions(self):
        assert placekit.h3_to_placekey(SF_H3) == SF_PLACEKEY
        assert placekit.placekey_to_h3(NULL_ISLAND_PLACEKEY) == NULL_ISLAND_H3

    def test_validation_and_normalization(self):
        assert placekit.placekey_format_is_valid("222-227@dvt-smp-tvz")
        assert not placekit.placekey_format_is_valid("@abc")
        assert placekit.normalize_placekey_format("23b@5vg-82n-kzz") == "@5vg-82n-kzz"

    def test_spatial_shortcuts(self):
        assert len(placekit.get_neighboring_placekeys(SF_PLACEKEY)) == 7
        assert placekit.placekey_distance(SF_PLACEKEY, SF_PLACEKEY) == 0.0
        assert 9 in placekit.get_prefix_distance_dict()

    def test_version(self):
        assert placekit.__version__ == "0.1.0"
