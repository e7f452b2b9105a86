"""Tests for the H3 grid adapter."""

from __future__ import annotations

import pytest
from shapely.geometry import MultiPolygon, Point, Polygon

from conftest import SF_H3, SF_LAT, SF_LNG
from placekit.core.grid_adapter import H3GridAdapter
from placekit.shared.errors import FormatError


@pytest.fixture
def grid() -> H3GridAdapter:
    return H3GridAdapter()


class TestH3GridAdapter:
    """Integer cell bridge over h3."""

    def test_coordinate_to_cell(self, grid):
        cell = grid.coordinate_to_cell(SF_LAT, SF_LNG, 10)

        assert grid.cell_to_string(cell) == SF_H3

    def test_string_round_trip(self, grid):
        assert grid.cell_to_string(grid.string_to_cell(SF_H3)) == SF_H3

    def test_invalid_coordinate(self, grid):
        with pytest.raises(FormatError):
            grid.coordinate_to_cell(float("nan"), 0.0, 10)

    def test_is_valid_cell(self, grid):
        assert grid.is_valid_cell(grid.string_to_cell(SF_H3)) is True
        assert grid.is_valid_cell(0) is False

    def test_cell_to_coordinate(self, grid):
        lat, lng = grid.cell_to_coordinate(grid.string_to_cell(SF_H3))

        assert lat == pytest.approx(SF_LAT, abs=1e-3)
        assert lng == pytest.approx(SF_LNG, abs=1e-3)

    def test_k_ring(self, grid):
        cell = grid.string_to_cell(SF_H3)

        ring = grid.k_ring(cell, 1)
        assert len(ring) == 7
        assert cell in ring

    def test_polyfill_multipolygon(self, grid):
        """Cells of a multipolygon are the union of its parts."""
        first = Point(SF_LNG, SF_LAT).buffer(0.003)
        second = Point(SF_LNG + 0.05, SF_LAT).buffer(0.003)

        combined = grid.polyfill(MultiPolygon([first, second]), 10)

        assert combined == grid.polyfill(first, 10) | grid.polyfill(second, 10)
        assert grid.polyfill(first, 10)

    def test_polyfill_empty_polygon(self, grid):
        assert grid.polyfill(Polygon(), 10) == set()

    def test_polyfill_rejects_other_geometry(self, grid):
        with pytest.raises(FormatError):
            grid.polyfill(Point(0, 0), 10)
