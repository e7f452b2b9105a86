"""Tests for spatial queries over identifiers."""

from __future__ import annotations

import warnings

import pytest
from shapely.geometry import LineString, Point, Polygon

from conftest import NULL_ISLAND_PLACEKEY, SF_PLACEKEY
from placekit.core.spatial import get_prefix_distance_dict, haversine_meters, swap_xy
from placekit.shared.errors import FormatError

# Roughly 1 km square in San Francisco, (lat, lng) order
SF_SQUARE_LATLNG = Polygon(
    [
        (37.7330, -122.4480),
        (37.7330, -122.4380),
        (37.7420, -122.4380),
        (37.7420, -122.4480),
    ]
)
SF_SQUARE_LNGLAT = Polygon([(lng, lat) for lat, lng in SF_SQUARE_LATLNG.exterior.coords])


class TestNeighbors:
    """k-ring neighborhoods."""

    def test_first_ring_has_seven_members(self, spatial):
        """k=1 returns the cell and its six neighbors."""
        neighbors = spatial.neighbors(SF_PLACEKEY, 1)

        assert len(neighbors) == 7
        assert SF_PLACEKEY in neighbors

    def test_zero_ring_is_self(self, spatial):
        assert spatial.neighbors(SF_PLACEKEY, 0) == {SF_PLACEKEY}

    def test_second_ring_size(self, spatial):
        assert len(spatial.neighbors(NULL_ISLAND_PLACEKEY, 2)) == 19

    def test_negative_k(self, spatial):
        with pytest.raises(FormatError):
            spatial.neighbors(SF_PLACEKEY, -1)

    def test_neighbors_accept_what_part(self, spatial):
        assert spatial.neighbors("222-227" + SF_PLACEKEY, 1) == spatial.neighbors(SF_PLACEKEY, 1)


class TestDistance:
    """Great-circle distances between identifiers."""

    def test_same_identifier(self, spatial):
        assert spatial.distance(SF_PLACEKEY, SF_PLACEKEY) == 0.0

    def test_symmetric(self, spatial):
        forward = spatial.distance(NULL_ISLAND_PLACEKEY, SF_PLACEKEY)
        backward = spatial.distance(SF_PLACEKEY, NULL_ISLAND_PLACEKEY)

        assert forward == pytest.approx(backward)

    def test_known_distance(self, spatial):
        """Null island to San Francisco is about 12,800 km."""
        distance = spatial.distance(NULL_ISLAND_PLACEKEY, SF_PLACEKEY)

        assert 12.7e6 < distance < 12.9e6

    def test_adjacent_cells_are_close(self, spatial):
        neighbor = next(iter(spatial.neighbors(SF_PLACEKEY, 1) - {SF_PLACEKEY}))

        assert 0 < spatial.distance(SF_PLACEKEY, neighbor) < 250

    def test_haversine_antipodes(self):
        """Antipodal points are half the circumference apart."""
        assert haversine_meters(0, 0, 0, 180) == pytest.approx(6371000 * 3.141592653589793)


class TestHexagonGeometry:
    """Boundary, polygon, WKT and GeoJSON of a single hexagon."""

    def test_boundary_has_six_vertices(self, spatial):
        assert len(spatial.hex_boundary(SF_PLACEKEY)) == 6

    def test_geo_json_swaps_coordinates(self, spatial):
        latlng = spatial.hex_boundary(SF_PLACEKEY)
        lnglat = spatial.hex_boundary(SF_PLACEKEY, geo_json=True)

        assert lnglat == tuple((lng, lat) for lat, lng in latlng)
        assert all(lat > 0 > lng for lat, lng in latlng)

    def test_polygon_contains_center(self, spatial, codec):
        hexagon = spatial.polygon(SF_PLACEKEY, geo_json=True)
        center = codec.decode(SF_PLACEKEY)

        assert hexagon.is_valid
        assert hexagon.contains(Point(center.longitude, center.latitude))

    def test_wkt(self, spatial):
        assert spatial.wkt(SF_PLACEKEY).startswith("POLYGON ((")

    def test_geojson(self, spatial):
        geojson = spatial.geojson(SF_PLACEKEY)

        assert geojson["type"] == "Polygon"
        ring = geojson["coordinates"][0]
        # Closed ring in (lng, lat) order
        assert len(ring) == 7
        assert ring[0] == ring[-1]
        assert ring[0][0] < 0


class TestFillPolygon:
    """Polygon covering with interior and boundary classification."""

    def test_interior_and_boundary_are_disjoint(self, spatial):
        result = spatial.fill_polygon(SF_SQUARE_LATLNG)

        assert result["interior"]
        assert result["boundary"]
        assert not set(result["interior"]) & set(result["boundary"])
        assert result["interior"] == sorted(result["interior"])

    def test_interior_hexagons_are_contained(self, spatial):
        result = spatial.fill_polygon(SF_SQUARE_LATLNG)

        for placekey in result["interior"]:
            assert SF_SQUARE_LATLNG.contains(spatial.polygon(placekey))

    def test_geo_json_order_gives_same_cover(self, spatial):
        assert spatial.fill_polygon(SF_SQUARE_LNGLAT, geo_json=True) == spatial.fill_polygon(
            SF_SQUARE_LATLNG
        )

    def test_latlng_polygon_fills_without_deprecation_warnings(self, spatial):
        """Axis swapping of (lat, lng) input uses the vectorized transform."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            result = spatial.fill_polygon(SF_SQUARE_LATLNG)

        assert result["interior"]

    def test_include_touching_is_superset(self, spatial):
        strict = spatial.fill_polygon(SF_SQUARE_LATLNG)
        touching = spatial.fill_polygon(SF_SQUARE_LATLNG, include_touching=True)

        assert touching["interior"] == strict["interior"]
        assert set(strict["boundary"]) <= set(touching["boundary"])

    def test_zero_area_polygon(self, spatial):
        degenerate = Polygon([(0, 0), (1, 1), (2, 2)])

        assert spatial.fill_polygon(degenerate) == {"interior": [], "boundary": []}

    def test_rejects_non_polygon(self, spatial):
        with pytest.raises(FormatError):
            spatial.fill_polygon(LineString([(0, 0), (1, 1)]))

    def test_wkt_front_end(self, spatial):
        assert spatial.wkt_to_placekeys(SF_SQUARE_LATLNG.wkt) == spatial.fill_polygon(
            SF_SQUARE_LATLNG
        )

    def test_invalid_wkt(self, spatial):
        with pytest.raises(FormatError):
            spatial.wkt_to_placekeys("POLYGON ((0 0, 1")

    def test_geojson_front_end(self, spatial):
        geojson = {
            "type": "Polygon",
            "coordinates": [list(SF_SQUARE_LNGLAT.exterior.coords)],
        }

        assert spatial.geojson_to_placekeys(geojson) == spatial.fill_polygon(SF_SQUARE_LATLNG)

    def test_invalid_geojson(self, spatial):
        with pytest.raises(FormatError):
            spatial.geojson_to_placekeys({"type": "Polygon"})


class TestPrefixDistances:
    def test_longer_prefix_means_shorter_distance(self):
        distances = get_prefix_distance_dict()

        keys = sorted(distances)
        assert [distances[k] for k in keys] == sorted(distances.values(), reverse=True)

    def test_returns_copy(self):
        get_prefix_distance_dict()[0] = -1.0

        assert get_prefix_distance_dict()[0] != -1.0


class TestSwapXY:
    def test_swaps_polygon_axes(self):
        swapped = swap_xy(SF_SQUARE_LATLNG)

        assert swapped.equals(SF_SQUARE_LNGLAT)

    def test_does_not_modify_input(self):
        original = list(SF_SQUARE_LATLNG.exterior.coords)

        swap_xy(SF_SQUARE_LATLNG)

        assert list(SF_SQUARE_LATLNG.exterior.coords) == original
