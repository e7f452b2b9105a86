"""Spatial queries over placekey identifiers.

Neighborhoods, distances, hexagon geometry and polygon filling. Geometry
objects are shapely geometries; polygon filling delegates candidate
generation to the grid adapter and classifies each candidate hexagon against
the input polygon.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import shapely
from shapely import wkt as shapely_wkt
from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, Polygon, mapping, shape

from placekit.core.codec import PlacekeyCodec
from placekit.shared.constants import GeoConstants, PlacekeyFormat, PolyfillConfig, ProximityConfig
from placekit.shared.errors import ErrorCode, ErrorContext, FormatError

logger = logging.getLogger(__name__)


class SpatialQuery:
    """Geometric operations on identifiers.

    Args:
        codec: Codec used to translate identifiers to cells and back.
    """

    def __init__(self, codec: PlacekeyCodec | None = None) -> None:
        self.codec = codec or PlacekeyCodec()
        self.grid = self.codec.grid

    def neighbors(self, placekey: str, k: int = 1) -> set[str]:
        """Identifiers within ``k`` grid steps of ``placekey``, itself included."""
        if k < 0:
            raise FormatError(
                ErrorCode.VALIDATION_ERROR,
                f"Grid distance must be non-negative, got {k}",
                ErrorContext(operation="neighbors", placekey=placekey),
            )
        cells = self.grid.k_ring(self.codec.to_cell(placekey), k)
        return {self.codec.encode_cell(cell) for cell in cells}

    def distance(self, placekey_1: str, placekey_2: str) -> float:
        """Great-circle distance in meters between two cell centers."""
        lat1, lng1 = self.codec.decode(placekey_1)
        lat2, lng2 = self.codec.decode(placekey_2)
        return haversine_meters(lat1, lng1, lat2, lng2)

    def hex_boundary(self, placekey: str, geo_json: bool = False) -> tuple[tuple[float, float], ...]:
        """Boundary vertices, ``(lat, lng)`` or ``(lng, lat)`` when ``geo_json``."""
        boundary = self.grid.cell_to_boundary(self.codec.to_cell(placekey))
        if geo_json:
            return tuple((lng, lat) for lat, lng in boundary)
        return tuple(boundary)

    def polygon(self, placekey: str, geo_json: bool = False) -> Polygon:
        return Polygon(self.hex_boundary(placekey, geo_json=geo_json))

    def wkt(self, placekey: str, geo_json: bool = False) -> str:
        return self.polygon(placekey, geo_json=geo_json).wkt

    def geojson(self, placekey: str) -> dict[str, Any]:
        """GeoJSON mapping of the hexagon, always in ``(lng, lat)`` order."""
        return mapping(self.polygon(placekey, geo_json=True))

    def fill_polygon(
        self,
        polygon: Polygon | MultiPolygon,
        include_touching: bool = False,
        geo_json: bool = False,
    ) -> dict[str, list[str]]:
        """Cover a polygon with resolution 10 identifiers.

        Args:
            polygon: Shapely Polygon or MultiPolygon.
            include_touching: Keep hexagons that only share boundary with
                the polygon.
            geo_json: The polygon is in ``(lng, lat)`` order; otherwise
                ``(lat, lng)``.

        Returns:
            ``{"interior": [...], "boundary": [...]}``. Interior hexagons are
            fully contained in the polygon; boundary hexagons intersect it.
        """
        if not isinstance(polygon, (Polygon, MultiPolygon)):
            raise FormatError(
                ErrorCode.INVALID_GEOMETRY,
                f"Expected Polygon or MultiPolygon, got {type(polygon).__name__}",
                ErrorContext(operation="fill_polygon"),
            )
        if polygon.is_empty or polygon.area == 0:
            return {"interior": [], "boundary": []}

        # Candidate generation works in (lng, lat)
        lnglat = polygon if geo_json else swap_xy(polygon)
        buffered = lnglat.buffer(PolyfillConfig.BUFFER_DEGREES)
        candidates = self.grid.polyfill(buffered, PlacekeyFormat.RESOLUTION)

        interior: list[str] = []
        boundary: list[str] = []
        for cell in candidates:
            placekey = self.codec.encode_cell(cell)
            hexagon = self.polygon(placekey, geo_json=geo_json)
            if polygon.contains(hexagon):
                interior.append(placekey)
            elif polygon.intersects(hexagon) and (include_touching or not polygon.touches(hexagon)):
                boundary.append(placekey)

        logger.debug(
            "Filled polygon with %d interior and %d boundary identifiers",
            len(interior),
            len(boundary),
        )
        return {"interior": sorted(interior), "boundary": sorted(boundary)}

    def wkt_to_placekeys(
        self,
        wkt: str,
        include_touching: bool = False,
        geo_json: bool = False,
    ) -> dict[str, list[str]]:
        try:
            geometry = shapely_wkt.loads(wkt)
        except ShapelyError as e:
            raise FormatError(
                ErrorCode.INVALID_GEOMETRY,
                f"Invalid WKT: {e!s}",
                ErrorContext(operation="wkt_to_placekeys"),
                original_error=e,
            ) from e
        return self.fill_polygon(geometry, include_touching=include_touching, geo_json=geo_json)

    def geojson_to_placekeys(
        self,
        geojson: dict[str, Any],
        include_touching: bool = False,
        geo_json: bool = True,
    ) -> dict[str, list[str]]:
        """Fill a GeoJSON geometry mapping. Coordinates are ``(lng, lat)`` by default."""
        try:
            geometry = shape(geojson)
        except (ShapelyError, KeyError, TypeError, ValueError, AttributeError) as e:
            raise FormatError(
                ErrorCode.INVALID_GEOMETRY,
                f"Invalid GeoJSON geometry: {e!s}",
                ErrorContext(operation="geojson_to_placekeys"),
                original_error=e,
            ) from e
        return self.fill_polygon(geometry, include_touching=include_touching, geo_json=geo_json)


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance in meters on a sphere of radius 6371 km."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))
    return GeoConstants.EARTH_RADIUS_KM * GeoConstants.METERS_PER_KM * c


def get_prefix_distance_dict() -> dict[int, float]:
    """Shared prefix length of two identifiers mapped to their maximum distance in meters."""
    return dict(ProximityConfig.PREFIX_DISTANCE_METERS)


def swap_xy(geometry: Any) -> Any:
    """Return ``geometry`` with its two coordinate axes exchanged."""
    return shapely.transform(geometry, lambda coords: coords[:, ::-1])
