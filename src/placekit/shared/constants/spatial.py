"""
Spatial Query Constants

Constants for distance computation, polygon filling and proximity search.
"""

from typing import ClassVar


class GeoConstants:
    """Geodesy constants."""

    EARTH_RADIUS_KM = 6371
    METERS_PER_KM = 1000
    MIN_LATITUDE = -90.0
    MAX_LATITUDE = 90.0
    MIN_LONGITUDE = -180.0
    MAX_LONGITUDE = 180.0


class PolyfillConfig:
    """Polygon to identifier-set filling."""

    # Outward buffer in degrees so edge hexagons are not missed
    BUFFER_DEGREES = 2e-3


class ProximityConfig:
    """Neighbor expansion used by proximity search."""

    # (minimum distance in meters, grid distance), checked top to bottom
    GRID_DISTANCE_THRESHOLDS: ClassVar[tuple[tuple[float, int], ...]] = (
        (20000.0, 3),
        (5000.0, 2),
    )
    DEFAULT_GRID_DISTANCE = 1

    # Shared prefix length of two identifiers -> maximum distance in meters
    PREFIX_DISTANCE_METERS: ClassVar[dict[int, float]] = {
        0: 2.004e7,
        1: 2.004e7,
        2: 2.777e6,
        3: 1.065e6,
        4: 1.524e5,
        5: 2.177e4,
        6: 8227.0,
        7: 1176.0,
        8: 444.3,
        9: 63.47,
    }
