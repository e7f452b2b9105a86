"""Geographic value models."""

from __future__ import annotations

import math
from dataclasses import dataclass

from placekit.shared.constants import GeoConstants
from placekit.shared.errors import ErrorCode, ErrorContext, FormatError


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 coordinate in degrees.

    Attributes:
        latitude: Latitude in [-90, 90]
        longitude: Longitude in [-180, 180]

    Example:
        >>> point = GeoPoint(37.7371, -122.44283)
        >>> lat, lng = point
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        lat = float(self.latitude)
        lng = float(self.longitude)
        if not (
            math.isfinite(lat)
            and math.isfinite(lng)
            and GeoConstants.MIN_LATITUDE <= lat <= GeoConstants.MAX_LATITUDE
            and GeoConstants.MIN_LONGITUDE <= lng <= GeoConstants.MAX_LONGITUDE
        ):
            raise FormatError(
                ErrorCode.INVALID_COORDINATES,
                f"Coordinate out of range: ({self.latitude}, {self.longitude})",
                ErrorContext(operation="geo_point_init"),
            )
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lng)

    def __iter__(self):
        yield self.latitude
        yield self.longitude

    def to_tuple(self) -> tuple[float, float]:
        """Return ``(latitude, longitude)``."""
        return (self.latitude, self.longitude)

    def to_geojson_tuple(self) -> tuple[float, float]:
        """Return ``(longitude, latitude)`` as GeoJSON orders coordinates."""
        return (self.longitude, self.latitude)
