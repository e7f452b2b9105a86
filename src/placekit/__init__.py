"""placekit: placekey identifiers in Python.

Encode coordinates and H3 cells as ``[what@]where`` placekeys, validate and
repair identifiers, run spatial queries over them and resolve places through
the placekey API.

Example:
    >>> import placekit
    >>> placekit.geo_to_placekey(37.7371, -122.44283)
    '@5vg-82n-kzz'
    >>> placekit.placekey_to_h3("@5vg-82n-kzz")
    '8a2830953157fff'
"""

from __future__ import annotations

from placekit.core.codec import PlacekeyCodec
from placekit.core.grid_adapter import H3GridAdapter
from placekit.core.spatial import SpatialQuery, get_prefix_distance_dict
from placekit.core.validator import PlacekeyValidator
from placekit.services.batch_processor import BatchProcessor
from placekit.services.cache import LRUCache
from placekit.services.placekey_client import PlacekeyClient
from placekit.services.rate_limiter import SlidingWindowRateLimiter
from placekit.shared.constants import Application
from placekit.shared.errors import (
    ApiError,
    ArgumentError,
    FormatError,
    PlacekitError,
    RateLimitExceededError,
    TransportError,
)
from placekit.shared.models import BatchSummary, GeoPoint

__version__ = Application.VERSION

_codec = PlacekeyCodec()
_validator = PlacekeyValidator(_codec)
_spatial = SpatialQuery(_codec)


def geo_to_placekey(lat: float, lng: float) -> str:
    return _codec.encode(lat, lng)


def placekey_to_geo(placekey: str) -> tuple[float, float]:
    return _codec.decode(placekey).to_tuple()


def h3_to_placekey(h3_string: str) -> str:
    return _codec.h3_to_placekey(h3_string)


def placekey_to_h3(placekey: str) -> str:
    return _codec.placekey_to_h3(placekey)


def placekey_format_is_valid(placekey: str) -> bool:
    return _validator.is_valid_format(placekey)


def normalize_placekey_format(placekey: str) -> str:
    return _validator.normalize(placekey)


def get_neighboring_placekeys(placekey: str, dist: int = 1) -> set[str]:
    return _spatial.neighbors(placekey, dist)


def placekey_distance(placekey_1: str, placekey_2: str) -> float:
    return _spatial.distance(placekey_1, placekey_2)


__all__ = [
    "ApiError",
    "ArgumentError",
    "BatchProcessor",
    "BatchSummary",
    "FormatError",
    "GeoPoint",
    "H3GridAdapter",
    "LRUCache",
    "PlacekeyClient",
    "PlacekeyCodec",
    "PlacekeyValidator",
    "PlacekitError",
    "RateLimitExceededError",
    "SlidingWindowRateLimiter",
    "SpatialQuery",
    "TransportError",
    "__version__",
    "geo_to_placekey",
    "get_neighboring_placekeys",
    "get_prefix_distance_dict",
    "h3_to_placekey",
    "normalize_placekey_format",
    "placekey_distance",
    "placekey_format_is_valid",
    "placekey_to_geo",
    "placekey_to_h3",
]
