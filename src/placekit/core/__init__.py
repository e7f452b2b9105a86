"""
Core components for placekit.

This package contains the identifier codec, validation rules, spatial
queries and the adapter over the hexagonal grid engine.
"""

from .codec import PlacekeyCodec
from .grid_adapter import H3GridAdapter
from .spatial import SpatialQuery, get_prefix_distance_dict, haversine_meters
from .validator import PlacekeyValidator, is_valid_format, normalize, where_part_is_valid

__all__ = [
    "H3GridAdapter",
    "PlacekeyCodec",
    "PlacekeyValidator",
    "SpatialQuery",
    "get_prefix_distance_dict",
    "haversine_meters",
    "is_valid_format",
    "normalize",
    "where_part_is_valid",
]
