"""Services module for placekit.

Remote resolution client, its rate limiting and caching, and batch
processing of record collections.
"""

from .batch_processor import BatchProcessor, estimate_grid_distance
from .cache import LRUCache
from .placekey_client import PlacekeyClient, has_minimum_inputs, validate_query
from .rate_limiter import SlidingWindowRateLimiter

__all__ = [
    "BatchProcessor",
    "LRUCache",
    "PlacekeyClient",
    "SlidingWindowRateLimiter",
    "estimate_grid_distance",
    "has_minimum_inputs",
    "validate_query",
]
