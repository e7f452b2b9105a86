"""
Network Configuration Constants

Constants for the remote resolution API client.
"""

from typing import ClassVar

from .system import BASE_SECOND


class NetworkConfig:
    """Network configuration constants."""

    BASE_URL = "https://api.placekey.io/v1"
    PUBLIC_DATASETS_URL = "https://api.placekey.io/placekey-py/v1"
    SINGLE_ENDPOINT = "/placekey"
    BULK_ENDPOINT = "/placekeys"
    DATASET_NAMES_ENDPOINT = "/get-public-dataset-names"
    DATASET_LOCATION_ENDPOINT = "/get-public-dataset-location-from-name"
    DATASET_JOINS_ENDPOINT = "/get-public-join-from-names"

    # Timeout settings
    READ_TIMEOUT = 30 * BASE_SECOND

    # Retry settings
    DEFAULT_MAX_RETRIES = 20
    RETRY_BASE_DELAY = 0.1 * BASE_SECOND

    # User agent
    USER_AGENT_PRODUCT = "placekit"

    # HTTP headers
    CONTENT_TYPE_JSON = "application/json"
    API_KEY_HEADER = "apikey"


class RateLimitConfig:
    """Sliding window quotas of the remote service."""

    SINGLE_REQUEST_LIMIT = 1000
    SINGLE_REQUEST_WINDOW = 60 * BASE_SECOND
    BULK_REQUEST_LIMIT = 10
    BULK_REQUEST_WINDOW = 60 * BASE_SECOND
    DATASET_REQUEST_LIMIT = 3
    DATASET_REQUEST_WINDOW = 60 * BASE_SECOND


class QueryConfig:
    """Accepted query shapes for the resolution API."""

    QUERY_PARAMETERS: ClassVar[frozenset[str]] = frozenset(
        {
            "latitude",
            "longitude",
            "location_name",
            "street_address",
            "city",
            "region",
            "postal_code",
            "iso_country_code",
            "query_id",
            "place_metadata",
        }
    )
    PLACE_METADATA_PARAMETERS: ClassVar[frozenset[str]] = frozenset(
        {"store_id", "phone_number", "website", "naics_code", "mcc_code"}
    )
    MIN_INPUTS: ClassVar[tuple[tuple[str, ...], ...]] = (
        ("latitude", "longitude"),
        ("street_address", "city", "region", "postal_code"),
        ("street_address", "region", "postal_code"),
        ("street_address", "region", "city"),
    )
    METADATA_KEY = "place_metadata"
    QUERY_ID_KEY = "query_id"
    DEFAULT_QUERY_ID_PREFIX = "place_"
    MAX_BATCH_SIZE = 100
