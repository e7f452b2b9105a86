"""Placekey resolution API client with rate limiting, caching and retries.

This module wraps the remote placekey service:

* ``POST /placekey`` resolves one query (coordinates, address fields or both)
* ``POST /placekeys`` resolves up to 100 queries correlated by ``query_id``
* the public dataset endpoints list and locate free datasets

Every request goes through a sliding window limiter matching the upstream
quota of its endpoint. Rate limited (429) and transport failures are retried
with exponential backoff.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from typing import Any

import orjson
import pandas as pd
import requests

from placekit.config.models.api_settings import PlacekeyAPISettings
from placekit.services.cache import LRUCache
from placekit.services.rate_limiter import SlidingWindowRateLimiter
from placekit.shared.constants import (
    Application,
    CacheDefaults,
    HTTPStatusCodes,
    NetworkConfig,
    QueryConfig,
)
from placekit.shared.errors import (
    ApiError,
    ErrorCode,
    ErrorContext,
    PlacekitError,
    RateLimitExceededError,
    TransportError,
    create_argument_error,
)
from placekit.shared.logging import log_api_call, log_operation_error, log_operation_success

_JSON_OPTIONS = orjson.OPT_SERIALIZE_NUMPY | orjson.OPT_NON_STR_KEYS
_TEMP_QUERY_ID = "temp_query_id"


def _dumps(value: Any, *, sort_keys: bool = False) -> str:
    option = _JSON_OPTIONS | orjson.OPT_SORT_KEYS if sort_keys else _JSON_OPTIONS
    return orjson.dumps(value, option=option).decode("utf-8")


def has_minimum_inputs(inputs: Iterable[str]) -> bool:
    """Check whether ``inputs`` cover one of the minimum query combinations."""
    available = set(inputs)
    return any(available.issuperset(required) for required in QueryConfig.MIN_INPUTS)


def validate_query(query: dict[str, Any]) -> None:
    """Reject query and place_metadata keys outside the allow-lists.

    Raises:
        ArgumentError: If an unknown key is present
    """
    if not isinstance(query, dict):
        raise create_argument_error(
            f"Query must be a mapping, got {type(query).__name__}",
            code=ErrorCode.INVALID_QUERY_PARAMETERS,
            operation="validate_query",
        )

    invalid_keys = [str(key) for key in query if str(key) not in QueryConfig.QUERY_PARAMETERS]
    if invalid_keys:
        raise create_argument_error(
            f"Invalid query parameters: {', '.join(invalid_keys)}",
            code=ErrorCode.INVALID_QUERY_PARAMETERS,
            field=invalid_keys[0],
            operation="validate_query",
        )

    metadata = query.get(QueryConfig.METADATA_KEY)
    if metadata is None:
        return
    if not isinstance(metadata, dict):
        raise create_argument_error(
            "place_metadata must be a mapping",
            code=ErrorCode.INVALID_METADATA_PARAMETERS,
            field=QueryConfig.METADATA_KEY,
            operation="validate_query",
        )
    invalid_keys = [
        str(key) for key in metadata if str(key) not in QueryConfig.PLACE_METADATA_PARAMETERS
    ]
    if invalid_keys:
        raise create_argument_error(
            f"Invalid place_metadata parameters: {', '.join(invalid_keys)}",
            code=ErrorCode.INVALID_METADATA_PARAMETERS,
            field=invalid_keys[0],
            operation="validate_query",
        )


class PlacekeyClient:
    """Client for the placekey resolution API.

    Args:
        config: API settings (key, URLs, retries, quotas)
        cache: Lookup cache; None disables caching. Use ``with_default_cache``
            for a client with a fresh ``LRUCache``.
        session: HTTP session (default: new ``requests.Session``)
        single_limiter: Limiter for single lookups
        bulk_limiter: Limiter for batch lookups
        dataset_limiter: Limiter for the public dataset endpoints
        logger: Logger (default: this module's logger)
    """

    def __init__(
        self,
        config: PlacekeyAPISettings | None = None,
        *,
        cache: LRUCache | None = None,
        session: requests.Session | None = None,
        single_limiter: SlidingWindowRateLimiter | None = None,
        bulk_limiter: SlidingWindowRateLimiter | None = None,
        dataset_limiter: SlidingWindowRateLimiter | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or PlacekeyAPISettings()
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

        self.single_limiter = single_limiter or SlidingWindowRateLimiter(
            limit=self.config.single_limit,
            period=self.config.single_period,
        )
        self.bulk_limiter = bulk_limiter or SlidingWindowRateLimiter(
            limit=self.config.bulk_limit,
            period=self.config.bulk_period,
        )
        self.dataset_limiter = dataset_limiter or SlidingWindowRateLimiter(
            limit=self.config.dataset_limit,
            period=self.config.dataset_period,
        )

        self.session = session or requests.Session()
        self.session.headers.update(self._build_headers())

    @classmethod
    def with_default_cache(
        cls,
        config: PlacekeyAPISettings | None = None,
        max_size: int = CacheDefaults.MAX_SIZE,
        **kwargs: Any,
    ) -> PlacekeyClient:
        return cls(config, cache=LRUCache(max_size), **kwargs)

    def _build_headers(self) -> dict[str, str]:
        user_agent = f"{NetworkConfig.USER_AGENT_PRODUCT}/{Application.VERSION}"
        if self.config.user_agent_comment:
            user_agent = f"{user_agent} {self.config.user_agent_comment}".strip()
        return {
            NetworkConfig.API_KEY_HEADER: self.config.api_key,
            "Content-Type": NetworkConfig.CONTENT_TYPE_JSON,
            "User-Agent": user_agent,
        }

    # Single lookup

    def lookup(
        self,
        query: dict[str, Any],
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        """Resolve one query.

        Args:
            query: Query fields, e.g. ``{"latitude": .., "longitude": ..}``
            fields: Optional extra result fields to request

        Returns:
            The API result; ``{}`` when the body could not be parsed

        Raises:
            ArgumentError: If the query has unknown keys
            ApiError: On a non-2xx, non-429 response
            RateLimitExceededError: If 429 persists past the retry budget
            TransportError: If the transport keeps failing
        """
        validate_query(query)

        cache_key = self._cache_key(query, fields)
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                self.logger.debug("Cache hit for %s", cache_key)
                return cached

        payload: dict[str, Any] = {"query": query}
        if fields:
            payload["options"] = {"fields": list(fields)}

        result = self._request_with_retry(
            self.single_limiter,
            NetworkConfig.SINGLE_ENDPOINT,
            payload,
        )
        if not isinstance(result, dict):
            result = {}

        if self.cache is not None and result and "error" not in result:
            self.cache.set(cache_key, result)
        return result

    # Batch lookup

    def lookup_batch(
        self,
        queries: Sequence[dict[str, Any]],
        fields: list[str] | None = None,
        batch_size: int = QueryConfig.MAX_BATCH_SIZE,
        verbose: bool = False,
    ) -> list[dict[str, Any]]:
        """Resolve many queries in chunks of ``batch_size``.

        Queries without a ``query_id`` get ``place_<index>``. Cached results
        come first in the returned list, followed by the chunk results in
        request order. A chunk that fails as a whole contributes one
        ``{"query_id", "error"}`` entry per query. An exhausted rate limit or
        transport failure stops processing and the results gathered so far
        are returned.

        Raises:
            ArgumentError: For an invalid batch size or query keys
        """
        if batch_size > QueryConfig.MAX_BATCH_SIZE or batch_size <= 0:
            raise create_argument_error(
                f"Batch size must be between 1 and {QueryConfig.MAX_BATCH_SIZE}, got {batch_size}",
                code=ErrorCode.BATCH_TOO_LARGE,
                field="batch_size",
                operation="lookup_batch",
            )
        for query in queries:
            validate_query(query)

        log_level = logging.INFO if verbose else logging.DEBUG
        places: list[dict[str, Any]] = []
        for i, query in enumerate(queries):
            place = dict(query)
            if not place.get(QueryConfig.QUERY_ID_KEY):
                place[QueryConfig.QUERY_ID_KEY] = f"{QueryConfig.DEFAULT_QUERY_ID_PREFIX}{i}"
            places.append(place)

        results: list[dict[str, Any]] = []
        if self.cache is not None:
            uncached: list[dict[str, Any]] = []
            for place in places:
                cached = self.cache.get(self._cache_key(place, fields))
                if cached is not None:
                    results.append(cached)
                else:
                    uncached.append(place)
            if len(uncached) < len(places):
                self.logger.log(log_level, "Found %d places in cache", len(places) - len(uncached))
            places = uncached

        for start in range(0, len(places), batch_size):
            chunk = places[start : start + batch_size]
            query_ids = [place[QueryConfig.QUERY_ID_KEY] for place in chunk]

            try:
                chunk_results = self._post_batch(chunk, fields)
            except ApiError as e:
                log_operation_error(self.logger, e, operation="lookup_batch")
                results.extend({"query_id": qid, "error": e.message} for qid in query_ids)
                continue
            except (RateLimitExceededError, TransportError) as e:
                self.logger.error(
                    "Fatal error encountered: %s. Returning processed items at size %d of %d",
                    e.message,
                    start,
                    len(places),
                )
                break

            if isinstance(chunk_results, dict) and "error" in chunk_results:
                self.logger.log(
                    log_level,
                    "All queries in batch (%d, %d) had errors",
                    start,
                    start + len(chunk),
                )
                results.extend(
                    {"query_id": qid, "error": chunk_results["error"]} for qid in query_ids
                )
                continue
            if isinstance(chunk_results, dict) and "message" in chunk_results:
                self.logger.error(chunk_results["message"])
                self.logger.error("Returning completed queries")
                break
            if not isinstance(chunk_results, list):
                chunk_results = [] if chunk_results is None else [chunk_results]

            if self.cache is not None:
                self._cache_batch_results(chunk, chunk_results, fields)
            results.extend(chunk_results)

            end = start + len(chunk)
            if verbose and start > 0 and end % (10 * batch_size) == 0:
                self.logger.info("Processed %d items", end)

        self.logger.log(log_level, "Processed %d items", len(results))
        return results

    def _post_batch(
        self,
        places: list[dict[str, Any]],
        fields: list[str] | None,
    ) -> Any:
        if len(places) > QueryConfig.MAX_BATCH_SIZE:
            raise create_argument_error(
                f"{len(places)} places submitted. The number of places in a batch "
                f"can be at most {QueryConfig.MAX_BATCH_SIZE}",
                code=ErrorCode.BATCH_TOO_LARGE,
                operation="lookup_batch",
            )
        payload: dict[str, Any] = {"queries": places}
        if fields:
            payload["options"] = {"fields": list(fields)}
        return self._request_with_retry(self.bulk_limiter, NetworkConfig.BULK_ENDPOINT, payload)

    def _cache_batch_results(
        self,
        chunk: list[dict[str, Any]],
        chunk_results: list[Any],
        fields: list[str] | None,
    ) -> None:
        by_query_id = {place[QueryConfig.QUERY_ID_KEY]: place for place in chunk}
        for result in chunk_results:
            if not isinstance(result, dict) or "error" in result:
                continue
            place = by_query_id.get(result.get(QueryConfig.QUERY_ID_KEY))
            if place is not None:
                self.cache.set(self._cache_key(place, fields), result)  # type: ignore[union-attr]

    # DataFrame lookup

    def lookup_dataframe(
        self,
        dataframe: pd.DataFrame,
        column_mapping: dict[str, str],
        fields: list[str] | None = None,
        batch_size: int = QueryConfig.MAX_BATCH_SIZE,
        verbose: bool = False,
    ) -> pd.DataFrame:
        """Resolve every row of a DataFrame and join the results back.

        Args:
            dataframe: Input rows
            column_mapping: Query field name -> DataFrame column name
            fields: Optional extra result fields
            batch_size: Chunk size for the batch endpoint

        Returns:
            A new DataFrame with the result columns left-joined on each row

        Raises:
            ArgumentError: If the mapping does not cover a minimum input
                combination or names unknown query fields
        """
        if not has_minimum_inputs(column_mapping.keys()):
            raise create_argument_error(
                "The DataFrame does not have enough information to resolve places. "
                "Map latitude/longitude or one of the minimum address combinations.",
                code=ErrorCode.INSUFFICIENT_INPUTS,
                operation="lookup_dataframe",
            )
        validate_query(dict(column_mapping))

        frame = dataframe.copy()
        frame[_TEMP_QUERY_ID] = [
            f"{QueryConfig.DEFAULT_QUERY_ID_PREFIX}{i}" for i in range(len(frame))
        ]

        places = []
        for row in frame.to_dict("records"):
            place = {
                key: row[column]
                for key, column in column_mapping.items()
                if column in frame.columns and pd.notna(row[column])
            }
            place[QueryConfig.QUERY_ID_KEY] = row[_TEMP_QUERY_ID]
            places.append(place)

        results = self.lookup_batch(places, fields, batch_size, verbose)
        result_frame = pd.DataFrame(results)
        if QueryConfig.QUERY_ID_KEY not in result_frame.columns:
            result_frame[QueryConfig.QUERY_ID_KEY] = pd.Series(dtype=object)
        result_frame = result_frame.rename(columns={QueryConfig.QUERY_ID_KEY: _TEMP_QUERY_ID})

        merged = frame.merge(result_frame, on=_TEMP_QUERY_ID, how="left")
        return merged.drop(columns=[_TEMP_QUERY_ID])

    # Public datasets

    def list_free_datasets(self) -> list[str]:
        """Names of the free datasets published by the service."""
        response = self._get_dataset(NetworkConfig.DATASET_NAMES_ENDPOINT)
        return self._parse_json(response)

    def free_dataset_location(self, name: str, url: bool = False) -> str:
        """Storage location (or download URL) of a free dataset."""
        response = self._get_dataset(
            NetworkConfig.DATASET_LOCATION_ENDPOINT,
            params={"name": name, "url": str(url).lower()},
        )
        return response.text

    def free_dataset_joins(self, names: Sequence[str], url: bool = False) -> Any:
        """Locations of the pre-joined versions of several free datasets."""
        response = self._get_dataset(
            NetworkConfig.DATASET_JOINS_ENDPOINT,
            params={"public_datasets": ",".join(names), "url": str(url).lower()},
        )
        return self._parse_json(response)

    def _get_dataset(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> requests.Response:
        self.dataset_limiter.admit()
        url = f"{self.config.datasets_url}{endpoint}"
        started = time.perf_counter()
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise TransportError(
                f"Request to {endpoint} failed: {e!s}",
                ErrorContext(operation="get_dataset", additional_data={"endpoint": endpoint}),
                original_error=e,
            ) from e

        log_api_call(
            self.logger,
            endpoint,
            method="GET",
            status_code=response.status_code,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        if HTTPStatusCodes.is_success(response.status_code):
            return response
        if HTTPStatusCodes.is_client_error(response.status_code):
            raise create_argument_error(
                f"API Error: {response.text}",
                code=ErrorCode.INVALID_QUERY_PARAMETERS,
                operation="get_dataset",
            )
        raise ApiError(
            response.status_code,
            "Something went wrong. Please contact Placekey.",
            ErrorContext(operation="get_dataset", additional_data={"endpoint": endpoint}),
        )

    # Transport

    def _request_with_retry(
        self,
        limiter: SlidingWindowRateLimiter,
        endpoint: str,
        payload: dict[str, Any],
    ) -> Any:
        """POST through ``limiter``, retrying 429 and transport failures.

        Attempt ``n`` (counting from 1) that fails is followed by a sleep of
        ``2**n * retry_base_delay`` seconds while ``n < max_retries``.
        """
        retries = 0
        while True:
            limiter.admit()
            try:
                return self._post(endpoint, payload)
            except (RateLimitExceededError, TransportError) as e:
                retries += 1
                if retries >= self.config.max_retries:
                    log_operation_error(
                        self.logger,
                        e,
                        operation="request_with_retry",
                        additional_context={"endpoint": endpoint, "retries": retries},
                    )
                    raise
                delay = (2**retries) * self.config.retry_base_delay
                self.logger.debug(
                    "Retrying %s in %.2fs (attempt %d of %d): %s",
                    endpoint,
                    delay,
                    retries,
                    self.config.max_retries,
                    e.message,
                )
                time.sleep(delay)

    def _post(self, endpoint: str, payload: dict[str, Any]) -> Any:
        url = f"{self.config.base_url}{endpoint}"
        started = time.perf_counter()
        try:
            response = self.session.post(url, data=_dumps(payload), timeout=self.config.timeout)
        except requests.RequestException as e:
            raise TransportError(
                f"Request to {endpoint} failed: {e!s}",
                ErrorContext(operation="post", additional_data={"endpoint": endpoint}),
                original_error=e,
            ) from e

        duration_ms = (time.perf_counter() - started) * 1000
        log_api_call(self.logger, endpoint, status_code=response.status_code, duration_ms=duration_ms)
        return self._handle_response(response, endpoint, duration_ms)

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str,
        duration_ms: float,
    ) -> Any:
        status = response.status_code
        if HTTPStatusCodes.is_success(status):
            result = self._parse_json(response)
            log_operation_success(
                self.logger,
                operation="api_request",
                duration_ms=duration_ms,
                context={"endpoint": endpoint},
            )
            return result
        if status == HTTPStatusCodes.TOO_MANY_REQUESTS:
            raise RateLimitExceededError(
                context=ErrorContext(operation="api_request", additional_data={"endpoint": endpoint}),
            )
        raise ApiError(
            status,
            response.text,
            ErrorContext(
                operation="api_request",
                additional_data={"endpoint": endpoint, "status_code": status},
            ),
        )

    def _parse_json(self, response: requests.Response) -> Any:
        try:
            return orjson.loads(response.text)
        except orjson.JSONDecodeError as e:
            error = PlacekitError(
                ErrorCode.API_INVALID_RESPONSE,
                f"Error parsing JSON: {e!s}, returning empty result",
                ErrorContext(operation="parse_response"),
                original_error=e,
            )
            log_operation_error(self.logger, error)
            return None

    @staticmethod
    def _cache_key(query: dict[str, Any], fields: list[str] | None) -> str:
        return f"{CacheDefaults.KEY_PREFIX}:{_dumps(query, sort_keys=True)}:{_dumps(fields)}"
