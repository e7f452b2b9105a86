"""Batch processing of record collections.

``BatchProcessor`` applies an operation to every record of a collection in
fixed-size chunks. A failing record is recorded and logged; it never stops
the run. Collections are either plain iterables or ``PagedCollection``
implementations that are read page by page.

Records may be mappings (``record["placekey"]``) or objects
(``record.placekey``); both are read and written through the field helpers
at the bottom of this module.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping, Sequence, Sized
from itertools import islice
from typing import Any

from placekit.core.codec import PlacekeyCodec
from placekit.core.spatial import SpatialQuery
from placekit.shared.constants import BatchDefaults, ProximityConfig
from placekit.shared.errors import ApplicationError, ErrorCode, ErrorContext, PlacekitError
from placekit.shared.logging import log_operation_error, log_operation_success
from placekit.shared.models import BatchItemResult, BatchSummary
from placekit.shared.protocols import LookupClientProtocol, PagedCollection

ProgressCallback = Callable[[int, int], None]
Operation = Callable[[Any], Any]

DEFAULT_ADDRESS_MAPPING: dict[str, str] = {
    "street_address": "street_address",
    "city": "city",
    "region": "region",
    "postal_code": "postal_code",
    "iso_country_code": "country_code",
}


class BatchProcessor:
    """Apply placekey operations to large record collections.

    Args:
        batch_size: Records per chunk (default: 100)
        client: Resolution client, required by ``geocode``
        codec: Identifier codec (default: new ``PlacekeyCodec``)
        spatial: Spatial query helper (default: built on ``codec``)
        logger: Logger (default: this module's logger)
    """

    def __init__(
        self,
        batch_size: int = BatchDefaults.BATCH_SIZE,
        client: LookupClientProtocol | None = None,
        codec: PlacekeyCodec | None = None,
        spatial: SpatialQuery | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Batch size must be positive, got: {batch_size}",
                context=ErrorContext(
                    operation="batch_processor_init",
                    additional_data={"batch_size": batch_size},
                ),
            )
        self.batch_size = batch_size
        self.client = client
        self.codec = codec or (spatial.codec if spatial else PlacekeyCodec())
        self.spatial = spatial or SpatialQuery(self.codec)
        self.logger = logger or logging.getLogger(__name__)

    def process(
        self,
        collection: Iterable[Any] | PagedCollection,
        operation: Operation,
        progress_callback: ProgressCallback | None = None,
    ) -> BatchSummary:
        """Apply ``operation`` to every record.

        A truthy return value counts as a success. An exception is recorded
        as a ``BatchError`` and processing continues with the next record.

        Args:
            collection: Records, in memory or paged
            operation: Callable applied to each record
            progress_callback: Called after each chunk with
                ``(processed, successful)``

        Returns:
            Summary of the run
        """
        started = time.perf_counter()
        if not isinstance(collection, (PagedCollection, Sized)):
            collection = list(collection)
        summary = BatchSummary(total=_count(collection))
        self.logger.info("Starting batch processing of %d records", summary.total)

        for chunk_index, chunk in enumerate(self._chunks(collection), start=1):
            for record in chunk:
                summary.add(self._apply(operation, record))

            self._log_progress(summary, chunk_index)
            if progress_callback is not None:
                progress_callback(summary.processed, summary.successful)

        self.logger.info(
            "Completed batch processing: %d processed, %d successful, %d errors",
            summary.processed,
            summary.successful,
            summary.error_count,
        )
        log_operation_success(
            self.logger,
            operation="batch_process",
            duration_ms=(time.perf_counter() - started) * 1000,
            result_info={
                "processed": summary.processed,
                "successful": summary.successful,
                "errors": summary.error_count,
            },
        )
        return summary

    def _apply(self, operation: Operation, record: Any) -> BatchItemResult:
        identity = get_field(record, "id")
        try:
            return BatchItemResult.ok(identity, operation(record))
        except Exception as e:  # noqa: BLE001
            if isinstance(e, PlacekitError):
                log_operation_error(
                    self.logger,
                    e,
                    operation="batch_item",
                    additional_context={"record_id": str(identity)},
                )
            else:
                self.logger.error("Error processing record %s: %s", identity, e)
            return BatchItemResult.failed(identity, record, e)

    def _chunks(self, collection: Iterable[Any] | PagedCollection) -> Iterator[Sequence[Any]]:
        if isinstance(collection, PagedCollection):
            yield from collection.iter_pages(self.batch_size)
            return

        iterator = iter(collection)
        while chunk := list(islice(iterator, self.batch_size)):
            yield chunk

    def _log_progress(self, summary: BatchSummary, chunk_index: int) -> None:
        percent = round(summary.processed / summary.total * 100, 1) if summary.total else 0
        level = (
            logging.INFO if chunk_index % BatchDefaults.PROGRESS_LOG_INTERVAL == 1 else logging.DEBUG
        )
        self.logger.log(
            level,
            "Processed: %d/%d (%s%%), Successful: %d, Errors: %d",
            summary.processed,
            summary.total,
            percent,
            summary.successful,
            summary.error_count,
        )

    # Convenience operations

    def geocode(
        self,
        collection: Iterable[Any] | PagedCollection,
        address_mapping: Mapping[str, str] | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> BatchSummary:
        """Assign identifiers to records that lack one.

        Records with coordinates are encoded locally; the others are resolved
        from their address fields through the client.

        Args:
            address_mapping: Query field -> record field overrides merged over
                the default mapping

        Raises:
            ApplicationError: If no client was configured
        """
        if self.client is None:
            raise ApplicationError(
                code=ErrorCode.CONFIG_MISSING,
                message="Geocoding requires a resolution client. Pass client= to BatchProcessor.",
                context=ErrorContext(operation="geocode"),
            )
        mapping = {**DEFAULT_ADDRESS_MAPPING, **(address_mapping or {})}
        return self.process(
            collection,
            lambda record: self._geocode_record(record, mapping),
            progress_callback,
        )

    def generate_placekeys(
        self,
        collection: Iterable[Any] | PagedCollection,
        lat_field: str = "latitude",
        lng_field: str = "longitude",
        progress_callback: ProgressCallback | None = None,
    ) -> BatchSummary:
        """Encode each record's coordinates into its ``placekey`` field."""
        return self.process(
            collection,
            lambda record: self._generate_placekey(record, lat_field, lng_field),
            progress_callback,
        )

    def find_nearby(
        self,
        collection: Iterable[Any] | PagedCollection,
        lat: float,
        lng: float,
        distance: float,
        placekey_field: str = "placekey",
    ) -> list[Any]:
        """Records whose identifier lies within ``distance`` meters of a point."""
        self.logger.info("Finding records within %sm of (%s, %s)", distance, lat, lng)
        center = self.codec.encode(lat, lng)

        grid_distance = estimate_grid_distance(distance)
        self.logger.debug("Using grid distance %d for spatial search", grid_distance)
        neighbor_keys = self.spatial.neighbors(center, grid_distance)

        candidates = [
            record
            for chunk in self._chunks(collection)
            for record in chunk
            if get_field(record, placekey_field) in neighbor_keys
        ]
        self.logger.debug("Found %d candidate records within grid distance", len(candidates))

        results = [
            record
            for record in candidates
            if self.spatial.distance(center, get_field(record, placekey_field)) <= distance
        ]
        self.logger.info("Found %d records within %sm", len(results), distance)
        return results

    def _geocode_record(self, record: Any, mapping: Mapping[str, str]) -> bool:
        if _present(get_field(record, "placekey")):
            return False

        if _present(get_field(record, "latitude")) and _present(get_field(record, "longitude")):
            return self._generate_placekey(record, "latitude", "longitude")

        query = {
            api_field: get_field(record, record_field)
            for api_field, record_field in mapping.items()
            if _present(get_field(record, record_field))
        }
        if not query:
            return False
        identity = get_field(record, "id")
        if identity is not None:
            query["query_id"] = str(identity)

        result = self.client.lookup(query)  # type: ignore[union-attr]
        placekey = result.get("placekey") if isinstance(result, Mapping) else None
        if not _present(placekey):
            return False
        return _save(record, placekey)

    def _generate_placekey(self, record: Any, lat_field: str, lng_field: str) -> bool:
        if _present(get_field(record, "placekey")):
            return False

        lat = get_field(record, lat_field)
        lng = get_field(record, lng_field)
        if not (_present(lat) and _present(lng)):
            return False
        return _save(record, self.codec.encode(float(lat), float(lng)))


def estimate_grid_distance(meters: float) -> int:
    """Grid steps needed to cover ``meters`` around a resolution 10 cell."""
    for threshold, grid_distance in ProximityConfig.GRID_DISTANCE_THRESHOLDS:
        if meters > threshold:
            return grid_distance
    return ProximityConfig.DEFAULT_GRID_DISTANCE


# Record access


def get_field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def set_field(record: Any, name: str, value: Any) -> None:
    if isinstance(record, MutableMapping):
        record[name] = value
    else:
        setattr(record, name, value)


def _save(record: Any, placekey: str) -> bool:
    """Store ``placekey`` on the record and persist it when the record can."""
    set_field(record, "placekey", placekey)
    save = None if isinstance(record, Mapping) else getattr(record, "save", None)
    if callable(save):
        saved = save()
        return True if saved is None else bool(saved)
    return True


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _count(collection: Iterable[Any] | PagedCollection) -> int:
    if isinstance(collection, PagedCollection):
        return collection.count()
    return len(collection)  # type: ignore[arg-type]
