"""H3 grid adapter.

Thin bridge between the ``h3`` library (v4 API, string cells) and the 64-bit
integer cells the codec operates on.
"""

from __future__ import annotations

import logging
from typing import Any

import h3
from shapely.geometry import MultiPolygon, Polygon

from placekit.shared.errors import ErrorCode, ErrorContext, FormatError

logger = logging.getLogger(__name__)


class H3GridAdapter:
    """Grid engine backed by Uber's H3.

    Implements ``GridAdapterProtocol``. Coordinates are ``(lat, lng)``; cells
    are integers.
    """

    def coordinate_to_cell(self, lat: float, lng: float, resolution: int) -> int:
        try:
            return h3.str_to_int(h3.latlng_to_cell(lat, lng, resolution))
        except (h3.H3BaseException, ValueError, TypeError) as e:
            raise FormatError(
                ErrorCode.INVALID_COORDINATES,
                f"Cannot index coordinate ({lat}, {lng}): {e!s}",
                ErrorContext(
                    operation="coordinate_to_cell",
                    additional_data={"resolution": resolution},
                ),
                original_error=e,
            ) from e

    def cell_to_coordinate(self, cell: int) -> tuple[float, float]:
        return h3.cell_to_latlng(self.cell_to_string(cell))

    def cell_to_boundary(self, cell: int) -> tuple[tuple[float, float], ...]:
        return tuple(h3.cell_to_boundary(self.cell_to_string(cell)))

    def string_to_cell(self, cell_string: str) -> int:
        return h3.str_to_int(cell_string)

    def cell_to_string(self, cell: int) -> str:
        return h3.int_to_str(cell)

    def is_valid_cell(self, cell: int) -> bool:
        try:
            return bool(h3.is_valid_cell(self.cell_to_string(cell)))
        except (h3.H3BaseException, ValueError, TypeError, OverflowError):
            return False

    def k_ring(self, cell: int, k: int) -> set[int]:
        return {h3.str_to_int(c) for c in h3.grid_disk(self.cell_to_string(cell), k)}

    def polyfill(self, polygon: Any, resolution: int) -> set[int]:
        """Fill a shapely polygon given in ``(lng, lat)`` order."""
        cells: set[int] = set()
        for part in _polygon_parts(polygon):
            shape = h3.LatLngPoly(
                [(lat, lng) for lng, lat in part.exterior.coords],
                *[[(lat, lng) for lng, lat in ring.coords] for ring in part.interiors],
            )
            cells.update(h3.str_to_int(c) for c in h3.polygon_to_cells(shape, resolution))
        logger.debug("Polyfill produced %d candidate cells", len(cells))
        return cells


def _polygon_parts(polygon: Any) -> list[Polygon]:
    if isinstance(polygon, Polygon):
        return [] if polygon.is_empty else [polygon]
    if isinstance(polygon, MultiPolygon):
        return [p for p in polygon.geoms if not p.is_empty]
    raise FormatError(
        ErrorCode.INVALID_GEOMETRY,
        f"Expected Polygon or MultiPolygon, got {type(polygon).__name__}",
        ErrorContext(operation="polyfill"),
    )
