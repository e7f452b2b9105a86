"""Grid engine protocol.

The hexagonal grid engine is an external collaborator. The core only talks to
it through this interface so that the codec and spatial layer can be exercised
against any engine that honors the 64-bit cell layout.
"""

from __future__ import annotations

from typing import Any, Protocol


class GridAdapterProtocol(Protocol):
    """Capability interface over a hierarchical hexagonal grid engine.

    Cells are exchanged as 64-bit integers. Coordinates are ``(lat, lng)``
    tuples in degrees.
    """

    def coordinate_to_cell(self, lat: float, lng: float, resolution: int) -> int:
        """Return the cell containing the coordinate at ``resolution``."""

    def cell_to_coordinate(self, cell: int) -> tuple[float, float]:
        """Return the center of ``cell``."""

    def cell_to_boundary(self, cell: int) -> tuple[tuple[float, float], ...]:
        """Return the boundary vertices of ``cell``."""

    def string_to_cell(self, cell_string: str) -> int:
        """Parse a hexadecimal cell string."""

    def cell_to_string(self, cell: int) -> str:
        """Format a cell as a hexadecimal string."""

    def is_valid_cell(self, cell: int) -> bool:
        """Check whether ``cell`` addresses a real grid cell."""

    def k_ring(self, cell: int, k: int) -> set[int]:
        """Return every cell within ``k`` grid steps, the origin included."""

    def polyfill(self, polygon: Any, resolution: int) -> set[int]:
        """Return the cells whose centers fall inside ``polygon``.

        ``polygon`` is a shapely Polygon or MultiPolygon in ``(lng, lat)`` order.
        """
