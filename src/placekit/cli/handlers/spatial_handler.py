"""Handlers for the spatial commands: neighbors, distance, boundary, polyfill."""

from __future__ import annotations

import logging
from pathlib import Path

import orjson
from rich.console import Console

from placekit.cli.common.error_handler import handle_cli_errors
from placekit.cli.common.output import emit
from placekit.core.spatial import SpatialQuery
from placekit.shared.constants import CLICommands
from placekit.shared.errors import ErrorCode, ErrorContext, FormatError

logger = logging.getLogger(__name__)


@handle_cli_errors(CLICommands.NEIGHBORS)
def handle_neighbors(placekey: str, k: int) -> None:
    neighbors = sorted(SpatialQuery().neighbors(placekey, k))
    emit(
        CLICommands.NEIGHBORS,
        {"placekey": placekey, "k": k, "neighbors": neighbors},
        lambda console: console.print("\n".join(neighbors)),
    )


@handle_cli_errors(CLICommands.DISTANCE)
def handle_distance(placekey_1: str, placekey_2: str) -> None:
    meters = SpatialQuery().distance(placekey_1, placekey_2)
    emit(
        CLICommands.DISTANCE,
        {"from": placekey_1, "to": placekey_2, "meters": meters},
        lambda console: console.print(f"{meters:.2f} m"),
    )


@handle_cli_errors(CLICommands.BOUNDARY)
def handle_boundary(placekey: str, geo_json: bool) -> None:
    spatial = SpatialQuery()
    point = spatial.codec.decode(placekey)
    boundary = spatial.hex_boundary(placekey, geo_json=geo_json)
    data = {
        "placekey": placekey,
        "center": {"lat": point.latitude, "lng": point.longitude},
        "boundary": boundary,
        "geojson": spatial.geojson(placekey),
    }

    def render(console: Console) -> None:
        console.print(f"center: {point.latitude:.6f}, {point.longitude:.6f}")
        for x, y in boundary:
            console.print(f"  {x:.6f}, {y:.6f}")

    emit(CLICommands.BOUNDARY, data, render)


@handle_cli_errors(CLICommands.POLYFILL)
def handle_polyfill(
    polygon: str,
    geojson_input: bool,
    include_touching: bool,
    lng_lat: bool,
) -> None:
    text = _read_polygon_text(polygon)
    spatial = SpatialQuery()
    if geojson_input:
        result = spatial.geojson_to_placekeys(
            _parse_geojson(text),
            include_touching=include_touching,
            geo_json=True,
        )
    else:
        result = spatial.wkt_to_placekeys(text, include_touching=include_touching, geo_json=lng_lat)

    logger.debug(
        "Polyfill: %d interior, %d boundary",
        len(result["interior"]),
        len(result["boundary"]),
    )

    def render(console: Console) -> None:
        console.print(f"[bold]interior[/bold] ({len(result['interior'])})")
        for placekey in result["interior"]:
            console.print(f"  {placekey}")
        console.print(f"[bold]boundary[/bold] ({len(result['boundary'])})")
        for placekey in result["boundary"]:
            console.print(f"  {placekey}")

    emit(CLICommands.POLYFILL, result, render)


def _read_polygon_text(polygon: str) -> str:
    """Return file contents when ``polygon`` names an existing file."""
    path = Path(polygon)
    try:
        if path.is_file():
            return path.read_text(encoding="utf-8")
    except OSError:
        # Too long or otherwise not a path; treat as inline text
        pass
    return polygon


def _parse_geojson(text: str) -> dict:
    try:
        geojson = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise FormatError(
            ErrorCode.INVALID_GEOMETRY,
            f"Invalid GeoJSON: {e!s}",
            ErrorContext(operation="polyfill"),
            original_error=e,
        ) from e
    # Accept a Feature wrapping the geometry
    if isinstance(geojson, dict) and geojson.get("type") == "Feature":
        geojson = geojson.get("geometry") or {}
    return geojson
