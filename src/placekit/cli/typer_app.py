"""
placekit Typer CLI Application

Command line front-end over the codec, spatial queries and the resolution
API client.
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from placekit.cli.common.context import CliContext, LogLevel, set_cli_context
from placekit.cli.common.error_handler import handle_cli_errors
from placekit.cli.common.options import (
    geojson_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from placekit.cli.handlers.codec_handler import (
    handle_decode,
    handle_encode,
    handle_normalize,
    handle_validate,
)
from placekit.cli.handlers.lookup_handler import handle_datasets, handle_lookup
from placekit.cli.handlers.spatial_handler import (
    handle_boundary,
    handle_distance,
    handle_neighbors,
    handle_polyfill,
)
from placekit.config.loader import get_config
from placekit.shared.constants import Application, CLICommands, CLIDefaults, CLIHelp
from placekit.shared.logging import setup_structured_logger

__version__ = Application.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_HELP,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[Optional[LogLevel], log_level_option] = None,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Set up the CLI context and logging before any command runs."""
    if version:
        version_callback(value=True)

    configure_logging(verbose, log_level, json_output)


@handle_cli_errors("placekit")
def configure_logging(verbose: int, log_level: LogLevel | None, json_output: bool) -> None:
    """Build the CLI context; the ``logging`` config section supplies the defaults."""
    logging_settings = get_config().logging
    context = CliContext(
        verbose=verbose,
        log_level=log_level or LogLevel(logging_settings.level.upper()),
        json_output=json_output,
    )
    set_cli_context(context)
    setup_structured_logger(
        level=context.get_effective_log_level(),
        log_file=logging_settings.file,
        use_rich_console=logging_settings.console_output,
    )


@app.command(CLICommands.ENCODE, help=CLIHelp.ENCODE_HELP)
def encode_command(
    latitude: Optional[float] = typer.Argument(None, help="Latitude in degrees"),
    longitude: Optional[float] = typer.Argument(None, help="Longitude in degrees"),
    h3_cell: Optional[str] = typer.Option(None, "--h3", help="Encode this H3 cell instead"),
) -> None:
    """
    Examples:
        placekit encode -- 37.7371 -122.44283
        placekit encode --h3 8a2830828767fff
    """
    handle_encode(latitude, longitude, h3_cell)


@app.command(CLICommands.DECODE, help=CLIHelp.DECODE_HELP)
def decode_command(
    placekey: str = typer.Argument(..., help="Placekey, e.g. @5vg-7gq-tvz"),
) -> None:
    handle_decode(placekey)


@app.command(CLICommands.VALIDATE, help=CLIHelp.VALIDATE_HELP)
def validate_command(
    placekeys: list[str] = typer.Argument(..., help="One or more placekeys"),
) -> None:
    handle_validate(placekeys)


@app.command(CLICommands.NORMALIZE, help=CLIHelp.NORMALIZE_HELP)
def normalize_command(
    placekey: str = typer.Argument(..., help="Placekey to repair"),
) -> None:
    handle_normalize(placekey)


@app.command(CLICommands.NEIGHBORS, help=CLIHelp.NEIGHBORS_HELP)
def neighbors_command(
    placekey: str = typer.Argument(..., help="Center placekey"),
    k: int = typer.Option(CLIDefaults.DEFAULT_K, "--k", "-k", min=0, help="Grid distance"),
) -> None:
    handle_neighbors(placekey, k)


@app.command(CLICommands.DISTANCE, help=CLIHelp.DISTANCE_HELP)
def distance_command(
    placekey_1: str = typer.Argument(..., help="First placekey"),
    placekey_2: str = typer.Argument(..., help="Second placekey"),
) -> None:
    handle_distance(placekey_1, placekey_2)


@app.command(CLICommands.BOUNDARY, help=CLIHelp.BOUNDARY_HELP)
def boundary_command(
    placekey: str = typer.Argument(..., help="Placekey"),
    geo_json: Annotated[bool, geojson_option] = False,
) -> None:
    handle_boundary(placekey, geo_json)


@app.command(CLICommands.POLYFILL, help=CLIHelp.POLYFILL_HELP)
def polyfill_command(
    polygon: str = typer.Argument(..., help="WKT or GeoJSON text, or a path to a file"),
    geojson_input: bool = typer.Option(False, "--geojson-input", help="Input is GeoJSON"),
    include_touching: bool = typer.Option(
        False,
        "--include-touching",
        help="Keep hexagons that only touch the polygon boundary",
    ),
    lng_lat: bool = typer.Option(
        False,
        "--lng-lat",
        help="WKT coordinates are (lng, lat) instead of (lat, lng)",
    ),
) -> None:
    """
    Examples:
        placekit polyfill "POLYGON ((37.70 -122.45, 37.70 -122.44, 37.71 -122.44, 37.70 -122.45))"
        placekit polyfill area.geojson --geojson-input
    """
    handle_polyfill(polygon, geojson_input, include_touching, lng_lat)


@app.command(CLICommands.LOOKUP, help=CLIHelp.LOOKUP_HELP)
def lookup_command(
    latitude: Optional[float] = typer.Option(None, "--latitude", help="Latitude"),
    longitude: Optional[float] = typer.Option(None, "--longitude", help="Longitude"),
    location_name: Optional[str] = typer.Option(None, "--location-name", help="Place name"),
    street_address: Optional[str] = typer.Option(None, "--street-address", help="Street address"),
    city: Optional[str] = typer.Option(None, "--city", help="City"),
    region: Optional[str] = typer.Option(None, "--region", help="Region or state"),
    postal_code: Optional[str] = typer.Option(None, "--postal-code", help="Postal code"),
    iso_country_code: Optional[str] = typer.Option(
        None,
        "--iso-country-code",
        help="ISO 3166-1 alpha-2 country code",
    ),
    query_id: Optional[str] = typer.Option(None, "--query-id", help="Caller supplied query id"),
    fields: Optional[list[str]] = typer.Option(
        None,
        "--field",
        help="Extra result field to request (repeatable)",
    ),
) -> None:
    """
    Examples:
        placekit lookup --latitude 37.7371 --longitude -122.44283
        placekit lookup --street-address "598 Portola Dr" --city "San Francisco" \\
            --region CA --postal-code 94131 --iso-country-code US
    """
    handle_lookup(
        {
            "latitude": latitude,
            "longitude": longitude,
            "location_name": location_name,
            "street_address": street_address,
            "city": city,
            "region": region,
            "postal_code": postal_code,
            "iso_country_code": iso_country_code,
            "query_id": query_id,
        },
        fields,
    )


@app.command(CLICommands.DATASETS, help=CLIHelp.DATASETS_HELP)
def datasets_command(
    name: Optional[str] = typer.Option(None, "--name", help="Show the location of this dataset"),
    url: bool = typer.Option(False, "--url", help="Return a download URL"),
) -> None:
    handle_datasets(name, url)
