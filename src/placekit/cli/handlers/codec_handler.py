"""Handlers for the identifier commands: encode, decode, validate, normalize."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.table import Table

from placekit.cli.common.error_handler import handle_cli_errors
from placekit.cli.common.output import emit
from placekit.core.codec import PlacekeyCodec
from placekit.core.validator import PlacekeyValidator
from placekit.shared.constants import CLICommands, CLIDefaults
from placekit.shared.errors import create_argument_error

logger = logging.getLogger(__name__)


@handle_cli_errors(CLICommands.ENCODE)
def handle_encode(
    latitude: float | None,
    longitude: float | None,
    h3_cell: str | None = None,
) -> None:
    codec = PlacekeyCodec()
    if h3_cell:
        placekey = codec.h3_to_placekey(h3_cell)
        data = {"placekey": placekey, "h3": h3_cell}
    else:
        if latitude is None or longitude is None:
            raise create_argument_error(
                "LATITUDE and LONGITUDE are required unless --h3 is given",
                operation=CLICommands.ENCODE,
            )
        placekey = codec.encode(latitude, longitude)
        data = {"placekey": placekey, "latitude": latitude, "longitude": longitude}

    logger.debug("Encoded %s", data)
    emit(CLICommands.ENCODE, data, lambda console: console.print(placekey))


@handle_cli_errors(CLICommands.DECODE)
def handle_decode(placekey: str) -> None:
    codec = PlacekeyCodec()
    point = codec.decode(placekey)
    h3_cell = codec.placekey_to_h3(placekey)
    data = {
        "placekey": placekey,
        "latitude": point.latitude,
        "longitude": point.longitude,
        "h3": h3_cell,
    }

    def render(console: Console) -> None:
        console.print(f"{point.latitude:.6f}, {point.longitude:.6f}  [dim]({h3_cell})[/dim]")

    emit(CLICommands.DECODE, data, render)


@handle_cli_errors(CLICommands.VALIDATE)
def handle_validate(placekeys: list[str]) -> None:
    validator = PlacekeyValidator()
    results = {placekey: validator.is_valid_format(placekey) for placekey in placekeys}

    def render(console: Console) -> None:
        table = Table("Placekey", "Valid")
        for placekey, valid in results.items():
            table.add_row(placekey, "[green]yes[/green]" if valid else "[red]no[/red]")
        console.print(table)

    emit(CLICommands.VALIDATE, {"results": results}, render)
    if not all(results.values()):
        raise typer.Exit(CLIDefaults.EXIT_INVALID)


@handle_cli_errors(CLICommands.NORMALIZE)
def handle_normalize(placekey: str) -> None:
    normalized = PlacekeyValidator().normalize(placekey)
    emit(
        CLICommands.NORMALIZE,
        {"input": placekey, "placekey": normalized},
        lambda console: console.print(normalized, markup=False),
    )
