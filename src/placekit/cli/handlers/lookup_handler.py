"""Handlers for the commands backed by the resolution API."""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.table import Table

from placekit.cli.common.error_handler import handle_cli_errors
from placekit.cli.common.output import emit
from placekit.config.loader import get_config
from placekit.config.models.settings import Settings
from placekit.services.cache import LRUCache
from placekit.services.placekey_client import PlacekeyClient, has_minimum_inputs
from placekit.shared.constants import CLICommands
from placekit.shared.errors import ErrorCode, create_argument_error, create_config_error

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> PlacekeyClient:
    """Client configured from settings, with a cache when enabled."""
    api_settings = settings.api.placekey
    if not api_settings.api_key:
        raise create_config_error(
            "No API key configured. Set PLACEKEY_API_KEY or "
            "PLACEKIT_API__PLACEKEY__API_KEY, or add it to the config file.",
            config_key="api.placekey.api_key",
            operation="build_client",
        )
    cache = LRUCache(settings.cache.max_size) if settings.cache.enabled else None
    return PlacekeyClient(api_settings, cache=cache)


@handle_cli_errors(CLICommands.LOOKUP)
def handle_lookup(query: dict[str, Any], fields: list[str] | None) -> None:
    query = {key: value for key, value in query.items() if value is not None}
    if not has_minimum_inputs(query.keys()):
        raise create_argument_error(
            "Provide --latitude and --longitude, or a street address with "
            "region and either city or postal code",
            code=ErrorCode.INSUFFICIENT_INPUTS,
            operation=CLICommands.LOOKUP,
        )

    client = build_client(get_config())
    result = client.lookup(query, fields or None)

    def render(console: Console) -> None:
        if not result.get("placekey"):
            console.print("[yellow]No placekey found for this query[/yellow]")
        table = Table("Field", "Value")
        for key, value in result.items():
            table.add_row(str(key), str(value))
        console.print(table)

    emit(CLICommands.LOOKUP, result, render)


@handle_cli_errors(CLICommands.DATASETS)
def handle_datasets(name: str | None, url: bool) -> None:
    settings = get_config()
    client = PlacekeyClient(settings.api.placekey)
    if name:
        location = client.free_dataset_location(name, url=url)
        emit(
            CLICommands.DATASETS,
            {"name": name, "location": location},
            lambda console: console.print(location, markup=False),
        )
        return

    names = client.list_free_datasets() or []
    emit(
        CLICommands.DATASETS,
        {"datasets": names},
        lambda console: console.print("\n".join(str(n) for n in names), markup=False),
    )
