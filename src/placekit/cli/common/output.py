"""Result output for CLI commands: rich for humans, orjson envelope for --json."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import typer
from rich.console import Console

from placekit.cli.common.context import get_cli_context
from placekit.cli.json_formatter import format_json_output

console = Console()


def emit(command: str, data: Any, render: Callable[[Console], None]) -> None:
    """Write a successful result in the format selected by the CLI context."""
    if get_cli_context().json_output:
        typer.echo(format_json_output(success=True, command=command, data=data).decode("utf-8"))
        return
    render(console)
