"""
Reusable Typer Options Module

Common option definitions shared by the main callback and the commands.
Use them as ``Annotated`` metadata, e.g. ``Annotated[bool, json_output_option]``.
"""

from __future__ import annotations

import typer

# Verbose option - count-based for multiple -v flags
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)


log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: WARNING.",
)


json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)


# Version option - for main app only
version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
)


geojson_option = typer.Option(
    "--geojson",
    help="Use GeoJSON (lng, lat) coordinate order.",
)
