"""
CLI Error Handling Utilities

Consistent error output and exit codes across commands.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from placekit.cli.common.context import get_cli_context
from placekit.cli.json_formatter import format_json_output
from placekit.shared.constants import CLIDefaults
from placekit.shared.errors import (
    ApplicationError,
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    PlacekitError,
)
from placekit.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

error_console = Console(stderr=True)


def handle_cli_error(
    error: Exception,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Log and print ``error``; return the exit code for the command.

    Domain errors (bad identifiers, bad arguments) exit with
    ``EXIT_INVALID``; everything else exits with ``EXIT_ERROR``.
    """
    if isinstance(error, PlacekitError):
        placekit_error = error
    else:
        placekit_error = PlacekitError(
            ErrorCode.CLI_UNEXPECTED_ERROR,
            f"Unexpected error: {error!s}",
            ErrorContext(operation=command),
            original_error=error,
        )
    log_operation_error(logger, placekit_error, operation=command)

    if json_output:
        typer.echo(
            format_json_output(
                success=False,
                command=command,
                errors=[placekit_error.message],
            ).decode("utf-8"),
        )
    else:
        error_console.print(f"[red]{_category(error)}:[/red] {escape(placekit_error.message)}")

    if isinstance(error, DomainError):
        return CLIDefaults.EXIT_INVALID
    return CLIDefaults.EXIT_ERROR


def _category(error: Exception) -> str:
    if isinstance(error, DomainError):
        return "Invalid input"
    if isinstance(error, InfrastructureError):
        return "API error"
    if isinstance(error, ApplicationError):
        return "Application error"
    return "Error"


F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_errors(command_name: str) -> Callable[[F], F]:
    """Decorator turning exceptions raised by a handler into an exit code.

    Example:
        >>> @handle_cli_errors("encode")
        ... def handle_encode(lat, lng):
        ...     ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (typer.Exit, typer.Abort):
                raise
            except Exception as e:  # noqa: BLE001
                exit_code = handle_cli_error(
                    e,
                    command_name,
                    json_output=get_cli_context().json_output,
                )
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator
