"""
placekit Package Main Entry Point

Runs the CLI when the package is executed with ``python -m placekit``.
"""

import logging
import sys

from placekit.cli.common.error_handler import handle_cli_error
from placekit.cli.typer_app import app
from placekit.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(CLIDefaults.EXIT_ERROR)
    except SystemExit:
        raise
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "placekit-main")
        sys.exit(exit_code)
