"""Shared command helpers and utilities."""

import sys
from typing import NoReturn

from rich.markup import escape

from polymer_toolkit.shared.exceptions import PolymerError
from polymer_toolkit.utils.formatters import err_console


def handle_command_error(error: Exception) -> NoReturn:
    """
    Standard error handling for commands.

    Prints a single error line to stderr and exits with status 1.

    Args:
        error: The exception that occurred
    """
    if isinstance(error, PolymerError):
        err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    else:
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(error))}")

    sys.exit(1)
