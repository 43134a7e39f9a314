"""
CLI Error Handling
==================

Provides consistent error reporting and exit codes for the command line.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from simread.errors import SimReadError


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    DECODE_ERROR = 1     # File could not be opened, was too large, or failed to decode
    INVALID_ARGS = 2     # Invalid arguments (reported by click)
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print the full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, SimReadError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.DECODE_ERROR)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
