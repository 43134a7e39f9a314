"""
simread - Simple Code Reader Command-Line Interface
===================================================

This module implements the command-line interface for reading IAR Simple
Code (.sim) firmware images. It prints the file size, the header, every
record in the record stream and the calculated checksum.

Usage Examples
--------------
Show a file:
    $ simread firmware.sim

Hide the program bytes of data records:
    $ simread firmware.sim -h

Accept files up to 4MB:
    $ simread -m 4000000 big.sim

Exit Codes
----------
0 - Success
1 - File could not be opened, was too large, or failed to decode
2 - Invalid arguments
3 - Internal error
"""

import logging
from pathlib import Path
from typing import Optional

import click

from simread import __version__
from simread.cli.errors import handle_cli_exception
from simread.config import SimReadConfig
from simread.parser import SimParser
from simread.presenter import (
    format_checksum,
    format_file_size,
    format_header,
    format_record,
)
from simread.source import ByteSource

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def echo_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


def show_file(sim_file: Path, config: SimReadConfig) -> None:
    """
    Decode a file and print it.

    Everything decoded before a failure stays printed. A failure in the
    record stream is raised only after the checksum has been shown.

    Raises:
        SimReadError: If the file cannot be loaded or decoded
    """
    click.echo()
    source = ByteSource.from_file(sim_file, config.max_file_size)
    echo_lines(format_file_size(source.size))

    click.echo()
    parser = SimParser(source=source)
    echo_lines(format_header(parser.header))

    for record in parser.records:
        click.echo()
        echo_lines(format_record(record, config.hide_program_bytes))

    click.echo()
    click.echo("----")
    echo_lines(format_checksum(parser.checksum))

    if parser.record_error is not None:
        raise parser.record_error


@click.command()
@click.argument(
    "sim_file",
    type=click.Path(path_type=Path),
)
@click.option(
    "-h", "--hide-bytes",
    is_flag=True,
    help="Hide program bytes.",
)
@click.option(
    "-m", "--max-size",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum accepted file size in bytes (default: 1000000)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@click.version_option(__version__, "--version", "-V", prog_name="simread")
def main(
    sim_file: Path,
    hide_bytes: bool,
    max_size: Optional[int],
    verbose: bool,
) -> None:
    """
    Display an IAR Simple Code (.sim) file in human-readable form.

    \b
    Examples:
      simread firmware.sim
      simread firmware.sim -h
    """
    setup_logging(verbose)

    config = SimReadConfig.from_env()
    if hide_bytes:
        config.hide_program_bytes = True
    if max_size is not None:
        config.max_file_size = max_size
    logger.debug(f"Using {config}")

    try:
        show_file(sim_file, config)
    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
