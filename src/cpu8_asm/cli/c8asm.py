"""
c8asm - 8-bit CPU Assembler Command-Line Interface
==================================================

This module implements the command-line interface for the assembler.

Usage Examples
--------------
Basic assembly:
    $ c8asm program.asm program.out

With listing and symbol files:
    $ c8asm program.asm program.out -l program.lst -s program.sym

Without echoing the image to the console:
    $ c8asm -q program.asm program.out

Verbose mode (debug logging of labels and patches):
    $ c8asm -v program.asm program.out

Environment
-----------
CPU8ASM_MEMORY_SIZE, CPU8ASM_MAX_LABELS, CPU8ASM_MAX_JUMPS and
CPU8ASM_MAX_LABEL_LENGTH override the assembler bounds.
"""

from pathlib import Path
from typing import Optional
import logging

import click

from cpu8_asm import __version__
from cpu8_asm.assembler import Assembler
from cpu8_asm.cli.errors import handle_cli_exception
from cpu8_asm.config import AssemblerConfig

logger = logging.getLogger(__name__)


class EchoStream:
    """Text stream that forwards writes to click.echo (console mirror)."""

    def write(self, text: str) -> int:
        click.echo(text, nl=False)
        return len(text)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Do not print the banner or echo the image to the console",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="c8asm")
def main(
    input_file: Path,
    output_file: Path,
    listing: Optional[Path],
    symbols: Optional[Path],
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Assemble 8-bit CPU source code into a Logisim memory image.

    INPUT_FILE is the assembly source file (.asm) to assemble.
    OUTPUT_FILE receives the "v2.0 raw" hex dump.

    \b
    Examples:
        c8asm count.asm count.out
        c8asm count.asm count.out -l count.lst
    """
    setup_logging(verbose)

    if not quiet:
        click.echo("=" * 47)
        click.echo(f"            8bit cpu assembler v{__version__}")
        click.echo("=" * 47)

    try:
        asm = Assembler(AssemblerConfig.from_env())
        code = asm.assemble_file(input_file)

        if not quiet:
            click.echo(f"Successfully compiled program ({len(code)} bytes):\n")

        asm.write_image(output_file, mirror=None if quiet else EchoStream())

        if listing:
            asm.write_listing(listing)
            logger.debug(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            logger.debug(f"Wrote symbols to {symbols}")

        if not quiet:
            click.echo(f"\nWrite output to '{output_file}'.")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
