"""
octasm - Assembler Command-Line Interface
=========================================

Usage Examples
--------------
Print the machine code of a program as hex:
    $ octasm program.asm

Print it as 8-digit binary:
    $ octasm program.asm -f bits

Write a raw binary:
    $ octasm program.asm -o program.bin

Use another instruction table:
    $ octasm -d mycpu.def program.asm

Run the built-in self test:
    $ octasm --test
"""

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from octasm import __version__
from octasm.assembler import Assembler, run_self_test
from octasm.cli.errors import ExitCode, handle_cli_exception
from octasm.config import OUTPUT_FORMATS, AssemblerConfig


def setup_logging(verbose: bool) -> None:
    """Configure logging; unmatched statements are logged as warnings."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write raw binary machine code to this file instead of printing it",
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Printed output format: hex bytes or 8-digit binary. Default: hex",
)
@click.option(
    "-d", "--definitions",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Instruction definition file (FORMAT ; ENCODING lines). "
         "Default: built-in instruction set",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Treat statements that match no instruction as errors",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum nesting of sub-statement references. Default: 8",
)
@click.option(
    "-t", "--test",
    is_flag=True,
    help="Run the built-in self test",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="octasm")
def main(
    input_file: Optional[Path],
    output: Optional[Path],
    output_format: Optional[str],
    definitions: Optional[Path],
    strict: bool,
    max_depth: Optional[int],
    test: bool,
    verbose: bool,
) -> None:
    """
    Assemble source code for the octasm 8-bit CPU.

    INPUT_FILE holds one statement per line; blank lines are ignored.
    Statements that match no instruction are reported and produce no
    bytes.

    \b
    Examples:
        octasm prog.asm                # Print hex bytes
        octasm prog.asm -o prog.bin    # Write raw binary
        octasm -d cpu.def prog.asm     # Use another instruction table
        octasm --test                  # Run the self test
    """
    if input_file is None and not test:
        raise click.UsageError("missing INPUT_FILE (or use --test)")

    setup_logging(verbose)

    config = AssemblerConfig.from_env()
    overrides = {}
    if output_format is not None:
        overrides["output_format"] = output_format.lower()
    if definitions is not None:
        overrides["definitions_path"] = definitions
    if strict:
        overrides["strict"] = True
    if max_depth is not None:
        overrides["max_depth"] = max_depth
    config = replace(config, **overrides)

    try:
        asm = Assembler(config=config, verbose=verbose)
        failed = False

        if test:
            results = run_self_test(asm)
            for result in results:
                click.echo(str(result))
            failed = not all(r.passed for r in results)

        if input_file is not None:
            asm.assemble_file(input_file)

            if asm.has_errors():
                click.echo(asm.get_error_report(), err=True)
                sys.exit(ExitCode.BUILD_ERROR)

            if output is not None:
                asm.write_binary(output)
                if verbose:
                    click.echo(f"Wrote {len(asm.get_code())} bytes to {output}", err=True)
            else:
                click.echo(asm.format_code())

            if verbose:
                click.echo(
                    f"Assembly complete: {asm.get_statement_count()} statements, "
                    f"{len(asm.get_code())} bytes, "
                    f"{asm.get_errors().unmatched_count()} unmatched",
                    err=True,
                )

        if failed:
            sys.exit(ExitCode.BUILD_ERROR)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
