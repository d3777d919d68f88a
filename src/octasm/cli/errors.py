"""
CLI Error Handling
==================

Maps octasm exceptions to messages and exit codes for the command line.

    Exit code  Meaning
    ---------  -------------------------------------------------------
    0          Success
    1          Bad definitions, encoding errors, unmatched statements
               in strict mode, failed self test
    2          Input, output or definitions file not accessible
    3          Unexpected internal error
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes of the octasm command."""
    SUCCESS = 0
    BUILD_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception raised while running the CLI and exit.

    Definition errors are reported as such whatever error_type is, since
    they come from the instruction table rather than the source being
    assembled. Internal errors print a traceback in verbose mode.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Prefix for other octasm errors (e.g., "Assembly")

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from octasm.errors import DefinitionParseError, OctasmError

    if isinstance(error, DefinitionParseError):
        click.echo(f"Definition error: {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, OctasmError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, OSError) and error.filename is not None:
        click.echo(f"Error: {error.filename}: {error.strerror}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, UnicodeDecodeError):
        click.echo(f"Error: input is not text ({error.reason})", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
