"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes across the CLI tools.
"""

import logging
import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from teachlang.errors import TeachLangError
from teachlang.frontend.errors import TokenFileError


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Lexical or syntax error in the input
    INVALID_ARGS = 2     # Invalid arguments, missing files, bad token file
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised inside a CLI command and exit.

    Front-end diagnostics are already formatted with an "error:" prefix
    and are echoed unchanged.

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, TokenFileError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, TeachLangError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)


def setup_logging(verbose: bool) -> None:
    """Configure logging: DEBUG with --verbose, otherwise WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
