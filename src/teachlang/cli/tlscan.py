"""
tlscan - TeachLang Scanner Command-Line Interface
=================================================

Scans a TeachLang source file and writes its token record file, one
``(kindCode, "lexeme", line, column)`` record per line.

Usage Examples
--------------
Basic scan:
    $ tlscan prog.tl              # writes prog.tok

With output file:
    $ tlscan prog.tl -o out.tok

To standard output:
    $ tlscan prog.tl -o -

Chained with the parser:
    $ tlscan prog.tl && tlparse prog.tok --tokens
"""

import sys
from pathlib import Path
from typing import Optional

import click

from teachlang import __version__
from teachlang.frontend import FrontEnd, FrontEndOptions
from teachlang.frontend.tokenfile import format_token, write_tokens, save_tokens
from teachlang.cli.errors import ExitCode, handle_cli_exception, setup_logging


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output token file (default: input.tok, '-' for stdout)",
)
@click.option(
    "--keep-going",
    is_flag=True,
    help="Exit with status 0 even if lexical errors were found",
)
@click.option(
    "--dump-tokens",
    is_flag=True,
    help="Also print every token record to stdout",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tlscan")
def main(
    input_file: Path,
    output: Optional[Path],
    keep_going: bool,
    dump_tokens: bool,
    verbose: bool,
) -> None:
    """
    Scan TeachLang source code into token records.

    INPUT_FILE is the TeachLang source file to scan.

    Lexical errors do not stop the scan: they are written to the token
    file as error records (kind 8) and reported on stderr.

    \b
    Examples:
        tlscan prog.tl               # Outputs prog.tok
        tlscan prog.tl -o out.tok    # Specify output file
        tlscan prog.tl -o -          # Print records to stdout
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(".tok")

    options = FrontEndOptions(
        filename=str(input_file),
        lexical_errors_fatal=not keep_going,
        dump_tokens=dump_tokens,
    )

    try:
        front_end = FrontEnd(options)
        source = input_file.read_text(encoding="utf-8")
        tokens = front_end.scan(source, str(input_file))

        if options.dump_tokens and str(output) != "-":
            for token in tokens:
                click.echo(format_token(token))

        if str(output) == "-":
            count = write_tokens(tokens, sys.stdout)
        else:
            count = save_tokens(tokens, output)
            click.echo(f"Scanned {input_file} -> {output} ({count} tokens)")

        errors = front_end.lexical_errors(tokens, source.splitlines())
        for error in errors:
            click.echo(str(error), err=True)

        if errors:
            word = "error" if len(errors) == 1 else "errors"
            click.echo(f"{len(errors)} lexical {word}", err=True)
            if options.lexical_errors_fatal:
                sys.exit(ExitCode.BUILD_ERROR)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
