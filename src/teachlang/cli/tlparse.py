"""
tlparse - TeachLang Parser Command-Line Interface
=================================================

Parses a TeachLang program and writes the indented syntax tree dump.
The input is source text by default, or a token record file produced by
tlscan when ``--tokens`` is given.

Usage Examples
--------------
From source:
    $ tlparse prog.tl             # writes prog.ast

From a token file:
    $ tlparse prog.tok --tokens -o prog.ast

To standard output:
    $ tlparse prog.tl -o -
"""

from pathlib import Path
from typing import Optional

import click

from teachlang import __version__
from teachlang.frontend import FrontEnd, FrontEndOptions, ASTPrinter
from teachlang.frontend.tokenfile import format_token
from teachlang.cli.errors import handle_cli_exception, setup_logging


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output tree file (default: input.ast, '-' for stdout)",
)
@click.option(
    "--tokens",
    "from_tokens",
    is_flag=True,
    help="Read INPUT_FILE as a token record file instead of source",
)
@click.option(
    "--keep-going",
    is_flag=True,
    help="Skip lexical error tokens with a warning instead of failing",
)
@click.option(
    "--dump-tokens",
    is_flag=True,
    help="Print the token records before parsing",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tlparse")
def main(
    input_file: Path,
    output: Optional[Path],
    from_tokens: bool,
    keep_going: bool,
    dump_tokens: bool,
    verbose: bool,
) -> None:
    """
    Parse a TeachLang program into a syntax tree dump.

    INPUT_FILE is a TeachLang source file, or a token file with --tokens.

    The first syntax error stops the parse; the diagnostic is printed to
    stderr and no output file is written.

    \b
    Examples:
        tlparse prog.tl                      # Outputs prog.ast
        tlparse prog.tok --tokens            # Parse tlscan output
        tlparse prog.tl -o -                 # Print tree to stdout
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(".ast")

    options = FrontEndOptions(
        filename=str(input_file),
        lexical_errors_fatal=not keep_going,
        dump_tokens=dump_tokens,
    )

    try:
        front_end = FrontEnd(options)
        if from_tokens:
            result = front_end.compile_token_file(str(input_file))
        else:
            result = front_end.compile_file(str(input_file))

        if options.dump_tokens:
            for token in result.tokens:
                click.echo(format_token(token))

        for warning in result.warnings:
            click.echo(warning, err=True)

        tree = ASTPrinter().print(result.ast)

        if str(output) == "-":
            click.echo(tree)
            return

        output.write_text(tree + "\n", encoding="utf-8")

        if verbose:
            click.echo(f"Parsed {result.token_count} tokens")
        click.echo(f"Parsed {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
