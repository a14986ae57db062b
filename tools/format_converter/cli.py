"""CLI interface for the format converter."""

import sys
from pathlib import Path
from typing import Optional, Tuple, Union

import click

from shared.cli import error, handle_errors, success
from shared.logger import setup_logger

from .converter import DataConverter
from .errors import ConversionError, UnsupportedFormat
from .formats import AUTO, Format, resolve_format, resolve_target_format


def _source_option(ctx: click.Context, param: click.Parameter, value: str) -> Union[str, Format]:
    if value.strip().lower() == AUTO:
        return AUTO
    try:
        return resolve_format(value)
    except UnsupportedFormat as e:
        raise click.BadParameter(str(e)) from e


def _target_option(ctx: click.Context, param: click.Parameter, value: str) -> Format:
    try:
        return resolve_target_format(value)
    except UnsupportedFormat as e:
        raise click.BadParameter(str(e)) from e


@click.command()
@click.argument(
    "input_files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--from",
    "-f",
    "from_format",
    default=AUTO,
    show_default=True,
    callback=_source_option,
    help="Source format: auto, json, yaml or toml (auto detects from the file extension)",
)
@click.option(
    "--to",
    "-t",
    "to_format",
    default=Format.JSON.value,
    show_default=True,
    callback=_target_option,
    help="Target format: json, yaml or toml",
)
@click.option("--pretty", "-p", is_flag=True, help="Pretty-print output (no effect on YAML)")
@click.option(
    "--indent",
    type=click.IntRange(min=1),
    default=2,
    show_default=True,
    help="Indentation level for pretty JSON and YAML",
)
@click.option(
    "--query",
    "-q",
    help="JMESPath query to extract data",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (print to stdout if not specified)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    input_files: Tuple[Path, ...],
    from_format: Union[str, Format],
    to_format: Format,
    pretty: bool,
    indent: int,
    query: Optional[str],
    output: Optional[Path],
    verbose: bool,
):
    """
    Data Converter - Convert between JSON, YAML, and TOML formats.

    Reads standard input when no file is given; --from is then required.

    Examples:

        \b
        # Convert TOML to JSON
        data-convert config.toml

        \b
        # Convert JSON to YAML with output file
        data-convert data.json --to yaml --output data.yaml

        \b
        # Query and convert
        data-convert users.json --to yaml --query 'users[0]'

        \b
        # Pretty print from stdin
        cat minified.json | data-convert --from json --pretty --indent 4
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "WARNING"
    setup_logger(__package__, level=log_level)

    if output and len(input_files) > 1:
        raise click.UsageError("--output accepts a single input file")

    converter = DataConverter()
    source: Optional[Path] = None

    try:
        for source in input_files or (None,):
            if source is None:
                stdin_format = resolve_format(from_format)
                data = converter.parse(click.get_text_stream("stdin").read(), stdin_format)
            else:
                data = converter.load_file(source, format=None if from_format == AUTO else from_format)

            if query:
                data = converter.query(data, query)

            output_data = converter.serialize(data, to_format, pretty=pretty, indent=indent)

            if output:
                output.write_text(output_data + "\n", encoding="utf-8")
                success(f"Converted to {output}")
            else:
                click.echo(output_data)

    except ConversionError as e:
        error(str(e))
        if verbose:
            raise
        sys.exit(1)

    except UnicodeDecodeError as e:
        error(f"{source or 'stdin'} is not valid UTF-8: {e}")
        if verbose:
            raise
        sys.exit(1)

    except OSError as e:
        error(str(e))
        if verbose:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
