"""Command-line interface for rdfconv."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import ConfigError, ConvertConfig, merge_config
from .errors import ConversionError
from .export import literal_export_for
from .formats.builtin import default_registry
from .formats.registry import FormatRegistry
from .logging import configure_logging, get_logger
from .paths import base_iri_for, write_atomic
from .pipeline import Converter
from .sources import accept_header, read_source

app = typer.Typer(help="Convert RDF graphs between serialization formats.")
LOGGER = get_logger(__name__)


@app.callback()
def main() -> None:
    """rdfconv CLI root."""
    return None


def _convert_help(registry: FormatRegistry) -> str:
    input_formats = ", ".join(registry.list_parseable().names())
    output_formats = ", ".join(registry.list_serializable().names())
    return (
        "Converts a file from one format to another.\n\n"
        f"Supported input formats: {input_formats}\n\n"
        f"Supported output formats: {output_formats}"
    )


def _load_config(config_file: Optional[Path], cli_options: dict[str, object]) -> ConvertConfig:
    try:
        return merge_config(config_file, cli_options)
    except (ConfigError, ValidationError) as error:
        raise typer.BadParameter(str(error), param_hint="--config") from error


def _run(config: ConvertConfig) -> bytes:
    registry = default_registry()
    converter = Converter(registry, sniff_limit=config.sniff_bytes)
    literal = literal_export_for(config.to_format)
    target_format = literal.base_format if literal else config.to_format

    # Fail on an unusable output format before reading or parsing anything.
    converter.resolver.resolve_for_serialize(target_format)

    if config.from_format is None:
        LOGGER.info("Will guess input format...")

    stdin = typer.get_binary_stream("stdin")
    accept = accept_header(registry)
    for source in config.inputs or [None]:
        loaded = read_source(source, stdin=stdin, timeout=config.url_timeout, accept=accept)
        if loaded.name and source is not None:
            LOGGER.info("%d kB read from %s", loaded.kilobytes, loaded.name)
        converter.load(
            loaded.data,
            hint=config.from_format,
            source_name=loaded.name,
            content_type=loaded.content_type,
            base=base_iri_for(loaded.name),
        )

    payload = converter.dump(target_format)
    if literal:
        payload = literal.render(payload)
    return payload


@app.command("convert", help=_convert_help(default_registry()))
def convert(
    inputs: Optional[List[str]] = typer.Argument(None, help="Input sources (files or URLs); STDIN when omitted."),
    from_format: Optional[str] = typer.Option(None, "--from", help="From input format (guessed when omitted)."),
    to_format: Optional[str] = typer.Option(None, "--to", help="To output format [default: jsonld]."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="The output file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Report progress on stderr."),
    config_file: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="YAML configuration file."),
    log_level: Optional[str] = typer.Option(None, help="Log level."),
) -> None:
    cli_options: dict[str, object] = {
        "inputs": list(inputs) if inputs else None,
        "from_format": from_format,
        "to_format": to_format,
        "output": str(output) if output is not None else None,
        "verbose": verbose or None,
        "log_level": log_level,
    }
    config = _load_config(config_file, cli_options)
    configure_logging(config.log_level, verbose=config.verbose)

    try:
        payload = _run(config)
        if config.output:
            write_atomic(Path(config.output), payload)
    except ConversionError as error:
        LOGGER.debug("Conversion failed", exc_info=error)
        typer.echo(f"{error.kind}: {error}", err=True)
        raise typer.Exit(code=1) from error

    if config.output:
        LOGGER.info("Wrote %d bytes to %s", len(payload), config.output)
    else:
        typer.echo(payload, nl=False)


@app.command("formats")
def formats() -> None:
    """List supported formats and their capabilities."""
    table = Table(title="Supported formats")
    table.add_column("Name", no_wrap=True)
    for column in ("Label", "Parse", "Serialize", "Extensions"):
        table.add_column(column)
    table.add_column("MIME types", overflow="fold")
    for descriptor in default_registry():
        table.add_row(
            descriptor.name,
            descriptor.label,
            "yes" if descriptor.has_parser else "-",
            "yes" if descriptor.has_serializer else "-",
            ", ".join(descriptor.extensions),
            ", ".join(descriptor.mime_types),
        )
    Console().print(table)


if __name__ == "__main__":
    app()
