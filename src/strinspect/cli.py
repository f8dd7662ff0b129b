import os
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from strinspect.config import InspectConfig, load_config
from strinspect.decoding import DecodedSequence, decode
from strinspect.encodings import CodecEncoding, lookup_encoding, supported_labels
from strinspect.errors import UnknownEncodingError
from strinspect.highlight import highlight_non_ascii, rows_text
from strinspect.logging_config import get_logger, setup_logging
from strinspect.render import columns_for_width, format_plain_text
from strinspect.report import dumps_report

app = typer.Typer(help="Inspect how bytes decode under different character encodings.")
console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)
COLOR_MODES = {"auto", "always", "never"}


def _read_bytes(path: Path) -> bytes:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path.read_bytes()


def _read_input(text: list[str] | None, file: Path | None) -> bytes:
    if text:
        # Arguments keep their raw bytes, so undecodable input survives the shell.
        return b" ".join(os.fsencode(arg) for arg in text)
    if file:
        return _read_bytes(file)
    err_console.print("No arguments passed to program: reading text from standard input...")
    return typer.get_binary_stream("stdin").read()


def _resolve_encodings(labels: list[str]) -> list[CodecEncoding]:
    try:
        return [lookup_encoding(label) for label in labels]
    except UnknownEncodingError as exc:
        raise typer.BadParameter(str(exc), param_hint="--encoding") from exc


def _output_console(color: str, configured: bool | None) -> Console:
    mode = color.lower()
    if mode not in COLOR_MODES:
        raise typer.BadParameter(f"Unsupported color mode '{color}'. Choose from {COLOR_MODES}.")
    if mode == "auto" and configured is not None:
        mode = "always" if configured else "never"
    if mode == "always":
        return Console(highlight=False, force_terminal=True, color_system="standard")
    if mode == "never":
        return Console(highlight=False, no_color=True)
    return console


def display_decodings(out: Console, decodings: list[DecodedSequence], total_width: int) -> None:
    columns = columns_for_width(total_width)
    color = out.is_terminal and not out.no_color
    for index, sequence in enumerate(decodings):
        if index:
            out.print()
        out.print(rows_text(sequence, columns, color=color), soft_wrap=True)
        out.print()
        # Text drops CR, FF and BEL; the plain row is written as is.
        plain = format_plain_text(sequence)
        out.file.write(highlight_non_ascii(plain, out.color_system if color else None) + "\n")
        out.file.flush()


@app.command()
def inspect(
    text: list[str] | None = typer.Argument(
        None, help="Text to inspect. Reads standard input when omitted."
    ),
    encoding: list[str] | None = typer.Option(
        None, "--encoding", "-e", help="Encoding to include in the output (repeatable)."
    ),
    file: Path | None = typer.Option(None, "--file", "-f", help="Read the input bytes from a file."),
    width: int | None = typer.Option(
        None, "--width", "-w", min=8, help="Total output width; defaults to the terminal width."
    ),
    color: str = typer.Option("auto", "--color", help="Colour output: auto | always | never."),
    json_output: bool = typer.Option(False, "--json", help="Emit a JSON report instead."),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="YAML or JSON file with default settings."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
) -> None:
    """Show each decoded character under the bytes it came from."""
    try:
        cfg = load_config(config) if config else InspectConfig()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Cannot load config {config}: {exc}") from exc
    setup_logging("DEBUG" if verbose else cfg.log_level, json_logs=cfg.log_json)

    encodings = _resolve_encodings(encoding or cfg.encodings)
    out = _output_console(color, cfg.color)
    data = _read_input(text, file)
    # rich reports 80 columns when stdout is not a terminal; let the config decide then.
    total_width = width or cfg.resolve_width(out.width if out.is_terminal else None)
    logger.debug(
        "inspect_settings",
        encodings=[enc.name for enc in encodings],
        bytes=len(data),
        width=total_width,
    )

    decodings = [decode(data, enc) for enc in encodings]
    if json_output:
        out.print(dumps_report(decodings), markup=False, emoji=False, soft_wrap=True)
    else:
        display_decodings(out, decodings, total_width)


@app.command("encodings")
def list_encodings() -> None:
    """List the accepted encoding labels."""
    table = Table(title="Supported Encodings")
    table.add_column("Label")
    table.add_column("Codec")
    for label, codec in supported_labels().items():
        table.add_row(label, codec)
    console.print(table)


if __name__ == "__main__":
    app()
