"""Implementation of the `markback convert` command."""

from __future__ import annotations

from pathlib import Path
import sys

import typer

from markback.adapters.renderer import MarkupRenderer
from markback.core.dialects import Dialect
from markback.core.exceptions import MarkupConversionError, exception_hint

from .._options import (
    DebugOption,
    DialectOption,
    InputArgument,
    OutputPathOption,
    ParserOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import set_cli_state


def read_input(source: str) -> str:
    """Return the HTML held by ``source``; ``-`` reads standard input."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_output(markup: str, output: Path | None) -> None:
    if output is None:
        typer.echo(markup)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markup + "\n", encoding="utf-8")


def convert(
    ctx: typer.Context,
    source: InputArgument,
    dialect: DialectOption = Dialect.TEXTILE,
    output: OutputPathOption = None,
    parser: ParserOption = "lxml",
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Convert an HTML fragment into Textile or Markdown."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)
    emitter = CliEmitter(state)

    try:
        html = read_input(source)
    except OSError as exc:
        emitter.error(f"Unable to read '{source}'.", exc)
        raise typer.Exit(code=1) from exc

    renderer = MarkupRenderer(parser=parser)
    try:
        markup = renderer.render(html, dialect, emitter=emitter)
    except MarkupConversionError as exc:
        if emitter.debug_enabled:
            raise
        emitter.error(exception_hint(exc) or "Conversion failed.", exc)
        raise typer.Exit(code=1) from exc

    if not markup:
        emitter.warning(f"'{source}' produced no markup.")

    try:
        write_output(markup, output)
    except OSError as exc:
        emitter.error(f"Unable to write '{output}'.", exc)
        raise typer.Exit(code=1) from exc


__all__ = ["convert", "read_input", "write_output"]
