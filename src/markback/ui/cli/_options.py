"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from markback.core.dialects import Dialect


INPUTS_PANEL = "Input Handling"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputArgument = Annotated[
    str,
    typer.Argument(
        metavar="INPUT",
        help="HTML file to convert, or '-' to read from standard input.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

DialectOption = Annotated[
    Dialect,
    typer.Option(
        "--dialect",
        "-d",
        case_sensitive=False,
        help="Markup dialect to produce.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output file. Defaults to stdout.",
        show_default=False,
        dir_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ParserOption = Annotated[
    str,
    typer.Option(
        "--parser",
        help='BeautifulSoup parser backend to use (falls back to "html.parser").',
        rich_help_panel=INPUTS_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


__all__ = [
    "DIAGNOSTICS_PANEL",
    "INPUTS_PANEL",
    "OUTPUT_PANEL",
    "DebugOption",
    "DialectOption",
    "InputArgument",
    "OutputPathOption",
    "ParserOption",
    "VerboseOption",
]
