"""Implementation of the `markback rules` command."""

from __future__ import annotations

from typing import Annotated

import typer

from markback.adapters.renderer import MarkupRenderer
from markback.core.dialects import Dialect

from ..state import get_cli_state


def rules(
    dialect: Annotated[
        Dialect | None,
        typer.Option(
            "--dialect",
            "-d",
            case_sensitive=False,
            help="Only list the rules of this dialect.",
        ),
    ] = None,
) -> None:
    """List the registered render rules in dispatch order."""
    from rich.table import Table

    entries = MarkupRenderer().describe_registered_rules()
    if dialect is not None:
        entries = [entry for entry in entries if entry["dialect"] == dialect.value]

    table = Table("Dialect", "Tag", "Order", "Block")
    table.add_column("Rule", no_wrap=True)
    for entry in entries:
        table.add_row(
            str(entry["dialect"]),
            str(entry["tag"]),
            str(entry["order"]),
            "yes" if entry["block"] else "no",
            str(entry["name"]),
        )
    get_cli_state().console.print(table)


__all__ = ["rules"]
