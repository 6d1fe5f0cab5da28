"""Table serialisation for both dialects."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from markback.core.context import ConversionContext
from markback.core.dialects import Dialect
from markback.core.nodes import Node
from markback.core.rules import renders
from markback.core.styles import StyleDeclaration

from ._helpers import coerce_int


_SECTIONS = ("thead", "tbody", "tfoot")
_CELLS = ("td", "th")

_HORIZONTAL = {"left": "<", "right": ">", "center": "=", "justify": "<>"}
_VERTICAL = {"top": "^", "middle": "-", "bottom": "~"}


@dataclass(frozen=True, slots=True)
class TableCell:
    """One converted cell with the metadata the serialisers need."""

    content: str
    header: bool
    colspan: int
    rowspan: int
    style: StyleDeclaration
    align: str
    valign: str


def iter_rows(table: Node) -> Iterator[Node]:
    """Yield the rows of ``table`` in document order, without entering nested tables."""
    for child in table.element_children:
        if child.tag == "tr":
            yield child
        elif child.tag in _SECTIONS:
            for row in child.element_children:
                if row.tag == "tr":
                    yield row


def collect_cells(row: Node, context: ConversionContext) -> list[TableCell]:
    cell_context = context.in_cell().outside_lists()
    cells: list[TableCell] = []
    for cell in row.element_children:
        if cell.tag not in _CELLS:
            continue
        style = context.style_of(cell)
        cells.append(
            TableCell(
                content=cell_context.render_children(cell).strip(),
                header=cell.tag == "th",
                colspan=coerce_int(cell.get("colspan")),
                rowspan=coerce_int(cell.get("rowspan")),
                style=style,
                align=(style.get("text-align") or cell.get("align") or "").strip().lower(),
                valign=(style.get("vertical-align") or cell.get("valign") or "").strip().lower(),
            )
        )
    return cells


def textile_cell_modifiers(cell: TableCell, context: ConversionContext) -> str:
    """Return the ``_\\N/N<^{...}.`` signature of a Textile cell, or ``""``."""
    modifiers = ""
    if cell.header:
        modifiers += "_"
    if cell.colspan > 1:
        modifiers += f"\\{cell.colspan}"
    if cell.rowspan > 1:
        modifiers += f"/{cell.rowspan}"
    modifiers += _HORIZONTAL.get(cell.align, "")
    modifiers += _VERTICAL.get(cell.valign, "")
    modifiers += context.annotation(cell.style)
    return f"{modifiers}." if modifiers else ""


@renders("table", dialects=Dialect.TEXTILE, name="textile_tables", block=True)
def render_textile_table(node: Node, context: ConversionContext) -> str:
    lines: list[str] = []
    annotation = context.annotation(context.style_of(node))
    if annotation:
        lines.append(f"table{annotation}.")

    for row in iter_rows(node):
        cells = collect_cells(row, context)
        if not cells:
            continue
        rendered = [f"{textile_cell_modifiers(cell, context)} {cell.content} " for cell in cells]
        lines.append("|" + "|".join(rendered) + "|")
    return "\n".join(lines)


def _markdown_cell(content: str) -> str:
    return content.replace("|", "\\|")


def _markdown_row(values: list[str]) -> str:
    return "| " + " | ".join(values) + " |"


@renders("table", dialects=Dialect.MARKDOWN, name="markdown_tables", block=True)
def render_markdown_table(node: Node, context: ConversionContext) -> str:
    """Pipe table; the first row is the header and spans are dropped."""
    rows = [
        [_markdown_cell(cell.content) for cell in collect_cells(row, context)]
        for row in iter_rows(node)
    ]
    rows = [row for row in rows if row]
    if not rows:
        return ""

    width = max(len(row) for row in rows)
    padded = [row + [""] * (width - len(row)) for row in rows]
    lines = [_markdown_row(padded[0]), _markdown_row(["---"] * width)]
    lines.extend(_markdown_row(row) for row in padded[1:])
    return "\n".join(lines)
