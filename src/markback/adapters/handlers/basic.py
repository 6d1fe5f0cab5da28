"""Built-in baseline handlers: text, containers, paragraphs, headings, rules."""

from __future__ import annotations

from markback.core.context import ConversionContext
from markback.core.dialects import Dialect
from markback.core.nodes import DOCUMENT_NODE, TEXT_NODE, Node
from markback.core.rules import renders

from ._helpers import single_line


BLOCK_CONTAINERS: tuple[str, ...] = (
    "html",
    "body",
    "div",
    "section",
    "article",
    "main",
    "header",
    "footer",
    "nav",
    "aside",
    "figure",
    "center",
    "address",
)

DISCARDED: tuple[str, ...] = ("head", "title", "script", "style", "template", "noscript")

_TEXTILE_ALIGNMENT = {"left": "<", "right": ">", "center": "=", "justify": "<>"}


@renders(TEXT_NODE, name="text_nodes")
def render_text(node: Node, _context: ConversionContext) -> str:
    """Emit text verbatim."""
    return node.text


@renders(DOCUMENT_NODE, name="document", block=True)
def render_document(node: Node, context: ConversionContext) -> str:
    return context.render_children(node)


@renders(*BLOCK_CONTAINERS, name="block_containers", block=True)
def render_block_container(node: Node, context: ConversionContext) -> str:
    """Pass structural wrappers through while keeping them block-level."""
    return context.render_children(node)


@renders(*DISCARDED, name="discard_unwanted")
def discard_unwanted(_node: Node, _context: ConversionContext) -> str:
    """Drop nodes whose content never reaches the markup."""
    return ""


@renders("br", name="line_breaks")
def render_line_break(_node: Node, context: ConversionContext) -> str:
    return context.syntax.line_break


@renders("hr", name="horizontal_rule", block=True)
def render_horizontal_rule(_node: Node, context: ConversionContext) -> str:
    return context.syntax.horizontal_rule


@renders(
    "p",
    dialects=Dialect.TEXTILE,
    name="textile_paragraph_modifiers",
    block=True,
    before=("paragraphs",),
)
def render_textile_paragraph_modifiers(node: Node, context: ConversionContext) -> str | None:
    """Emit ``p<.``/``p{...}.`` signatures for aligned or styled paragraphs.

    Signatures only work at the start of a top-level block, so quoted, listed
    and table-cell paragraphs fall through to the plain paragraph rule.
    """
    if context.quote_depth or context.in_table_cell or context.list_markers:
        return None
    declarations = context.style_of(node)
    alignment = _TEXTILE_ALIGNMENT.get(declarations.get("text-align", "").lower(), "")
    annotation = context.annotation(declarations)
    if not alignment and not annotation:
        return None
    content = context.render_children(node).strip()
    if not content:
        return ""
    return f"p{alignment}{annotation}. {content}"


@renders("p", name="paragraphs", block=True)
def render_paragraph(node: Node, context: ConversionContext) -> str:
    return context.render_children(node).strip()


@renders("h1", "h2", "h3", "h4", "h5", "h6", dialects=Dialect.TEXTILE, name="textile_headings", block=True)
def render_textile_heading(node: Node, context: ConversionContext) -> str:
    """Convert ``<hN>`` into ``hN. title``."""
    text = single_line(context.render_children(node))
    if not text:
        return ""
    return f"{node.tag}. {text}"


@renders("h1", "h2", "h3", "h4", "h5", "h6", dialects=Dialect.MARKDOWN, name="markdown_headings", block=True)
def render_markdown_heading(node: Node, context: ConversionContext) -> str:
    """Convert ``<hN>`` into ATX headings."""
    text = single_line(context.render_children(node))
    if not text:
        return ""
    level = int(node.tag[1:])
    return f"{'#' * level} {text}"
