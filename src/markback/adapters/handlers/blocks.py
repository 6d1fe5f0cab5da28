"""Block-level handlers: quotations, preformatted code and lists."""

from __future__ import annotations

from collections.abc import Callable

from markback.core.context import ConversionContext
from markback.core.dialects import Dialect
from markback.core.nodes import Node
from markback.core.rules import renders

from ._helpers import coerce_int, prefix_lines


_LANGUAGE_PREFIXES = ("language-", "lang-")


@renders("blockquote", name="blockquotes", block=True)
def render_blockquote(node: Node, context: ConversionContext) -> str:
    """Prefix every line of the quoted body, one prefix per nesting level."""
    body = context.quoted().render_children(node).strip()
    if not body:
        return ""
    return prefix_lines(body, context.syntax.quote_prefix)


def _strip_language_prefix(value: str) -> str:
    for prefix in _LANGUAGE_PREFIXES:
        if value.startswith(prefix):
            return value[len(prefix) :]
    return value


def _code_language(node: Node) -> str:
    """Return the language of a ``<pre>``: first class of its ``<code>``, then ``data-code``."""
    code = node.find("code")
    if code is not None:
        classes = code.classes()
        if classes:
            return _strip_language_prefix(classes[0])
    return (node.get("data-code") or "").strip()


@renders("pre", dialects=Dialect.TEXTILE, name="textile_preformatted", block=True)
def render_textile_preformatted(node: Node, context: ConversionContext) -> str:
    body = context.preformatted().render_children(node)
    if not body.startswith("\n"):
        body = "\n" + body
    if not body.endswith("\n"):
        body += "\n"
    language = _code_language(node)
    return f'<pre><code class="{language}">{body}</code></pre>'


@renders("pre", dialects=Dialect.MARKDOWN, name="markdown_fenced_code", block=True)
def render_markdown_fenced_code(node: Node, context: ConversionContext) -> str:
    """Emit a ``~~~`` fence, lengthened when the body already contains one."""
    body = context.preformatted().render_children(node)
    if body.startswith("\n"):
        body = body[1:]
    if not body.endswith("\n"):
        body += "\n"
    fence = "~~~"
    while fence in body:
        fence += "~"
    language = (node.get("data-code") or "").strip()
    opening = f"{fence} {language}" if language else fence
    return f"{opening}\n{body}{fence}"


ItemMarker = Callable[[int], str]


def _render_list_items(
    node: Node,
    context: ConversionContext,
    marker_for: ItemMarker,
    prefix_for: Callable[[str], str],
) -> str:
    """Render ``<li>`` children with their markers.

    Only the first line of an item carries the marker; nested lists render
    their own prefixes. Stray elements directly inside the list are rendered
    as if they belonged to the previous item.
    """
    lines: list[str] = []
    index = 0
    for child in node.children:
        if child.is_text:
            if child.text.strip():
                lines.append(child.text.strip())
            continue
        if child.tag != "li":
            rendered = context.in_list(marker_for(max(index - 1, 0))).render(child).strip("\n")
            if rendered.strip():
                lines.append(rendered)
            continue
        marker = marker_for(index)
        content = context.in_list(marker).render_children(child).strip()
        if not content:
            continue
        lines.append(prefix_for(marker) + content)
        index += 1
    return "\n".join(lines)


@renders("ul", "ol", dialects=Dialect.TEXTILE, name="textile_lists", block=True)
def render_textile_list(node: Node, context: ConversionContext) -> str:
    """Textile lists repeat the marker once per nesting level (``**``, ``#*``)."""
    symbol = "#" if node.tag == "ol" else "*"
    parents = "".join(context.list_markers)

    def prefix_for(marker: str) -> str:
        return f"{parents}{marker} "

    return _render_list_items(node, context, lambda _index: symbol, prefix_for)


@renders("ul", "ol", dialects=Dialect.MARKDOWN, name="markdown_lists", block=True)
def render_markdown_list(node: Node, context: ConversionContext) -> str:
    """Markdown lists indent nested items by the width of the parent markers."""
    indent = " " * sum(len(marker) for marker in context.list_markers)
    start = coerce_int(node.get("start"), 1) if node.tag == "ol" else 1

    def marker_for(index: int) -> str:
        if node.tag == "ol":
            return f"{start + index}. "
        return "* "

    return _render_list_items(node, context, marker_for, lambda marker: f"{indent}{marker}")


@renders("li", name="orphan_list_items")
def render_orphan_list_item(node: Node, context: ConversionContext) -> str:
    """Items outside any list keep their content only."""
    return context.render_children(node)
