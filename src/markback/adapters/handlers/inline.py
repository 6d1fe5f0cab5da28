"""Inline phrase handlers: emphasis, spans, inline code and abbreviations."""

from __future__ import annotations

import re

from markback.core.context import ConversionContext
from markback.core.dialects import Dialect
from markback.core.nodes import Node
from markback.core.rules import renders

from ._helpers import wrap_phrase


PHRASE_TAGS: tuple[str, ...] = (
    "strong",
    "b",
    "em",
    "i",
    "del",
    "s",
    "strike",
    "ins",
    "u",
    "sup",
    "sub",
    "cite",
)

_BACKTICK_RUN = re.compile(r"`+")


@renders(*PHRASE_TAGS, name="phrases")
def render_phrase(node: Node, context: ConversionContext) -> str:
    """Wrap phrase content in the dialect delimiters for ``node.tag``.

    Dialects without a notation for the element keep the bare content.
    """
    content = context.render_children(node)
    opening, closing = context.syntax.phrase(node.tag)
    if not opening:
        return content
    annotation = context.annotation(context.style_of(node))
    return wrap_phrase(content, opening, closing, annotation)


@renders("span", name="spans")
def render_span(node: Node, context: ConversionContext) -> str:
    """Render spans, mapping ``text-decoration`` onto phrase delimiters.

    The first decoration becomes the outermost wrapper and carries the style
    annotation. Spans without a usable decoration use the plain span syntax.
    """
    content = context.render_children(node)
    declarations = context.style_of(node)
    annotation = context.annotation(declarations)

    wrappers: list[tuple[str, str]] = []
    for token in declarations.get("text-decoration", "").lower().split():
        delimiters = context.syntax.decoration(token)
        if delimiters[0] and delimiters not in wrappers:
            wrappers.append(delimiters)
    if not wrappers:
        wrappers.append(context.syntax.plain_span)

    result = content
    for depth, (opening, closing) in enumerate(reversed(wrappers)):
        outermost = depth == len(wrappers) - 1
        result = wrap_phrase(result, opening, closing, annotation if outermost else "")
    return result


@renders("code", dialects=Dialect.TEXTILE, name="textile_inline_code")
def render_textile_code(node: Node, _context: ConversionContext) -> str:
    text = node.text_content()
    if not text:
        return ""
    return f"@{text}@"


@renders("code", dialects=Dialect.MARKDOWN, name="markdown_inline_code")
def render_markdown_code(node: Node, _context: ConversionContext) -> str:
    """Fence inline code with more backticks than the content contains."""
    text = node.text_content()
    if not text:
        return ""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)
    fence = "`" * (longest + 1)
    if text.startswith("`") or text.endswith("`"):
        text = f" {text} "
    return f"{fence}{text}{fence}"


@renders("abbr", "acronym", name="abbreviations")
def render_abbreviation(node: Node, context: ConversionContext) -> str:
    content = context.render_children(node)
    title = (node.get("title") or "").strip()
    if not title or not content.strip():
        return content
    return f"{content}({title})"
