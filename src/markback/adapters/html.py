"""BeautifulSoup host adapter producing :class:`~markback.core.nodes.Node` trees."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import (
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    PageElement,
    ProcessingInstruction,
    Tag,
)

from markback.core.diagnostics import DiagnosticEmitter, NullEmitter
from markback.core.exceptions import InvalidNodeError, NestingDepthError
from markback.core.nodes import DOCUMENT_NODE, TEXT_NODE, Node
from markback.core.rules import DEFAULT_MAX_DEPTH


logger = logging.getLogger(__name__)

FALLBACK_PARSER = "html.parser"

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def parse_html(
    html: str | bytes,
    parser: str = "lxml",
    *,
    emitter: DiagnosticEmitter | None = None,
) -> tuple[BeautifulSoup, str]:
    """Parse ``html`` and return the soup with the backend actually used.

    Falls back to the standard library parser when ``parser`` is not installed.
    """
    try:
        return BeautifulSoup(html, parser), parser
    except FeatureNotFound:
        if parser == FALLBACK_PARSER:
            raise
        (emitter or NullEmitter()).event(
            "parser_fallback", {"preferred": parser, "fallback": FALLBACK_PARSER}
        )
        logger.debug("Parser %s unavailable, falling back to %s", parser, FALLBACK_PARSER)
        return BeautifulSoup(html, FALLBACK_PARSER), FALLBACK_PARSER


def _attribute_value(value: Any) -> str:
    # Multi-valued attributes such as ``class`` come back as lists.
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


def _convert_children(
    children: Iterable[PageElement], depth: int, max_depth: int
) -> tuple[Node, ...]:
    nodes: list[Node] = []
    for child in children:
        converted = _convert(child, depth, max_depth)
        if converted is not None:
            nodes.append(converted)
    return tuple(nodes)


def _convert(element: PageElement, depth: int, max_depth: int) -> Node | None:
    if isinstance(element, NavigableString):
        if isinstance(element, _SKIPPED_STRINGS):
            return None
        return Node(tag=TEXT_NODE, text=str(element))

    if not isinstance(element, Tag):
        return None
    if depth > max_depth:
        raise NestingDepthError(max_depth, element.name)

    attributes = {
        str(name).lower(): _attribute_value(value) for name, value in element.attrs.items()
    }
    tag = DOCUMENT_NODE if isinstance(element, BeautifulSoup) else element.name
    return Node(
        tag=tag,
        attributes=attributes,
        children=_convert_children(element.children, depth + 1, max_depth),
    )


def to_node(element: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Node:
    """Convert a BeautifulSoup document, tag or string into a :class:`Node` tree.

    Raises:
        InvalidNodeError: When ``element`` is not a BeautifulSoup object.
        NestingDepthError: When the tree is nested deeper than ``max_depth``.
    """
    if isinstance(element, Node):
        return element
    if not isinstance(element, PageElement):
        raise InvalidNodeError(
            f"Expected a BeautifulSoup element, got {type(element).__name__}"
        )
    try:
        node = _convert(element, 0, max_depth)
    except RecursionError as exc:
        raise NestingDepthError(max_depth, getattr(element, "name", None)) from exc
    if node is None:
        return Node(tag=DOCUMENT_NODE)
    return node


def html_to_node(
    html: str | bytes,
    parser: str = "lxml",
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    emitter: DiagnosticEmitter | None = None,
) -> Node:
    """Parse ``html`` and convert it into a document :class:`Node`."""
    soup, _backend = parse_html(html, parser, emitter=emitter)
    return to_node(soup, max_depth=max_depth)


__all__ = ["FALLBACK_PARSER", "html_to_node", "parse_html", "to_node"]
