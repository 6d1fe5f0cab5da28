"""Convert WYSIWYG editor HTML into Textile or Markdown."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version as _pkg_version
from typing import Any

from markback.adapters.html import html_to_node, parse_html, to_node
from markback.adapters.renderer import MarkupRenderer
from markback.core.config import ConverterConfig, LinkConfig, StyleConfig
from markback.core.context import ConversionContext
from markback.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from markback.core.dialects import Dialect
from markback.core.exceptions import InvalidNodeError, MarkupConversionError, NestingDepthError
from markback.core.nodes import Node
from markback.core.rules import renders


try:
    __version__ = _pkg_version("markback")
except PackageNotFoundError:
    __version__ = "0.0.0"


@lru_cache(maxsize=1)
def _default_renderer() -> MarkupRenderer:
    return MarkupRenderer()


def to_text_textile(root: Node | Any) -> str:
    """Convert a node tree (or BeautifulSoup element) to Textile."""
    return _default_renderer().render(root, Dialect.TEXTILE)


def to_text_markdown(root: Node | Any) -> str:
    """Convert a node tree (or BeautifulSoup element) to Markdown."""
    return _default_renderer().render(root, Dialect.MARKDOWN)


def html_to_textile(html: str | bytes, *, parser: str = "lxml") -> str:
    """Parse ``html`` and convert it to Textile."""
    return MarkupRenderer(parser=parser).render(html, Dialect.TEXTILE)


def html_to_markdown(html: str | bytes, *, parser: str = "lxml") -> str:
    """Parse ``html`` and convert it to Markdown."""
    return MarkupRenderer(parser=parser).render(html, Dialect.MARKDOWN)


__all__ = [
    "ConversionContext",
    "ConverterConfig",
    "DiagnosticEmitter",
    "Dialect",
    "InvalidNodeError",
    "LinkConfig",
    "LoggingEmitter",
    "MarkupConversionError",
    "MarkupRenderer",
    "NestingDepthError",
    "Node",
    "NullEmitter",
    "StyleConfig",
    "__version__",
    "html_to_markdown",
    "html_to_node",
    "html_to_textile",
    "parse_html",
    "renders",
    "to_node",
    "to_text_markdown",
    "to_text_textile",
]
