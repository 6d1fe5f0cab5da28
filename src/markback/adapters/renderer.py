"""High-level HTML to plain-text markup renderer."""

from __future__ import annotations

from typing import Any

from markback.core.config import ConverterConfig
from markback.core.context import ConversionContext
from markback.core.diagnostics import DiagnosticEmitter, NullEmitter
from markback.core.dialects import SYNTAX, Dialect, resolve_dialect
from markback.core.exceptions import MarkupConversionError
from markback.core.links import LinkResolver
from markback.core.nodes import Node
from markback.core.rules import RenderEngine
from markback.core.styles import StyleParser

from .html import parse_html, to_node


class MarkupRenderer:
    """Convert HTML fragments or node trees to Textile or Markdown."""

    def __init__(self, config: ConverterConfig | None = None, parser: str = "lxml") -> None:
        self.config = config or ConverterConfig()
        self.parser_backend = parser
        self.styles = StyleParser(self.config.style)
        self.links = LinkResolver(self.config.links)

        self.engine = RenderEngine(max_depth=self.config.max_depth)
        self._register_builtin_handlers()

    def _register_builtin_handlers(self) -> None:
        """Register the initial set of handlers for the renderer."""
        from .handlers import (
            basic as basic_handlers,
            blocks as block_handlers,
            inline as inline_handlers,
            links as link_handlers,
            tables as table_handlers,
        )

        self.engine.collect_from(basic_handlers)
        self.engine.collect_from(inline_handlers)
        self.engine.collect_from(link_handlers)
        self.engine.collect_from(block_handlers)
        self.engine.collect_from(table_handlers)

    def register(self, handler: Any) -> None:
        """Register additional handlers on demand.

        Arguments can be callables decorated with :func:`renders` or modules/classes
        exposing decorated attributes.
        """
        definition = getattr(handler, "__render_rule__", None)
        if definition is not None:
            self.engine.register(handler)
            return

        self.engine.collect_from(handler)

    def context_for(
        self, dialect: Dialect | str, emitter: DiagnosticEmitter | None = None
    ) -> ConversionContext:
        """Build the root conversion context for ``dialect``."""
        selected = resolve_dialect(dialect)
        return ConversionContext(
            dialect=selected,
            engine=self.engine,
            syntax=SYNTAX[selected],
            styles=self.styles,
            links=self.links,
            emitter=emitter or NullEmitter(),
        )

    def convert(
        self,
        node: Node,
        dialect: Dialect | str = Dialect.TEXTILE,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> str:
        """Convert a node tree into the requested dialect."""
        context = self.context_for(dialect, emitter)
        return self.engine.convert(node, context)

    def parse(self, html: str | bytes, *, emitter: DiagnosticEmitter | None = None) -> Node:
        """Parse an HTML string into a document node, honouring the parser fallback."""
        soup, backend = parse_html(html, self.parser_backend, emitter=emitter)
        self.parser_backend = backend
        return to_node(soup, max_depth=self.config.max_depth)

    def render(
        self,
        source: str | bytes | Node | Any,
        dialect: Dialect | str = Dialect.TEXTILE,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> str:
        """Render HTML text, a BeautifulSoup element or a node tree into markup."""
        active_emitter = emitter or NullEmitter()
        try:
            if isinstance(source, Node):
                root = source
            elif isinstance(source, (str, bytes)):
                root = self.parse(source, emitter=active_emitter)
            else:
                root = to_node(source, max_depth=self.config.max_depth)
            return self.convert(root, dialect, emitter=active_emitter)
        except (MarkupConversionError, ValueError):
            raise
        except Exception as exc:  # pragma: no cover - defensive
            raise MarkupConversionError("Markup rendering failed") from exc

    def describe_registered_rules(self) -> list[dict[str, object]]:
        """Return detailed metadata about registered rules."""
        return self.engine.registry.describe()


__all__ = ["MarkupRenderer"]
