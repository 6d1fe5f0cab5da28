"""Conversion context threaded through every handler call."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .diagnostics import DiagnosticEmitter, NullEmitter
from .dialects import Dialect, DialectSyntax
from .links import LinkResolver
from .styles import STRUCTURAL_PROPERTIES, StyleDeclaration, StyleParser, format_style_annotation


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .nodes import Node
    from .rules import RenderEngine


@dataclass(frozen=True, slots=True)
class ConversionContext:
    """Ambient state for one dispatch call.

    Instances are never mutated: handlers derive a copy for their children
    (``quoted()``, ``in_cell()``, ...) so state cannot leak between branches.
    The service references (engine, parsers, emitter) are shared read-only.
    """

    dialect: Dialect
    engine: RenderEngine = field(compare=False, repr=False)
    syntax: DialectSyntax = field(compare=False, repr=False)
    styles: StyleParser = field(default_factory=StyleParser, compare=False, repr=False)
    links: LinkResolver = field(default_factory=LinkResolver, compare=False, repr=False)
    emitter: DiagnosticEmitter = field(default_factory=NullEmitter, compare=False, repr=False)
    quote_depth: int = 0
    in_table_cell: bool = False
    in_preformatted: bool = False
    list_markers: tuple[str, ...] = ()
    level: int = 0

    @property
    def block_separator(self) -> str:
        """Separator placed between sibling blocks."""
        if self.in_table_cell or self.list_markers:
            return "\n"
        return "\n\n"

    def quoted(self) -> ConversionContext:
        return replace(self, quote_depth=self.quote_depth + 1)

    def in_cell(self) -> ConversionContext:
        return replace(self, in_table_cell=True)

    def preformatted(self) -> ConversionContext:
        return replace(self, in_preformatted=True)

    def in_list(self, marker: str) -> ConversionContext:
        return replace(self, list_markers=(*self.list_markers, marker))

    def outside_lists(self) -> ConversionContext:
        return replace(self, list_markers=())

    def descend(self) -> ConversionContext:
        return replace(self, level=self.level + 1)

    def render(self, node: Node) -> str:
        """Convert ``node`` with this context."""
        return self.engine.render(node, self)

    def render_children(self, node: Node) -> str:
        """Convert and join the children of ``node`` with this context."""
        return self.engine.render_children(node, self)

    def style_of(self, node: Node) -> StyleDeclaration:
        """Return the filtered style declarations of ``node``."""
        return self.styles.parse(node.get("style"))

    def annotation(
        self,
        declarations: Mapping[str, str],
        *,
        exclude: Iterable[str] = STRUCTURAL_PROPERTIES,
    ) -> str:
        """Return the dialect's inline style annotation for ``declarations``."""
        return format_style_annotation(declarations, self.dialect, exclude=exclude)


__all__ = ["ConversionContext"]
