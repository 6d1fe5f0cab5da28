"""Read-only node model consumed by the conversion engine.

The engine never talks to a concrete DOM implementation. Host adapters (see
:mod:`markback.adapters.html`) translate whatever tree they own into
:class:`Node` instances before conversion starts.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


TEXT_NODE = "#text"
DOCUMENT_NODE = "#document"


@dataclass(frozen=True, slots=True)
class Node:
    """Immutable view over one HTML element or text fragment."""

    tag: str
    text: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tag", self.tag.lower())
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def element(cls, tag: str, *children: Node | str, **attributes: str) -> Node:
        """Build an element node; string children become text nodes.

        Attribute names use underscores for dashes (``data_code`` → ``data-code``)
        and accept a trailing underscore for reserved words (``class_``).
        """
        attrs = {name.rstrip("_").replace("_", "-"): value for name, value in attributes.items()}
        nodes = tuple(cls.text_node(child) if isinstance(child, str) else child for child in children)
        return cls(tag=tag, attributes=attrs, children=nodes)

    @classmethod
    def text_node(cls, text: str) -> Node:
        """Build a text node."""
        return cls(tag=TEXT_NODE, text=text)

    @classmethod
    def document(cls, *children: Node | str) -> Node:
        """Build a synthetic document root wrapping the given children."""
        return cls.element(DOCUMENT_NODE, *children)

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT_NODE

    @property
    def element_children(self) -> tuple[Node, ...]:
        return tuple(child for child in self.children if not child.is_text)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value or ``default``."""
        return self.attributes.get(name, default)

    def classes(self) -> list[str]:
        """Return the whitespace-separated tokens of the ``class`` attribute."""
        return (self.get("class") or "").split()

    def iter_descendants(self) -> Iterator[Node]:
        """Yield every descendant depth-first, in document order."""
        stack = list(reversed(self.children))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def find(self, tag: str) -> Node | None:
        """Return the first descendant element with the given tag."""
        for candidate in self.iter_descendants():
            if candidate.tag == tag:
                return candidate
        return None

    def text_content(self) -> str:
        """Return the concatenated text of the subtree; ``<br>`` counts as a newline."""
        if self.is_text:
            return self.text
        parts: list[str] = []
        for descendant in self.iter_descendants():
            if descendant.is_text:
                parts.append(descendant.text)
            elif descendant.tag == "br":
                parts.append("\n")
        return "".join(parts)


__all__ = ["DOCUMENT_NODE", "TEXT_NODE", "Node"]
