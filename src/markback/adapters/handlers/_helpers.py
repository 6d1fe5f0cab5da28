"""Internal helpers shared across handler modules."""

from __future__ import annotations

from markback.core.nodes import Node


def coerce_int(value: str | None, default: int = 1) -> int:
    """Parse a positive integer attribute such as ``colspan``."""
    if value is None:
        return default
    try:
        number = int(value.strip())
    except ValueError:
        return default
    return number if number > 0 else default


def wrap_phrase(content: str, opening: str, closing: str, annotation: str = "") -> str:
    """Wrap ``content`` in delimiters, keeping surrounding whitespace outside.

    Blank content and empty delimiters yield the content unchanged.
    """
    core = content.strip()
    if not core or not (opening or closing):
        return content
    start = len(content) - len(content.lstrip())
    end = start + len(core)
    return f"{content[:start]}{opening}{annotation}{core}{closing}{content[end:]}"


def prefix_lines(text: str, prefix: str) -> str:
    """Prefix every line of ``text``, blank lines included."""
    return "\n".join(f"{prefix}{line}" for line in text.split("\n"))


def single_line(text: str) -> str:
    """Collapse line breaks for contexts that only accept one line."""
    return " ".join(part.strip() for part in text.splitlines() if part.strip())


def lone_image(node: Node) -> Node | None:
    """Return the lone ``<img>`` child of ``node`` when nothing else is visible."""
    image: Node | None = None
    for child in node.children:
        if child.is_text:
            if child.text.strip():
                return None
            continue
        if child.tag != "img" or image is not None:
            return None
        image = child
    return image
