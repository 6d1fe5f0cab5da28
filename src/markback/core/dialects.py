"""Output dialects and their delimiter tables.

Shared traversal never asks which dialect is active. Everything that differs
between Textile and Markdown is either a handler registered for one dialect
only (see :mod:`markback.core.rules`) or a value looked up in the
:class:`DialectSyntax` table below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Dialect(str, Enum):
    """Target markup dialects."""

    TEXTILE = "textile"
    MARKDOWN = "markdown"


ALL_DIALECTS: tuple[Dialect, ...] = tuple(Dialect)


def _frozen(mapping: dict[str, tuple[str, str]]) -> Mapping[str, tuple[str, str]]:
    return MappingProxyType(mapping)


@dataclass(frozen=True, slots=True)
class DialectSyntax:
    """Delimiters and fixed tokens used by one dialect.

    ``phrases`` maps an inline tag to its opening/closing delimiters. A tag
    missing from the mapping has no token in the dialect and renders as plain
    text.
    """

    dialect: Dialect
    phrases: Mapping[str, tuple[str, str]] = field(default_factory=dict)
    decorations: Mapping[str, tuple[str, str]] = field(default_factory=dict)
    plain_span: tuple[str, str] = ("", "")
    horizontal_rule: str = "---"
    quote_prefix: str = "> "
    line_break: str = "\n"

    def phrase(self, tag: str) -> tuple[str, str]:
        """Return the delimiters for an inline tag, empty when unsupported."""
        return self.phrases.get(tag, ("", ""))

    def decoration(self, name: str) -> tuple[str, str]:
        """Return the delimiters for a ``text-decoration`` keyword."""
        return self.decorations.get(name, ("", ""))


TEXTILE_SYNTAX = DialectSyntax(
    dialect=Dialect.TEXTILE,
    phrases=_frozen(
        {
            "strong": ("*", "*"),
            "b": ("*", "*"),
            "em": ("_", "_"),
            "i": ("_", "_"),
            "del": ("-", "-"),
            "s": ("-", "-"),
            "strike": ("-", "-"),
            "ins": ("+", "+"),
            "u": ("+", "+"),
            "code": ("@", "@"),
            "sup": ("^", "^"),
            "sub": ("~", "~"),
            "cite": ("??", "??"),
        }
    ),
    decorations=_frozen(
        {
            "underline": ("+", "+"),
            "line-through": ("-", "-"),
        }
    ),
    plain_span=("%", "%"),
)

MARKDOWN_SYNTAX = DialectSyntax(
    dialect=Dialect.MARKDOWN,
    phrases=_frozen(
        {
            "strong": ("**", "**"),
            "b": ("**", "**"),
            "em": ("*", "*"),
            "i": ("*", "*"),
            "del": ("~~", "~~"),
            "s": ("~~", "~~"),
            "strike": ("~~", "~~"),
            "code": ("`", "`"),
        }
    ),
    decorations=_frozen({"line-through": ("~~", "~~")}),
)

SYNTAX: Mapping[Dialect, DialectSyntax] = MappingProxyType(
    {
        Dialect.TEXTILE: TEXTILE_SYNTAX,
        Dialect.MARKDOWN: MARKDOWN_SYNTAX,
    }
)


def resolve_dialect(value: Dialect | str) -> Dialect:
    """Coerce a dialect name (case-insensitive) into a :class:`Dialect`."""
    if isinstance(value, Dialect):
        return value
    try:
        return Dialect(value.strip().lower())
    except ValueError:
        choices = ", ".join(item.value for item in Dialect)
        raise ValueError(f"Unknown dialect '{value}', expected one of: {choices}") from None


__all__ = [
    "ALL_DIALECTS",
    "MARKDOWN_SYNTAX",
    "SYNTAX",
    "TEXTILE_SYNTAX",
    "Dialect",
    "DialectSyntax",
    "resolve_dialect",
]
