"""Inline CSS parsing and dialect-specific style annotations."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import re
from types import MappingProxyType

from .config import StyleConfig
from .dialects import Dialect


StyleDeclaration = dict[str, str]
"""Ordered CSS property/value mapping in source order."""

STRUCTURAL_PROPERTIES: frozenset[str] = frozenset(
    {"text-decoration", "text-align", "vertical-align"}
)
"""Properties consumed by handlers as markup rather than re-emitted as style text."""

_RGB_PATTERN = re.compile(
    r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$",
    re.IGNORECASE,
)
_HEX_PATTERN = re.compile(r"^#(?:[0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)


def normalize_color(value: str) -> str:
    """Rewrite ``rgb()`` colours to lowercase hex and lowercase hex literals.

    Named colours and unsupported notations are returned unchanged.
    """
    candidate = value.strip()
    match = _RGB_PATTERN.match(candidate)
    if match:
        red, green, blue = (min(255, int(component)) for component in match.groups())
        return f"#{red:02x}{green:02x}{blue:02x}"
    if _HEX_PATTERN.match(candidate):
        return candidate.lower()
    return candidate


class StyleParser:
    """Parse ``style`` attributes into filtered declarations."""

    def __init__(self, config: StyleConfig | None = None) -> None:
        self.config = config or StyleConfig()
        self._allowed = frozenset(self.config.allowed_properties)
        self._colors = frozenset(self.config.color_properties)

    def parse(self, style: str | None) -> StyleDeclaration:
        """Return the recognised declarations of ``style`` in source order.

        Malformed segments (no ``:``, empty name or value) are skipped.
        Duplicate properties keep the value of their last occurrence.
        """
        declarations: StyleDeclaration = {}
        if not style:
            return declarations

        for segment in style.split(";"):
            segment = segment.strip()
            if not segment or ":" not in segment:
                continue
            name, _, value = segment.partition(":")
            name = name.strip().lower()
            value = value.strip()
            if not name or not value or name not in self._allowed:
                continue
            if name in self._colors:
                value = normalize_color(value)
            declarations[name] = value
        return declarations


def without(declarations: Mapping[str, str], keys: Iterable[str]) -> StyleDeclaration:
    """Return a copy of ``declarations`` without ``keys``, order preserved."""
    excluded = set(keys)
    return {name: value for name, value in declarations.items() if name not in excluded}


def _textile_annotation(declarations: Mapping[str, str]) -> str:
    if not declarations:
        return ""
    body = " ".join(f"{name}: {value};" for name, value in declarations.items())
    return f"{{{body}}}"


def _no_annotation(_declarations: Mapping[str, str]) -> str:
    return ""


_ANNOTATION_FORMATTERS: Mapping[Dialect, Callable[[Mapping[str, str]], str]] = MappingProxyType(
    {
        Dialect.TEXTILE: _textile_annotation,
        Dialect.MARKDOWN: _no_annotation,
    }
)


def format_style_annotation(
    declarations: Mapping[str, str],
    dialect: Dialect,
    *,
    exclude: Iterable[str] = STRUCTURAL_PROPERTIES,
) -> str:
    """Render the dialect's inline style annotation, or ``""`` when nothing remains."""
    remaining = without(declarations, exclude)
    return _ANNOTATION_FORMATTERS[dialect](remaining)


__all__ = [
    "STRUCTURAL_PROPERTIES",
    "StyleDeclaration",
    "StyleParser",
    "format_style_annotation",
    "normalize_color",
    "without",
]
