"""Configuration models used by the markup converter.

StyleConfig

`allowed_properties` (`tuple[str, ...]`)
: CSS properties kept by the style declaration parser. Anything else found in
  a ``style`` attribute is dropped silently.

`color_properties` (`tuple[str, ...]`)
: Properties whose values are normalised as colours (``rgb()`` notation is
  rewritten to lowercase hexadecimal).

LinkConfig

`attachment_pattern` (`str`)
: Regular expression matched against the path of link and image targets. A
  match marks the target as a locally hosted attachment; the ``filename``
  group is what ends up in the markup.

`autolink_schemes` (`tuple[str, ...]`)
: URL schemes eligible for autolink collapsing when the visible text repeats
  the target.

ConverterConfig

`style` (`StyleConfig`)
: Nested style parsing settings.

`links` (`LinkConfig`)
: Nested link and image resolution settings.

`max_depth` (`int`)
: Maximum nesting depth accepted before conversion aborts with
  :class:`~markback.core.exceptions.NestingDepthError`. Defaults to 128 and
  may not exceed 150, the depth the recursive walkers can reach safely.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rules import DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING


DEFAULT_STYLE_PROPERTIES: tuple[str, ...] = (
    "color",
    "background-color",
    "width",
    "height",
    "text-align",
    "vertical-align",
    "text-decoration",
)

DEFAULT_ATTACHMENT_PATTERN = r"/attachments/download/\d+/(?P<filename>[^/?#]+)$"


class StyleConfig(BaseModel):
    """Settings for the inline style declaration parser."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    allowed_properties: tuple[str, ...] = DEFAULT_STYLE_PROPERTIES
    color_properties: tuple[str, ...] = ("color", "background-color")

    @field_validator("allowed_properties", "color_properties")
    @classmethod
    def lowercase_properties(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Store property names in the lowercase form the parser compares against."""
        return tuple(item.strip().lower() for item in value if item.strip())


class LinkConfig(BaseModel):
    """Settings for link and image target classification."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    attachment_pattern: str = DEFAULT_ATTACHMENT_PATTERN
    autolink_schemes: tuple[str, ...] = ("http", "https")

    @field_validator("attachment_pattern")
    @classmethod
    def validate_pattern(cls, value: str) -> str:
        """Ensure the pattern compiles and exposes a ``filename`` group."""
        try:
            compiled = re.compile(value)
        except re.error as exc:
            raise ValueError(f"Invalid attachment pattern: {exc}") from exc
        if "filename" not in compiled.groupindex:
            raise ValueError("Attachment pattern must define a 'filename' group")
        return value

    @field_validator("autolink_schemes")
    @classmethod
    def lowercase_schemes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(scheme.lower() for scheme in value)


class ConverterConfig(BaseModel):
    """Top-level converter configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    style: StyleConfig = Field(default_factory=StyleConfig)
    links: LinkConfig = Field(default_factory=LinkConfig)
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_CEILING)


__all__ = [
    "DEFAULT_ATTACHMENT_PATTERN",
    "DEFAULT_STYLE_PROPERTIES",
    "ConverterConfig",
    "LinkConfig",
    "StyleConfig",
]
