"""Anchor and image handlers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType

from markback.core.context import ConversionContext
from markback.core.dialects import Dialect
from markback.core.nodes import Node
from markback.core.rules import renders

from ._helpers import lone_image, single_line


def _textile_link(text: str, url: str, title: str) -> str:
    suffix = f"({title})" if title else ""
    return f'"{text}{suffix}":{url}'


def _markdown_link(text: str, url: str, title: str) -> str:
    suffix = f' "{_quote_title(title)}"' if title else ""
    return f"[{text}]({url}{suffix})"


def _textile_image(url: str, alt: str, title: str, annotation: str) -> str:
    caption = alt or title
    suffix = f"({caption})" if caption else ""
    return f"!{annotation}{url}{suffix}!"


def _markdown_image(url: str, alt: str, title: str, _annotation: str) -> str:
    suffix = f' "{_quote_title(title)}"' if title else ""
    return f"![{alt}]({url}{suffix})"


def _textile_linked_image(image: str, url: str) -> str:
    return f"{image}:{url}"


def _markdown_linked_image(image: str, url: str) -> str:
    return f"[{image}]({url})"


def _quote_title(title: str) -> str:
    return title.replace('"', '\\"')


_LINK_FORMATS: Mapping[Dialect, Callable[[str, str, str], str]] = MappingProxyType(
    {Dialect.TEXTILE: _textile_link, Dialect.MARKDOWN: _markdown_link}
)
_IMAGE_FORMATS: Mapping[Dialect, Callable[[str, str, str, str], str]] = MappingProxyType(
    {Dialect.TEXTILE: _textile_image, Dialect.MARKDOWN: _markdown_image}
)
_LINKED_IMAGE_FORMATS: Mapping[Dialect, Callable[[str, str], str]] = MappingProxyType(
    {Dialect.TEXTILE: _textile_linked_image, Dialect.MARKDOWN: _markdown_linked_image}
)


def _image_markup(node: Node, context: ConversionContext) -> str:
    src = (node.get("src") or "").strip()
    if not src:
        return ""
    url = context.links.resolve_url(src)
    alt = single_line(node.get("alt") or "")
    title = single_line(node.get("title") or "")
    annotation = context.annotation(context.style_of(node))
    return _IMAGE_FORMATS[context.dialect](url, alt, title, annotation)


@renders("img", name="images")
def render_image(node: Node, context: ConversionContext) -> str:
    """Render ``<img>``; attachment sources collapse to their filename."""
    return _image_markup(node, context)


def _render_linked_image(image: Node, href: str, context: ConversionContext) -> str:
    markup = _image_markup(image, context)
    if not markup:
        return href
    src = (image.get("src") or "").strip()
    if href in (src, context.links.resolve_url(src)):
        return markup
    target = context.links.resolve_url(href)
    return _LINKED_IMAGE_FORMATS[context.dialect](markup, target)


@renders("a", name="links")
def render_link(node: Node, context: ConversionContext) -> str:
    """Render anchors, collapsing autolinks to the bare address.

    An anchor whose only visible content is an image becomes a linked image.
    Anchors without ``href`` keep their content only.
    """
    href = (node.get("href") or "").strip()
    if not href:
        return context.render_children(node)

    image = lone_image(node)
    if image is not None:
        return _render_linked_image(image, href, context)

    visible = node.text_content().strip()
    target = context.links.resolve(href, visible)
    if target.is_autolink:
        return target.url

    text = single_line(context.render_children(node))
    if not text:
        return target.url
    title = single_line(node.get("title") or "")
    return _LINK_FORMATS[context.dialect](text, target.url, title)
