"""Classification of link and image targets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from urllib.parse import unquote, urlsplit

from .config import LinkConfig


class LinkKind(Enum):
    """How a link or image target ends up in the markup."""

    AUTOLINK = "autolink"
    ATTACHMENT = "attachment"
    EXTERNAL = "external"


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    """Outcome of resolving one target.

    ``url`` is what the markup should print: the collapsed text for autolinks,
    the bare filename for attachments, the untouched URL otherwise.
    """

    kind: LinkKind
    url: str
    original: str

    @property
    def is_autolink(self) -> bool:
        return self.kind is LinkKind.AUTOLINK


_MAILTO = "mailto:"


def _strip_one_slash(value: str) -> str:
    return value[:-1] if value.endswith("/") else value


class LinkResolver:
    """Resolve anchor and image targets against the configured patterns."""

    def __init__(self, config: LinkConfig | None = None) -> None:
        self.config = config or LinkConfig()
        self._attachment = re.compile(self.config.attachment_pattern)
        self._schemes = frozenset(self.config.autolink_schemes)

    def attachment_name(self, url: str) -> str | None:
        """Return the filename of an attachment URL, ``None`` for other targets."""
        try:
            path = urlsplit(url).path
        except ValueError:
            return None
        match = self._attachment.search(path)
        if match is None:
            return None
        return unquote(match.group("filename"))

    def resolve_url(self, url: str) -> str:
        """Return ``url`` reduced to its filename when it points at an attachment."""
        name = self.attachment_name(url)
        return name if name is not None else url

    def autolink(self, href: str, text: str) -> str | None:
        """Return the collapsed rendering when ``text`` repeats ``href``."""
        if not href or not text:
            return None

        if href[: len(_MAILTO)].lower() == _MAILTO:
            address = href[len(_MAILTO) :]
            return address if text == address else None

        scheme = href.split(":", 1)[0].lower() if ":" in href else ""
        if scheme not in self._schemes:
            return None
        if text == href:
            return text
        if _strip_one_slash(text) == _strip_one_slash(href) and (
            text.endswith("/") != href.endswith("/")
        ):
            return _strip_one_slash(href)
        return None

    def resolve(self, href: str, text: str | None = None) -> ResolvedTarget:
        """Classify ``href`` given the visible ``text`` of its anchor."""
        if text is not None:
            collapsed = self.autolink(href, text)
            if collapsed is not None:
                return ResolvedTarget(LinkKind.AUTOLINK, collapsed, href)

        name = self.attachment_name(href)
        if name is not None:
            return ResolvedTarget(LinkKind.ATTACHMENT, name, href)
        return ResolvedTarget(LinkKind.EXTERNAL, href, href)


__all__ = ["LinkKind", "LinkResolver", "ResolvedTarget"]
