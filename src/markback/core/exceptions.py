"""Custom exception hierarchy for the markup conversion pipeline."""

from __future__ import annotations


class MarkupConversionError(RuntimeError):
    """Base exception for markup conversion failures."""


class NestingDepthError(MarkupConversionError):
    """Raised when the input tree is nested deeper than the configured ceiling."""

    def __init__(self, limit: int, tag: str | None = None) -> None:
        self.limit = limit
        self.tag = tag
        where = f" at <{tag}>" if tag else ""
        super().__init__(f"Input too deeply nested: more than {limit} levels{where}")


class InvalidNodeError(MarkupConversionError):
    """Raised when a host adapter receives an unexpected DOM node shape."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None
