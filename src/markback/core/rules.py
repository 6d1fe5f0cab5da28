"""Rule declaration and dispatch engine for the markup converter.

Handlers declare their intent via the ``@renders`` decorator, which records
structural metadata (targeted tags, dialects, priority, ordering constraints).
At runtime the :class:`RenderEngine` collects those declarations into a
:class:`RenderRegistry` keyed by ``(dialect, tag)`` and walks the node tree,
asking the matching rules, in order, to render each node.

Architecture

`Declaration layer`
: ``@renders`` stores a lightweight :class:`RuleDefinition` on every handler.

`Registry layer`
: :class:`RenderRegistry` collates definitions into sortable :class:`RenderRule`
  instances grouped by dialect and tag.

`Execution layer`
: :class:`RenderEngine` dispatches one node at a time. A handler receives the
  node and an immutable :class:`~markback.core.context.ConversionContext` and
  returns the markup for the whole subtree, or ``None`` to let the next rule
  try. Nodes no rule accepts are transparent: their children are converted
  and concatenated. Inside preformatted blocks elements bypass the rules and only
  their text and line breaks are kept.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any, cast

from .dialects import ALL_DIALECTS, Dialect
from .exceptions import NestingDepthError
from .nodes import DOCUMENT_NODE, TEXT_NODE, Node


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .context import ConversionContext


logger = logging.getLogger(__name__)

RuleCallable = Callable[[Node, "ConversionContext"], "str | None"]

DEFAULT_MAX_DEPTH = 128
# One nesting level costs up to five interpreter frames in the engine.
MAX_DEPTH_CEILING = 150


@dataclass
class RenderRule:
    """Concrete rendering rule registered in the engine."""

    priority: int
    dialects: tuple[Dialect, ...]
    tags: tuple[str, ...]
    name: str
    handler: RuleCallable
    block: bool = False
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()


@dataclass(frozen=True)
class RuleDefinition:
    """Descriptor installed on handler callables by the decorator."""

    tags: tuple[str, ...]
    dialects: tuple[Dialect, ...] = ALL_DIALECTS
    priority: int = 0
    name: str | None = None
    block: bool = False
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()

    def bind(self, handler: RuleCallable) -> RenderRule:
        """Create a concrete rule instance bound to the callable."""
        name = self.name or getattr(handler, "__name__", handler.__class__.__name__)
        return RenderRule(
            priority=self.priority,
            dialects=self.dialects,
            tags=self.tags,
            name=name,
            handler=handler,
            block=self.block,
            before=self.before,
            after=self.after,
        )


class RenderRegistry:
    """Lookup table of render rules keyed by dialect, then tag."""

    def __init__(self) -> None:
        self._rules: dict[Dialect, dict[str, list[RenderRule]]] = {}

    def register(self, rule: RenderRule) -> None:
        """Register a rule for every dialect and tag it declares."""
        for dialect in rule.dialects:
            dialect_bucket = self._rules.setdefault(dialect, {})
            for tag in rule.tags:
                tag_bucket = dialect_bucket.setdefault(tag, [])
                tag_bucket.append(rule)
                tag_bucket[:] = self._sort_rules(tag_bucket)

    def rules_for(self, dialect: Dialect, tag: str) -> tuple[RenderRule, ...]:
        """Return the ordered rules for ``(dialect, tag)``."""
        return tuple(self._rules.get(dialect, {}).get(tag, ()))

    def rules_for_dialect(self, dialect: Dialect) -> dict[str, tuple[RenderRule, ...]]:
        """Return the rule mapping for the requested dialect."""
        bucket = self._rules.get(dialect, {})
        return {tag: tuple(rules) for tag, rules in bucket.items()}

    def iter_dialect(self, dialect: Dialect) -> Iterable[RenderRule]:
        """Iterate over the distinct rules registered for ``dialect``."""
        seen: set[int] = set()
        for tag_rules in self._rules.get(dialect, {}).values():
            for rule in tag_rules:
                if id(rule) in seen:
                    continue
                seen.add(id(rule))
                yield rule

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registered rules."""
        entries: list[dict[str, object]] = []
        for dialect in Dialect:
            for tag, rules in sorted(self.rules_for_dialect(dialect).items(), key=lambda item: item[0]):
                for order, rule in enumerate(rules):
                    entries.append(
                        {
                            "dialect": dialect.value,
                            "tag": tag,
                            "name": rule.name,
                            "priority": rule.priority,
                            "block": rule.block,
                            "before": list(rule.before),
                            "after": list(rule.after),
                            "order": order,
                        }
                    )
        return entries

    def _sort_rules(self, rules: list[RenderRule]) -> list[RenderRule]:
        """Return rules ordered deterministically using before/after constraints."""
        if len(rules) <= 1:
            return list(rules)

        name_to_index: dict[str, int] = {}
        for index, rule in enumerate(rules):
            name_to_index.setdefault(rule.name, index)

        adjacency: dict[int, set[int]] = {index: set() for index in range(len(rules))}
        indegree: dict[int, int] = dict.fromkeys(range(len(rules)), 0)

        def _add_edge(source: int, target: int) -> None:
            if target in adjacency[source]:
                return
            adjacency[source].add(target)
            indegree[target] += 1

        for current_index, rule in enumerate(rules):
            for target_name in rule.before:
                target_index = name_to_index.get(target_name)
                if target_index is not None:
                    _add_edge(current_index, target_index)
            for target_name in rule.after:
                target_index = name_to_index.get(target_name)
                if target_index is not None:
                    _add_edge(target_index, current_index)

        def _key(idx: int) -> tuple[int, str, int]:
            return (rules[idx].priority, rules[idx].name, idx)

        queue: deque[int] = deque(
            sorted((index for index, count in indegree.items() if count == 0), key=_key)
        )
        ordered: list[int] = []

        while queue:
            current = queue.popleft()
            ordered.append(current)
            for neighbour in sorted(adjacency[current], key=_key):
                indegree[neighbour] -= 1
                if indegree[neighbour] == 0:
                    queue.append(neighbour)

            queue = deque(sorted(queue, key=_key))

        if len(ordered) != len(rules):
            cycle_names = sorted(
                rule.name for index, rule in enumerate(rules) if index not in ordered
            )
            raise RuntimeError(
                "Cyclic render rule dependencies detected: " + ", ".join(cycle_names)
            )

        return [rules[index] for index in ordered]


def renders(
    *tags: str,
    dialects: Dialect | Iterable[Dialect] = ALL_DIALECTS,
    priority: int = 0,
    name: str | None = None,
    block: bool = False,
    before: Iterable[str] = (),
    after: Iterable[str] = (),
) -> Callable[[RuleCallable], RuleCallable]:
    """Decorator used to register element handlers.

    Without tags the handler targets the synthetic document node.
    """
    selected_tags = tags or (DOCUMENT_NODE,)
    selected_dialects = (dialects,) if isinstance(dialects, Dialect) else tuple(dialects)
    definition = RuleDefinition(
        tags=tuple(tag.lower() for tag in selected_tags),
        dialects=selected_dialects,
        priority=priority,
        name=name,
        block=block,
        before=tuple(before),
        after=tuple(after),
    )

    def decorator(handler: RuleCallable) -> RuleCallable:
        cast(Any, handler).__render_rule__ = definition
        return handler

    return decorator


@dataclass(frozen=True, slots=True)
class Fragment:
    """Rendered markup for one node and whether it stands as a block."""

    text: str
    block: bool = False


def join_fragments(fragments: Sequence[Fragment], separator: str) -> str:
    """Join sibling fragments.

    Purely inline content is concatenated verbatim. As soon as one sibling is
    a block, inline runs are trimmed, empty runs dropped and every part is
    separated by ``separator``.
    """
    if not any(fragment.block for fragment in fragments):
        return "".join(fragment.text for fragment in fragments)

    parts: list[str] = []
    run: list[str] = []

    def flush() -> None:
        text = "".join(run).strip()
        run.clear()
        if text:
            parts.append(text)

    for fragment in fragments:
        if not fragment.block:
            run.append(fragment.text)
            continue
        flush()
        if fragment.text.strip():
            parts.append(fragment.text.strip("\n"))
    flush()
    return separator.join(parts)


class RenderEngine:
    """Dispatcher that converts nodes using the registered rules."""

    def __init__(
        self, registry: RenderRegistry | None = None, *, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> None:
        self.registry = registry or RenderRegistry()
        self.max_depth = max_depth

    def collect_from(self, owner: Any) -> None:
        """Collect decorated callables from an object or module."""
        for attribute in dir(owner):
            handler = getattr(owner, attribute)
            definition = getattr(handler, "__render_rule__", None)
            if definition is None and hasattr(handler, "__func__"):
                definition = getattr(handler.__func__, "__render_rule__", None)
            if isinstance(definition, RuleDefinition):
                self.registry.register(definition.bind(handler))

    def register(self, handler: RuleCallable) -> None:
        """Register a standalone callable decorated with ``@renders``."""
        definition = getattr(handler, "__render_rule__", None)
        if not isinstance(definition, RuleDefinition):
            msg = "Handler must be decorated with @renders"
            raise TypeError(msg)
        self.registry.register(definition.bind(handler))

    def convert(self, root: Node, context: ConversionContext) -> str:
        """Convert a whole tree; the result carries no leading or trailing blank lines."""
        try:
            text = self.render(root, context)
        except RecursionError as exc:
            raise NestingDepthError(self.max_depth, root.tag) from exc
        return text.strip("\n")

    def render(self, node: Node, context: ConversionContext) -> str:
        """Return the markup of ``node`` and its descendants."""
        return self.render_fragment(node, context).text

    def render_fragment(self, node: Node, context: ConversionContext) -> Fragment:
        """Dispatch ``node`` to the first rule that accepts it."""
        scoped = context.descend()
        if scoped.level > self.max_depth:
            raise NestingDepthError(self.max_depth, node.tag)

        if scoped.in_preformatted and not node.is_text:
            return Fragment(self._literal(node, scoped))

        for rule in self.registry.rules_for(context.dialect, node.tag):
            result = rule.handler(node, scoped)
            if result is not None:
                return Fragment(result, rule.block)

        if node.tag not in (TEXT_NODE, DOCUMENT_NODE):
            context.emitter.event(
                "transparent_tag", {"tag": node.tag, "dialect": context.dialect.value}
            )
        return self._transparent(node, scoped)

    def render_children(self, node: Node, context: ConversionContext) -> str:
        """Convert the children of ``node`` and join them."""
        fragments = [self.render_fragment(child, context) for child in node.children]
        return join_fragments(fragments, context.block_separator)

    def _transparent(self, node: Node, context: ConversionContext) -> Fragment:
        fragments = [self.render_fragment(child, context) for child in node.children]
        block = any(fragment.block for fragment in fragments)
        return Fragment(join_fragments(fragments, context.block_separator), block)

    def _literal(self, node: Node, context: ConversionContext) -> str:
        # Preformatted content keeps its text and line breaks, never its markup.
        if node.tag == "br":
            return "\n"
        return "".join(self.render(child, context) for child in node.children)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_CEILING",
    "Fragment",
    "RenderEngine",
    "RenderRegistry",
    "RenderRule",
    "RuleDefinition",
    "join_fragments",
    "renders",
]
