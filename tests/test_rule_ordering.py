from typing import Any

import pytest

from markback.core.dialects import Dialect
from markback.core.rules import RenderEngine, RenderRegistry, renders


def _make_handler(
    name: str,
    *,
    priority: int = 0,
    before: tuple[str, ...] = (),
    after: tuple[str, ...] = (),
    dialects: Any = Dialect.TEXTILE,
):
    @renders("p", dialects=dialects, name=name, priority=priority, before=before, after=after)
    def handler(_node: Any, _context: Any) -> None:
        return None

    definition = handler.__render_rule__
    return definition.bind(handler)


def test_rule_order_respects_priority_and_topology() -> None:
    registry = RenderRegistry()
    registry.register(_make_handler("third", priority=1))
    registry.register(_make_handler("first", priority=0))
    registry.register(_make_handler("second", priority=1, after=("first",)))

    rules = registry.rules_for_dialect(Dialect.TEXTILE)["p"]
    assert [rule.name for rule in rules] == ["first", "second", "third"]


def test_before_constraint_overrides_priority() -> None:
    registry = RenderRegistry()
    registry.register(_make_handler("generic", priority=0))
    registry.register(_make_handler("special", priority=5, before=("generic",)))

    assert [rule.name for rule in registry.rules_for(Dialect.TEXTILE, "p")] == [
        "special",
        "generic",
    ]


def test_rule_order_cycle_detection() -> None:
    registry = RenderRegistry()
    registry.register(_make_handler("a", priority=0, before=("b",)))
    with pytest.raises(RuntimeError, match="Cyclic render rule dependencies"):
        registry.register(_make_handler("b", priority=0, before=("a",)))


def test_rules_are_scoped_per_dialect() -> None:
    registry = RenderRegistry()
    registry.register(_make_handler("textile_only"))
    registry.register(_make_handler("shared", dialects=tuple(Dialect)))

    assert [rule.name for rule in registry.rules_for(Dialect.MARKDOWN, "p")] == ["shared"]
    assert {rule.name for rule in registry.iter_dialect(Dialect.TEXTILE)} == {
        "textile_only",
        "shared",
    }


def test_registry_describe_returns_sorted_entries() -> None:
    registry = RenderRegistry()
    registry.register(_make_handler("alpha", priority=0))
    registry.register(_make_handler("beta", priority=1, after=("alpha",)))

    snapshot = registry.describe()
    assert snapshot[0]["name"] == "alpha"
    assert snapshot[0]["dialect"] == "textile"
    assert snapshot[1]["name"] == "beta"
    assert snapshot[1]["after"] == ["alpha"]
    assert snapshot[1]["order"] == 1


def test_renders_without_tags_targets_document() -> None:
    @renders()
    def handler(_node: Any, _context: Any) -> str:
        return ""

    assert handler.__render_rule__.tags == ("#document",)


def test_engine_register_requires_decorator() -> None:
    engine = RenderEngine()
    with pytest.raises(TypeError):
        engine.register(lambda node, context: "")
