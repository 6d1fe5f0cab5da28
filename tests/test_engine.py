from typing import Any

import pytest

from markback import MarkupRenderer, Node, renders
from markback.core.diagnostics import DiagnosticEmitter
from markback.core.rules import Fragment, join_fragments


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Any) -> None:
        self.events.append((name, dict(payload)))


@pytest.fixture
def renderer() -> MarkupRenderer:
    return MarkupRenderer(parser="html.parser")


def test_inline_fragments_are_concatenated_verbatim() -> None:
    fragments = [Fragment("Hello, "), Fragment("world"), Fragment(" !")]
    assert join_fragments(fragments, "\n\n") == "Hello, world !"


def test_block_fragments_trim_inline_runs() -> None:
    fragments = [Fragment("  intro "), Fragment("Block", block=True), Fragment("\n  "), Fragment("tail")]
    assert join_fragments(fragments, "\n\n") == "intro\n\nBlock\n\ntail"


def test_empty_blocks_are_dropped() -> None:
    fragments = [Fragment("", block=True), Fragment("A", block=True), Fragment("\n", block=True)]
    assert join_fragments(fragments, "\n\n") == "A"


def test_paragraphs_are_separated_by_blank_lines(renderer: MarkupRenderer) -> None:
    html = "<p>One</p>\n<p>Two</p>"
    assert renderer.render(html, "textile") == "One\n\nTwo"
    assert renderer.render(html, "markdown") == "One\n\nTwo"


def test_unknown_tags_are_transparent(renderer: MarkupRenderer) -> None:
    emitter = RecordingEmitter()
    html = "<p><blink>Hello</blink>, <strong>world</strong></p>"

    assert renderer.render(html, "textile", emitter=emitter) == "Hello, *world*"
    assert ("transparent_tag", {"tag": "blink", "dialect": "textile"}) in emitter.events


def test_unknown_block_wrapper_keeps_block_layout(renderer: MarkupRenderer) -> None:
    html = "<custom-box><p>One</p><p>Two</p></custom-box>"
    assert renderer.render(html, "markdown") == "One\n\nTwo"


def test_conversion_is_deterministic(renderer: MarkupRenderer) -> None:
    root = renderer.parse("<p><em>a</em> <a href='http://x.org'>x</a></p><hr><ul><li>i</li></ul>")
    first = renderer.convert(root, "textile")
    second = renderer.convert(root, "textile")
    assert first == second == '_a_ "x":http://x.org\n\n---\n\n* i'


def test_plain_text_passes_through(renderer: MarkupRenderer) -> None:
    assert renderer.render("Just words.", "textile") == "Just words."
    assert renderer.render("Just words.", "markdown") == "Just words."


def test_script_and_style_are_discarded(renderer: MarkupRenderer) -> None:
    html = "<style>p { color: red }</style><p>Text</p><script>alert(1)</script>"
    assert renderer.render(html, "markdown") == "Text"


def test_custom_handler_takes_precedence(renderer: MarkupRenderer) -> None:
    @renders("kbd", name="keyboard")
    def render_keyboard(node: Node, context: Any) -> str:
        return f"[{context.render_children(node)}]"

    renderer.register(render_keyboard)
    assert renderer.render("Press <kbd>Ctrl</kbd>", "textile") == "Press [Ctrl]"


def test_declining_handler_falls_through(renderer: MarkupRenderer) -> None:
    @renders("strong", name="shouting", before=("phrases",))
    def render_shouting(node: Node, context: Any) -> str | None:
        text = node.text_content()
        return text.upper() if text.startswith("!") else None

    renderer.register(render_shouting)
    assert renderer.render("<strong>!hey</strong> <strong>calm</strong>", "textile") == "!HEY *calm*"


def test_recording_emitter_satisfies_protocol() -> None:
    assert isinstance(RecordingEmitter(), DiagnosticEmitter)


def test_describe_registered_rules_lists_both_dialects(renderer: MarkupRenderer) -> None:
    entries = renderer.describe_registered_rules()
    names = {(entry["dialect"], entry["tag"], entry["name"]) for entry in entries}
    assert ("textile", "pre", "textile_preformatted") in names
    assert ("markdown", "pre", "markdown_fenced_code") in names
    assert ("markdown", "pre", "textile_preformatted") not in names


def test_preformatted_blocks_skip_element_rules(renderer: MarkupRenderer) -> None:
    emitter = RecordingEmitter()
    html = "<pre><code><b>*x*</b><br><blink>y</blink></code></pre>"

    result = renderer.render(html, "textile", emitter=emitter)

    assert result == '<pre><code class="">\n*x*\ny\n</code></pre>'
    assert emitter.events == []


def test_preformatted_context_renders_elements_literally(renderer: MarkupRenderer) -> None:
    context = renderer.context_for("markdown").preformatted()
    node = Node.element("p", Node.element("strong", "a"), Node.element("br"), "b")
    assert context.render(node) == "a\nb"
