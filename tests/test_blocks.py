import pytest

from markback import MarkupRenderer


@pytest.fixture
def renderer() -> MarkupRenderer:
    return MarkupRenderer(parser="html.parser")


def test_headings(renderer: MarkupRenderer) -> None:
    html = "<h1>Title</h1><h3>Sub <em>title</em></h3>"
    assert renderer.render(html, "textile") == "h1. Title\n\nh3. Sub _title_"
    assert renderer.render(html, "markdown") == "# Title\n\n### Sub *title*"


def test_heading_line_breaks_are_collapsed(renderer: MarkupRenderer) -> None:
    assert renderer.render("<h2>Two<br>lines</h2>", "markdown") == "## Two lines"


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        ("text-align: left", "p<. Text"),
        ("text-align: right", "p>. Text"),
        ("text-align: center", "p=. Text"),
        ("text-align: justify", "p<>. Text"),
        ("color: red", "p{color: red;}. Text"),
        ("text-align: center; color: red", "p={color: red;}. Text"),
    ],
)
def test_textile_paragraph_signatures(renderer: MarkupRenderer, style: str, expected: str) -> None:
    assert renderer.render(f'<p style="{style}">Text</p>', "textile") == expected


def test_markdown_ignores_paragraph_alignment(renderer: MarkupRenderer) -> None:
    assert renderer.render('<p style="text-align: center">Text</p>', "markdown") == "Text"


def test_quoted_paragraph_has_no_signature(renderer: MarkupRenderer) -> None:
    html = '<blockquote><p style="text-align: right">Text</p></blockquote>'
    assert renderer.render(html, "textile") == "> Text"


def test_horizontal_rule_markdown(renderer: MarkupRenderer) -> None:
    assert renderer.render("<p>a</p><hr><p>b</p>", "markdown") == "a\n\n---\n\nb"


def test_blockquote_depth_equals_prefix_count(renderer: MarkupRenderer) -> None:
    html = "<blockquote><blockquote><blockquote>deep</blockquote></blockquote></blockquote>"
    assert renderer.render(html, "markdown") == "> > > deep"


def test_empty_blockquote_is_dropped(renderer: MarkupRenderer) -> None:
    assert renderer.render("<p>a</p><blockquote> </blockquote>", "textile") == "a"


def test_textile_pre_without_language(renderer: MarkupRenderer) -> None:
    assert renderer.render("<pre>x = 1</pre>", "textile") == '<pre><code class="">\nx = 1\n</code></pre>'


def test_textile_pre_language_prefix_and_data_code(renderer: MarkupRenderer) -> None:
    prefixed = '<pre><code class="language-python">x = 1\n</code></pre>'
    assert renderer.render(prefixed, "textile") == '<pre><code class="python">\nx = 1\n</code></pre>'
    data_code = '<pre data-code="ruby">puts 1\n</pre>'
    assert renderer.render(data_code, "textile") == '<pre><code class="ruby">\nputs 1\n</code></pre>'


def test_markdown_pre_ignores_code_class(renderer: MarkupRenderer) -> None:
    html = '<pre><code class="python">x = 1</code></pre>'
    assert renderer.render(html, "markdown") == "~~~\nx = 1\n~~~"


def test_markdown_fence_grows_around_tildes(renderer: MarkupRenderer) -> None:
    html = "<pre>~~~\ninner\n~~~\n</pre>"
    assert renderer.render(html, "markdown") == "~~~~\n~~~\ninner\n~~~\n~~~~"


def test_preformatted_keeps_inline_markup_literal(renderer: MarkupRenderer) -> None:
    html = "<pre><strong>not bold</strong>\n</pre>"
    assert renderer.render(html, "markdown") == "~~~\nnot bold\n~~~"


def test_textile_lists(renderer: MarkupRenderer) -> None:
    html = "<ul><li>One</li><li>Two<ul><li>Sub</li></ul></li></ul><ol><li>First<ul><li>Mixed</li></ul></li></ol>"
    assert renderer.render(html, "textile") == "* One\n* Two\n** Sub\n\n# First\n#* Mixed"


def test_markdown_lists(renderer: MarkupRenderer) -> None:
    html = "<ol><li>A<ul><li>B</li></ul></li><li>C</li></ol>"
    assert renderer.render(html, "markdown") == "1. A\n   * B\n2. C"


def test_markdown_ordered_list_start(renderer: MarkupRenderer) -> None:
    assert renderer.render('<ol start="3"><li>c</li><li>d</li></ol>', "markdown") == "3. c\n4. d"


def test_list_items_with_paragraphs(renderer: MarkupRenderer) -> None:
    html = "<ul>\n  <li><p>Para</p></li>\n  <li></li>\n  <li><em>x</em></li>\n</ul>"
    assert renderer.render(html, "textile") == "* Para\n* _x_"


def test_containers_are_transparent_blocks(renderer: MarkupRenderer) -> None:
    html = "<div>intro<p>para</p></div><section><p>more</p></section>"
    assert renderer.render(html, "markdown") == "intro\n\npara\n\nmore"
