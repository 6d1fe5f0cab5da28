import pytest

from markback import MarkupRenderer


CODE = (
    "#include <stdio.h>\n\nint main(int argc, char *argv[])\n{\n"
    '    printf("Hello, world\n");\n\n    return 0;\n}\n'
)
ESCAPED_CODE = CODE.replace("<", "&lt;").replace(">", "&gt;")

QUOTE_HTML = (
    "<blockquote><blockquote><p>Rails is a full-stack framework.<br>"
    "To go live, add a database.</p></blockquote><p>Great!</p></blockquote>"
)
QUOTE_TEXT = "> > Rails is a full-stack framework.\n> > To go live, add a database.\n> \n> Great!"


@pytest.fixture
def renderer() -> MarkupRenderer:
    return MarkupRenderer(parser="html.parser")


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        pytest.param(
            '<span style="text-decoration: line-through">Hello, world</span>',
            "~~Hello, world~~",
            id="line-through",
        ),
        pytest.param("<del>Hello, world</del>", "~~Hello, world~~", id="deleted"),
        pytest.param(
            '<a href="mailto:foo@example.com">foo@example.com</a>',
            "foo@example.com",
            id="autolink-mailto",
        ),
        pytest.param(
            '<a href="http://example.com">http://example.com</a>',
            "http://example.com",
            id="autolink-http",
        ),
        pytest.param(
            '<a href="http://example.com/">http://example.com</a>',
            "http://example.com",
            id="autolink-trailing-slash",
        ),
        pytest.param(
            "<table><tbody><tr><th>Name</th><th>Role</th></tr>"
            "<tr><td> Axl Rose</td><td>Vocal</td></tr>"
            "<tr><td>Slash</td><td>Guitar</td></tr></tbody></table>",
            "| Name | Role |\n| --- | --- |\n| Axl Rose | Vocal |\n| Slash | Guitar |",
            id="table",
        ),
        pytest.param(f"<pre>{ESCAPED_CODE}</pre>", f"~~~\n{CODE}~~~", id="preformatted"),
        pytest.param(
            f'<pre data-code="c">{ESCAPED_CODE}</pre>',
            f"~~~ c\n{CODE}~~~",
            id="code-block",
        ),
        pytest.param(QUOTE_HTML, QUOTE_TEXT, id="blockquote"),
        pytest.param(
            '<img src="http://example.com/foo.png" alt="Foo">',
            "![Foo](http://example.com/foo.png)",
            id="image-external",
        ),
        pytest.param(
            '<img src="/attachments/download/1/foo.png" alt="Foo">',
            "![Foo](foo.png)",
            id="image-attachment",
        ),
    ],
)
def test_markdown_fixture(renderer: MarkupRenderer, html: str, expected: str) -> None:
    assert renderer.render(html, "markdown") == expected
