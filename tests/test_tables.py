import pytest

from markback import MarkupRenderer


@pytest.fixture
def renderer() -> MarkupRenderer:
    return MarkupRenderer(parser="html.parser")


def test_textile_cell_modifier_order(renderer: MarkupRenderer) -> None:
    html = (
        "<table><tr>"
        '<th colspan="2" rowspan="3" style="text-align: right; vertical-align: middle; '
        'background-color: #FFF">x</th>'
        "</tr></table>"
    )
    assert renderer.render(html, "textile") == "|_\\2/3>-{background-color: #fff;}. x |"


def test_textile_alignment_from_attributes(renderer: MarkupRenderer) -> None:
    html = '<table><tr><td align="center" valign="bottom">x</td></tr></table>'
    assert renderer.render(html, "textile") == "|=~. x |"


def test_textile_table_sections_are_read_in_order(renderer: MarkupRenderer) -> None:
    html = (
        "<table><thead><tr><th>H</th></tr></thead>"
        "<tbody><tr><td>B</td></tr></tbody>"
        "<tfoot><tr><td>F</td></tr></tfoot></table>"
    )
    assert renderer.render(html, "textile") == "|_. H |\n| B |\n| F |"


def test_textile_cell_formatting(renderer: MarkupRenderer) -> None:
    html = "<table><tr><td><strong>bold</strong> and <p>para</p></td></tr></table>"
    assert renderer.render(html, "textile") == "| *bold* and\npara |"


def test_table_between_paragraphs(renderer: MarkupRenderer) -> None:
    html = "<p>before</p><table><tr><td>x</td></tr></table><p>after</p>"
    assert renderer.render(html, "textile") == "before\n\n| x |\n\nafter"


def test_markdown_rows_are_padded(renderer: MarkupRenderer) -> None:
    html = "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td></tr></table>"
    assert renderer.render(html, "markdown") == "| A | B |\n| --- | --- |\n| 1 |  |"


def test_markdown_drops_spans_and_escapes_pipes(renderer: MarkupRenderer) -> None:
    html = '<table><tr><th colspan="2">a|b</th></tr><tr><td>x<br>y</td><td>z</td></tr></table>'
    assert renderer.render(html, "markdown") == "| a\\|b |  |\n| --- | --- |\n| x\ny | z |"


def test_markdown_header_from_td_row(renderer: MarkupRenderer) -> None:
    html = "<table><tr><td>first</td></tr><tr><td>second</td></tr></table>"
    assert renderer.render(html, "markdown") == "| first |\n| --- |\n| second |"


def test_empty_table(renderer: MarkupRenderer) -> None:
    assert renderer.render("<table></table>", "markdown") == ""
    assert renderer.render("<table></table>", "textile") == ""


def test_nested_table_rows_stay_in_inner_table(renderer: MarkupRenderer) -> None:
    html = (
        "<table><tr><td>outer"
        "<table><tr><td>inner</td></tr></table>"
        "</td></tr></table>"
    )
    assert renderer.render(html, "textile") == "| outer\n| inner | |"
