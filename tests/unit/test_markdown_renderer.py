"""Unit tests for Markdown rendering of elements and tables."""

import pytest
from utils import dash_groups

from layout2md.model import DetectedTable, Element, ElementType, Position, TableCell, TableRow, TextFormat
from layout2md.options import ConversionOptions
from layout2md.renderers import MarkdownRenderer


def _element(text, element_type, y=700.0, indent=0, **fmt):
    return Element(
        text=text, type=element_type, format=TextFormat(**fmt), position=Position(x=72, y=y), indent_level=indent
    )


def _table(rows, header=False, top=500.0):
    table_rows = [TableRow(cells=[TableCell(text) for text in row]) for row in rows]
    table_rows[0].is_header = header
    return DetectedTable(
        rows=table_rows, column_count=max(len(r) for r in rows), bounds=Position(x=72, y=top, width=400, height=40)
    )


@pytest.fixture
def renderer():
    return MarkdownRenderer()


@pytest.mark.unit
class TestRenderElement:
    """Test block templates."""

    @pytest.mark.parametrize(
        "element_type, expected",
        [
            (ElementType.HEADING_1, "# Title\n\n"),
            (ElementType.HEADING_2, "## Title\n\n"),
            (ElementType.HEADING_3, "### Title\n\n"),
            (ElementType.HEADING_4, "#### Title\n\n"),
            (ElementType.PARAGRAPH, "Title\n\n"),
            (ElementType.BLOCK_QUOTE, "> Title\n\n"),
            (ElementType.HORIZONTAL_RULE, "---\n\n"),
            (ElementType.PAGE_NUMBER, ""),
        ],
    )
    def test_block_templates(self, renderer, element_type, expected):
        assert renderer.render_element(_element("Title", element_type)) == expected

    def test_list_items(self, renderer):
        assert renderer.render_element(_element("point", ElementType.LIST_ITEM, indent=2)) == "    * point\n"
        assert renderer.render_element(_element("step", ElementType.NUMBERED_LIST_ITEM, indent=1)) == "  1. step\n"

    def test_short_code_is_inline(self, renderer):
        assert renderer.render_element(_element("x = 1", ElementType.CODE_BLOCK)) == "`x = 1`\n"

    def test_multi_line_code_is_fenced(self, renderer):
        rendered = renderer.render_element(_element("a = 1\nb = 2", ElementType.CODE_BLOCK))
        assert rendered == "```\na = 1\nb = 2\n```\n\n"

    def test_long_code_is_fenced(self, renderer):
        assert renderer.render_element(_element("x" * 61, ElementType.CODE_BLOCK)).startswith("```\n")

    def test_multi_line_quote(self, renderer):
        assert renderer.render_element(_element("one\ntwo", ElementType.BLOCK_QUOTE)) == "> one\n> two\n\n"

    def test_footnotes_get_sequential_ids(self, renderer):
        first = renderer.render_element(_element("First note", ElementType.FOOTNOTE))
        second = renderer.render_element(_element("Second note", ElementType.FOOTNOTE))
        assert first == "[^fn1] First note\n"
        assert second == "[^fn2] Second note\n"

    def test_uuid_footnote_ids(self):
        renderer = MarkdownRenderer(ConversionOptions(footnote_id_mode="uuid"))
        rendered = renderer.render_element(_element("Note", ElementType.FOOTNOTE))
        footnote_id = rendered[2 : rendered.index("]")]
        assert len(footnote_id) == 4
        int(footnote_id, 16)

    def test_blank_text_renders_nothing(self, renderer):
        assert renderer.render_element(_element("   ", ElementType.PARAGRAPH)) == ""


@pytest.mark.unit
class TestInlineFormatting:
    def test_bold(self, renderer):
        assert renderer.render_element(_element("Strong", ElementType.PARAGRAPH, bold=True)) == "**Strong**\n\n"

    def test_bold_italic(self, renderer):
        element = _element("Both", ElementType.PARAGRAPH, bold=True, italic=True)
        assert renderer.apply_inline_formatting(element) == "***Both***"

    def test_underline(self, renderer):
        element = _element("under", ElementType.PARAGRAPH, underline=True)
        assert renderer.apply_inline_formatting(element) == "<u>under</u>"

    def test_existing_markers_are_not_doubled(self, renderer):
        element = _element("**already**", ElementType.PARAGRAPH, bold=True)
        assert renderer.apply_inline_formatting(element) == "**already**"

    def test_headings_are_not_bolded(self, renderer):
        assert renderer.render_element(_element("Title", ElementType.HEADING_1, bold=True)) == "# Title\n\n"

    def test_code_is_verbatim(self, renderer):
        element = _element("x = 1", ElementType.CODE_BLOCK, bold=True, italic=True)
        assert renderer.apply_inline_formatting(element) == "x = 1"


@pytest.mark.unit
class TestRenderTable:
    """Test pipe table rendering."""

    def test_basic_table(self, renderer):
        rendered = renderer.render_table(_table([["Name", "Age"], ["Alice", "30"]]))
        assert rendered == "| Name | Age |\n| ---- | --- |\n| Alice | 30 |\n\n"

    def test_separator_is_clamped(self, renderer):
        rendered = renderer.render_table(_table([["a", "x" * 30], ["b", "c"]]))
        separator = rendered.splitlines()[1]
        assert dash_groups(separator) == ["---", "-" * 20]

    def test_rows_are_padded(self, renderer):
        rendered = renderer.render_table(_table([["a", "b", "c"], ["d"]]))
        assert rendered.splitlines()[2] == "| d |  |  |"

    def test_spanning_cell_keeps_following_cells_in_place(self, renderer):
        table = _table([["a", "b", "c", "d"], ["e", "", "f"]])
        table.rows[1].cells[1].col_span = 2
        assert renderer.render_table(table).splitlines()[2] == "| e |  |  | f |"

    def test_flagged_header_row_leads(self, renderer):
        table = _table([["first", "row"], ["HEAD", "ER"]])
        table.rows[1].is_header = True
        lines = renderer.render_table(table).splitlines()
        assert lines[0] == "| HEAD | ER |"
        assert lines[2] == "| first | row |"
        assert len(lines) == 3

    def test_pipes_in_cells_are_escaped(self, renderer):
        rendered = renderer.render_table(_table([["a|b", "c"], ["d", "e"]]))
        assert rendered.startswith("| a\\|b | c |")

    def test_empty_table(self, renderer):
        assert renderer.render_table(DetectedTable()) == ""


@pytest.mark.unit
class TestRenderPage:
    def test_tables_are_interleaved_by_position(self, renderer):
        elements = [_element("Above", ElementType.PARAGRAPH, y=700), _element("Below", ElementType.PARAGRAPH, y=300)]
        markdown = renderer.render_page(elements, [_table([["a", "b"], ["c", "d"]], top=500)])
        assert markdown.index("Above") < markdown.index("| a | b |") < markdown.index("Below")

    def test_table_after_list_is_separated(self, renderer):
        elements = [_element("item", ElementType.LIST_ITEM, y=700)]
        markdown = renderer.render_page(elements, [_table([["a", "b"], ["c", "d"]], top=500)])
        assert markdown.startswith("* item\n\n| a | b |")
