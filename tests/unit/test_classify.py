"""Unit tests for line classification."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import make_glyphs

from layout2md.model import ElementType, PageMetrics
from layout2md.reconstruct import classify_lines, group_glyphs_into_words, group_words_into_lines
from layout2md.reconstruct._classify import (
    calculate_indent_level,
    is_horizontal_rule,
    is_list_item,
    is_monospace_font,
    strip_list_marker,
)

METRICS = PageMetrics(
    most_common_font_size=12,
    normal_font_size=12,
    heading_font_size=24,
    subheading_font_size=16,
    average_line_height=15,
    left_margin=72,
)


def _classify(*glyph_groups, metrics=METRICS):
    glyphs = [g for group in glyph_groups for g in group]
    lines = group_words_into_lines(group_glyphs_into_words(glyphs), metrics)
    return classify_lines(lines, metrics)


def _single(text, **kwargs):
    (element,) = _classify(make_glyphs(text, **kwargs))
    return element


@pytest.mark.unit
class TestMarkerHelpers:
    """Test list marker, rule and font helpers."""

    @pytest.mark.parametrize(
        "text",
        ["• bullet", "- dash", "✓ done", "i. roman", "iv) roman", "a. letter", "B) letter", "1. one", "2) two", "(3) x", "[4] y"],
    )
    def test_list_markers(self, text):
        assert is_list_item(text)

    @pytest.mark.parametrize("text", ["plain text", "-dash glued", "e.g. example", "12 monkeys", "1.5 litres"])
    def test_not_list_markers(self, text):
        assert not is_list_item(text)

    def test_strip_numeric_marker(self):
        assert strip_list_marker("12. Twelve") == (ElementType.NUMBERED_LIST_ITEM, "Twelve")

    def test_strip_bullet_marker(self):
        assert strip_list_marker("• Point") == (ElementType.LIST_ITEM, "Point")

    def test_letter_markers_are_unnumbered(self):
        assert strip_list_marker("a) first")[0] is ElementType.LIST_ITEM

    @pytest.mark.parametrize("text", ["---", "=====", "~~~~", "*****", "-" * 40, "----- -"])
    def test_horizontal_rules(self, text):
        assert is_horizontal_rule(text)

    @pytest.mark.parametrize("text", ["--", "-a-b-c", "abc---"])
    def test_not_horizontal_rules(self, text):
        assert not is_horizontal_rule(text)

    def test_monospace_fonts(self):
        assert is_monospace_font("CourierNewPSMT")
        assert is_monospace_font("DejaVu Sans Mono")
        assert not is_monospace_font("Helvetica")

    def test_indent_levels(self):
        assert calculate_indent_level(72, 72) == 0
        assert calculate_indent_level(86, 72) == 0
        assert calculate_indent_level(108, 72) == 1
        assert calculate_indent_level(144, 72) == 2
        assert calculate_indent_level(10, 72) == 0


@pytest.mark.unit
class TestClassificationRules:
    """Test the ordered classification rules."""

    def test_bold_heading_size_is_heading_1(self):
        element = _single("Title", size=24, font_name="Helvetica-Bold")
        assert element.type is ElementType.HEADING_1
        assert element.confidence == pytest.approx(0.9)

    def test_plain_heading_size_is_heading_2(self):
        assert _single("Title", size=23).type is ElementType.HEADING_2

    def test_subheading_sizes(self):
        assert _single("Section", size=16, font_name="Helvetica-Bold").type is ElementType.HEADING_2
        assert _single("Section", size=16).type is ElementType.HEADING_3

    @pytest.mark.parametrize(
        "size, expected",
        [(11.5, ElementType.PARAGRAPH), (12, ElementType.PARAGRAPH), (13, ElementType.HEADING_3)],
    )
    def test_subheading_band_stops_at_body_size(self, size, expected):
        # Band around 13pt reaches 11.05pt, below the 12pt body text
        metrics = PageMetrics(
            normal_font_size=12, subheading_font_size=13, average_line_height=15, left_margin=72
        )
        (element,) = _classify(make_glyphs("Plain body text here.", size=size), metrics=metrics)
        assert element.type is expected

    def test_bold_large_text_is_heading_3(self):
        metrics = PageMetrics(normal_font_size=12, average_line_height=15, left_margin=72)
        (element,) = _classify(make_glyphs("Bold", size=15, font_name="Arial-Bold"), metrics=metrics)
        assert element.type is ElementType.HEADING_3

    def test_bold_slightly_larger_text_is_heading_4(self):
        metrics = PageMetrics(normal_font_size=12, average_line_height=15, left_margin=72)
        (element,) = _classify(make_glyphs("Bold", size=13, font_name="Arial-Bold"), metrics=metrics)
        assert element.type is ElementType.HEADING_4

    def test_bold_body_text_is_paragraph(self):
        assert _single("Bold words.", font_name="Helvetica-Bold").type is ElementType.PARAGRAPH

    def test_page_number(self):
        element = _single("42", x=300, size=9)
        assert element.type is ElementType.PAGE_NUMBER

    def test_numbered_list_item(self):
        element = _single("3. Third step")
        assert element.type is ElementType.NUMBERED_LIST_ITEM
        assert element.text == "Third step"
        assert element.indent_level == 0

    def test_indented_bullet(self):
        element = _single("• Nested", x=144)
        assert element.type is ElementType.LIST_ITEM
        assert element.text == "Nested"
        assert element.indent_level == 2

    def test_code_line(self):
        element = _single("x = compute(y)", font_name="Courier")
        assert element.type is ElementType.CODE_BLOCK

    def test_block_quote(self):
        assert _single("Quoted words.", x=150).type is ElementType.BLOCK_QUOTE

    def test_footnote(self):
        element = _single("† See the appendix.", size=9)
        assert element.type is ElementType.FOOTNOTE

    def test_paragraph(self):
        element = _single("An ordinary sentence.")
        assert element.type is ElementType.PARAGRAPH
        assert element.confidence == 1.0

    def test_horizontal_rule_regardless_of_font(self):
        element = _single("-" * 40, size=24, font_name="Courier-Bold")
        assert element.type is ElementType.HORIZONTAL_RULE

    def test_missing_font_name_lowers_confidence(self):
        element = _single("An ordinary sentence.", font_name="")
        assert element.type is ElementType.PARAGRAPH
        assert element.confidence == pytest.approx(0.8)

    def test_underline_markup(self):
        assert _single("<u>marked</u>").format.underline

    @given(size=st.floats(min_value=20.5, max_value=27.5), bold=st.booleans())
    def test_heading_size_is_always_a_top_heading(self, size, bold):
        font = "Helvetica-Bold" if bold else "Helvetica"
        (element,) = _classify(make_glyphs("1. Item", size=size, font_name=font))
        assert element.type in (ElementType.HEADING_1, ElementType.HEADING_2)


@pytest.mark.unit
class TestContinuations:
    """Test detection of wrapped lines."""

    def test_lowercase_wrap_is_continuation(self):
        elements = _classify(
            make_glyphs("The first half of a sentence that", top=700),
            make_glyphs("wraps onto the next line.", top=685),
        )
        assert elements[0].type is ElementType.PARAGRAPH
        assert elements[1].is_continuation
        assert elements[1].type is ElementType.UNKNOWN

    def test_terminal_punctuation_blocks_continuation(self):
        elements = _classify(make_glyphs("Done.", top=700), make_glyphs("lowercase start", top=685))
        assert not elements[1].is_continuation

    def test_capitalised_line_is_not_a_continuation(self):
        elements = _classify(make_glyphs("no ending", top=700), make_glyphs("New thought", top=685))
        assert not elements[1].is_continuation

    def test_list_item_is_not_a_continuation(self):
        elements = _classify(make_glyphs("1. first", top=700), make_glyphs("2. second", top=685))
        assert [e.type for e in elements] == [ElementType.NUMBERED_LIST_ITEM] * 2

    def test_distant_line_is_not_a_continuation(self):
        elements = _classify(make_glyphs("no ending", top=700), make_glyphs("far away", top=600))
        assert not elements[1].is_continuation
