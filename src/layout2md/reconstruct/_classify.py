#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/reconstruct/_classify.py
"""Semantic classification of page lines.

Each non-table line becomes an Element. Lines that merely wrap the line
above are flagged as continuations and left for the merger; every other
line is typed by an ordered list of rules where the first match wins.

"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from layout2md.constants import (
    BLOCK_QUOTE_MAX_MARGIN_RATIO,
    BLOCK_QUOTE_MIN_MARGIN_RATIO,
    CONFIDENCE_BLOCK_QUOTE,
    CONFIDENCE_CODE_BLOCK,
    CONFIDENCE_FOOTNOTE,
    CONFIDENCE_HEADING,
    CONFIDENCE_HEADING_3,
    CONFIDENCE_HEADING_4,
    CONFIDENCE_HORIZONTAL_RULE,
    CONFIDENCE_LIST_ITEM,
    CONFIDENCE_PAGE_NUMBER,
    CONFIDENCE_PARAGRAPH,
    CONFIDENCE_SUBHEADING,
    CONTINUATION_BLOCKING_ENDINGS,
    CONTINUATION_LINE_GAP_RATIO,
    CONTINUATION_MARGIN_RATIO,
    HEADING_3_SIZE_RATIO,
    HEADING_SIZE_TOLERANCE,
    HORIZONTAL_RULE_CHARS,
    HORIZONTAL_RULE_FILL_RATIO,
    HORIZONTAL_RULE_MIN_LENGTH,
    LIST_INDENT_MARGIN_RATIO,
    LIST_INDENT_UNIT_RATIO,
    MISSING_FONT_CONFIDENCE_FACTOR,
    MONOSPACE_FONT_KEYWORDS,
    PAGE_NUMBER_MARGIN_RATIO,
    SMALL_FONT_RATIO,
)
from layout2md.model import Element, ElementType, Line, PageMetrics, Position, TextFormat

logger = logging.getLogger(__name__)

__all__ = [
    "classify_lines",
    "calculate_indent_level",
    "is_horizontal_rule",
    "is_list_item",
    "is_monospace_font",
    "strip_list_marker",
]

# List markers, tried in order. Each pattern matches the marker together
# with the whitespace that follows it.
_BULLET_MARKER = re.compile(r"^(?:[•✓▪○■→⇒◦◘◙∙◉⦿◯]\s*|-\s+)")
_ROMAN_MARKER = re.compile(r"^[ivxIVX]+[.)]\s+")
_LETTER_MARKER = re.compile(r"^[a-zA-Z][.)]\s+")
_NUMERIC_MARKER = re.compile(r"^\d+[.)]\s+")
_PAREN_MARKER = re.compile(r"^\(\d+\)\s+")
_BRACKET_MARKER = re.compile(r"^\[\d+\]\s+")

_LIST_MARKERS = (_BULLET_MARKER, _ROMAN_MARKER, _LETTER_MARKER, _NUMERIC_MARKER, _PAREN_MARKER, _BRACKET_MARKER)

_PAGE_NUMBER = re.compile(r"^\d+$")
_FOOTNOTE_START = re.compile(r"^(?:\[|[†‡*#]|\d+[.)])")


def _list_marker(text: str) -> re.Match[str] | None:
    trimmed = text.lstrip()
    for pattern in _LIST_MARKERS:
        match = pattern.match(trimmed)
        if match:
            return match
    return None


def is_list_item(text: str) -> bool:
    """Return True if the text opens with a bullet, numeral, letter or roman marker."""
    return _list_marker(text) is not None


def strip_list_marker(text: str) -> tuple[ElementType, str]:
    """Split a list line into its list type and marker-free content.

    Only purely numeric markers (``1.``, ``2)``) produce a numbered item.
    """
    trimmed = text.lstrip()
    match = _list_marker(trimmed)
    if match is None:
        return ElementType.LIST_ITEM, text.strip()

    item_type = ElementType.NUMBERED_LIST_ITEM if match.re is _NUMERIC_MARKER else ElementType.LIST_ITEM
    return item_type, trimmed[match.end() :].strip()


def is_monospace_font(font_name: str) -> bool:
    lowered = (font_name or "").lower()
    return any(keyword in lowered for keyword in MONOSPACE_FONT_KEYWORDS)


def is_horizontal_rule(text: str) -> bool:
    """Return True for lines such as ``-----`` or ``=====``."""
    trimmed = text.strip()
    if len(trimmed) < HORIZONTAL_RULE_MIN_LENGTH:
        return False
    first = trimmed[0]
    if first not in HORIZONTAL_RULE_CHARS:
        return False
    return trimmed.count(first) / len(trimmed) > HORIZONTAL_RULE_FILL_RATIO


def is_underlined(text: str) -> bool:
    """Heuristic underline detection from underscore or ``<u>`` wrapping."""
    return (
        (text.startswith("_") and text.endswith("_") and len(text) > 2)
        or "___" in text
        or text.startswith("<u>")
        or text.endswith("</u>")
    )


def calculate_indent_level(x: float, left_margin: float) -> int:
    """Convert an x-position into indent units relative to the left margin."""
    if x <= left_margin * LIST_INDENT_MARGIN_RATIO:
        return 0
    units = (x - left_margin) / (left_margin * LIST_INDENT_UNIT_RATIO)
    return max(0, round(units))


def _is_continuation(previous: Line, line: Line, text: str, metrics: PageMetrics) -> bool:
    margin = metrics.left_margin * CONTINUATION_MARGIN_RATIO
    if previous.bbox.left <= margin or line.bbox.left <= margin:
        return False
    if abs(previous.bbox.top - line.bbox.top) >= metrics.average_line_height * CONTINUATION_LINE_GAP_RATIO:
        return False
    if previous.text.rstrip().endswith(CONTINUATION_BLOCKING_ENDINGS):
        return False
    return not text[0].isupper() and not is_list_item(text) and not is_horizontal_rule(text)


def _within_tolerance(size: float, target: float | None) -> bool:
    if target is None:
        return False
    return target * (1 - HEADING_SIZE_TOLERANCE) <= size <= target * (1 + HEADING_SIZE_TOLERANCE)


def _classify(element: Element, metrics: PageMetrics) -> Element:
    """Apply the ordered rules to one element, updating it in place."""
    text = element.text
    fmt = element.format
    size = fmt.font_size
    x = element.position.x
    normal = metrics.normal_font_size
    margin = metrics.left_margin

    def assign(element_type: ElementType, confidence: float) -> Element:
        element.type = element_type
        element.confidence = confidence
        return element

    # Rules are drawn as lines of repeated characters whatever their font
    if is_horizontal_rule(text):
        return assign(ElementType.HORIZONTAL_RULE, CONFIDENCE_HORIZONTAL_RULE)

    if size < normal * SMALL_FONT_RATIO and x > margin * PAGE_NUMBER_MARGIN_RATIO and _PAGE_NUMBER.match(text):
        return assign(ElementType.PAGE_NUMBER, CONFIDENCE_PAGE_NUMBER)

    if _within_tolerance(size, metrics.heading_size):
        return assign(ElementType.HEADING_1 if fmt.bold else ElementType.HEADING_2, CONFIDENCE_HEADING)

    # The lower half of the subheading band can reach below body text size
    if size > normal and _within_tolerance(size, metrics.subheading_size):
        return assign(ElementType.HEADING_2 if fmt.bold else ElementType.HEADING_3, CONFIDENCE_SUBHEADING)

    if size > normal * HEADING_3_SIZE_RATIO and fmt.bold:
        return assign(ElementType.HEADING_3, CONFIDENCE_HEADING_3)

    if size > normal and fmt.bold:
        return assign(ElementType.HEADING_4, CONFIDENCE_HEADING_4)

    if is_list_item(text):
        element.type, element.text = strip_list_marker(text)
        element.indent_level = calculate_indent_level(x, margin)
        element.confidence = CONFIDENCE_LIST_ITEM
        return element

    if is_monospace_font(fmt.font_name):
        return assign(ElementType.CODE_BLOCK, CONFIDENCE_CODE_BLOCK)

    if margin * BLOCK_QUOTE_MIN_MARGIN_RATIO < x < margin * BLOCK_QUOTE_MAX_MARGIN_RATIO:
        return assign(ElementType.BLOCK_QUOTE, CONFIDENCE_BLOCK_QUOTE)

    if size < normal * SMALL_FONT_RATIO and _FOOTNOTE_START.match(text):
        return assign(ElementType.FOOTNOTE, CONFIDENCE_FOOTNOTE)

    return assign(ElementType.PARAGRAPH, CONFIDENCE_PARAGRAPH)


def _line_to_element(line: Line, text: str) -> Element:
    box = line.bbox
    return Element(
        text=text,
        format=TextFormat(
            font_name=line.font_name,
            font_size=line.avg_font_size,
            bold=line.is_bold,
            italic=line.is_italic,
            underline=is_underlined(text),
            color=line.color,
        ),
        position=Position(x=box.left, y=box.top, width=box.width, height=box.height),
    )


def classify_lines(lines: Sequence[Line], metrics: PageMetrics) -> list[Element]:
    """Turn non-table lines into classified elements.

    Parameters
    ----------
    lines : Sequence[Line]
        Lines in reading order, tables already removed
    metrics : PageMetrics
        Metrics of the current page

    Returns
    -------
    list[Element]
        One element per non-blank line. Continuation lines keep the
        UNKNOWN type with ``is_continuation`` set; the merger folds them
        into the element they continue.

    """
    elements: list[Element] = []
    previous: Line | None = None

    for line in lines:
        text = line.text.strip()
        if not text:
            continue

        element = _line_to_element(line, text)
        if previous is not None and _is_continuation(previous, line, text, metrics):
            element.is_continuation = True
        else:
            _classify(element, metrics)
            if not element.format.font_name:
                element.confidence *= MISSING_FONT_CONFIDENCE_FACTOR

        elements.append(element)
        previous = line

    return elements
