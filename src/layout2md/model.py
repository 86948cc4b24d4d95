#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/model.py
"""Data model for layout reconstruction.

Pages arrive as unordered glyphs in a bottom-left origin coordinate space
(y increases upward). The pipeline derives words, lines, classified
elements and detected tables from them; everything here is a plain
dataclass so each stage stays a transformation of values.

"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Sequence

from layout2md.constants import BOLD_FONT_KEYWORDS, ITALIC_FONT_KEYWORDS

__all__ = [
    "RgbColor",
    "BLACK",
    "BBox",
    "Glyph",
    "Word",
    "Line",
    "PageMetrics",
    "ElementType",
    "TextFormat",
    "Position",
    "Element",
    "TableCell",
    "TableRow",
    "DetectedTable",
    "Page",
    "PageResult",
    "is_bold_font",
    "is_italic_font",
]


def _has_keyword(font_name: str, keywords: Sequence[str]) -> bool:
    lowered = font_name.lower()
    return any(keyword in lowered for keyword in keywords)


def is_bold_font(font_name: str | None) -> bool:
    """Return True if the font name suggests a bold weight."""
    return _has_keyword(font_name or "", BOLD_FONT_KEYWORDS)


def is_italic_font(font_name: str | None) -> bool:
    """Return True if the font name suggests an italic or oblique style."""
    return _has_keyword(font_name or "", ITALIC_FONT_KEYWORDS)


@dataclass(frozen=True)
class RgbColor:
    """An explicit 8-bit RGB colour."""

    r: int = 0
    g: int = 0
    b: int = 0


BLACK = RgbColor(0, 0, 0)


@dataclass(frozen=True)
class BBox:
    """Axis-aligned rectangle with bottom-left origin."""

    left: float
    bottom: float
    right: float
    top: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @classmethod
    def union(cls, boxes: Sequence[BBox]) -> BBox:
        """Return the smallest box containing every box in ``boxes``."""
        if not boxes:
            return cls(0.0, 0.0, 0.0, 0.0)
        return cls(
            min(b.left for b in boxes),
            min(b.bottom for b in boxes),
            max(b.right for b in boxes),
            max(b.top for b in boxes),
        )


@dataclass(frozen=True)
class Glyph:
    """One rendered character as produced by a page source.

    Missing attributes are tolerated: ``font_name`` may be empty and
    ``color`` defaults to black.
    """

    char: str
    bbox: BBox
    font_name: str = ""
    font_size: float = 0.0
    color: RgbColor = BLACK

    @property
    def is_bold(self) -> bool:
        return is_bold_font(self.font_name)

    @property
    def is_italic(self) -> bool:
        return is_italic_font(self.font_name)


@dataclass
class Word:
    """Ordered glyphs judged to be contiguous."""

    glyphs: list[Glyph] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(g.char for g in self.glyphs)

    @cached_property
    def bbox(self) -> BBox:
        return BBox.union([g.bbox for g in self.glyphs])

    @property
    def avg_font_size(self) -> float:
        if not self.glyphs:
            return 0.0
        return sum(g.font_size for g in self.glyphs) / len(self.glyphs)

    @property
    def is_bold(self) -> bool:
        """Dominant boldness: more than half of the glyphs use a bold font."""
        return sum(1 for g in self.glyphs if g.is_bold) * 2 > len(self.glyphs)

    @property
    def is_italic(self) -> bool:
        return sum(1 for g in self.glyphs if g.is_italic) * 2 > len(self.glyphs)

    @property
    def color(self) -> RgbColor:
        if not self.glyphs:
            return BLACK
        return Counter(g.color for g in self.glyphs).most_common(1)[0][0]

    def __str__(self) -> str:
        return self.text


@dataclass
class Line:
    """Words sharing a vertical band, ordered left to right."""

    words: list[Word] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(w.text for w in self.words)

    @cached_property
    def bbox(self) -> BBox:
        return BBox.union([w.bbox for w in self.words])

    @property
    def glyphs(self) -> list[Glyph]:
        return [g for w in self.words for g in w.glyphs]

    @property
    def avg_font_size(self) -> float:
        if not self.words:
            return 0.0
        return sum(w.avg_font_size for w in self.words) / len(self.words)

    @property
    def font_name(self) -> str:
        """Most frequent non-empty font name, or "" when no glyph carries one."""
        names = [g.font_name for g in self.glyphs if g.font_name]
        if not names:
            return ""
        return Counter(names).most_common(1)[0][0]

    @property
    def color(self) -> RgbColor:
        if not self.words:
            return BLACK
        return Counter(w.color for w in self.words).most_common(1)[0][0]

    @property
    def line_height(self) -> float:
        if not self.words:
            return 0.0
        return max(w.bbox.top for w in self.words) - min(w.bbox.bottom for w in self.words)

    @property
    def is_bold(self) -> bool:
        glyphs = self.glyphs
        return sum(1 for g in glyphs if g.is_bold) * 2 > len(glyphs)

    @property
    def is_italic(self) -> bool:
        glyphs = self.glyphs
        return sum(1 for g in glyphs if g.is_italic) * 2 > len(glyphs)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class PageMetrics:
    """Per-page font and layout statistics.

    A zero heading or subheading size means "unset". Sizes below the
    normal font size are also treated as unset by ``heading_size`` and
    ``subheading_size``.
    """

    most_common_font_size: float = 0.0
    heading_font_size: float = 0.0
    subheading_font_size: float = 0.0
    normal_font_size: float = 0.0
    average_line_height: float = 0.0
    left_margin: float = 0.0
    font_usage: dict[str, int] = field(default_factory=dict, compare=False)

    @property
    def heading_size(self) -> float | None:
        return self._threshold(self.heading_font_size)

    @property
    def subheading_size(self) -> float | None:
        return self._threshold(self.subheading_font_size)

    def _threshold(self, size: float) -> float | None:
        if size <= 0 or size < self.normal_font_size:
            return None
        return size


class ElementType(Enum):
    """Closed set of semantic types an element can take."""

    UNKNOWN = "unknown"
    HEADING_1 = "heading1"
    HEADING_2 = "heading2"
    HEADING_3 = "heading3"
    HEADING_4 = "heading4"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TABLE = "table"
    CODE_BLOCK = "code_block"
    BLOCK_QUOTE = "block_quote"
    HORIZONTAL_RULE = "horizontal_rule"
    PAGE_NUMBER = "page_number"
    FOOTNOTE = "footnote"

    @property
    def is_heading(self) -> bool:
        return self in _HEADING_TYPES

    @property
    def is_list(self) -> bool:
        return self in (ElementType.LIST_ITEM, ElementType.NUMBERED_LIST_ITEM)

    @property
    def heading_level(self) -> int:
        return _HEADING_TYPES.index(self) + 1 if self.is_heading else 0


_HEADING_TYPES = (ElementType.HEADING_1, ElementType.HEADING_2, ElementType.HEADING_3, ElementType.HEADING_4)


@dataclass(frozen=True)
class TextFormat:
    font_name: str = ""
    font_size: float = 0.0
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: RgbColor = BLACK


@dataclass(frozen=True)
class Position:
    """Top-left anchored placement of an element or table."""

    x: float
    y: float
    width: float = 0.0
    height: float = 0.0


@dataclass
class Element:
    """A classified unit of page text.

    Attributes
    ----------
    text : str
        Text content, with list markers already stripped for list items
    type : ElementType
        Semantic type; continuation lines stay UNKNOWN until merged
    format : TextFormat
        Font and inline style of the source line
    position : Position
        Left edge and top of the source line
    indent_level : int
        Indent units from the margin; list depth once nested
    confidence : float
        Heuristic confidence in [0, 1]
    is_continuation : bool
        The line wraps the preceding element rather than starting a new one

    """

    text: str
    type: ElementType = ElementType.UNKNOWN
    format: TextFormat = field(default_factory=TextFormat)
    position: Position = field(default_factory=lambda: Position(0.0, 0.0))
    indent_level: int = 0
    confidence: float = 1.0
    is_continuation: bool = False


@dataclass
class TableCell:
    text: str
    col_span: int = 1
    row_span: int = 1


@dataclass
class TableRow:
    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False

    @property
    def text(self) -> str:
        return " ".join(c.text for c in self.cells if c.text).strip()

    def has_content(self) -> bool:
        return any(c.text.strip() for c in self.cells)


@dataclass
class DetectedTable:
    """A grid reconstructed from spatially regular lines."""

    rows: list[TableRow] = field(default_factory=list)
    column_count: int = 0
    bounds: Position | None = None


@dataclass(frozen=True)
class Page:
    """Input contract: one page as produced by a page source."""

    width: float
    height: float
    glyphs: Sequence[Glyph] = ()
    number: int | None = None


@dataclass
class PageResult:
    """Output of the per-page pipeline.

    ``metrics`` is the value to hand to the next page's conversion.
    """

    markdown: str
    metrics: PageMetrics
    elements: list[Element] = field(default_factory=list)
    tables: list[DetectedTable] = field(default_factory=list)
