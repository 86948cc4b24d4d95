"""Test utilities for the layout2md test suite.

Helpers here build synthetic glyph streams the way a page source would
produce them: one glyph per character, spaces included, laid out on a
fixed advance so word and column gaps are fully controlled by the test.
"""

from typing import Iterable, Sequence

from layout2md.model import BLACK, BBox, Glyph, Page, RgbColor

PAGE_WIDTH = 612.0
PAGE_HEIGHT = 792.0

# Horizontal advance of each glyph as a fraction of its font size
CHAR_WIDTH_RATIO = 0.5


def make_glyphs(
    text: str,
    x: float = 72.0,
    top: float = 700.0,
    size: float = 12.0,
    font_name: str = "Helvetica",
    color: RgbColor = BLACK,
    char_width: float | None = None,
) -> list[Glyph]:
    """Lay out ``text`` as contiguous glyphs starting at ``x`` on one baseline."""
    advance = size * CHAR_WIDTH_RATIO if char_width is None else char_width
    glyphs = []
    left = x
    for char in text:
        glyphs.append(
            Glyph(
                char=char,
                bbox=BBox(left=left, bottom=top - size, right=left + advance, top=top),
                font_name=font_name,
                font_size=size,
                color=color,
            )
        )
        left += advance
    return glyphs


def make_row_glyphs(
    cells: Sequence[tuple[float, str]],
    top: float = 700.0,
    size: float = 12.0,
    font_name: str = "Helvetica",
) -> list[Glyph]:
    """Lay out table cells, each starting at its own x position."""
    glyphs = []
    for x, text in cells:
        glyphs.extend(make_glyphs(text, x=x, top=top, size=size, font_name=font_name))
    return glyphs


def make_page(*glyph_groups: Iterable[Glyph], width: float = PAGE_WIDTH, number: int | None = None) -> Page:
    """Build a Page from any number of glyph lists."""
    glyphs = tuple(glyph for group in glyph_groups for glyph in group)
    return Page(width=width, height=PAGE_HEIGHT, glyphs=glyphs, number=number)


def dash_groups(separator_line: str) -> list[str]:
    """Return the dash runs of a pipe-table separator row."""
    return [cell.strip() for cell in separator_line.strip().strip("|").split("|")]
