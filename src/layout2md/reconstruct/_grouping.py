#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/reconstruct/_grouping.py
"""Spatial grouping of glyphs into words and words into lines."""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from layout2md.constants import (
    LINE_BAND_RATIO,
    MIN_LINE_BAND,
    WORD_HORIZONTAL_SPLIT_RATIO,
    WORD_VERTICAL_SPLIT_RATIO,
)
from layout2md.model import Glyph, Line, PageMetrics, Word

__all__ = ["group_glyphs_into_words", "group_words_into_lines", "starts_new_word"]


def starts_new_word(previous: Glyph, current: Glyph) -> bool:
    """Return True if ``current`` cannot continue the word ending in ``previous``.

    Both thresholds scale with the current glyph's font size: a top
    coordinate shift above 40% of it, or a horizontal gap above 60% of it,
    breaks the word.
    """
    vertical_diff = abs(current.bbox.top - previous.bbox.top)
    horizontal_gap = current.bbox.left - previous.bbox.right
    return (
        vertical_diff > current.font_size * WORD_VERTICAL_SPLIT_RATIO
        or horizontal_gap > current.font_size * WORD_HORIZONTAL_SPLIT_RATIO
    )


def group_glyphs_into_words(glyphs: Sequence[Glyph]) -> list[Word]:
    """Cluster glyphs into words in reading order.

    Glyphs are visited top to bottom, then left to right, and each glyph is
    compared only with the glyph visited just before it.
    """
    ordered = sorted(glyphs, key=lambda g: (-g.bbox.top, g.bbox.left))

    words: list[Word] = []
    current: list[Glyph] = []
    for glyph in ordered:
        if current and starts_new_word(current[-1], glyph):
            words.append(Word(current))
            current = []
        current.append(glyph)

    if current:
        words.append(Word(current))
    return words


def group_words_into_lines(words: Sequence[Word], metrics: PageMetrics) -> list[Line]:
    """Band words by their top coordinate and emit one line per band.

    The band height is 30% of the page's average line height. Lines come
    out top to bottom with their words sorted left to right.
    """
    band = max(metrics.average_line_height * LINE_BAND_RATIO, MIN_LINE_BAND)

    bands: dict[int, list[Word]] = defaultdict(list)
    for word in words:
        bands[round(word.bbox.top / band)].append(word)

    return [
        Line(sorted(bands[key], key=lambda w: w.bbox.left))
        for key in sorted(bands, reverse=True)
    ]
