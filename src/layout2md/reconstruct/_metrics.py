#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/reconstruct/_metrics.py
"""Page metrics estimation.

This private module derives the font size tiers, line height and left
margin of a page from its raw glyphs. The previous page's metrics are
passed in explicitly so a page that lacks its own signal (no large
fonts, no glyphs at all) inherits the values observed before it.

"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from layout2md.constants import (
    DEFAULT_LEFT_MARGIN,
    DEFAULT_LINE_HEIGHT_RATIO,
    FALLBACK_FONT_SIZE,
    HEADING_SIZE_RATIO,
    LEFT_MARGIN_MAX_PAGE_RATIO,
    LINE_GAP_MAX_RATIO,
    SUBHEADING_SIZE_RATIO,
)
from layout2md.model import Glyph, PageMetrics

logger = logging.getLogger(__name__)

__all__ = ["analyze_page_metrics"]


def _font_size_tiers(glyphs: Sequence[Glyph]) -> tuple[float, float, float]:
    """Return (normal, heading, subheading) sizes; 0.0 marks a missing tier.

    Sizes are grouped after rounding to one decimal place. The most
    populated group is the normal size; ties go to the size seen first.
    """
    size_counts = Counter(round(g.font_size, 1) for g in glyphs if g.font_size > 0)
    if not size_counts:
        return 0.0, 0.0, 0.0

    normal = size_counts.most_common(1)[0][0]
    heading = 0.0
    subheading = 0.0

    if len(size_counts) > 1:
        large = [size for size in size_counts if size > normal * HEADING_SIZE_RATIO]
        if large:
            heading = max(large)
            medium = [size for size in size_counts if normal * SUBHEADING_SIZE_RATIO < size < heading]
            if medium:
                subheading = max(medium)

    return normal, heading, subheading


def _font_usage(glyphs: Sequence[Glyph]) -> dict[str, int]:
    usage: Counter[str] = Counter(f"{g.font_name}_{round(g.font_size, 1)}" for g in glyphs)
    return dict(usage)


def _average_line_height(glyphs: Sequence[Glyph], normal_size: float) -> float:
    tops = sorted({g.bbox.top for g in glyphs}, reverse=True)
    default = normal_size * DEFAULT_LINE_HEIGHT_RATIO
    if len(tops) < 2:
        return default

    max_gap = normal_size * LINE_GAP_MAX_RATIO
    gaps = [upper - lower for upper, lower in zip(tops, tops[1:]) if 0 < upper - lower < max_gap]
    if not gaps:
        return default
    return sum(gaps) / len(gaps)


def _left_margin(glyphs: Sequence[Glyph], page_width: float) -> float:
    limit = page_width * LEFT_MARGIN_MAX_PAGE_RATIO
    lefts = [g.bbox.left for g in glyphs if 0 < g.bbox.left < limit]
    return min(lefts) if lefts else DEFAULT_LEFT_MARGIN


def analyze_page_metrics(
    glyphs: Sequence[Glyph],
    previous: PageMetrics | None,
    page_width: float,
) -> PageMetrics:
    """Compute the metrics of one page.

    Parameters
    ----------
    glyphs : Sequence[Glyph]
        Every glyph of the page, in any order
    previous : PageMetrics or None
        Metrics of the preceding page, or None for the first page
    page_width : float
        Page width in the glyphs' coordinate units

    Returns
    -------
    PageMetrics
        Metrics for this page. For a glyph-less page this is ``previous``
        itself (or default metrics on the first page).

    """
    previous = previous or PageMetrics()
    if not glyphs:
        logger.debug("Page has no glyphs; carrying metrics forward unchanged")
        return previous

    normal, heading, subheading = _font_size_tiers(glyphs)

    if normal <= 0:
        # No positive font size on the page: inherit the baseline
        normal = previous.normal_font_size or FALLBACK_FONT_SIZE
        logger.debug(f"No usable font sizes on page; using normal size {normal}")

    if heading == 0 and previous.heading_font_size > 0:
        heading = previous.heading_font_size
        logger.debug(f"Carrying heading size {heading} forward from previous page")
    if subheading == 0 and previous.subheading_font_size > 0:
        subheading = previous.subheading_font_size

    return PageMetrics(
        most_common_font_size=normal,
        heading_font_size=heading,
        subheading_font_size=subheading,
        normal_font_size=normal,
        average_line_height=_average_line_height(glyphs, normal),
        left_margin=_left_margin(glyphs, page_width),
        font_usage=_font_usage(glyphs),
    )
