#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for layout2md.

This module centralizes the thresholds and magic numbers used by the
reconstruction heuristics. All ratios are relative to a font size, the
page's estimated line height, left margin or width, so they scale with
the document rather than with any particular unit.

Constants are organized by category:
1. Type Definitions - Literal types
2. Output Formatting - Separators and Markdown markers
3. Pipeline Stage Thresholds - One block per stage
4. Optional Dependencies - Page source packages
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

FootnoteIdMode = Literal["sequential", "uuid"]

# =============================================================================
# Output Formatting
# =============================================================================

DEFAULT_PAGE_SEPARATOR = "\n\n---\n\n"
DEFAULT_DETECT_TABLES = True
DEFAULT_APPLY_POSTPROCESSING = True
DEFAULT_FOOTNOTE_ID_MODE: FootnoteIdMode = "sequential"

# Length of ids produced by the "uuid" footnote mode
FOOTNOTE_UUID_LENGTH = 4

# Code blocks longer than this (or containing a newline) are fenced
CODE_INLINE_MAX_LENGTH = 60

# Table separator dashes are sized to the header cell, within these bounds
TABLE_SEPARATOR_MIN_DASHES = 3
TABLE_SEPARATOR_MAX_DASHES = 20

# =============================================================================
# Metrics Analysis
# =============================================================================

HEADING_SIZE_RATIO = 1.3
SUBHEADING_SIZE_RATIO = 1.1
LINE_GAP_MAX_RATIO = 3.0
DEFAULT_LINE_HEIGHT_RATIO = 1.2
LEFT_MARGIN_MAX_PAGE_RATIO = 0.8
DEFAULT_LEFT_MARGIN = 50.0

# Used when neither the page nor any earlier page has a positive font size
FALLBACK_FONT_SIZE = 12.0

# =============================================================================
# Word and Line Grouping
# =============================================================================

WORD_VERTICAL_SPLIT_RATIO = 0.4
WORD_HORIZONTAL_SPLIT_RATIO = 0.6
LINE_BAND_RATIO = 0.3

# Lower bound for the line band height so degenerate metrics never divide by zero
MIN_LINE_BAND = 0.5

BOLD_FONT_KEYWORDS = ("bold", "black", "heavy", "700", "800", "900")
ITALIC_FONT_KEYWORDS = ("italic", "oblique")

# =============================================================================
# Table Detection
# =============================================================================

TABLE_MIN_PIPES = 2
TABLE_MIN_WORDS_FOR_SPACING = 3
TABLE_SIGNIFICANT_GAP_RATIO = 0.5
TABLE_GAP_STDDEV_RATIO = 0.3
TABLE_MAX_WIDTH_RATIO = 0.7
TABLE_MIN_SEGMENTS = 3
TABLE_MAX_SEGMENT_LENGTH = 50
TABLE_MAX_ROW_LENGTH = 200
TABLE_ROW_GAP_RATIO = 2.5
TABLE_MIN_ROWS = 2
TABLE_CLUSTER_GAP_RATIO = 0.03
TABLE_COLUMN_EDGE_MAX_RATIO = 0.95

TABLE_SEGMENT_SPLIT_PATTERN = re.compile(r"\s{2,}")

# =============================================================================
# Structure Classification
# =============================================================================

CONTINUATION_MARGIN_RATIO = 0.8
CONTINUATION_LINE_GAP_RATIO = 1.5
CONTINUATION_BLOCKING_ENDINGS = (".", "!", "?", ":")

SMALL_FONT_RATIO = 0.9
PAGE_NUMBER_MARGIN_RATIO = 3.0
HEADING_SIZE_TOLERANCE = 0.15
HEADING_3_SIZE_RATIO = 1.2

LIST_INDENT_MARGIN_RATIO = 1.2
LIST_INDENT_UNIT_RATIO = 0.5

BLOCK_QUOTE_MIN_MARGIN_RATIO = 1.5
BLOCK_QUOTE_MAX_MARGIN_RATIO = 4.0

HORIZONTAL_RULE_CHARS = "-_*=~"
HORIZONTAL_RULE_MIN_LENGTH = 3
HORIZONTAL_RULE_FILL_RATIO = 0.8

MONOSPACE_FONT_KEYWORDS = (
    "mono",
    "courier",
    "consolas",
    "terminal",
    "fixedsys",
    "source code",
    "dejavu sans mono",
    "liberation mono",
    "lucida console",
    "monaco",
    "andale mono",
    "roboto mono",
)

# Confidence assigned by each classification rule
CONFIDENCE_PAGE_NUMBER = 0.9
CONFIDENCE_HEADING = 0.9
CONFIDENCE_SUBHEADING = 0.8
CONFIDENCE_HEADING_3 = 0.7
CONFIDENCE_HEADING_4 = 0.6
CONFIDENCE_LIST_ITEM = 0.85
CONFIDENCE_CODE_BLOCK = 0.75
CONFIDENCE_BLOCK_QUOTE = 0.7
CONFIDENCE_HORIZONTAL_RULE = 1.0
CONFIDENCE_FOOTNOTE = 0.8
CONFIDENCE_PARAGRAPH = 1.0

# Applied when a line carries no font name
MISSING_FONT_CONFIDENCE_FACTOR = 0.8

# =============================================================================
# Element Merging
# =============================================================================

MERGE_MAX_FONT_SIZE_DELTA = 0.5
MERGE_MAX_VERTICAL_GAP_RATIO = 2.5
MERGE_MAX_HORIZONTAL_SHIFT_RATIO = 2.0

# =============================================================================
# Optional Dependencies
# =============================================================================

PDF_MIN_PYMUPDF_VERSION = "1.26.4"
DEPS_PDF = [("pymupdf", "fitz", f">={PDF_MIN_PYMUPDF_VERSION}")]
