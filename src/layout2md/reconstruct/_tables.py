#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/reconstruct/_tables.py
"""Table detection from text alignment.

This private module finds runs of lines that look like table rows and
rebuilds their grid. There are no ruling lines to rely on here, so rows are
recognised by text cues (pipes, regular word spacing, multi-space column
gaps) and columns by clustering word start positions across the run.

"""

from __future__ import annotations

import logging
import statistics
from typing import Sequence

from layout2md.constants import (
    TABLE_CLUSTER_GAP_RATIO,
    TABLE_COLUMN_EDGE_MAX_RATIO,
    TABLE_GAP_STDDEV_RATIO,
    TABLE_MAX_ROW_LENGTH,
    TABLE_MAX_SEGMENT_LENGTH,
    TABLE_MAX_WIDTH_RATIO,
    TABLE_MIN_PIPES,
    TABLE_MIN_ROWS,
    TABLE_MIN_SEGMENTS,
    TABLE_MIN_WORDS_FOR_SPACING,
    TABLE_ROW_GAP_RATIO,
    TABLE_SEGMENT_SPLIT_PATTERN,
    TABLE_SIGNIFICANT_GAP_RATIO,
)
from layout2md.model import BBox, DetectedTable, Line, Position, TableCell, TableRow, Word

logger = logging.getLogger(__name__)

__all__ = ["detect_tables", "is_table_row_candidate", "detect_column_boundaries"]


def _has_regular_spacing(words: Sequence[Word]) -> bool:
    """Return True if the significant inter-word gaps are nearly equal."""
    if len(words) < TABLE_MIN_WORDS_FOR_SPACING:
        return False

    min_gap = words[0].avg_font_size * TABLE_SIGNIFICANT_GAP_RATIO
    gaps = []
    for prev, word in zip(words, words[1:]):
        gap = word.bbox.left - prev.bbox.right
        if gap > min_gap:
            gaps.append(gap)

    if len(gaps) < 2:
        return False
    mean = statistics.fmean(gaps)
    return statistics.pstdev(gaps) < mean * TABLE_GAP_STDDEV_RATIO


def is_table_row_candidate(line: Line, page_width: float) -> bool:
    """Return True if a line looks like one row of a table.

    Any of three cues qualifies a line: at least two pipe characters,
    at least three words separated by regular significant gaps, or a
    narrow line splitting on runs of two or more spaces into at least
    three short segments.
    """
    text = line.text.strip()
    if not text or len(text) > TABLE_MAX_ROW_LENGTH:
        return False

    if text.count("|") >= TABLE_MIN_PIPES:
        return True

    if _has_regular_spacing(line.words):
        return True

    if line.bbox.width < page_width * TABLE_MAX_WIDTH_RATIO:
        segments = TABLE_SEGMENT_SPLIT_PATTERN.split(text)
        if len(segments) >= TABLE_MIN_SEGMENTS and all(len(s) < TABLE_MAX_SEGMENT_LENGTH for s in segments):
            return True

    return False


def _is_significant_vertical_gap(current: Line, following: Line) -> bool:
    avg_font_size = (current.avg_font_size + following.avg_font_size) / 2
    return current.bbox.bottom - following.bbox.top > avg_font_size * TABLE_ROW_GAP_RATIO


def _find_candidate_runs(lines: Sequence[Line], page_width: float) -> list[list[int]]:
    """Group consecutive candidate rows into runs of line indices."""
    runs: list[list[int]] = []
    current: list[int] = []

    def flush() -> None:
        if len(current) >= TABLE_MIN_ROWS:
            runs.append(list(current))
        current.clear()

    for index, line in enumerate(lines):
        if not line.text.strip():
            continue
        if not is_table_row_candidate(line, page_width):
            flush()
            continue
        if current and _is_significant_vertical_gap(lines[current[-1]], line):
            flush()
        current.append(index)

    flush()
    return runs


def detect_column_boundaries(words: Sequence[Word], page_width: float) -> list[float]:
    """Cluster word left edges into column boundaries.

    Left edges closer than 3% of the page width chain into one cluster;
    clusters with a single member are ignored. The cluster centers become
    interior boundaries between 0 and ``page_width``. With fewer than two
    clusters the page is split evenly into two columns.

    Returns
    -------
    list[float]
        Ascending boundaries, first 0 and last ``page_width``

    """
    max_edge = page_width * TABLE_COLUMN_EDGE_MAX_RATIO
    edges = sorted(w.bbox.left for w in words if 0 < w.bbox.left < max_edge)

    threshold = page_width * TABLE_CLUSTER_GAP_RATIO
    clusters: list[list[float]] = []
    current: list[float] = []
    for edge in edges:
        if current and edge - current[-1] >= threshold:
            clusters.append(current)
            current = []
        current.append(edge)
    if current:
        clusters.append(current)

    centers = sorted(statistics.fmean(c) for c in clusters if len(c) > 1)
    if len(centers) < 2:
        return [0.0, page_width / 2, page_width]

    return sorted({0.0, *centers, float(page_width)})


def _column_for_word(word: Word, boundaries: Sequence[float]) -> int:
    """Pick the column overlapping the word most, else the nearest midpoint."""
    best_index = -1
    best_overlap = 0.0
    for index, (start, end) in enumerate(zip(boundaries, boundaries[1:])):
        overlap = min(word.bbox.right, end) - max(word.bbox.left, start)
        if overlap > best_overlap:
            best_index, best_overlap = index, overlap

    if best_index >= 0:
        return best_index

    center = word.bbox.center_x
    midpoints = [(start + end) / 2 for start, end in zip(boundaries, boundaries[1:])]
    return min(range(len(midpoints)), key=lambda i: abs(midpoints[i] - center))


def _is_cell_word(word: Word) -> bool:
    text = word.text.strip()
    return bool(text) and text.strip("|") != ""


def _split_row(line: Line, boundaries: Sequence[float]) -> list[str]:
    columns: list[list[str]] = [[] for _ in range(len(boundaries) - 1)]
    for word in line.words:
        if _is_cell_word(word):
            columns[_column_for_word(word, boundaries)].append(word.text.strip().strip("|").strip())
    return [" ".join(parts).strip() for parts in columns]


def _merge_trailing_empty_cells(row: TableRow) -> None:
    """Collapse the run of empty cells ending a row into one spanning cell.

    Empty cells between filled ones are left alone so later values stay
    under their own column.
    """
    cells = row.cells
    while len(cells) > 1 and not cells[-1].text.strip() and not cells[-2].text.strip():
        cells[-2].col_span += cells.pop().col_span


def _is_header_row(line: Line) -> bool:
    return any(w.is_bold for w in line.words) or line.text.strip().isupper()


def _build_table(lines: Sequence[Line], page_width: float) -> DetectedTable | None:
    words = [w for line in lines for w in line.words]
    boundaries = detect_column_boundaries(words, page_width)
    grid = [_split_row(line, boundaries) for line in lines]

    # Columns that no row fills are artefacts of the outer page boundaries
    kept = [col for col in range(len(boundaries) - 1) if any(row[col] for row in grid)]

    table = DetectedTable(column_count=len(kept))
    for row_index, (line, cells) in enumerate(zip(lines, grid)):
        row = TableRow(
            cells=[TableCell(text=cells[col]) for col in kept],
            is_header=row_index == 0 and _is_header_row(line),
        )
        _merge_trailing_empty_cells(row)
        if row.has_content():
            table.rows.append(row)

    if len(table.rows) < TABLE_MIN_ROWS:
        return None

    box = BBox.union([line.bbox for line in lines])
    table.bounds = Position(x=box.left, y=box.top, width=box.width, height=box.height)
    return table


def detect_tables(lines: Sequence[Line], page_width: float) -> tuple[list[DetectedTable], set[int]]:
    """Detect tables among a page's lines.

    Parameters
    ----------
    lines : Sequence[Line]
        Page lines in reading order
    page_width : float
        Page width, used for column clustering and the narrow-line cue

    Returns
    -------
    tuple[list[DetectedTable], set[int]]
        The detected tables, top to bottom, and the indices of the lines
        they consumed. Lines are matched by index rather than text, so two
        identical lines are never confused.

    """
    tables: list[DetectedTable] = []
    consumed: set[int] = set()

    if len(lines) < TABLE_MIN_ROWS:
        return tables, consumed

    for run in _find_candidate_runs(lines, page_width):
        table = _build_table([lines[i] for i in run], page_width)
        if table is None:
            continue
        tables.append(table)
        consumed.update(run)

    if tables:
        logger.debug(f"Detected {len(tables)} table(s) covering {len(consumed)} line(s)")
    return tables, consumed
