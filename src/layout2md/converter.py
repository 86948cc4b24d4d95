#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/converter.py
"""Glyph-to-Markdown conversion pipeline.

``convert_page`` runs the per-page stages in fixed order:

1. metrics estimation (with the previous page's metrics as input)
2. glyph → word → line grouping
3. table detection
4. line classification
5. list nesting
6. element merging
7. Markdown rendering

``to_markdown`` threads the metrics from page to page, joins the page
fragments and runs the whole-document post-processing pass. Any failure
inside a stage is raised as a ConversionError and aborts the document.

"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from layout2md.exceptions import ConversionError, Layout2MdError
from layout2md.model import Line, Page, PageMetrics, PageResult
from layout2md.options import ConversionOptions
from layout2md.postprocess import postprocess_markdown
from layout2md.reconstruct import (
    analyze_page_metrics,
    classify_lines,
    detect_tables,
    group_glyphs_into_words,
    group_words_into_lines,
    merge_elements,
    nest_list_items,
)
from layout2md.renderers.markdown import MarkdownRenderer
from layout2md.utils.decorators import debug_timer
from layout2md.utils.footnotes import create_footnote_id_factory

logger = logging.getLogger(__name__)

__all__ = ["convert_page", "to_markdown"]


class _StageRunner:
    """Run pipeline stages, wrapping their failures in ConversionError."""

    def __init__(self, page_number: int | None):
        self.page_number = page_number
        self.stage = ""

    def __call__(self, stage: str) -> _StageRunner:
        self.stage = stage
        return self

    def __enter__(self) -> _StageRunner:
        return self

    def __exit__(self, exc_type: type | None, exc: BaseException | None, tb: object) -> bool:
        if exc is None or isinstance(exc, Layout2MdError) or not isinstance(exc, Exception):
            return False
        where = f"page {self.page_number}" if self.page_number is not None else "document"
        raise ConversionError(
            f"Error converting layout to Markdown ({self.stage}, {where}): {exc}",
            page_number=self.page_number,
            stage=self.stage,
            original_error=exc,
        ) from exc


def convert_page(
    page: Page,
    previous_metrics: PageMetrics | None = None,
    options: ConversionOptions | None = None,
    renderer: MarkdownRenderer | None = None,
) -> PageResult:
    """Reconstruct and render a single page.

    Parameters
    ----------
    page : Page
        The page to convert
    previous_metrics : PageMetrics, optional
        Metrics returned for the preceding page; None for the first page
    options : ConversionOptions, optional
        Conversion options
    renderer : MarkdownRenderer, optional
        Renderer to use; pass the same renderer for every page of a document
        so footnote identifiers stay unique

    Returns
    -------
    PageResult
        The page's Markdown fragment plus the metrics to pass to the next page

    Raises
    ------
    ConversionError
        If any stage fails

    """
    options = options or ConversionOptions()
    renderer = renderer or MarkdownRenderer(options)
    stage = _StageRunner(page.number)

    with stage("metrics"):
        metrics = analyze_page_metrics(page.glyphs, previous_metrics, page.width)

    if not page.glyphs:
        return PageResult(markdown="", metrics=metrics)

    with stage("grouping"):
        words = group_glyphs_into_words(page.glyphs)
        lines = group_words_into_lines(words, metrics)

    text_lines: Sequence[Line] = lines
    tables = []
    if options.detect_tables:
        with stage("table detection"):
            tables, consumed = detect_tables(lines, page.width)
            text_lines = [line for index, line in enumerate(lines) if index not in consumed]

    with stage("classification"):
        elements = classify_lines(text_lines, metrics)

    with stage("list nesting"):
        elements = nest_list_items(elements)

    with stage("merging"):
        elements = merge_elements(elements)

    with stage("rendering"):
        markdown = renderer.render_page(elements, tables)

    logger.debug(
        f"Page {page.number}: {len(page.glyphs)} glyphs, {len(lines)} lines, "
        f"{len(elements)} elements, {len(tables)} tables"
    )
    return PageResult(markdown=markdown, metrics=metrics, elements=elements, tables=tables)


def to_markdown(pages: Iterable[Page], options: ConversionOptions | None = None) -> str:
    """Convert an ordered sequence of pages to one Markdown document.

    Pages are processed strictly in order because a page without its own
    heading sizes inherits them from the page before.

    Parameters
    ----------
    pages : Iterable[Page]
        Pages in document order
    options : ConversionOptions, optional
        Conversion options

    Returns
    -------
    str
        The document's Markdown

    Raises
    ------
    ConversionError
        If any stage fails on any page; no partial output is returned

    Examples
    --------
        >>> markdown = to_markdown(pages)
        >>> markdown = to_markdown(pages, ConversionOptions(detect_tables=False))

    """
    options = options or ConversionOptions()
    renderer = MarkdownRenderer(options, create_footnote_id_factory(options.footnote_id_mode))

    with debug_timer(logger, "Markdown reconstruction"):
        page_list = list(pages)
        fragments: list[str] = []
        metrics: PageMetrics | None = None

        for index, page in enumerate(page_list, start=1):
            logger.debug(f"Processing page {index}/{len(page_list)}")
            if page.number is None:
                page = Page(width=page.width, height=page.height, glyphs=page.glyphs, number=index)
            result = convert_page(page, metrics, options, renderer)
            fragments.append(result.markdown)
            metrics = result.metrics

        markdown = options.page_separator.join(fragments)

        if options.apply_postprocessing:
            with _StageRunner(None)("post-processing"):
                markdown = postprocess_markdown(markdown)

    return markdown
