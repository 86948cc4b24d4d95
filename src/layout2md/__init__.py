"""layout2md - Markdown reconstruction from positioned glyphs.

layout2md rebuilds a structured Markdown document from the raw output of a
page-layout extractor: a list of characters per page, each with a bounding
box, font name, font size and colour. No semantic tags are required; the
structure is inferred from font metrics and spatial arrangement.

Pipeline
--------
Each page passes through metrics estimation, word and line grouping, table
detection, line classification, list nesting, element merging and Markdown
rendering. Font metrics are carried from page to page so a page without its
own headings still classifies against the document's heading sizes. The
assembled document then gets a single cleanup pass that renumbers ordered
lists, joins soft-wrapped lines and collapses blank lines.

Requirements
------------
- Python 3.10+
- PyMuPDF is optional and only needed for ``layout2md.sources.pymupdf``

Examples
--------
Converting pages produced by any glyph source:

    >>> from layout2md import Page, to_markdown
    >>> markdown = to_markdown([Page(width=612, height=792, glyphs=glyphs)])

Converting a PDF directly:

    >>> from layout2md.sources.pymupdf import pdf_to_markdown
    >>> markdown = pdf_to_markdown("report.pdf")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from layout2md.converter import convert_page, to_markdown
from layout2md.exceptions import ConversionError, DependencyError, Layout2MdError, ValidationError
from layout2md.logging_utils import configure_logging
from layout2md.model import (
    BBox,
    DetectedTable,
    Element,
    ElementType,
    Glyph,
    Line,
    Page,
    PageMetrics,
    PageResult,
    Position,
    RgbColor,
    TableCell,
    TableRow,
    TextFormat,
    Word,
)
from layout2md.options import ConversionOptions
from layout2md.postprocess import postprocess_markdown

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Conversion
    "to_markdown",
    "convert_page",
    "postprocess_markdown",
    # Options
    "ConversionOptions",
    # Model
    "BBox",
    "DetectedTable",
    "Element",
    "ElementType",
    "Glyph",
    "Line",
    "Page",
    "PageMetrics",
    "PageResult",
    "Position",
    "RgbColor",
    "TableCell",
    "TableRow",
    "TextFormat",
    "Word",
    # Exceptions
    "Layout2MdError",
    "ConversionError",
    "DependencyError",
    "ValidationError",
    # Logging
    "configure_logging",
]
