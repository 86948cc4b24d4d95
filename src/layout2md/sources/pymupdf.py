#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/sources/pymupdf.py
"""PDF page source backed by PyMuPDF.

Characters are read from ``Page.get_text("rawdict")`` and converted to the
bottom-left origin coordinate space the reconstruction pipeline expects.
PyMuPDF is an optional dependency (``pip install layout2md[pdf]``).

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Iterator, Sequence, Union

from layout2md.constants import DEPS_PDF
from layout2md.converter import to_markdown
from layout2md.exceptions import ConversionError, ValidationError
from layout2md.model import BBox, Glyph, Page, RgbColor
from layout2md.options import ConversionOptions
from layout2md.utils.decorators import requires_dependencies

if TYPE_CHECKING:
    import fitz

logger = logging.getLogger(__name__)

__all__ = ["iter_pages", "page_from_fitz", "pdf_to_markdown", "unpack_color"]

PdfSource = Union[str, Path, bytes, IO[bytes], "fitz.Document"]


def unpack_color(value: int | None) -> RgbColor:
    """Split a packed sRGB integer (0xRRGGBB) into an RgbColor."""
    if not value:
        return RgbColor(0, 0, 0)
    return RgbColor((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def page_from_fitz(fitz_page: "fitz.Page", number: int | None = None) -> Page:
    """Extract every character of a PyMuPDF page as a Glyph.

    PyMuPDF reports boxes with a top-left origin; the y axis is flipped
    against the page height.
    """
    height = float(fitz_page.rect.height)
    width = float(fitz_page.rect.width)
    raw: dict[str, Any] = fitz_page.get_text("rawdict")

    glyphs: list[Glyph] = []
    for block in raw.get("blocks", []):
        if block.get("type", 0) != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                font_name = span.get("font", "") or ""
                font_size = float(span.get("size", 0.0) or 0.0)
                color = unpack_color(span.get("color"))
                for char in span.get("chars", []):
                    x0, y0, x1, y1 = char["bbox"]
                    glyphs.append(
                        Glyph(
                            char=char.get("c", ""),
                            bbox=BBox(left=x0, bottom=height - y1, right=x1, top=height - y0),
                            font_name=font_name,
                            font_size=font_size,
                            color=color,
                        )
                    )

    return Page(width=width, height=height, glyphs=tuple(glyphs), number=number)


def _open_document(source: PdfSource) -> tuple["fitz.Document", bool]:
    import fitz

    if isinstance(source, fitz.Document):
        return source, False
    try:
        if isinstance(source, (str, Path)):
            return fitz.open(filename=str(source)), True
        if isinstance(source, (bytes, bytearray)):
            return fitz.open(stream=bytes(source), filetype="pdf"), True
        if hasattr(source, "read"):
            return fitz.open(stream=source.read(), filetype="pdf"), True
    except Exception as e:
        raise ConversionError(
            f"Failed to open PDF document: {e!r}", stage="open", original_error=e
        ) from e
    raise ValidationError(
        f"Unsupported PDF source type: {type(source).__name__}",
        parameter_name="source",
        parameter_value=source,
    )


@requires_dependencies("pdf", DEPS_PDF)
def iter_pages(source: PdfSource, pages: Sequence[int] | None = None) -> Iterator[Page]:
    """Yield the pages of a PDF as glyph-level Page values.

    Parameters
    ----------
    source : str, Path, bytes, file-like or fitz.Document
        The PDF to read. Documents opened here are closed when iteration ends.
    pages : Sequence[int], optional
        Zero-based page indices to read, in the order given. All pages by default.

    Yields
    ------
    Page
        One page per selected index, numbered from 1

    Raises
    ------
    ValidationError
        If a page index is out of range or the source type is unsupported
    ConversionError
        If the document cannot be opened

    """
    document, owned = _open_document(source)
    try:
        indices = list(range(document.page_count)) if pages is None else list(pages)
        for index in indices:
            if not 0 <= index < document.page_count:
                raise ValidationError(
                    f"Page index {index} out of range (document has {document.page_count} pages)",
                    parameter_name="pages",
                    parameter_value=index,
                )
            logger.debug(f"Extracting glyphs from page {index + 1}/{document.page_count}")
            yield page_from_fitz(document[index], number=index + 1)
    finally:
        if owned:
            document.close()


def pdf_to_markdown(
    source: PdfSource, options: ConversionOptions | None = None, pages: Sequence[int] | None = None
) -> str:
    """Convert a PDF to Markdown.

    Examples
    --------
        >>> markdown = pdf_to_markdown("report.pdf")
        >>> first_two = pdf_to_markdown("report.pdf", pages=[0, 1])

    """
    return to_markdown(iter_pages(source, pages), options)
