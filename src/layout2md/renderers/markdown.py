#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/renderers/markdown.py
"""Markdown rendering of classified elements and detected tables.

Every element becomes a self-contained Markdown fragment. Ordered list
items are emitted with a placeholder ``1.`` numeral; the post-processor
renumbers them once the whole document is assembled.

"""

from __future__ import annotations

from typing import Sequence

from layout2md.constants import (
    CODE_INLINE_MAX_LENGTH,
    TABLE_SEPARATOR_MAX_DASHES,
    TABLE_SEPARATOR_MIN_DASHES,
)
from layout2md.model import DetectedTable, Element, ElementType, TableRow
from layout2md.options import ConversionOptions
from layout2md.utils.footnotes import FootnoteIdFactory, create_footnote_id_factory

__all__ = ["MarkdownRenderer"]

# Types whose text is rendered verbatim, without emphasis markers
_NO_INLINE_FORMATTING = frozenset({ElementType.CODE_BLOCK, ElementType.HORIZONTAL_RULE, ElementType.PAGE_NUMBER})


def _is_wrapped(text: str, marker: str) -> bool:
    return len(text) > 2 * len(marker) and text.startswith(marker) and text.endswith(marker)


class MarkdownRenderer:
    """Render elements and tables as Markdown fragments.

    Parameters
    ----------
    options : ConversionOptions, optional
        Conversion options; controls footnote id generation
    footnote_ids : callable, optional
        Identifier factory shared across the pages of one document. A new
        factory is created from ``options.footnote_id_mode`` when omitted.

    Examples
    --------
        >>> renderer = MarkdownRenderer()
        >>> renderer.render_element(Element(text="Title", type=ElementType.HEADING_1))
        '# Title\\n\\n'

    """

    def __init__(self, options: ConversionOptions | None = None, footnote_ids: FootnoteIdFactory | None = None):
        """Initialize the renderer with options and a footnote id source."""
        self.options = options or ConversionOptions()
        self._next_footnote_id = footnote_ids or create_footnote_id_factory(self.options.footnote_id_mode)

    def apply_inline_formatting(self, element: Element) -> str:
        """Wrap element text in italic, bold and underline markers as needed.

        Markers already present around the text are not added twice, and
        headings never get bold markers.
        """
        text = element.text
        if element.type in _NO_INLINE_FORMATTING:
            return text

        fmt = element.format
        if fmt.italic and not (_is_wrapped(text, "*") or _is_wrapped(text, "_")):
            text = f"*{text}*"
        if fmt.bold and not element.type.is_heading and not _is_wrapped(text, "**"):
            text = f"**{text}**"
        if fmt.underline and not (text.startswith("<u>") and text.endswith("</u>")):
            text = f"<u>{text}</u>"
        return text

    def render_element(self, element: Element) -> str:
        """Render one element as a Markdown block."""
        if not element.text.strip():
            return ""

        text = self.apply_inline_formatting(element)
        element_type = element.type

        if element_type.is_heading:
            return f"{'#' * element_type.heading_level} {text}\n\n"

        if element_type is ElementType.LIST_ITEM:
            return f"{'  ' * element.indent_level}* {text}\n"

        if element_type is ElementType.NUMBERED_LIST_ITEM:
            return f"{'  ' * element.indent_level}1. {text}\n"

        if element_type is ElementType.CODE_BLOCK:
            if "\n" in text or len(text) > CODE_INLINE_MAX_LENGTH:
                return f"```\n{text}\n```\n\n"
            return f"`{text}`\n"

        if element_type is ElementType.BLOCK_QUOTE:
            return "\n".join(f"> {line}" for line in text.split("\n")) + "\n\n"

        if element_type is ElementType.HORIZONTAL_RULE:
            return "---\n\n"

        if element_type is ElementType.FOOTNOTE:
            return f"[^{self._next_footnote_id()}] {text}\n"

        if element_type is ElementType.PAGE_NUMBER:
            return ""

        return f"{text}\n\n"

    @staticmethod
    def _cell_texts(row: TableRow, width: int) -> list[str]:
        # A spanning cell still occupies one pipe-table column per spanned column
        texts: list[str] = []
        for cell in row.cells:
            texts.append(cell.text.replace("|", "\\|"))
            texts.extend([""] * (cell.col_span - 1))
        return texts + [""] * (width - len(texts))

    def render_table(self, table: DetectedTable) -> str:
        """Render a detected table as a pipe table.

        Spanning cells are expanded and all rows padded to the widest row.
        The header row is the row flagged as header, or the first row when
        none is.
        """
        if not table.rows:
            return ""

        width = max(sum(cell.col_span for cell in row.cells) for row in table.rows)
        header_index = next((i for i, row in enumerate(table.rows) if row.is_header), 0)
        header = self._cell_texts(table.rows[header_index], width)

        separators = [
            "-" * min(max(TABLE_SEPARATOR_MIN_DASHES, len(text)), TABLE_SEPARATOR_MAX_DASHES) for text in header
        ]
        lines = ["| " + " | ".join(header) + " |", "| " + " | ".join(separators) + " |"]
        for index, row in enumerate(table.rows):
            if index != header_index:
                lines.append("| " + " | ".join(self._cell_texts(row, width)) + " |")

        return "\n".join(lines) + "\n\n"

    def render_page(self, elements: Sequence[Element], tables: Sequence[DetectedTable] = ()) -> str:
        """Render a page, interleaving tables with text in reading order.

        Parameters
        ----------
        elements : Sequence[Element]
            Merged elements, top to bottom
        tables : Sequence[DetectedTable]
            Detected tables, top to bottom

        Returns
        -------
        str
            The page's Markdown fragment

        """
        blocks: list[tuple[float, Element | DetectedTable]] = [(element.position.y, element) for element in elements]
        for table in tables:
            top = table.bounds.y if table.bounds is not None else float("-inf")
            blocks.append((top, table))
        blocks.sort(key=lambda block: -block[0])

        parts: list[str] = []
        for _, block in blocks:
            if isinstance(block, DetectedTable):
                fragment = self.render_table(block)
                if fragment and parts and not parts[-1].endswith("\n\n"):
                    # A table must not start inside a list or footnote run
                    parts.append("\n")
            else:
                fragment = self.render_element(block)
            if fragment:
                parts.append(fragment)

        return "".join(parts)
