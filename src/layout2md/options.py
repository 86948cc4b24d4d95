#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/options.py
"""Configuration options for layout reconstruction.

Options are frozen dataclasses, so one instance can be shared between
concurrent conversions; use ``create_updated`` to derive a variant.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, get_args

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from layout2md.constants import (
    DEFAULT_APPLY_POSTPROCESSING,
    DEFAULT_DETECT_TABLES,
    DEFAULT_FOOTNOTE_ID_MODE,
    DEFAULT_PAGE_SEPARATOR,
    FootnoteIdMode,
)
from layout2md.exceptions import ValidationError

__all__ = ["CloneFrozenMixin", "ConversionOptions"]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Configuration options for glyph-to-Markdown conversion.

    Parameters
    ----------
    page_separator : str, default "\\n\\n---\\n\\n"
        Text inserted between consecutive pages (never after the last page).
    detect_tables : bool, default True
        Run table detection. When disabled every line goes through the
        text classification pipeline.
    footnote_id_mode : {"sequential", "uuid"}, default "sequential"
        How footnote identifiers are generated. ``sequential`` keeps the
        output reproducible; ``uuid`` generates a fresh short id per footnote.
    apply_postprocessing : bool, default True
        Run the whole-document cleanup pass (list renumbering, soft-wrap
        merging, blank-line collapsing).

    """

    page_separator: str = field(
        default=DEFAULT_PAGE_SEPARATOR,
        metadata={"help": "Text inserted between consecutive pages"},
    )
    detect_tables: bool = field(
        default=DEFAULT_DETECT_TABLES,
        metadata={"help": "Detect tables from text alignment"},
    )
    footnote_id_mode: FootnoteIdMode = field(
        default=DEFAULT_FOOTNOTE_ID_MODE,
        metadata={"help": "Footnote id generation: 'sequential' or 'uuid'"},
    )
    apply_postprocessing: bool = field(
        default=DEFAULT_APPLY_POSTPROCESSING,
        metadata={"help": "Renumber lists, merge soft wraps and collapse blank lines"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If the footnote id mode is unknown or the separator is not a string.

        """
        if self.footnote_id_mode not in get_args(FootnoteIdMode):
            raise ValidationError(
                f"footnote_id_mode must be one of {get_args(FootnoteIdMode)}, got {self.footnote_id_mode!r}",
                parameter_name="footnote_id_mode",
                parameter_value=self.footnote_id_mode,
            )
        if not isinstance(self.page_separator, str):
            raise ValidationError(
                "page_separator must be a string",
                parameter_name="page_separator",
                parameter_value=self.page_separator,
            )
