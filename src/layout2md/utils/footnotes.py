#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/utils/footnotes.py
"""Footnote identifier generation."""

from __future__ import annotations

import itertools
import uuid
from typing import Callable

from layout2md.constants import FOOTNOTE_UUID_LENGTH, FootnoteIdMode

__all__ = ["FootnoteIdFactory", "create_footnote_id_factory"]

FootnoteIdFactory = Callable[[], str]


def create_footnote_id_factory(mode: FootnoteIdMode = "sequential") -> FootnoteIdFactory:
    """Create a closure that hands out footnote identifiers for one document.

    Parameters
    ----------
    mode : {"sequential", "uuid"}
        ``sequential`` yields ``fn1``, ``fn2``, ... so output is reproducible;
        ``uuid`` yields a fresh short random hex id per call.

    Returns
    -------
    callable
        Zero-argument function returning the next identifier

    Examples
    --------
    >>> next_id = create_footnote_id_factory()
    >>> next_id(), next_id()
    ('fn1', 'fn2')

    """
    if mode == "uuid":

        def next_uuid_id() -> str:
            return uuid.uuid4().hex[:FOOTNOTE_UUID_LENGTH]

        return next_uuid_id

    counter = itertools.count(1)

    def next_sequential_id() -> str:
        return f"fn{next(counter)}"

    return next_sequential_id
