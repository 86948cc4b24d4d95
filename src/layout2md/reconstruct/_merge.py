#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/reconstruct/_merge.py
"""Coalescing of elements split across lines."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from layout2md.constants import (
    MERGE_MAX_FONT_SIZE_DELTA,
    MERGE_MAX_HORIZONTAL_SHIFT_RATIO,
    MERGE_MAX_VERTICAL_GAP_RATIO,
)
from layout2md.model import Element, ElementType

__all__ = ["merge_elements", "should_merge"]

_NEVER_MERGED = frozenset(
    {
        ElementType.HEADING_1,
        ElementType.HEADING_2,
        ElementType.HEADING_3,
        ElementType.HEADING_4,
        ElementType.HORIZONTAL_RULE,
        ElementType.LIST_ITEM,
        ElementType.NUMBERED_LIST_ITEM,
        ElementType.TABLE,
    }
)


def should_merge(previous: Element, current: Element) -> bool:
    """Return True if ``current`` continues the same logical block as ``previous``."""
    if current.type is not previous.type or current.type in _NEVER_MERGED:
        return False

    prev_fmt, cur_fmt = previous.format, current.format
    if abs(cur_fmt.font_size - prev_fmt.font_size) >= MERGE_MAX_FONT_SIZE_DELTA:
        return False
    if cur_fmt.bold != prev_fmt.bold or cur_fmt.italic != prev_fmt.italic:
        return False

    size = cur_fmt.font_size
    return (
        abs(current.position.y - previous.position.y) < size * MERGE_MAX_VERTICAL_GAP_RATIO
        and abs(current.position.x - previous.position.x) < size * MERGE_MAX_HORIZONTAL_SHIFT_RATIO
    )


def _join(group: Element, current: Element) -> Element:
    return replace(
        group,
        text=f"{group.text} {current.text}",
        confidence=min(group.confidence, current.confidence),
    )


def merge_elements(elements: Sequence[Element]) -> list[Element]:
    """Merge continuation lines and adjacent same-style elements.

    Continuations are always folded into the element before them. Other
    elements are merged into the running group when ``should_merge`` holds
    against the element immediately before them.

    Parameters
    ----------
    elements : Sequence[Element]
        Nested elements in reading order

    Returns
    -------
    list[Element]
        Merged elements; a group keeps the type, format and position of
        its first member

    """
    merged: list[Element] = []
    group: Element | None = None
    previous: Element | None = None

    for element in elements:
        if group is None:
            # A leading continuation has nothing to attach to
            group = replace(element, is_continuation=False)
            if group.type is ElementType.UNKNOWN:
                group.type = ElementType.PARAGRAPH
        elif element.is_continuation:
            group = _join(group, element)
            if previous is not None:
                # Later merges measure distance from the last physical line
                previous = replace(previous, position=element.position)
            continue
        elif previous is not None and should_merge(previous, element):
            group = _join(group, element)
        else:
            merged.append(group)
            group = element
        previous = element

    if group is not None:
        merged.append(group)
    return merged
