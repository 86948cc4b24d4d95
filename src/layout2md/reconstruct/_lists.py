#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/reconstruct/_lists.py
"""List nesting resolution.

Source indent levels are measured in margin units and can jump (0, 3, 5);
this module maps them onto contiguous nesting depths (0, 1, 2) with a
stack of open list levels. Numerals are not tracked here: ordered items
are rendered with a placeholder and renumbered over the whole document.

"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from layout2md.model import Element, ElementType

__all__ = ["ListNestingState", "nest_list_items"]


@dataclass
class ListNestingState:
    """Open list levels, outermost first.

    Attributes
    ----------
    stack : list[tuple[int, ElementType]]
        (source indent level, list type) for every open level

    """

    stack: list[tuple[int, ElementType]] = field(default_factory=list)

    def clear(self) -> None:
        self.stack.clear()

    def push(self, indent: int, item_type: ElementType) -> int:
        """Register a list item and return its resolved depth."""
        while self.stack and self.stack[-1][0] >= indent:
            self.stack.pop()
        depth = len(self.stack)
        self.stack.append((indent, item_type))
        return depth


def nest_list_items(elements: Sequence[Element], state: ListNestingState | None = None) -> list[Element]:
    """Resolve list item indent levels into nesting depths.

    Non-list elements close every open list. Continuation elements are
    transparent: they belong to the item above them.

    Parameters
    ----------
    elements : Sequence[Element]
        Classified elements in reading order
    state : ListNestingState, optional
        Starting state; a fresh one is used when omitted

    Returns
    -------
    list[Element]
        New element objects; list items carry their depth in ``indent_level``

    """
    state = state or ListNestingState()
    result: list[Element] = []

    for element in elements:
        if element.is_continuation:
            result.append(element)
        elif element.type.is_list:
            result.append(replace(element, indent_level=state.push(element.indent_level, element.type)))
        else:
            state.clear()
            result.append(element)

    return result
