#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/reconstruct/__init__.py
"""Reconstruction stages, from raw glyphs to merged elements and tables.

Each stage lives in a private submodule and is a plain function of its
inputs; ``layout2md.converter`` composes them in order.
"""

from layout2md.reconstruct._classify import classify_lines
from layout2md.reconstruct._grouping import group_glyphs_into_words, group_words_into_lines
from layout2md.reconstruct._lists import ListNestingState, nest_list_items
from layout2md.reconstruct._merge import merge_elements
from layout2md.reconstruct._metrics import analyze_page_metrics
from layout2md.reconstruct._tables import detect_tables

__all__ = [
    "ListNestingState",
    "analyze_page_metrics",
    "classify_lines",
    "detect_tables",
    "group_glyphs_into_words",
    "group_words_into_lines",
    "merge_elements",
    "nest_list_items",
]
