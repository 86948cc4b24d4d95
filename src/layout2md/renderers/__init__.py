#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Output renderers for reconstructed page content."""

from layout2md.renderers.markdown import MarkdownRenderer

__all__ = ["MarkdownRenderer"]
