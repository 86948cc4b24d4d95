#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/sources/__init__.py
"""Page sources that turn documents into glyph-level ``Page`` values."""
