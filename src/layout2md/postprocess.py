#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/postprocess.py
"""Whole-document Markdown cleanup.

Runs once over the concatenated page fragments:

- ordered list items get their real numerals in place of the ``1.``
  placeholder, counted per nesting depth;
- lines that were soft-wrapped by the page layout are joined back;
- runs of blank lines collapse to a single blank line.

Fenced code blocks are passed through untouched. The pass is idempotent:
running it on its own output changes nothing.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

__all__ = ["ListCounterState", "postprocess_markdown", "should_merge_lines"]

_LIST_LINE = re.compile(r"^\s*(?:[*+\-]|\d+\.)\s")
_NUMBERED_LINE = re.compile(r"^(\s*)\d+\.\s")
_FENCE = "```"

_TERMINAL_PUNCTUATION = (".", "!", "?", ":", ";")
_BLOCK_PREFIXES = ("#", "*", "-", ">", _FENCE, "|", "===", "___", "~~~")

# Lines that open a block of their own and must never be appended to another
_BLOCK_START = re.compile(r"^(?:#|>|\||```|\[\^|[*+\-]\s|\d+\.\s|[-_*=~]{3,})")


@dataclass
class ListCounterState:
    """Ordered-list counters keyed by nesting depth (leading spaces // 2)."""

    counters: dict[int, int] = field(default_factory=dict)
    depth: int = 0

    def clear(self) -> None:
        self.counters.clear()
        self.depth = 0

    def renumber(self, line: str) -> str:
        """Track a list line and return it with its numeral corrected."""
        indent = len(line) - len(line.lstrip())
        depth = indent // 2
        if depth > self.depth:
            self.counters[depth] = 0
        self.depth = depth

        match = _NUMBERED_LINE.match(line)
        if match is None:
            return line

        number = self.counters.get(depth, 0) + 1
        self.counters[depth] = number
        return f"{match.group(1)}{number}. {line[match.end():]}"


def should_merge_lines(previous: str, current: str) -> bool:
    """Return True if ``current`` is a soft-wrapped remainder of ``previous``."""
    if not previous.strip() or not current.strip():
        return False

    prev_trim = previous.rstrip()
    curr_trim = current.lstrip()

    if prev_trim.endswith(_TERMINAL_PUNCTUATION):
        return False
    if prev_trim.lstrip().startswith(_BLOCK_PREFIXES):
        return False
    if _BLOCK_START.match(curr_trim):
        return False

    if curr_trim[0].isupper() and not curr_trim.startswith(("I ", "I'")):
        return False
    return True


def _join(previous: str, current: str) -> str:
    if previous.endswith((" ", "\t")) or current.startswith((" ", "\t")):
        return previous + current
    return f"{previous} {current}"


def postprocess_markdown(markdown: str) -> str:
    """Clean up the assembled Markdown of a whole document.

    Parameters
    ----------
    markdown : str
        Concatenated page fragments, separators included

    Returns
    -------
    str
        Markdown with renumbered ordered lists, merged soft wraps and no
        consecutive blank lines

    """
    if not markdown:
        return markdown

    lines = markdown.split("\n")
    terminated = markdown.endswith("\n")
    if terminated:
        lines.pop()

    processed: list[str] = []
    lists = ListCounterState()
    in_fence = False

    for raw_line in lines:
        line = raw_line.rstrip()

        if not line.strip():
            if in_fence or not processed or processed[-1] != "":
                processed.append("")
            continue

        if line.lstrip().startswith(_FENCE):
            in_fence = not in_fence
            lists.clear()
            processed.append(line)
            continue

        if in_fence:
            processed.append(line)
            continue

        if processed and should_merge_lines(processed[-1], line):
            processed[-1] = _join(processed[-1], line)
            continue

        if _LIST_LINE.match(line):
            line = lists.renumber(line)
        else:
            lists.clear()
        processed.append(line)

    result = "\n".join(processed)
    return result + "\n" if terminated else result
