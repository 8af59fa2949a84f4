"""Auto-indentation, tab width and block indent/unindent on plain text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


def _line_start(text: str, line: int) -> int:
    if line < 0:
        raise IndexError(f"line {line} out of range")
    start = 0
    for _ in range(line):
        newline = text.find("\n", start)
        if newline < 0:
            raise IndexError(f"line {line} out of range")
        start = newline + 1
    return start


def compute_indentation(
    text: str, line: int, column: Optional[int] = None
) -> Optional[str]:
    """Return the leading whitespace of ``line``, or None when it has none.

    When ``column`` falls inside that whitespace, only the part before it
    is returned.
    """
    start = _line_start(text, line)
    end = start
    while end < len(text) and text[end] != "\n" and text[end].isspace():
        end += 1
    if end == start:
        return None
    if column is not None and start + column < end:
        return text[start : start + column]
    return text[start:end]


def indent_offset_length(indentation: str, tab_width: int) -> int:
    """Return how many characters one unindent step removes.

    A run of spaces counts up to ``tab_width``; any other whitespace
    character counts as one.
    """
    if not indentation:
        raise ValueError("indentation is empty")
    if not indentation.startswith(" "):
        return 1
    spaces = len(indentation) - len(indentation.lstrip(" "))
    return max(1, min(spaces, tab_width))


def _check_range(lines: list[str], start_line: int, end_line: int) -> None:
    if start_line > end_line:
        raise ValueError("start_line must not be after end_line")
    if start_line < 0 or end_line >= len(lines):
        raise IndexError("line range out of range")


@dataclass
class Indenter:
    """Indentation settings of an editor view and the edits they drive."""

    auto_indent: bool = False
    default_tab_width: int = 8
    current_tab_width: int = field(init=False)

    def __post_init__(self) -> None:
        self.current_tab_width = self.default_tab_width

    def toggle_tab_width(self) -> int:
        """Switch between the default tab width and the alternate one (4 or 8)."""
        if self.current_tab_width == self.default_tab_width:
            self.current_tab_width = 4 if self.default_tab_width == 8 else 8
        else:
            self.current_tab_width = self.default_tab_width
        return self.current_tab_width

    def set_default_tab_width(self, width: int) -> None:
        """Set the default tab width and make it current."""
        self.default_tab_width = width
        self.current_tab_width = width

    def newline_with_indent(self, text: str, cursor: int) -> tuple[str, int]:
        """Insert a newline at ``cursor`` that repeats the line's indentation.

        Returns the new text and the new cursor offset.
        """
        if not 0 <= cursor <= len(text):
            raise IndexError(f"cursor {cursor} out of range")
        line = text.count("\n", 0, cursor)
        column = cursor - (text.rfind("\n", 0, cursor) + 1)
        inserted = "\n" + (compute_indentation(text, line, column) or "")
        return text[:cursor] + inserted + text[cursor:], cursor + len(inserted)

    def indent_lines(self, text: str, start_line: int, end_line: int) -> str:
        """Prefix a tab to each line from ``start_line`` up to, not including, ``end_line``."""
        lines = text.split("\n")
        _check_range(lines, start_line, end_line)
        for i in range(start_line, end_line):
            lines[i] = "\t" + lines[i]
        return "\n".join(lines)

    def unindent_lines(self, text: str, start_line: int, end_line: int) -> str:
        """Remove one level of indentation from the lines in range.

        Lines from ``start_line`` up to, not including, ``end_line`` are
        affected, and always at least ``start_line`` itself.
        """
        lines = text.split("\n")
        _check_range(lines, start_line, end_line)
        for i in range(start_line, max(end_line, start_line + 1)):
            indentation = compute_indentation(lines[i], 0)
            if indentation:
                count = indent_offset_length(indentation, self.current_tab_width)
                lines[i] = lines[i][count:]
        return "\n".join(lines)