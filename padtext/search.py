"""Forward and backward text search with optional caseless matching.

Positions are character offsets into a plain string.  A search needle may
span several lines.  The first line of the needle may match anywhere in a
line of the text, and each later line must match from the start of the
following text line.  Caseless matching compares case-folded, NFKD-normalised
text and maps the match back onto the original characters.
"""

from __future__ import annotations

import unicodedata
from enum import IntFlag
from typing import Callable, Optional

Fold = Optional[Callable[[str], str]]
Span = tuple[int, int]


class SearchFlags(IntFlag):
    """Options that change how a search matches.

    VISIBLE_ONLY and TEXT_ONLY have no effect on plain strings, which hold
    neither hidden text nor embedded objects.
    """

    NONE = 0
    VISIBLE_ONLY = 1
    TEXT_ONLY = 2
    CASE_INSENSITIVE = 4


def _caseless(text: str) -> str:
    return unicodedata.normalize("NFKD", text.casefold())


def _fold_with_index(text: str, fold: Fold) -> tuple[str, list[int]]:
    """Fold each character and record which original character each came from."""
    if fold is None:
        return text, list(range(len(text)))
    pieces: list[str] = []
    index: list[int] = []
    for i, ch in enumerate(text):
        folded = fold(ch)
        pieces.append(folded)
        index.extend([i] * len(folded))
    return "".join(pieces), index


def _split_lines(needle: str, fold: Fold) -> list[str]:
    """Split the needle into lines that keep their newline, then fold each."""
    parts = needle.split("\n")
    segments = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        segments.append(parts[-1])
    if fold is None:
        return segments
    return [fold(segment) for segment in segments]


def _next_line_start(text: str, pos: int) -> int:
    newline = text.find("\n", pos)
    return len(text) if newline < 0 else newline + 1


def _line_start(text: str, pos: int) -> int:
    return text.rfind("\n", 0, pos) + 1


def _span_in(offset: int, found: int, length: int, index: list[int]) -> Span:
    start = offset + index[found]
    end = offset + index[found + length - 1] + 1
    return start, end


def _match_rest(text: str, pos: int, segments: list[str], fold: Fold) -> Optional[int]:
    """Match each segment from the start of successive lines; return the end."""
    for segment in segments:
        if pos >= len(text):
            return None
        line = text[pos:_next_line_start(text, pos)]
        folded, index = _fold_with_index(line, fold)
        if not folded.startswith(segment):
            return None
        _, pos = _span_in(pos, 0, len(segment), index)
    return pos


def _forward_lines_match(
    text: str, pos: int, segments: list[str], fold: Fold
) -> Optional[Span]:
    if pos >= len(text):
        return None
    line = text[pos:_next_line_start(text, pos)]
    folded, index = _fold_with_index(line, fold)
    first = segments[0]
    found = folded.find(first)
    if found < 0:
        return None
    start, end = _span_in(pos, found, len(first), index)
    end = _match_rest(text, end, segments[1:], fold)
    if end is None:
        return None
    return start, end


def _backward_lines_match(
    text: str, pos: int, segments: list[str], fold: Fold
) -> Optional[Span]:
    line_begin = _line_start(text, pos)
    if line_begin == pos:
        if pos == 0:
            return None
        line_begin = _line_start(text, pos - 1)
    line = text[line_begin:pos]
    folded, index = _fold_with_index(line, fold)
    first = segments[0]
    found = folded.rfind(first)
    if found < 0:
        return None
    start, end = _span_in(line_begin, found, len(first), index)
    end = _match_rest(text, end, segments[1:], fold)
    if end is None:
        return None
    return start, end


def _check_position(text: str, name: str, value: Optional[int]) -> None:
    if value is not None and not 0 <= value <= len(text):
        raise IndexError(f"{name} {value} out of range")


def _fold_for(flags: SearchFlags) -> Fold:
    return _caseless if flags & SearchFlags.CASE_INSENSITIVE else None


def forward_search(
    text: str,
    start: int,
    needle: str,
    flags: SearchFlags = SearchFlags.NONE,
    limit: Optional[int] = None,
) -> Optional[Span]:
    """Find the first match of ``needle`` at or after ``start``.

    Returns the (start, end) offsets of the match, or None.  The match must
    end before ``limit`` when one is given.  An empty needle matches one
    character after ``start``.
    """
    _check_position(text, "start", start)
    _check_position(text, "limit", limit)
    if limit is not None and start >= limit:
        return None

    if not needle:
        if start >= len(text):
            return None
        pos = start + 1
        if limit is not None and pos == limit:
            return None
        return pos, pos

    fold = _fold_for(flags)
    segments = _split_lines(needle, fold)
    search = start
    while True:
        if limit is not None and search >= limit:
            return None
        span = _forward_lines_match(text, search, segments, fold)
        if span is not None:
            if limit is None or span[1] < limit:
                return span
            return None
        search = _next_line_start(text, search)
        if search >= len(text):
            return None


def backward_search(
    text: str,
    start: int,
    needle: str,
    flags: SearchFlags = SearchFlags.NONE,
    limit: Optional[int] = None,
) -> Optional[Span]:
    """Find the last match of ``needle`` whose first line ends by ``start``.

    Returns the (start, end) offsets of the match, or None.  The match must
    end after ``limit`` when one is given.  An empty needle matches one
    character before ``start``.
    """
    _check_position(text, "start", start)
    _check_position(text, "limit", limit)
    if limit is not None and start <= limit:
        return None

    if not needle:
        if start == 0:
            return None
        pos = start - 1
        if limit is not None and pos == limit:
            return None
        return pos, pos

    fold = _fold_for(flags)
    segments = _split_lines(needle, fold)
    search = start
    while True:
        if limit is not None and search <= limit:
            return None
        span = _backward_lines_match(text, search, segments, fold)
        if span is not None:
            if limit is None or span[1] > limit:
                return span
            return None
        line_begin = _line_start(text, search)
        if line_begin == search:
            if search == 0:
                return None
            search = _line_start(text, search - 1)
        else:
            search = line_begin