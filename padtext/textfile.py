"""Reading, writing and measuring the text files an editor works on."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional, Union

from padtext.encoding import (
    LineEnding,
    convert_line_ending,
    convert_line_ending_to_lf,
    detect_charset,
    detect_line_ending,
    get_default_charset,
)

PathLike = Union[str, "os.PathLike[str]"]

UNTITLED = "Untitled"
FALLBACK_CHARSET = "ISO-8859-1"

_DELIMITERS = " ,.;:\t\n-_?¿()!¡'/&%$#\"\\|{}[]+*"
_WORD = re.compile("[^" + "".join(re.escape(c) for c in _DELIMITERS) + "]+")
_ESCAPE = re.compile(r"%(..)")
_HEX = frozenset("0123456789abcdefABCDEF")

_STATS_FORMAT = (
    "<u>Totals count</u>\nChars: {0:7d} Words: {1:6d} Lines: {2:5d}\n\n"
    "<u>Selection</u>\nChars: {3:7d} Words: {4:6d} Lines: {5:5d}\n"
)


class TextFileError(Exception):
    """A file could not be read, converted or written."""


@dataclass
class FileInfo:
    """What is known about the file behind a document.

    ``charset_flag`` is true when the charset was chosen by the user rather
    than picked from the listed candidates.
    """

    filename: Optional[str] = None
    charset: Optional[str] = None
    charset_flag: bool = False
    lineend: LineEnding = LineEnding.LF


@dataclass(frozen=True)
class TextStats:
    """Character, word and line counts of a piece of text."""

    chars: int
    words: int
    lines: int


def check_file_writable(filename: PathLike) -> bool:
    """Return whether the file can be opened for appending (creating it if absent)."""
    try:
        with open(filename, "a"):
            pass
    except OSError:
        return False
    return True


def get_file_basename(filename: Optional[PathLike], bracket: bool = False) -> str:
    """Return the name to show for a file.

    With ``bracket`` a file that does not exist is shown in parentheses and
    one that cannot be written in angle brackets.
    """
    if filename is not None:
        path = os.fspath(filename)
        name = os.path.basename(path)
        exists = os.path.exists(path)
    else:
        path = None
        name = UNTITLED
        exists = False

    if bracket:
        if not exists:
            return f"({name})"
        if not check_file_writable(path):
            return f"<{name}>"
    return name


def _unescape_path(path: str) -> Optional[str]:
    raw = path.encode("utf-8")
    out = bytearray()
    i = 0
    while i < len(raw):
        byte = raw[i]
        if byte == ord("%"):
            digits = raw[i + 1 : i + 3].decode("ascii", "replace")
            if len(digits) != 2 or not set(digits) <= _HEX:
                return None
            value = int(digits, 16)
            if value in (0, ord("/")):
                return None
            out.append(value)
            i += 3
        else:
            out.append(byte)
            i += 1
    return os.fsdecode(bytes(out))


def _filename_from_uri(uri: str) -> Optional[str]:
    if not uri.startswith("file:/"):
        return None
    rest = uri[len("file:") :]
    if rest.startswith("///"):
        rest = rest[2:]
    elif rest.startswith("//"):
        rest = rest[2:]
        slash = rest.find("/")
        if slash < 0:
            return None
        rest = rest[slash:]
    if not rest.startswith("/"):
        return None
    return _unescape_path(rest)


def parse_file_uri(uri: str) -> Optional[str]:
    """Turn a dropped URI or path into a local file name.

    Returns None for URIs of schemes other than ``file:`` and for malformed
    file URIs.  Relative paths are resolved against the working directory.
    """
    if ":" in uri:
        if not uri.startswith("file:"):
            return None
        return _filename_from_uri(uri)
    if os.path.isabs(uri):
        return uri
    return os.path.join(os.getcwd(), uri)


def _decode(contents: bytes, charset: str) -> tuple[str, str]:
    try:
        return contents.decode(charset), charset
    except (UnicodeDecodeError, LookupError):
        return contents.decode(FALLBACK_CHARSET), FALLBACK_CHARSET


def read_text_file(fi: FileInfo) -> str:
    """Load the file named by ``fi`` and return its text with LF line ends.

    A missing file reads as empty text.  ``fi.lineend`` is set to the file's
    line terminator, and ``fi.charset`` to the charset actually used; when
    that differs from the one requested, ``fi.charset_flag`` is cleared.
    """
    if fi.filename is None:
        raise TextFileError("No file name")
    try:
        with open(fi.filename, "rb") as fh:
            contents = fh.read()
    except OSError as exc:
        if os.path.exists(fi.filename):
            raise TextFileError(exc.strerror or str(exc)) from exc
        contents = b""

    length = len(contents)
    contents = contents.split(b"\0", 1)[0]

    fi.lineend = detect_line_ending(contents)
    if fi.lineend != LineEnding.LF:
        contents = convert_line_ending_to_lf(contents)

    if fi.charset:
        charset = fi.charset
    else:
        charset = detect_charset(contents) or get_default_charset()

    if length:
        text, charset = _decode(contents, charset)
    else:
        text = ""

    if charset != fi.charset:
        fi.charset = charset
        fi.charset_flag = False
    return text


def write_text_file(text: str, fi: FileInfo) -> None:
    """Save ``text`` to the file named by ``fi`` in its charset and line ending.

    When ``fi.charset`` is unset the locale charset is chosen and stored.
    """
    if fi.filename is None:
        raise TextFileError("No file name")
    text = convert_line_ending(text, fi.lineend)
    if not fi.charset:
        fi.charset = get_default_charset()
    try:
        data = text.encode(fi.charset)
    except UnicodeEncodeError as exc:
        raise TextFileError(f"Can't convert codeset to '{fi.charset}'") from exc
    except LookupError as exc:
        raise TextFileError(str(exc)) from exc

    try:
        fh = open(fi.filename, "wb")
    except OSError as exc:
        raise TextFileError("Can't open file to write") from exc
    with fh:
        try:
            fh.write(data)
        except OSError as exc:
            raise TextFileError("Can't write file") from exc


def text_stats(text: str) -> TextStats:
    """Count characters, words and lines.

    Words are runs of characters between delimiters (blanks and common
    punctuation); the line count is one more than the number of newlines.
    """
    return TextStats(
        chars=len(text),
        words=len(_WORD.findall(text)),
        lines=1 + text.count("\n"),
    )


def file_stats(text: str, selection: Optional[str] = None) -> str:
    """Return a markup summary of counts for the whole text and the selection."""
    total = text_stats(text)
    selected = text_stats(selection or "")
    return _STATS_FORMAT.format(
        total.chars,
        total.words,
        total.lines,
        selected.chars,
        selected.words,
        selected.lines,
    )