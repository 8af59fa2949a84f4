import os

import pytest

from padtext.encoding import LineEnding
from padtext.textfile import (
    FileInfo,
    TextFileError,
    check_file_writable,
    file_stats,
    get_file_basename,
    parse_file_uri,
    read_text_file,
    text_stats,
    write_text_file,
)


def test_check_file_writable_creates_and_accepts(tmp_path):
    target = tmp_path / "new.txt"
    assert check_file_writable(target) is True
    assert target.exists()


def test_check_file_writable_rejects_directory(tmp_path):
    assert check_file_writable(tmp_path) is False


def test_basename_untitled():
    assert get_file_basename(None) == "Untitled"
    assert get_file_basename(None, True) == "(Untitled)"


def test_basename_existing_file(tmp_path):
    target = tmp_path / "notes.txt"
    target.write_text("x")
    assert get_file_basename(str(target), True) == "notes.txt"
    assert get_file_basename(str(target), False) == "notes.txt"


def test_basename_missing_file(tmp_path):
    target = tmp_path / "missing.txt"
    assert get_file_basename(str(target), True) == "(missing.txt)"
    assert get_file_basename(str(target), False) == "missing.txt"


def test_basename_unwritable(tmp_path):
    # A directory exists but cannot be opened for appending.
    sub = tmp_path / "folder"
    sub.mkdir()
    assert get_file_basename(str(sub), True) == "<folder>"


def test_parse_file_uri_file_scheme():
    assert parse_file_uri("file:///tmp/a%20b.txt") == "/tmp/a b.txt"
    assert parse_file_uri("file://localhost/tmp/x") == "/tmp/x"


def test_parse_file_uri_other_scheme():
    assert parse_file_uri("http://example.com/x") is None


def test_parse_file_uri_bad_escapes():
    assert parse_file_uri("file:///a%2Fb") is None
    assert parse_file_uri("file:///a%zz") is None
    assert parse_file_uri("file:relative") is None


def test_parse_file_uri_paths():
    assert parse_file_uri("/abs/path.txt") == "/abs/path.txt"
    assert parse_file_uri("notes.txt") == os.path.join(os.getcwd(), "notes.txt")


def test_read_missing_file_is_empty(tmp_path):
    fi = FileInfo(str(tmp_path / "none.txt"))
    assert read_text_file(fi) == ""
    assert fi.lineend == LineEnding.LF
    assert fi.charset


def test_read_directory_raises(tmp_path):
    with pytest.raises(TextFileError):
        read_text_file(FileInfo(str(tmp_path)))


def test_read_detects_utf8_and_crlf(tmp_path):
    target = tmp_path / "doc.txt"
    target.write_bytes("café\r\nx".encode("utf-8"))
    fi = FileInfo(str(target))
    assert read_text_file(fi) == "café\nx"
    assert fi.lineend == LineEnding.CRLF
    assert fi.charset == "UTF-8"


def test_read_unknown_charset_falls_back(tmp_path):
    target = tmp_path / "doc.txt"
    target.write_bytes("é".encode("latin-1"))
    fi = FileInfo(str(target), charset="NO-SUCH-CHARSET", charset_flag=True)
    assert read_text_file(fi) == "é"
    assert fi.charset == "ISO-8859-1"
    assert fi.charset_flag is False


def test_round_trip_latin1_crlf(tmp_path):
    target = tmp_path / "doc.txt"
    text = "héllo\nworld"
    fi = FileInfo(str(target), charset="ISO-8859-1", lineend=LineEnding.CRLF)
    write_text_file(text, fi)
    assert target.read_bytes() == "héllo\r\nworld".encode("latin-1")
    back = FileInfo(str(target), charset="ISO-8859-1")
    assert read_text_file(back) == text
    assert back.lineend == LineEnding.CRLF


def test_round_trip_cr(tmp_path):
    target = tmp_path / "doc.txt"
    write_text_file("a\nb", FileInfo(str(target), charset="UTF-8", lineend=LineEnding.CR))
    assert target.read_bytes() == b"a\rb"
    back = FileInfo(str(target), charset="UTF-8")
    assert read_text_file(back) == "a\nb"
    assert back.lineend == LineEnding.CR


def test_write_sets_default_charset(tmp_path):
    fi = FileInfo(str(tmp_path / "out.txt"))
    write_text_file("abc", fi)
    assert fi.charset
    assert (tmp_path / "out.txt").read_bytes() == b"abc"


def test_write_unconvertible_raises(tmp_path):
    fi = FileInfo(str(tmp_path / "out.txt"), charset="ISO-8859-1")
    with pytest.raises(TextFileError, match="ISO-8859-1"):
        write_text_file("€", fi)


def test_write_to_directory_raises(tmp_path):
    fi = FileInfo(str(tmp_path), charset="UTF-8")
    with pytest.raises(TextFileError, match="Can't open file to write"):
        write_text_file("x", fi)


def test_text_stats_counts():
    stats = text_stats("Hello, world!\nBye")
    assert stats.words == 3
    assert stats.lines == 2
    assert stats.chars == len("Hello, world!\nBye")


def test_text_stats_empty():
    stats = text_stats("")
    assert stats.words == 0
    assert stats.lines == 1


def test_text_stats_inverted_marks_are_delimiters():
    assert text_stats("a¿b").words == text_stats("a b").words
    assert text_stats("a¡b").words == text_stats("a b").words
    assert text_stats("a¿b").words > text_stats("ab").words


def test_text_stats_lines_follow_newlines():
    text = "\n\none\n\ntwo\n"
    assert text_stats(text).lines == text.count("\n") + 1


def test_file_stats_format():
    text = "one two\nthree"
    out = file_stats(text, "two")
    total = text_stats(text)
    sel = text_stats("two")
    assert out.startswith("<u>Totals count</u>\n")
    assert f"Chars: {total.chars:7d} Words: {total.words:6d} Lines: {total.lines:5d}\n\n" in out
    assert out.endswith(
        f"<u>Selection</u>\nChars: {sel.chars:7d} Words: {sel.words:6d} Lines: {sel.lines:5d}\n"
    )


def test_file_stats_without_selection():
    empty = text_stats("")
    out = file_stats("abc")
    assert out.endswith(
        f"Chars: {empty.chars:7d} Words: {empty.words:6d} Lines: {empty.lines:5d}\n"
    )