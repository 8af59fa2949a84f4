# padtext

The text-handling core of a small plain-text editor, with no GUI attached.

## Modules

- `padtext.encoding`
  - `detect_line_ending(text)` finds how lines end (LF, CR or CR+LF), returned as a `LineEnding`.
  - `convert_line_ending_to_lf` and `convert_line_ending` convert between line endings.
  - `detect_charset(data, code, default_charset)` guesses the charset of raw bytes. The guess takes the locale into account: Cyrillic, Chinese, Japanese and Korean heuristics each apply under the matching locale.
  - `get_encoding_code(env)` picks the locale group from a locale string such as `"ja_JP.UTF-8"`.
  - `get_encoding_items(code)` returns that group's IANA, OpenI18N and codepage charsets as `EncodingItems`.
- `padtext.sbprober`
  - `SingleByteCharSetProber` scores bytes against a `SequenceModel` of letter-pair frequencies.
  - Its `state` is a `ProbingState`.
- `padtext.textfile`
  - `read_text_file(fi)` and `write_text_file(text, fi)` load and save a file described by a `FileInfo`. The file's charset and line ending are kept on load and used again on save. Failures raise `TextFileError`.
  - `get_file_basename`, `parse_file_uri` and `check_file_writable` deal with file names.
  - `text_stats` and `file_stats` count characters, words and lines, both for the whole text and for a selection (`TextStats`).
- `padtext.indent`
  - `compute_indentation` and `indent_offset_length` measure a line's leading whitespace.
  - An `Indenter` does auto-indenting newlines, indents and unindents blocks of lines, and toggles the tab width.
- `padtext.search`
  - `forward_search` and `backward_search` find text, including text that runs over several lines.
  - With `SearchFlags.CASE_INSENSITIVE` they ignore case and Unicode normalisation.

## Example

```python
from padtext.encoding import detect_line_ending, LineEnding
from padtext.search import forward_search, SearchFlags

assert detect_line_ending("a\r\nb") is LineEnding.CRLF
match = forward_search("Hello World", 0, "world", SearchFlags.CASE_INSENSITIVE, None)
```

## Tests

```
pip install -e .[test]
pytest
```