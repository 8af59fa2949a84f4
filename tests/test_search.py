import pytest

from padtext.search import SearchFlags, backward_search, forward_search

CI = SearchFlags.CASE_INSENSITIVE


def test_forward_finds_first_occurrence():
    text = "hello world, world"
    pos = text.index("world")
    assert forward_search(text, 0, "world") == (pos, pos + len("world"))


def test_forward_is_case_sensitive_by_default():
    assert forward_search("Hello there", 0, "hello") is None


def test_forward_case_insensitive():
    text = "say HeLLo twice"
    span = forward_search(text, 0, "hello", CI)
    assert span is not None
    start, end = span
    assert text[start:end].casefold() == "hello"


def test_forward_starts_at_given_offset():
    text = "abc abc abc"
    start, end = forward_search(text, 1, "abc")
    assert start == text.index("abc", 1)
    assert text[start:end] == "abc"


def test_forward_respects_limit_strictly():
    text = "abcdef"
    pos = text.index("cd")
    assert forward_search(text, 0, "cd", limit=pos + 2) is None
    assert forward_search(text, 0, "cd", limit=pos + 3) == (pos, pos + 2)


def test_forward_start_at_limit_gives_nothing():
    assert forward_search("abcdef", 3, "d", limit=3) is None


def test_forward_empty_needle_moves_one_char():
    assert forward_search("abc", 1, "") == (2, 2)
    assert forward_search("abc", 3, "") is None


def test_forward_multiline_needle():
    text = "one\ntwo\nthree"
    needle = "two\nthr"
    pos = text.index(needle)
    assert forward_search(text, 0, needle) == (pos, pos + len(needle))


def test_forward_multiline_requires_line_start_for_rest():
    assert forward_search("xtwo\nfoo three", 0, "two\nthree") is None


def test_forward_multiline_case_insensitive():
    text = "alpha\nBETA gamma"
    span = forward_search(text, 0, "ALPHA\nbeta", CI)
    assert span is not None
    start, end = span
    assert text[start:end].casefold() == "alpha\nbeta"


def test_forward_on_later_line():
    text = "first line\nsecond target"
    pos = text.index("target")
    assert forward_search(text, 0, "target", CI) == (pos, pos + len("target"))


def test_forward_caseless_decomposed_accent_maps_to_original():
    text = "caf\u00c9 au lait"
    span = forward_search(text, 0, "caf\u00e9", CI)
    assert span == (0, 4)


def test_forward_caseless_expanding_fold():
    text = "die Stra\u00dfe hier"
    span = forward_search(text, 0, "STRASSE", CI)
    assert span is not None
    start, end = span
    assert text[start:end] == "Stra\u00dfe"


def test_forward_no_match_at_end_of_text():
    assert forward_search("abc", 3, "a") is None


def test_backward_finds_last_occurrence():
    text = "abc abc"
    pos = text.rindex("abc")
    assert backward_search(text, len(text), "abc") == (pos, pos + 3)


def test_backward_match_must_end_before_start():
    text = "abcabc"
    assert backward_search(text, 5, "abc") == (0, 3)


def test_backward_case_insensitive():
    text = "Foo bar FOO"
    span = backward_search(text, len(text), "foo", CI)
    assert span is not None
    start, end = span
    assert start == text.rindex("FOO")
    assert text[start:end].casefold() == "foo"


def test_backward_across_lines():
    text = "needle here\nnothing\nmore"
    assert backward_search(text, len(text), "needle") == (0, len("needle"))


def test_backward_respects_limit():
    text = "abcdef"
    pos = text.index("ab")
    assert backward_search(text, len(text), "ab", limit=pos + 2) is None
    assert backward_search(text, len(text), "ab", limit=pos + 1) == (pos, pos + 2)


def test_backward_empty_needle_moves_one_char():
    assert backward_search("abc", 2, "") == (1, 1)
    assert backward_search("abc", 0, "") is None


def test_backward_not_found():
    assert backward_search("abc\ndef", 7, "xyz", CI) is None


@pytest.mark.parametrize("needle", ["b", "cd", "ef"])
def test_forward_and_backward_agree_on_unique_match(needle):
    text = "abcdef"
    assert forward_search(text, 0, needle) == backward_search(text, len(text), needle)


def test_out_of_range_start_raises():
    with pytest.raises(IndexError):
        forward_search("abc", 10, "a")
    with pytest.raises(IndexError):
        backward_search("abc", -1, "a")


def test_out_of_range_limit_raises():
    with pytest.raises(IndexError):
        forward_search("abc", 0, "a", limit=99)