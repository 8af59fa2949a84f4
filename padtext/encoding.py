"""Locale-aware charset guessing and line-ending handling for text files."""

from __future__ import annotations

import codecs
import locale
import os
from enum import IntEnum
from typing import NamedTuple, Optional, Union

(
    LATIN1,
    LATIN2,
    LATIN3,
    LATIN4,
    LATINC,
    LATINC_UA,
    LATINC_TJ,
    LATINA,
    LATING,
    LATINH,
    LATIN5,
    CHINESE_CN,
    CHINESE_TW,
    CHINESE_HK,
    JAPANESE,
    KOREAN,
    VIETNAMESE,
    THAI,
    GEORGIAN,
) = range(19)

_END_CODE = GEORGIAN + 1

_ESC = 0x1B
_DOLLAR = ord("$")


class LineEnding(IntEnum):
    """Line terminator of a text file."""

    LF = 0x0A
    CR = 0x0D
    CRLF = 0x0D + 0x0A


class EncodingItems(NamedTuple):
    """Candidate charsets for a locale group: IANA, OpenI18N and codepage names."""

    iana: Optional[str]
    openi18n: Optional[str]
    codepage: Optional[str]


_COUNTRIES: tuple[tuple[str, ...], ...] = (
    (),
    ("cs", "hr", "hu", "pl", "ro", "sk", "sl", "sq", "sr", "uz"),
    ("eo", "mt"),
    ("et", "lt", "lv", "mi"),
    ("be", "bg", "ky", "mk", "mn", "ru", "tt"),
    ("uk",),
    ("tg",),
    ("ar", "fa", "ur"),
    ("el",),
    ("he", "yi"),
    ("az", "tr"),
    ("zh_CN",),
    ("zh_TW",),
    ("zh_HK",),
    ("ja",),
    ("ko",),
    ("vi",),
    ("th",),
    ("ka",),
)

_ENCODINGS: tuple[EncodingItems, ...] = (
    EncodingItems("ISO-8859-1", "ISO-8859-15", "CP1252"),
    EncodingItems("ISO-8859-2", "ISO-8859-16", "CP1250"),
    EncodingItems("ISO-8859-3", None, None),
    EncodingItems("ISO-8859-4", "ISO-8859-13", "CP1257"),
    EncodingItems("ISO-8859-5", "KOI8-R", "CP1251"),
    EncodingItems("ISO-8859-5", "KOI8-U", "CP1251"),
    EncodingItems("ISO-8859-5", "KOI8-T", "CP1251"),
    EncodingItems("ISO-8859-6", None, "CP1256"),
    EncodingItems("ISO-8859-7", None, "CP1253"),
    EncodingItems("ISO-8859-8", None, "CP1255"),
    EncodingItems("ISO-8859-9", None, "CP1254"),
    EncodingItems("GB2312", "GB18030", "CP936"),
    EncodingItems("BIG5", "EUC-TW", "CP950"),
    EncodingItems("BIG5", "BIG5-HKSCS", "CP950"),
    EncodingItems("ISO-2022-JP", "EUC-JP", "CP932"),
    EncodingItems("ISO-2022-KR", "EUC-KR", "CP949"),
    EncodingItems(None, "VISCII", "CP1258"),
    EncodingItems(None, "TIS-620", "CP874"),
    EncodingItems(None, "GEORGIAN-PS", None),
)

Text = Union[str, bytes]


def get_encoding_code(env: Optional[str] = None) -> int:
    """Return the locale group code for a locale string.

    Without an argument the locale is taken from LC_ALL, or LANG when
    LC_ALL is unset.  Unknown locales fall back to LATIN1.
    """
    if env is None:
        env = os.environ.get("LC_ALL")
        if env is None:
            env = os.environ.get("LANG")
    if env and len(env) >= 2:
        for code in range(1, _END_CODE):
            if any(env.startswith(prefix) for prefix in _COUNTRIES[code]):
                return code
    return LATIN1


def get_encoding_items(code: int) -> EncodingItems:
    """Return the candidate charsets for a locale group code."""
    if not 0 <= code < _END_CODE:
        raise ValueError(f"unknown encoding code: {code}")
    return _ENCODINGS[code]


def get_default_charset() -> str:
    """Return the charset of the current locale."""
    charset = locale.getpreferredencoding(False) or "UTF-8"
    try:
        if codecs.lookup(charset).name == "utf-8":
            return "UTF-8"
    except LookupError:
        pass
    return charset


def _newlines(text: Text) -> tuple[Text, Text]:
    if isinstance(text, (bytes, bytearray)):
        return b"\r", b"\n"
    return "\r", "\n"


def detect_line_ending(text: Text) -> LineEnding:
    """Guess the line terminator from the first one found.

    The very first character is not examined.
    """
    cr, lf = _newlines(text)
    for i in range(1, len(text)):
        ch = text[i : i + 1]
        if ch == lf:
            break
        if ch == cr:
            if text[i + 1 : i + 2] == lf:
                return LineEnding.CRLF
            return LineEnding.CR
    return LineEnding.LF


def convert_line_ending_to_lf(text: Text) -> Text:
    """Turn every CR and CR LF into LF."""
    cr, lf = _newlines(text)
    return text.replace(cr + lf, lf).replace(cr, lf)


def convert_line_ending(text: Text, lineend: LineEnding) -> Text:
    """Turn LF line ends into the given terminator."""
    cr, lf = _newlines(text)
    if lineend == LineEnding.CR:
        return text.replace(lf, cr)
    if lineend == LineEnding.CRLF:
        return text.replace(lf, cr + lf)
    return text


def _detect_cyrillic(data: bytes, code: int) -> Optional[str]:
    charset = get_encoding_items(code).openi18n
    noniso = False
    xc = xd = xef = 0
    for c in data:
        if 0x80 <= c <= 0x9F:
            noniso = True
        elif 0xC0 <= c <= 0xCF:
            xc += 1
        elif 0xD0 <= c <= 0xDF:
            xd += 1
        elif c >= 0xE0:
            xef += 1
    if not noniso and xc + xef < xd:
        return "ISO-8859-5"
    if xc + xd < xef:
        return "CP1251"
    return charset


def _gb18030_trail(c: int) -> bool:
    return 0x30 <= c <= 0x39 or 0x80 <= c <= 0xA0


def _detect_chinese(data: bytes, code: int) -> Optional[str]:
    charset = get_encoding_items(code).iana
    it = iter(data)
    for c in it:
        if 0x81 <= c <= 0x87:
            return "GB18030"
        if 0x88 <= c <= 0xA0:
            if _gb18030_trail(next(it, 0)):
                return "GB18030"
        elif 0xA1 <= c <= 0xC6 or 0xC9 <= c <= 0xF9:
            c = next(it, 0)
            if 0x40 <= c <= 0x7E:
                charset = "BIG5"
            elif _gb18030_trail(c):
                return "GB18030"
        elif c >= 0xC7:
            if _gb18030_trail(next(it, 0)):
                return "GB18030"
    return charset


def _detect_japanese(data: bytes) -> str:
    it = iter(data)
    for c in it:
        if 0x81 <= c <= 0x9F:
            if c == 0x8E:
                c = next(it, 0)
                if 0x40 <= c <= 0xA0 or 0xE0 <= c <= 0xFC:
                    return "CP932"
            elif c == 0x8F:
                c = next(it, 0)
                if 0x40 <= c <= 0xA0:
                    return "CP932"
                if c >= 0xFD:
                    break
            else:
                return "CP932"
        elif 0xA1 <= c <= 0xDF:
            c = next(it, 0)
            if c <= 0x9F:
                return "CP932"
            if c >= 0xFD:
                break
        elif 0xE0 <= c <= 0xEF:
            c = next(it, 0)
            if 0x40 <= c <= 0xA0:
                return "CP932"
            if c >= 0xFD:
                break
        elif c >= 0xF0:
            break
    return "EUC-JP"


def _johab_trail(c: int) -> bool:
    return 0x5A < c < 0x61 or 0x7A < c < 0x81


def _uhc_only_trail(c: int) -> bool:
    return c in (0x52, 0x72, 0x92) or 0x9D < c < 0xA1


def _high_uhc_trail(c: int) -> bool:
    return (
        c in (0xB2, 0xD2, 0xF2, 0xFE)
        or 0xBD < c < 0xC1
        or 0xDD < c < 0xE1
    )


def _detect_korean(data: bytes) -> str:
    noneuc = False
    nonjohab = False
    charset: Optional[str] = None
    it = iter(data)
    for c in it:
        if 0x81 <= c < 0x84:
            charset = "CP949"
        elif 0x84 <= c < 0xA1:
            noneuc = True
            c = next(it, 0)
            if _johab_trail(c):
                charset = "CP1361"
            elif _uhc_only_trail(c) or _high_uhc_trail(c):
                charset = "CP949"
        elif 0xA1 <= c <= 0xC6:
            c = next(it, 0)
            if c < 0xA1:
                noneuc = True
                if _johab_trail(c):
                    charset = "CP1361"
                elif _uhc_only_trail(c):
                    charset = "CP949"
                elif _high_uhc_trail(c):
                    nonjohab = True
        elif 0xC6 < c <= 0xD3:
            if next(it, 0) < 0xA1:
                charset = "CP1361"
        elif 0xD3 < c < 0xD8:
            nonjohab = True
            next(it, 0)
        elif c >= 0xD8:
            if next(it, 0) < 0xA1:
                charset = "CP1361"
        if noneuc and nonjohab:
            charset = "CP949"
        if charset is not None:
            return charset
    return "CP949" if noneuc else "EUC-KR"


def _detect_noniso(data: bytes) -> bool:
    return any(0x80 <= c <= 0x9F for c in data)


def _scan_utf8(data: bytes, default_charset: str) -> str:
    charset: Optional[str] = None
    it = iter(data)
    for c in it:
        if c > 0x7F:
            charset = "UTF-8"
            break
        if c != _ESC or next(it, 0) != _DOLLAR:
            continue
        c = next(it, 0)
        if c in (ord("B"), ord("@")):
            charset = "ISO-2022-JP"
            continue
        if c == ord("A"):
            charset = "ISO-2022-JP-2"
        elif c == ord("("):
            if next(it, 0) in (ord("C"), ord("D")):
                charset = "ISO-2022-JP-2"
        elif c == ord(")"):
            if next(it, 0) == ord("C"):
                charset = "ISO-2022-KR"
        break
    return charset or default_charset


def detect_charset(
    data: bytes,
    code: Optional[int] = None,
    default_charset: Optional[str] = None,
) -> Optional[str]:
    """Guess the charset of raw file contents.

    ``code`` is the locale group (see get_encoding_code) and
    ``default_charset`` the locale charset; both default to the current
    environment.  Contents end at the first NUL byte.
    """
    if code is None:
        code = get_encoding_code()
    if default_charset is None:
        default_charset = get_default_charset()
    data = bytes(data).split(b"\0", 1)[0]

    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        pass
    else:
        return _scan_utf8(data, default_charset)

    items = get_encoding_items(code)
    if code in (LATINC, LATINC_UA, LATINC_TJ):
        return _detect_cyrillic(data, code)
    if code in (CHINESE_CN, CHINESE_TW, CHINESE_HK):
        return _detect_chinese(data, code)
    if code == JAPANESE:
        return _detect_japanese(data)
    if code == KOREAN:
        return _detect_korean(data)
    if code in (VIETNAMESE, THAI, GEORGIAN):
        return items.openi18n

    if default_charset != "UTF-8":
        charset: Optional[str] = default_charset
    elif _detect_noniso(data):
        charset = items.codepage
    else:
        charset = items.openi18n
    return charset or items.iana