from __future__ import annotations

from typing import Optional

from prelex.lexing.chars import is_ascii_alnum, is_word_codepoint, match_glyph, starts_with_ci
from prelex.types import PreToken, make_token
from prelex.utils.utf8 import decode_utf8

# Symbol-anchored rules: Url, Email, Hashtag, Mention, plus the boundary set.

_SCHEMES = (b"https://", b"http://")
_URL_PUNCT = frozenset(b"-._~:/?#[]@!$&'()*+,;=%")
_URL_TRAILING = frozenset(b".,)'")

_EMAIL_LOCAL_PUNCT = frozenset(b"+_-")
_EMAIL_DOMAIN_PUNCT = frozenset(b"-")

BOUNDARY_CODEPOINTS = frozenset(ord(c) for c in "。！？!?\n")


def _is_url_byte(b: int) -> bool:
    return is_ascii_alnum(b) or b in _URL_PUNCT


def match_url(data: bytes, pos: int) -> Optional[PreToken]:
    """http(s)://... up to the first non URL-safe byte, minus trailing . , ) '"""
    body = None
    for scheme in _SCHEMES:
        if starts_with_ci(data, pos, scheme):
            body = pos + len(scheme)
            break
    if body is None:
        return None

    end = body
    n = len(data)
    while end < n and _is_url_byte(data[end]):
        end += 1
    while end > body and data[end - 1] in _URL_TRAILING:
        end -= 1

    if end <= body:
        return None
    return make_token(data, pos, end, "Url")


def _is_local_byte(b: int) -> bool:
    return is_ascii_alnum(b) or b in _EMAIL_LOCAL_PUNCT


def _is_domain_byte(b: int) -> bool:
    return is_ascii_alnum(b) or b in _EMAIL_DOMAIN_PUNCT


def _dotted_run(data: bytes, pos: int, is_member) -> tuple[int, int]:
    """
    Consume member-run ('.' member-run)* starting at pos.
    A '.' is taken only when another member byte follows it.
    Returns (end_pos, number_of_runs).
    """
    n = len(data)
    i = pos
    runs = 0
    while i < n and is_member(data[i]):
        while i < n and is_member(data[i]):
            i += 1
        runs += 1
        if i + 1 < n and data[i] == 0x2E and is_member(data[i + 1]):
            i += 1
            continue
        break
    return i, runs


def match_email(data: bytes, pos: int) -> Optional[PreToken]:
    """
    local@domain.tld
    local:  [A-Za-z0-9+_-] runs joined by single dots; no leading dot
    domain: [A-Za-z0-9-] labels joined by dots; at least two labels
    The local part must start at a left edge: not right after a local byte or a dot.
    """
    if pos > 0 and (_is_local_byte(data[pos - 1]) or data[pos - 1] == 0x2E):
        return None

    at, runs = _dotted_run(data, pos, _is_local_byte)
    if runs == 0 or at >= len(data) or data[at] != 0x40:
        return None

    end, labels = _dotted_run(data, at + 1, _is_domain_byte)
    if labels < 2:
        return None
    return make_token(data, pos, end, "Email")


def _word_run(data: bytes, pos: int, allow_non_ascii: bool) -> int:
    n = len(data)
    i = pos
    while i < n:
        b = data[i]
        if is_ascii_alnum(b) or b == 0x5F:
            i += 1
            continue
        if b >= 0x80 and allow_non_ascii:
            cp, nxt = decode_utf8(data, i)
            if is_word_codepoint(cp):
                i = nxt
                continue
        break
    return i


def match_hashtag(data: bytes, pos: int) -> Optional[PreToken]:
    """#tag or ＃tag; body is ASCII alnum/_ or non-ASCII letters (kana, kanji, ...)."""
    body = match_glyph(data, pos, "#", "＃")
    if body is None:
        return None
    end = _word_run(data, body, allow_non_ascii=True)
    if end == body:
        return None
    return make_token(data, pos, end, "Hashtag")


def match_mention(data: bytes, pos: int) -> Optional[PreToken]:
    """@name with an ASCII alnum/_ body."""
    if pos >= len(data) or data[pos] != 0x40:
        return None
    end = _word_run(data, pos + 1, allow_non_ascii=False)
    if end == pos + 1:
        return None
    return make_token(data, pos, end, "Mention")


def is_sentence_boundary(codepoint: int, extra: frozenset[int] = frozenset()) -> bool:
    return codepoint in BOUNDARY_CODEPOINTS or codepoint in extra
