from __future__ import annotations

from prelex.lexing.chars import (
    follows_digit,
    inside_number,
    is_fullwidth_digit,
    is_word_codepoint,
    match_glyph,
    read_decimal,
    read_integer,
    starts_with_ci,
)


def _b(s: str) -> bytes:
    return s.encode("utf-8")


def test_read_integer_ascii_and_fullwidth():
    assert read_integer(b"123abc", 0) == (3, "123")
    assert read_integer(_b("１２３円"), 0) == (9, "123")
    assert read_integer(_b("1２3"), 0) == (5, "123")
    assert read_integer(b"abc", 0) == (0, "")


def test_read_integer_stops_at_separators():
    assert read_integer(b"1.5", 0) == (1, "1")
    assert read_integer(b"1,000", 0) == (1, "1")


def test_read_decimal_point_and_thousands():
    assert read_decimal(b"3.14%", 0) == (4, "3.14")
    assert read_decimal(b"1,000,000", 0) == (9, "1000000")
    assert read_decimal(_b("１.５"), 0) == (7, "1.5")


def test_read_decimal_trailing_separator_terminates():
    assert read_decimal(b"3.", 0) == (1, "3")
    assert read_decimal(b"3,a", 0) == (1, "3")
    assert read_decimal(b"3..4", 0) == (1, "3")


def test_read_decimal_needs_leading_digit():
    assert read_decimal(b".5", 0) == (0, "")
    assert read_decimal(b",5", 0) == (0, "")


def test_fullwidth_and_word_classes():
    assert is_fullwidth_digit(ord("０")) and is_fullwidth_digit(ord("９"))
    assert not is_fullwidth_digit(ord("0"))
    for ch in "あアー日ä":
        assert is_word_codepoint(ord(ch)), ch
    for ch in "a_！。、 ":
        assert not is_word_codepoint(ord(ch)), ch
    assert not is_word_codepoint(0xD800)


def test_starts_with_ci_and_glyph():
    assert starts_with_ci(b"HTTPS://x", 0, b"https://")
    assert not starts_with_ci(b"http:/", 0, b"http://")
    data = _b("1万円")
    assert match_glyph(data, 1, "万", "億") == 4
    assert match_glyph(data, 1, "円") is None
    assert match_glyph(data, len(data), "円") is None


def test_follows_digit():
    assert not follows_digit(b"12", 0)
    assert follows_digit(b"12", 1)
    data = _b("２5")
    assert follows_digit(data, 3)
    assert not follows_digit(_b("年5"), 3)


def test_inside_number():
    assert inside_number(b"12", 1)
    assert inside_number(b"1,2", 2)
    assert inside_number(b"1.2", 2)
    assert inside_number(_b("１,2"), 4)
    assert not inside_number(b"1,2", 0)
    assert not inside_number(b"a,2", 2)
    assert not inside_number(b",2", 1)
    assert not inside_number(b"1 2", 2)
    assert not inside_number(_b("1億5"), 4)
