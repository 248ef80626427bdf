from __future__ import annotations

from typing import Optional

from prelex.lexing.chars import follows_digit, inside_number, match_glyph, read_decimal, read_integer
from prelex.types import PreToken, make_token

# Digit-anchored rules: Date, Time, Currency, Storage, Percentage, Version.
# Each rule is a pure function (data, pos) -> PreToken | None.
# Date and Time are greedy with fallback: every optional unit is a sub-parse
# that either closes (and moves the end) or leaves the last closed end alone.
# A number never starts in the middle of a digit run, so "25時" cannot match as "5時".
# Rules using the decimal-aware reader also skip digits after a separator inside
# a run ("12,345年" has no Date), so each run is read once per rule.

_MAGNITUDES = ("万", "億", "兆")
_STORAGE_PREFIXES = b"KMGTkmgt"


def _unit(data: bytes, pos: int, glyph: str, max_digits: int, *, decimal: bool = False) -> tuple[int, str] | None:
    """
    Sub-parse `<1..max_digits digits><glyph>` at pos.
    Returns (end_after_glyph, digits) or None if the unit does not close.
    """
    end, digits = (read_decimal if decimal else read_integer)(data, pos)
    if not digits or len(digits) > max_digits:
        return None
    after = match_glyph(data, end, glyph)
    if after is None:
        return None
    return after, digits


def match_date(data: bytes, pos: int) -> Optional[PreToken]:
    """YYYY年, YYYY年MM月, YYYY年MM月DD日 (1-4 / 1-2 / 1-2 digits)."""
    if inside_number(data, pos):
        return None
    year = _unit(data, pos, "年", 4, decimal=True)
    if year is None:
        return None
    end = year[0]

    month = _unit(data, end, "月", 2, decimal=True)
    if month is not None:
        end = month[0]
        day = _unit(data, end, "日", 2, decimal=True)
        if day is not None:
            end = day[0]

    return make_token(data, pos, end, "Date")


def _in_range(digits: str, lo: int, hi: int) -> bool:
    return digits.isdigit() and lo <= int(digits) <= hi


def match_time(data: bytes, pos: int) -> Optional[PreToken]:
    """
    H時, H時M分, H時M分S秒 with H in 0..24 and M, S in 0..59.
    An out-of-range hour rejects the whole match; an out-of-range minute or
    second freezes the token at the previous unit.
    """
    if follows_digit(data, pos):
        return None
    hour = _unit(data, pos, "時", 2)
    if hour is None or not _in_range(hour[1], 0, 24):
        return None
    end = hour[0]

    minute = _unit(data, end, "分", 2)
    if minute is not None and _in_range(minute[1], 0, 59):
        end = minute[0]
        second = _unit(data, end, "秒", 2)
        if second is not None and _in_range(second[1], 0, 59):
            end = second[0]

    return make_token(data, pos, end, "Time")


def match_currency(data: bytes, pos: int) -> Optional[PreToken]:
    """<number>[万億兆]?円"""
    if inside_number(data, pos):
        return None
    end, digits = read_decimal(data, pos)
    if not digits:
        return None
    after_mag = match_glyph(data, end, *_MAGNITUDES)
    if after_mag is not None:
        end = after_mag
    after_yen = match_glyph(data, end, "円")
    if after_yen is None:
        return None
    return make_token(data, pos, after_yen, "Currency")


def match_storage(data: bytes, pos: int) -> Optional[PreToken]:
    """<number>[KMGT]?B, ASCII case-insensitive."""
    if inside_number(data, pos):
        return None
    end, digits = read_decimal(data, pos)
    if not digits:
        return None
    n = len(data)
    if end < n and data[end] in _STORAGE_PREFIXES:
        end += 1
    if end >= n or data[end] not in b"Bb":
        return None
    return make_token(data, pos, end + 1, "Storage")


def match_percentage(data: bytes, pos: int) -> Optional[PreToken]:
    """<number>% or <number>％"""
    if inside_number(data, pos):
        return None
    end, digits = read_decimal(data, pos)
    if not digits:
        return None
    after = match_glyph(data, end, "%", "％")
    if after is None:
        return None
    return make_token(data, pos, after, "Percentage")


def match_version(data: bytes, pos: int) -> Optional[PreToken]:
    """
    v?N.N(.N)*
    Uses the integer reader so '.' is always a segment separator.
    """
    n = len(data)
    i = pos
    if i < n and data[i] in b"vV":
        i += 1
    elif follows_digit(data, pos):
        return None

    i, major = read_integer(data, i)
    if not major:
        return None

    # at least one .N is mandatory
    if i >= n or data[i] != 0x2E:
        return None
    i, minor = read_integer(data, i + 1)
    if not minor:
        return None

    while i < n and data[i] == 0x2E:
        nxt, seg = read_integer(data, i + 1)
        if not seg:
            break
        i = nxt

    return make_token(data, pos, i, "Version")
