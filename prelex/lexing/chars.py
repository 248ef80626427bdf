from __future__ import annotations

from prelex.utils.utf8 import decode_utf8

# Character classes and digit readers shared by the rules.
# All positions are byte offsets into UTF-8 data.

FULLWIDTH_ZERO = 0xFF10  # ０
FULLWIDTH_NINE = 0xFF19  # ９


def is_ascii_digit(b: int) -> bool:
    return 0x30 <= b <= 0x39


def is_ascii_alpha(b: int) -> bool:
    return 0x41 <= b <= 0x5A or 0x61 <= b <= 0x7A


def is_ascii_alnum(b: int) -> bool:
    return is_ascii_digit(b) or is_ascii_alpha(b)


def is_fullwidth_digit(cp: int) -> bool:
    return FULLWIDTH_ZERO <= cp <= FULLWIDTH_NINE


def is_word_codepoint(cp: int) -> bool:
    """Non-ASCII letters/digits: kana, kanji, prolonged sound mark, Latin-1 letters, ..."""
    if cp < 0x80:
        return False
    return chr(cp).isalnum()


def _digit_at(data: bytes, pos: int) -> tuple[int, str] | None:
    """(next_pos, ascii_digit) if an ASCII or full-width digit starts at pos."""
    b = data[pos]
    if is_ascii_digit(b):
        return pos + 1, chr(b)
    if b < 0x80:
        return None
    cp, nxt = decode_utf8(data, pos)
    if is_fullwidth_digit(cp):
        return nxt, chr(0x30 + cp - FULLWIDTH_ZERO)
    return None


def read_integer(data: bytes, pos: int) -> tuple[int, str]:
    """
    Integer-only digit run (ASCII + full-width, no separators).
    Returns (end_pos, normalized ASCII digits); digits == "" means no match.
    """
    digits: list[str] = []
    i = pos
    n = len(data)
    while i < n:
        hit = _digit_at(data, i)
        if hit is None:
            break
        i, d = hit
        digits.append(d)
    return i, "".join(digits)


def read_decimal(data: bytes, pos: int) -> tuple[int, str]:
    """
    Decimal-aware digit run.
    - '.' is a decimal point only if a digit follows; it is kept in the output.
    - ',' is a thousands separator only if a digit follows; it is dropped.
    Otherwise either character ends the number.
    """
    digits: list[str] = []
    i = pos
    n = len(data)
    while i < n:
        hit = _digit_at(data, i)
        if hit is not None:
            i, d = hit
            digits.append(d)
            continue
        b = data[i]
        if b in (0x2E, 0x2C) and digits and i + 1 < n and _digit_at(data, i + 1) is not None:
            if b == 0x2E:
                digits.append(".")
            i += 1
            continue
        break
    return i, "".join(digits)


def starts_with_ci(data: bytes, pos: int, prefix: bytes) -> bool:
    """ASCII case-insensitive prefix test."""
    end = pos + len(prefix)
    if end > len(data):
        return False
    return data[pos:end].lower() == prefix.lower()


def match_glyph(data: bytes, pos: int, *glyphs: str) -> int | None:
    """Byte position after the codepoint at pos if it is one of `glyphs`, else None."""
    if pos >= len(data):
        return None
    cp, nxt = decode_utf8(data, pos)
    for g in glyphs:
        if cp == ord(g):
            return nxt
    return None


def follows_digit(data: bytes, pos: int) -> bool:
    """True if the codepoint ending right before pos is an ASCII or full-width digit."""
    if pos <= 0:
        return False
    if is_ascii_digit(data[pos - 1]):
        return True
    # full-width digits are three bytes: EF BC 90..99
    if pos >= 3:
        cp, nxt = decode_utf8(data, pos - 3)
        return nxt == pos and is_fullwidth_digit(cp)
    return False


def inside_number(data: bytes, pos: int) -> bool:
    """
    True if a decimal-aware read that started earlier would already have run
    through pos: right after a digit, or after a '.'/',' that follows a digit.
    """
    if follows_digit(data, pos):
        return True
    return pos >= 2 and data[pos - 1] in b".," and follows_digit(data, pos - 1)
