from __future__ import annotations

# UTF-8 helpers shared by every rule.
# Rules (non-negotiable):
# - Byte offsets are source of truth. Nothing here re-indexes by codepoint.
# - decode_utf8 never raises and always moves forward by at least one byte.
# - Malformed, truncated, overlong or out-of-range sequences decode to U+FFFD
#   and advance one byte, so the next lead byte is re-examined.

REPLACEMENT = 0xFFFD

# width -> smallest codepoint that needs that many bytes
_MIN_CP = {2: 0x80, 3: 0x800, 4: 0x10000}


def decode_utf8(data: bytes, pos: int) -> tuple[int, int]:
    """Decode one codepoint at byte `pos`. Returns (codepoint, next_pos)."""
    n = len(data)
    if pos >= n:
        return REPLACEMENT, pos + 1

    b1 = data[pos]
    if b1 < 0x80:
        return b1, pos + 1

    if (b1 & 0xE0) == 0xC0:
        width, cp = 2, b1 & 0x1F
    elif (b1 & 0xF0) == 0xE0:
        width, cp = 3, b1 & 0x0F
    elif (b1 & 0xF8) == 0xF0:
        width, cp = 4, b1 & 0x07
    else:
        # stray continuation byte or invalid lead
        return REPLACEMENT, pos + 1

    if pos + width > n:
        return REPLACEMENT, pos + 1
    for k in range(1, width):
        b = data[pos + k]
        if (b & 0xC0) != 0x80:
            return REPLACEMENT, pos + 1
        cp = (cp << 6) | (b & 0x3F)

    if cp < _MIN_CP[width] or cp > 0x10FFFF or 0xD800 <= cp <= 0xDFFF:
        return REPLACEMENT, pos + 1
    return cp, pos + width


def encode_utf8(codepoint: int) -> bytes:
    return chr(codepoint).encode("utf-8", errors="surrogatepass")


def utf8_length(data: bytes) -> int:
    """Number of codepoints as seen by decode_utf8 (malformed bytes count one each)."""
    count = 0
    pos = 0
    while pos < len(data):
        _, pos = decode_utf8(data, pos)
        count += 1
    return count


def as_utf8(text) -> bytes:
    """
    Coerce caller input to an immutable byte string.
    str is encoded as UTF-8; bytes-like objects are copied so results never
    alias a mutable caller buffer.
    """
    if isinstance(text, str):
        return text.encode("utf-8", errors="surrogatepass")
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text)
    raise TypeError(f"expected str or bytes-like input, got {type(text).__name__}")
