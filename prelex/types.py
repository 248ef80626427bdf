from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterator, Literal, Union

from prelex.utils.utf8 import as_utf8

# -----------------------
# Simple string enums
# -----------------------
PreTokenType = Literal[
    "Url",
    "Email",
    "Date",
    "Time",
    "Currency",
    "Version",
    "Storage",
    "Percentage",
    "Hashtag",
    "Mention",
    "Number",  # reserved; no rule emits it
    "Boundary",
]

PartOfSpeech = Literal[
    "Unknown",
    "Noun",
    "Verb",
    "Adjective",
    "Adverb",
    "Particle",
    "Auxiliary",
    "Conjunction",
    "Determiner",
    "Pronoun",
    "Prefix",
    "Suffix",
    "Symbol",
    "Other",
]

POS_BY_TYPE: dict[str, PartOfSpeech] = {
    "Url": "Symbol",
    "Email": "Symbol",
    "Boundary": "Symbol",
    "Date": "Noun",
    "Time": "Noun",
    "Currency": "Noun",
    "Version": "Noun",
    "Storage": "Noun",
    "Percentage": "Noun",
    "Number": "Noun",
    "Hashtag": "Noun",
    "Mention": "Noun",
}

# -----------------------
# Core data types
# -----------------------

@dataclass(frozen=True)
class PreToken:
    """
    Confirmed token.
    Fields:
      surface: decoded copy of data[start:end]
      start/end: UTF-8 byte offsets, end exclusive
      type: PreTokenType
      pos: coarse part-of-speech handed to the analyzer
    """
    surface: str
    start: int
    end: int
    type: PreTokenType
    pos: PartOfSpeech

    @property
    def length(self) -> int:
        return self.end - self.start

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def make_token(data: bytes, start: int, end: int, type_: PreTokenType) -> PreToken:
    """Build a token whose surface is an owned copy of data[start:end]."""
    surface = data[start:end].decode("utf-8", errors="surrogateescape")
    return PreToken(surface=surface, start=start, end=end, type=type_, pos=POS_BY_TYPE[type_])


@dataclass(frozen=True)
class TextSpan:
    """Byte range the analyzer still has to segment."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def slice(self, data: bytes) -> bytes:
        return data[self.start:self.end]

    def as_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end}


Segment = Union[PreToken, TextSpan]


@dataclass(frozen=True)
class PreTokenResult:
    """
    Output of one scan. Tokens and spans are kept apart; segments() restores
    the interleaved order they were emitted in.
    """
    tokens: tuple[PreToken, ...] = ()
    spans: tuple[TextSpan, ...] = ()

    def segments(self) -> Iterator[Segment]:
        # Both sequences are already sorted by start; this is a two-way merge.
        i = j = 0
        nt, ns = len(self.tokens), len(self.spans)
        while i < nt or j < ns:
            if j >= ns or (i < nt and self.tokens[i].start < self.spans[j].start):
                yield self.tokens[i]
                i += 1
            else:
                yield self.spans[j]
                j += 1

    def reconstruct(self, text: str | bytes) -> bytes:
        data = as_utf8(text)
        out = bytearray()
        for seg in self.segments():
            if isinstance(seg, PreToken):
                out += seg.surface.encode("utf-8", errors="surrogateescape")
            else:
                out += seg.slice(data)
        return bytes(out)

    def span_texts(self, text: str | bytes) -> list[str]:
        data = as_utf8(text)
        return [sp.slice(data).decode("utf-8", errors="replace") for sp in self.spans]

    def counts_by_type(self) -> dict[str, int]:
        out: dict[str, int] = {}
        for t in self.tokens:
            out[t.type] = out.get(t.type, 0) + 1
        return out

    def as_dict(self) -> dict[str, Any]:
        return {
            "tokens": [t.as_dict() for t in self.tokens],
            "spans": [s.as_dict() for s in self.spans],
        }
