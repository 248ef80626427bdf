"""
Does:
    Single left-to-right pass over UTF-8 bytes. At every position the pattern
    rules are tried in a fixed priority order; the first hit becomes a token and
    the bytes skipped since the previous token become a span.

Inputs:
    text (str or bytes-like), optional PreLexCfg

Outputs:
    PreTokenResult whose tokens and spans tile [0, len(bytes)) exactly.

Notes:
    - Offsets are UTF-8 byte offsets, also for str input.
    - Percentage is tried before Version so "3.14%" is one Percentage token.
    - Email is tried before Mention so "user@example.com" is one Email token.
    - Nothing here keeps state between calls.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from prelex.config import PreLexCfg, validate_config
from prelex.lexing.numeric import (
    match_currency,
    match_date,
    match_percentage,
    match_storage,
    match_time,
    match_version,
)
from prelex.lexing.symbolic import (
    is_sentence_boundary,
    match_email,
    match_hashtag,
    match_mention,
    match_url,
)
from prelex.types import PreToken, PreTokenResult, TextSpan, make_token
from prelex.utils.utf8 import as_utf8, decode_utf8

_LOG = logging.getLogger(__name__)

Rule = Callable[[bytes, int], Optional[PreToken]]

# Priority order: earlier wins at the same position. Names are config.RULE_NAMES.
RULE_ORDER: tuple[tuple[str, Rule], ...] = (
    ("url", match_url),
    ("email", match_email),
    ("date", match_date),
    ("time", match_time),
    ("currency", match_currency),
    ("storage", match_storage),
    ("percentage", match_percentage),
    ("version", match_version),
    ("hashtag", match_hashtag),
    ("mention", match_mention),
)


class PreTokenizer:
    """
    Stateless dispatcher. The only fields are derived from config once and are
    immutable, so one instance can be shared between threads.
    """

    def __init__(self, cfg: PreLexCfg | None = None) -> None:
        cfg = cfg or PreLexCfg()
        validate_config(cfg)
        enabled = set(cfg.pretokenizer.enabled_rules)
        self._rules: tuple[Rule, ...] = tuple(fn for name, fn in RULE_ORDER if name in enabled)
        self.rule_names: tuple[str, ...] = tuple(name for name, _ in RULE_ORDER if name in enabled)
        self._emit_boundaries = bool(cfg.pretokenizer.emit_boundaries)
        self._extra_boundaries = frozenset(ord(ch) for ch in cfg.pretokenizer.extra_boundaries)

    def _match_at(self, data: bytes, pos: int) -> Optional[PreToken]:
        for rule in self._rules:
            tok = rule(data, pos)
            if tok is not None:
                return tok
        return None

    def process(self, text) -> PreTokenResult:
        data = as_utf8(text)
        n = len(data)
        tokens: list[PreToken] = []
        spans: list[TextSpan] = []

        pos = 0
        span_start = 0
        while pos < n:
            tok = self._match_at(data, pos)
            if tok is not None:
                if pos > span_start:
                    spans.append(TextSpan(span_start, pos))
                tokens.append(tok)
                pos = span_start = tok.end
                continue

            cp, nxt = decode_utf8(data, pos)
            if self._emit_boundaries and is_sentence_boundary(cp, self._extra_boundaries):
                if pos > span_start:
                    spans.append(TextSpan(span_start, pos))
                tokens.append(make_token(data, pos, nxt, "Boundary"))
                pos = span_start = nxt
                continue

            pos = nxt

        if span_start < n:
            spans.append(TextSpan(span_start, n))

        _LOG.debug("pretokenized %d bytes: %d tokens, %d spans", n, len(tokens), len(spans))
        return PreTokenResult(tokens=tuple(tokens), spans=tuple(spans))


_DEFAULT = PreTokenizer()


def process(text, cfg: PreLexCfg | None = None) -> PreTokenResult:
    """Pre-tokenize `text` with the default rules, or with `cfg` if given."""
    if cfg is None:
        return _DEFAULT.process(text)
    return PreTokenizer(cfg).process(text)
