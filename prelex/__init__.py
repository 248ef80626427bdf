# prelex/__init__.py
"""
Does: Pattern pre-lexer for mixed Japanese/English text.
Inputs: str or UTF-8 bytes
Outputs: PreTokenResult (confirmed tokens + byte spans left for the analyzer)
"""

from __future__ import annotations

from prelex.lexing.pretokenizer import RULE_ORDER, PreTokenizer, process
from prelex.types import POS_BY_TYPE, PreToken, PreTokenResult, TextSpan

__all__ = [
    "process",
    "PreTokenizer",
    "RULE_ORDER",
    "PreToken",
    "PreTokenResult",
    "TextSpan",
    "POS_BY_TYPE",
]
