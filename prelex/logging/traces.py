# prelex/logging/traces.py
from __future__ import annotations

import datetime as dt
import hashlib
import json
import os
from typing import Any, Dict

from prelex.types import PreTokenResult
from prelex.utils.utf8 import as_utf8

_REQUIRED_KEYS = {
    "qid",
    "n_bytes",
    "n_tokens",
    "n_spans",
    "types",
    "timestamp_iso",
}


def trace_row(text, result: PreTokenResult) -> Dict[str, Any]:
    """Summarize one scan as a trace row; qid is a sha1 prefix of the input bytes."""
    data = as_utf8(text)
    return {
        "qid": hashlib.sha1(data).hexdigest()[:12],
        "n_bytes": len(data),
        "n_tokens": len(result.tokens),
        "n_spans": len(result.spans),
        "types": result.counts_by_type(),
        "tokens": [t.as_dict() for t in result.tokens],
        "spans": [s.as_dict() for s in result.spans],
    }


def emit_trace(row: Dict[str, Any], path: str) -> None:
    """
    Append a structured trace row to a JSONL file, guaranteeing required keys.
    Missing keys are written as null.
    """
    now = dt.datetime.now(dt.timezone.utc).isoformat()
    out = dict(row)
    out.setdefault("timestamp_iso", now)

    for k in _REQUIRED_KEYS - set(out.keys()):
        out[k] = None

    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(out, ensure_ascii=False))
        f.write("\n")
