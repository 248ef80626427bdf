# scripts/dump_pretokens.py
"""
Print the pre-lexer's view of a line of text:
- one row per segment, in order, with byte offsets
- tokens show their type and part of speech; spans show the raw text
- --json prints PreTokenResult.as_dict() instead
- --trace (or PRELEX_TRACES=1) appends a JSONL row per input line
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from prelex.config import apply_env_overrides, load_config
from prelex.lexing.pretokenizer import PreTokenizer
from prelex.logging.traces import emit_trace, trace_row
from prelex.types import PreToken, PreTokenResult

logging.basicConfig(
    level=os.environ.get("PRELEX_LOGLEVEL", "INFO"),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
_LOG = logging.getLogger("scripts.dump_pretokens")


def show(pt: PreTokenizer, q: str, as_json: bool = False) -> PreTokenResult:
    res = pt.process(q)
    if as_json:
        print(json.dumps(res.as_dict(), ensure_ascii=False))
        return res
    data = q.encode("utf-8")
    for i, seg in enumerate(res.segments()):
        if isinstance(seg, PreToken):
            print(f"{i:>3}  {seg.type:<10} {seg.pos:<7} {seg.surface!r:>24}  [{seg.start},{seg.end})")
        else:
            raw = seg.slice(data).decode("utf-8", errors="replace")
            print(f"{i:>3}  {'-':<10} {'-':<7} {raw!r:>24}  [{seg.start},{seg.end})")
    print("types:", res.counts_by_type())
    return res


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Dump pre-lexer tokens and spans.")
    ap.add_argument("text", nargs="?", default=None, help="text to scan (default: read stdin lines)")
    ap.add_argument("--config", default="configs/default.yaml", help="YAML config path")
    ap.add_argument("--json", action="store_true", help="print JSON instead of a table")
    ap.add_argument("--trace", action="store_true", help="append trace rows to the configured JSONL path")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    cfg = load_config(args.config)
    apply_env_overrides(cfg)
    if args.trace:
        cfg.traces.enabled = True
    pt = PreTokenizer(cfg)
    _LOG.info("rules=%s boundaries=%s", ",".join(pt.rule_names), cfg.pretokenizer.emit_boundaries)

    lines = [args.text] if args.text is not None else [ln.rstrip("\n") for ln in sys.stdin]
    for q in lines:
        if not q:
            continue
        if args.text is None and not args.json:
            print("Q:", q)
        res = show(pt, q, as_json=args.json)
        if cfg.traces.enabled:
            emit_trace(trace_row(q, res), str(cfg.traces.path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
