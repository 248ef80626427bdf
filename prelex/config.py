# prelex/config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Priority order of the pattern rules. The dispatcher always walks this order;
# configuration can only switch individual rules off.
RULE_NAMES: tuple[str, ...] = (
    "url",
    "email",
    "date",
    "time",
    "currency",
    "storage",
    "percentage",
    "version",
    "hashtag",
    "mention",
)


class PreTokenizerCfg(BaseModel):
    enabled_rules: list[str] = Field(default_factory=lambda: list(RULE_NAMES), description="rules to try, by name")
    emit_boundaries: bool = True  # one Boundary token per 。！？!? and newline
    extra_boundaries: list[str] = Field(default_factory=list, description="additional single-codepoint boundaries")

    model_config = ConfigDict(extra="ignore")

    @field_validator("enabled_rules")
    @classmethod
    def _known_rules(cls, v: list[str]) -> list[str]:
        out = [str(name).strip().lower() for name in v]
        unknown = [name for name in out if name not in RULE_NAMES]
        if unknown:
            raise ValueError(f"unknown rule name(s): {unknown}; expected a subset of {list(RULE_NAMES)}")
        return out

    @field_validator("extra_boundaries")
    @classmethod
    def _single_codepoints(cls, v: list[str]) -> list[str]:
        for ch in v:
            if len(ch) != 1:
                raise ValueError(f"boundary {ch!r} must be exactly one codepoint")
        return v

    @model_validator(mode="after")
    def _no_duplicates(self) -> PreTokenizerCfg:
        if len(set(self.enabled_rules)) != len(self.enabled_rules):
            raise ValueError(f"enabled_rules contains duplicates: {self.enabled_rules}")
        return self


class TracesCfg(BaseModel):
    enabled: bool = False
    path: Path = Path("artifacts/logs/pretokens.jsonl")

    model_config = ConfigDict(extra="ignore")


class PreLexCfg(BaseModel):
    pretokenizer: PreTokenizerCfg = Field(default_factory=PreTokenizerCfg)
    traces: TracesCfg = Field(default_factory=TracesCfg)

    model_config = ConfigDict(extra="ignore")


# --- Back-compat for flat YAML ---
_FLAT_KEYS = {"enabled_rules", "emit_boundaries", "extra_boundaries"}


def _normalize_data(data: dict[str, Any]) -> dict[str, Any]:
    if not data:
        return {}
    data = dict(data)
    flat = {k: data.pop(k) for k in list(data.keys()) if k in _FLAT_KEYS}
    if flat:
        data.setdefault("pretokenizer", {}).update(flat)
    return data


def load_config(path: str | None = "configs/default.yaml") -> PreLexCfg:
    data: dict[str, Any] = {}
    if path:
        p = Path(path)
        if p.exists():
            try:
                with p.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise RuntimeError(f"Failed to parse YAML at {path}: {e}") from e
    if not isinstance(data, dict):
        raise RuntimeError(f"Config at {path} must be a mapping, got {type(data).__name__}")
    return PreLexCfg(**_normalize_data(data))


# --- env overrides + validation ---

def _env_bool(val: str) -> bool:
    return str(val).strip().lower() in ("1", "true", "yes", "y", "on")


def apply_env_overrides(cfg: PreLexCfg) -> None:
    """
    Override knobs from environment variables.
    Supported:
      PRELEX_EMIT_BOUNDARIES   1/0, true/false
      PRELEX_DISABLED_RULES    comma list of rule names to switch off (e.g. "hashtag,mention")
      PRELEX_TRACES            1/0, write JSONL trace rows from scripts
      PRELEX_TRACE_PATH        where trace rows go
    Unknown rule names in PRELEX_DISABLED_RULES are ignored.
    """
    raw = os.getenv("PRELEX_EMIT_BOUNDARIES")
    if raw is not None:
        cfg.pretokenizer.emit_boundaries = _env_bool(raw)

    raw = os.getenv("PRELEX_DISABLED_RULES")
    if raw is not None:
        off = {x.strip().lower() for x in raw.split(",") if x.strip()}
        cfg.pretokenizer.enabled_rules = [r for r in cfg.pretokenizer.enabled_rules if r not in off]

    raw = os.getenv("PRELEX_TRACES")
    if raw is not None:
        cfg.traces.enabled = _env_bool(raw)

    raw = os.getenv("PRELEX_TRACE_PATH")
    if raw:
        cfg.traces.path = Path(raw)


def validate_config(cfg: PreLexCfg) -> None:
    """
    Sanity checks for configs that were mutated after construction:
      - every enabled rule is known
      - no rule is listed twice
      - extra boundaries are single codepoints
    Raises ValueError with a precise message if violated.
    """
    pt = cfg.pretokenizer
    unknown = [r for r in pt.enabled_rules if r not in RULE_NAMES]
    if unknown:
        raise ValueError(f"Config invalid: unknown rule(s) {unknown}")
    if len(set(pt.enabled_rules)) != len(pt.enabled_rules):
        raise ValueError(f"Config invalid: duplicate rule(s) in {pt.enabled_rules}")
    bad = [ch for ch in pt.extra_boundaries if len(ch) != 1]
    if bad:
        raise ValueError(f"Config invalid: extra_boundaries must be single codepoints, got {bad}")
