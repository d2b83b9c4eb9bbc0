from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from jsonata_strings.core.errors import ArgumentError
from jsonata_strings.core.match.regex_matcher import matcher_from_literal


DEFAULT_PATTERNS: dict[str, str] = {
    "whitespace": r"/\s+/",
    "digits": r"/[0-9]+/",
    "word": r"/\w+/",
    "email": r"/([\w.+-]+)@([\w-]+\.[\w.-]+)/i",
}


class PatternConfigError(ValueError):
    pass


def load_pattern_file(path: str | Path) -> dict[str, str]:
    """Load named regex patterns from a YAML file.

    Format:
      <name>: "/source/flags"

    Every pattern is compiled once here so that a bad entry is reported
    against the file rather than at first use.
    """
    p = Path(path)
    raw: Any = yaml.safe_load(p.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise PatternConfigError("pattern file must be a mapping of name -> regex")

    out: dict[str, str] = {}
    for k, v in raw.items():
        if not isinstance(k, str) or not k.strip():
            raise PatternConfigError("pattern names must be non-empty strings")
        if not isinstance(v, str) or not v.strip():
            raise PatternConfigError(f"pattern '{k}' must be a non-empty string")
        try:
            matcher_from_literal(v)
        except ArgumentError as e:
            raise PatternConfigError(f"pattern '{k}': {e.message}") from e
        out[k.strip()] = v
    return out


def merged_patterns(overrides: dict[str, str] | None = None) -> dict[str, str]:
    """Return DEFAULT_PATTERNS merged with optional overrides (same name wins)."""
    merged = dict(DEFAULT_PATTERNS)
    if overrides:
        merged.update(overrides)
    return merged


def load_and_merge(pattern_file: str | None) -> dict[str, str]:
    if not pattern_file:
        return merged_patterns()
    return merged_patterns(load_pattern_file(pattern_file))
