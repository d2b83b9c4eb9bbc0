from __future__ import annotations

from typing import Any, Optional

from jsonata_strings.core.args.classify import classify_pattern, require_string, validate_limit
from jsonata_strings.core.errors import ArgumentError
from jsonata_strings.core.match.extract_matches import extract_matches
from jsonata_strings.core.model import LiteralPattern, MatcherPattern


def contains(subject: str, pattern: Any) -> bool:
    """Return True if the subject matches the pattern (a string or a regex)."""
    require_string(subject, function="contains")
    p = classify_pattern(pattern, function="contains")

    if isinstance(p, LiteralPattern):
        return p.text in subject

    # One match is enough; the capability is not asked for a second.
    return len(extract_matches(p.fn, subject, 1, function="contains")) > 0


def split(subject: str, separator: Any, limit: Optional[Any] = None) -> list[str]:
    """Split a string on a separator (a string or a regex).

    An empty string separator yields one element per character. The optional
    limit caps the number of substrings returned.
    """
    require_string(subject, function="split")
    max_parts = validate_limit(limit, function="split")
    sep = classify_pattern(separator, function="split", argument="separator")

    if isinstance(sep, LiteralPattern):
        parts = list(subject) if sep.text == "" else subject.split(sep.text)
    else:
        # Every match is enumerated before truncating to the limit.
        parts = []
        pos = 0
        for m in extract_matches(sep.fn, subject, None, function="split"):
            parts.append(subject[pos : m.start])
            pos = m.end
        parts.append(subject[pos:])

    if max_parts is not None and max_parts < len(parts):
        parts = parts[:max_parts]

    return parts


def match(subject: str, pattern: Any, limit: Optional[Any] = None) -> list[dict[str, Any]]:
    """Describe the matches of a regex in the subject.

    Each item has `match` (matched text), `index` (start offset) and `groups`
    (captured groups). The optional limit caps the number of matches.
    """
    require_string(subject, function="match")
    max_matches = validate_limit(limit, function="match")
    p = classify_pattern(pattern, function="match")

    if not isinstance(p, MatcherPattern):
        raise ArgumentError(
            code="E_PATTERN_TYPE",
            message="function match takes a regex, not a string",
            function="match",
            argument="pattern",
        )

    return [m.to_object() for m in extract_matches(p.fn, subject, max_matches, function="match")]
