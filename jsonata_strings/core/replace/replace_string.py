from __future__ import annotations

from typing import Any, Optional

from jsonata_strings.core.args.classify import (
    classify_pattern,
    classify_replacement,
    require_string,
    validate_limit,
)
from jsonata_strings.core.errors import ArgumentError, ReplacementFunctionError
from jsonata_strings.core.match.extract_matches import extract_matches
from jsonata_strings.core.model import (
    FunctionReplacement,
    LiteralPattern,
    LiteralReplacement,
    MatcherFn,
    MatchRecord,
    Replacement,
    ReplacerFn,
)
from jsonata_strings.core.replace.expand_tokens import expand_replacement


def replace(subject: str, pattern: Any, replacement: Any, limit: Optional[Any] = None) -> str:
    """Replace occurrences of a pattern (a string or a regex).

    With a string pattern the replacement must be a string and is inserted
    verbatim. With a regex the replacement may be a string containing `$0`,
    `$N` and `$$` references, or a function taking a match object
    ({match, index, groups}) and returning a string. The optional limit caps
    the number of replacements.
    """
    require_string(subject, function="replace")
    max_count = validate_limit(limit, function="replace")
    p = classify_pattern(pattern, function="replace")
    r = classify_replacement(replacement, function="replace")

    if isinstance(p, LiteralPattern):
        if not isinstance(r, LiteralReplacement):
            raise ArgumentError(
                code="E_REPLACEMENT_TYPE",
                message="replacement of function replace must be a string when pattern is a string",
                function="replace",
                argument="replacement",
            )
        return replace_literal(subject, p.text, r.text, max_count)

    return replace_matches(subject, p.fn, r, max_count)


def replace_literal(subject: str, pattern: str, replacement: str, limit: Optional[int] = None) -> str:
    if pattern == "":
        raise ArgumentError(
            code="E_EMPTY_PATTERN",
            message="pattern of function replace can't be an empty string",
            function="replace",
            argument="pattern",
        )
    return subject.replace(pattern, replacement, -1 if limit is None else limit)


def replace_matches(
    subject: str, matcher: MatcherFn, replacement: Replacement, limit: Optional[int] = None
) -> str:
    matches = extract_matches(matcher, subject, limit, function="replace")

    expandable = isinstance(replacement, LiteralReplacement) and "$" in replacement.text

    # Last match first: spans to the left are untouched when their turn comes.
    out = subject
    for m in reversed(matches):
        if isinstance(replacement, FunctionReplacement):
            text = _call_replacer(replacement.fn, m)
        elif expandable:
            text = expand_replacement(replacement.text, m)
        else:
            text = replacement.text
        out = out[: m.start] + text + out[m.end :]

    return out


def _call_replacer(fn: ReplacerFn, m: MatchRecord) -> str:
    result = fn(m.to_object())
    if not isinstance(result, str):
        raise ReplacementFunctionError(
            code="E_REPLACEMENT_RESULT",
            message="replacement of function replace must be a function that returns a string",
            function="replace",
            argument="replacement",
        )
    return result
