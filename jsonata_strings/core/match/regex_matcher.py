from __future__ import annotations

import re
from typing import Any, Optional

from jsonata_strings.core.errors import ArgumentError
from jsonata_strings.core.model import MatcherFn


FLAG_MAP: dict[str, int] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
}


def parse_regex_literal(text: str) -> tuple[str, str]:
    """Split a `/source/flags` literal into (source, flags).

    Text that is not slash-delimited is taken as a bare source with no flags.
    """
    if len(text) >= 2 and text.startswith("/"):
        close = text.rfind("/")
        if close > 0:
            return text[1:close], text[close + 1 :]
    return text, ""


def compile_matcher(source: str, flags: str = "") -> MatcherFn:
    """Build a matcher capability backed by Python's `re` module.

    The returned callable takes the subject and yields the first match; each
    match carries a `next` continuation that resumes the search after it.
    """
    re_flags = 0
    for f in flags:
        if f not in FLAG_MAP:
            raise ArgumentError(
                code="E_INVALID_REGEX",
                message=f"unsupported regex flag: {f!r} (choose from: {', '.join(sorted(FLAG_MAP))})",
                function="regex",
                argument="flags",
            )
        re_flags |= FLAG_MAP[f]

    if source == "":
        raise ArgumentError(
            code="E_INVALID_REGEX",
            message="regular expression must not be empty",
            function="regex",
            argument="pattern",
        )

    try:
        rx = re.compile(source, re_flags)
    except re.error as e:
        raise ArgumentError(
            code="E_INVALID_REGEX",
            message=f"invalid regular expression: {e}",
            function="regex",
            argument="pattern",
        ) from e

    def search(subject: str, pos: int) -> Optional[dict[str, Any]]:
        if pos > len(subject):
            return None
        m = rx.search(subject, pos)
        if m is None:
            return None

        # Step past empty matches so the search always moves forward.
        next_pos = m.end() if m.end() > m.start() else m.end() + 1
        return {
            "match": m.group(0),
            "start": m.start(),
            "end": m.end(),
            "groups": [g if g is not None else "" for g in m.groups()],
            "next": lambda: search(subject, next_pos),
        }

    def matcher(subject: str) -> Optional[dict[str, Any]]:
        return search(subject, 0)

    return matcher


def matcher_from_literal(text: str) -> MatcherFn:
    source, flags = parse_regex_literal(text)
    return compile_matcher(source, flags)
