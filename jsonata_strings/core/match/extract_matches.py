from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterator, Optional

from jsonata_strings.core.errors import MatcherContractError
from jsonata_strings.core.log.log_setup import logger
from jsonata_strings.core.model import MatcherFn, MatchRecord


def iter_matches(
    matcher: MatcherFn, subject: str, *, function: str = "match"
) -> Iterator[MatchRecord]:
    """Lazily drain a matcher capability.

    The capability is called with the subject once; every following match is
    requested by calling the continuation carried by the previous result, and
    only when the consumer asks for it. A malformed result raises
    MatcherContractError.
    """

    result = matcher(subject)
    prev_end = 0
    count = 0

    while result is not None:
        record, next_fn = _parse_match_result(
            result, subject=subject, prev_end=prev_end, index=count, function=function
        )
        yield record
        prev_end = record.end
        count += 1
        result = next_fn()

    logger.debug("matcher.exhausted", function=function, matches=count)


def extract_matches(
    matcher: MatcherFn,
    subject: str,
    limit: Optional[int] = None,
    *,
    function: str = "match",
) -> list[MatchRecord]:
    """Collect up to `limit` matches (all of them when limit is None).

    With limit 0 the capability is still invoked once, and nothing is kept.
    Once `limit` matches are collected no further continuation is invoked.
    Callers validate the limit.
    """

    matches = iter_matches(matcher, subject, function=function)

    if limit is None:
        return list(matches)

    if limit == 0:
        next(matches, None)
        matches.close()
        return []

    collected: list[MatchRecord] = []
    for record in matches:
        collected.append(record)
        if len(collected) >= limit:
            break
    matches.close()
    return collected


def _parse_match_result(
    result: Any, *, subject: str, prev_end: int, index: int, function: str
) -> tuple[MatchRecord, Callable[[], Any]]:
    def violation(field: str, message: str) -> MatcherContractError:
        logger.debug("matcher.contract_violation", function=function, match=index, field=field)
        return MatcherContractError(
            code="E_MATCHER_CONTRACT",
            message=message,
            function=function,
            argument=f"matches[{index}].{field}" if field else f"matches[{index}]",
        )

    if not isinstance(result, Mapping):
        raise violation("", "match function must return an object")

    value = result.get("match")
    if not isinstance(value, str):
        raise violation("match", "match function must return an object with a string value named 'match'")

    start = _as_offset(result.get("start"))
    if start is None:
        raise violation("start", "match function must return an object with a number value named 'start'")

    end = _as_offset(result.get("end"))
    if end is None:
        raise violation("end", "match function must return an object with a number value named 'end'")

    groups = result.get("groups")
    if (
        isinstance(groups, (str, bytes))
        or not isinstance(groups, Sequence)
        or not all(isinstance(g, str) for g in groups)
    ):
        raise violation("groups", "match function must return an object with a string array value named 'groups'")

    next_fn = result.get("next")
    if not callable(next_fn):
        raise violation("next", "match function must return an object with a function value named 'next'")

    if not 0 <= start <= end <= len(subject):
        raise violation("span", f"match span [{start}, {end}) is outside the subject (length {len(subject)})")
    if start < prev_end:
        raise violation("span", f"match starts at {start}, before the end of the previous match ({prev_end})")

    return MatchRecord(value=value, start=start, end=end, groups=tuple(groups)), next_fn


def _as_offset(v: Any) -> Optional[int]:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    if isinstance(v, float) and not v.is_integer():
        return None
    return int(v)
