from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union


# A matcher capability is called with the subject on the first call and with
# no argument on every continuation. None means the sequence is exhausted.
MatcherFn = Callable[..., Optional[Mapping[str, Any]]]
ReplacerFn = Callable[[dict[str, Any]], Any]


@dataclass(frozen=True)
class LiteralPattern:
    text: str


@dataclass(frozen=True)
class MatcherPattern:
    fn: MatcherFn


Pattern = Union[LiteralPattern, MatcherPattern]


@dataclass(frozen=True)
class LiteralReplacement:
    text: str


@dataclass(frozen=True)
class FunctionReplacement:
    fn: ReplacerFn


Replacement = Union[LiteralReplacement, FunctionReplacement]


@dataclass(frozen=True)
class MatchRecord:
    value: str
    start: int
    end: int  # exclusive
    groups: tuple[str, ...]

    def to_object(self) -> dict[str, Any]:
        """Caller-visible shape, as returned by match() and passed to replacement functions."""
        return {
            "match": self.value,
            "index": self.start,
            "groups": list(self.groups),
        }
