from __future__ import annotations

import json
import math
import re
from typing import Any, Optional

from jsonata_strings.core.args.classify import require_string
from jsonata_strings.core.errors import ArgumentError, ConversionError


def to_string(value: Any) -> str:
    """Convert a JSONata value to a string.

    Strings are returned unchanged and functions become empty strings.
    Everything else is rendered as compact JSON, with integral numbers
    written without a fractional part.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if callable(value):
        return ""
    return json.dumps(_normalize_numbers(value), separators=(",", ":"), ensure_ascii=False)


def _normalize_numbers(value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ConversionError(
                code="E_NAN_INF",
                message="number cannot be represented as a JSON string (NaN or Infinity)",
                function="string",
                argument="value",
            )
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, dict):
        return {str(k): _normalize_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(v) for v in value]
    if callable(value):
        return ""
    return value


def substring(s: str, start: int, length: Optional[int] = None) -> str:
    """Return the characters of s from start (negative counts from the end).

    The optional length caps how many characters are returned.
    """
    require_string(s, function="substring")
    start = _as_int(start, function="substring", argument="start")
    if length is not None:
        length = _as_int(length, function="substring", argument="length")

    if (length is not None and length <= 0) or start >= len(s):
        return ""

    if start < 0:
        start = max(start + len(s), 0)

    s = s[start:]
    if length is not None:
        s = s[:length]
    return s


def substring_before(s: str, sub: str) -> str:
    require_string(s, function="substringBefore")
    require_string(sub, function="substringBefore", argument="chars")
    i = s.find(sub)
    return s[:i] if i >= 0 else s


def substring_after(s: str, sub: str) -> str:
    require_string(s, function="substringAfter")
    require_string(sub, function="substringAfter", argument="chars")
    i = s.find(sub)
    return s[i + len(sub) :] if i >= 0 else s


def pad(s: str, width: int, chars: Optional[str] = None) -> str:
    """Pad s to abs(width) characters: right for positive width, left for negative."""
    require_string(s, function="pad")
    width = _as_int(width, function="pad", argument="width")

    padlen = abs(width) - len(s)
    if padlen <= 0:
        return s

    if chars is not None:
        require_string(chars, function="pad", argument="chars")
    ch = chars or " "
    padding = (ch * padlen)[:padlen]

    if width < 0:
        return padding + s
    return s + padding


_WHITESPACE = re.compile(r"\s+")


def trim(s: str) -> str:
    """Collapse runs of whitespace to a single space and strip both ends."""
    require_string(s, function="trim")
    return _WHITESPACE.sub(" ", s).strip(" ")


def join(values: Any, separator: Optional[str] = None) -> str:
    if isinstance(values, str):
        return values
    if not isinstance(values, (list, tuple)) or not all(isinstance(v, str) for v in values):
        raise ArgumentError(
            code="E_INVALID_ARGUMENT",
            message="function join takes an array of strings",
            function="join",
            argument="array",
        )
    if separator is not None:
        require_string(separator, function="join", argument="separator")
    return (separator or "").join(values)


def _as_int(v: Any, *, function: str, argument: str) -> int:
    if isinstance(v, bool) or not isinstance(v, (int, float)) or (
        isinstance(v, float) and not v.is_integer()
    ):
        raise ArgumentError(
            code="E_INVALID_ARGUMENT",
            message=f"{argument} of function {function} must be an integer",
            function=function,
            argument=argument,
        )
    return int(v)
