from __future__ import annotations

from typing import Any, Optional

from jsonata_strings.core.errors import ArgumentError
from jsonata_strings.core.model import (
    FunctionReplacement,
    LiteralPattern,
    LiteralReplacement,
    MatcherPattern,
    Pattern,
    Replacement,
)


def classify_pattern(value: Any, *, function: str, argument: str = "pattern") -> Pattern:
    """Resolve a pattern argument to LiteralPattern or MatcherPattern.

    Strings are literal patterns; any other callable is a matcher capability.
    """
    if isinstance(value, str):
        return LiteralPattern(value)
    if callable(value):
        return MatcherPattern(value)
    raise ArgumentError(
        code="E_PATTERN_TYPE",
        message=f"function {function} takes a string or a regex, got {_type_name(value)}",
        function=function,
        argument=argument,
    )


def classify_replacement(
    value: Any, *, function: str = "replace", argument: str = "replacement"
) -> Replacement:
    if isinstance(value, str):
        return LiteralReplacement(value)
    if callable(value):
        return FunctionReplacement(value)
    raise ArgumentError(
        code="E_REPLACEMENT_TYPE",
        message=f"{argument} of function {function} must be a string or a function, got {_type_name(value)}",
        function=function,
        argument=argument,
    )


def validate_limit(value: Any, *, function: str, argument: str = "limit") -> Optional[int]:
    """Return the limit as an int, or None when unset.

    JSONata numbers are floats, so integral floats are accepted.
    """
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ArgumentError(
            code="E_INVALID_LIMIT",
            message=f"{argument} of function {function} must be a number, got {_type_name(value)}",
            function=function,
            argument=argument,
        )

    if isinstance(value, float) and not value.is_integer():
        raise ArgumentError(
            code="E_INVALID_LIMIT",
            message=f"{argument} of function {function} must be an integer, got {value}",
            function=function,
            argument=argument,
        )

    if value < 0:
        raise ArgumentError(
            code="E_NEGATIVE_LIMIT",
            message=f"{argument} of function {function} must evaluate to a positive number",
            function=function,
            argument=argument,
        )

    return int(value)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def require_string(value: Any, *, function: str, argument: str = "str") -> str:
    if not isinstance(value, str):
        raise ArgumentError(
            code="E_INVALID_ARGUMENT",
            message=f"{argument} of function {function} must be a string, got {_type_name(value)}",
            function=function,
            argument=argument,
        )
    return value
