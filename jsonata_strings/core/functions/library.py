from __future__ import annotations

import inspect
from typing import Any, Callable

from jsonata_strings.core.errors import ArgumentError
from jsonata_strings.core.match.match_string import contains, match, split
from jsonata_strings.core.replace.replace_string import replace
from jsonata_strings.core.text.encoding import (
    base64_decode,
    base64_encode,
    decode_url,
    decode_url_component,
    encode_url,
    encode_url_component,
)
from jsonata_strings.core.text.helpers import (
    join,
    pad,
    substring,
    substring_after,
    substring_before,
    to_string,
    trim,
)


# Keyed by the names scripts call them by.
FUNCTIONS: dict[str, Callable[..., Any]] = {
    "contains": contains,
    "split": split,
    "match": match,
    "replace": replace,
    "string": to_string,
    "substring": substring,
    "substringBefore": substring_before,
    "substringAfter": substring_after,
    "pad": pad,
    "trim": trim,
    "join": join,
    "base64encode": base64_encode,
    "base64decode": base64_decode,
    "encodeUrl": encode_url,
    "encodeUrlComponent": encode_url_component,
    "decodeUrl": decode_url,
    "decodeUrlComponent": decode_url_component,
}


def call_function(name: str, *args: Any) -> Any:
    fn = FUNCTIONS.get(name)
    if fn is None:
        raise ArgumentError(
            code="E_UNKNOWN_FUNCTION",
            message=f"unknown function: {name} (choose one of: {', '.join(sorted(FUNCTIONS))})",
            function=name,
        )
    try:
        inspect.signature(fn).bind(*args)
    except TypeError as e:
        raise ArgumentError(
            code="E_INVALID_ARGUMENT",
            message=f"wrong arguments for function {name}: {e}",
            function=name,
        ) from e
    return fn(*args)


def describe_functions() -> list[tuple[str, str]]:
    """(name, first docstring line) for every library function, sorted by name."""
    out: list[tuple[str, str]] = []
    for name in sorted(FUNCTIONS):
        doc = (FUNCTIONS[name].__doc__ or "").strip().splitlines()
        out.append((name, doc[0] if doc else ""))
    return out
