from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StringFunctionError(Exception):
    """Base error envelope for the string function library."""

    code: str
    message: str
    function: Optional[str] = None
    argument: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.function:
            parts.append(self.function)
        if self.argument:
            parts.append(self.argument)
        loc = ":".join(parts) if parts else "<string>"
        return f"{loc}: {self.code}: {self.message}"


class ArgumentError(StringFunctionError):
    """Malformed call shape (bad limit, empty pattern, wrong argument type)."""


class MatcherContractError(StringFunctionError):
    """A matcher capability returned a structurally invalid result."""


class ReplacementFunctionError(StringFunctionError):
    """A replacement function returned something other than a string."""


class ConversionError(StringFunctionError):
    pass
