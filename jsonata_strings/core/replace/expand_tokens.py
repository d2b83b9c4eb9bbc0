from __future__ import annotations

from jsonata_strings.core.model import MatchRecord


def expand_replacement(template: str, record: MatchRecord) -> str:
    """Expand $-references in a replacement string.

    - `$$` is a literal `$`
    - `$0` is the full match
    - `$N` is captured group N (1-based). With a run of digits the longest
      prefix naming an existing group wins, so with 2 groups `$12` is group 1
      followed by a literal `2`. If no prefix names a group, the `$` is kept
      and the digits are left as plain text.
    - any other `$` is kept as-is
    """
    out: list[str] = []
    s = template

    while True:
        pos = s.find("$")
        if pos == -1:
            out.append(s)
            break

        out.append(s[:pos])
        s = s[pos + 1 :]

        if not s:
            out.append("$")
            break

        c = s[0]
        if c == "$" or not _is_digit(c):
            out.append("$")
            if c == "$":
                s = s[1:]
            continue

        if c == "0":
            out.append(record.value)
            s = s[1:]
            continue

        digits = _leading_digits(s)
        consumed = _group_prefix(digits, len(record.groups))
        if consumed == 0:
            out.append("$")
            continue

        out.append(record.groups[int(digits[:consumed]) - 1])
        s = s[consumed:]

    return "".join(out)


def _group_prefix(digits: str, group_count: int) -> int:
    # Longest first; 0 when no prefix names an existing group.
    for n in range(len(digits), 0, -1):
        if 1 <= int(digits[:n]) <= group_count:
            return n
    return 0


def _leading_digits(s: str) -> str:
    n = 0
    while n < len(s) and _is_digit(s[n]):
        n += 1
    return s[:n]


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"
