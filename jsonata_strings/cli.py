from __future__ import annotations

import json
from typing import Any, Callable, Optional

import typer

from jsonata_strings.core.config.pattern_config import PatternConfigError, load_and_merge
from jsonata_strings.core.errors import ArgumentError, StringFunctionError
from jsonata_strings.core.functions.library import call_function, describe_functions
from jsonata_strings.core.log.log_setup import logger, setup_console_logging
from jsonata_strings.core.match.match_string import contains, match, split
from jsonata_strings.core.match.regex_matcher import matcher_from_literal
from jsonata_strings.core.replace.replace_string import replace

app = typer.Typer(add_completion=False, no_args_is_help=True)

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class PatternFileNotFound(Exception):
    pass


@app.callback()
def _callback(
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for stderr output"),
) -> None:
    """jstr: JSONata string functions from the command line."""
    if log_level.upper() not in LOG_LEVELS:
        _print_errors(
            [
                ArgumentError(
                    code="E_UNKNOWN_LOG_LEVEL",
                    message=f"unknown log level: {log_level} (choose one of: {', '.join(LOG_LEVELS)})",
                    argument="log_level",
                )
            ]
        )
        raise typer.Exit(code=2)
    setup_console_logging(log_level)


@app.command("contains")
def contains_cmd(
    text: str = typer.Argument(..., help="Subject string"),
    pattern: str = typer.Argument(..., help="Substring, or regex with --regex"),
    regex: bool = typer.Option(False, "--regex", help="Treat PATTERN as /regex/flags or @name"),
    pattern_file: Optional[str] = typer.Option(None, "--pattern-file", help="YAML file of named patterns"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Test whether TEXT contains PATTERN."""
    _run(
        "contains",
        format,
        lambda: contains(text, _resolve_pattern(pattern, regex=regex, pattern_file=pattern_file)),
    )


@app.command("split")
def split_cmd(
    text: str = typer.Argument(..., help="Subject string"),
    separator: str = typer.Argument(..., help="Separator, or regex with --regex"),
    regex: bool = typer.Option(False, "--regex", help="Treat SEPARATOR as /regex/flags or @name"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of segments"),
    pattern_file: Optional[str] = typer.Option(None, "--pattern-file", help="YAML file of named patterns"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Split TEXT on SEPARATOR (one segment per line)."""
    _run(
        "split",
        format,
        lambda: split(text, _resolve_pattern(separator, regex=regex, pattern_file=pattern_file), limit),
    )


@app.command("match")
def match_cmd(
    text: str = typer.Argument(..., help="Subject string"),
    pattern: str = typer.Argument(..., help="Regex as /source/flags, bare source, or @name"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of matches"),
    pattern_file: Optional[str] = typer.Option(None, "--pattern-file", help="YAML file of named patterns"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """List regex matches in TEXT (index, match, groups per line)."""
    _run(
        "match",
        format,
        lambda: match(text, _resolve_pattern(pattern, regex=True, pattern_file=pattern_file), limit),
    )


@app.command("replace")
def replace_cmd(
    text: str = typer.Argument(..., help="Subject string"),
    pattern: str = typer.Argument(..., help="Substring, or regex with --regex"),
    replacement: str = typer.Argument(..., help="Replacement; with --regex may use $0, $N and $$"),
    regex: bool = typer.Option(False, "--regex", help="Treat PATTERN as /regex/flags or @name"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of replacements"),
    pattern_file: Optional[str] = typer.Option(None, "--pattern-file", help="YAML file of named patterns"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Replace PATTERN in TEXT with REPLACEMENT."""
    _run(
        "replace",
        format,
        lambda: replace(
            text, _resolve_pattern(pattern, regex=regex, pattern_file=pattern_file), replacement, limit
        ),
    )


@app.command("call")
def call_cmd(
    name: str = typer.Argument(..., help="Function name, e.g. substringBefore"),
    args: Optional[list[str]] = typer.Argument(None, help="Arguments; JSON values are decoded, anything else is a string"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Call any library function by name."""
    values = [_decode_arg(a) for a in (args or [])]
    _run("call", format, lambda: call_function(name, *values))


@app.command("patterns")
def patterns_cmd(
    pattern_file: Optional[str] = typer.Option(None, "--pattern-file", help="YAML file to add/override patterns"),
) -> None:
    """List named regex patterns usable as @name."""
    try:
        patterns = _load_patterns(pattern_file)
    except PatternFileNotFound:
        raise typer.Exit(code=1)
    except StringFunctionError as e:
        _print_errors([e])
        raise typer.Exit(code=2)

    typer.echo("Patterns:")
    for name in sorted(patterns.keys()):
        typer.echo(f"- {name}: {patterns[name]}")


@app.command("functions")
def functions_cmd() -> None:
    """List the string function library."""
    typer.echo("Functions:")
    for name, summary in describe_functions():
        typer.echo(f"- {name}: {summary}" if summary else f"- {name}")


def _run(command: str, format: str, thunk: Callable[[], Any]) -> None:
    if format not in ("text", "json"):
        _print_errors(
            [
                ArgumentError(
                    code="E_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: text, json)",
                    function=command,
                    argument="format",
                )
            ]
        )
        raise typer.Exit(code=2)

    def _emit_json(ok: bool, *, exit_code: int, result: Any, errors: list[StringFunctionError]) -> None:
        payload = {
            "tool": "jstr",
            "command": command,
            "ok": ok,
            "result": result,
            "error_count": len(errors),
            "errors": [_to_item(e) for e in errors],
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
        raise typer.Exit(code=exit_code)

    try:
        result = thunk()
    except PatternFileNotFound:
        raise typer.Exit(code=1)
    except StringFunctionError as e:
        logger.debug("command.failed", command=command, code=e.code)
        if format == "json":
            _emit_json(False, exit_code=2, result=None, errors=[e])
        _print_errors([e])
        raise typer.Exit(code=2)

    if format == "json":
        _emit_json(True, exit_code=0, result=result, errors=[])

    _echo_text(command, result)


def _echo_text(command: str, result: Any) -> None:
    if isinstance(result, bool):
        typer.echo("true" if result else "false")
    elif isinstance(result, str):
        typer.echo(result)
    elif command == "split":
        for segment in result:
            typer.echo(segment)
    elif command == "match":
        for m in result:
            typer.echo(f"{m['index']}\t{m['match']}\t{json.dumps(m['groups'], ensure_ascii=False)}")
    else:
        typer.echo(json.dumps(result, ensure_ascii=False))


def _resolve_pattern(pattern: str, *, regex: bool, pattern_file: Optional[str]) -> Any:
    if not regex:
        return pattern

    if pattern.startswith("@"):
        patterns = _load_patterns(pattern_file)
        name = pattern[1:]
        if name not in patterns:
            raise ArgumentError(
                code="E_UNKNOWN_PATTERN",
                message=f"unknown pattern: {name} (choose one of: {', '.join(sorted(patterns))})",
                argument="pattern",
            )
        pattern = patterns[name]

    return matcher_from_literal(pattern)


def _load_patterns(pattern_file: Optional[str]) -> dict[str, str]:
    try:
        return load_and_merge(pattern_file)
    except FileNotFoundError:
        _print_errors(
            [
                ArgumentError(
                    code="E_PATTERN_FILE_NOT_FOUND",
                    message=f"pattern file not found: {pattern_file}",
                    argument="pattern_file",
                )
            ]
        )
        raise PatternFileNotFound(pattern_file)
    except PatternConfigError as e:
        raise ArgumentError(
            code="E_PATTERN_FILE_INVALID",
            message=str(e),
            argument="pattern_file",
        ) from e


def _decode_arg(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _to_item(e: StringFunctionError) -> dict:
    return {
        "code": e.code,
        "message": e.message,
        "function": e.function,
        "argument": e.argument,
        "kind": type(e).__name__,
    }


def _print_errors(errors: list[StringFunctionError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.function or "", e.argument or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="jstr")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
