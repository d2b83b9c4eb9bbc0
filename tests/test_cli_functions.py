import json

from typer.testing import CliRunner

from jsonata_strings.cli import app

runner = CliRunner()


def test_cli_contains_literal():
    r = runner.invoke(app, ["contains", "hello world", "o w"])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "true"


def test_cli_contains_regex_with_flags():
    r = runner.invoke(app, ["contains", "hello", "/HELLO/i", "--regex"])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "true"


def test_cli_split_regex_lines():
    r = runner.invoke(app, ["split", "a,b;c", "/[,;]/", "--regex"])
    assert r.exit_code == 0, r.output
    assert r.stdout.splitlines() == ["a", "b", "c"]


def test_cli_split_json_with_limit():
    r = runner.invoke(app, ["split", "a,b,c", ",", "--limit", "2", "--format", "json"])
    assert r.exit_code == 0, r.output
    payload = json.loads(r.stdout)
    assert payload["command"] == "split"
    assert payload["ok"] is True
    assert payload["result"] == ["a", "b"]
    assert payload["errors"] == []


def test_cli_match_text():
    r = runner.invoke(app, ["match", "ab12cd3", "/([a-z]+)([0-9]+)/"])
    assert r.exit_code == 0, r.output
    assert r.stdout.splitlines() == ['0\tab12\t["ab", "12"]', '4\tcd3\t["cd", "3"]']


def test_cli_replace_regex_tokens():
    r = runner.invoke(app, ["replace", "John Smith", r"/(\w+) (\w+)/", "$2, $1", "--regex"])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "Smith, John"


def test_cli_replace_literal_limit():
    r = runner.invoke(app, ["replace", "aaa", "a", "b", "--limit", "2"])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "bba"


def test_cli_negative_limit_is_error():
    r = runner.invoke(app, ["replace", "aaa", "a", "b", "--limit", "-1"])
    assert r.exit_code == 2
    assert "E_NEGATIVE_LIMIT" in r.output


def test_cli_error_json_payload():
    r = runner.invoke(app, ["replace", "abc", "", "x", "--format", "json"])
    assert r.exit_code == 2
    payload = json.loads(r.stdout)
    assert payload["ok"] is False
    assert payload["result"] is None
    assert payload["error_count"] == 1
    assert payload["errors"][0]["code"] == "E_EMPTY_PATTERN"
    assert payload["errors"][0]["kind"] == "ArgumentError"


def test_cli_unknown_format():
    r = runner.invoke(app, ["contains", "abc", "b", "--format", "xml"])
    assert r.exit_code == 2
    assert "E_UNKNOWN_FORMAT" in r.output


def test_cli_invalid_regex():
    r = runner.invoke(app, ["match", "abc", "/(/"])
    assert r.exit_code == 2
    assert "E_INVALID_REGEX" in r.output


def test_cli_call_function():
    r = runner.invoke(app, ["call", "substringAfter", "key=value", "="])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "value"


def test_cli_call_decodes_json_arguments():
    r = runner.invoke(app, ["call", "pad", "ab", "4", "#", "--format", "json"])
    assert r.exit_code == 0, r.output
    assert json.loads(r.stdout)["result"] == "ab##"


def test_cli_call_unknown_function():
    r = runner.invoke(app, ["call", "reverse", "abc"])
    assert r.exit_code == 2
    assert "E_UNKNOWN_FUNCTION" in r.output


def test_cli_functions_lists_library():
    r = runner.invoke(app, ["functions"])
    assert r.exit_code == 0, r.output
    assert "Functions:" in r.stdout
    assert "- replace:" in r.stdout
    assert "- encodeUrlComponent" in r.stdout


def test_cli_log_level_debug_still_succeeds():
    r = runner.invoke(app, ["--log-level", "debug", "match", "abc", "b"])
    assert r.exit_code == 0, r.output
    assert "1\tb\t[]" in r.output


def test_cli_unknown_log_level():
    r = runner.invoke(app, ["--log-level", "loud", "functions"])
    assert r.exit_code == 2
    assert "E_UNKNOWN_LOG_LEVEL" in r.output


def test_cli_call_missing_argument():
    r = runner.invoke(app, ["call", "trim"])
    assert r.exit_code == 2
    assert "E_INVALID_ARGUMENT" in r.output


def test_cli_call_join_with_bad_separator():
    r = runner.invoke(app, ["call", "join", '["a","b"]', "5"])
    assert r.exit_code == 2
    assert "E_INVALID_ARGUMENT" in r.output
