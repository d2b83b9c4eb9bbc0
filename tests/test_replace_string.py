import pytest

from jsonata_strings.core.errors import (
    ArgumentError,
    MatcherContractError,
    ReplacementFunctionError,
)
from jsonata_strings.core.match.regex_matcher import compile_matcher
from jsonata_strings.core.replace.replace_string import replace
from scripted_matcher import ScriptedMatcher, find_all


def test_literal_replace_is_bounded_left_to_right():
    assert replace("aaa", "a", "b", 2) == "bba"
    assert replace("aaa", "a", "b") == "bbb"
    assert replace("aaa", "a", "b", 0) == "aaa"


def test_literal_replace_does_not_expand_tokens():
    assert replace("a.b.c", ".", "$0") == "a$0b$0c"


def test_literal_replace_rejects_empty_pattern():
    with pytest.raises(ArgumentError) as ei:
        replace("abc", "", "x")
    assert ei.value.code == "E_EMPTY_PATTERN"


def test_literal_pattern_with_function_replacement_is_rejected():
    with pytest.raises(ArgumentError) as ei:
        replace("abc", "b", lambda m: "x")
    assert ei.value.code == "E_REPLACEMENT_TYPE"


def test_negative_limit_is_rejected():
    with pytest.raises(ArgumentError) as ei:
        replace("abc", "b", "x", -2)
    assert ei.value.code == "E_NEGATIVE_LIMIT"


def test_pattern_must_be_string_or_matcher():
    with pytest.raises(ArgumentError) as ei:
        replace("abc", 1, "x")
    assert ei.value.code == "E_PATTERN_TYPE"


def test_regex_replace_expands_tokens():
    m = compile_matcher(r"(\w+)\s(\w+)")
    assert replace("John Smith", m, "$2, $1") == "Smith, John"


def test_regex_replace_verbatim_without_dollar():
    assert replace("a1b2", compile_matcher("[0-9]"), "#") == "a#b#"


def test_regex_replace_with_function():
    m = compile_matcher("[ac]")
    assert replace("abc", m, lambda x: x["match"].upper() + str(x["index"])) == "A0bC2"


def test_function_receives_match_object():
    seen = []

    def fn(obj):
        seen.append(obj)
        return ""

    replace("k=v", compile_matcher("(\\w)=(\\w)"), fn)
    assert seen == [{"match": "k=v", "index": 0, "groups": ["k", "v"]}]


def test_function_must_return_string():
    with pytest.raises(ReplacementFunctionError) as ei:
        replace("abc", compile_matcher("b"), lambda m: 42)
    assert ei.value.code == "E_REPLACEMENT_RESULT"


def test_reverse_order_keeps_earlier_offsets():
    subject = "abcdefghijklmnopqrst"
    m = ScriptedMatcher([(2, 4, []), (10, 12, [])])
    repl = {2: "<1>", 10: "<<<<< much longer >>>>>"}
    out = replace(subject, m, lambda x: repl[x["index"]])
    assert out.index("<1>") == 2
    assert out == "ab<1>efghij<<<<< much longer >>>>>mnopqrst"


def test_regex_replace_limit():
    m = find_all("a-b-c-d", "-")
    assert replace("a-b-c-d", m, "+", 2) == "a+b+c-d"
    assert m.calls == 2


def test_regex_replace_limit_zero_leaves_subject():
    m = find_all("a-b", "-")
    assert replace("a-b", m, "+", 0) == "a-b"
    assert m.calls == 1


def test_contract_violation_produces_no_output():
    m = ScriptedMatcher([(0, 1, []), (2, 3, [])], patch={1: {"groups": ...}})
    with pytest.raises(MatcherContractError):
        replace("a-b", m, "x")


def test_multibyte_offsets_are_characters():
    assert replace("żółw żółw", compile_matcher("ół"), "o") == "żow żow"
