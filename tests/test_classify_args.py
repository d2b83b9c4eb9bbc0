import pytest

from jsonata_strings.core.args.classify import (
    classify_pattern,
    classify_replacement,
    require_string,
    validate_limit,
)
from jsonata_strings.core.errors import ArgumentError
from jsonata_strings.core.model import (
    FunctionReplacement,
    LiteralPattern,
    LiteralReplacement,
    MatcherPattern,
)


def test_classify_pattern_variants():
    assert classify_pattern("ab", function="split") == LiteralPattern("ab")

    def matcher(subject):
        return None

    p = classify_pattern(matcher, function="split")
    assert isinstance(p, MatcherPattern)
    assert p.fn is matcher


@pytest.mark.parametrize("bad", [None, 3, ["a"], {"match": "a"}])
def test_classify_pattern_rejects_other_types(bad):
    with pytest.raises(ArgumentError) as ei:
        classify_pattern(bad, function="contains")
    assert ei.value.code == "E_PATTERN_TYPE"
    assert str(ei.value).startswith("contains:pattern: E_PATTERN_TYPE:")


def test_classify_replacement_variants():
    assert classify_replacement("x") == LiteralReplacement("x")
    assert isinstance(classify_replacement(lambda m: "y"), FunctionReplacement)
    with pytest.raises(ArgumentError) as ei:
        classify_replacement(42)
    assert ei.value.code == "E_REPLACEMENT_TYPE"


@pytest.mark.parametrize("value,expected", [(None, None), (0, 0), (3, 3), (2.0, 2)])
def test_validate_limit_accepts(value, expected):
    assert validate_limit(value, function="split") == expected


@pytest.mark.parametrize(
    "value,code",
    [(-1, "E_NEGATIVE_LIMIT"), (-0.5, "E_INVALID_LIMIT"), (1.5, "E_INVALID_LIMIT"), (True, "E_INVALID_LIMIT"), ("2", "E_INVALID_LIMIT")],
)
def test_validate_limit_rejects(value, code):
    with pytest.raises(ArgumentError) as ei:
        validate_limit(value, function="split")
    assert ei.value.code == code


def test_require_string():
    assert require_string("s", function="trim") == "s"
    with pytest.raises(ArgumentError):
        require_string(5, function="trim")
