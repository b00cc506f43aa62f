import pytest

from fuzzfind.exact import (
    equal_match,
    exact_match_boundary,
    exact_match_naive,
    prefix_match,
    suffix_match,
)
from fuzzfind.scoring import (
    BONUS_BOUNDARY,
    BONUS_CAMEL123,
    BONUS_CONSECUTIVE,
    BONUS_FIRST_CHAR_MULTIPLIER,
    SCORE_MATCH,
    init_scheme,
)

BONUS_BOUNDARY_WHITE = 10
BONUS_BOUNDARY_DELIMITER = 9

PREFIX_SCORE = (
    SCORE_MATCH * 3
    + BONUS_BOUNDARY_WHITE * BONUS_FIRST_CHAR_MULTIPLIER
    + BONUS_BOUNDARY_WHITE * 2
)


@pytest.fixture(autouse=True)
def default_scheme():
    init_scheme("default")
    yield
    init_scheme("default")


def _span(result, positions):
    if positions:
        positions = sorted(positions)
        return positions[0], positions[-1] + 1, result.score
    return result.start, result.end, result.score


def _pattern(case_sensitive, pattern):
    return pattern if case_sensitive else pattern.lower()


EXACT_CASES = [
    (True, "fooBarbaz", "oBA", (-1, -1, 0)),
    (True, "fooBarbaz", "fooBarbazz", (-1, -1, 0)),
    (False, "fooBarbaz", "oBA", (2, 5, SCORE_MATCH * 3 + BONUS_CAMEL123 + BONUS_CONSECUTIVE)),
    (
        False,
        "/AutomatorDocument.icns",
        "rdoc",
        (9, 13, SCORE_MATCH * 4 + BONUS_CAMEL123 + BONUS_CONSECUTIVE * 2),
    ),
    (
        False,
        "/man1/zshcompctl.1",
        "zshc",
        (6, 10, SCORE_MATCH * 4 + BONUS_BOUNDARY_DELIMITER * (BONUS_FIRST_CHAR_MULTIPLIER + 3)),
    ),
    (
        False,
        "/.oh-my-zsh/cache",
        "zsh/c",
        (
            8,
            13,
            SCORE_MATCH * 5
            + BONUS_BOUNDARY * (BONUS_FIRST_CHAR_MULTIPLIER + 3)
            + BONUS_BOUNDARY_DELIMITER,
        ),
    ),
]


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize("case_sensitive, text, pattern, expected", EXACT_CASES)
def test_exact_match_naive(forward, case_sensitive, text, pattern, expected):
    got = exact_match_naive(
        case_sensitive, False, forward, text, _pattern(case_sensitive, pattern), True
    )
    assert _span(*got) == expected


@pytest.mark.parametrize(
    "forward, expected",
    [
        (True, (1, 3, SCORE_MATCH * 2 + BONUS_CONSECUTIVE)),
        (False, (8, 10, SCORE_MATCH * 2 + BONUS_CONSECUTIVE)),
    ],
)
def test_exact_match_naive_backward(forward, expected):
    got = exact_match_naive(False, False, forward, "foobar foob", "oo", True)
    assert _span(*got) == expected


PREFIX_CASES = [
    (True, "fooBarbaz", "Foo", (-1, -1, 0)),
    (False, "fooBarBaz", "baz", (-1, -1, 0)),
    (False, "fooBarbaz", "Foo", (0, 3, PREFIX_SCORE)),
    (False, "foOBarBaZ", "foo", (0, 3, PREFIX_SCORE)),
    (False, "f-oBarbaz", "f-o", (0, 3, PREFIX_SCORE)),
    (False, " fooBar", "foo", (1, 4, PREFIX_SCORE)),
    (False, " fooBar", " fo", (0, 3, PREFIX_SCORE)),
    (False, "     fo", "foo", (-1, -1, 0)),
]


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize("case_sensitive, text, pattern, expected", PREFIX_CASES)
def test_prefix_match(forward, case_sensitive, text, pattern, expected):
    got = prefix_match(
        case_sensitive, False, forward, text, _pattern(case_sensitive, pattern), True
    )
    assert _span(*got) == expected


SUFFIX_CASES = [
    (True, "fooBarbaz", "Baz", (-1, -1, 0)),
    (False, "fooBarbaz", "Foo", (-1, -1, 0)),
    (False, "fooBarbaz", "baz", (6, 9, SCORE_MATCH * 3 + BONUS_CONSECUTIVE * 2)),
    (
        False,
        "fooBarBaZ",
        "baz",
        (
            6,
            9,
            (SCORE_MATCH + BONUS_CAMEL123) * 3
            + BONUS_CAMEL123 * (BONUS_FIRST_CHAR_MULTIPLIER - 1),
        ),
    ),
    (False, "fooBarbaz ", "baz", (6, 9, SCORE_MATCH * 3 + BONUS_CONSECUTIVE * 2)),
    (
        False,
        "fooBarbaz ",
        "baz ",
        (6, 10, SCORE_MATCH * 4 + BONUS_CONSECUTIVE * 2 + BONUS_BOUNDARY_WHITE),
    ),
]


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize("case_sensitive, text, pattern, expected", SUFFIX_CASES)
def test_suffix_match(forward, case_sensitive, text, pattern, expected):
    got = suffix_match(
        case_sensitive, False, forward, text, _pattern(case_sensitive, pattern), True
    )
    assert _span(*got) == expected


@pytest.mark.parametrize("forward", [True, False])
def test_empty_pattern(forward):
    assert _span(*exact_match_naive(True, False, forward, "foobar", "", True)) == (0, 0, 0)
    assert _span(*prefix_match(True, False, forward, "foobar", "", True)) == (0, 0, 0)
    assert _span(*suffix_match(True, False, forward, "foobar", "", True)) == (6, 6, 0)
    assert _span(*equal_match(True, False, forward, "foobar", "", True)) == (-1, -1, 0)


@pytest.mark.parametrize("fun", [prefix_match, exact_match_naive])
def test_normalize_short(fun):
    got = fun(False, True, True, "Só Danço Samba", "so", True)
    assert _span(*got) == (0, 2, 62)


@pytest.mark.parametrize("fun", [prefix_match, suffix_match, exact_match_naive, equal_match])
def test_normalize_whole_word(fun):
    got = fun(False, True, True, "Danço", "danco", True)
    assert _span(*got) == (0, 5, 140)


def test_equal_match():
    result, _ = equal_match(False, False, True, "  Foo ", "foo", False)
    assert (result.start, result.end, result.score) == (2, 5, 88)
    result, _ = equal_match(False, False, True, "foobar", "foo", False)
    assert result.start == -1


def test_exact_match_boundary():
    white, _ = exact_match_boundary(False, False, True, "foo bar", "bar", False)
    assert (white.start, white.end, white.score) == (4, 7, 98)
    under, _ = exact_match_boundary(False, False, True, "foo_bar", "bar", False)
    assert (under.start, under.end, under.score) == (4, 7, 94)
    assert under.score < white.score
    none, _ = exact_match_boundary(False, False, True, "foobar", "bar", False)
    assert none.start == -1