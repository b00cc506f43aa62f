"""Exact, boundary, prefix, suffix and equality matchers."""

from __future__ import annotations

from .fuzzy import _ascii_fuzzy_index, _fold, _index_at, _to_lower, calculate_score
from .normalize import normalize_char
from .scoring import (
    BONUS_BOUNDARY,
    BONUS_FIRST_CHAR_MULTIPLIER,
    NO_MATCH,
    SCORE_MATCH,
    CharClass,
    MatchResult,
    active_scheme,
)


def _leading_whitespaces(text: str) -> int:
    return len(text) - len(text.lstrip())


def _trailing_whitespaces(text: str) -> int:
    return len(text) - len(text.rstrip())


def _exact_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    boundary_check: bool,
    text: str,
    pattern: str,
) -> tuple[MatchResult, None]:
    if not pattern:
        return MatchResult(0, 0, 0), None

    n_text = len(text)
    n_pattern = len(pattern)
    if n_text < n_pattern:
        return NO_MATCH, None

    idx, _ = _ascii_fuzzy_index(text, pattern, case_sensitive)
    if idx < 0:
        return NO_MATCH, None

    scheme = active_scheme()
    # Only the bonus at the first character of the pattern is considered.
    pidx = 0
    best_pos, bonus, best_bonus = -1, 0, -1
    index = 0
    while index < n_text:
        text_idx = _index_at(index, n_text, forward)
        char = _fold(text[text_idx], case_sensitive, normalize)
        pattern_idx = _index_at(pidx, n_pattern, forward)
        ok = pattern[pattern_idx] == char
        if ok:
            if pattern_idx == 0:
                bonus = scheme.bonus_at(text, text_idx)
            if boundary_check:
                ok = bonus >= BONUS_BOUNDARY
                if ok and pattern_idx == 0:
                    ok = (
                        text_idx == 0
                        or scheme.char_class_of(text[text_idx - 1]) <= CharClass.DELIMITER
                    )
                if ok and pattern_idx == n_pattern - 1:
                    ok = (
                        text_idx == n_text - 1
                        or scheme.char_class_of(text[text_idx + 1]) <= CharClass.DELIMITER
                    )
        if ok:
            pidx += 1
            if pidx == n_pattern:
                if bonus > best_bonus:
                    best_pos, best_bonus = index, bonus
                if bonus >= BONUS_BOUNDARY:
                    break
                index -= pidx - 1
                pidx, bonus = 0, 0
        else:
            index -= pidx
            pidx, bonus = 0, 0
        index += 1

    if best_pos < 0:
        return NO_MATCH, None

    if forward:
        sidx = best_pos - n_pattern + 1
        eidx = best_pos + 1
    else:
        sidx = n_text - (best_pos + 1)
        eidx = n_text - (best_pos - n_pattern + 1)

    if boundary_check:
        # Underscore boundaries rank below the other kinds of boundary.
        score = bonus
        deduct = bonus - BONUS_BOUNDARY + 1
        if sidx > 0 and text[sidx - 1] == "_":
            score -= deduct + 1
            deduct = 1
        if eidx < n_text and text[eidx] == "_":
            score -= deduct
        score += SCORE_MATCH * n_pattern + scheme.bonus_boundary_white * (n_pattern + 1)
    else:
        score, _ = calculate_score(case_sensitive, normalize, text, pattern, sidx, eidx, False)
    return MatchResult(sidx, eidx, score), None


def exact_match_naive(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> tuple[MatchResult, None]:
    """Find the occurrence of pattern in text whose first character has the highest bonus."""
    return _exact_match(case_sensitive, normalize, forward, False, text, pattern)


def exact_match_boundary(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> tuple[MatchResult, None]:
    """Find an occurrence of pattern that starts and ends on word boundaries."""
    return _exact_match(case_sensitive, normalize, forward, True, text, pattern)


def _prepare(char: str, case_sensitive: bool, normalize: bool) -> str:
    if not case_sensitive:
        char = _to_lower(char)
    if normalize:
        char = normalize_char(char)
    return char


def prefix_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> tuple[MatchResult, None]:
    """Match pattern at the start of text, ignoring leading whitespace unless the pattern has it."""
    if not pattern:
        return MatchResult(0, 0, 0), None

    trimmed = 0 if pattern[0].isspace() else _leading_whitespaces(text)
    if len(text) - trimmed < len(pattern):
        return NO_MATCH, None

    segment = text[trimmed : trimmed + len(pattern)]
    if any(
        _prepare(char, case_sensitive, normalize) != pchar
        for char, pchar in zip(segment, pattern)
    ):
        return NO_MATCH, None

    end = trimmed + len(pattern)
    score, _ = calculate_score(case_sensitive, normalize, text, pattern, trimmed, end, False)
    return MatchResult(trimmed, end, score), None


def suffix_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> tuple[MatchResult, None]:
    """Match pattern at the end of text, ignoring trailing whitespace unless the pattern has it."""
    trimmed = len(text)
    if not pattern or not pattern[-1].isspace():
        trimmed -= _trailing_whitespaces(text)
    if not pattern:
        return MatchResult(trimmed, trimmed, 0), None

    sidx = trimmed - len(pattern)
    if sidx < 0:
        return NO_MATCH, None

    if any(
        _prepare(char, case_sensitive, normalize) != pchar
        for char, pchar in zip(text[sidx:trimmed], pattern)
    ):
        return NO_MATCH, None

    score, _ = calculate_score(case_sensitive, normalize, text, pattern, sidx, trimmed, False)
    return MatchResult(sidx, trimmed, score), None


def equal_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> tuple[MatchResult, None]:
    """Match when text, stripped of surrounding whitespace, equals pattern."""
    n_pattern = len(pattern)
    if n_pattern == 0:
        return NO_MATCH, None

    lead = 0 if pattern[0].isspace() else _leading_whitespaces(text)
    trail = 0 if pattern[-1].isspace() else _trailing_whitespaces(text)
    if len(text) - lead - trail != n_pattern:
        return NO_MATCH, None

    body = text[lead : len(text) - trail]
    if normalize:
        match = all(
            normalize_char(pchar)
            == normalize_char(char if case_sensitive else _to_lower(char))
            for char, pchar in zip(body, pattern)
        )
    else:
        match = (body if case_sensitive else body.lower()) == pattern

    if not match:
        return NO_MATCH, None
    white = active_scheme().bonus_boundary_white
    score = (SCORE_MATCH + white) * n_pattern + (BONUS_FIRST_CHAR_MULTIPLIER - 1) * white
    return MatchResult(lead, lead + n_pattern, score), None