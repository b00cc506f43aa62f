"""Fuzzy matching: a greedy scan and an optimal-alignment scorer."""

from __future__ import annotations

from .normalize import normalize_char
from .scoring import (
    BONUS_BOUNDARY,
    BONUS_CONSECUTIVE,
    BONUS_FIRST_CHAR_MULTIPLIER,
    NO_MATCH,
    SCORE_GAP_EXTENSION,
    SCORE_GAP_START,
    SCORE_MATCH,
    CharClass,
    MatchResult,
    active_scheme,
)

Positions = "list[int] | None"


def _to_lower(char: str) -> str:
    lowered = char.lower()
    return lowered if len(lowered) == 1 else lowered[0]


def _fold(char: str, case_sensitive: bool, normalize: bool) -> str:
    if not case_sensitive:
        if "A" <= char <= "Z":
            char = chr(ord(char) + 32)
        elif ord(char) > 127:
            char = _to_lower(char)
    if normalize:
        char = normalize_char(char)
    return char


def _index_at(index: int, size: int, forward: bool) -> int:
    return index if forward else size - index - 1


def _try_skip(text: str, case_sensitive: bool, char: str, start: int) -> int:
    found = text.find(char, start)
    rel = found - start if found >= 0 else -1
    if rel == 0:
        return start
    if not case_sensitive and "a" <= char <= "z":
        end = start + rel if rel > 0 else len(text)
        upper = text.find(char.upper(), start, end)
        if upper >= 0:
            rel = upper - start
    if rel < 0:
        return -1
    return start + rel


def _ascii_fuzzy_index(text: str, pattern: str, case_sensitive: bool) -> tuple[int, int]:
    """Narrow the range of text where the pattern can match, or (-1, -1) if it cannot."""
    if not text.isascii():
        return 0, len(text)
    if not pattern.isascii():
        return -1, -1

    first_idx = idx = last_idx = 0
    for pidx, char in enumerate(pattern):
        idx = _try_skip(text, case_sensitive, char, idx)
        if idx < 0:
            return -1, -1
        if pidx == 0 and idx > 0:
            first_idx = idx - 1
        last_idx = idx
        idx += 1

    last = pattern[-1]
    last_upper = last.upper() if not case_sensitive and "a" <= last <= "z" else last
    scope = text[last_idx:]
    offset = max(scope.rfind(last, 1), scope.rfind(last_upper, 1))
    if offset > 0:
        return first_idx, last_idx + offset + 1
    return first_idx, last_idx + 1


def calculate_score(
    case_sensitive: bool,
    normalize: bool,
    text: str,
    pattern: str,
    sidx: int,
    eidx: int,
    with_pos: bool,
) -> tuple[int, list[int] | None]:
    """Score the match of pattern inside text[sidx:eidx] the same way the optimal matcher does."""
    scheme = active_scheme()
    pidx = score = consecutive = first_bonus = 0
    in_gap = False
    positions: list[int] | None = [] if with_pos else None
    prev_class = scheme.initial_char_class
    if sidx > 0:
        prev_class = scheme.char_class_of(text[sidx - 1])

    for idx in range(sidx, eidx):
        raw = text[idx]
        char_class = scheme.char_class_of(raw)
        char = _fold(raw, case_sensitive, normalize)
        if pidx < len(pattern) and char == pattern[pidx]:
            if positions is not None:
                positions.append(idx)
            score += SCORE_MATCH
            bonus = scheme.bonus_matrix[prev_class][char_class]
            if consecutive == 0:
                first_bonus = bonus
            else:
                if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)
            score += bonus * BONUS_FIRST_CHAR_MULTIPLIER if pidx == 0 else bonus
            in_gap = False
            consecutive += 1
            pidx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0
        prev_class = char_class
    return score, positions


def fuzzy_match_v1(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> tuple[MatchResult, list[int] | None]:
    """Find the first fuzzy occurrence of pattern, then shrink it by scanning backwards.

    The pattern is expected in lower case when matching case-insensitively,
    and already normalized when normalize is set.
    """
    if not pattern:
        return MatchResult(0, 0, 0), None
    idx, _ = _ascii_fuzzy_index(text, pattern, case_sensitive)
    if idx < 0:
        return NO_MATCH, None

    n_text = len(text)
    n_pattern = len(pattern)
    pidx = 0
    sidx = eidx = -1

    for index in range(n_text):
        char = _fold(text[_index_at(index, n_text, forward)], case_sensitive, normalize)
        if char == pattern[_index_at(pidx, n_pattern, forward)]:
            if sidx < 0:
                sidx = index
            pidx += 1
            if pidx == n_pattern:
                eidx = index + 1
                break

    if sidx < 0 or eidx < 0:
        return NO_MATCH, None

    pidx -= 1
    for index in range(eidx - 1, sidx - 1, -1):
        char = _fold(text[_index_at(index, n_text, forward)], case_sensitive, False)
        if char == pattern[_index_at(pidx, n_pattern, forward)]:
            pidx -= 1
            if pidx < 0:
                sidx = index
                break

    if not forward:
        sidx, eidx = n_text - eidx, n_text - sidx

    score, positions = calculate_score(
        case_sensitive, normalize, text, pattern, sidx, eidx, with_pos
    )
    return MatchResult(sidx, eidx, score), positions


def fuzzy_match_v2(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> tuple[MatchResult, list[int] | None]:
    """Find the highest-scoring fuzzy alignment of pattern in text.

    The pattern is expected in lower case when matching case-insensitively,
    and already normalized when normalize is set. Positions, when requested,
    are returned in ascending order.
    """
    m = len(pattern)
    if m == 0:
        return MatchResult(0, 0, 0), ([] if with_pos else None)
    if m > len(text):
        return NO_MATCH, None

    min_idx, max_idx = _ascii_fuzzy_index(text, pattern, case_sensitive)
    if min_idx < 0:
        return NO_MATCH, None
    n = max_idx - min_idx

    scheme = active_scheme()
    matrix = scheme.bonus_matrix
    h0 = [0] * n
    c0 = [0] * n
    bonuses = [0] * n
    first = [0] * m
    chars = list(text[min_idx:max_idx])

    max_score, max_score_pos = 0, 0
    pidx = last_idx = 0
    pchar0 = pchar = pattern[0]
    prev_h0 = 0
    prev_class = scheme.initial_char_class
    in_gap = False

    for off, char in enumerate(chars):
        if ord(char) < 128:
            char_class = scheme.ascii_classes[ord(char)]
            if not case_sensitive and char_class == CharClass.UPPER:
                char = chr(ord(char) + 32)
                chars[off] = char
        else:
            char_class = scheme.char_class_of(char)
            if not case_sensitive and char_class == CharClass.UPPER:
                char = _to_lower(char)
            if normalize:
                char = normalize_char(char)
            chars[off] = char

        bonus = matrix[prev_class][char_class]
        bonuses[off] = bonus
        prev_class = char_class

        if char == pchar:
            if pidx < m:
                first[pidx] = off
                pidx += 1
                pchar = pattern[min(pidx, m - 1)]
            last_idx = off

        if char == pchar0:
            score = SCORE_MATCH + bonus * BONUS_FIRST_CHAR_MULTIPLIER
            h0[off] = score
            c0[off] = 1
            if m == 1 and (
                (forward and score > max_score) or (not forward and score >= max_score)
            ):
                max_score, max_score_pos = score, off
                if forward and bonus >= BONUS_BOUNDARY:
                    break
            in_gap = False
        else:
            step = SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            h0[off] = max(prev_h0 + step, 0)
            c0[off] = 0
            in_gap = True
        prev_h0 = h0[off]

    if pidx != m:
        return NO_MATCH, None
    if m == 1:
        result = MatchResult(min_idx + max_score_pos, min_idx + max_score_pos + 1, max_score)
        return result, ([min_idx + max_score_pos] if with_pos else None)

    f0 = first[0]
    width = last_idx - f0 + 1
    h = [0] * (width * m)
    h[:width] = h0[f0 : last_idx + 1]
    c = [0] * (width * m)
    c[:width] = c0[f0 : last_idx + 1]

    for pidx in range(1, m):
        f = first[pidx]
        pchar = pattern[pidx]
        row = pidx * width
        in_gap = False
        h[row + f - f0 - 1] = 0
        for col in range(f, last_idx + 1):
            cell = row + col - f0
            s2 = h[cell - 1] + (SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START)
            s1 = 0
            consecutive = 0
            if pchar == chars[col]:
                diag = cell - 1 - width
                s1 = h[diag] + SCORE_MATCH
                bonus = bonuses[col]
                consecutive = c[diag] + 1
                if consecutive > 1:
                    first_bonus = bonuses[col - consecutive + 1]
                    if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                        consecutive = 1
                    else:
                        bonus = max(bonus, BONUS_CONSECUTIVE, first_bonus)
                if s1 + bonus < s2:
                    s1 += bonuses[col]
                    consecutive = 0
                else:
                    s1 += bonus
            c[cell] = consecutive

            in_gap = s1 < s2
            score = max(s1, s2, 0)
            if pidx == m - 1 and (
                (forward and score > max_score) or (not forward and score >= max_score)
            ):
                max_score, max_score_pos = score, col
            h[cell] = score

    positions: list[int] | None = None
    j = f0
    if with_pos:
        positions = []
        i = m - 1
        j = max_score_pos
        prefer_match = True
        while True:
            row = i * width
            j0 = j - f0
            s = h[row + j0]
            s1 = h[row - width + j0 - 1] if i > 0 and j >= first[i] else 0
            s2 = h[row + j0 - 1] if j > first[i] else 0

            if s > s1 and (s > s2 or (s == s2 and prefer_match)):
                positions.append(j + min_idx)
                if i == 0:
                    break
                i -= 1
            below = row + width + j0 + 1
            prefer_match = c[row + j0] > 1 or (below < len(c) and c[below] > 0)
            j -= 1
        positions.reverse()

    return MatchResult(min_idx + j, min_idx + max_score_pos + 1, max_score), positions