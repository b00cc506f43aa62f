"""Character classes, bonus tables and scoring schemes shared by the matchers."""

from __future__ import annotations

import os
import unicodedata
from dataclasses import dataclass, field
from enum import IntEnum

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

# Chosen so that the bonus is cancelled once the gap between acronyms grows past 8 characters.
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_WHITE_CHARS = " \t\n\v\f\r"
_DEFAULT_DELIMITERS = "/,:;|"


class CharClass(IntEnum):
    """Class of a character, used to decide the bonus at a position."""

    WHITE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


@dataclass(frozen=True)
class MatchResult:
    """Span and score of a match; start and end are -1 when nothing matched."""

    start: int
    end: int
    score: int

    @property
    def matched(self) -> bool:
        return self.start >= 0


NO_MATCH = MatchResult(-1, -1, 0)


@dataclass(frozen=True)
class Scheme:
    """A scoring scheme: the bonus values and the character classification they rely on."""

    name: str
    bonus_boundary_white: int
    bonus_boundary_delimiter: int
    delimiter_chars: str = _DEFAULT_DELIMITERS
    initial_char_class: CharClass = CharClass.WHITE
    ascii_classes: tuple[CharClass, ...] = field(init=False, repr=False, compare=False)
    bonus_matrix: tuple[tuple[int, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "ascii_classes", tuple(self._ascii_class(chr(code)) for code in range(128))
        )
        object.__setattr__(
            self,
            "bonus_matrix",
            tuple(
                tuple(self.bonus_for(prev, cls) for cls in CharClass) for prev in CharClass
            ),
        )

    @classmethod
    def from_name(cls, name: str) -> Scheme:
        """Build one of the named schemes: default, path or history."""
        if name == "default":
            return cls(name, BONUS_BOUNDARY + 2, BONUS_BOUNDARY + 1)
        if name == "path":
            delimiters = "/" if os.sep == "/" else os.sep + "/"
            return cls(
                name,
                BONUS_BOUNDARY,
                BONUS_BOUNDARY + 1,
                delimiters,
                CharClass.DELIMITER,
            )
        if name == "history":
            return cls(name, BONUS_BOUNDARY, BONUS_BOUNDARY)
        raise ValueError(f"unknown scoring scheme: {name!r}")

    def _ascii_class(self, char: str) -> CharClass:
        if "a" <= char <= "z":
            return CharClass.LOWER
        if "A" <= char <= "Z":
            return CharClass.UPPER
        if "0" <= char <= "9":
            return CharClass.NUMBER
        if char in _WHITE_CHARS:
            return CharClass.WHITE
        if char in self.delimiter_chars:
            return CharClass.DELIMITER
        return CharClass.NON_WORD

    def _non_ascii_class(self, char: str) -> CharClass:
        category = unicodedata.category(char)
        if category == "Ll":
            return CharClass.LOWER
        if category == "Lu":
            return CharClass.UPPER
        if category[0] == "N":
            return CharClass.NUMBER
        if category[0] == "L":
            return CharClass.LETTER
        if char.isspace():
            return CharClass.WHITE
        if char in self.delimiter_chars:
            return CharClass.DELIMITER
        return CharClass.NON_WORD

    def char_class_of(self, char: str) -> CharClass:
        """Classify a single character."""
        code = ord(char)
        if code < 128:
            return self.ascii_classes[code]
        return self._non_ascii_class(char)

    def bonus_for(self, prev_class: CharClass, char_class: CharClass) -> int:
        """Bonus for a character of char_class that follows one of prev_class."""
        if char_class > CharClass.NON_WORD:
            if prev_class == CharClass.WHITE:
                return self.bonus_boundary_white
            if prev_class == CharClass.DELIMITER:
                return self.bonus_boundary_delimiter
            if prev_class == CharClass.NON_WORD:
                return BONUS_BOUNDARY

        if (prev_class == CharClass.LOWER and char_class == CharClass.UPPER) or (
            prev_class != CharClass.NUMBER and char_class == CharClass.NUMBER
        ):
            return BONUS_CAMEL123

        if char_class in (CharClass.NON_WORD, CharClass.DELIMITER):
            return BONUS_NON_WORD
        if char_class == CharClass.WHITE:
            return self.bonus_boundary_white
        return 0

    def bonus_at(self, text: str, idx: int) -> int:
        """Bonus for the character of text at position idx."""
        if idx == 0:
            return self.bonus_boundary_white
        prev_class = self.char_class_of(text[idx - 1])
        return self.bonus_matrix[prev_class][self.char_class_of(text[idx])]


_active: Scheme = Scheme.from_name("default")


def init_scheme(name: str) -> Scheme:
    """Make the named scheme the one used by the matchers and return it."""
    global _active
    _active = Scheme.from_name(name)
    return _active


def active_scheme() -> Scheme:
    """Return the scheme the matchers currently use."""
    return _active