"""Parsing of ANSI escape sequences: colours, attributes and hyperlinks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Callable, Optional

_DIGITS = frozenset("0123456789")
_CTRL_SEQ_STARTS = frozenset("\\[()")
_CTRL_SEQ_BODY = frozenset("0123456789;:?")


class Attr(IntFlag):
    """Text attributes that SGR sequences can switch on and off."""

    BOLD = 1
    DIM = 2
    ITALIC = 4
    UNDERLINE = 8
    BLINK = 16
    REVERSE = 32
    STRIKE_THROUGH = 64


_ATTR_CODES = (
    (Attr.BOLD, 1),
    (Attr.DIM, 2),
    (Attr.ITALIC, 3),
    (Attr.UNDERLINE, 4),
    (Attr.BLINK, 5),
    (Attr.REVERSE, 7),
    (Attr.STRIKE_THROUGH, 9),
)

_ATTR_ON = {1: Attr.BOLD, 2: Attr.DIM, 3: Attr.ITALIC, 4: Attr.UNDERLINE,
            5: Attr.BLINK, 7: Attr.REVERSE, 9: Attr.STRIKE_THROUGH}

_ATTR_OFF = {
    22: Attr.BOLD | Attr.DIM,
    23: Attr.ITALIC,
    24: Attr.UNDERLINE,
    25: Attr.BLINK,
    27: Attr.REVERSE,
    29: Attr.STRIKE_THROUGH,
}


@dataclass(frozen=True)
class Url:
    """Target and parameters of an OSC 8 hyperlink."""

    uri: str
    params: str


@dataclass(frozen=True)
class AnsiState:
    """Colours and attributes in effect; -1 means the terminal default colour."""

    fg: int = -1
    bg: int = -1
    attr: Attr = Attr(0)
    lbg: int = -1
    url: Optional[Url] = None

    def colored(self) -> bool:
        """Whether the state differs from the plain default."""
        return (
            self.fg != -1
            or self.bg != -1
            or bool(self.attr)
            or self.lbg >= 0
            or self.url is not None
        )

    def to_string(self) -> str:
        """Escape sequence that reproduces this state, or "" for the default."""
        if not self.colored():
            return ""
        ret = "".join(f"{code};" for flag, code in _ATTR_CODES if self.attr & flag)
        ret += to_ansi_string(self.fg, 30) + to_ansi_string(self.bg, 40)
        ret = "\x1b[" + ret.removesuffix(";") + "m"
        if self.url is not None:
            ret = f"\x1b]8;{self.url.params};{self.url.uri}\x1b\\{ret}\x1b]8;;\x1b"
        return ret


@dataclass
class AnsiOffset:
    """A run of characters [start, end) drawn with the given state."""

    start: int
    end: int
    color: AnsiState = field(default_factory=AnsiState)


def _same(state: AnsiState, other: AnsiState | None) -> bool:
    if other is None:
        return not state.colored()
    return (
        state.fg == other.fg
        and state.bg == other.bg
        and state.attr == other.attr
        and state.lbg == other.lbg
        and state.url is other.url
    )


def to_ansi_string(color: int, offset: int) -> str:
    """SGR parameters selecting color, with offset 30 for foreground or 40 for background."""
    ret = ""
    if color == -1:
        ret = str(offset + 9)
    elif color < 8:
        ret = str(offset + color)
    elif color < 16:
        ret = str(offset - 30 + 90 + color - 8)
    elif color < 256:
        ret = f"{offset + 8};5;{color}"
    elif color >= 1 << 24:
        r = (color >> 16) & 0xFF
        g = (color >> 8) & 0xFF
        b = color & 0xFF
        ret = f"{offset + 8};2;{r};{g};{b}"
    return ret + ";"


def _is_print(char: str) -> bool:
    return "\x20" <= char <= "\x7e"


def _match_control_sequence(text: str, start: int) -> int:
    for pos in range(start + 2, len(text)):
        char = text[pos]
        if char in _CTRL_SEQ_BODY:
            continue
        if "a" <= char <= "z" or "A" <= char <= "Z" or char == "@":
            return pos + 1
        return -1
    return -1


def _match_operating_system_command(text: str, start: int) -> int:
    n = len(text)
    pos = start + 5
    while pos < n and _is_print(text[pos]):
        pos += 1
    if pos < n:
        if text[pos] == "\x07":
            return pos + 1
        if text[pos] == "\x1b" and pos < n - 1 and text[pos + 1] == "\\":
            return pos + 2
    if pos < n and text[start : pos + 1] == "\x1b]8;;\x1b":
        return pos + 1
    return -1


def _next_escape(text: str, begin: int) -> tuple[int, int]:
    n = len(text)
    for i in range(begin, n):
        char = text[i]
        if char == "\x08":
            if i > begin and text[i - 1] != "\n":
                return i - 1, i + 1
        elif char == "\x1b":
            if i + 2 < n and text[i + 1] in _CTRL_SEQ_STARTS:
                end = _match_control_sequence(text, i)
                if end != -1:
                    return i, end
            if (
                i + 5 < n
                and text[i + 1] == "]"
                and text[i + 2] in _DIGITS
                and text[i + 3] in ";:"
                and _is_print(text[i + 4])
            ):
                end = _match_operating_system_command(text, i)
                if end != -1:
                    return i, end
            if i + 1 < n and text[i + 1] != "\n":
                return i, i + 2
        elif char in "\x0e\x0f":
            return i, i + 1
    return -1, -1


def next_ansi_escape_sequence(text: str) -> tuple[int, int]:
    """Span (start, end) of the first escape sequence in text, or (-1, -1)."""
    return _next_escape(text, 0)


def parse_ansi_code(text: str, delimiter: str = "") -> tuple[int, str, str]:
    """Split one numeric parameter off text.

    Returns the number (-1 if empty or not a plain non-negative integer),
    the delimiter in use and the text after it.
    """
    if not delimiter:
        idx = text.find(";")
        if idx < 0:
            idx = text.find(":")
    else:
        idx = text.find(delimiter)
    remaining = ""
    if idx >= 0:
        delimiter = text[idx]
        remaining = text[idx + 1 :]
        text = text[:idx]
    if text and all(char in _DIGITS for char in text):
        return int(text), delimiter, remaining
    return -1, delimiter, remaining


def _without(attr: Attr, flags: Attr) -> Attr:
    return Attr(int(attr) & ~int(flags))


def interpret_code(code: str, prev_state: AnsiState | None) -> AnsiState:
    """State that results from applying the escape sequence code to prev_state."""
    if prev_state is None:
        prev = AnsiState()
    else:
        prev = prev_state
    fg, bg, attr, lbg, url = prev.fg, prev.bg, prev.attr, prev.lbg, prev.url

    if not (code.startswith("\x1b[") and code.endswith("m")):
        if prev_state is not None and code.endswith("0K"):
            lbg = prev_state.bg
        elif code == "\x1b]8;;\x1b\\":
            url = None
        elif code.startswith("\x1b]8;") and code.endswith("\x1b\\"):
            params_end = code[4:].find(";")
            if params_end >= 0:
                params = code[4 : 4 + params_end]
                uri = code[5 + params_end : -2]
                url = Url(uri=uri, params=params)
        return AnsiState(fg, bg, attr, lbg, url)

    if len(code) <= 3:
        return AnsiState(-1, -1, Attr(0), lbg, url)

    body = code[2:-1]
    colors = {"fg": fg, "bg": bg}
    target = "fg"
    state256 = 0
    delimiter = ""
    count = 0
    while body:
        num, delimiter, body = parse_ansi_code(body, delimiter)
        if num == -1:
            continue
        count += 1
        if state256 == 0:
            if num == 38:
                target = "fg"
                state256 += 1
            elif num == 48:
                target = "bg"
                state256 += 1
            elif num == 39:
                colors["fg"] = -1
            elif num == 49:
                colors["bg"] = -1
            elif num in _ATTR_ON:
                attr = attr | _ATTR_ON[num]
            elif num in _ATTR_OFF:
                attr = _without(attr, _ATTR_OFF[num])
            elif num == 0:
                colors["fg"] = -1
                colors["bg"] = -1
                attr = Attr(0)
                state256 = 0
            elif 30 <= num <= 37:
                colors["fg"] = num - 30
            elif 40 <= num <= 47:
                colors["bg"] = num - 40
            elif 90 <= num <= 97:
                colors["fg"] = num - 90 + 8
            elif 100 <= num <= 107:
                colors["bg"] = num - 100 + 8
        elif state256 == 1:
            if num == 2:
                state256 = 10
            elif num == 5:
                state256 += 1
            else:
                state256 = 0
        elif state256 == 2:
            colors[target] = num
            state256 = 0
        elif state256 == 10:
            colors[target] = (1 << 24) | (num << 16)
            state256 += 1
        elif state256 == 11:
            colors[target] |= num << 8
            state256 += 1
        elif state256 == 12:
            colors[target] |= num
            state256 = 0

    if count == 0:
        colors["fg"] = -1
        colors["bg"] = -1
        attr = Attr(0)

    if state256 > 0:
        colors[target] = -1

    return AnsiState(colors["fg"], colors["bg"], attr, lbg, url)


Processor = Callable[[str, Optional[AnsiState]], bool]


def extract_color(
    text: str,
    state: AnsiState | None,
    proc: Processor | None = None,
) -> tuple[str, list[AnsiOffset] | None, AnsiState | None]:
    """Strip escape sequences from text.

    Returns the plain text, the coloured runs (in character offsets of the
    plain text, or None if there are none) and the state at the end of text.
    proc, when given, is called with each plain segment and the state it is
    drawn with; returning False aborts and yields ("", None, None).
    """
    offsets: list[AnsiOffset] = []
    if state is not None:
        offsets.append(AnsiOffset(0, 0, state))

    output: list[str] = []
    prev_idx = 0
    char_count = 0
    idx = 0
    while idx < len(text):
        start, end = _next_escape(text, idx)
        if start == -1:
            break
        idx = end

        prev = text[prev_idx:start]
        if proc is not None and not proc(prev, state):
            return "", None, None
        prev_idx = idx

        if prev:
            char_count += len(prev)
            output.append(prev)

        new_state = interpret_code(text[start:idx], state)
        if not _same(new_state, state):
            if state is not None:
                offsets[-1].end = char_count
            if new_state.colored():
                state = new_state
                offsets.append(AnsiOffset(char_count, char_count, new_state))
            else:
                state = None

    if prev_idx == 0:
        rest = text
        trimmed = text
    else:
        rest = text[prev_idx:]
        output.append(rest)
        trimmed = "".join(output)
    if proc is not None:
        proc(rest, state)
    if offsets:
        if rest and state is not None:
            char_count += len(rest)
            offsets[-1].end = char_count
        return trimmed, offsets, state
    return trimmed, None, state