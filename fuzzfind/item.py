"""An input line as held by the finder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .ansi import AnsiOffset, extract_color


@dataclass
class Item:
    """One input line.

    text is what gets matched and displayed; orig_text, when set, is the
    untransformed line that is printed on selection.
    """

    text: str
    index: int = 0
    orig_text: Optional[str] = None
    colors: list[AnsiOffset] = field(default_factory=list)
    transformed: Optional[list[Any]] = None

    def as_string(self, strip_ansi: bool) -> str:
        """The original line, optionally without escape sequences."""
        if self.orig_text is not None:
            if strip_ansi:
                trimmed, _, _ = extract_color(self.orig_text, None, None)
                return trimmed
            return self.orig_text
        return self.text


MIN_ITEM = Item(text="", index=-(2**31))