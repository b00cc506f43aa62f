"""Query history backed by a plain text file."""

from __future__ import annotations

from pathlib import Path


class HistoryError(Exception):
    """The history file cannot be read or created."""


def _error(path: str, exc: OSError) -> HistoryError:
    if isinstance(exc, PermissionError):
        return HistoryError(f"permission denied: {path}")
    return HistoryError(f"invalid history file: {exc}")


class History:
    """Lines of a history file with a cursor for browsing them.

    The last line is always the entry being edited.
    """

    def __init__(self, path: str, max_size: int) -> None:
        self.path = path
        self.max_size = max_size
        file = Path(path)
        try:
            data = file.read_text(encoding="utf-8", errors="surrogateescape")
        except FileNotFoundError:
            data = ""
            try:
                file.write_text("", encoding="utf-8")
                file.chmod(0o600)
            except OSError as exc:
                raise _error(path, exc) from exc
        except OSError as exc:
            raise _error(path, exc) from exc

        lines = data.strip("\n").split("\n")
        if lines[-1]:
            lines.append("")
        self.lines: list[str] = lines
        self.modified: dict[int, str] = {}
        self.cursor = len(lines) - 1

    def append(self, line: str) -> None:
        """Add a non-empty line, keep at most max_size entries and save the file."""
        if not line:
            return
        lines = self.lines[:-1] + [line]
        if len(lines) > self.max_size:
            lines = lines[len(lines) - self.max_size :]
        self.lines = lines + [""]
        Path(self.path).write_text(
            "\n".join(self.lines), encoding="utf-8", errors="surrogateescape"
        )

    def override(self, text: str) -> None:
        """Replace the entry under the cursor in memory only."""
        last = len(self.lines) - 1
        if self.cursor == last:
            self.lines[self.cursor] = text
        elif self.cursor < last:
            self.modified[self.cursor] = text

    def current(self) -> str:
        """The entry under the cursor."""
        return self.modified.get(self.cursor, self.lines[self.cursor])

    def previous(self) -> str:
        """Move to the older entry, if any, and return it."""
        if self.cursor > 0:
            self.cursor -= 1
        return self.current()

    def next(self) -> str:
        """Move to the newer entry, if any, and return it."""
        if self.cursor < len(self.lines) - 1:
            self.cursor += 1
        return self.current()