"""Append-only list of items stored in fixed-size chunks, with immutable snapshots."""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterable, Sequence

from .cache import ChunkCache
from .constants import CHUNK_SIZE


class Chunk:
    """A group of at most CHUNK_SIZE items. Compared and hashed by identity."""

    __slots__ = ("items",)

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self.items: list[Any] = list(items)

    @property
    def count(self) -> int:
        return len(self.items)

    def is_full(self) -> bool:
        """Whether the chunk holds CHUNK_SIZE items."""
        return len(self.items) == CHUNK_SIZE

    def copy(self) -> Chunk:
        return Chunk(self.items)

    def __repr__(self) -> str:
        return f"Chunk(count={self.count})"


def count_items(chunks: Sequence[Chunk]) -> int:
    """Total number of items in the chunks."""
    return sum(chunk.count for chunk in chunks)


ItemBuilder = Callable[[Any], Any]


class ChunkList:
    """Thread-safe list of chunks.

    The builder turns raw input into an item, or returns None to skip it.
    """

    def __init__(self, cache: ChunkCache, trans: ItemBuilder) -> None:
        self._lock = threading.Lock()
        self._chunks: list[Chunk] = []
        self._cache = cache
        self.trans = trans

    def push(self, data: Any) -> bool:
        """Build an item from data and append it; return whether an item was added."""
        with self._lock:
            if not self._chunks or self._chunks[-1].is_full():
                self._chunks.append(Chunk())
            item = self.trans(data)
            if item is None:
                return False
            self._chunks[-1].items.append(item)
            return True

    def clear(self) -> None:
        """Remove every item."""
        with self._lock:
            self._chunks = []

    def snapshot(self, tail: int = 0) -> tuple[list[Chunk], int, bool]:
        """Return (chunks, item count, changed) unaffected by later pushes.

        With a positive tail, only the last tail items are kept, permanently;
        changed tells whether that discarded anything.
        """
        with self._lock:
            changed = False
            if tail > 0 and count_items(self._chunks) > tail:
                changed = True
                self._keep_tail(tail)

            chunks = list(self._chunks)
            if chunks:
                if tail > 0 and len(chunks) > 1:
                    chunks[0] = chunks[0].copy()
                chunks[-1] = chunks[-1].copy()
            return chunks, count_items(chunks), changed

    def _keep_tail(self, tail: int) -> None:
        num_chunks = 0
        left = tail
        for chunk in reversed(self._chunks):
            if left <= 0:
                break
            num_chunks += 1
            left -= chunk.count

        min_index = len(self._chunks) - num_chunks
        self._cache.retire(*self._chunks[:min_index])
        kept = self._chunks[min_index:]

        left = tail
        for pos in range(len(kept) - 1, -1, -1):
            chunk = kept[pos]
            if chunk.count > left:
                kept[pos] = Chunk(chunk.items[chunk.count - left :])
                self._cache.retire(chunk)
                break
            left -= chunk.count
        self._chunks = kept