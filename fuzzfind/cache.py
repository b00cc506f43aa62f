"""Per-chunk cache of query results."""

from __future__ import annotations

import threading
from typing import Any, Protocol, Sequence

from .constants import QUERY_CACHE_MAX


class _ChunkLike(Protocol):
    def is_full(self) -> bool: ...


class ChunkCache:
    """Maps a chunk and a query string to the results of that query on the chunk.

    Only full chunks are cached, since partial chunks can still grow.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[_ChunkLike, dict[str, Sequence[Any]]] = {}

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._cache = {}

    def retire(self, *args: _ChunkLike) -> None:
        """Drop the entries of the given chunks."""
        with self._lock:
            for chunk in args:
                self._cache.pop(chunk, None)

    def add(self, chunk: _ChunkLike, key: str, results: Sequence[Any]) -> None:
        """Remember results for the query key on chunk, if worth caching."""
        if not key or not chunk.is_full() or len(results) > QUERY_CACHE_MAX:
            return
        with self._lock:
            self._cache.setdefault(chunk, {})[key] = results

    def lookup(self, chunk: _ChunkLike, key: str) -> Sequence[Any] | None:
        """Return the results cached for exactly this query, or None."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            entries = self._cache.get(chunk)
            return None if entries is None else entries.get(key)

    def search(self, chunk: _ChunkLike, key: str) -> Sequence[Any] | None:
        """Return the results of the longest cached prefix or suffix of key, or None."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            entries = self._cache.get(chunk)
            if entries is None:
                return None
            for idx in range(1, len(key)):
                for substr in (key[: len(key) - idx], key[idx:]):
                    if substr in entries:
                        return entries[substr]
        return None