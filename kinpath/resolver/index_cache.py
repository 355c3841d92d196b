"""Graph indexes shared between requests, per scope, until the scope changes."""

import threading
import time
from typing import Callable, NamedTuple

from loguru import logger

from kinpath.resolver.graph_index import GraphIndex
from kinpath.tree_stores.base import TreeStore


class _CacheEntry(NamedTuple):
    index: GraphIndex
    generation: int
    built_at: float


class GraphIndexCache:
    """Caches one GraphIndex per scope (tree id, or None for the merged scope).

    An entry is served while the store's generation counter for the scope is
    unchanged and the entry is younger than ``ttl_seconds``. Indexes are
    immutable once built, so readers need no locking beyond the entry lookup.
    """

    def __init__(
        self,
        tree_store: TreeStore,
        *,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._tree_store = tree_store
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str | None, _CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, tree_id: str | None = None) -> GraphIndex:
        """Get the index for a scope, rebuilding it when stale.

        Raises:
            EmptyScopeError: If the scope has no persons
        """
        generation = self._tree_store.get_generation(tree_id)
        with self._lock:
            entry = self._entries.get(tree_id)
        if entry is not None and self._is_fresh(entry, generation):
            logger.debug(f"Graph index cache HIT for {tree_id or '<merged>'}")
            return entry.index

        logger.debug(f"Graph index cache MISS for {tree_id or '<merged>'}")
        snapshot = self._tree_store.get_snapshot(tree_id)
        index = GraphIndex.build(snapshot)
        with self._lock:
            self._entries[tree_id] = _CacheEntry(index, snapshot.generation, self._clock())
        return index

    def invalidate(self, tree_id: str | None = None) -> None:
        """Drop the cached index of one scope."""
        with self._lock:
            self._entries.pop(tree_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _is_fresh(self, entry: _CacheEntry, generation: int) -> bool:
        if entry.generation != generation:
            return False
        return self._clock() - entry.built_at < self._ttl_seconds
