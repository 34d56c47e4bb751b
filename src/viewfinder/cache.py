"""Resolution cache.

Maps a cache key to the virtual path a previous lookup confirmed.  Only
hits are stored: a miss is always re-probed, so a template deployed
after a failed lookup is picked up by the next one.

Keys look like::

    :ViewCacheEntry:viewfinder.engine.ViewEngine:primary:Index:Home:

with ``%`` and ``:`` percent-escaped inside each component, so two
different (identity, scope, name, group) tuples never share a key.
Specific names (``~/...``, ``/...``) are stored without a group id
since they do not depend on it.

Thread safety:
    The resolver adds no locking of its own.  Stores must tolerate
    concurrent ``get``/``put``; racing writers store the same value, so
    the last write winning is harmless.
"""

import threading
from typing import Protocol

KEY_PREFIX = ":ViewCacheEntry"


class CacheStore(Protocol):
    """Key/value store backing the resolution cache."""

    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...


class MemoryCacheStore:
    """Thread-safe in-process store.

    Entries live as long as the store.  Give each engine its own store
    (the default) or share one explicitly between engines that search
    the same tree.
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._entries[key] = value

    def clear(self) -> None:
        """Forget every cached location (e.g. after a redeploy)."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class NullCacheStore:
    """Store that remembers nothing. Disables caching without touching callers."""

    __slots__ = ()

    def get(self, key: str) -> str | None:
        return None

    def put(self, key: str, value: str) -> None:
        return None


def _escape(component: str) -> str:
    return component.replace("%", "%25").replace(":", "%3A")


def make_cache_key(identity: str, scope: str, name: str, group_id: str) -> str:
    """Build the cache key for one (identity, scope, name, group) tuple."""
    parts = (identity, scope, name, group_id)
    return KEY_PREFIX + ":" + ":".join(_escape(p) for p in parts) + ":"


class ResolutionCache:
    """A cache store bound to one resolver identity."""

    __slots__ = ("_identity", "_store")

    def __init__(self, store: CacheStore, identity: str) -> None:
        self._store = store
        self._identity = identity

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def store(self) -> CacheStore:
        return self._store

    def key_for(self, scope: str, name: str, group_id: str) -> str:
        return make_cache_key(self._identity, scope, name, group_id)

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def put(self, key: str, path: str) -> None:
        self._store.put(key, path)
