"""
fetchstate.cache

Cache store contract, in-memory store, and key derivation.

Responsibilities:
- Define the two-operation `CacheStore` protocol the engine depends on.
- Provide a thread-safe in-memory store (optionally LRU-bounded).
- Derive deterministic cache keys from (namespace, filter type, filter value).
- Package the store + key function + on/off switch as a `CachePolicy`.
"""

from __future__ import annotations

import dataclasses
import json
import threading
from collections import OrderedDict
from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

KeyFunction = Callable[[Any], str]


@runtime_checkable
class CacheStore(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryCacheStore:
    """
    Process-local key/value store. Safe for concurrent get/set from several threads.
    With `max_entries > 0` the least recently used entry is evicted on overflow.
    """

    def __init__(self, *, max_entries: int = 0) -> None:
        self._max_entries = max_entries
        self._entries: OrderedDict[str, Any] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            if key not in self._entries:
                return None
            self._entries.move_to_end(key)
            return self._entries[key]

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            if self._max_entries and len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def remove(self, key: str) -> bool:
        with self._lock:
            if key not in self._entries:
                return False
            del self._entries[key]
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


def qualified_name(obj: Any) -> str:
    return f"{getattr(obj, '__module__', '?')}.{getattr(obj, '__qualname__', repr(obj))}"


def stringify_filter(value: Any) -> str:
    """
    Canonical text for a filter value. Two filters that stringify identically share a
    cache entry; giving filters a distinguishing representation is the caller's job.
    """

    if isinstance(value, BaseModel):
        return value.model_dump_json()
    try:
        return _dumps(_canonical(value))
    except _NotCanonical:
        return repr(value)


class _NotCanonical(Exception):
    pass


def _dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def _canonical(value: Any) -> Any:
    # JSON-ready form whose text does not depend on insertion or iteration order.
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _canonical(dataclasses.asdict(value))
    if isinstance(value, Mapping):
        # json would turn 1 and "1" into the same key.
        if not all(isinstance(k, str) for k in value):
            raise _NotCanonical
        return {k: _canonical(v) for k, v in value.items()}
    if isinstance(value, set | frozenset):
        return sorted((_canonical(v) for v in value), key=_dumps)
    if isinstance(value, list | tuple):
        return [_canonical(v) for v in value]
    raise _NotCanonical


def default_cache_key(namespace: str, filter_value: Any) -> str:
    filter_type = qualified_name(type(filter_value))
    return f"{namespace}|{filter_type}|{stringify_filter(filter_value)}"


class CachePolicy:
    """
    Cache capability composed into a query engine.

    `enabled` may be toggled at any time; a disabled policy neither reads nor writes.
    """

    def __init__(
        self,
        store: CacheStore,
        *,
        namespace: str,
        key: KeyFunction | None = None,
        enabled: bool = True,
    ) -> None:
        self.store = store
        self.namespace = namespace
        self.enabled = enabled
        self._key = key

    def key_for(self, filter_value: Any) -> str:
        if self._key is not None:
            return f"{self.namespace}|{self._key(filter_value)}"
        return default_cache_key(self.namespace, filter_value)

    def lookup(self, key: str) -> Any | None:
        if not self.enabled:
            return None
        return self.store.get(key)

    def write(self, key: str, value: Any) -> None:
        # `None` doubles as the store's miss marker, so it is never cached.
        if self.enabled and value is not None:
            self.store.set(key, value)

    def remove(self, key: str) -> bool:
        remover = getattr(self.store, "remove", None)
        if remover is None:
            return False
        return bool(remover(key))


# --- Module Notes -----------------------------------------------------------
# There is no TTL and no invalidation graph: a successful execution overwrites its entry.
