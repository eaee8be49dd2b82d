"""
In-memory cache store implementation for capstore.

A fixed-capacity mapping from string keys to string values. When a new key
arrives while the store is full, exactly one entry is evicted, chosen by the
active eviction policy. The policy can be swapped at any time without
touching the stored entries.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from capstore.cache_store.base import BaseCacheStore, CacheEntry, EvictionListener, EvictionPolicy
from capstore.cache_store.eviction_policies import PolicySpec, create_eviction_policy
from capstore.config import StoreConfig
from capstore.exceptions import CacheStoreError, EmptyStoreEvictionError
from capstore.utils.logging import MetricsLogger
from capstore.utils.validation import validate_capacity, validate_key, validate_value

logger = logging.getLogger(__name__)

@dataclass
class CacheMetrics:
    """
    Counters for store operations.

    Attributes:
        hits: Number of successful lookups
        misses: Number of failed lookups
        inserts: Number of puts that added a new key
        overwrites: Number of puts that replaced an existing value
        evictions: Total number of entries evicted
        evictions_by_policy: Evictions broken down by policy name
    """
    hits: int = 0
    misses: int = 0
    inserts: int = 0
    overwrites: int = 0
    evictions: int = 0
    evictions_by_policy: Dict[str, int] = field(default_factory=dict)

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups > 0 else 0.0

    def to_dict(self) -> dict:
        """Convert metrics to a dictionary for easy serialization."""
        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': self.hit_rate,
            'inserts': self.inserts,
            'overwrites': self.overwrites,
            'evictions': self.evictions,
            'evictions_by_policy': dict(self.evictions_by_policy),
        }

    def __str__(self) -> str:
        return (
            f"CacheMetrics(hits={self.hits}, misses={self.misses}, "
            f"hit_rate={self.hit_rate:.1%}, evictions={self.evictions})"
        )

class InMemoryStore(BaseCacheStore):
    """
    Capacity-bounded in-memory store with a pluggable eviction policy.

    Every public operation runs under a single store-wide lock, so choosing a
    victim and removing it are observed together with any concurrent policy
    swap. Eviction listeners are called after the lock is released.

    Args:
        capacity: Maximum number of entries, at least 1
        eviction_policy: Policy instance, EvictionPolicyType or policy name
            (defaults to LRU)

    Raises:
        InvalidConfig: If capacity is below 1 or the policy is unknown
    """

    def __init__(self, capacity: int, eviction_policy: PolicySpec = "lru"):
        validate_capacity(capacity)
        self._capacity = capacity
        self._eviction_policy = create_eviction_policy(eviction_policy)

        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._insert_seq = itertools.count()
        self._clock = itertools.count()
        self._listeners: List[EvictionListener] = []

        self._metrics = CacheMetrics()
        self._event_log = MetricsLogger(logger)

        logger.debug(
            f"Created InMemoryStore(capacity={capacity}, "
            f"eviction_policy={self._eviction_policy.name})"
        )

    @classmethod
    def from_config(cls, config: StoreConfig) -> "InMemoryStore":
        """Build a store from a validated StoreConfig."""
        return cls(capacity=config.capacity, eviction_policy=config.eviction_policy)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def put(self, key: str, value: str) -> None:
        """
        Insert or overwrite a value.

        Inserting a new key into a full store evicts one entry first.
        Overwriting an existing key never evicts and keeps its insertion
        position.

        Raises:
            ValidationError: If key or value is not a string, or key is empty
        """
        validate_key(key)
        validate_value(value)

        evicted = None
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.value = value
                self._touch(entry)
                self._metrics.overwrites += 1
            else:
                if len(self._entries) >= self._capacity:
                    evicted = self._evict_locked()
                tick = next(self._clock)
                self._entries[key] = CacheEntry(
                    value=value,
                    inserted_at=next(self._insert_seq),
                    last_accessed=tick,
                )
                self._metrics.inserts += 1

        if evicted is not None:
            self._notify_listeners(*evicted)

    def get(self, key: str) -> Tuple[Optional[str], bool]:
        """
        Look up a value.

        A hit marks the key as most recently used and counts as an access for
        LFU. Neither hits nor misses change the size or FIFO order.

        Returns:
            A ``(value, found)`` tuple; ``(None, False)`` when the key is absent.
        """
        validate_key(key)

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._metrics.misses += 1
                self._event_log.log_cache_miss(key)
                return None, False

            self._touch(entry)
            self._metrics.hits += 1
            self._event_log.log_cache_hit(key, access_count=entry.access_count)
            return entry.value, True

    def evict(self) -> str:
        """
        Evict the entry chosen by the active eviction policy.

        Returns:
            str: The evicted key

        Raises:
            EmptyStoreEvictionError: If the store holds no entries
        """
        with self._lock:
            if not self._entries:
                raise EmptyStoreEvictionError("Cannot evict from an empty store")
            evicted = self._evict_locked()

        self._notify_listeners(*evicted)
        return evicted[0]

    def set_eviction_policy(self, policy: PolicySpec) -> None:
        """
        Replace the active eviction policy.

        Stored entries and their access history are kept; the next eviction
        uses the new policy.

        Raises:
            InvalidConfig: If the policy is unknown
        """
        new_policy = create_eviction_policy(policy)
        with self._lock:
            old_policy = self._eviction_policy
            self._eviction_policy = new_policy
            self._event_log.log_policy_change(old_policy.name, new_policy.name)

    def get_eviction_policy(self) -> EvictionPolicy:
        with self._lock:
            return self._eviction_policy

    def delete(self, key: str) -> bool:
        """
        Delete a key from the store. Deletion is not an eviction: listeners
        are not called and eviction metrics are unchanged.

        Returns:
            bool: True if the key was found and deleted, False otherwise
        """
        validate_key(key)
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> List[str]:
        """Snapshot of the stored keys in insertion order."""
        with self._lock:
            return list(self._entries)

    def items(self) -> List[Tuple[str, str]]:
        """Snapshot of ``(key, value)`` pairs in insertion order. Does not count as access."""
        with self._lock:
            return [(key, entry.value) for key, entry in self._entries.items()]

    def peek_entry(self, key: str) -> Optional[CacheEntry]:
        """Return a copy of the bookkeeping for ``key`` without counting an access."""
        with self._lock:
            entry = self._entries.get(key)
            return replace(entry) if entry is not None else None

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def add_eviction_listener(self, listener: EvictionListener) -> None:
        """
        Register a callback invoked as ``listener(key, value, policy_name)``
        after each eviction.
        """
        with self._lock:
            self._listeners.append(listener)

    def remove_eviction_listener(self, listener: EvictionListener) -> bool:
        """
        Unregister a callback.

        Returns:
            bool: True if the listener was registered
        """
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                return False
            return True

    def get_metrics(self) -> CacheMetrics:
        """
        Get a snapshot of the current store metrics.

        Returns:
            CacheMetrics: A copy, unaffected by later operations
        """
        with self._lock:
            return replace(
                self._metrics,
                evictions_by_policy=dict(self._metrics.evictions_by_policy)
            )

    def get_stats(self) -> dict:
        """Get store state and metrics as a dictionary."""
        with self._lock:
            stats = {
                'size': len(self._entries),
                'capacity': self._capacity,
                'eviction_policy': self._eviction_policy.name,
                'listeners': len(self._listeners),
            }
            stats.update(self._metrics.to_dict())
            return stats

    def _touch(self, entry: CacheEntry) -> None:
        entry.last_accessed = next(self._clock)
        entry.access_count += 1

    def _evict_locked(self) -> Tuple[str, str, str]:
        """Remove the policy's victim. Caller holds the lock and ensures entries exist."""
        policy = self._eviction_policy
        key = policy.select_victim(self._entries)
        if key is None or key not in self._entries:
            raise CacheStoreError(
                f"Eviction policy {policy.name} selected {key!r}, which is not in the store"
            )
        entry = self._entries.pop(key)

        self._metrics.evictions += 1
        self._metrics.evictions_by_policy[policy.name] = (
            self._metrics.evictions_by_policy.get(policy.name, 0) + 1
        )
        self._event_log.log_eviction(key, policy.name, len(self._entries), self._capacity)
        return key, entry.value, policy.name

    def _notify_listeners(self, key: str, value: str, policy_name: str) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(key, value, policy_name)
            except Exception as e:
                logger.error(f"Eviction listener {listener!r} failed for '{key}': {e}", exc_info=True)

    def __repr__(self) -> str:
        return (
            f"InMemoryStore(size={self.size}, capacity={self._capacity}, "
            f"eviction_policy={self.get_eviction_policy().name})"
        )
