"""
Base classes for cache stores and eviction policies.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Mapping, Optional, Tuple

class EvictionPolicyType(str, Enum):
    """Built-in eviction policies."""
    FIFO = "fifo"  # Oldest insertion first
    LRU = "lru"  # Least recently accessed first
    LFU = "lfu"  # Least frequently accessed first

@dataclass
class CacheEntry:
    """
    A stored value together with the bookkeeping eviction policies rank by.

    Attributes:
        value: The cached value
        inserted_at: Insertion sequence number, unchanged by overwrites
        last_accessed: Access tick of the latest get hit or put
        access_count: Number of accesses, starting at 1 on insertion
    """
    value: str
    inserted_at: int
    last_accessed: int
    access_count: int = 1

# Called with (key, value, policy_name) after an entry has been evicted
EvictionListener = Callable[[str, str, str], None]

class EvictionPolicy(ABC):
    """Abstract base class for eviction policies."""

    policy_type: Optional[EvictionPolicyType] = None

    @property
    def name(self) -> str:
        """Short name used in logs and metrics."""
        if self.policy_type is not None:
            return self.policy_type.value
        return type(self).__name__

    @abstractmethod
    def rank(self, entry: CacheEntry) -> Tuple[int, ...]:
        """
        Sort key for an entry; the entry with the smallest rank is evicted first.

        Args:
            entry: The entry to rank

        Returns:
            Tuple[int, ...]: Ordering key, lowest evicted first
        """
        pass

    def select_victim(self, entries: Mapping[str, CacheEntry]) -> Optional[str]:
        """Return the single key to evict, or None when there are no entries."""
        if not entries:
            return None
        return min(entries, key=lambda key: self.rank(entries[key]))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

class BaseCacheStore(ABC):
    """Abstract base class for capacity-bounded cache stores with pluggable eviction."""

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """
        Insert or overwrite a value.

        Args:
            key: The key to store under.
            value: The value to store.

        Note:
            Inserting a new key into a full store evicts exactly one entry first.
        """
        pass

    @abstractmethod
    def get(self, key: str) -> Tuple[Optional[str], bool]:
        """
        Look up a value.

        Args:
            key: The key to look up.

        Returns:
            A ``(value, found)`` tuple; ``(None, False)`` when the key is absent.
        """
        pass

    @abstractmethod
    def evict(self) -> str:
        """
        Evict one entry chosen by the active eviction policy.

        Returns:
            str: The evicted key
        """
        pass

    @abstractmethod
    def set_eviction_policy(self, policy) -> None:
        """Replace the active eviction policy without touching stored entries."""
        pass

    @abstractmethod
    def get_eviction_policy(self) -> EvictionPolicy:
        """Get the active eviction policy for this cache store."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete a key from the store.

        Returns:
            bool: True if the key was found and deleted, False otherwise
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries."""
        pass

    @property
    @abstractmethod
    def size(self) -> int:
        """Get the number of stored entries."""
        pass

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Get the maximum number of entries."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """Snapshot of the stored keys in insertion order."""
        pass

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
