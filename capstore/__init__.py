"""
capstore - Bounded Key-Value Store
==================================

A fixed-capacity key-value store with pluggable eviction policies.
"""

__version__ = "0.1.0"

from .cache_store import (
    BaseCacheStore,
    CacheEntry,
    CacheMetrics,
    EvictionPolicy,
    EvictionPolicyType,
    FIFOEvictionPolicy,
    LRUEvictionPolicy,
    LFUEvictionPolicy,
    InMemoryStore,
    create_eviction_policy
)
from .config import StoreConfig
from .exceptions import (
    CapstoreError,
    ConfigurationError,
    InvalidConfig,
    CacheStoreError,
    EmptyStoreEvictionError,
    ValidationError
)

__all__ = [
    "BaseCacheStore",
    "CacheEntry",
    "CacheMetrics",
    "EvictionPolicy",
    "EvictionPolicyType",
    "FIFOEvictionPolicy",
    "LRUEvictionPolicy",
    "LFUEvictionPolicy",
    "InMemoryStore",
    "create_eviction_policy",
    "StoreConfig",
    "CapstoreError",
    "ConfigurationError",
    "InvalidConfig",
    "CacheStoreError",
    "EmptyStoreEvictionError",
    "ValidationError"
]
