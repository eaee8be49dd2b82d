"""
Cache store package for capstore.

This package contains the cache store base classes, eviction policies and store implementations.
"""

# Base classes
from .base import BaseCacheStore, CacheEntry, EvictionListener, EvictionPolicy, EvictionPolicyType

# Eviction Policies
from .eviction_policies import (
    FIFOEvictionPolicy,
    LRUEvictionPolicy,
    LFUEvictionPolicy,
    PolicySpec,
    create_eviction_policy
)

# Store Implementations (from stores subpackage)
from .stores import CacheMetrics, InMemoryStore

__all__ = [
    # Base classes
    "BaseCacheStore",
    "CacheEntry",
    "EvictionListener",
    "EvictionPolicy",
    "EvictionPolicyType",
    # Eviction Policies
    "FIFOEvictionPolicy",
    "LRUEvictionPolicy",
    "LFUEvictionPolicy",
    "PolicySpec",
    "create_eviction_policy",
    # Stores
    "CacheMetrics",
    "InMemoryStore"
]
