"""
Store implementations for the capstore cache_store module.
"""

from .in_memory import CacheMetrics, InMemoryStore

__all__ = [
    "CacheMetrics",
    "InMemoryStore"
]
