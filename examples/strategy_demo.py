"""
Strategy Pattern Demo
=====================

A two-entry store that switches eviction policy between insertions:
LFU while adding a, b and c; LRU for d; FIFO for e.
"""

from capstore import InMemoryStore, LFUEvictionPolicy, LRUEvictionPolicy, FIFOEvictionPolicy
from capstore.utils import LoggingPresets


def on_evict(key: str, value: str, policy: str) -> None:
    print(f"   Evicting '{key}' ({value}) by {policy} strategy")


def demonstrate_strategy_pattern():
    """Run the store through three eviction policies."""

    print("=== Eviction Strategy Demo ===\n")

    store = InMemoryStore(capacity=2, eviction_policy=LFUEvictionPolicy())
    store.add_eviction_listener(on_evict)

    print("1. LFU policy:")
    store.put("a", "1")
    store.put("b", "2")
    store.put("c", "3")
    print(f"   Contents: {dict(store.items())}\n")

    print("2. LRU policy:")
    store.set_eviction_policy(LRUEvictionPolicy())
    store.put("d", "4")
    print(f"   Contents: {dict(store.items())}\n")

    print("3. FIFO policy:")
    store.set_eviction_policy(FIFOEvictionPolicy())
    store.put("e", "5")
    print(f"   Contents: {dict(store.items())}\n")

    value, found = store.get("e")
    print(f"get('e') -> {value} (found={found})")
    print(f"\n{store.get_metrics()}")


if __name__ == "__main__":
    LoggingPresets.testing()
    demonstrate_strategy_pattern()
