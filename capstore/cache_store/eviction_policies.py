"""
Eviction policies for cache stores.

Policies are stateless: they rank the bookkeeping a store keeps for each
entry, so a policy swapped in at runtime sees the full access history of
the entries already stored.
"""

from typing import Dict, Tuple, Type, Union

from typing_extensions import TypeAlias

from capstore.exceptions import InvalidConfig
from .base import CacheEntry, EvictionPolicy, EvictionPolicyType

PolicySpec: TypeAlias = Union[EvictionPolicy, EvictionPolicyType, str]

class FIFOEvictionPolicy(EvictionPolicy):
    """
    First In First Out eviction policy.

    Evicts the entry inserted earliest among the present keys. Accesses and
    overwrites do not change an entry's position.
    """

    policy_type = EvictionPolicyType.FIFO

    def rank(self, entry: CacheEntry) -> Tuple[int, ...]:
        return (entry.inserted_at,)

class LRUEvictionPolicy(EvictionPolicy):
    """
    Least Recently Used eviction policy.

    Evicts the entry whose latest ``get`` hit or ``put`` is the oldest. Ties
    are broken by insertion order.
    """

    policy_type = EvictionPolicyType.LRU

    def rank(self, entry: CacheEntry) -> Tuple[int, ...]:
        return (entry.last_accessed, entry.inserted_at)

class LFUEvictionPolicy(EvictionPolicy):
    """
    Least Frequently Used eviction policy.

    Evicts the entry with the lowest access count. Entries with the same
    count are evicted first-in first-out.
    """

    policy_type = EvictionPolicyType.LFU

    def rank(self, entry: CacheEntry) -> Tuple[int, ...]:
        return (entry.access_count, entry.inserted_at)

_POLICY_CLASSES: Dict[EvictionPolicyType, Type[EvictionPolicy]] = {
    EvictionPolicyType.FIFO: FIFOEvictionPolicy,
    EvictionPolicyType.LRU: LRUEvictionPolicy,
    EvictionPolicyType.LFU: LFUEvictionPolicy,
}

def create_eviction_policy(policy: PolicySpec) -> EvictionPolicy:
    """
    Resolve a policy instance, enum member or name to an EvictionPolicy.

    Args:
        policy: An EvictionPolicy instance (returned as is), an
            EvictionPolicyType, or a case-insensitive name such as ``"lru"``

    Returns:
        EvictionPolicy: The policy to use

    Raises:
        InvalidConfig: If the name is unknown or the argument has the wrong type
    """
    if isinstance(policy, EvictionPolicy):
        return policy

    if isinstance(policy, str):
        try:
            policy = EvictionPolicyType(policy.strip().lower())
        except ValueError as e:
            valid = ", ".join(p.value for p in EvictionPolicyType)
            raise InvalidConfig(
                f"Unknown eviction policy '{policy}'. Expected one of: {valid}",
                original_exception=e
            ) from e
        return _POLICY_CLASSES[policy]()

    raise InvalidConfig(f"Invalid eviction policy: {policy!r}")
