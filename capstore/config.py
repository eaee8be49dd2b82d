"""
Store configuration.

``StoreConfig`` validates the settings a store is built from and can be
loaded from environment variables:

- CAPSTORE_CAPACITY: Maximum number of entries (default 2)
- CAPSTORE_EVICTION_POLICY: fifo, lru or lfu (default lru)
"""

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from capstore.cache_store.base import EvictionPolicyType
from capstore.exceptions import InvalidConfig

DEFAULT_CAPACITY = 2
DEFAULT_EVICTION_POLICY = EvictionPolicyType.LRU


class StoreConfig(BaseModel):
    """Configuration for an InMemoryStore."""

    capacity: int = Field(DEFAULT_CAPACITY, ge=1, description="Maximum number of entries")
    eviction_policy: EvictionPolicyType = Field(
        DEFAULT_EVICTION_POLICY, description="Policy used when the store is full"
    )

    @classmethod
    def create(cls, **settings: Any) -> "StoreConfig":
        """
        Build a config, raising InvalidConfig instead of pydantic's error.

        Policy names are matched case-insensitively.
        """
        policy = settings.get("eviction_policy")
        if isinstance(policy, str):
            settings["eviction_policy"] = policy.strip().lower()
        try:
            return cls(**settings)
        except PydanticValidationError as e:
            raise InvalidConfig("Invalid store configuration", original_exception=e) from e

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "StoreConfig":
        """
        Load the config from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Raises:
            InvalidConfig: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        settings = {}

        capacity = environ.get("CAPSTORE_CAPACITY")
        if capacity is not None:
            try:
                settings["capacity"] = int(capacity)
            except ValueError as e:
                raise InvalidConfig(
                    f"CAPSTORE_CAPACITY must be an integer, got '{capacity}'",
                    original_exception=e
                ) from e

        policy = environ.get("CAPSTORE_EVICTION_POLICY")
        if policy is not None:
            settings["eviction_policy"] = policy

        return cls.create(**settings)
