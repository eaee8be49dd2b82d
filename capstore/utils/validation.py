from typing import Any

from capstore.exceptions import InvalidConfig, ValidationError

def validate_key(key: Any):
    """Ensures key is a string. The empty string is a valid key."""
    if not isinstance(key, str):
        raise ValidationError("Key must be a string.")

def validate_value(value: Any):
    """Ensures value is a string. Empty strings are valid values."""
    if not isinstance(value, str):
        raise ValidationError("Value must be a string.")

def validate_capacity(capacity: Any):
    """Checks that capacity is an integer of at least 1."""
    # bool is an int subclass, but True is not a meaningful capacity
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidConfig(f"Capacity must be an integer, got {type(capacity).__name__}.")

    if capacity < 1:
        raise InvalidConfig(f"Capacity must be at least 1, got {capacity}.")
