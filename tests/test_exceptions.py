import pytest
from capstore.exceptions import (
    CapstoreError,
    ConfigurationError,
    InvalidConfig,
    CacheStoreError,
    EmptyStoreEvictionError,
    ValidationError
)

def test_capstore_error_inheritance():
    """Test that all exceptions inherit from CapstoreError."""
    assert issubclass(ConfigurationError, CapstoreError)
    assert issubclass(InvalidConfig, CapstoreError)
    assert issubclass(CacheStoreError, CapstoreError)
    assert issubclass(EmptyStoreEvictionError, CapstoreError)
    assert issubclass(ValidationError, CapstoreError)

def test_invalid_config_is_a_value_error():
    """InvalidConfig can be caught as ConfigurationError or ValueError."""
    assert issubclass(InvalidConfig, ConfigurationError)
    assert issubclass(InvalidConfig, ValueError)

def test_empty_store_eviction_error_hierarchy():
    assert issubclass(EmptyStoreEvictionError, CacheStoreError)
    assert not issubclass(EmptyStoreEvictionError, ValueError)

def test_configuration_error_with_message():
    """Test ConfigurationError with a custom message."""
    msg = "Invalid configuration"
    error = ConfigurationError(msg)
    assert str(error) == msg

def test_invalid_config_with_original_exception():
    """Test InvalidConfig with an original exception."""
    original = ValueError("Invalid value")
    error = InvalidConfig("Configuration failed", original)
    assert "Original:" in str(error)
    assert "Invalid value" in str(error)
    assert error.original_exception is original

def test_validation_error_inheritance():
    """Test that ValidationError inherits from both CapstoreError and ValueError."""
    assert issubclass(ValidationError, ValueError)
    assert issubclass(ValidationError, CapstoreError)

def test_empty_store_eviction_error_usage():
    with pytest.raises(CacheStoreError):
        raise EmptyStoreEvictionError("Cannot evict from an empty store")
