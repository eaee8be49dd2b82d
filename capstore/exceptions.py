class CapstoreError(Exception):
    """Base class for all capstore exceptions."""
    pass

class ConfigurationError(CapstoreError):
    """Raised when there is an error in the configuration."""
    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original: {str(self.original_exception)})"
        return self.message

class InvalidConfig(ConfigurationError, ValueError):
    """Raised when a store is configured with invalid settings (e.g. capacity < 1)."""
    pass

class CacheStoreError(CapstoreError):
    """Base class for cache store related errors."""
    pass

class EmptyStoreEvictionError(CacheStoreError):
    """Raised when an eviction is requested on a store that holds no entries."""
    pass

class ValidationError(CapstoreError, ValueError):
    """Raised when input validation fails."""
    pass
