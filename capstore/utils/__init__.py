"""capstore utility modules."""

from .logging import (
    get_logger,
    get_metrics_logger,
    initialize_logging,
    reset_logging,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
    with_correlation_id
)
from .logging_config import (
    LoggingPresets,
    configure_from_environment,
    get_logging_config
)
from .validation import validate_key, validate_value, validate_capacity

__all__ = [
    # Logging functions
    "get_logger",
    "get_metrics_logger",
    "initialize_logging",
    "reset_logging",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "with_correlation_id",
    # Logging configuration
    "LoggingPresets",
    "configure_from_environment",
    "get_logging_config",
    # Validation
    "validate_key",
    "validate_value",
    "validate_capacity"
]
