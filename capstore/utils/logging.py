"""
Structured logging for capstore.

Library modules log through ``logging.getLogger(__name__)`` and never install
handlers themselves. Applications opt in with :func:`initialize_logging`,
which builds a single process-wide :class:`LogManager`. Initialization
happens once: later calls return the existing manager unchanged until
:func:`reset_logging` is called.
"""
import json
import logging
import logging.handlers
import sys
import threading
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

# Context variable for correlation ID
correlation_id: ContextVar[Optional[str]] = ContextVar('capstore_correlation_id', default=None)

# LogRecord attributes that are not user supplied extras
_RESERVED_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message', 'asctime', 'extra_fields', 'correlation_id',
})


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter emitting one object per record.

    Each object carries timestamp, level, logger, message and source location,
    the correlation ID when one is set, exception details, and any extra
    fields passed through ``extra=`` or ``extra_fields``.
    """

    def __init__(self, include_correlation_id: bool = True):
        super().__init__()
        self.include_correlation_id = include_correlation_id

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if self.include_correlation_id:
            current = correlation_id.get() or getattr(record, 'correlation_id', None)
            if current:
                log_entry["correlation_id"] = current

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        extra_fields = getattr(record, 'extra_fields', None)
        if isinstance(extra_fields, dict):
            log_entry.update(extra_fields)

        for key, value in record.__dict__.items():
            if key.startswith('_') or key in _RESERVED_ATTRS:
                continue
            if isinstance(value, (str, int, float, bool, list, dict, type(None))):
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class CorrelationIdFilter(logging.Filter):
    """Copies the current correlation ID onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        current = correlation_id.get()
        if current:
            record.correlation_id = current
        return True


class MetricsLogger:
    """
    Emits store events as structured log records.

    Every record carries an ``event_type`` field so the events can be
    filtered out of a JSON log stream.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _emit(self, level: int, message: str, event_type: str, **fields) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(
                level,
                message,
                extra={'extra_fields': {'event_type': event_type, **fields}}
            )

    def log_eviction(self, key: str, policy: str, size: int, capacity: int, **kwargs):
        """Log an entry leaving the store because of the eviction policy."""
        self._emit(
            logging.INFO, f"Evicted '{key}' using {policy} policy", 'eviction',
            cache_key=key, policy=policy, size=size, capacity=capacity, **kwargs
        )

    def log_policy_change(self, old_policy: str, new_policy: str, **kwargs):
        """Log an eviction policy swap."""
        self._emit(
            logging.INFO, f"Eviction policy changed from {old_policy} to {new_policy}",
            'policy_change', old_policy=old_policy, new_policy=new_policy, **kwargs
        )

    def log_cache_hit(self, key: str, **kwargs):
        self._emit(logging.DEBUG, "Cache hit", 'cache_hit', cache_key=key, **kwargs)

    def log_cache_miss(self, key: str, **kwargs):
        self._emit(logging.DEBUG, "Cache miss", 'cache_miss', cache_key=key, **kwargs)


class LogManager:
    """
    Process-wide log configuration.

    Configures the ``capstore`` logger (not the root logger) with a console
    handler and an optional rotating file handler.
    """

    def __init__(self,
                 log_level: str = "INFO",
                 log_format: str = "json",
                 log_file: Optional[str] = None,
                 max_bytes: int = 10 * 1024 * 1024,  # 10MB
                 backup_count: int = 5,
                 include_correlation_id: bool = True):
        """
        Initialize the log manager.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_format: Log format ('json' or 'text')
            log_file: Path to log file (optional)
            max_bytes: Maximum size of log file before rotation
            backup_count: Number of backup files to keep
            include_correlation_id: Whether to include correlation IDs
        """
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")
        if log_format not in ("json", "text"):
            raise ValueError(f"Unknown log format: {log_format}")

        self.log_level = level
        self.log_format = log_format
        self.log_file = log_file
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.include_correlation_id = include_correlation_id

        self._handlers = []
        self.logger = logging.getLogger("capstore")
        self._configure()

    def _configure(self):
        if self.log_format == "json":
            formatter = StructuredFormatter(self.include_correlation_id)
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        handlers = [logging.StreamHandler(sys.stdout)]

        if self.log_file:
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count
            ))

        for handler in handlers:
            handler.setLevel(self.log_level)
            handler.setFormatter(formatter)
            if self.include_correlation_id:
                handler.addFilter(CorrelationIdFilter())
            self.logger.addHandler(handler)
            self._handlers.append(handler)

        self.logger.setLevel(self.log_level)

    def shutdown(self):
        """Detach and close the handlers installed by this manager."""
        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        self.logger.setLevel(logging.NOTSET)


# Process-wide log manager; created at most once, guarded by the lock
_log_manager: Optional[LogManager] = None
_log_manager_lock = threading.RLock()


def initialize_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    include_correlation_id: bool = True
) -> LogManager:
    """
    Initialize capstore logging once per process.

    The first call creates the manager; subsequent calls return it and ignore
    their arguments. Call :func:`reset_logging` first to reconfigure.

    Returns:
        The process-wide log manager
    """
    global _log_manager

    with _log_manager_lock:
        if _log_manager is None:
            _log_manager = LogManager(
                log_level=log_level,
                log_format=log_format,
                log_file=log_file,
                max_bytes=max_bytes,
                backup_count=backup_count,
                include_correlation_id=include_correlation_id
            )
    return _log_manager


def get_log_manager() -> Optional[LogManager]:
    """Return the process-wide log manager, or None if logging was never initialized."""
    with _log_manager_lock:
        return _log_manager


def reset_logging():
    """Tear down the process-wide log manager so it can be initialized again."""
    global _log_manager

    with _log_manager_lock:
        if _log_manager is not None:
            _log_manager.shutdown()
            _log_manager = None


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``capstore`` namespace.

    Does not initialize logging; records propagate to whatever the
    application configured.
    """
    if name != "capstore" and not name.startswith("capstore."):
        name = f"capstore.{name}"
    return logging.getLogger(name)


def get_metrics_logger(name: str = "capstore.metrics") -> MetricsLogger:
    """Get a metrics logger writing to ``name``."""
    return MetricsLogger(get_logger(name))


def set_correlation_id(correlation_id_value: str):
    correlation_id.set(correlation_id_value)


def get_correlation_id() -> Optional[str]:
    return correlation_id.get()


def clear_correlation_id():
    correlation_id.set(None)


class CorrelationIdContext:
    """
    Context manager that sets a correlation ID for the enclosed block.

    The previous ID is restored on exit.
    """

    def __init__(self, correlation_id_value: Optional[str] = None):
        self.correlation_id_value = correlation_id_value or str(uuid.uuid4())
        self._token = None

    def __enter__(self):
        self._token = correlation_id.set(self.correlation_id_value)
        return self.correlation_id_value

    def __exit__(self, exc_type, exc_val, exc_tb):
        correlation_id.reset(self._token)


def with_correlation_id(correlation_id_value: Optional[str] = None) -> CorrelationIdContext:
    """
    Create a correlation ID context.

    Args:
        correlation_id_value: Correlation ID value (auto-generated if None)
    """
    return CorrelationIdContext(correlation_id_value)
