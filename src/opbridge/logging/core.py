"""Core logging interfaces and data structures for opbridge.

This module defines the fundamental logging interfaces, data structures,
and configuration options for the opbridge logging system.
"""

import sys
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve a level from its (case-insensitive) name."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown log level: {name!r}") from None

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]


_LEVEL_RANKS = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARNING: 2,
    LogLevel.ERROR: 3,
    LogLevel.CRITICAL: 4,
}


@dataclass
class LogContext:
    """Log context information."""

    component: Optional[str] = None
    operation: Optional[str] = None
    chain: Optional[str] = None
    tx_hash: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        return {
            "component": self.component,
            "operation": self.operation,
            "chain": self.chain,
            "tx_hash": self.tx_hash,
            "metadata": self.metadata,
        }


@dataclass
class LogEntry:
    """Log entry data structure."""

    timestamp: float
    level: LogLevel
    message: str
    logger_name: str
    context: LogContext
    exception: Optional[BaseException] = None


class LogConfig:
    """Log configuration."""

    def __init__(
        self,
        name: str = "opbridge",
        level: LogLevel = LogLevel.INFO,
        format_type: str = "text",
        handlers: List[str] = None,
    ):
        self.name = name
        self.level = level
        self.format_type = format_type
        self.handlers = ["console"] if handlers is None else handlers


class LogFormatter(ABC):
    """Abstract log formatter."""

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        """Format log entry."""
        pass


class LogHandler(ABC):
    """Abstract log handler."""

    def __init__(self, name: str = None):
        self.name = name or self.__class__.__name__
        self.formatter: Optional[LogFormatter] = None
        self._lock = threading.RLock()

    def set_formatter(self, formatter: LogFormatter) -> None:
        """Set formatter."""
        with self._lock:
            self.formatter = formatter

    @abstractmethod
    def emit(self, entry: LogEntry) -> None:
        """Emit log entry."""
        pass


class LogManager:
    """Log manager for orchestrating logging operations.

    Entries are routed to the handlers named in ``config.handlers``; the
    console handler is installed when that list names it.
    """

    def __init__(self, config: LogConfig = None):
        self.config = config or LogConfig()
        self.handlers: Dict[str, LogHandler] = {}
        self._lock = threading.RLock()

        self._setup_defaults()

    def _setup_defaults(self) -> None:
        """Setup default logging components."""
        from .formatters import JSONFormatter, TextFormatter
        from .handlers import ConsoleHandler

        if "console" not in self.config.handlers:
            return
        console = ConsoleHandler()
        if self.config.format_type == "json":
            console.set_formatter(JSONFormatter())
        else:
            console.set_formatter(TextFormatter())
        self.add_handler("console", console)

    def add_handler(self, name: str, handler: LogHandler) -> None:
        """Add handler."""
        with self._lock:
            self.handlers[name] = handler
            if name not in self.config.handlers:
                self.config.handlers.append(name)

    def log(
        self,
        level: LogLevel,
        message: str,
        logger_name: str = "opbridge",
        context: LogContext = None,
        exception: BaseException = None,
    ) -> None:
        """Log a message."""
        with self._lock:
            entry = LogEntry(
                timestamp=time.time(),
                level=level,
                message=message,
                logger_name=logger_name,
                context=context or LogContext(),
                exception=exception,
            )

            for handler_name in self.config.handlers:
                if handler_name in self.handlers:
                    self.handlers[handler_name].emit(entry)

    def shutdown(self) -> None:
        """Shutdown log manager."""
        with self._lock:
            for handler in self.handlers.values():
                if hasattr(handler, "close"):
                    handler.close()

            self.handlers.clear()


class OpBridgeLogger:
    """opbridge logger implementation.

    Loggers are registered process-wide and always log through the current
    global manager, so module-level loggers survive ``setup_logging``.
    """

    def __init__(self, name: str, level: LogLevel = LogLevel.INFO):
        self.name = name
        self.level = level
        self._lock = threading.RLock()

    def set_level(self, level: LogLevel) -> None:
        """Set log level."""
        with self._lock:
            self.level = level

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check if logger is enabled for level."""
        return level.rank >= self.level.rank

    def log(
        self,
        level: LogLevel,
        message: str,
        context: LogContext = None,
        exception: BaseException = None,
    ) -> None:
        """Log a message."""
        if self.is_enabled_for(level):
            get_manager().log(
                level=level,
                message=message,
                logger_name=self.name,
                context=context,
                exception=exception,
            )

    def debug(self, message: str, **kwargs) -> None:
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        self.log(LogLevel.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log an error with the exception currently being handled."""
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            kwargs.setdefault("exception", exc_info[1])
        self.log(LogLevel.ERROR, message, **kwargs)


# Global log manager instance
_global_manager: Optional[LogManager] = None
_loggers: Dict[str, OpBridgeLogger] = {}
_registry_lock = threading.RLock()


def get_manager() -> LogManager:
    """Get the global log manager, creating a default one if needed."""
    global _global_manager
    if _global_manager is None:
        _global_manager = LogManager()
    return _global_manager


def get_logger(name: str = "opbridge") -> OpBridgeLogger:
    """Get logger instance."""
    with _registry_lock:
        if name not in _loggers:
            _loggers[name] = OpBridgeLogger(name, get_manager().config.level)
        return _loggers[name]


def setup_logging(config: LogConfig) -> LogManager:
    """Setup logging with configuration."""
    global _global_manager
    with _registry_lock:
        _global_manager = LogManager(config)
        for logger in _loggers.values():
            logger.set_level(config.level)
    return _global_manager


def shutdown_logging() -> None:
    """Shutdown logging."""
    global _global_manager
    with _registry_lock:
        if _global_manager is not None:
            _global_manager.shutdown()
            _global_manager = None
        for logger in _loggers.values():
            logger.set_level(LogLevel.INFO)
