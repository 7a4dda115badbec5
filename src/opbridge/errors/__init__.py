"""opbridge error handling.

Every error raised by the workflows derives from ``OpBridgeError`` and is
fatal for the invocation that raised it.
"""

from .exceptions import (
    AmountError,
    ClientError,
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InsufficientBalanceError,
    NetworkError,
    OpBridgeError,
    QueryError,
    TimeoutError,
    TransactionError,
    ValidationError,
    create_missing_config_error,
    create_timeout_error,
)

__all__ = [
    "OpBridgeError",
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorContext",
    "ConfigurationError",
    "ValidationError",
    "AmountError",
    "InsufficientBalanceError",
    "NetworkError",
    "QueryError",
    "TransactionError",
    "TimeoutError",
    "ClientError",
    "create_missing_config_error",
    "create_timeout_error",
]
