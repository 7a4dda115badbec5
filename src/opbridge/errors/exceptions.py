"""Exception hierarchy for opbridge.

This module defines the exceptions raised by the bridge workflows, providing
structured error handling and categorization:
- Configuration errors (missing environment values)
- Validation errors (malformed amounts)
- Balance errors (insufficient funds detected before any transaction)
- Network, transaction and timeout errors raised by the chain client
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""

    VALIDATION = "validation"
    NETWORK = "network"
    TRANSACTION = "transaction"
    BALANCE = "balance"
    CONFIGURATION = "configuration"
    CLIENT = "client"
    TIMEOUT = "timeout"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for an error."""

    timestamp: float = field(default_factory=time.time)
    chain: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        return {
            "timestamp": self.timestamp,
            "chain": self.chain,
            "component": self.component,
            "operation": self.operation,
            "metadata": self.metadata,
        }


class OpBridgeError(Exception):
    """Base exception for all opbridge errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context or ErrorContext()
        self.cause = cause
        self.metadata = metadata or {}
        self.timestamp = time.time()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
            "metadata": self.metadata,
            "timestamp": self.timestamp,
        }

    def __str__(self) -> str:
        return self.message


class ConfigurationError(OpBridgeError):
    """Configuration error."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.config_key = config_key

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration error to dictionary."""
        data = super().to_dict()
        data.update({"config_key": self.config_key})
        return data


class ValidationError(OpBridgeError):
    """Validation error."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        expected: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.VALIDATION, **kwargs)
        self.field = field
        self.value = value
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        """Convert validation error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "field": self.field,
                "value": str(self.value) if self.value is not None else None,
                "expected": str(self.expected) if self.expected is not None else None,
            }
        )
        return data


class AmountError(ValidationError):
    """Token amount that cannot be represented in base units."""

    def __init__(self, message: str, value: Optional[Any] = None, **kwargs):
        super().__init__(message, field="amount", value=value, **kwargs)


class InsufficientBalanceError(OpBridgeError):
    """Balance on the source chain is lower than the requested amount."""

    def __init__(
        self,
        message: str,
        chain: Optional[str] = None,
        required: int = 0,
        available: int = 0,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.BALANCE, **kwargs)
        self.chain = chain
        self.required = required
        self.available = available

    @property
    def shortfall(self) -> int:
        return max(self.required - self.available, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert balance error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "chain": self.chain,
                "required": self.required,
                "available": self.available,
            }
        )
        return data


class NetworkError(OpBridgeError):
    """Network error."""

    def __init__(self, message: str, endpoint: Optional[str] = None, **kwargs):
        kwargs.setdefault("category", ErrorCategory.NETWORK)
        super().__init__(message, **kwargs)
        self.endpoint = endpoint

    def to_dict(self) -> Dict[str, Any]:
        """Convert network error to dictionary."""
        data = super().to_dict()
        data.update({"endpoint": self.endpoint})
        return data


class QueryError(NetworkError):
    """A read-only contract call failed."""

    def __init__(
        self,
        message: str,
        contract: Optional[str] = None,
        function_name: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.contract = contract
        self.function_name = function_name


class TransactionError(OpBridgeError):
    """Transaction submission or execution error."""

    def __init__(
        self,
        message: str,
        transaction_hash: Optional[str] = None,
        transaction_type: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.TRANSACTION, **kwargs)
        self.transaction_hash = transaction_hash
        self.transaction_type = transaction_type

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "transaction_hash": self.transaction_hash,
                "transaction_type": self.transaction_type,
            }
        )
        return data


class TimeoutError(OpBridgeError):
    """Timeout error."""

    def __init__(
        self,
        message: str,
        timeout_duration: Optional[float] = None,
        operation: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.TIMEOUT, **kwargs)
        self.timeout_duration = timeout_duration
        self.operation = operation

    def to_dict(self) -> Dict[str, Any]:
        """Convert timeout error to dictionary."""
        data = super().to_dict()
        data.update(
            {"timeout_duration": self.timeout_duration, "operation": self.operation}
        )
        return data


class ClientError(OpBridgeError):
    """Chain client misuse, e.g. a write on a read-only client."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.CLIENT, **kwargs)


# Convenience functions for common error patterns
def create_missing_config_error(key: str) -> ConfigurationError:
    """Create a configuration error for a missing environment variable."""
    return ConfigurationError(
        f"Please set {key} environment variable", config_key=key
    )


def create_timeout_error(
    operation: str, timeout_duration: float, message: Optional[str] = None
) -> TimeoutError:
    """Create a timeout error."""
    if message is None:
        message = f"Operation '{operation}' timed out after {timeout_duration} seconds"

    return TimeoutError(
        message=message, operation=operation, timeout_duration=timeout_duration
    )
