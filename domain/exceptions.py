"""
Custom exceptions for Confecção OP.

All exceptions inherit from ConfeccaoBaseException for easier catching.
Each exception includes a message and optional details dict.
"""


class ConfeccaoBaseException(Exception):
    """Base exception for all production-order errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """String representation with details if available."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ValidationError(ConfeccaoBaseException):
    """Data validation failed."""
    pass


class ImportValidationError(ConfeccaoBaseException):
    """Import file validation failed."""
    pass


class NotFoundError(ConfeccaoBaseException):
    """Requested resource not found."""
    pass


class OrderStateError(ConfeccaoBaseException):
    """Operation not allowed in the order's current status."""
    pass


class ReconciliationError(ConfeccaoBaseException):
    """Payment reconciliation failed."""
    pass


class YarnUsageError(ConfeccaoBaseException):
    """Yarn usage launch rejected."""
    pass
