"""
Custom exception hierarchy for the companion core.
Provides structured error handling with proper context.
"""

from typing import Optional, Dict, Any


class CompanionCoreException(Exception):
    """Base exception for all companion core errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize exception with message and optional context.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# ==================== Memory Exceptions ====================


class MemoryException(CompanionCoreException):
    """Base exception for memory-related errors."""

    pass


class PersistenceError(MemoryException):
    """Raised when a record cannot be written to or read from the store."""

    def __init__(self, operation: str, details: Optional[str] = None):
        super().__init__(
            message=f"Persistence operation failed: {operation}",
            error_code="PERSISTENCE_ERROR",
            context={"operation": operation, "details": details},
        )


class InvalidMemoryDataError(MemoryException):
    """Raised when memory data is invalid."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"Invalid memory data: {field} - {reason}",
            error_code="INVALID_MEMORY_DATA",
            context={"field": field, "reason": reason},
        )


# ==================== External Service Exceptions ====================


class ExternalServiceException(CompanionCoreException):
    """Base exception for external service errors."""

    pass


class ExternalCallError(ExternalServiceException):
    """Raised when the language model endpoint fails or returns garbage."""

    def __init__(self, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(
            message="Language model request failed",
            error_code="EXTERNAL_CALL_ERROR",
            context={"status_code": status_code, "details": details},
        )
        self.status_code = status_code


# ==================== Validation Exceptions ====================


class ValidationException(CompanionCoreException):
    """Base exception for validation errors."""

    pass


class InvalidInputError(ValidationException):
    """Raised when input validation fails."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"Invalid input: {field} - {reason}",
            error_code="INVALID_INPUT",
            context={"field": field, "reason": reason},
        )


class ConfigurationError(ValidationException):
    """Raised when configuration is invalid."""

    def __init__(self, setting: str, reason: str):
        super().__init__(
            message=f"Invalid configuration: {setting} - {reason}",
            error_code="CONFIGURATION_ERROR",
            context={"setting": setting, "reason": reason},
        )
