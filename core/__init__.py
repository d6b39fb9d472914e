"""
Core utilities and infrastructure for the companion core.
"""

from core.exceptions import (
    CompanionCoreException,
    MemoryException,
    PersistenceError,
    InvalidMemoryDataError,
    ExternalServiceException,
    ExternalCallError,
    ValidationException,
    InvalidInputError,
    ConfigurationError,
)
from core.logging_config import configure_logging, get_logger

__all__ = [
    "CompanionCoreException",
    "MemoryException",
    "PersistenceError",
    "InvalidMemoryDataError",
    "ExternalServiceException",
    "ExternalCallError",
    "ValidationException",
    "InvalidInputError",
    "ConfigurationError",
    "configure_logging",
    "get_logger",
]
