"""Structured error types for taskflow."""

from .errors import (
    BaseError,
    ConfigurationError,
    ErrorContext,
    ErrorManager,
    LoggingHandler,
    ProviderError,
    ValidationError,
    create_default_manager,
    default_logging_handler,
)
from .models import (
    ConfigurationErrorContext,
    ErrorContextData,
    ProviderErrorContext,
    ValidationErrorDetail,
)

__all__ = [
    "BaseError",
    "ConfigurationError",
    "ErrorContext",
    "ErrorManager",
    "LoggingHandler",
    "ProviderError",
    "ValidationError",
    "create_default_manager",
    "default_logging_handler",
    "ConfigurationErrorContext",
    "ErrorContextData",
    "ProviderErrorContext",
    "ValidationErrorDetail",
]
