"""Base error classes with structured error context.

This module provides the foundation for the error handling system:
structured error types, error context and an error manager that runs
registered handlers before re-raising.
"""

import inspect
import logging
import traceback
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional, Type, Union

from .models import (
    ConfigurationErrorContext,
    ErrorContextData,
    ProviderErrorContext,
    ValidationErrorDetail,
)

logger = logging.getLogger(__name__)


class ErrorContext:
    """Structured context attached to every taskflow error."""

    def __init__(self, context_data: ErrorContextData):
        """Initialize error context.

        Args:
            context_data: Required error context data
        """
        self._data = context_data

    @classmethod
    def create(
        cls, error_type: str, error_location: str, component: str, operation: str
    ) -> "ErrorContext":
        """Create a new error context with required data.

        Args:
            error_type: Type of error
            error_location: Location in code
            component: Component raising error
            operation: Operation being performed

        Returns:
            New ErrorContext instance
        """
        context_data = ErrorContextData(
            error_type=error_type,
            error_location=error_location,
            component=component,
            operation=operation,
        )
        return cls(context_data)

    @property
    def data(self) -> ErrorContextData:
        """Get the context data."""
        return self._data

    @property
    def timestamp(self) -> datetime:
        """Get the context creation timestamp."""
        return self._data.timestamp

    def __str__(self) -> str:
        return f"ErrorContext({self._data.model_dump()})"


class BaseError(Exception):
    """Base class for all taskflow errors.

    Carries a human-actionable message, the structured context and the
    optional underlying cause.
    """

    def __init__(self, message: str, context: ErrorContext, cause: Optional[Exception] = None):
        """Initialize error.

        Args:
            message: Error message
            context: Required error context
            cause: Optional cause exception
        """
        self.message = message
        self.context = context
        self.cause = cause
        self.timestamp = datetime.now()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary suitable for a tool response.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.data.model_dump(mode="json"),
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        cause_str = f" (caused by: {self.cause})" if self.cause else ""
        return f"{self.__class__.__name__}: {self.message}{cause_str}"


class ValidationError(BaseError):
    """Raised when caller-supplied task data is rejected."""

    def __init__(
        self,
        message: str,
        validation_errors: List[ValidationErrorDetail],
        context: ErrorContext,
        cause: Optional[Exception] = None,
    ):
        """Initialize validation error.

        Args:
            message: Error message
            validation_errors: List of validation error details
            context: Required error context
            cause: Optional cause exception
        """
        self.validation_errors = validation_errors
        super().__init__(message, context, cause)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["validation_errors"] = [e.model_dump() for e in self.validation_errors]
        return result


class ConfigurationError(BaseError):
    """Raised when the workflow configuration is missing or invalid.

    Always a startup/config defect; callers should not retry.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext,
        config_context: ConfigurationErrorContext,
        cause: Optional[Exception] = None,
    ):
        """Initialize configuration error.

        Args:
            message: Error message
            context: Required error context
            config_context: Required configuration error context
            cause: Optional cause exception
        """
        self.config_context = config_context
        super().__init__(message, context, cause)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["config_context"] = self.config_context.model_dump()
        return result


class ProviderError(BaseError):
    """Raised when a task provider operation fails."""

    def __init__(
        self,
        message: str,
        context: ErrorContext,
        provider_context: ProviderErrorContext,
        cause: Optional[Exception] = None,
    ):
        """Initialize provider error.

        Args:
            message: Error message
            context: Required error context
            provider_context: Required provider error context
            cause: Optional cause exception
        """
        self.provider_context = provider_context
        super().__init__(message, context, cause)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["provider_context"] = self.provider_context.model_dump()
        return result


ErrorHandlerFunc = Callable[[BaseError, Dict[str, Any]], None]
AsyncErrorHandlerFunc = Callable[[BaseError, Dict[str, Any]], Awaitable[None]]

ErrorHandler = Union[ErrorHandlerFunc, AsyncErrorHandlerFunc]


class ErrorManager:
    """Centralized error management with customizable handlers.

    Handlers observe errors leaving an error boundary; they never swallow
    them. Errors are always re-raised after the handlers ran.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[BaseError], List[ErrorHandler]] = {}
        self._global_handlers: List[ErrorHandler] = []

    def register(self, error_type: Type[BaseError], handler: ErrorHandler) -> None:
        """Register an error handler for a specific error type.

        Args:
            error_type: Type of error to handle
            handler: Handler function or coroutine
        """
        self._handlers.setdefault(error_type, []).append(handler)

    def register_global(self, handler: ErrorHandler) -> None:
        """Register a global error handler that processes all errors.

        Args:
            handler: Handler function or coroutine
        """
        self._global_handlers.append(handler)

    async def _handle_error(self, error: BaseError, context: Dict[str, Any]) -> None:
        handlers: List[ErrorHandler] = []
        for error_type, type_handlers in self._handlers.items():
            if isinstance(error, error_type):
                handlers.extend(type_handlers)
        handlers.extend(self._global_handlers)

        for handler in handlers:
            try:
                if inspect.iscoroutinefunction(handler):
                    await handler(error, context)
                else:
                    handler(error, context)
            except Exception as e:
                # A broken handler must not mask the original error
                logger.error(f"Error in error handler: {e}")
                logger.error(traceback.format_exc())

    @asynccontextmanager
    async def error_boundary(
        self, component: str, operation: str, provider_name: str = "unknown"
    ) -> AsyncIterator[None]:
        """Run registered handlers for errors raised inside the block.

        Taskflow errors are re-raised unchanged. Any other exception is
        converted to a ProviderError, since the only code running inside a
        boundary is provider I/O.

        Args:
            component: Component name
            operation: Operation being performed
            provider_name: Provider involved in the operation

        Raises:
            BaseError: Propagated after handling
        """
        context = {"component": component, "operation": operation, "provider": provider_name}

        try:
            yield
        except BaseError as e:
            await self._handle_error(e, context)
            raise
        except Exception as e:
            error = ProviderError(
                message=f"{operation} failed on provider '{provider_name}': {e}",
                context=ErrorContext.create(
                    error_type=type(e).__name__,
                    error_location=f"{component}.{operation}",
                    component=component,
                    operation=operation,
                ),
                provider_context=ProviderErrorContext(
                    provider_name=provider_name,
                    provider_type="task",
                    operation=operation,
                ),
                cause=e,
            )
            await self._handle_error(error, context)
            raise error from e


class LoggingHandler:
    """Error handler that logs errors with configurable verbosity."""

    def __init__(
        self,
        level: int = logging.ERROR,
        include_context: bool = True,
        include_traceback: bool = True,
        logger_name: Optional[str] = None,
    ):
        self.level = level
        self.include_context = include_context
        self.include_traceback = include_traceback
        self.logger = logging.getLogger(logger_name or __name__)

    def __call__(self, error: BaseError, context: Dict[str, Any]) -> None:
        message = f"{type(error).__name__}: {error.message}"

        if self.include_context:
            message += f"\nContext: {error.context.data.model_dump()}"

        if self.include_traceback and error.cause:
            cause_tb = "".join(
                traceback.format_exception(
                    type(error.cause), error.cause, error.cause.__traceback__
                )
            )
            message += f"\nCaused by: {cause_tb}"

        self.logger.log(self.level, message)


def default_logging_handler(error: BaseError, context: Dict[str, Any]) -> None:
    """Default logging handler for errors.

    Args:
        error: Error to log
        context: Boundary context data
    """
    logger.error(f"{error.__class__.__name__}: {error.message}")
    if error.cause:
        logger.debug(f"Caused by: {error.cause}")
    logger.debug(f"Context: {error.context.data.model_dump()} boundary={context}")


def create_default_manager() -> ErrorManager:
    """Create an error manager with the default logging handler registered."""
    manager = ErrorManager()
    manager.register_global(default_logging_handler)
    return manager
