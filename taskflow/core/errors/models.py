"""Strict Pydantic models for error context.

No fallbacks, no defaults, no optional fields unless explicitly required.
"""

from datetime import datetime

from pydantic import Field

from taskflow.core.models import StrictBaseModel


class ErrorContextData(StrictBaseModel):
    """Where and during what an error happened."""

    error_type: str = Field(..., description="Type of error")
    error_location: str = Field(..., description="Location in code where error occurred")
    component: str = Field(..., description="Component that raised the error")
    operation: str = Field(..., description="Operation being performed")
    timestamp: datetime = Field(default_factory=datetime.now, description="When error occurred")


class ValidationErrorDetail(StrictBaseModel):
    """A single rejected field."""

    location: str = Field(..., description="Field or location of validation error")
    message: str = Field(..., description="Validation error message")
    error_type: str = Field(..., description="Type of validation error")


class ConfigurationErrorContext(StrictBaseModel):
    """Strict configuration error context."""

    config_key: str = Field(..., description="Configuration key that failed")
    config_section: str = Field(..., description="Configuration section")
    expected_type: str = Field(..., description="Expected type of configuration")
    actual_value: str = Field(..., description="Actual value provided")


class ProviderErrorContext(StrictBaseModel):
    """Strict provider error context."""

    provider_name: str = Field(..., description="Name of the provider")
    provider_type: str = Field(..., description="Type of provider")
    operation: str = Field(..., description="Operation that failed")
