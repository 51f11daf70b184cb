"""Provider settings and provider selection configuration."""

from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field

from taskflow.core.models import StrictBaseModel


class ProviderSettings(StrictBaseModel):
    """Base settings for task providers.

    Backend-specific fields belong to the provider's own settings subclass,
    which the provider's factory builds from the raw ``settings`` mapping of
    its configuration entry.
    """


class ProviderConfig(StrictBaseModel):
    """One entry of the ``providers.available`` configuration section."""

    # Entries may carry descriptive keys (such as a distribution tier)
    model_config = ConfigDict(extra="ignore")

    provider: Optional[str] = Field(
        default=None, description="Factory to build the provider with; defaults to the entry name"
    )
    enabled: bool = Field(default=True)
    settings: Dict[str, Any] = Field(default_factory=dict, description="Raw provider settings")


class ProvidersConfig(StrictBaseModel):
    """Which providers to build and which one serves requests by default."""

    default: str = Field(..., min_length=1, description="Name of the default provider")
    available: Dict[str, ProviderConfig] = Field(default_factory=dict)
