"""Task providers and the manager that routes requests to them."""

from .base import TaskProvider
from .manager import DEFAULT_FACTORIES, ProviderManager, providers_config_from_dict
from .memory import InMemoryTaskProvider, InMemoryTaskProviderSettings, create_memory_provider
from .models import ProviderConfig, ProvidersConfig, ProviderSettings

__all__ = [
    "TaskProvider",
    "ProviderManager",
    "DEFAULT_FACTORIES",
    "providers_config_from_dict",
    "InMemoryTaskProvider",
    "InMemoryTaskProviderSettings",
    "create_memory_provider",
    "ProviderConfig",
    "ProvidersConfig",
    "ProviderSettings",
]
