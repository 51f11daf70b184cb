"""Provider manager: builds configured providers and routes requests.

Providers are created from the ``providers`` configuration section through
named factories and kept for the lifetime of the process.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from taskflow.core.errors.errors import ConfigurationError, ErrorContext, ProviderError
from taskflow.core.errors.models import ConfigurationErrorContext, ProviderErrorContext

from .base import TaskProvider
from .memory.provider import create_memory_provider
from .models import ProviderConfig, ProvidersConfig

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, Dict[str, Any]], TaskProvider[Any]]

DEFAULT_FACTORIES: Dict[str, ProviderFactory] = {
    "memory": create_memory_provider,
}


def providers_config_from_dict(data: Any) -> ProvidersConfig:
    """Validate the raw ``providers`` configuration section.

    Raises:
        ConfigurationError: If the section is malformed
    """
    try:
        # Entries under "available" arrive as plain mappings
        return ProvidersConfig.model_validate(data, strict=False)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "providers"
        raise ConfigurationError(
            message=f"Invalid providers configuration: {first['msg']} (at {location})",
            context=ErrorContext.create(
                error_type="ConfigurationError",
                error_location="providers.manager.providers_config_from_dict",
                component="provider_manager",
                operation="providers_config_from_dict",
            ),
            config_context=ConfigurationErrorContext(
                config_key=location,
                config_section="providers",
                expected_type=first["type"],
                actual_value=str(first.get("input", "<missing>")),
            ),
            cause=e,
        ) from e


class ProviderManager:
    """Holds the enabled task providers and the name of the default one.

    Thread-safe for registration and lookup.
    """

    def __init__(
        self,
        config: ProvidersConfig,
        factories: Optional[Dict[str, ProviderFactory]] = None,
    ):
        self._lock = threading.RLock()
        self._config = config
        self._factories = dict(DEFAULT_FACTORIES if factories is None else factories)
        self._providers: Dict[str, TaskProvider[Any]] = {}
        self._default = config.default

        for name, provider_config in config.available.items():
            if not provider_config.enabled:
                logger.info(f"Provider '{name}' is disabled")
                continue
            self.register_provider(name, self._create(name, provider_config))

        if self._default not in self._providers:
            if not self._providers:
                raise self._error("No providers are available or enabled", "initialize")
            fallback = next(iter(self._providers))
            logger.warning(
                f"Default provider '{self._default}' not available, using '{fallback}' instead"
            )
            self._default = fallback

    @property
    def default_provider_name(self) -> str:
        return self._default

    def register_provider(self, name: str, provider: TaskProvider[Any]) -> None:
        """Register a provider instance under a name."""
        with self._lock:
            self._providers[name] = provider
        logger.info(f"Registered provider: {name} (type: {provider.provider_type})")

    def get_provider(self, name: Optional[str] = None) -> TaskProvider[Any]:
        """Get a provider by name, or the default provider.

        Raises:
            ProviderError: If the provider is not registered
        """
        provider_name = name or self._default
        with self._lock:
            provider = self._providers.get(provider_name)

        if provider is None:
            raise self._error(
                f"Provider '{provider_name}' is not available or enabled. "
                f"Available: {', '.join(self.available_providers())}",
                "get_provider",
                provider_name=provider_name,
            )
        return provider

    def available_providers(self) -> List[str]:
        with self._lock:
            return list(self._providers)

    def is_provider_available(self, name: str) -> bool:
        with self._lock:
            return name in self._providers

    def provider_info(self, name: Optional[str] = None) -> Dict[str, Any]:
        """Name, type and enabled flag of a registered provider."""
        provider_name = name or self._default
        provider = self.get_provider(provider_name)
        entry = self._config.available.get(provider_name)
        return {
            "name": provider.name,
            "type": provider.provider_type,
            "enabled": entry.enabled if entry else False,
        }

    async def initialize_all(self) -> None:
        """Initialize every registered provider.

        Raises:
            ProviderError: From the first provider that fails
        """
        for provider in list(self._providers.values()):
            await provider.initialize()

    async def shutdown_all(self) -> None:
        for provider in list(self._providers.values()):
            await provider.shutdown()

    def _create(self, name: str, provider_config: ProviderConfig) -> TaskProvider[Any]:
        factory_name = provider_config.provider or name
        factory = self._factories.get(factory_name)
        if factory is None:
            raise self._error(
                f"Unsupported provider '{factory_name}' for entry '{name}'. "
                f"Supported: {', '.join(sorted(self._factories))}",
                "create_provider",
                provider_name=name,
            )

        try:
            provider = factory(name, dict(provider_config.settings))
        except Exception as e:
            logger.error(f"Failed to create provider '{name}': {e}")
            raise self._error(
                f"Failed to create provider '{name}': {e}",
                "create_provider",
                provider_name=name,
                cause=e,
            ) from e

        logger.debug(f"Created provider '{name}' with factory '{factory_name}'")
        return provider

    @staticmethod
    def _error(
        message: str,
        operation: str,
        provider_name: str = "unknown",
        cause: Optional[Exception] = None,
    ) -> ProviderError:
        return ProviderError(
            message=message,
            context=ErrorContext.create(
                error_type="ProviderError",
                error_location=f"ProviderManager.{operation}",
                component="provider_manager",
                operation=operation,
            ),
            provider_context=ProviderErrorContext(
                provider_name=provider_name,
                provider_type="task",
                operation=operation,
            ),
            cause=cause,
        )
