"""Wiring of the workflow engine, providers and services."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from taskflow.core.errors.errors import ErrorManager, create_default_manager
from taskflow.core.settings import TaskflowSettings
from taskflow.providers.manager import ProviderManager, providers_config_from_dict
from taskflow.workflow.loader import read_config_document, workflow_config_from_dict
from taskflow.workflow.models import WorkflowConfig
from taskflow.workflow.status import StatusService
from taskflow.workflow.validation import ValidationService

from .creation import CreationService
from .execution import ExecutionService
from .update import UpdateService

logger = logging.getLogger(__name__)


@dataclass
class TaskflowServices:
    """Everything a request handler needs, built once at startup."""

    config: WorkflowConfig
    provider_manager: ProviderManager
    error_manager: ErrorManager
    status: StatusService
    validation: ValidationService
    creation: CreationService
    update: UpdateService
    execution: ExecutionService

    async def close(self) -> None:
        await self.provider_manager.shutdown_all()


def build_services(
    config: WorkflowConfig,
    provider_manager: ProviderManager,
    error_manager: Optional[ErrorManager] = None,
) -> TaskflowServices:
    """Build the service graph around one workflow configuration."""
    error_manager = error_manager or create_default_manager()
    status = StatusService(config)
    validation = ValidationService(config, status)

    update = UpdateService(provider_manager, status, validation, error_manager)

    return TaskflowServices(
        config=config,
        provider_manager=provider_manager,
        error_manager=error_manager,
        status=status,
        validation=validation,
        creation=CreationService(provider_manager, status, validation, error_manager),
        update=update,
        execution=ExecutionService(update, status),
    )


def _default_providers_section(settings: TaskflowSettings) -> Dict[str, Any]:
    return {
        "default": "memory",
        "available": {
            "memory": {"settings": {"todo_preview_count": settings.todo_preview_count}},
        },
    }


async def bootstrap_services(settings: Optional[TaskflowSettings] = None) -> TaskflowServices:
    """Load configuration, build and initialize providers, and wire services.

    A configuration without a ``providers`` section runs on the in-memory
    provider.

    Raises:
        ConfigurationError: If the configuration file is missing or invalid
        ProviderError: If a provider cannot be created or initialized
    """
    settings = settings or TaskflowSettings()
    document = read_config_document(settings.workflow_config_path)
    config = workflow_config_from_dict(document)

    providers_section = document.get("providers") if isinstance(document, dict) else None
    providers_config = providers_config_from_dict(
        providers_section or _default_providers_section(settings)
    )
    if settings.default_provider:
        providers_config = providers_config.model_copy(
            update={"default": settings.default_provider}
        )

    provider_manager = ProviderManager(providers_config)
    await provider_manager.initialize_all()

    logger.info(
        f"Taskflow ready with providers {provider_manager.available_providers()} "
        f"(default: {provider_manager.default_provider_name})"
    )
    return build_services(config, provider_manager)
