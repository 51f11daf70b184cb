"""Task creation with validation and the configured initial status."""

import logging
from typing import Any, Optional

from taskflow.core.errors.errors import ErrorManager
from taskflow.providers.manager import ProviderManager
from taskflow.tasks.models import Task
from taskflow.workflow.status import StatusService
from taskflow.workflow.validation import ValidationService

logger = logging.getLogger(__name__)


class CreationService:
    """Creates tasks through the selected provider."""

    def __init__(
        self,
        provider_manager: ProviderManager,
        status_service: StatusService,
        validation_service: ValidationService,
        error_manager: ErrorManager,
    ):
        self._provider_manager = provider_manager
        self._status_service = status_service
        self._validation_service = validation_service
        self._error_manager = error_manager

    def get_default_status(self) -> str:
        """Display label given to every new task."""
        return self._status_service.get_default_status()

    async def create_task(
        self, title: Any, task_type: Any, description: Any, provider: Optional[str] = None
    ) -> Task:
        """Validate and create a task in the default status.

        The task type is stored as spelled in the configuration, whatever
        case the caller used.

        Raises:
            ValidationError: If title, type or description are rejected
            ConfigurationError: If the default status has no label
            ProviderError: If the provider call fails
        """
        self._validation_service.validate_task_creation_data(title, task_type, description)
        canonical_type = self._validation_service.validate_task_type(task_type)
        status = self.get_default_status()

        async with self._error_manager.error_boundary(
            component="creation_service",
            operation="create_task",
            provider_name=provider or self._provider_manager.default_provider_name,
        ):
            task_provider = self._provider_manager.get_provider(provider)
            task = await task_provider.create_task(title, canonical_type, description, status)

        logger.info(f"Created {canonical_type} task {task.id} in '{status}'")
        return task
