"""Task and todo updates with status transitions and validation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Optional

from taskflow.core.errors.errors import ErrorManager
from taskflow.providers.base import TaskProvider
from taskflow.providers.manager import ProviderManager
from taskflow.tasks.models import Task, TaskMetadata, TodoAnalysisResult, TodoUpdateResult
from taskflow.workflow.models import TodoUpdateRequest
from taskflow.workflow.status import StatusService
from taskflow.workflow.validation import ValidationService

logger = logging.getLogger(__name__)

SUMMARY_SEPARATOR = "\n\n---\n\n"


class UpdateService:
    """Reads and mutates existing tasks.

    Every mutation is validated before it reaches the provider. Provider
    calls run inside an error boundary so registered handlers see every
    failure.
    """

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

    async def get_task(self, task_id: str, provider: Optional[str] = None) -> Task:
        async with self._provider(provider, "get_task") as task_provider:
            return await task_provider.get_task(task_id)

    async def get_task_metadata(self, task_id: str, provider: Optional[str] = None) -> TaskMetadata:
        """Task summary with checklist stats and its status view."""
        async with self._provider(provider, "get_task_metadata") as task_provider:
            task = await task_provider.get_task(task_id)
            analysis = await task_provider.analyze_todos(task_id)

        return TaskMetadata(
            id=task.id,
            title=task.title,
            status=task.status,
            type=task.type or "Unknown",
            todo_stats=analysis.stats,
            status_info=self._status_service.get_task_status(task.status),
        )

    async def update_task(self, task_id: str, updates: Any, provider: Optional[str] = None) -> Task:
        """Apply a partial update of title, taskType and/or status.

        Raises:
            ValidationError: If the update data or the new status is rejected
            ProviderError: If the provider call fails
        """
        self._validation_service.validate_task_update_data(updates)

        task_type = updates.get("taskType")
        if task_type is not None:
            task_type = self._validation_service.validate_task_type(task_type)

        status = updates.get("status")
        if status:
            task = await self.get_task(task_id, provider)
            self._validation_service.validate_status_transition(task.status, status)

        async with self._provider(provider, "update_task") as task_provider:
            return await task_provider.update_task(
                task_id,
                title=updates.get("title"),
                task_type=task_type,
                status=status or None,
            )

    async def update_task_status(
        self, task_id: str, new_status: Any, provider: Optional[str] = None
    ) -> Task:
        task = await self.get_task(task_id, provider)
        self._validation_service.validate_status_transition(task.status, new_status)

        async with self._provider(provider, "update_task_status") as task_provider:
            updated = await task_provider.update_task_status(task_id, new_status)

        logger.info(f"Task {task_id} status: '{task.status}' -> '{new_status}'")
        return updated

    async def analyze_todos(
        self, task_id: str, provider: Optional[str] = None
    ) -> TodoAnalysisResult:
        async with self._provider(provider, "analyze_todos") as task_provider:
            return await task_provider.analyze_todos(task_id)

    async def update_todos(
        self, task_id: str, updates: Any, provider: Optional[str] = None
    ) -> TodoUpdateResult:
        """Apply checklist changes and let progress drive the status.

        When at least one todo changed, the recommended status for the new
        completion percentage is computed. It is applied automatically only
        from a status that allows auto-progression, and never into a status
        that needs human sign-off or into ``done``; otherwise it is only
        returned as a recommendation.

        Raises:
            ValidationError: If the updates are malformed
            ConfigurationError: If a canonical status has no label
            ProviderError: If a provider call fails
        """
        self._validation_service.validate_todo_update_data(updates)
        requests = [
            TodoUpdateRequest(todo_text=update["todoText"], completed=update["completed"])
            for update in updates
        ]

        async with self._provider(provider, "update_todos") as task_provider:
            result = await task_provider.update_todos(task_id, requests)
            analysis = await task_provider.analyze_todos(task_id)
            task = await task_provider.get_task(task_id)

        recommended: Optional[str] = None
        applied: Optional[str] = None

        if result.updated > 0:
            recommended = self._status_service.get_next_recommended_status(
                task.status, analysis.stats.percentage
            )
            if recommended == task.status:
                recommended = None

        if recommended and self._status_service.can_auto_apply(task.status, recommended):
            await self.update_task_status(task_id, recommended, provider)
            applied = recommended
        elif recommended:
            logger.info(
                f"Task {task_id} at {analysis.stats.percentage}%: recommending '{recommended}'"
            )

        return result.model_copy(
            update={
                "stats": analysis.stats,
                "recommended_status": recommended,
                "applied_status": applied,
            }
        )

    async def update_single_todo(
        self, task_id: str, todo_text: str, completed: bool, provider: Optional[str] = None
    ) -> bool:
        async with self._provider(provider, "update_single_todo") as task_provider:
            return await task_provider.update_single_todo(task_id, todo_text, completed)

    async def append_summary(
        self, task_id: str, summary: Any, provider: Optional[str] = None
    ) -> None:
        """Append a completion summary below a separator in the task body."""
        self._validation_service.validate_summary_data(summary)

        async with self._provider(provider, "append_summary") as task_provider:
            await task_provider.append_to_task(task_id, SUMMARY_SEPARATOR + summary)

        logger.info(f"Appended summary to task {task_id}")

    @asynccontextmanager
    async def _provider(
        self, provider: Optional[str], operation: str
    ) -> AsyncIterator[TaskProvider[Any]]:
        async with self._error_manager.error_boundary(
            component="update_service",
            operation=operation,
            provider_name=provider or self._provider_manager.default_provider_name,
        ):
            yield self._provider_manager.get_provider(provider)
