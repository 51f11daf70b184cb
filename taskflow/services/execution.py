"""Task execution: walks an agent through a task's checklist one todo at a time."""

import logging
from typing import List, Optional, Tuple

from taskflow.tasks.models import ExecutionResult, ExecutionStep
from taskflow.workflow.status import StatusService

from .update import UpdateService

logger = logging.getLogger(__name__)


class ExecutionService:
    """Drives a task forward from its checklist.

    Each call reports the next todo to implement, starts the task once work
    is detected and advances it when the checklist is complete. Status moves
    go through the same auto-apply rule as todo updates.
    """

    def __init__(self, update_service: UpdateService, status_service: StatusService):
        self._update_service = update_service
        self._status_service = status_service

    async def execute_task(
        self,
        task_id: str,
        auto_update_status: bool = True,
        provider: Optional[str] = None,
    ) -> ExecutionResult:
        """Work out the next step for a task.

        Args:
            task_id: Task to execute
            auto_update_status: Apply progress-driven status moves
            provider: Provider name; the default provider when omitted

        Returns:
            ExecutionResult with the next action for the caller

        Raises:
            ConfigurationError: If a canonical status has no label
            ProviderError: If a provider call fails
        """
        metadata = await self._update_service.get_task_metadata(task_id, provider)
        analysis = await self._update_service.analyze_todos(task_id, provider)
        stats = analysis.stats
        status = metadata.status
        steps: List[ExecutionStep] = [
            ExecutionStep(kind="status_update", message="Starting execution", completed=True)
        ]
        recommended: Optional[str] = None
        applied: Optional[str] = None

        if (
            auto_update_status
            and stats.percentage > 0
            and status == self._status_service.get_not_started_status()
        ):
            recommended, applied = await self._advance(task_id, status, stats.percentage, provider)
            if applied:
                steps.append(self._status_step(status, applied, "work detected"))
                status = applied

        pending = [todo for todo in analysis.todos if not todo.completed]

        if stats.total == 0:
            logger.info(f"Task {task_id} has no todos")
            return ExecutionResult(
                task_id=task_id,
                action="needs_analysis",
                message=(
                    f"Task '{metadata.title}' has no todos. Break the work down into "
                    f"todos before executing it"
                ),
                stats=stats,
                recommended_status=recommended,
                applied_status=applied,
                steps=steps,
            )

        if not pending:
            if auto_update_status and stats.percentage >= 100:
                final_recommended, final_applied = await self._advance(
                    task_id, status, stats.percentage, provider
                )
                recommended = final_recommended or recommended
                if final_applied:
                    steps.append(self._status_step(status, final_applied, "all todos complete"))
                    applied = final_applied

            return ExecutionResult(
                task_id=task_id,
                action="completed",
                message="No remaining todos",
                stats=stats,
                recommended_status=recommended,
                applied_status=applied,
                steps=steps,
            )

        next_todo = pending[0].text
        steps.append(
            ExecutionStep(kind="todo", message=f"Next todo: {next_todo}", todo_text=next_todo)
        )
        logger.debug(f"Task {task_id}: next todo '{next_todo}' ({len(pending)} remaining)")

        return ExecutionResult(
            task_id=task_id,
            action="needs_implementation",
            message=(
                f"Implement '{next_todo}', then mark it completed with update_todos "
                f"and execute the task again"
            ),
            stats=stats,
            next_todo=next_todo,
            remaining=len(pending),
            recommended_status=recommended,
            applied_status=applied,
            steps=steps,
        )

    async def _advance(
        self, task_id: str, current_status: str, percentage: int, provider: Optional[str]
    ) -> Tuple[Optional[str], Optional[str]]:
        recommended = self._status_service.get_next_recommended_status(current_status, percentage)
        if not recommended or recommended == current_status:
            return None, None

        if not self._status_service.can_auto_apply(current_status, recommended):
            logger.info(f"Task {task_id} at {percentage}%: recommending '{recommended}'")
            return recommended, None

        await self._update_service.update_task_status(task_id, recommended, provider)
        return recommended, recommended

    @staticmethod
    def _status_step(previous: str, new: str, reason: str) -> ExecutionStep:
        return ExecutionStep(
            kind="status_update",
            message=f"Status updated from '{previous}' to '{new}' ({reason})",
            completed=True,
        )
