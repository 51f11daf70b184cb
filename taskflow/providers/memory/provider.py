"""In-memory implementation of the TaskProvider.

Keeps tasks and their checklists in process memory. Used as the reference
backend, for local runs without credentials, and in tests.
"""

import asyncio
import itertools
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pydantic import Field

from taskflow.providers.base import TaskProvider
from taskflow.providers.models import ProviderSettings
from taskflow.tasks.models import Task, TodoAnalysisResult, TodoUpdateResult
from taskflow.workflow.models import TodoItem, TodoUpdateRequest
from taskflow.workflow.progress import DEFAULT_PREVIEW_COUNT, calculate_todo_stats

logger = logging.getLogger(__name__)


class InMemoryTaskProviderSettings(ProviderSettings):
    """In-memory provider settings.

    No host, credentials or connection needed.
    """

    id_prefix: str = Field(default="task", min_length=1, description="Prefix of generated task ids")
    base_url: Optional[str] = Field(default=None, description="Base URL used to build task links")
    todo_preview_count: int = Field(
        default=DEFAULT_PREVIEW_COUNT, ge=1, description="Pending todos listed in stats"
    )


class InMemoryTaskProvider(TaskProvider[InMemoryTaskProviderSettings]):
    """Task provider backed by dictionaries.

    Mutations are serialised with an asyncio lock; tasks are stored as
    immutable models and replaced on update.
    """

    def __init__(
        self, name: str = "memory", settings: Optional[InMemoryTaskProviderSettings] = None
    ):
        super().__init__(
            name=name,
            provider_type="memory",
            settings=settings or InMemoryTaskProviderSettings(),
        )
        self._lock = asyncio.Lock()
        self._tasks: Dict[str, Task] = {}
        self._todos: Dict[str, List[TodoItem]] = {}
        self._counter = itertools.count(1)

    async def _initialize(self) -> None:
        logger.debug(f"In-memory task store '{self.name}' ready")

    async def _shutdown(self) -> None:
        async with self._lock:
            self._tasks.clear()
            self._todos.clear()

    async def get_task(self, task_id: str) -> Task:
        self._check_ready("get_task")
        return self._require_task(task_id, "get_task")

    async def create_task(
        self, title: str, task_type: str, description: str, status: str
    ) -> Task:
        self._check_ready("create_task")
        async with self._lock:
            task_id = f"{self.settings.id_prefix}-{next(self._counter)}"
            now = datetime.now()
            task = Task(
                id=task_id,
                title=title,
                status=status,
                type=task_type,
                description=description,
                url=f"{self.settings.base_url.rstrip('/')}/{task_id}" if self.settings.base_url else None,
                created_time=now,
                last_edited_time=now,
            )
            self._tasks[task_id] = task
            self._todos[task_id] = []

        logger.info(f"Created task {task_id} '{title}' ({task_type}) in status '{status}'")
        return task

    async def update_task(
        self,
        task_id: str,
        title: Optional[str] = None,
        task_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Task:
        self._check_ready("update_task")
        changes: Dict[str, Any] = {}
        if title is not None:
            changes["title"] = title
        if task_type is not None:
            changes["type"] = task_type
        if status is not None:
            changes["status"] = status

        async with self._lock:
            return self._replace(task_id, changes, "update_task")

    async def update_task_status(self, task_id: str, status: str) -> Task:
        self._check_ready("update_task_status")
        async with self._lock:
            task = self._replace(task_id, {"status": status}, "update_task_status")

        logger.info(f"Task {task_id} moved to '{status}'")
        return task

    async def add_todos(self, task_id: str, texts: Sequence[str], completed: bool = False) -> None:
        """Append checklist items to a task."""
        self._check_ready("add_todos")
        async with self._lock:
            self._require_task(task_id, "add_todos")
            todos = self._todos[task_id]
            for text in texts:
                todos.append(TodoItem(text=text, completed=completed, index=len(todos)))
            self._touch(task_id)

    async def analyze_todos(self, task_id: str) -> TodoAnalysisResult:
        self._check_ready("analyze_todos")
        self._require_task(task_id, "analyze_todos")
        todos = list(self._todos[task_id])
        return TodoAnalysisResult(
            todos=todos,
            stats=calculate_todo_stats(todos, self.settings.todo_preview_count),
        )

    async def update_todos(
        self, task_id: str, updates: List[TodoUpdateRequest]
    ) -> TodoUpdateResult:
        self._check_ready("update_todos")
        updated = 0
        failed = 0

        async with self._lock:
            self._require_task(task_id, "update_todos")
            for update in updates:
                if self._set_todo(task_id, update.todo_text, update.completed):
                    updated += 1
                else:
                    failed += 1
                    logger.warning(f"Todo not found in task {task_id}: '{update.todo_text}'")
            if updated:
                self._touch(task_id)

        return TodoUpdateResult(updated=updated, failed=failed)

    async def update_single_todo(self, task_id: str, todo_text: str, completed: bool) -> bool:
        self._check_ready("update_single_todo")
        async with self._lock:
            self._require_task(task_id, "update_single_todo")
            found = self._set_todo(task_id, todo_text, completed)
            if found:
                self._touch(task_id)
        return found

    async def append_to_task(self, task_id: str, content: str) -> None:
        self._check_ready("append_to_task")
        async with self._lock:
            task = self._require_task(task_id, "append_to_task")
            self._replace(
                task_id, {"description": (task.description or "") + content}, "append_to_task"
            )

    def _set_todo(self, task_id: str, todo_text: str, completed: bool) -> bool:
        todos = self._todos[task_id]
        position = self._find_todo(todos, todo_text)
        if position is None:
            return False
        todos[position] = todos[position].model_copy(update={"completed": completed})
        return True

    @staticmethod
    def _find_todo(todos: List[TodoItem], todo_text: str) -> Optional[int]:
        for position, todo in enumerate(todos):
            if todo.text == todo_text:
                return position

        # Agents often change case or surrounding whitespace
        wanted = todo_text.strip().casefold()
        for position, todo in enumerate(todos):
            if todo.text.strip().casefold() == wanted:
                return position
        return None

    def _require_task(self, task_id: str, operation: str) -> Task:
        if task_id not in self._tasks:
            raise self._error(f"Task not found: {task_id}", operation)
        return self._tasks[task_id]

    def _replace(self, task_id: str, changes: Dict[str, Any], operation: str) -> Task:
        task = self._require_task(task_id, operation)
        updated = task.model_copy(update={**changes, "last_edited_time": datetime.now()})
        self._tasks[task_id] = updated
        return updated

    def _touch(self, task_id: str) -> None:
        self._replace(task_id, {}, "touch")

    def _check_ready(self, operation: str) -> None:
        if not self._initialized:
            raise self._error(f"Provider '{self.name}' is not initialized", operation)


def create_memory_provider(
    name: str, settings: Optional[Dict[str, Any]] = None
) -> InMemoryTaskProvider:
    """Factory used by the provider manager for ``memory`` entries."""
    return InMemoryTaskProvider(
        name=name, settings=InMemoryTaskProviderSettings(**(settings or {}))
    )
