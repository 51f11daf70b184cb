"""Workflow engine: status lifecycle, validation and checklist progress."""

from .loader import load_workflow_config, read_config_document, workflow_config_from_dict
from .models import (
    DONE,
    IN_PROGRESS,
    NOT_STARTED,
    TEST,
    UNKNOWN_STATUS,
    TaskStatus,
    TodoItem,
    TodoStats,
    TodoUpdateRequest,
    WorkflowConfig,
)
from .progress import calculate_todo_stats, completion_percentage
from .status import StatusService
from .validation import ValidationService

__all__ = [
    "DONE",
    "IN_PROGRESS",
    "NOT_STARTED",
    "TEST",
    "UNKNOWN_STATUS",
    "TaskStatus",
    "TodoItem",
    "TodoStats",
    "TodoUpdateRequest",
    "WorkflowConfig",
    "StatusService",
    "ValidationService",
    "calculate_todo_stats",
    "completion_percentage",
    "load_workflow_config",
    "read_config_document",
    "workflow_config_from_dict",
]
