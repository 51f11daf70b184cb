"""Task records exchanged with providers."""

from .models import (
    ExecutionAction,
    ExecutionResult,
    ExecutionStep,
    Task,
    TaskMetadata,
    TodoAnalysisResult,
    TodoUpdateResult,
)

__all__ = [
    "ExecutionAction",
    "ExecutionResult",
    "ExecutionStep",
    "Task",
    "TaskMetadata",
    "TodoAnalysisResult",
    "TodoUpdateResult",
]
