"""Checklist progress computation."""

from typing import Sequence

from .models import TodoItem, TodoStats

DEFAULT_PREVIEW_COUNT = 3


def completion_percentage(completed: int, total: int) -> int:
    """Percentage of completed items, rounded half up; 0 for an empty list."""
    if total <= 0:
        return 0
    # floor(100 * completed / total + 0.5) in integer arithmetic
    return (completed * 200 + total) // (2 * total)


def calculate_todo_stats(
    todos: Sequence[TodoItem], preview_count: int = DEFAULT_PREVIEW_COUNT
) -> TodoStats:
    """Summarize a checklist into counts, percentage and a pending preview.

    Args:
        todos: Checklist items in document order
        preview_count: Maximum number of pending texts to include

    Returns:
        TodoStats for the checklist
    """
    total = len(todos)
    completed = sum(1 for todo in todos if todo.completed)
    pending = [todo.text for todo in todos if not todo.completed]

    return TodoStats(
        total=total,
        completed=completed,
        percentage=completion_percentage(completed, total),
        next_todos=pending[:preview_count],
    )
