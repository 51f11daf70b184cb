"""Task models with structured Pydantic contracts."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from taskflow.core.models import StrictBaseModel
from taskflow.workflow.models import TaskStatus, TodoItem, TodoStats


class Task(StrictBaseModel):
    """A task as stored by the provider.

    Instances are immutable; providers hand out updated copies.
    """

    id: str = Field(..., description="Provider task identifier")
    title: str = Field(..., description="Task title")
    status: str = Field(..., description="Current display label")
    type: Optional[str] = Field(None, description="Task type label")
    description: Optional[str] = Field(None, description="Task body")
    url: Optional[str] = Field(None, description="Link to the task in the provider UI")
    created_time: Optional[datetime] = None
    last_edited_time: Optional[datetime] = None


class TaskMetadata(StrictBaseModel):
    """Task summary together with its checklist and status view."""

    id: str
    title: str
    status: str
    type: str
    todo_stats: TodoStats
    status_info: TaskStatus


class TodoAnalysisResult(StrictBaseModel):
    """A task's checklist with aggregated stats."""

    todos: List[TodoItem] = Field(default_factory=list)
    stats: TodoStats = Field(default_factory=TodoStats)


class TodoUpdateResult(StrictBaseModel):
    """Outcome of a batch checklist update."""

    updated: int = Field(0, ge=0, description="Todos found and updated")
    failed: int = Field(0, ge=0, description="Todos not found")
    stats: Optional[TodoStats] = Field(None, description="Checklist stats after the update")
    recommended_status: Optional[str] = Field(None, description="Status suggested by progress")
    applied_status: Optional[str] = Field(None, description="Status set automatically, if any")


ExecutionAction = Literal["needs_analysis", "needs_implementation", "completed"]


class ExecutionStep(StrictBaseModel):
    """One entry of an execution run's progression log."""

    kind: Literal["todo", "status_update"]
    message: str
    todo_text: Optional[str] = None
    completed: bool = False
    timestamp: datetime = Field(default_factory=datetime.now)


class ExecutionResult(StrictBaseModel):
    """What the caller should do next for a task, and what changed on the way."""

    task_id: str
    action: ExecutionAction = Field(..., description="Next step for the caller")
    message: str
    stats: TodoStats
    next_todo: Optional[str] = Field(None, description="First pending todo, if any")
    remaining: int = Field(0, ge=0, description="Pending todos")
    recommended_status: Optional[str] = Field(None, description="Status suggested by progress")
    applied_status: Optional[str] = Field(None, description="Status set automatically, if any")
    steps: List[ExecutionStep] = Field(default_factory=list)
