"""Workflow configuration and derived status/todo models."""

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, PrivateAttr, model_validator

from taskflow.core.models import StrictBaseModel

# Canonical internal keys of the lifecycle
NOT_STARTED = "notStarted"
IN_PROGRESS = "inProgress"
TEST = "test"
DONE = "done"

# Returned by reverse lookups that match no configured label
UNKNOWN_STATUS = "unknown"


class WorkflowConfig(StrictBaseModel):
    """Status labels, allowed transitions and task types of a deployment.

    Internal keys (``notStarted``, ``inProgress``, ``test``, ``done`` or any
    custom key) are stable; display labels are whatever the provider shows
    and may be relabeled per deployment. Both lookup directions are indexed
    once at construction.

    Fields accept the camelCase names used in configuration files.
    """

    # Template and workflow-file sections of the same file are read elsewhere
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status_mapping: Dict[str, str] = Field(
        ..., alias="statusMapping", description="Internal key -> display label"
    )
    transitions: Dict[str, List[str]] = Field(
        default_factory=dict, description="Internal key -> ordered allowed destination keys"
    )
    task_types: List[str] = Field(..., alias="taskTypes", description="Allowed task type labels")
    default_status: str = Field(..., alias="defaultStatus", description="Internal key for new tasks")
    requires_validation: List[str] = Field(
        default_factory=list,
        alias="requiresValidation",
        description="Internal keys that need human sign-off",
    )

    _label_to_key: Dict[str, str] = PrivateAttr(default_factory=dict)
    _key_to_label: Dict[str, str] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_references(self) -> "WorkflowConfig":
        for key, label in self.status_mapping.items():
            if not label:
                raise ValueError(f"statusMapping.{key} must be a non-empty label")

        for source, destinations in self.transitions.items():
            if source not in self.status_mapping:
                raise ValueError(
                    f"transitions key '{source}' is not defined in statusMapping "
                    f"(known keys: {', '.join(self.status_mapping)})"
                )
            for destination in destinations:
                if destination not in self.status_mapping:
                    raise ValueError(
                        f"transitions.{source} references '{destination}' which is not "
                        f"defined in statusMapping (known keys: {', '.join(self.status_mapping)})"
                    )

        if self.default_status not in self.status_mapping:
            raise ValueError(
                f"defaultStatus '{self.default_status}' is not defined in statusMapping"
            )

        for key in self.requires_validation:
            if key not in self.status_mapping:
                raise ValueError(f"requiresValidation key '{key}' is not defined in statusMapping")

        return self

    def model_post_init(self, __context: Any) -> None:
        self._key_to_label = dict(self.status_mapping)
        label_to_key: Dict[str, str] = {}
        for key, label in self.status_mapping.items():
            # First key wins when two keys share a label
            label_to_key.setdefault(label, key)
        self._label_to_key = label_to_key

    def key_for(self, label: str) -> str:
        """Internal key for a display label, or UNKNOWN_STATUS."""
        return self._label_to_key.get(label, UNKNOWN_STATUS)

    def label_for(self, key: str) -> Optional[str]:
        """Display label for an internal key, or None if unmapped."""
        return self._key_to_label.get(key)

    def destinations(self, key: str) -> List[str]:
        """Allowed destination keys for an internal key."""
        return list(self.transitions.get(key, []))

    @property
    def labels(self) -> List[str]:
        """All display labels in configuration order."""
        return list(self.status_mapping.values())


class TaskStatus(StrictBaseModel):
    """Status view of a task, computed per query."""

    current: str = Field(..., description="Current display label")
    available: List[str] = Field(default_factory=list, description="Labels reachable from current")
    recommended: Optional[str] = Field(default=None, description="Suggested next label")
    should_auto_progress: bool = Field(default=False)


class TodoItem(StrictBaseModel):
    """A checklist line with its completion flag."""

    text: str
    completed: bool = False
    index: int = 0


class TodoStats(StrictBaseModel):
    """Completion figures of a task's checklist."""

    total: int = Field(0, ge=0)
    completed: int = Field(0, ge=0)
    percentage: int = Field(0, ge=0, le=100)
    next_todos: List[str] = Field(default_factory=list, description="Preview of pending todo texts")


class TodoUpdateRequest(StrictBaseModel):
    """One requested checklist change, as sent by the client."""

    model_config = ConfigDict(populate_by_name=True)

    todo_text: str = Field(..., alias="todoText", min_length=1)
    completed: bool
