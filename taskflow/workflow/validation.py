"""Input validation for every task-mutation entry point.

Payloads come from an AI agent rather than a typed client, so each check
names the field, the value received and the shape expected. Validation
stops at the first violation.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, NoReturn

from taskflow.core.errors.errors import ErrorContext, ValidationError
from taskflow.core.errors.models import ValidationErrorDetail

from .models import UNKNOWN_STATUS, WorkflowConfig
from .status import StatusService

logger = logging.getLogger(__name__)

_MAX_VALUE_REPR = 80

# What a calling agent sends when it stringifies a missing value
_PLACEHOLDER_SUMMARIES = ("undefined", "null")


def _describe(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_VALUE_REPR:
        text = text[: _MAX_VALUE_REPR - 3] + "..."
    return f"{text} ({type(value).__name__})"


class ValidationService:
    """Validates task types, status changes and task/todo payloads."""

    def __init__(self, workflow_config: WorkflowConfig, status_service: StatusService):
        self._config = workflow_config
        self._status_service = status_service

    def validate_task_type(self, task_type: Any) -> str:
        """Check a task type against the configured types, ignoring case.

        Returns:
            The task type as spelled in the configuration
        """
        if isinstance(task_type, str):
            wanted = task_type.lower()
            for configured in self._config.task_types:
                if configured.lower() == wanted:
                    return configured

        self._fail(
            location="taskType",
            message=(
                f"Invalid task type {_describe(task_type)}. "
                f"Available: {', '.join(self._config.task_types)}"
            ),
            error_type="invalid_task_type",
            operation="validate_task_type",
        )

    def validate_status_transition(self, current_status: str, new_status: Any) -> None:
        """Accept any move into a known status.

        The transition graph is deliberately not enforced here, so users can
        correct a task's status freely; the graph only drives
        recommendations.
        """
        if current_status == new_status:
            return

        if not isinstance(new_status, str) or (
            self._status_service.get_status_key(new_status) == UNKNOWN_STATUS
        ):
            self._fail(
                location="status",
                message=(
                    f"Invalid status {_describe(new_status)}. "
                    f"Valid statuses: {', '.join(self._status_service.valid_statuses())}"
                ),
                error_type="invalid_status",
                operation="validate_status_transition",
            )

    def validate_task_update_data(self, updates: Any) -> None:
        """Validate a partial update with optional title, taskType and status."""
        if not isinstance(updates, Mapping):
            self._fail(
                location="updates",
                message=(
                    f"Updates must be an object with optional 'title', 'taskType' and "
                    f"'status' fields, got {_describe(updates)}"
                ),
                error_type="type_error",
                operation="validate_task_update_data",
            )

        if updates.get("taskType") is not None:
            self.validate_task_type(updates["taskType"])

        for field in ("title", "status"):
            if field in updates and updates[field] is not None and not isinstance(updates[field], str):
                self._fail(
                    location=field,
                    message=f"{field.capitalize()} must be a string, got {_describe(updates[field])}",
                    error_type="type_error",
                    operation="validate_task_update_data",
                )

    def validate_task_creation_data(self, title: Any, task_type: Any, description: Any) -> None:
        if not isinstance(title, str) or not title.strip():
            self._fail(
                location="title",
                message=f"Title is required and must be a non-empty string, got {_describe(title)}",
                error_type="missing",
                operation="validate_task_creation_data",
            )

        if not isinstance(task_type, str) or not task_type:
            self._fail(
                location="taskType",
                message=(
                    f"Task type is required and must be one of: "
                    f"{', '.join(self._config.task_types)}; got {_describe(task_type)}"
                ),
                error_type="missing",
                operation="validate_task_creation_data",
            )

        if not isinstance(description, str) or not description:
            self._fail(
                location="description",
                message=(
                    f"Description is required and must be a non-empty string, "
                    f"got {_describe(description)}"
                ),
                error_type="missing",
                operation="validate_task_creation_data",
            )

        self.validate_task_type(task_type)

    def validate_todo_update_data(self, updates: Any) -> None:
        """Validate a batch of ``{"todoText": str, "completed": bool}`` entries."""
        expected = 'a non-empty array of {"todoText": "<exact todo text>", "completed": true|false}'

        if (
            isinstance(updates, (str, bytes, Mapping))
            or not isinstance(updates, Sequence)
            or len(updates) == 0
        ):
            self._fail(
                location="updates",
                message=f"Updates must be {expected}, got {_describe(updates)}",
                error_type="type_error",
                operation="validate_todo_update_data",
            )

        for index, update in enumerate(updates):
            location = f"updates[{index}]"

            if not isinstance(update, Mapping):
                self._fail(
                    location=location,
                    message=f"{location} must be an object, got {_describe(update)}. Expected {expected}",
                    error_type="type_error",
                    operation="validate_todo_update_data",
                )

            if "todoText" not in update and "content" in update:
                self._fail(
                    location=f"{location}.content",
                    message=(
                        f"{location} uses field 'content' but the field must be named 'todoText'. "
                        f"Rename 'content' to 'todoText': "
                        f'{{"todoText": {update["content"]!r}, "completed": ...}}'
                    ),
                    error_type="wrong_field_name",
                    operation="validate_todo_update_data",
                )

            todo_text = update.get("todoText")
            if not isinstance(todo_text, str) or not todo_text.strip():
                self._fail(
                    location=f"{location}.todoText",
                    message=(
                        f"{location}.todoText must be a non-empty string, "
                        f"got {_describe(todo_text)}"
                    ),
                    error_type="missing",
                    operation="validate_todo_update_data",
                )

            completed = update.get("completed")
            if not isinstance(completed, bool):
                self._fail(
                    location=f"{location}.completed",
                    message=(
                        f"{location}.completed must be a boolean (true or false), "
                        f"got {_describe(completed)}"
                    ),
                    error_type="type_error",
                    operation="validate_todo_update_data",
                )

    def validate_summary_data(self, summary: Any) -> None:
        if not isinstance(summary, str) or not summary.strip():
            self._fail(
                location="summary",
                message=f"Summary must be a non-empty string, got {_describe(summary)}",
                error_type="missing",
                operation="validate_summary_data",
            )

        if summary.strip() in _PLACEHOLDER_SUMMARIES:
            self._fail(
                location="summary",
                message=(
                    f"Summary is the literal {summary.strip()!r}, which means the value was "
                    f"never filled in. Send the adapted summary text instead"
                ),
                error_type="placeholder_value",
                operation="validate_summary_data",
            )

    def _fail(self, location: str, message: str, error_type: str, operation: str) -> NoReturn:
        logger.debug(f"Validation failed in {operation}: {message}")
        raise ValidationError(
            message=message,
            validation_errors=[
                ValidationErrorDetail(location=location, message=message, error_type=error_type)
            ],
            context=ErrorContext.create(
                error_type="ValidationError",
                error_location=f"ValidationService.{operation}",
                component="validation_service",
                operation=operation,
            ),
        )
