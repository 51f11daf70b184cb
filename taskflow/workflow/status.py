"""Status lifecycle: transitions, recommendations and auto-progression.

All decisions are made on internal keys; display labels are only
translated at the edges, so the four canonical stages can be relabeled per
deployment without touching this logic. Custom stages take part in the
transition graph but never receive auto-progression.
"""

import logging
from typing import List, Optional

from taskflow.core.errors.errors import ConfigurationError, ErrorContext
from taskflow.core.errors.models import ConfigurationErrorContext

from .models import (
    DONE,
    IN_PROGRESS,
    NOT_STARTED,
    TEST,
    TaskStatus,
    WorkflowConfig,
)

logger = logging.getLogger(__name__)


class StatusService:
    """Single source of truth for status semantics of a WorkflowConfig.

    Stateless beyond the immutable config, so one instance can serve
    concurrent requests.
    """

    def __init__(self, workflow_config: WorkflowConfig):
        self._config = workflow_config

    @property
    def config(self) -> WorkflowConfig:
        return self._config

    def get_status_key(self, status: str) -> str:
        """Internal key of a display label.

        Never raises: unrecognized labels map to ``UNKNOWN_STATUS`` and the
        caller decides what that means.
        """
        return self._config.key_for(status)

    def get_status_label(self, status_key: str) -> Optional[str]:
        return self._config.label_for(status_key)

    def valid_statuses(self) -> List[str]:
        return self._config.labels

    def get_task_status(self, current_status: str) -> TaskStatus:
        """Build the status view for a task currently in ``current_status``.

        Unknown labels yield an empty transition list rather than an error,
        so read paths keep working on unexpected provider data.
        """
        destinations = self._config.destinations(self.get_status_key(current_status))
        available = [
            label for label in (self._config.label_for(key) for key in destinations) if label
        ]

        return TaskStatus(
            current=current_status,
            available=available,
            recommended=self._default_recommendation(current_status, destinations),
            should_auto_progress=False,
        )

    def validate_transition(self, from_status: str, to_status: str) -> bool:
        """Whether the transition graph allows ``from_status`` -> ``to_status``."""
        allowed = self._config.destinations(self.get_status_key(from_status))
        return self.get_status_key(to_status) in allowed

    def get_next_recommended_status(
        self, current_status: str, progress_percentage: float
    ) -> Optional[str]:
        """Recommend the next label based on checklist completion.

        Args:
            current_status: Current display label
            progress_percentage: Checklist completion, 0 to 100

        Returns:
            Recommended display label, or None when no move is suggested

        Raises:
            ConfigurationError: If any of the four canonical statuses is unmapped
        """
        not_started = self._require_label(NOT_STARTED, "get_next_recommended_status")
        in_progress = self._require_label(IN_PROGRESS, "get_next_recommended_status")
        test = self._require_label(TEST, "get_next_recommended_status")
        done = self._require_label(DONE, "get_next_recommended_status")

        transitions = self._config.destinations(self.get_status_key(current_status))
        recommended: Optional[str] = None

        if current_status == not_started and progress_percentage > 0:
            if IN_PROGRESS in transitions:
                recommended = in_progress
            else:
                recommended = self._first_destination_label(transitions)
        elif current_status == in_progress and progress_percentage >= 100:
            if TEST in transitions:
                recommended = test
            elif DONE in transitions:
                recommended = done
            else:
                recommended = self._first_destination_label(transitions)
        elif current_status == test and progress_percentage >= 100:
            recommended = done if DONE in transitions else None

        logger.debug(
            f"Recommendation for '{current_status}' at {progress_percentage}%: {recommended}"
        )
        return recommended

    def should_auto_progress(self, current_status: str) -> bool:
        """Whether checklist completion may advance a task in this status.

        Only ``notStarted`` and ``inProgress`` qualify; ``test`` and ``done``
        always require an explicit transition.
        """
        not_started = self._require_label(NOT_STARTED, "should_auto_progress")
        in_progress = self._require_label(IN_PROGRESS, "should_auto_progress")
        return current_status in (not_started, in_progress)

    def get_not_started_status(self) -> str:
        return self._require_label(NOT_STARTED, "get_not_started_status")

    def get_default_status(self) -> str:
        """Display label assigned to newly created tasks."""
        return self._require_label(self._config.default_status, "get_default_status")

    def requires_validation(self, status: str) -> bool:
        """Whether moving into ``status`` needs human sign-off."""
        return self.get_status_key(status) in self._config.requires_validation

    def can_auto_apply(self, current_status: str, target_status: str) -> bool:
        """Whether a recommended move may be applied without the user.

        Only from a status that allows auto-progression, and never into a
        status that needs sign-off or into ``done``.
        """
        if not self.should_auto_progress(current_status):
            return False
        if self.requires_validation(target_status):
            return False
        return self.get_status_key(target_status) != DONE

    def _default_recommendation(
        self, current_status: str, destinations: List[str]
    ) -> Optional[str]:
        if not destinations:
            return None

        not_started = self._require_label(NOT_STARTED, "get_task_status")
        in_progress = self._require_label(IN_PROGRESS, "get_task_status")

        if current_status == not_started and IN_PROGRESS in destinations:
            return in_progress
        return self._first_destination_label(destinations)

    def _first_destination_label(self, destinations: List[str]) -> Optional[str]:
        if not destinations:
            return None
        return self._config.label_for(destinations[0])

    def _require_label(self, status_key: str, operation: str) -> str:
        label = self._config.label_for(status_key)
        if label:
            return label

        message = f"Missing required status mapping: {status_key}"
        logger.error(message)
        raise ConfigurationError(
            message=message,
            context=ErrorContext.create(
                error_type="MissingStatusMapping",
                error_location=f"StatusService.{operation}",
                component="status_service",
                operation=operation,
            ),
            config_context=ConfigurationErrorContext(
                config_key=status_key,
                config_section="workflow.statusMapping",
                expected_type="str",
                actual_value="<missing>",
            ),
        )
