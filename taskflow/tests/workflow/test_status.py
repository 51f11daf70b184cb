"""Tests for the status lifecycle service."""

import pytest

from taskflow.core.errors.errors import ConfigurationError
from taskflow.workflow.models import UNKNOWN_STATUS, WorkflowConfig
from taskflow.workflow.status import StatusService


def make_service(workflow_data, **overrides) -> StatusService:
    data = dict(workflow_data)
    data.update(overrides)
    return StatusService(WorkflowConfig.model_validate(data))


class TestStatusLookup:
    """Test translation between labels and internal keys."""

    def test_status_key_round_trip(self, status_service, workflow_data):
        """Test every mapped label resolves back to its key."""
        for key, label in workflow_data["statusMapping"].items():
            assert status_service.get_status_key(label) == key
            assert status_service.get_status_label(key) == label

    def test_unknown_label_returns_sentinel(self, status_service):
        """Test unknown labels never raise."""
        assert status_service.get_status_key("Blocked") == UNKNOWN_STATUS

    def test_lookup_is_case_sensitive(self, status_service):
        """Test labels must match exactly."""
        assert status_service.get_status_key("done") == UNKNOWN_STATUS

    def test_valid_statuses(self, status_service):
        """Test all labels are listed in configuration order."""
        assert status_service.valid_statuses() == ["Not Started", "In Progress", "Test", "Done"]


class TestTaskStatus:
    """Test the status view and transition checks."""

    def test_task_status_for_not_started(self, status_service):
        """Test the status view of a new task."""
        status = status_service.get_task_status("Not Started")

        assert status.current == "Not Started"
        assert status.available == ["In Progress"]
        assert status.recommended == "In Progress"
        assert status.should_auto_progress is False

    def test_task_status_recommends_first_destination(self, status_service):
        """Test statuses other than notStarted recommend their first destination."""
        status = status_service.get_task_status("Test")

        assert status.available == ["Done", "In Progress"]
        assert status.recommended == "Done"

    def test_task_status_for_unknown_label(self, status_service):
        """Test unknown labels degrade to an empty view."""
        status = status_service.get_task_status("Blocked")

        assert status.current == "Blocked"
        assert status.available == []
        assert status.recommended is None

    def test_task_status_without_transitions(self, workflow_data):
        """Test a status with no outgoing transitions."""
        transitions = dict(workflow_data["transitions"], done=[])
        service = make_service(workflow_data, transitions=transitions)

        status = service.get_task_status("Done")

        assert status.available == []
        assert status.recommended is None

    def test_validate_transition(self, status_service):
        """Test the transition graph is followed."""
        assert status_service.validate_transition("Test", "Done") is True
        assert status_service.validate_transition("Done", "Not Started") is False
        assert status_service.validate_transition("Not Started", "Test") is False
        assert status_service.validate_transition("Blocked", "Done") is False

    def test_validate_transition_agrees_with_available(self, status_service):
        """Test validate_transition matches the available list for every pair."""
        labels = status_service.valid_statuses()
        for source in labels:
            available = status_service.get_task_status(source).available
            for destination in labels:
                assert status_service.validate_transition(source, destination) == (
                    destination in available
                )

    def test_custom_stage_participates_in_graph(self, workflow_data):
        """Test custom keys take part in transitions."""
        mapping = dict(workflow_data["statusMapping"], review="Code Review")
        transitions = dict(workflow_data["transitions"], inProgress=["review"], review=["test"])
        service = make_service(workflow_data, statusMapping=mapping, transitions=transitions)

        assert service.get_task_status("In Progress").available == ["Code Review"]
        assert service.validate_transition("Code Review", "Test") is True


class TestRecommendations:
    """Test progress-driven recommendations."""

    def test_not_started_without_progress(self, status_service):
        """Test no recommendation before any todo is done."""
        assert status_service.get_next_recommended_status("Not Started", 0) is None

    def test_not_started_with_progress(self, status_service):
        """Test any progress moves a new task to in progress."""
        assert status_service.get_next_recommended_status("Not Started", 1) == "In Progress"

    def test_not_started_falls_back_to_first_destination(self, workflow_data):
        """Test the first destination is used when inProgress is not reachable."""
        transitions = dict(workflow_data["transitions"], notStarted=["test", "done"])
        service = make_service(workflow_data, transitions=transitions)

        assert service.get_next_recommended_status("Not Started", 10) == "Test"

    def test_in_progress_incomplete(self, status_service):
        """Test partial progress keeps the task in progress."""
        assert status_service.get_next_recommended_status("In Progress", 99) is None

    def test_in_progress_complete_prefers_test(self, status_service):
        """Test completion moves to test when allowed."""
        assert status_service.get_next_recommended_status("In Progress", 100) == "Test"

    def test_in_progress_complete_falls_back_to_done(self, workflow_data):
        """Test completion moves to done when test is not reachable."""
        transitions = dict(workflow_data["transitions"], inProgress=["done"])
        service = make_service(workflow_data, transitions=transitions)

        assert service.get_next_recommended_status("In Progress", 100) == "Done"

    def test_in_progress_without_destinations(self, workflow_data):
        """Test no recommendation when nothing is reachable."""
        transitions = dict(workflow_data["transitions"], inProgress=[])
        service = make_service(workflow_data, transitions=transitions)

        assert service.get_next_recommended_status("In Progress", 100) is None

    def test_test_complete_recommends_done(self, status_service):
        """Test a fully checked task in test is recommended for done."""
        assert status_service.get_next_recommended_status("Test", 100) == "Done"

    def test_test_without_done_destination(self, workflow_data):
        """Test tasks in test are never sent anywhere but done."""
        transitions = dict(workflow_data["transitions"], test=["inProgress"])
        service = make_service(workflow_data, transitions=transitions)

        assert service.get_next_recommended_status("Test", 100) is None

    def test_done_has_no_recommendation(self, status_service):
        """Test done is terminal for recommendations."""
        assert status_service.get_next_recommended_status("Done", 100) is None

    def test_relabeled_statuses(self, workflow_data):
        """Test recommendations follow relabeled display names."""
        mapping = {
            "notStarted": "À faire",
            "inProgress": "En cours",
            "test": "Recette",
            "done": "Terminé",
        }
        service = make_service(workflow_data, statusMapping=mapping)

        assert service.get_next_recommended_status("À faire", 50) == "En cours"
        assert service.get_next_recommended_status("En cours", 100) == "Recette"

    @pytest.mark.parametrize("missing", ["notStarted", "inProgress", "test", "done"])
    def test_missing_canonical_status_fails(self, workflow_data, missing):
        """Test each canonical status is required for recommendations."""
        mapping = {k: v for k, v in workflow_data["statusMapping"].items() if k != missing}
        transitions = {
            source: [d for d in destinations if d != missing]
            for source, destinations in workflow_data["transitions"].items()
            if source != missing
        }
        default = "test" if missing == "notStarted" else "notStarted"
        requires = [k for k in workflow_data["requiresValidation"] if k != missing]
        service = make_service(
            workflow_data,
            statusMapping=mapping,
            transitions=transitions,
            defaultStatus=default,
            requiresValidation=requires,
        )

        with pytest.raises(ConfigurationError) as exc_info:
            service.get_next_recommended_status("Whatever", 50)

        assert exc_info.value.message == f"Missing required status mapping: {missing}"
        assert exc_info.value.config_context.config_key == missing


class TestAutoProgress:
    """Test auto-progression eligibility and lifecycle helpers."""

    def test_should_auto_progress(self, status_service):
        """Test only notStarted and inProgress qualify."""
        assert status_service.should_auto_progress("Not Started") is True
        assert status_service.should_auto_progress("In Progress") is True
        assert status_service.should_auto_progress("Test") is False
        assert status_service.should_auto_progress("Done") is False
        assert status_service.should_auto_progress("Blocked") is False

    def test_should_auto_progress_requires_in_progress(self, workflow_data):
        """Test the check fails fast when inProgress is unmapped."""
        mapping = {k: v for k, v in workflow_data["statusMapping"].items() if k != "inProgress"}
        service = make_service(
            workflow_data,
            statusMapping=mapping,
            transitions={},
        )

        with pytest.raises(ConfigurationError, match="inProgress"):
            service.should_auto_progress("Not Started")

    def test_default_and_not_started_status(self, status_service):
        """Test lifecycle labels."""
        assert status_service.get_default_status() == "Not Started"
        assert status_service.get_not_started_status() == "Not Started"

    def test_requires_validation(self, status_service):
        """Test sign-off lookup by label."""
        assert status_service.requires_validation("Done") is True
        assert status_service.requires_validation("Test") is False
        assert status_service.requires_validation("Blocked") is False


class TestAutoApply:
    """Test which recommended moves may be applied automatically."""

    def test_forward_moves_from_active_statuses(self, status_service):
        """Test ordinary moves out of not started and in progress are applied."""
        assert status_service.can_auto_apply("Not Started", "In Progress") is True
        assert status_service.can_auto_apply("In Progress", "Test") is True

    def test_never_from_test(self, status_service):
        """Test nothing is applied from a status that does not auto-progress."""
        assert status_service.can_auto_apply("Test", "Done") is False
        assert status_service.can_auto_apply("Test", "In Progress") is False

    def test_never_into_signed_off_status(self, workflow_data):
        """Test statuses that need sign-off are never applied."""
        service = make_service(workflow_data, requiresValidation=["test"])

        assert service.can_auto_apply("In Progress", "Test") is False

    def test_never_into_done(self, workflow_data):
        """Test done is never applied even without a sign-off requirement."""
        service = make_service(workflow_data, requiresValidation=[])

        assert service.can_auto_apply("In Progress", "Done") is False
