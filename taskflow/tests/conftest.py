"""Shared fixtures for taskflow tests."""

import copy
from typing import Any, Dict

import pytest

from taskflow.core.errors.errors import ErrorManager
from taskflow.providers.manager import ProviderManager
from taskflow.providers.memory.provider import InMemoryTaskProvider
from taskflow.providers.models import ProviderConfig, ProvidersConfig
from taskflow.services.factory import TaskflowServices, build_services
from taskflow.workflow.models import WorkflowConfig
from taskflow.workflow.status import StatusService
from taskflow.workflow.validation import ValidationService

WORKFLOW_DATA: Dict[str, Any] = {
    "statusMapping": {
        "notStarted": "Not Started",
        "inProgress": "In Progress",
        "test": "Test",
        "done": "Done",
    },
    "transitions": {
        "notStarted": ["inProgress"],
        "inProgress": ["test"],
        "test": ["done", "inProgress"],
        "done": ["test"],
    },
    "taskTypes": ["Feature", "Bug", "Refactoring"],
    "defaultStatus": "notStarted",
    "requiresValidation": ["done"],
}


@pytest.fixture
def workflow_data() -> Dict[str, Any]:
    """Fresh copy of the four-stage workflow configuration."""
    return copy.deepcopy(WORKFLOW_DATA)


@pytest.fixture
def workflow_config(workflow_data) -> WorkflowConfig:
    return WorkflowConfig.model_validate(workflow_data)


@pytest.fixture
def status_service(workflow_config) -> StatusService:
    return StatusService(workflow_config)


@pytest.fixture
def validation_service(workflow_config, status_service) -> ValidationService:
    return ValidationService(workflow_config, status_service)


@pytest.fixture
async def memory_provider():
    """Initialized in-memory provider, shut down after the test."""
    provider = InMemoryTaskProvider(name="memory")
    await provider.initialize()
    yield provider
    await provider.shutdown()


@pytest.fixture
async def provider_manager():
    """Manager with one initialized in-memory provider as the default."""
    manager = ProviderManager(
        ProvidersConfig(default="memory", available={"memory": ProviderConfig()})
    )
    await manager.initialize_all()
    yield manager
    await manager.shutdown_all()


@pytest.fixture
def error_manager() -> ErrorManager:
    return ErrorManager()


@pytest.fixture
def services(workflow_config, provider_manager, error_manager) -> TaskflowServices:
    return build_services(workflow_config, provider_manager, error_manager)
