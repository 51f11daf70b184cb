"""Taskflow.

Workflow and status engine for AI-driven task management over pluggable
task providers.

Key features:
1. Configurable status lifecycle with relabelable display names
2. Checklist progress that drives status recommendations
3. Validation of agent-supplied task data with actionable messages
4. Structured error handling across all components
"""

from taskflow.core.errors.errors import (
    BaseError,
    ConfigurationError,
    ProviderError,
    ValidationError,
)
from taskflow.core.log_config import configure_logging
from taskflow.core.settings import TaskflowSettings
from taskflow.providers import InMemoryTaskProvider, ProviderManager, TaskProvider
from taskflow.services import (
    CreationService,
    ExecutionService,
    TaskflowServices,
    UpdateService,
    bootstrap_services,
    build_services,
)
from taskflow.workflow import (
    StatusService,
    ValidationService,
    WorkflowConfig,
    load_workflow_config,
)

__version__ = "0.1.0"

__all__ = [
    "BaseError",
    "ConfigurationError",
    "ProviderError",
    "ValidationError",
    "configure_logging",
    "TaskflowSettings",
    "InMemoryTaskProvider",
    "ProviderManager",
    "TaskProvider",
    "CreationService",
    "ExecutionService",
    "TaskflowServices",
    "UpdateService",
    "bootstrap_services",
    "build_services",
    "StatusService",
    "ValidationService",
    "WorkflowConfig",
    "load_workflow_config",
]
