"""Task creation and update services over the provider layer."""

from .creation import CreationService
from .execution import ExecutionService
from .factory import TaskflowServices, bootstrap_services, build_services
from .update import SUMMARY_SEPARATOR, UpdateService

__all__ = [
    "CreationService",
    "ExecutionService",
    "UpdateService",
    "SUMMARY_SEPARATOR",
    "TaskflowServices",
    "bootstrap_services",
    "build_services",
]
