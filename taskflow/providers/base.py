"""Task provider base class with lifecycle management.

A provider is the only component that talks to a task-tracking backend.
Everything above it works on the models in ``taskflow.tasks.models``.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from taskflow.core.errors.errors import ErrorContext, ProviderError
from taskflow.core.errors.models import ProviderErrorContext
from taskflow.tasks.models import Task, TodoAnalysisResult, TodoUpdateResult
from taskflow.workflow.models import TodoUpdateRequest

from .models import ProviderSettings

logger = logging.getLogger(__name__)

SettingsT = TypeVar("SettingsT", bound=ProviderSettings)


class TaskProvider(ABC, Generic[SettingsT]):
    """Base class for all task providers.

    This class provides:
    1. Consistent initialization and shutdown pattern
    2. Configuration via settings models
    3. Uniform ProviderError construction
    """

    def __init__(self, name: str, provider_type: str, settings: SettingsT):
        if not name:
            raise ValueError("Provider must have a non-empty name")
        if not provider_type:
            raise ValueError("Provider must have a non-empty provider_type")

        self.name = name
        self.provider_type = provider_type
        self.settings = settings
        self._initialized = False
        self._setup_lock = asyncio.Lock()
        logger.debug(f"Created provider: {name} ({provider_type}) with settings: {settings}")

    @property
    def initialized(self) -> bool:
        """Check if provider is initialized."""
        return self._initialized

    async def initialize(self) -> None:
        """Initialize the provider once.

        Raises:
            ProviderError: If initialization fails
        """
        if self._initialized:
            return

        async with self._setup_lock:
            if self._initialized:
                return

            try:
                await self._initialize()
            except Exception as e:
                logger.error(f"Failed to initialize provider '{self.name}': {e}")
                raise self._error(
                    f"Failed to initialize provider: {e}", "initialize", cause=e
                ) from e

            self._initialized = True
            logger.info(f"Provider '{self.name}' initialized successfully")

    async def shutdown(self) -> None:
        """Close provider resources.

        Shutdown errors are logged and not re-raised, so the remaining
        providers still get shut down.
        """
        if not self._initialized:
            return

        try:
            await self._shutdown()
            self._initialized = False
            logger.info(f"Provider '{self.name}' shut down successfully")
        except Exception as e:
            logger.error(f"Error shutting down provider '{self.name}': {e}")

    async def _initialize(self) -> None:
        """Concrete initialization logic implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement _initialize().")

    async def _shutdown(self) -> None:
        """Concrete shutdown logic; does nothing by default."""

    @abstractmethod
    async def get_task(self, task_id: str) -> Task:
        """Fetch a task by id."""

    @abstractmethod
    async def create_task(
        self, title: str, task_type: str, description: str, status: str
    ) -> Task:
        """Create a task in the given initial status."""

    @abstractmethod
    async def update_task(
        self,
        task_id: str,
        title: Optional[str] = None,
        task_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Task:
        """Apply a partial update; None fields are left unchanged."""

    @abstractmethod
    async def update_task_status(self, task_id: str, status: str) -> Task:
        """Set the task's status label."""

    @abstractmethod
    async def analyze_todos(self, task_id: str) -> TodoAnalysisResult:
        """Read the task's checklist and its stats."""

    @abstractmethod
    async def update_todos(
        self, task_id: str, updates: List[TodoUpdateRequest]
    ) -> TodoUpdateResult:
        """Apply a batch of checklist changes."""

    @abstractmethod
    async def update_single_todo(self, task_id: str, todo_text: str, completed: bool) -> bool:
        """Set one checklist item; False if no item matches."""

    @abstractmethod
    async def append_to_task(self, task_id: str, content: str) -> None:
        """Append content to the task body."""

    def _error(
        self, message: str, operation: str, cause: Optional[Exception] = None
    ) -> ProviderError:
        return ProviderError(
            message=message,
            context=ErrorContext.create(
                error_type="ProviderError",
                error_location=f"{self.__class__.__name__}.{operation}",
                component=self.name,
                operation=operation,
            ),
            provider_context=ProviderErrorContext(
                provider_name=self.name,
                provider_type=self.provider_type,
                operation=operation,
            ),
            cause=cause,
        )
