"""Tests for the in-memory task provider."""

import pytest

from taskflow.core.errors.errors import ProviderError
from taskflow.providers.memory.provider import (
    InMemoryTaskProvider,
    InMemoryTaskProviderSettings,
    create_memory_provider,
)
from taskflow.workflow.models import TodoUpdateRequest


async def seeded_task(provider, *todos: str):
    task = await provider.create_task("Add login", "Feature", "## Plan", "Not Started")
    if todos:
        await provider.add_todos(task.id, todos)
    return task


class TestLifecycle:
    """Test provider initialization and shutdown."""

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self):
        """Test repeated initialization is harmless."""
        provider = InMemoryTaskProvider()

        await provider.initialize()
        await provider.initialize()

        assert provider.initialized

    @pytest.mark.asyncio
    async def test_operations_require_initialization(self):
        """Test calls before initialize fail with a provider error."""
        provider = InMemoryTaskProvider(name="tasks")

        with pytest.raises(ProviderError) as exc_info:
            await provider.get_task("task-1")

        assert "not initialized" in exc_info.value.message
        assert exc_info.value.provider_context.provider_name == "tasks"

    @pytest.mark.asyncio
    async def test_shutdown_clears_tasks(self, memory_provider):
        """Test shutdown drops stored tasks."""
        task = await seeded_task(memory_provider)

        await memory_provider.shutdown()
        await memory_provider.initialize()

        with pytest.raises(ProviderError):
            await memory_provider.get_task(task.id)

    @pytest.mark.asyncio
    async def test_initialize_failure_is_wrapped(self):
        """Test initialization failures surface as provider errors."""

        class BrokenProvider(InMemoryTaskProvider):
            async def _initialize(self):
                raise OSError("store unavailable")

        provider = BrokenProvider(name="broken")

        with pytest.raises(ProviderError) as exc_info:
            await provider.initialize()

        assert isinstance(exc_info.value.cause, OSError)
        assert not provider.initialized

    def test_requires_name(self):
        """Test providers need a name."""
        with pytest.raises(ValueError):
            InMemoryTaskProvider(name="")


class TestTasks:
    """Test task storage."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, memory_provider):
        """Test a created task can be read back."""
        task = await seeded_task(memory_provider)

        assert task.id == "task-1"
        assert task.status == "Not Started"
        assert task.type == "Feature"
        assert task.created_time is not None
        assert await memory_provider.get_task("task-1") == task

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, memory_provider):
        """Test each task gets a new id."""
        first = await seeded_task(memory_provider)
        second = await seeded_task(memory_provider)

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_url_from_base_url(self):
        """Test task links are built from the configured base URL."""
        provider = create_memory_provider(
            "memory", {"id_prefix": "TF", "base_url": "https://tasks.example.com/"}
        )
        await provider.initialize()

        task = await seeded_task(provider)

        assert task.id == "TF-1"
        assert task.url == "https://tasks.example.com/TF-1"

    @pytest.mark.asyncio
    async def test_get_missing_task(self, memory_provider):
        """Test missing tasks raise a provider error."""
        with pytest.raises(ProviderError, match="Task not found: nope"):
            await memory_provider.get_task("nope")

    @pytest.mark.asyncio
    async def test_partial_update(self, memory_provider):
        """Test None fields are left unchanged."""
        task = await seeded_task(memory_provider)

        updated = await memory_provider.update_task(task.id, title="Add OAuth login")

        assert updated.title == "Add OAuth login"
        assert updated.type == "Feature"
        assert updated.status == "Not Started"

    @pytest.mark.asyncio
    async def test_update_status(self, memory_provider):
        """Test status updates are stored."""
        task = await seeded_task(memory_provider)

        await memory_provider.update_task_status(task.id, "In Progress")

        assert (await memory_provider.get_task(task.id)).status == "In Progress"

    @pytest.mark.asyncio
    async def test_append_to_task(self, memory_provider):
        """Test content is appended to the description."""
        task = await seeded_task(memory_provider)

        await memory_provider.append_to_task(task.id, "\n\nDone.")

        assert (await memory_provider.get_task(task.id)).description == "## Plan\n\nDone."


class TestTodos:
    """Test checklist handling."""

    @pytest.mark.asyncio
    async def test_analyze_todos(self, memory_provider):
        """Test checklist analysis."""
        task = await seeded_task(memory_provider, "Design", "Build", "Test", "Ship")

        result = await memory_provider.analyze_todos(task.id)

        assert [todo.text for todo in result.todos] == ["Design", "Build", "Test", "Ship"]
        assert [todo.index for todo in result.todos] == [0, 1, 2, 3]
        assert result.stats.total == 4
        assert result.stats.next_todos == ["Design", "Build", "Test"]

    @pytest.mark.asyncio
    async def test_preview_count_setting(self):
        """Test the preview length comes from the settings."""
        provider = InMemoryTaskProvider(settings=InMemoryTaskProviderSettings(todo_preview_count=1))
        await provider.initialize()
        task = await seeded_task(provider, "a", "b")

        result = await provider.analyze_todos(task.id)

        assert result.stats.next_todos == ["a"]

    @pytest.mark.asyncio
    async def test_update_todos_counts_results(self, memory_provider):
        """Test updated and failed counts."""
        task = await seeded_task(memory_provider, "Design", "Build")

        result = await memory_provider.update_todos(task.id, [
            TodoUpdateRequest(todo_text="Design", completed=True),
            TodoUpdateRequest(todo_text="Deploy", completed=True),
        ])

        assert result.updated == 1
        assert result.failed == 1
        stats = (await memory_provider.analyze_todos(task.id)).stats
        assert stats.completed == 1
        assert stats.percentage == 50

    @pytest.mark.asyncio
    async def test_update_todos_tolerates_case_and_whitespace(self, memory_provider):
        """Test todos match after trimming and ignoring case."""
        task = await seeded_task(memory_provider, "Write unit tests")

        result = await memory_provider.update_todos(
            task.id, [TodoUpdateRequest(todo_text="  write UNIT tests ", completed=True)]
        )

        assert result.updated == 1

    @pytest.mark.asyncio
    async def test_update_single_todo(self, memory_provider):
        """Test single updates report whether the todo was found."""
        task = await seeded_task(memory_provider, "Design")

        assert await memory_provider.update_single_todo(task.id, "Design", True) is True
        assert await memory_provider.update_single_todo(task.id, "Other", True) is False
        assert (await memory_provider.analyze_todos(task.id)).todos[0].completed is True

    @pytest.mark.asyncio
    async def test_update_todos_on_missing_task(self, memory_provider):
        """Test checklist updates on missing tasks raise."""
        with pytest.raises(ProviderError):
            await memory_provider.update_todos(
                "nope", [TodoUpdateRequest(todo_text="x", completed=True)]
            )
