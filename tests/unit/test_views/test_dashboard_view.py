"""Tests for the dashboard view."""

import pytest
from unittest.mock import AsyncMock, patch

from src.models.task import TaskStatus
from src.utils.errors import AuthenticationError, StoreReadError
from src.views import dashboard
from src.views.dashboard import DashboardView
from src.views.task_form import TaskForm
from tests.utils.factories import create_task_record


@pytest.mark.unit
@pytest.mark.asyncio
async def test_open_requires_user(fake_supabase, signed_out):
    """Test that a missing user redirects to sign-in."""
    with pytest.raises(AuthenticationError) as exc_info:
        await DashboardView.open(None)
    assert exc_info.value.redirect_to == "/sign-in"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_open_groups_tasks_by_status(tasks_table, signed_in):
    """Test the three status columns."""
    tasks_table.rows.extend([
        create_task_record("u1", status="pending"),
        create_task_record("u1", status="pending"),
        create_task_record("u1", status="completed"),
        create_task_record("u2", status="in-progress"),
    ])

    view = await DashboardView.open("token")
    columns = view.columns()

    assert [c["status"] for c in columns] == ["pending", "in-progress", "completed"]
    assert [c["count"] for c in columns] == [2, 0, 1]
    assert columns[1]["empty_message"] == "No tasks in progress"
    assert view.stale is False
    assert view.error is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_dict(fake_supabase, signed_in):
    view = await DashboardView.open("token")
    state = view.to_dict()

    assert state["greeting"] == "Welcome back, Ada Lovelace"
    assert state["user"]["id"] == "u1"
    assert all(column["tasks"] == [] for column in state["columns"])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_task_refetches(fake_supabase, signed_in):
    """Test that the list is re-fetched after creating a task."""
    view = await DashboardView.open("token")

    task = await view.create_task(TaskForm.from_input({"title": "Buy milk", "priority": "low"}))

    assert task is not None
    assert [t.id for t in view.tasks] == [task.id]
    assert view.tasks_by_status(TaskStatus.PENDING)[0].title == "Buy milk"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_status_moves_task_between_columns(tasks_table, signed_in):
    record = create_task_record("u1", status="pending")
    tasks_table.rows.append(record)
    view = await DashboardView.open("token")

    assert await view.update_status(record["id"], TaskStatus.COMPLETED) is True

    assert view.tasks_by_status(TaskStatus.PENDING) == []
    assert view.tasks_by_status(TaskStatus.COMPLETED)[0].id == record["id"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_task_refetches(tasks_table, signed_in):
    record = create_task_record("u1")
    tasks_table.rows.append(record)
    view = await DashboardView.open("token")

    assert await view.delete_task(record["id"]) is True
    assert view.tasks == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failed_mutation_leaves_state(tasks_table, signed_in):
    """Test that a failed write reports an error and keeps the list unchanged."""
    record = create_task_record("u1", status="pending")
    tasks_table.rows.append(record)
    view = await DashboardView.open("token")
    before = list(view.tasks)

    tasks_table.fail = ConnectionError("network down")
    assert await view.update_status(record["id"], TaskStatus.COMPLETED) is False

    assert view.error == dashboard.STATUS_FAILED
    assert view.tasks == before


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failed_refetch_marks_stale(tasks_table, signed_in):
    """Test that a write followed by a failed re-fetch marks the view stale."""
    record = create_task_record("u1", status="pending")
    tasks_table.rows.append(record)
    view = await DashboardView.open("token")

    with patch(
        "src.views.dashboard.task_store.get_tasks",
        new=AsyncMock(side_effect=StoreReadError("read failed")),
    ):
        assert await view.update_status(record["id"], TaskStatus.COMPLETED) is True

    assert view.stale is True
    assert view.error == dashboard.LOAD_FAILED
    assert view.tasks[0].status == TaskStatus.PENDING


@pytest.mark.unit
@pytest.mark.asyncio
async def test_load_failure(tasks_table, signed_in):
    tasks_table.fail = ConnectionError("network down")

    view = await DashboardView.open("token")

    assert view.tasks == []
    assert view.stale is True
    assert view.error == dashboard.LOAD_FAILED
