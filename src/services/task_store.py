"""Task store - typed adapter over the Supabase tasks table.

Each user's tasks live in their own partition of the table (rows whose
``user_id`` equals the owner's id). Every operation takes the authenticated
user and refuses to touch a partition that user does not own.

There is no caching, batching or conflict detection here: concurrent writers
to the same task get last-write-wins at the row level.
"""

import os
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from src.models.task import Task, TaskCreate, TaskStatus
from src.models.user import AuthUser
from src.services.supabase_client import SupabaseClient
from src.utils.errors import (
    AuthorizationError,
    NotFoundError,
    StoreReadError,
    StoreWriteError,
    ValidationError,
)
from src.utils.logging import get_structured_logger, log_timing, mask_user_id

logger = get_structured_logger(__name__)

TASKS_TABLE = os.environ.get("TASKS_TABLE", "tasks")

# Fields a caller may change after creation
MUTABLE_FIELDS = ("title", "description", "status", "priority", "due_date")

# Epoch values above this are taken to be milliseconds
_EPOCH_MS_THRESHOLD = 100_000_000_000


def _now() -> datetime:
    return datetime.now(timezone.utc)


def to_datetime(value: Any) -> datetime:
    """
    Convert a backend timestamp to an aware datetime.

    Accepts datetimes, ISO-8601 strings (``Z`` or offset suffix), epoch
    seconds or milliseconds, and ``{"seconds": ..., "nanoseconds": ...}``
    mappings. Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000 if abs(value) >= _EPOCH_MS_THRESHOLD else value
        parsed = datetime.fromtimestamp(seconds, tz=timezone.utc)
    elif isinstance(value, dict) and ("seconds" in value or "_seconds" in value):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        parsed = datetime.fromtimestamp(seconds + nanos / 1_000_000_000, tz=timezone.utc)
    else:
        raise ValueError(f"Unsupported timestamp value: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_date(value: Any) -> Optional[date]:
    """Convert a backend due date to a date; empty values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        return date.fromisoformat(value.strip())
    return to_datetime(value).date()


def task_from_record(record: dict) -> Task:
    """Build a Task from a backend row."""
    try:
        data = dict(record)
        data["id"] = str(data["id"])
        data["user_id"] = str(data["user_id"])
        data["created_at"] = to_datetime(data["created_at"])
        data["updated_at"] = to_datetime(data["updated_at"])
        data["due_date"] = to_date(data.get("due_date"))
        if data.get("description") is None:
            data["description"] = ""
        return Task.model_validate(data)
    except (KeyError, ValueError, TypeError, PydanticValidationError) as e:
        raise StoreReadError(f"Malformed task record {record.get('id')!r}: {e}") from e


def task_to_record(task: Union[Task, TaskCreate], include: Optional[set] = None) -> dict:
    """Serialize a task into the JSON-safe row written to the backend."""
    return task.model_dump(mode="json", include=include)


def _authorize(user: Optional[AuthUser], user_id: str, operation: str) -> None:
    """Check that the authenticated user owns the partition being accessed."""
    if user is None or not user_id or user.id != user_id:
        logger.warning(
            "Task store access denied",
            operation=operation,
            session_user_id=mask_user_id(user.id) if user else None,
            partition_user_id=mask_user_id(user_id) if user_id else None,
        )
        raise AuthorizationError(f"Not allowed to {operation} tasks of another user")


async def create_task(user: AuthUser, task_data: TaskCreate) -> Task:
    """
    Create a task in the user's partition.

    The store assigns ``id``; ``created_at`` and ``updated_at`` are stamped
    with the same instant. Title is not validated here.
    """
    _authorize(user, task_data.user_id, "create")

    now = _now().isoformat()
    record = task_to_record(task_data)
    record["created_at"] = now
    record["updated_at"] = now

    with log_timing("task_store.create_task", logger=logger, user_id=mask_user_id(task_data.user_id)):
        async with SupabaseClient() as client:
            try:
                result = client.table(TASKS_TABLE).insert(record).execute()
            except Exception as e:
                raise StoreWriteError(f"Failed to create task: {e}") from e

    if not result.data:
        raise StoreWriteError("Failed to create task: no data returned")

    task = task_from_record(result.data[0])
    logger.info("Task created", task_id=task.id, user_id=mask_user_id(task.user_id))
    return task


async def get_tasks(user: AuthUser, user_id: str) -> list[Task]:
    """List every task in the user's partition, newest first."""
    _authorize(user, user_id, "list")

    with log_timing("task_store.get_tasks", logger=logger, user_id=mask_user_id(user_id)):
        async with SupabaseClient() as client:
            try:
                result = client.table(TASKS_TABLE).select("*").eq("user_id", user_id).execute()
            except Exception as e:
                raise StoreReadError(f"Failed to get tasks: {e}") from e

    tasks = [task_from_record(record) for record in (result.data or [])]
    tasks.sort(key=lambda task: task.created_at, reverse=True)
    return tasks


async def get_task(user: AuthUser, user_id: str, task_id: str) -> Task:
    """Get one task from the user's partition."""
    _authorize(user, user_id, "read")

    with log_timing("task_store.get_task", logger=logger, user_id=mask_user_id(user_id), task_id=task_id):
        async with SupabaseClient() as client:
            try:
                result = (
                    client.table(TASKS_TABLE)
                    .select("*")
                    .eq("user_id", user_id)
                    .eq("id", task_id)
                    .execute()
                )
            except Exception as e:
                raise StoreReadError(f"Failed to get task {task_id}: {e}") from e

    if not result.data:
        raise NotFoundError(f"Task not found: {task_id}")
    return task_from_record(result.data[0])


async def update_task(user: AuthUser, task: Task) -> Task:
    """
    Overwrite a task's mutable fields and stamp a fresh ``updated_at``.

    ``id``, ``user_id`` and ``created_at`` are never written.
    """
    _authorize(user, task.user_id, "update")

    record = task_to_record(task, include=set(MUTABLE_FIELDS))
    record["updated_at"] = _now().isoformat()

    with log_timing("task_store.update_task", logger=logger, user_id=mask_user_id(task.user_id), task_id=task.id):
        async with SupabaseClient() as client:
            try:
                result = (
                    client.table(TASKS_TABLE)
                    .update(record)
                    .eq("user_id", task.user_id)
                    .eq("id", task.id)
                    .execute()
                )
            except Exception as e:
                raise StoreWriteError(f"Failed to update task {task.id}: {e}") from e

    if not result.data:
        raise StoreWriteError(f"Failed to update task {task.id}: task no longer exists")
    return task_from_record(result.data[0])


async def update_task_status(
    user: AuthUser,
    user_id: str,
    task_id: str,
    status: Union[TaskStatus, str],
) -> None:
    """Write only ``status`` and a fresh ``updated_at``."""
    _authorize(user, user_id, "update")

    try:
        status = TaskStatus(status)
    except ValueError as e:
        raise ValidationError(f"Invalid task status: {status!r}") from e

    updates = {"status": status.value, "updated_at": _now().isoformat()}

    with log_timing(
        "task_store.update_task_status",
        logger=logger,
        user_id=mask_user_id(user_id),
        task_id=task_id,
        status=status.value,
    ):
        async with SupabaseClient() as client:
            try:
                result = (
                    client.table(TASKS_TABLE)
                    .update(updates)
                    .eq("user_id", user_id)
                    .eq("id", task_id)
                    .execute()
                )
            except Exception as e:
                raise StoreWriteError(f"Failed to update task status {task_id}: {e}") from e

    if not result.data:
        raise StoreWriteError(f"Failed to update task status {task_id}: task no longer exists")


async def delete_task(user: AuthUser, user_id: str, task_id: str) -> None:
    """Hard-delete a task. Deleting a missing task is not an error."""
    _authorize(user, user_id, "delete")

    with log_timing("task_store.delete_task", logger=logger, user_id=mask_user_id(user_id), task_id=task_id):
        async with SupabaseClient() as client:
            try:
                result = (
                    client.table(TASKS_TABLE)
                    .delete()
                    .eq("user_id", user_id)
                    .eq("id", task_id)
                    .execute()
                )
            except Exception as e:
                raise StoreWriteError(f"Failed to delete task {task_id}: {e}") from e

    if not result.data:
        logger.debug("Delete matched no task", task_id=task_id, user_id=mask_user_id(user_id))
