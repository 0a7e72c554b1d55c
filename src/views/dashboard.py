"""Dashboard view - the user's tasks grouped into status columns."""

from typing import Optional

from src.models.task import Task, TaskStatus
from src.models.user import AuthUser
from src.services import task_store
from src.utils.errors import StoreError
from src.utils.logging import get_structured_logger, mask_user_id
from src.views.presenters import STATUS_LABELS, task_card
from src.views.session import require_user
from src.views.task_form import TaskForm

logger = get_structured_logger(__name__)

EMPTY_COLUMN_MESSAGES = {
    TaskStatus.PENDING: "No pending tasks",
    TaskStatus.IN_PROGRESS: "No tasks in progress",
    TaskStatus.COMPLETED: "No completed tasks",
}

LOAD_FAILED = "Failed to load tasks. Please try again."
CREATE_FAILED = "Failed to create task. Please try again."
DELETE_FAILED = "Failed to delete task. Please try again."
STATUS_FAILED = "Failed to update task status. Please try again."


class DashboardView:
    """
    Per-request dashboard state.

    After every successful mutation the task list is fetched again rather
    than patched locally. If that re-fetch fails the previous list is kept
    and ``stale`` is set.
    """

    def __init__(self, user: AuthUser):
        self.user = user
        self.tasks: list[Task] = []
        self.stale = True
        self.error: Optional[str] = None

    @classmethod
    async def open(cls, access_token: Optional[str]) -> "DashboardView":
        """Resolve the current user and load their tasks."""
        view = cls(await require_user(access_token))
        await view.load()
        return view

    async def load(self) -> bool:
        try:
            self.tasks = await task_store.get_tasks(self.user, self.user.id)
        except StoreError as e:
            logger.error("Error fetching tasks", user_id=mask_user_id(self.user.id), error=str(e))
            self.stale = True
            self.error = LOAD_FAILED
            return False
        self.stale = False
        return True

    async def create_task(self, form: TaskForm) -> Optional[Task]:
        try:
            task = await task_store.create_task(self.user, form.to_create(self.user.id))
        except StoreError as e:
            logger.error("Error creating task", user_id=mask_user_id(self.user.id), error=str(e))
            self.error = CREATE_FAILED
            return None
        await self.load()
        return task

    async def delete_task(self, task_id: str) -> bool:
        try:
            await task_store.delete_task(self.user, self.user.id, task_id)
        except StoreError as e:
            logger.error("Error deleting task", task_id=task_id, error=str(e))
            self.error = DELETE_FAILED
            return False
        await self.load()
        return True

    async def update_status(self, task_id: str, status: TaskStatus) -> bool:
        try:
            await task_store.update_task_status(self.user, self.user.id, task_id, status)
        except StoreError as e:
            logger.error("Error updating task status", task_id=task_id, error=str(e))
            self.error = STATUS_FAILED
            return False
        await self.load()
        return True

    def tasks_by_status(self, status: TaskStatus) -> list[Task]:
        return [task for task in self.tasks if task.status == status]

    def columns(self) -> list[dict]:
        columns = []
        for status in TaskStatus:
            tasks = self.tasks_by_status(status)
            columns.append({
                "status": status.value,
                "label": STATUS_LABELS[status],
                "count": len(tasks),
                "tasks": [task_card(task) for task in tasks],
                "empty_message": EMPTY_COLUMN_MESSAGES[status],
            })
        return columns

    def to_dict(self) -> dict:
        return {
            "user": self.user.model_dump(),
            "greeting": f"Welcome back, {self.user.name}",
            "columns": self.columns(),
            "stale": self.stale,
            "error": self.error,
        }
