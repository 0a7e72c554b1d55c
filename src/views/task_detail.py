"""Task detail view - one task with edit, status and delete actions."""

from typing import Optional

from src.models.task import Task, TaskStatus
from src.models.user import AuthUser
from src.services import task_store
from src.utils.errors import NotFoundError, StoreError
from src.utils.logging import get_structured_logger
from src.views.presenters import task_detail
from src.views.session import HOME_PATH, require_user
from src.views.task_form import TaskForm

logger = get_structured_logger(__name__)

# Missing and inaccessible tasks read the same to the user
LOAD_FAILED = "Failed to load task. It may have been deleted or you don't have permission to view it."
STATUS_FAILED = "Failed to update task status. Please try again."
UPDATE_FAILED = "Failed to update task. Please try again."
DELETE_FAILED = "Failed to delete task. Please try again."


class TaskDetailView:
    """Per-request task detail state; re-fetches the task after each write."""

    def __init__(self, user: AuthUser, task_id: str):
        self.user = user
        self.task_id = task_id
        self.task: Optional[Task] = None
        self.stale = True
        self.not_found = False
        self.error: Optional[str] = None

    @classmethod
    async def open(cls, access_token: Optional[str], task_id: str) -> "TaskDetailView":
        view = cls(await require_user(access_token), task_id)
        await view.load()
        return view

    async def load(self) -> bool:
        try:
            self.task = await task_store.get_task(self.user, self.user.id, self.task_id)
        except NotFoundError:
            logger.info("Task not found", task_id=self.task_id)
            self.task = None
            self.not_found = True
            self.error = LOAD_FAILED
            return False
        except StoreError as e:
            logger.error("Error fetching task", task_id=self.task_id, error=str(e))
            self.stale = True
            self.error = LOAD_FAILED
            return False
        self.stale = False
        self.not_found = False
        return True

    async def update_status(self, status: TaskStatus) -> bool:
        try:
            await task_store.update_task_status(self.user, self.user.id, self.task_id, status)
        except StoreError as e:
            logger.error("Error updating task status", task_id=self.task_id, error=str(e))
            self.error = STATUS_FAILED
            return False
        await self.load()
        return True

    async def edit(self, form: TaskForm) -> bool:
        if self.task is None:
            self.error = LOAD_FAILED
            return False
        try:
            await task_store.update_task(self.user, form.apply_to(self.task))
        except StoreError as e:
            logger.error("Error updating task", task_id=self.task_id, error=str(e))
            self.error = UPDATE_FAILED
            return False
        await self.load()
        return True

    async def delete(self) -> Optional[str]:
        """Delete the task; returns where to go next, or None on failure."""
        try:
            await task_store.delete_task(self.user, self.user.id, self.task_id)
        except StoreError as e:
            logger.error("Error deleting task", task_id=self.task_id, error=str(e))
            self.error = DELETE_FAILED
            return None
        self.task = None
        return HOME_PATH

    def to_dict(self) -> dict:
        return {
            "task": task_detail(self.task) if self.task else None,
            "stale": self.stale,
            "error": self.error,
        }
