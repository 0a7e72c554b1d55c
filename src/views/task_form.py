"""Create / edit task form handling."""

from datetime import date
from typing import Any, Optional

from src.models.task import Task, TaskCreate, TaskPriority, TaskStatus
from src.services.validators import optional_text, parse_due_date, validate_title
from src.utils.errors import ValidationError


class TaskForm:
    """Validated form input for the create and edit task modals."""

    def __init__(
        self,
        title: str,
        description: str = "",
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: Optional[date] = None,
        status: Optional[TaskStatus] = None,
    ):
        self.title = title
        self.description = description
        self.priority = priority
        self.due_date = due_date
        self.status = status

    @classmethod
    def from_input(cls, data: dict[str, Any]) -> "TaskForm":
        """Build a form from raw request fields, raising ValidationError on bad input."""
        if not isinstance(data, dict):
            raise ValidationError("Form data must be an object")

        title = validate_title(data.get("title"))
        description = optional_text(data.get("description"), "Description").strip()

        try:
            priority = TaskPriority(data.get("priority") or TaskPriority.MEDIUM)
        except ValueError as e:
            raise ValidationError(f"Invalid priority: {data.get('priority')!r}") from e

        status = None
        if data.get("status"):
            try:
                status = TaskStatus(data["status"])
            except ValueError as e:
                raise ValidationError(f"Invalid status: {data['status']!r}") from e

        return cls(
            title=title,
            description=description,
            priority=priority,
            due_date=parse_due_date(data.get("due_date")),
            status=status,
        )

    def to_create(self, user_id: str) -> TaskCreate:
        """New tasks always start as pending."""
        return TaskCreate(
            user_id=user_id,
            title=self.title,
            description=self.description,
            priority=self.priority,
            due_date=self.due_date,
            status=TaskStatus.PENDING,
        )

    def apply_to(self, task: Task) -> Task:
        """Return a copy of ``task`` with the form's fields applied."""
        updates = {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "due_date": self.due_date,
        }
        if self.status is not None:
            updates["status"] = self.status
        return task.model_copy(update=updates)
