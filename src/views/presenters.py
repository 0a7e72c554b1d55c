"""Display helpers shared by the dashboard and task detail views."""

from datetime import date, datetime
from typing import Optional, Union

from src.models.task import Task, TaskPriority, TaskStatus

STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.COMPLETED: "Completed",
}

PRIORITY_LABELS = {
    TaskPriority.LOW: "Low Priority",
    TaskPriority.MEDIUM: "Medium Priority",
    TaskPriority.HIGH: "High Priority",
}


def status_label(status: TaskStatus) -> str:
    return STATUS_LABELS[TaskStatus(status)]


def priority_label(priority: TaskPriority) -> str:
    return PRIORITY_LABELS[TaskPriority(priority)]


def format_date_long(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """``Monday, December 9, 2024``"""
    if value is None:
        return None
    return f"{value.strftime('%A, %B')} {value.day}, {value.year}"


def format_date_short(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """``Dec 9, 2024``"""
    if value is None:
        return None
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def status_actions(task: Task) -> list[dict]:
    """Status changes offered for a task: every status but the current one."""
    return [
        {"status": status.value, "label": f"Mark as {STATUS_LABELS[status]}"}
        for status in TaskStatus
        if status != task.status
    ]


def task_card(task: Task) -> dict:
    """Compact representation used in dashboard columns."""
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status.value,
        "status_label": status_label(task.status),
        "priority": task.priority.value,
        "priority_label": priority_label(task.priority),
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "due_date_display": format_date_short(task.due_date),
        "actions": status_actions(task),
    }


def task_detail(task: Task) -> dict:
    """Full representation used on the task detail screen."""
    return {
        **task.model_dump(mode="json"),
        "status_label": status_label(task.status),
        "priority_label": priority_label(task.priority),
        "description_display": task.description or "No description provided.",
        "due_date_display": format_date_long(task.due_date),
        "created_at_display": format_date_long(task.created_at),
        "updated_at_display": format_date_long(task.updated_at),
        "actions": status_actions(task),
    }
