"""Task models."""

from enum import Enum
from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, Field, model_validator


class TaskStatus(str, Enum):
    """Task status. Any status may move to any other status."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskCreate(BaseModel):
    """Task fields supplied by the caller on creation."""
    user_id: str = Field(..., description="Owning user ID (partition key)")
    title: str = Field(..., description="Task title (caller ensures non-empty)")
    description: str = Field(default="", description="Task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    due_date: Optional[date] = Field(None, description="Due date (date only)")


class Task(TaskCreate):
    """Task model - a unit of work owned by exactly one user."""
    id: str = Field(..., description="Store-assigned task ID")
    created_at: datetime = Field(..., description="Set once by the store at creation")
    updated_at: datetime = Field(..., description="Refreshed by the store on every mutation")

    @model_validator(mode="after")
    def _check_timestamps(self) -> "Task":
        if self.created_at > self.updated_at:
            raise ValueError("created_at must not be later than updated_at")
        return self
