import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from tracker.models.enums import TaskPriority, TaskStatus

class TaskCreateIn(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    assigned_to: str | None = None
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium

class TaskUpdateIn(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    assigned_to: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None

class TaskStatusIn(BaseModel):
    status: TaskStatus

class TaskOut(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    description: str | None
    assigned_to: str | None
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime

class TaskMutationOut(TaskOut):
    project_progress: int | None = None
