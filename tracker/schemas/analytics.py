import uuid

from pydantic import BaseModel

from tracker.models.enums import Role
from tracker.schemas.tasks import TaskOut

class ProjectAnalyticsOut(BaseModel):
    project_id: uuid.UUID
    project_name: str
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    todo_tasks: int
    overall_progress: int
    team_size: int
    tasks_by_status: dict[str, int]
    tasks_by_priority: dict[str, int]

class MemberAnalyticsOut(BaseModel):
    username: str
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    todo_tasks: int

class DashboardProjectOut(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    status: str
    progress: int
    role: Role | None
    team_size: int
    task_count: int

class DashboardOut(BaseModel):
    user_projects: list[DashboardProjectOut]
    my_tasks: list[TaskOut]
    statistics: dict[str, int]
