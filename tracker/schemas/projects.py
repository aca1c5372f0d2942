import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from tracker.schemas.team import MemberOut

class ProjectCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    status: str | None = None

class ProjectUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    status: str | None = None

class ProjectOut(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    status: str
    owner_id: str
    progress: int
    created_at: datetime
    updated_at: datetime

class ProjectDetailOut(ProjectOut):
    team_members: list[MemberOut] = []

class ProjectListOut(BaseModel):
    projects: list[ProjectDetailOut]
    total: int

class ProjectStatsOut(BaseModel):
    project_id: uuid.UUID
    project_name: str
    total_tasks: int
    tasks_by_status: dict[str, int]
    tasks_by_priority: dict[str, int]
    team_member_count: int
    progress: int
    status: str
