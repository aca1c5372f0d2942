import uuid
from dataclasses import dataclass, field
from typing import Any

from tracker.errors import BadRequest, Forbidden
from tracker.models.enums import TaskPriority, TaskStatus
from tracker.models.membership import TeamMember
from tracker.models.project import Project
from tracker.rbac.membership import require_access
from tracker.store import SqlStore

UPDATABLE_FIELDS = ("name", "description", "status")

@dataclass
class ProjectWithTeam:
    project: Project
    team: list[TeamMember] = field(default_factory=list)

@dataclass
class ProjectStats:
    project_id: uuid.UUID
    project_name: str
    total_tasks: int
    tasks_by_status: dict[str, int]
    tasks_by_priority: dict[str, int]
    team_member_count: int
    progress: int
    status: str

def create_project(
    store: SqlStore,
    owner: str,
    name: str,
    description: str | None = None,
    status: str | None = None,
) -> Project:
    return store.insert_project(
        {
            "name": name,
            "description": description,
            "status": status or "active",
            "owner_id": owner,
            "progress": 0,
        }
    )

def list_projects(store: SqlStore, username: str) -> list[ProjectWithTeam]:
    return [
        ProjectWithTeam(project=p, team=store.list_memberships(p.id))
        for p in store.list_projects_for(username)
    ]

def get_project(store: SqlStore, username: str, project_id: uuid.UUID) -> ProjectWithTeam:
    access = require_access(store, username, project_id)
    return ProjectWithTeam(project=access.project, team=store.list_memberships(project_id))

def update_project(
    store: SqlStore, username: str, project_id: uuid.UUID, changes: dict[str, Any]
) -> Project:
    access = require_access(store, username, project_id)
    if not access.is_owner:
        raise Forbidden("only the project owner can perform this action")

    update = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None}
    if not update:
        raise BadRequest("no fields to update")
    return store.update_project(project_id, update)

def delete_project(store: SqlStore, username: str, project_id: uuid.UUID) -> None:
    access = require_access(store, username, project_id)
    if not access.is_owner:
        raise Forbidden("only the project owner can perform this action")
    store.delete_project(project_id)

def count_by_status(tasks) -> dict[str, int]:
    counts = {s.value: 0 for s in TaskStatus}
    for t in tasks:
        key = TaskStatus(t.status).value
        counts[key] += 1
    return counts

def count_by_priority(tasks) -> dict[str, int]:
    counts = {p.value: 0 for p in TaskPriority}
    for t in tasks:
        key = TaskPriority(t.priority).value
        counts[key] += 1
    return counts

def project_stats(store: SqlStore, username: str, project_id: uuid.UUID) -> ProjectStats:
    access = require_access(store, username, project_id)
    tasks = store.list_tasks(project_id)
    return ProjectStats(
        project_id=project_id,
        project_name=access.project.name,
        total_tasks=len(tasks),
        tasks_by_status=count_by_status(tasks),
        tasks_by_priority=count_by_priority(tasks),
        team_member_count=len(store.list_memberships(project_id)),
        progress=access.project.progress,
        status=access.project.status,
    )
