import uuid
from dataclasses import dataclass

from tracker.errors import Forbidden
from tracker.models.enums import Permission, Role
from tracker.models.project import Project
from tracker.models.task import Task
from tracker.rbac.membership import require_access, role_in
from tracker.rbac.rules import has_perm
from tracker.services.projects import count_by_priority, count_by_status
from tracker.store import SqlStore

@dataclass
class ProjectAnalytics:
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

@dataclass
class MemberAnalytics:
    username: str
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    todo_tasks: int

@dataclass
class DashboardProject:
    project: Project
    role: Role | None
    team_size: int
    task_count: int

@dataclass
class Dashboard:
    projects: list[DashboardProject]
    my_tasks: list[Task]
    statistics: dict[str, int]

def project_analytics(store: SqlStore, username: str, project_id: uuid.UUID) -> ProjectAnalytics:
    access = require_access(store, username, project_id)
    if not has_perm(access, Permission.view_analytics):
        raise Forbidden("insufficient permissions to view analytics (owner or manager only)")

    tasks = store.list_tasks(project_id)
    by_status = count_by_status(tasks)
    return ProjectAnalytics(
        project_id=project_id,
        project_name=access.project.name,
        total_tasks=len(tasks),
        completed_tasks=by_status["completed"],
        in_progress_tasks=by_status["in_progress"],
        todo_tasks=by_status["todo"],
        overall_progress=access.project.progress,
        # team rows plus the implicit owner
        team_size=len(store.list_memberships(project_id)) + 1,
        tasks_by_status=by_status,
        tasks_by_priority=count_by_priority(tasks),
    )

def member_analytics(
    store: SqlStore, username: str, project_id: uuid.UUID, target: str
) -> MemberAnalytics:
    access = require_access(store, username, project_id)
    if target != username and not has_perm(access, Permission.view_analytics):
        raise Forbidden("insufficient permissions to view member analytics (owner, manager, or self only)")

    tasks = [t for t in store.list_tasks(project_id) if t.assigned_to == target]
    by_status = count_by_status(tasks)
    return MemberAnalytics(
        username=target,
        total_tasks=len(tasks),
        completed_tasks=by_status["completed"],
        in_progress_tasks=by_status["in_progress"],
        todo_tasks=by_status["todo"],
    )

def dashboard(store: SqlStore, username: str) -> Dashboard:
    projects = []
    for p in store.list_projects_for(username):
        projects.append(
            DashboardProject(
                project=p,
                role=role_in(store, p, username).role,
                team_size=len(store.list_memberships(p.id)) + 1,
                task_count=len(store.list_tasks(p.id)),
            )
        )

    my_tasks = store.list_tasks_assigned_to(username)
    by_status = count_by_status(my_tasks)
    statistics = {
        "total_projects": len(projects),
        "total_assigned_tasks": len(my_tasks),
        "completed_tasks_by_me": by_status["completed"],
        "in_progress_tasks_by_me": by_status["in_progress"],
        "todo_tasks_by_me": by_status["todo"],
    }
    return Dashboard(projects=projects, my_tasks=my_tasks, statistics=statistics)
