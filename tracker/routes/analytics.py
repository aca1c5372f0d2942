import uuid

from fastapi import APIRouter, Depends

from tracker.auth.deps import get_current_user
from tracker.models.user import User
from tracker.rbac.deps import get_store
from tracker.routes.tasks import task_out
from tracker.schemas.analytics import (
    DashboardOut,
    DashboardProjectOut,
    MemberAnalyticsOut,
    ProjectAnalyticsOut,
)
from tracker.services import analytics as svc
from tracker.store import SqlStore

router = APIRouter(tags=["analytics"])

@router.get("/projects/{project_id}/analytics", response_model=ProjectAnalyticsOut)
def project_analytics(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> ProjectAnalyticsOut:
    a = svc.project_analytics(store, user.username, project_id)
    return ProjectAnalyticsOut(
        project_id=a.project_id,
        project_name=a.project_name,
        total_tasks=a.total_tasks,
        completed_tasks=a.completed_tasks,
        in_progress_tasks=a.in_progress_tasks,
        todo_tasks=a.todo_tasks,
        overall_progress=a.overall_progress,
        team_size=a.team_size,
        tasks_by_status=a.tasks_by_status,
        tasks_by_priority=a.tasks_by_priority,
    )

@router.get("/projects/{project_id}/analytics/member/{username}", response_model=MemberAnalyticsOut)
def member_analytics(
    project_id: uuid.UUID,
    username: str,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> MemberAnalyticsOut:
    m = svc.member_analytics(store, user.username, project_id, username)
    return MemberAnalyticsOut(
        username=m.username,
        total_tasks=m.total_tasks,
        completed_tasks=m.completed_tasks,
        in_progress_tasks=m.in_progress_tasks,
        todo_tasks=m.todo_tasks,
    )

@router.get("/dashboard", response_model=DashboardOut)
def dashboard(
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> DashboardOut:
    d = svc.dashboard(store, user.username)
    return DashboardOut(
        user_projects=[
            DashboardProjectOut(
                id=dp.project.id,
                name=dp.project.name,
                description=dp.project.description,
                status=dp.project.status,
                progress=dp.project.progress,
                role=dp.role,
                team_size=dp.team_size,
                task_count=dp.task_count,
            )
            for dp in d.projects
        ],
        my_tasks=[task_out(t) for t in d.my_tasks],
        statistics=d.statistics,
    )
