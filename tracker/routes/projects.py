import logging
import uuid

from fastapi import APIRouter, Depends, Response

from tracker.auth.deps import get_current_user
from tracker.models.project import Project
from tracker.models.user import User
from tracker.rbac.deps import get_store
from tracker.routes.team import member_out
from tracker.schemas.projects import (
    ProjectCreateIn,
    ProjectDetailOut,
    ProjectListOut,
    ProjectOut,
    ProjectStatsOut,
    ProjectUpdateIn,
)
from tracker.services import projects as svc
from tracker.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])

def project_out(p: Project) -> ProjectOut:
    return ProjectOut(
        id=p.id,
        name=p.name,
        description=p.description,
        status=p.status,
        owner_id=p.owner_id,
        progress=p.progress,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )

def project_detail_out(pt: svc.ProjectWithTeam) -> ProjectDetailOut:
    return ProjectDetailOut(
        **project_out(pt.project).model_dump(),
        team_members=[member_out(m) for m in pt.team],
    )

@router.post("", response_model=ProjectOut, status_code=201)
def create_project(
    payload: ProjectCreateIn,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> ProjectOut:
    p = svc.create_project(
        store,
        user.username,
        name=payload.name,
        description=payload.description,
        status=payload.status,
    )
    logger.info("project %s created by %s", p.id, user.username)
    return project_out(p)

@router.get("", response_model=ProjectListOut)
def list_projects(
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> ProjectListOut:
    rows = [project_detail_out(pt) for pt in svc.list_projects(store, user.username)]
    return ProjectListOut(projects=rows, total=len(rows))

@router.get("/{project_id}", response_model=ProjectDetailOut)
def get_project(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> ProjectDetailOut:
    return project_detail_out(svc.get_project(store, user.username, project_id))

@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: uuid.UUID,
    payload: ProjectUpdateIn,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> ProjectOut:
    p = svc.update_project(store, user.username, project_id, payload.model_dump(exclude_unset=True))
    logger.info("project %s updated by %s", project_id, user.username)
    return project_out(p)

@router.delete("/{project_id}", status_code=204)
def delete_project(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> Response:
    svc.delete_project(store, user.username, project_id)
    logger.info("project %s deleted by %s", project_id, user.username)
    return Response(status_code=204)

@router.get("/{project_id}/stats", response_model=ProjectStatsOut)
def project_stats(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> ProjectStatsOut:
    s = svc.project_stats(store, user.username, project_id)
    return ProjectStatsOut(
        project_id=s.project_id,
        project_name=s.project_name,
        total_tasks=s.total_tasks,
        tasks_by_status=s.tasks_by_status,
        tasks_by_priority=s.tasks_by_priority,
        team_member_count=s.team_member_count,
        progress=s.progress,
        status=s.status,
    )
