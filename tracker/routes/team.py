import logging
import uuid

from fastapi import APIRouter, Depends, Response

from tracker.auth.deps import get_current_user
from tracker.models.membership import TeamMember
from tracker.models.user import User
from tracker.rbac.deps import get_store
from tracker.schemas.team import MemberAddIn, MemberOut, MemberPermissionsOut, MemberRoleIn
from tracker.services import team as svc
from tracker.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}/team", tags=["team"])

def member_out(m: TeamMember) -> MemberOut:
    return MemberOut(
        id=m.id,
        project_id=m.project_id,
        username=m.username,
        role=m.role,
        assigned_at=m.assigned_at,
    )

@router.post("", response_model=MemberOut, status_code=201)
def add_member(
    project_id: uuid.UUID,
    payload: MemberAddIn,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> MemberOut:
    m = svc.add_member(store, user.username, project_id, payload.username, payload.role)
    logger.info("project %s: %s joined as %s", project_id, m.username, m.role.value)
    return member_out(m)

@router.get("", response_model=list[MemberOut])
def list_team(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> list[MemberOut]:
    return [member_out(m) for m in svc.list_team(store, user.username, project_id)]

@router.get("/{username}", response_model=MemberOut)
def get_member(
    project_id: uuid.UUID,
    username: str,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> MemberOut:
    return member_out(svc.get_member(store, user.username, project_id, username))

@router.put("/{username}", response_model=MemberOut)
def update_member_role(
    project_id: uuid.UUID,
    username: str,
    payload: MemberRoleIn,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> MemberOut:
    m = svc.update_member_role(store, user.username, project_id, username, payload.role)
    logger.info("project %s: %s is now %s", project_id, m.username, m.role.value)
    return member_out(m)

@router.delete("/{username}", status_code=204)
def remove_member(
    project_id: uuid.UUID,
    username: str,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> Response:
    svc.remove_member(store, user.username, project_id, username)
    logger.info("project %s: %s removed", project_id, username)
    return Response(status_code=204)

@router.get("/{username}/permissions", response_model=MemberPermissionsOut)
def member_permissions(
    project_id: uuid.UUID,
    username: str,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> MemberPermissionsOut:
    mp = svc.member_permissions(store, user.username, project_id, username)
    return MemberPermissionsOut(username=mp.username, role=mp.role, permissions=mp.permissions)
