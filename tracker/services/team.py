"""Team membership changes and lookups.

Mutations are owner-only by identity. The permission table grants managers
``add_member``, but that grant is not consulted here.
"""
import uuid
from dataclasses import dataclass

from tracker.errors import BadRequest, Forbidden, NotFound
from tracker.models.enums import Permission, Role
from tracker.models.membership import TeamMember
from tracker.models.project import Project
from tracker.rbac.membership import NotAMember, require_access, role_in
from tracker.rbac.perms import parse_role, permissions_for
from tracker.store import Store

@dataclass
class MemberPermissions:
    username: str
    role: Role
    permissions: list[Permission]

def _require_owner(store: Store, username: str, project_id: uuid.UUID, action: str) -> Project:
    project = store.get_project(project_id)
    if project is None:
        raise NotFound(f"project {project_id} not found")
    if project.owner_id != username:
        raise Forbidden(f"only the project owner can {action}")
    return project

def _valid_role(value: Role | str | None) -> Role:
    # all four roles are accepted; an "owner" row never confers owner identity
    role = parse_role(value)
    if role is None:
        raise BadRequest(f"invalid role: {value}")
    return role

def _existing_member(store: Store, project_id: uuid.UUID, username: str) -> TeamMember:
    m = store.get_membership(project_id, username)
    if m is None:
        raise NotFound(f"user '{username}' is not a member of this project")
    return m

def add_member(
    store: Store, actor: str, project_id: uuid.UUID, username: str, role: Role | str
) -> TeamMember:
    project = _require_owner(store, actor, project_id, "add team members")
    r = _valid_role(role)
    if username == project.owner_id:
        raise BadRequest("project owner is already a member by default")
    return store.upsert_membership(project_id, username, r)

def update_member_role(
    store: Store, actor: str, project_id: uuid.UUID, username: str, role: Role | str
) -> TeamMember:
    project = _require_owner(store, actor, project_id, "update member roles")
    r = _valid_role(role)
    if username == project.owner_id:
        raise BadRequest("cannot change the project owner's role")
    _existing_member(store, project_id, username)
    return store.upsert_membership(project_id, username, r)

def remove_member(store: Store, actor: str, project_id: uuid.UUID, username: str) -> None:
    project = _require_owner(store, actor, project_id, "remove team members")
    if username == project.owner_id:
        raise BadRequest("cannot remove the project owner")
    m = _existing_member(store, project_id, username)
    for t in store.list_tasks(project_id):
        if t.assigned_to == username:
            store.update_task(t.id, {"assigned_to": None})
    store.delete_membership(m.id)

def list_team(store: Store, actor: str, project_id: uuid.UUID) -> list[TeamMember]:
    require_access(store, actor, project_id)
    return store.list_memberships(project_id)

def get_member(store: Store, actor: str, project_id: uuid.UUID, username: str) -> TeamMember:
    require_access(store, actor, project_id)
    return _existing_member(store, project_id, username)

def member_permissions(
    store: Store, actor: str, project_id: uuid.UUID, username: str
) -> MemberPermissions:
    access = require_access(store, actor, project_id)
    resolved = role_in(store, access.project, username)
    if isinstance(resolved, NotAMember):
        raise NotFound(f"user '{username}' is not a member of this project")
    return MemberPermissions(
        username=username,
        role=resolved.role,
        permissions=permissions_for(resolved.role),
    )
