import uuid
from dataclasses import dataclass

from tracker.errors import NotFound, Unauthorized
from tracker.models.enums import Role
from tracker.models.project import Project
from tracker.rbac.perms import parse_role
from tracker.store import Store

@dataclass(frozen=True)
class Owner:
    @property
    def role(self) -> Role:
        return Role.owner

@dataclass(frozen=True)
class Member:
    role: Role

@dataclass(frozen=True)
class NotAMember:
    @property
    def role(self) -> None:
        return None

ProjectRole = Owner | Member | NotAMember

def _load_project(store: Store, project_id: uuid.UUID) -> Project:
    project = store.get_project(project_id)
    if project is None:
        raise NotFound(f"project {project_id} not found")
    return project

def role_in(store: Store, project: Project, username: str) -> ProjectRole:
    # owner identity beats any stray team row
    if project.owner_id == username:
        return Owner()

    m = store.get_membership(project.id, username)
    if m is None:
        return NotAMember()
    role = parse_role(m.role)
    if role is None:
        return NotAMember()
    return Member(role=role)

def resolve_role(store: Store, username: str, project_id: uuid.UUID) -> ProjectRole:
    return role_in(store, _load_project(store, project_id), username)

def role_of(store: Store, username: str, project_id: uuid.UUID) -> Role | None:
    return resolve_role(store, username, project_id).role

def is_member(store: Store, username: str, project_id: uuid.UUID) -> bool:
    return not isinstance(resolve_role(store, username, project_id), NotAMember)

def is_owner(store: Store, username: str, project_id: uuid.UUID) -> bool:
    return _load_project(store, project_id).owner_id == username

class ProjectAccess:
    """A caller's resolved standing in one project."""

    def __init__(self, project: Project, username: str, role: ProjectRole):
        self.project = project
        self.username = username
        self.role = role

    @property
    def is_owner(self) -> bool:
        return isinstance(self.role, Owner)

def require_access(store: Store, username: str, project_id: uuid.UUID) -> ProjectAccess:
    project = _load_project(store, project_id)
    role = role_in(store, project, username)
    if isinstance(role, NotAMember):
        raise Unauthorized("you don't have access to this project")
    return ProjectAccess(project=project, username=username, role=role)
