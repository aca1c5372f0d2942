"""Per-action eligibility for tasks.

Every rule checks owner identity first; the owner never goes through the
permission table. The remaining roles are judged by the table plus the
self-assignment exceptions for edit and status updates.
"""
from tracker.models.enums import Permission, Role
from tracker.models.project import Project
from tracker.models.task import Task
from tracker.rbac.membership import NotAMember, ProjectAccess, role_in
from tracker.rbac.perms import check_permission
from tracker.store import Store

def has_perm(access: ProjectAccess, permission: Permission) -> bool:
    if access.is_owner:
        return True
    return check_permission(access.role.role, permission)

def can_view_task(access: ProjectAccess) -> bool:
    return has_perm(access, Permission.view_task)

def can_create_task(access: ProjectAccess) -> bool:
    return has_perm(access, Permission.create_task)

def can_assign_task(access: ProjectAccess) -> bool:
    return has_perm(access, Permission.assign_task)

def can_edit_task(access: ProjectAccess, task: Task) -> bool:
    if access.is_owner:
        return True
    role = access.role.role
    if role in (Role.owner, Role.manager):
        return True
    if role == Role.developer:
        return task.assigned_to == access.username
    return False

def can_update_task_status(access: ProjectAccess, task: Task) -> bool:
    if access.is_owner:
        return True
    if task.assigned_to is not None and task.assigned_to == access.username:
        return True
    return check_permission(access.role.role, Permission.update_task_status)

def can_delete_task(access: ProjectAccess) -> bool:
    if access.is_owner:
        return True
    return access.role.role in (Role.owner, Role.manager)

def is_assignable(store: Store, project: Project, username: str) -> bool:
    """Owner or current team member."""
    return not isinstance(role_in(store, project, username), NotAMember)
