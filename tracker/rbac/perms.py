from types import MappingProxyType

from tracker.models.enums import Permission, Role

ROLE_PERMISSIONS: MappingProxyType[Role, frozenset[Permission]] = MappingProxyType({
    Role.owner: frozenset(Permission),
    Role.manager: frozenset({
        Permission.edit_project,
        Permission.view_project,
        Permission.create_task,
        Permission.edit_task,
        Permission.delete_task,
        Permission.view_task,
        Permission.assign_task,
        Permission.update_task_status,
        Permission.add_member,
        Permission.view_analytics,
    }),
    Role.developer: frozenset({
        Permission.view_project,
        Permission.create_task,
        Permission.view_task,
        Permission.update_task_status,
    }),
    Role.viewer: frozenset({
        Permission.view_project,
        Permission.view_task,
    }),
})

def parse_role(value: Role | str | None) -> Role | None:
    """Case-insensitive role lookup; ``None`` for anything unrecognized."""
    if value is None:
        return None
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        return None

def check_permission(role: Role | str | None, permission: Permission | str) -> bool:
    r = parse_role(role)
    if r is None:
        return False
    try:
        p = Permission(permission)
    except ValueError:
        return False
    return p in ROLE_PERMISSIONS[r]

def permissions_for(role: Role | str | None) -> list[Permission]:
    r = parse_role(role)
    if r is None:
        return []
    granted = ROLE_PERMISSIONS[r]
    # declaration order, not set order
    return [p for p in Permission if p in granted]
