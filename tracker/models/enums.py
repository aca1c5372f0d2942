from enum import Enum

class Role(str, Enum):
    owner = "owner"
    manager = "manager"
    developer = "developer"
    viewer = "viewer"

class Permission(str, Enum):
    create_project = "create_project"
    edit_project = "edit_project"
    delete_project = "delete_project"
    view_project = "view_project"
    create_task = "create_task"
    edit_task = "edit_task"
    delete_task = "delete_task"
    view_task = "view_task"
    assign_task = "assign_task"
    update_task_status = "update_task_status"
    manage_team = "manage_team"
    add_member = "add_member"
    remove_member = "remove_member"
    update_role = "update_role"
    view_analytics = "view_analytics"

class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    completed = "completed"

class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
