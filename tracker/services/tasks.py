import uuid
from dataclasses import dataclass
from typing import Any

from tracker.errors import BadRequest, Forbidden, NotFound
from tracker.models.enums import TaskPriority, TaskStatus
from tracker.models.task import Task
from tracker.rbac.membership import require_access
from tracker.rbac.rules import (
    can_assign_task,
    can_create_task,
    can_delete_task,
    can_edit_task,
    can_update_task_status,
    can_view_task,
    is_assignable,
)
from tracker.services.progress import recalculate_progress
from tracker.store import Store

EDITABLE_FIELDS = ("title", "description", "assigned_to", "status", "priority")
NOT_NULL_FIELDS = ("title", "status", "priority")

@dataclass
class TaskMutation:
    task: Task
    # set when the mutation touched status
    project_progress: int | None = None

def _load_task(store: Store, project_id: uuid.UUID, task_id: uuid.UUID) -> Task:
    task = store.get_task(task_id)
    if task is None or task.project_id != project_id:
        raise NotFound(f"task {task_id} not found")
    return task

def create_task(
    store: Store,
    username: str,
    project_id: uuid.UUID,
    title: str,
    description: str | None = None,
    assigned_to: str | None = None,
    status: TaskStatus = TaskStatus.todo,
    priority: TaskPriority = TaskPriority.medium,
) -> Task:
    access = require_access(store, username, project_id)
    if not can_create_task(access):
        raise Forbidden("insufficient permissions to create tasks")

    # self-assignment skips both checks
    if assigned_to and assigned_to != username:
        if not is_assignable(store, access.project, assigned_to):
            raise BadRequest(f"user '{assigned_to}' is not a member of this project")
        if not can_assign_task(access):
            raise Forbidden("insufficient permissions to assign tasks to others")

    task = store.insert_task(
        {
            "project_id": project_id,
            "title": title,
            "description": description,
            "assigned_to": assigned_to or None,
            "status": status,
            "priority": priority,
        }
    )
    recalculate_progress(store, project_id)
    return task

def list_tasks(store: Store, username: str, project_id: uuid.UUID) -> list[Task]:
    access = require_access(store, username, project_id)
    if not can_view_task(access):
        raise Forbidden("insufficient permissions to view tasks")
    return store.list_tasks(project_id)

def get_task(store: Store, username: str, project_id: uuid.UUID, task_id: uuid.UUID) -> Task:
    access = require_access(store, username, project_id)
    if not can_view_task(access):
        raise Forbidden("insufficient permissions to view tasks")
    return _load_task(store, project_id, task_id)

def update_task(
    store: Store,
    username: str,
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    changes: dict[str, Any],
) -> TaskMutation:
    """Apply a partial edit.

    ``changes`` holds only the fields the caller sent; an explicit ``None``
    for ``assigned_to`` unassigns. Reassignment is gated separately from the
    edit itself.
    """
    access = require_access(store, username, project_id)
    task = _load_task(store, project_id, task_id)
    if not can_edit_task(access, task):
        raise Forbidden("insufficient permissions to edit this task")

    update = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
    for k in NOT_NULL_FIELDS:
        if k in update and update[k] is None:
            del update[k]

    if "assigned_to" in update and update["assigned_to"] != task.assigned_to:
        if not can_assign_task(access):
            raise Forbidden("insufficient permissions to assign tasks")
        new_assignee = update["assigned_to"]
        if new_assignee is not None and not is_assignable(store, access.project, new_assignee):
            raise BadRequest(f"user '{new_assignee}' is not a member of this project")

    updated = store.update_task(task.id, update)
    if "status" not in update:
        return TaskMutation(task=updated)
    return TaskMutation(task=updated, project_progress=recalculate_progress(store, project_id))

def update_task_status(
    store: Store,
    username: str,
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    status: TaskStatus,
) -> TaskMutation:
    access = require_access(store, username, project_id)
    task = _load_task(store, project_id, task_id)
    if not can_update_task_status(access, task):
        raise Forbidden("insufficient permissions to update task status")

    updated = store.update_task(task.id, {"status": status})
    return TaskMutation(task=updated, project_progress=recalculate_progress(store, project_id))

def delete_task(store: Store, username: str, project_id: uuid.UUID, task_id: uuid.UUID) -> None:
    access = require_access(store, username, project_id)
    task = _load_task(store, project_id, task_id)
    if not can_delete_task(access):
        raise Forbidden("insufficient permissions to delete tasks")
    store.delete_task(task.id)
    recalculate_progress(store, project_id)
