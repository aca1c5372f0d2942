import logging
import uuid

from fastapi import APIRouter, Depends, Response

from tracker.auth.deps import get_current_user
from tracker.models.task import Task
from tracker.models.user import User
from tracker.rbac.deps import get_store
from tracker.schemas.tasks import TaskCreateIn, TaskMutationOut, TaskOut, TaskStatusIn, TaskUpdateIn
from tracker.services import tasks as svc
from tracker.store import SqlStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])

def task_out(t: Task) -> TaskOut:
    return TaskOut(
        id=t.id,
        project_id=t.project_id,
        title=t.title,
        description=t.description,
        assigned_to=t.assigned_to,
        status=t.status,
        priority=t.priority,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )

def mutation_out(result: svc.TaskMutation) -> TaskMutationOut:
    return TaskMutationOut(
        **task_out(result.task).model_dump(),
        project_progress=result.project_progress,
    )

@router.post("", response_model=TaskOut, status_code=201)
def create_task(
    project_id: uuid.UUID,
    payload: TaskCreateIn,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> TaskOut:
    t = svc.create_task(
        store,
        user.username,
        project_id,
        title=payload.title,
        description=payload.description,
        assigned_to=payload.assigned_to,
        status=payload.status,
        priority=payload.priority,
    )
    logger.info("task %s created in project %s by %s", t.id, project_id, user.username)
    return task_out(t)

@router.get("", response_model=list[TaskOut])
def list_tasks(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> list[TaskOut]:
    return [task_out(t) for t in svc.list_tasks(store, user.username, project_id)]

@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> TaskOut:
    return task_out(svc.get_task(store, user.username, project_id, task_id))

@router.put("/{task_id}", response_model=TaskMutationOut)
def update_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    payload: TaskUpdateIn,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> TaskMutationOut:
    # only fields the client sent; explicit null unassigns
    changes = payload.model_dump(exclude_unset=True)
    result = svc.update_task(store, user.username, project_id, task_id, changes)
    logger.info("task %s updated by %s (%s)", task_id, user.username, ", ".join(sorted(changes)))
    if result.project_progress is not None:
        logger.info("project %s progress -> %d", project_id, result.project_progress)
    return mutation_out(result)

@router.patch("/{task_id}/status", response_model=TaskMutationOut)
def update_task_status(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    payload: TaskStatusIn,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> TaskMutationOut:
    result = svc.update_task_status(store, user.username, project_id, task_id, payload.status)
    logger.info(
        "task %s status -> %s by %s, project %s progress -> %d",
        task_id,
        payload.status.value,
        user.username,
        project_id,
        result.project_progress,
    )
    return mutation_out(result)

@router.delete("/{task_id}", status_code=204)
def delete_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    user: User = Depends(get_current_user),
    store: SqlStore = Depends(get_store),
) -> Response:
    svc.delete_task(store, user.username, project_id, task_id)
    logger.info("task %s deleted by %s", task_id, user.username)
    return Response(status_code=204)
