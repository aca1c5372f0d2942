import uuid

from tracker.models.enums import TaskStatus
from tracker.store import Store

def completion_percent(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    # round half up, integer math
    return (200 * completed + total) // (2 * total)

def recalculate_progress(store: Store, project_id: uuid.UUID) -> int:
    """Recount the project's tasks and persist the completion percentage.

    Full recount on every call; no incremental counter to drift.
    """
    tasks = store.list_tasks(project_id)
    completed = sum(1 for t in tasks if t.status == TaskStatus.completed)
    progress = completion_percent(completed, len(tasks))
    store.update_project(project_id, {"progress": progress})
    return progress
