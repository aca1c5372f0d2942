import pytest
from sqlalchemy.exc import OperationalError

from tracker.models.enums import TaskStatus
from tracker.services import tasks as svc
from tracker.services.progress import completion_percent, recalculate_progress

def add_tasks(store, project, statuses):
    return [
        store.insert_task({"project_id": project.id, "title": f"t{i}", "status": s})
        for i, s in enumerate(statuses)
    ]

@pytest.mark.parametrize(
    "completed,total,expected",
    [(0, 0, 0), (1, 4, 25), (3, 3, 100), (1, 3, 33), (2, 3, 67), (1, 8, 13), (0, 5, 0)],
)
def test_completion_percent_rounds_half_up(completed, total, expected):
    assert completion_percent(completed, total) == expected

def test_recalculate_one_of_four(store, team):
    add_tasks(store, team, [TaskStatus.completed, TaskStatus.todo, TaskStatus.in_progress, TaskStatus.todo])
    assert recalculate_progress(store, team.id) == 25
    assert store.get_project(team.id).progress == 25

def test_recalculate_empty_project_is_zero(store, team):
    store.update_project(team.id, {"progress": 40})
    assert recalculate_progress(store, team.id) == 0
    assert store.get_project(team.id).progress == 0

def test_recalculate_all_completed(store, team):
    add_tasks(store, team, [TaskStatus.completed] * 3)
    assert recalculate_progress(store, team.id) == 100

def test_status_update_surfaces_new_progress(store, team):
    tasks = add_tasks(store, team, [TaskStatus.todo] * 4)

    res = svc.update_task_status(store, "bob", team.id, tasks[0].id, TaskStatus.completed)
    assert res.project_progress == 25

    res = svc.update_task(store, "dave", team.id, tasks[1].id, {"status": TaskStatus.completed})
    assert res.project_progress == 50
    assert store.get_project(team.id).progress == 50

    # moving back out of completed counts too
    res = svc.update_task_status(store, "alice", team.id, tasks[0].id, TaskStatus.in_progress)
    assert res.project_progress == 25

def test_edit_without_status_leaves_progress_alone(store, team):
    tasks = add_tasks(store, team, [TaskStatus.completed, TaskStatus.todo])
    store.update_project(team.id, {"progress": 0})

    res = svc.update_task(store, "alice", team.id, tasks[1].id, {"title": "renamed"})
    assert res.project_progress is None
    assert store.get_project(team.id).progress == 0

def test_store_errors_propagate_from_recalculation(store, team, monkeypatch):
    (task,) = add_tasks(store, team, [TaskStatus.todo])

    def broken(project_id):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(store, "list_tasks", broken)
    with pytest.raises(OperationalError):
        svc.update_task_status(store, "alice", team.id, task.id, TaskStatus.completed)

def test_create_and_delete_recount_progress(store, team):
    done = svc.create_task(store, "alice", team.id, title="done", status=TaskStatus.completed)
    assert store.get_project(team.id).progress == 100

    svc.create_task(store, "dave", team.id, title="open")
    assert store.get_project(team.id).progress == 50

    svc.delete_task(store, "dave", team.id, done.id)
    assert store.get_project(team.id).progress == 0
