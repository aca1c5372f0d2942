import uuid

import pytest

from tracker.errors import BadRequest, Forbidden, NotFound, Unauthorized
from tracker.models.enums import Role, TaskStatus
from tracker.rbac.membership import require_access
from tracker.rbac.rules import (
    can_assign_task,
    can_delete_task,
    can_edit_task,
    can_update_task_status,
    can_view_task,
)
from tracker.services import tasks as svc

def new_task(store, project, assigned_to=None, title="t"):
    return store.insert_task({"project_id": project.id, "title": title, "assigned_to": assigned_to})

# rule predicates

def test_developer_edits_only_tasks_assigned_to_them(store, team):
    bob = require_access(store, "bob", team.id)
    assert can_edit_task(bob, new_task(store, team, assigned_to="bob")) is True
    assert can_edit_task(bob, new_task(store, team, assigned_to="carol")) is False
    assert can_edit_task(bob, new_task(store, team, assigned_to=None)) is False

def test_owner_and_manager_edit_anything_viewer_nothing(store, team):
    unassigned = new_task(store, team)
    carols = new_task(store, team, assigned_to="carol")
    assert can_edit_task(require_access(store, "alice", team.id), unassigned) is True
    assert can_edit_task(require_access(store, "dave", team.id), unassigned) is True
    assert can_edit_task(require_access(store, "carol", team.id), unassigned) is False
    # assignment does not turn a viewer into an editor
    assert can_edit_task(require_access(store, "carol", team.id), carols) is False

def test_assignee_updates_status_even_as_viewer(store, team):
    carols = new_task(store, team, assigned_to="carol")
    bobs = new_task(store, team, assigned_to="bob")
    carol = require_access(store, "carol", team.id)
    assert can_update_task_status(carol, carols) is True
    assert can_update_task_status(carol, bobs) is False
    # developers hold update_task_status for any task
    assert can_update_task_status(require_access(store, "bob", team.id), carols) is True

def test_delete_is_owner_or_manager_only(store, team):
    assert can_delete_task(require_access(store, "alice", team.id)) is True
    assert can_delete_task(require_access(store, "dave", team.id)) is True
    assert can_delete_task(require_access(store, "bob", team.id)) is False
    assert can_delete_task(require_access(store, "carol", team.id)) is False

def test_assign_and_view_follow_the_table(store, team):
    assert [can_assign_task(require_access(store, u, team.id)) for u in ("alice", "dave", "bob", "carol")] == [
        True,
        True,
        False,
        False,
    ]
    assert all(can_view_task(require_access(store, u, team.id)) for u in ("alice", "dave", "bob", "carol"))

# create

def test_developer_self_assignment_skips_assign_check(store, team):
    t = svc.create_task(store, "bob", team.id, title="mine", assigned_to="bob")
    assert t.assigned_to == "bob"
    assert t.status == TaskStatus.todo

def test_developer_assigning_non_member_is_bad_request(store, team):
    with pytest.raises(BadRequest):
        svc.create_task(store, "bob", team.id, title="x", assigned_to="erin")

def test_developer_assigning_member_is_forbidden(store, team):
    with pytest.raises(Forbidden):
        svc.create_task(store, "bob", team.id, title="x", assigned_to="carol")

def test_manager_may_assign_to_owner(store, team):
    t = svc.create_task(store, "dave", team.id, title="for alice", assigned_to="alice")
    assert t.assigned_to == "alice"

def test_viewer_cannot_create(store, team):
    with pytest.raises(Forbidden):
        svc.create_task(store, "carol", team.id, title="nope")

def test_stranger_is_unauthorized_and_missing_project_not_found(store, team):
    with pytest.raises(Unauthorized):
        svc.create_task(store, "erin", team.id, title="nope")
    with pytest.raises(NotFound):
        svc.create_task(store, "alice", uuid.uuid4(), title="nope")

# edit

def test_developer_edits_own_task_fields(store, team):
    t = new_task(store, team, assigned_to="bob")
    res = svc.update_task(store, "bob", team.id, t.id, {"title": "renamed", "description": "d"})
    assert res.task.title == "renamed"
    assert res.project_progress is None

def test_developer_cannot_edit_others_task(store, team):
    t = new_task(store, team, assigned_to="carol")
    with pytest.raises(Forbidden):
        svc.update_task(store, "bob", team.id, t.id, {"title": "hijack"})

def test_reassignment_needs_assign_permission(store, team):
    t = new_task(store, team, assigned_to="bob")
    with pytest.raises(Forbidden):
        svc.update_task(store, "bob", team.id, t.id, {"assigned_to": "carol"})
    # unchanged assignee is not a reassignment
    res = svc.update_task(store, "bob", team.id, t.id, {"assigned_to": "bob", "title": "same"})
    assert res.task.assigned_to == "bob"

def test_reassignment_to_non_member_is_bad_request(store, team):
    t = new_task(store, team)
    with pytest.raises(BadRequest):
        svc.update_task(store, "dave", team.id, t.id, {"assigned_to": "erin"})

def test_manager_can_unassign(store, team):
    t = new_task(store, team, assigned_to="bob")
    res = svc.update_task(store, "dave", team.id, t.id, {"assigned_to": None})
    assert res.task.assigned_to is None

def test_null_title_is_ignored(store, team):
    t = new_task(store, team, title="keep")
    res = svc.update_task(store, "alice", team.id, t.id, {"title": None})
    assert res.task.title == "keep"

def test_task_from_another_project_is_not_found(store, team):
    other = store.insert_project({"name": "other", "owner_id": "alice", "status": "active", "progress": 0})
    t = new_task(store, other)
    with pytest.raises(NotFound):
        svc.update_task(store, "alice", team.id, t.id, {"title": "x"})
    with pytest.raises(NotFound):
        svc.get_task(store, "alice", team.id, t.id)

# status + delete

def test_viewer_assignee_moves_status_but_cannot_edit(store, team):
    t = new_task(store, team, assigned_to="carol")
    res = svc.update_task_status(store, "carol", team.id, t.id, TaskStatus.completed)
    assert res.task.status == TaskStatus.completed
    assert res.project_progress == 100

    with pytest.raises(Forbidden):
        svc.update_task(store, "carol", team.id, t.id, {"title": "nope"})

def test_viewer_cannot_move_someone_elses_status(store, team):
    t = new_task(store, team, assigned_to="bob")
    with pytest.raises(Forbidden):
        svc.update_task_status(store, "carol", team.id, t.id, TaskStatus.in_progress)

def test_developer_delete_is_forbidden_even_when_assigned(store, team):
    t = new_task(store, team, assigned_to="bob")
    with pytest.raises(Forbidden):
        svc.delete_task(store, "bob", team.id, t.id)
    assert store.get_task(t.id) is not None

    svc.delete_task(store, "dave", team.id, t.id)
    assert store.get_task(t.id) is None

def test_stray_owner_role_row_grants_table_rights(store, team):
    store.upsert_membership(team.id, "bob", Role.owner)
    t = new_task(store, team, assigned_to="carol")
    assert can_edit_task(require_access(store, "bob", team.id), t) is True
    assert can_delete_task(require_access(store, "bob", team.id)) is True
