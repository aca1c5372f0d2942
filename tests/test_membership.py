import uuid

import pytest

from tracker.errors import NotFound, Unauthorized
from tracker.models.enums import Role
from tracker.rbac.membership import (
    Member,
    NotAMember,
    Owner,
    is_member,
    is_owner,
    require_access,
    resolve_role,
    role_of,
)

def test_owner_resolves_without_membership_row(store, team):
    assert resolve_role(store, "alice", team.id) == Owner()
    assert role_of(store, "alice", team.id) is Role.owner
    assert store.get_membership(team.id, "alice") is None

def test_owner_beats_stray_membership_row(store, team):
    # a row that should never exist, written around the team rules
    store.upsert_membership(team.id, "alice", Role.viewer)

    assert resolve_role(store, "alice", team.id) == Owner()
    assert role_of(store, "alice", team.id) is Role.owner

def test_team_member_resolves_to_row_role(store, team):
    assert resolve_role(store, "bob", team.id) == Member(role=Role.developer)
    assert role_of(store, "dave", team.id) is Role.manager
    assert role_of(store, "carol", team.id) is Role.viewer

def test_stranger_is_not_a_member(store, team):
    assert resolve_role(store, "erin", team.id) == NotAMember()
    assert role_of(store, "erin", team.id) is None
    assert is_member(store, "erin", team.id) is False

def test_is_member_and_is_owner(store, team):
    assert is_member(store, "alice", team.id) is True
    assert is_member(store, "carol", team.id) is True
    assert is_owner(store, "alice", team.id) is True
    assert is_owner(store, "dave", team.id) is False

def test_missing_project_is_not_found_not_non_member(store, team):
    missing = uuid.uuid4()
    with pytest.raises(NotFound):
        resolve_role(store, "alice", missing)
    with pytest.raises(NotFound):
        is_member(store, "alice", missing)
    with pytest.raises(NotFound):
        is_owner(store, "alice", missing)
    with pytest.raises(NotFound):
        require_access(store, "erin", missing)

def test_require_access_rejects_strangers_as_unauthorized(store, team):
    with pytest.raises(Unauthorized) as exc:
        require_access(store, "erin", team.id)
    assert exc.value.status_code == 401

    access = require_access(store, "bob", team.id)
    assert access.role == Member(role=Role.developer)
    assert access.is_owner is False
    assert require_access(store, "alice", team.id).is_owner is True

def test_resolution_is_repeatable_and_tracks_current_state(store, team):
    assert role_of(store, "bob", team.id) == role_of(store, "bob", team.id)

    store.upsert_membership(team.id, "bob", Role.manager)
    assert role_of(store, "bob", team.id) is Role.manager
