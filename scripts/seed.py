import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from tracker.db import SessionLocal
from tracker.models.enums import Role, TaskStatus
from tracker.models.project import Project
from tracker.models.task import Task
from tracker.models.user import User
from tracker.services.progress import recalculate_progress
from tracker.services.team import add_member
from tracker.store import SqlStore

@dataclass
class SeedResult:
    owner: str
    manager: str
    developer: str
    viewer: str
    project_id: uuid.UUID
    progress: int

def get_or_create_user(db: Session, username: str) -> User:
    u = db.get(User, username)
    if u is None:
        u = User(username=username, email=f"{username}@example.com")
        db.add(u)
        db.commit()
    return u

def get_or_create_project(store: SqlStore, owner: str, name: str) -> Project:
    p = store.db.scalar(select(Project).where(Project.owner_id == owner, Project.name == name))
    if p is None:
        p = store.insert_project({"name": name, "owner_id": owner, "status": "active", "progress": 0})
    return p

def get_or_create_task(
    store: SqlStore,
    project_id: uuid.UUID,
    title: str,
    assigned_to: str | None,
    status: TaskStatus,
) -> Task:
    t = store.db.scalar(select(Task).where(Task.project_id == project_id, Task.title == title))
    if t is None:
        return store.insert_task(
            {"project_id": project_id, "title": title, "assigned_to": assigned_to, "status": status}
        )
    # keep it stable if you re-run seed
    return store.update_task(t.id, {"assigned_to": assigned_to, "status": status})

def seed() -> SeedResult:
    db = SessionLocal()
    store = SqlStore(db)
    try:
        for username in ("alice", "bob", "carol", "dave"):
            get_or_create_user(db, username)

        project = get_or_create_project(store, "alice", "seeded project")

        # upserts, safe to re-run
        add_member(store, "alice", project.id, "dave", Role.manager)
        add_member(store, "alice", project.id, "bob", Role.developer)
        add_member(store, "alice", project.id, "carol", Role.viewer)

        get_or_create_task(store, project.id, "write api docs", "bob", TaskStatus.completed)
        get_or_create_task(store, project.id, "fix login bug", "bob", TaskStatus.in_progress)
        get_or_create_task(store, project.id, "review release notes", "carol", TaskStatus.todo)
        get_or_create_task(store, project.id, "plan next sprint", None, TaskStatus.todo)

        progress = recalculate_progress(store, project.id)

        return SeedResult(
            owner="alice",
            manager="dave",
            developer="bob",
            viewer="carol",
            project_id=project.id,
            progress=progress,
        )
    finally:
        db.close()

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"project_id={r.project_id}")
    print(f"progress={r.progress}")
    print("users:")
    print(f"  owner:     {r.owner}")
    print(f"  manager:   {r.manager}")
    print(f"  developer: {r.developer}")
    print(f"  viewer:    {r.viewer}")
