"""Data access used by the rbac rules and services.

``Store`` is the narrow table API the engine depends on: lookups by id or by
simple equality predicates, plus insert/update/delete by id. ``SqlStore`` is the
SQLAlchemy-backed implementation; every write commits and refreshes the row the
same way the route handlers used to do inline.
"""
import uuid
from typing import Any, Protocol

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from tracker.models.enums import Role
from tracker.models.membership import TeamMember
from tracker.models.project import Project
from tracker.models.task import Task

class Store(Protocol):
    def get_project(self, project_id: uuid.UUID) -> Project | None: ...

    def update_project(self, project_id: uuid.UUID, fields: dict[str, Any]) -> Project: ...

    def get_membership(self, project_id: uuid.UUID, username: str) -> TeamMember | None: ...

    def list_memberships(self, project_id: uuid.UUID) -> list[TeamMember]: ...

    def upsert_membership(self, project_id: uuid.UUID, username: str, role: Role) -> TeamMember: ...

    def delete_membership(self, member_id: uuid.UUID) -> None: ...

    def get_task(self, task_id: uuid.UUID) -> Task | None: ...

    def list_tasks(self, project_id: uuid.UUID) -> list[Task]: ...

    def insert_task(self, fields: dict[str, Any]) -> Task: ...

    def update_task(self, task_id: uuid.UUID, fields: dict[str, Any]) -> Task: ...

    def delete_task(self, task_id: uuid.UUID) -> None: ...

class SqlStore:
    def __init__(self, db: Session):
        self.db = db

    # projects

    def get_project(self, project_id: uuid.UUID) -> Project | None:
        return self.db.get(Project, project_id)

    def insert_project(self, fields: dict[str, Any]) -> Project:
        p = Project(**fields)
        self.db.add(p)
        self.db.commit()
        self.db.refresh(p)
        return p

    def update_project(self, project_id: uuid.UUID, fields: dict[str, Any]) -> Project:
        p = self.db.get(Project, project_id)
        if p is None:
            raise LookupError(f"project {project_id} does not exist")
        for k, v in fields.items():
            setattr(p, k, v)
        self.db.add(p)
        self.db.commit()
        self.db.refresh(p)
        return p

    def delete_project(self, project_id: uuid.UUID) -> None:
        self.db.execute(delete(Task).where(Task.project_id == project_id))
        self.db.execute(delete(TeamMember).where(TeamMember.project_id == project_id))
        self.db.execute(delete(Project).where(Project.id == project_id))
        self.db.commit()

    def list_projects_for(self, username: str) -> list[Project]:
        team = select(TeamMember.project_id).where(TeamMember.username == username)
        q = (
            select(Project)
            .where(or_(Project.owner_id == username, Project.id.in_(team)))
            .order_by(Project.created_at.desc())
        )
        return list(self.db.scalars(q).all())

    # team

    def get_membership(self, project_id: uuid.UUID, username: str) -> TeamMember | None:
        q = select(TeamMember).where(
            TeamMember.project_id == project_id, TeamMember.username == username
        )
        return self.db.scalar(q)

    def list_memberships(self, project_id: uuid.UUID) -> list[TeamMember]:
        q = (
            select(TeamMember)
            .where(TeamMember.project_id == project_id)
            .order_by(TeamMember.assigned_at)
        )
        return list(self.db.scalars(q).all())

    def upsert_membership(self, project_id: uuid.UUID, username: str, role: Role) -> TeamMember:
        m = self.get_membership(project_id, username)
        if m is None:
            m = TeamMember(project_id=project_id, username=username, role=role)
        else:
            m.role = role
        self.db.add(m)
        self.db.commit()
        self.db.refresh(m)
        return m

    def delete_membership(self, member_id: uuid.UUID) -> None:
        self.db.execute(delete(TeamMember).where(TeamMember.id == member_id))
        self.db.commit()

    # tasks

    def get_task(self, task_id: uuid.UUID) -> Task | None:
        return self.db.get(Task, task_id)

    def list_tasks(self, project_id: uuid.UUID) -> list[Task]:
        q = select(Task).where(Task.project_id == project_id).order_by(Task.created_at.desc())
        return list(self.db.scalars(q).all())

    def list_tasks_assigned_to(self, username: str) -> list[Task]:
        q = select(Task).where(Task.assigned_to == username).order_by(Task.updated_at.desc())
        return list(self.db.scalars(q).all())

    def insert_task(self, fields: dict[str, Any]) -> Task:
        t = Task(**fields)
        self.db.add(t)
        self.db.commit()
        self.db.refresh(t)
        return t

    def update_task(self, task_id: uuid.UUID, fields: dict[str, Any]) -> Task:
        t = self.db.get(Task, task_id)
        if t is None:
            raise LookupError(f"task {task_id} does not exist")
        for k, v in fields.items():
            setattr(t, k, v)
        self.db.add(t)
        self.db.commit()
        self.db.refresh(t)
        return t

    def delete_task(self, task_id: uuid.UUID) -> None:
        self.db.execute(delete(Task).where(Task.id == task_id))
        self.db.commit()
