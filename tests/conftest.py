import os

# must be set before tracker.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tracker.db import get_db
from tracker.main import create_app
from tracker.models import Base
from tracker.models.enums import Role
from tracker.models.project import Project
from tracker.models.user import User
from tracker.store import SqlStore

@pytest.fixture()
def db_session() -> Session:
    database_url = os.environ["DATABASE_URL"]

    if database_url.startswith("sqlite"):
        # one shared connection so the app thread sees the test's tables
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, pool_pre_ping=True)

    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def store(db_session: Session) -> SqlStore:
    return SqlStore(db_session)

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def make_user(db: Session, username: str) -> User:
    u = User(username=username, email=f"{username}@example.com")
    db.add(u)
    db.commit()
    return u

def make_project(store: SqlStore, owner: str, name: str = "p") -> Project:
    return store.insert_project({"name": name, "owner_id": owner, "status": "active", "progress": 0})

@pytest.fixture()
def team(db_session: Session, store: SqlStore) -> Project:
    """alice owns the project; dave manages, bob develops, carol views.

    erin has an account but no relationship to the project.
    """
    for username in ("alice", "bob", "carol", "dave", "erin"):
        make_user(db_session, username)

    project = make_project(store, "alice", f"team-{uuid.uuid4().hex[:6]}")
    store.upsert_membership(project.id, "dave", Role.manager)
    store.upsert_membership(project.id, "bob", Role.developer)
    store.upsert_membership(project.id, "carol", Role.viewer)
    return project

def login(client, username: str) -> str:
    r = client.post(
        "/auth/request-link",
        json={"username": username, "email": f"{username}@example.com"},
    )
    assert r.status_code == 200, r.text
    token = r.json()["token"]

    r = client.post("/auth/redeem", json={"token": token})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}
