from __future__ import annotations

import os
import tempfile

# Settings are read at import time, so they must be in place before the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="classroom-uploads-")

import pytest
from fastapi.testclient import TestClient

from classroom_api import config
from classroom_api.app import app
from classroom_api.core.database import SessionLocal, engine
from classroom_api.models.base import Base

PASSWORD = "secret123"


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def _schema(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "UPLOAD_DIR", tmp_path / "uploads")
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def signup(client):
    """Sign up a parent or teacher; returns (user id, auth headers)."""

    def _signup(username: str, role_id: int, **names):
        resp = client.post(
            "/auth/signup",
            json={"username": username, "password": PASSWORD, "roleId": role_id, **names},
        )
        assert resp.status_code == 201, resp.text
        headers = auth(resp.json()["token"])
        me = client.get("/auth/me", headers=headers)
        return me.json()["id"], headers

    return _signup


@pytest.fixture()
def register_child(client):
    """Register a student under a parent; returns (student id, auth headers)."""

    def _register(parent_headers: dict, username: str, **names):
        resp = client.post(
            "/auth/register-child",
            headers=parent_headers,
            json={"username": username, "password": PASSWORD, **names},
        )
        assert resp.status_code == 201, resp.text
        child_id = resp.json()["child"]["id"]
        login = client.post("/auth/login", json={"username": username, "password": PASSWORD})
        return child_id, auth(login.json()["token"])

    return _register


@pytest.fixture()
def teacher(signup):
    return signup("teacher", 3, name="Tess", surname="Turner")


@pytest.fixture()
def parent(signup):
    return signup("parent", 2, name="Pat", surname="Parker")


@pytest.fixture()
def student(parent, register_child):
    _, parent_headers = parent
    return register_child(parent_headers, "student", name="Sam", surname="Stone")


@pytest.fixture()
def classroom(client, teacher):
    """A classroom administered by the ``teacher`` fixture."""
    _, headers = teacher
    resp = client.post("/classroom", headers=headers, json={"name": "Math"})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture()
def enrolled(client, teacher, student, classroom):
    """``student`` added to ``classroom``; returns the classroom body."""
    _, headers = teacher
    student_id, _ = student
    resp = client.post(
        f"/classroom/{classroom['id']}/users", headers=headers, json={"userIds": [student_id]}
    )
    assert resp.status_code == 200, resp.text
    return classroom
