"""Shared fixtures: an isolated JSON store per test and a client bound to it."""

import json

import pytest
from fastapi.testclient import TestClient

from taskboard.database import JsonFileStorage, get_storage
from taskboard.main import app
from taskboard.models import new_task_list, new_user
from taskboard.routers import auth


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """bcrypt's minimum cost keeps signup tests quick."""
    monkeypatch.setattr(auth, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def storage(db_path):
    return JsonFileStorage(db_path)


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def read_db(db_path):
    """Read the persisted document straight from disk."""
    def _read():
        return json.loads(db_path.read_text(encoding="utf-8"))
    return _read


@pytest.fixture
def task_list(storage):
    """A user with one task list, written directly into the store."""
    user = new_user("taskuser@example.com", "...somehash...")
    task_list = new_task_list(user["id"], name="Test List")
    user["defaultTaskListId"] = task_list["id"]
    with storage.transaction() as db:
        db["users"].append(user)
        db["taskLists"].append(task_list)
    return task_list


@pytest.fixture
def make_task(client, task_list):
    def _make(title, task_list_id=None):
        response = client.post(
            "/api/tasks",
            json={"taskListId": task_list_id or task_list["id"], "title": title},
        )
        assert response.status_code == 201
        return response.json()
    return _make
