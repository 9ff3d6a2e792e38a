import os
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

# Ensure the module-level app never touches the filesystem during tests
os.environ.setdefault("STORAGE_BACKEND", "memory")

from todo_api.main import create_app  # noqa: E402
from todo_api.models import TodoEntity  # noqa: E402
from todo_api.storage import InMemoryStorage, Storage  # noqa: E402


class MockStorage(Storage):
    """
    Storage double that records every call and fails with `err` when set.
    """

    name = "mock"

    def __init__(self, todos: Optional[List[TodoEntity]] = None, err: Optional[Exception] = None) -> None:
        self.todos = todos or []
        self.err = err
        self.calls: List[str] = []

    def _maybe_fail(self, op: str) -> None:
        self.calls.append(op)
        if self.err is not None:
            raise self.err

    def get_all(self):
        self._maybe_fail("get_all")
        return [t.copy() for t in self.todos]

    def get(self, todo_id):
        self._maybe_fail("get")
        return {"id": todo_id, "title": "Test", "description": "Desc", "done": False}

    def insert(self, todo):
        self._maybe_fail("insert")
        todo["id"] = 42

    def update(self, todo, todo_id):
        self._maybe_fail("update")
        return {**todo, "id": todo_id}

    def delete(self, todo_id):
        self._maybe_fail("delete")
        return {"id": todo_id, "title": "Deleted", "description": "", "done": False}


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def client(storage) -> TestClient:
    """Client for an app serving a fresh in-memory store."""
    return TestClient(create_app(storage=storage))


@pytest.fixture
def mock_client():
    """Factory returning (client, mock storage) pairs."""

    def _make(**kwargs):
        mock = MockStorage(**kwargs)
        return TestClient(create_app(storage=mock)), mock

    return _make
