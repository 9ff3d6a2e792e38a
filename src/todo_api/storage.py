from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import Dict, List, Optional

from .errors import NotFoundError, StorageError
from .models import TodoEntity
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Storage(ABC):
    """
    Abstract storage contract for todo backends.

    Implementations raise NotFoundError for missing ids and StorageError for
    any other backend failure. Returned entities are copies.
    """

    name = "abstract"

    @abstractmethod
    def get_all(self) -> List[TodoEntity]:
        """Return every stored TodoEntity, ordered by ascending id."""

    @abstractmethod
    def get(self, todo_id: int) -> TodoEntity:
        """Return the TodoEntity with the given id."""

    @abstractmethod
    def insert(self, todo: TodoEntity) -> None:
        """
        Store a new TodoEntity. When todo["id"] is 0 an id is assigned and
        written back into the given dict; a duplicate id is a StorageError.
        """

    @abstractmethod
    def update(self, todo: TodoEntity, todo_id: int) -> TodoEntity:
        """Replace title, description and done of the TodoEntity at todo_id."""

    @abstractmethod
    def delete(self, todo_id: int) -> TodoEntity:
        """Remove the TodoEntity at todo_id and return it."""


class InMemoryStorage(Storage):
    """
    Thread-safe in-memory storage suitable for testing and default runtime.
    """

    name = "memory"

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[int, TodoEntity] = {}
        self._next_id = 1

    def get_all(self) -> List[TodoEntity]:
        with self._lock:
            return [self._items[i].copy() for i in sorted(self._items)]

    def get(self, todo_id: int) -> TodoEntity:
        with self._lock:
            item = self._items.get(todo_id)
            if item is None:
                raise NotFoundError(todo_id)
            return item.copy()

    def insert(self, todo: TodoEntity) -> None:
        with self._lock:
            todo_id = todo.get("id") or 0
            if todo_id == 0:
                todo_id = self._next_id
            elif todo_id in self._items:
                raise StorageError(f"todo {todo_id} already exists")
            self._next_id = max(self._next_id, todo_id + 1)
            todo["id"] = todo_id
            self._items[todo_id] = todo.copy()
        logger.debug("Inserted todo %s", todo_id)

    def update(self, todo: TodoEntity, todo_id: int) -> TodoEntity:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                raise NotFoundError(todo_id)

            updated = existing.copy()
            updated["title"] = todo["title"]
            updated["description"] = todo["description"]
            updated["done"] = todo["done"]
            self._items[todo_id] = updated
            return updated.copy()

    def delete(self, todo_id: int) -> TodoEntity:
        with self._lock:
            removed: Optional[TodoEntity] = self._items.pop(todo_id, None)
            if removed is None:
                raise NotFoundError(todo_id)
            return removed


# PUBLIC_INTERFACE
def get_storage(settings: Optional[Settings] = None) -> Storage:
    """
    Factory to return the configured storage backend based on settings.
    - memory: InMemoryStorage
    - sqlite: SQLiteStorage backed by settings.sqlite_db_path
    """
    settings = settings or get_settings()
    if settings.storage_backend == "sqlite":
        from .db import SQLiteStorage

        logger.info("Using sqlite storage at %s", settings.sqlite_db_path)
        return SQLiteStorage(settings.sqlite_db_path)
    logger.info("Using in-memory storage")
    return InMemoryStorage()
