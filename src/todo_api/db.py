from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, List

from .errors import NotFoundError, StorageError
from .models import TodoEntity
from .storage import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    done: str = "done"


_COLS = _Cols()

# SQLite rowids are signed 64-bit integers.
_MAX_ROWID = 2**63 - 1


class SQLiteStorage(Storage):
    """
    Lightweight SQLite storage implementing the Storage interface.
    """

    name = "sqlite"

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise StorageError(f"cannot open database: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise StorageError(f"constraint violation: {e}") from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.exception("SQLite operation failed")
            raise StorageError(f"database error: {e}") from e
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.title} TEXT NOT NULL,
                    {_COLS.description} TEXT NOT NULL DEFAULT '',
                    {_COLS.done} INTEGER NOT NULL DEFAULT 0
                )
                """
            )

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        return {
            "id": int(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "description": str(row[_COLS.description]),
            "done": bool(row[_COLS.done]),
        }

    def _select(self, conn: sqlite3.Connection, todo_id: int) -> TodoEntity:
        if todo_id > _MAX_ROWID:
            raise NotFoundError(todo_id)
        row = conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)).fetchone()
        if row is None:
            raise NotFoundError(todo_id)
        return self._row_to_entity(row)

    def get_all(self) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.id} ASC").fetchall()
            return [self._row_to_entity(r) for r in rows]

    def get(self, todo_id: int) -> TodoEntity:
        with self._conn() as conn:
            return self._select(conn, todo_id)

    def insert(self, todo: TodoEntity) -> None:
        done = 1 if todo["done"] else 0
        if todo.get("id", 0) > _MAX_ROWID:
            raise StorageError(f"todo id {todo['id']} exceeds the SQLite rowid range")
        with self._conn() as conn:
            if todo.get("id"):
                cur = conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.description}, {_COLS.done})
                    VALUES (?, ?, ?, ?)
                    """,
                    (todo["id"], todo["title"], todo["description"], done),
                )
            else:
                cur = conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.title}, {_COLS.description}, {_COLS.done})
                    VALUES (?, ?, ?)
                    """,
                    (todo["title"], todo["description"], done),
                )
            todo["id"] = int(cur.lastrowid)

    def update(self, todo: TodoEntity, todo_id: int) -> TodoEntity:
        if todo_id > _MAX_ROWID:
            raise NotFoundError(todo_id)
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.title} = ?, {_COLS.description} = ?, {_COLS.done} = ?
                WHERE {_COLS.id} = ?
                """,
                (todo["title"], todo["description"], 1 if todo["done"] else 0, todo_id),
            )
            if cur.rowcount == 0:
                raise NotFoundError(todo_id)
            return self._select(conn, todo_id)

    def delete(self, todo_id: int) -> TodoEntity:
        with self._conn() as conn:
            removed = self._select(conn, todo_id)
            conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
            return removed
