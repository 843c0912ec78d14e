"""Todo repository - data access layer."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

import asyncpg

from ..models.todo import Todo

logger = logging.getLogger(__name__)


class TodoRepository(Protocol):
    """Storage capability the todo handlers depend on."""

    async def get_todos(self) -> List[Todo]: ...

    async def get_todo(self, todo_id: int) -> Optional[Todo]: ...

    async def create_todo(self, title: str, description: str) -> int: ...

    async def update_todo(
        self,
        todo_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        done: Optional[bool] = None,
    ) -> Optional[int]: ...

    async def delete_todo(self, todo_id: int) -> Optional[int]: ...


def _log_db_error(action: str, details: Dict[str, Any]) -> None:
    summary = {key: type(value).__name__ for key, value in details.items()}
    logger.exception("Database %s failed (types=%s)", action, summary)


class PostgresTodoRepository:
    """Todo repository backed by the ``todos`` table."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def get_todos(self) -> List[Todo]:
        try:
            rows = await self._pool.fetch("SELECT * FROM todos ORDER BY id;")
        except Exception:
            _log_db_error("get_todos", {})
            raise
        return [Todo.model_validate(dict(row)) for row in rows]

    async def get_todo(self, todo_id: int) -> Optional[Todo]:
        try:
            row = await self._pool.fetchrow("SELECT * FROM todos WHERE id = $1;", todo_id)
        except Exception:
            _log_db_error("get_todo", {"id": todo_id})
            raise
        if row is None:
            return None
        return Todo.model_validate(dict(row))

    async def create_todo(self, title: str, description: str) -> int:
        try:
            return await self._pool.fetchval(
                """
                INSERT INTO todos (title, description, done)
                VALUES ($1, $2, $3)
                RETURNING id;
                """,
                title,
                description,
                False,
            )
        except Exception:
            _log_db_error("create_todo", {"title": title, "description": description})
            raise

    async def update_todo(
        self,
        todo_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        done: Optional[bool] = None,
    ) -> Optional[int]:
        try:
            return await self._pool.fetchval(
                """
                UPDATE todos
                SET title = COALESCE($1, title),
                    description = COALESCE($2, description),
                    done = COALESCE($3, done)
                WHERE id = $4
                RETURNING id;
                """,
                title,
                description,
                done,
                todo_id,
            )
        except Exception:
            _log_db_error(
                "update_todo",
                {"id": todo_id, "title": title, "description": description, "done": done},
            )
            raise

    async def delete_todo(self, todo_id: int) -> Optional[int]:
        try:
            return await self._pool.fetchval(
                "DELETE FROM todos WHERE id = $1 RETURNING id;",
                todo_id,
            )
        except Exception:
            _log_db_error("delete_todo", {"id": todo_id})
            raise


class InMemoryTodoRepository:
    """Todo repository with in-memory storage, used when no database is configured."""

    def __init__(self) -> None:
        self._todos: Dict[int, Todo] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def get_todos(self) -> List[Todo]:
        async with self._lock:
            return [self._todos[key] for key in sorted(self._todos)]

    async def get_todo(self, todo_id: int) -> Optional[Todo]:
        async with self._lock:
            return self._todos.get(todo_id)

    async def create_todo(self, title: str, description: str) -> int:
        async with self._lock:
            todo_id = self._next_id
            self._todos[todo_id] = Todo(
                id=todo_id,
                title=title,
                description=description,
                done=False,
                created_at=datetime.now(),
            )
            self._next_id += 1
            return todo_id

    async def update_todo(
        self,
        todo_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        done: Optional[bool] = None,
    ) -> Optional[int]:
        async with self._lock:
            todo = self._todos.get(todo_id)
            if todo is None:
                return None
            changes = {
                field: value
                for field, value in (("title", title), ("description", description), ("done", done))
                if value is not None
            }
            self._todos[todo_id] = todo.model_copy(update=changes)
            return todo_id

    async def delete_todo(self, todo_id: int) -> Optional[int]:
        async with self._lock:
            if self._todos.pop(todo_id, None) is None:
                return None
            return todo_id
