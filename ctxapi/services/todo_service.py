"""Todo service - maps repository rows to their wire shape."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..models.todo import CreateTodo, TodoDTO, UpdateTodo
from ..repositories.todo_repository import TodoRepository

logger = logging.getLogger(__name__)


class TodoService:
    """Service for todo operations exposed over HTTP."""

    def __init__(self, repository: TodoRepository) -> None:
        self.repository = repository

    async def get_todos(self) -> List[TodoDTO]:
        todos = await self.repository.get_todos()
        return [todo.to_dto() for todo in todos]

    async def get_todo(self, todo_id: int) -> Optional[TodoDTO]:
        todo = await self.repository.get_todo(todo_id)
        return todo.to_dto() if todo else None

    async def create_todo(self, data: CreateTodo) -> int:
        todo_id = await self.repository.create_todo(data.title, data.description)
        logger.info("Created todo id=%s", todo_id)
        return todo_id

    async def update_todo(self, todo_id: int, data: UpdateTodo) -> Optional[int]:
        """Apply a partial update; ``None`` fields keep their stored value."""
        updated_id = await self.repository.update_todo(
            todo_id,
            title=data.title,
            description=data.description,
            done=data.done,
        )
        if updated_id is None:
            logger.info("Update skipped, todo id=%s not found", todo_id)
        return updated_id

    async def delete_todo(self, todo_id: int) -> Optional[int]:
        deleted_id = await self.repository.delete_todo(todo_id)
        if deleted_id is not None:
            logger.info("Deleted todo id=%s", deleted_id)
        return deleted_id
