"""API dependencies for todo and user management."""

from fastapi import Depends

from .. import db
from ..repositories.todo_repository import (
    InMemoryTodoRepository,
    PostgresTodoRepository,
    TodoRepository,
)
from ..repositories.user_store import UserStore
from ..services.todo_service import TodoService

_memory_repository = InMemoryTodoRepository()
_user_store = UserStore()


def get_todo_repository() -> TodoRepository:
    """Dependency for getting the todo repository instance."""
    if db.is_enabled():
        return PostgresTodoRepository(db.get_pool())
    return _memory_repository


def get_todo_service(
    repository: TodoRepository = Depends(get_todo_repository),
) -> TodoService:
    """Dependency for getting the todo service instance."""
    return TodoService(repository)


def get_user_store() -> UserStore:
    """Dependency for the shared in-memory user store."""
    return _user_store
