from .todo_repository import InMemoryTodoRepository, PostgresTodoRepository, TodoRepository
from .user_store import UserStore

__all__ = [
    "InMemoryTodoRepository",
    "PostgresTodoRepository",
    "TodoRepository",
    "UserStore",
]
