"""Pydantic models for todos and users."""

from .todo import CreateTodo, Todo, TodoDTO, UpdateTodo
from .user import User, UserDTO

__all__ = [
    "CreateTodo",
    "Todo",
    "TodoDTO",
    "UpdateTodo",
    "User",
    "UserDTO",
]
