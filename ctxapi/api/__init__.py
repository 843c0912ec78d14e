"""HTTP routes for todos and users."""

from .todos import router as todo_router
from .users import router as user_router

__all__ = ["todo_router", "user_router"]
