"""In-memory user storage shared by the user handlers."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from ..models.user import User, UserDTO


class UserStore:
    """Users kept in process memory behind a single lock."""

    def __init__(self) -> None:
        self.users: List[User] = []
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def list_users(self) -> List[User]:
        async with self._lock:
            return list(self.users)

    async def get_user(self, user_id: int) -> Optional[User]:
        async with self._lock:
            return next((user for user in self.users if user.id == user_id), None)

    async def create_user(self, data: UserDTO) -> User:
        async with self._lock:
            user = User(id=self._next_id, name=data.name, email=data.email)
            self._next_id += 1
            self.users.append(user)
            return user

    async def update_user(self, user_id: int, data: UserDTO) -> Optional[User]:
        async with self._lock:
            for index, user in enumerate(self.users):
                if user.id == user_id:
                    updated = User(id=user.id, name=data.name, email=data.email)
                    self.users[index] = updated
                    return updated
            return None

    async def delete_user(self, user_id: int) -> bool:
        async with self._lock:
            for index, user in enumerate(self.users):
                if user.id == user_id:
                    del self.users[index]
                    return True
            return False

    def clear(self) -> None:
        """Clear all stored users (testing helper)."""
        self.users.clear()
        self._next_id = 1
