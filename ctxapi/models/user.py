from __future__ import annotations

from pydantic import BaseModel


class User(BaseModel):
    id: int
    name: str
    email: str


class UserDTO(BaseModel):
    name: str
    email: str
