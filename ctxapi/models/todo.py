"""Todo data models using Pydantic."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Todo(BaseModel):
    """Row of the ``todos`` table."""

    id: int
    title: str
    description: str
    done: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    def to_dto(self) -> TodoDTO:
        """Project the row onto its wire shape."""
        return TodoDTO(
            id=self.id,
            title=self.title,
            description=self.description,
            done=self.done,
            created_at=str(self.created_at),
        )


class TodoDTO(BaseModel):
    """Todo as returned by the API, with the timestamp rendered as text."""

    id: int
    title: str
    description: str
    done: bool
    created_at: str


def reject_nul(value: Optional[str]) -> Optional[str]:
    # Postgres TEXT columns cannot store NUL characters.
    if value is not None and "\x00" in value:
        raise ValueError("must not contain NUL characters")
    return value


class CreateTodo(BaseModel):
    """Model for creating new todos."""

    title: str
    description: str

    @field_validator("title", "description")
    @classmethod
    def check_text(cls, value: Optional[str]) -> Optional[str]:
        return reject_nul(value)


class UpdateTodo(BaseModel):
    """Partial update; fields left out keep their stored value."""

    title: Optional[str] = None
    description: Optional[str] = None
    done: Optional[bool] = None

    @field_validator("title", "description")
    @classmethod
    def check_text(cls, value: Optional[str]) -> Optional[str]:
        return reject_nul(value)
