"""API routes for todo management."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ..models.todo import CreateTodo, TodoDTO, UpdateTodo
from ..services.todo_service import TodoService
from .dependencies import get_todo_service

router = APIRouter(prefix="/todo", tags=["todo"])

# Ids come from a BIGSERIAL column.
TODO_ID_MAX = 2**63 - 1


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


@router.get("/", response_model=List[TodoDTO])
async def get_todos(service: TodoService = Depends(get_todo_service)) -> List[TodoDTO]:
    """Get all todo items."""
    return await service.get_todos()


@router.get("/{todo_id}", response_model=TodoDTO)
async def get_todo(
    todo_id: int = Path(..., ge=1, le=TODO_ID_MAX),
    service: TodoService = Depends(get_todo_service),
) -> TodoDTO:
    """Get a specific todo item by ID."""
    todo = await service.get_todo(todo_id)
    if todo is None:
        raise _not_found()
    return todo


@router.post("/", response_model=int, status_code=status.HTTP_201_CREATED)
async def create_todo(
    body: CreateTodo,
    service: TodoService = Depends(get_todo_service),
) -> int:
    """Create a todo item and return its id."""
    return await service.create_todo(body)


@router.put("/{todo_id}", response_model=int)
async def update_todo(
    body: UpdateTodo,
    todo_id: int = Path(..., ge=1, le=TODO_ID_MAX),
    service: TodoService = Depends(get_todo_service),
) -> int:
    """Update the fields present in the body and return the todo id."""
    updated_id = await service.update_todo(todo_id, body)
    if updated_id is None:
        raise _not_found()
    return updated_id


@router.delete("/{todo_id}", response_model=int)
async def delete_todo(
    todo_id: int = Path(..., ge=1, le=TODO_ID_MAX),
    service: TodoService = Depends(get_todo_service),
) -> int:
    """Delete a todo item and return the deleted id."""
    deleted_id = await service.delete_todo(todo_id)
    if deleted_id is None:
        raise _not_found()
    return deleted_id
