"""API routes for the in-memory user resource."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.user import User, UserDTO
from ..repositories.user_store import UserStore
from .dependencies import get_user_store

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[User])
async def get_users(store: UserStore = Depends(get_user_store)) -> List[User]:
    return await store.list_users()


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: int, store: UserStore = Depends(get_user_store)) -> User:
    user = await store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(body: UserDTO, store: UserStore = Depends(get_user_store)) -> User:
    return await store.create_user(body)


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: int,
    body: UserDTO,
    store: UserStore = Depends(get_user_store),
) -> User:
    user = await store.update_user(user_id, body)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, store: UserStore = Depends(get_user_store)) -> Response:
    if not await store.delete_user(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
