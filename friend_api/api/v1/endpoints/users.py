from typing import List
from fastapi import APIRouter, Depends, status

from friend_api.api.dependencies import get_user_service
from friend_api.core.errors import AppError, http_error
from friend_api.models.response import MessageResponse, message_response
from friend_api.models.user import User, UserCreate, UserStatusUpdate
from friend_api.services.user_service import UserService

router = APIRouter()


@router.post("/create", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)):
    """Register a new user"""
    try:
        return await service.create_user(payload)
    except AppError as e:
        raise http_error("create user", e)


@router.get("/all", response_model=List[User])
async def get_all_users(service: UserService = Depends(get_user_service)):
    try:
        return await service.get_all_users()
    except AppError as e:
        raise http_error("get all users", e)


@router.get("/pseudo/{pseudo}", response_model=User)
async def get_user(pseudo: str, service: UserService = Depends(get_user_service)):
    try:
        return await service.get_user(pseudo)
    except AppError as e:
        raise http_error("get user", e)


@router.get("/pseudo/{pseudo}/friends", response_model=List[str])
async def get_friend_list(pseudo: str, service: UserService = Depends(get_user_service)):
    """Get the pseudos in a user's friend list"""
    try:
        return await service.get_friend_list(pseudo)
    except AppError as e:
        raise http_error("get friend list", e)


@router.patch("/status/{pseudo}", response_model=User)
async def update_status(
    pseudo: str,
    payload: UserStatusUpdate,
    service: UserService = Depends(get_user_service),
):
    try:
        return await service.update_status(pseudo, payload.status)
    except AppError as e:
        raise http_error("update user status", e)


@router.delete("/delete/{pseudo}", response_model=MessageResponse)
async def delete_user(pseudo: str, service: UserService = Depends(get_user_service)):
    try:
        return message_response(await service.delete_user(pseudo))
    except AppError as e:
        raise http_error("delete user", e)
