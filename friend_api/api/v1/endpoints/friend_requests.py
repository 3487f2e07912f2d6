from typing import List
from fastapi import APIRouter, Depends, Query, status

from friend_api.api.dependencies import get_friend_request_service
from friend_api.core.errors import AppError, http_error
from friend_api.models.friend_request import FriendRequest, FriendRequestCreate
from friend_api.models.response import MessageResponse, message_response
from friend_api.services.friend_request_service import FriendRequestService

router = APIRouter()


@router.get("/all", response_model=List[FriendRequest])
async def get_all_friend_requests(
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Get all friend requests. Return empty array if no friend requests are found."""
    try:
        return await service.get_all_friend_requests()
    except AppError as e:
        raise http_error("get all friend requests", e)


@router.get("/id/{request_id}", response_model=FriendRequest)
async def get_friend_request_by_id(
    request_id: str,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Get one friend request by its id. Return 404 if no friend request is found."""
    try:
        return await service.get_one_by_id(request_id)
    except AppError as e:
        raise http_error("get friend request", e)


@router.get("/fromTo", response_model=FriendRequest)
async def get_friend_request_by_from_to(
    from_: str = Query(..., alias="from", description="Pseudo of the sender"),
    to: str = Query(..., description="Pseudo of the receiver"),
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Get one friend request by the sender and the receiver. Return 404 if no friend request is found."""
    try:
        return await service.get_one_by_from_to(from_, to)
    except AppError as e:
        raise http_error("get friend request", e)


@router.get("/from/{pseudo}", response_model=List[FriendRequest])
async def get_all_friend_requests_from(
    pseudo: str,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Get all friend requests sent by a user. Return empty array if none are found."""
    try:
        return await service.get_friend_requests_from(pseudo)
    except AppError as e:
        raise http_error("get friend requests from this user", e)


@router.get("/to/{pseudo}", response_model=List[FriendRequest])
async def get_all_friend_requests_sent_to(
    pseudo: str,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Get all friend requests received by a user. Return empty array if none are found."""
    try:
        return await service.get_friend_requests_sent_to(pseudo)
    except AppError as e:
        raise http_error("get friend requests sent to this user", e)


@router.post("/create", response_model=FriendRequest, status_code=status.HTTP_201_CREATED)
async def create_request(
    payload: FriendRequestCreate,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Create a new friend request"""
    try:
        return await service.create_request(payload)
    except AppError as e:
        raise http_error("create new friend request", e)


# The fromTo routes are declared before their /{request_id} siblings so that
# "fromTo" is not captured as an id.
@router.patch("/accept/fromTo", response_model=MessageResponse)
async def accept_request_from_to(
    from_: str = Query(..., alias="from", description="Pseudo of the sender"),
    to: str = Query(..., description="Pseudo of the receiver"),
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Accept a friend request with specified sender and receiver"""
    try:
        return message_response(await service.accept_request_from_to(from_, to))
    except AppError as e:
        raise http_error("accept friend request", e)


@router.patch("/accept/{request_id}", response_model=MessageResponse)
async def accept_request(
    request_id: str,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Accept a friend request"""
    try:
        return message_response(await service.accept_request(request_id))
    except AppError as e:
        raise http_error("accept friend request", e)


@router.patch("/refuse/fromTo", response_model=MessageResponse)
async def refuse_request_from_to(
    from_: str = Query(..., alias="from", description="Pseudo of the sender"),
    to: str = Query(..., description="Pseudo of the receiver"),
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Refuse a friend request with specified sender and receiver"""
    try:
        return message_response(await service.refuse_request_from_to(from_, to))
    except AppError as e:
        raise http_error("refuse friend request", e)


@router.patch("/refuse/{request_id}", response_model=MessageResponse)
async def refuse_request(
    request_id: str,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Refuse a friend request by its id"""
    try:
        return message_response(await service.refuse_request(request_id))
    except AppError as e:
        raise http_error("refuse friend request", e)


@router.delete("/delete/fromTo", response_model=MessageResponse)
async def delete_request_from_to(
    from_: str = Query(..., alias="from", description="Pseudo of the sender"),
    to: str = Query(..., description="Pseudo of the receiver"),
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Delete a friend request by its sender and receiver"""
    try:
        return message_response(await service.delete_one_from_to(from_, to))
    except AppError as e:
        raise http_error("delete friend request", e)


@router.delete("/delete/allFrom/{pseudo}", response_model=MessageResponse)
async def delete_all_requests_from(
    pseudo: str,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Delete all friend requests sent by a user"""
    try:
        return message_response(await service.delete_all_from(pseudo))
    except AppError as e:
        raise http_error("delete friend requests", e)


@router.delete("/delete/allSentTo/{pseudo}", response_model=MessageResponse)
async def delete_all_requests_sent_to(
    pseudo: str,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Delete all friend requests sent to a user"""
    try:
        return message_response(await service.delete_all_sent_to(pseudo))
    except AppError as e:
        raise http_error("delete friend requests", e)


@router.delete("/delete/{request_id}", response_model=MessageResponse)
async def delete_request(
    request_id: str,
    service: FriendRequestService = Depends(get_friend_request_service),
):
    """Delete a friend request by its id"""
    try:
        return message_response(await service.delete_one_by_id(request_id))
    except AppError as e:
        raise http_error("delete friend request", e)
