from fastapi import Depends

from friend_api.core.database import db, FRIEND_REQUESTS_COLLECTION, USERS_COLLECTION
from friend_api.services.friend_request_service import FriendRequestService
from friend_api.services.user_service import UserService
from friend_api.stores.friend_request_store import FriendRequestStore
from friend_api.stores.user_store import UserStore


async def get_database():
    """Get database dependency for dependency injection"""
    return db


async def get_friend_request_store(database=Depends(get_database)) -> FriendRequestStore:
    return FriendRequestStore(database[FRIEND_REQUESTS_COLLECTION])


async def get_user_store(database=Depends(get_database)) -> UserStore:
    return UserStore(database[USERS_COLLECTION])


async def get_friend_request_service(
    friend_request_store: FriendRequestStore = Depends(get_friend_request_store),
    user_store: UserStore = Depends(get_user_store),
) -> FriendRequestService:
    return FriendRequestService(friend_request_store, user_store)


async def get_user_service(user_store: UserStore = Depends(get_user_store)) -> UserService:
    return UserService(user_store)
