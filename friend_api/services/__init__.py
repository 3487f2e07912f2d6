from .friend_request_service import FriendRequestService
from .user_service import UserService

__all__ = ["FriendRequestService", "UserService"]
