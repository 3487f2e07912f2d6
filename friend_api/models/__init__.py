# Models package - Export all models for easy importing
from .friend_request import FriendRequestStatus, FriendRequestCreate, FriendRequest
from .user import UserStatus, UserCreate, UserStatusUpdate, User, UserInDB, DEFAULT_DESCRIPTION
from .response import MessageResponse, message_response

__all__ = [
    # Friend request models
    "FriendRequestStatus",
    "FriendRequestCreate",
    "FriendRequest",

    # User models
    "UserStatus",
    "UserCreate",
    "UserStatusUpdate",
    "User",
    "UserInDB",
    "DEFAULT_DESCRIPTION",

    # Response models
    "MessageResponse",
    "message_response",
]
