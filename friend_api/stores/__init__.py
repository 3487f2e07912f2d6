from .friend_request_store import FriendRequestStore, friend_request_helper
from .user_store import UserStore, user_helper

__all__ = ["FriendRequestStore", "friend_request_helper", "UserStore", "user_helper"]
