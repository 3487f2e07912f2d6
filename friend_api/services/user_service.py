from datetime import datetime
from typing import List

from friend_api.models.user import User, UserCreate, UserInDB, UserStatus
from friend_api.stores.user_store import UserStore
from friend_api.utils.logging import get_logger
from friend_api.utils.security import get_password_hash

logger = get_logger(__name__)


def public_user(user: UserInDB) -> User:
    """Strip the password hash before a user leaves the service"""
    return User(**user.dict(exclude={"hashed_password"}))


class UserService:
    def __init__(self, user_store: UserStore):
        self.user_store = user_store

    async def create_user(self, payload: UserCreate) -> User:
        """Register a new user with a hashed password and schema defaults"""
        user_data = payload.dict()
        user_data.update({
            "hashed_password": get_password_hash(payload.password),
            "friendList": [],
            "status": UserStatus.OFFLINE.value,
            "created_at": datetime.utcnow(),
            "updated_at": datetime.utcnow(),
        })

        # Remove plain password from data
        del user_data["password"]

        user = await self.user_store.insert(user_data)
        logger.info(f"User {user.pseudo} registered")
        return public_user(user)

    async def get_all_users(self) -> List[User]:
        users = await self.user_store.find_all()
        return [public_user(user) for user in users]

    async def get_user(self, pseudo: str) -> User:
        return public_user(await self.user_store.find_by_pseudo(pseudo))

    async def get_friend_list(self, pseudo: str) -> List[str]:
        user = await self.user_store.find_by_pseudo(pseudo)
        return user.friendList

    async def update_status(self, pseudo: str, status: UserStatus) -> User:
        user = await self.user_store.update_status(pseudo, status)
        logger.info(f"User {pseudo} is now {status.value}")
        return public_user(user)

    async def delete_user(self, pseudo: str) -> str:
        await self.user_store.delete_by_pseudo(pseudo)
        logger.info(f"User {pseudo} deleted")
        return f"User {pseudo} deleted"
