from datetime import datetime
from typing import List

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from friend_api.core.errors import ConflictError, NotFoundError
from friend_api.models.user import DEFAULT_DESCRIPTION, UserInDB, UserStatus
from friend_api.stores.base import storage_errors


def user_helper(user: dict) -> UserInDB:
    """Convert a user document to its model, filling schema defaults"""
    return UserInDB(
        id=str(user["_id"]),
        pseudo=user["pseudo"],
        email=user.get("email"),
        description=user.get("description", DEFAULT_DESCRIPTION),
        friendList=user.get("friendList", []),
        status=user.get("status", UserStatus.OFFLINE),
        created_at=user.get("created_at", datetime.utcnow()),
        updated_at=user.get("updated_at", datetime.utcnow()),
        hashed_password=user["hashed_password"],
    )


class UserStore:
    """Persistence of user documents and their friend lists"""

    def __init__(self, collection):
        self.collection = collection

    async def ensure_indexes(self) -> None:
        with storage_errors("create user indexes"):
            await self.collection.create_index("pseudo", unique=True)

    async def insert(self, user_data: dict) -> UserInDB:
        document = dict(user_data)
        with storage_errors("insert user"):
            try:
                result = await self.collection.insert_one(document)
            except DuplicateKeyError:
                raise ConflictError(f"User {document.get('pseudo')} already exists")
        document["_id"] = result.inserted_id
        return user_helper(document)

    async def find_all(self) -> List[UserInDB]:
        with storage_errors("list users"):
            users = await self.collection.find().to_list(length=None)
        return [user_helper(user) for user in users]

    async def find_by_pseudo(self, pseudo: str) -> UserInDB:
        with storage_errors("find user"):
            user = await self.collection.find_one({"pseudo": pseudo})
        if not user:
            raise NotFoundError(f"User {pseudo} not found")
        return user_helper(user)

    async def add_friend(self, pseudo: str, friend: str) -> bool:
        """Add friend to the user's friend list, returning whether the list changed"""
        with storage_errors("update friend list"):
            result = await self.collection.update_one(
                {"pseudo": pseudo},
                {
                    "$addToSet": {"friendList": friend},
                    "$set": {"updated_at": datetime.utcnow()},
                },
            )
        if result.matched_count == 0:
            raise NotFoundError(f"User {pseudo} not found")
        return result.modified_count > 0

    async def remove_friend(self, pseudo: str, friend: str) -> None:
        with storage_errors("update friend list"):
            await self.collection.update_one(
                {"pseudo": pseudo},
                {
                    "$pull": {"friendList": friend},
                    "$set": {"updated_at": datetime.utcnow()},
                },
            )

    async def update_status(self, pseudo: str, status: UserStatus) -> UserInDB:
        with storage_errors("update user status"):
            user = await self.collection.find_one_and_update(
                {"pseudo": pseudo},
                {"$set": {"status": status.value, "updated_at": datetime.utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        if not user:
            raise NotFoundError(f"User {pseudo} not found")
        return user_helper(user)

    async def delete_by_pseudo(self, pseudo: str) -> None:
        with storage_errors("delete user"):
            result = await self.collection.delete_one({"pseudo": pseudo})
        if result.deleted_count == 0:
            raise NotFoundError(f"User {pseudo} not found")
