from datetime import datetime
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument

from friend_api.core.errors import ConflictError, NotFoundError
from friend_api.models.friend_request import FriendRequest, FriendRequestStatus
from friend_api.stores.base import storage_errors, to_object_id


def friend_request_helper(document: dict) -> FriendRequest:
    """Convert a friend request document to its API model"""
    return FriendRequest(
        id=str(document["_id"]),
        from_=document["from"],
        to=document["to"],
        status=document.get("status", FriendRequestStatus.PENDING),
        created_at=document.get("created_at", datetime.utcnow()),
        updated_at=document.get("updated_at", datetime.utcnow()),
    )


class FriendRequestStore:
    """Persistence and lookup of friend request documents"""

    def __init__(self, collection):
        self.collection = collection

    async def ensure_indexes(self) -> None:
        with storage_errors("create friend request indexes"):
            await self.collection.create_index("from")
            await self.collection.create_index("to")
            await self.collection.create_index([("from", ASCENDING), ("to", ASCENDING)])

    async def insert(self, from_: str, to: str) -> FriendRequest:
        now = datetime.utcnow()
        document = {
            "from": from_,
            "to": to,
            "status": FriendRequestStatus.PENDING.value,
            "created_at": now,
            "updated_at": now,
        }
        with storage_errors("insert friend request"):
            result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return friend_request_helper(document)

    async def find_all(self) -> List[FriendRequest]:
        with storage_errors("list friend requests"):
            documents = await self.collection.find().to_list(length=None)
        return [friend_request_helper(document) for document in documents]

    async def find_by_id(self, request_id: str) -> FriendRequest:
        object_id = to_object_id(request_id, "friend request")
        with storage_errors("find friend request"):
            document = await self.collection.find_one({"_id": object_id})
        if not document:
            raise NotFoundError(f"Friend request {request_id} not found")
        return friend_request_helper(document)

    async def find_by_from_to(self, from_: str, to: str) -> FriendRequest:
        with storage_errors("find friend request"):
            document = await self.collection.find_one(
                {"from": from_, "to": to}, sort=[("created_at", DESCENDING)]
            )
        if not document:
            raise NotFoundError(f"No friend request from {from_} to {to}")
        return friend_request_helper(document)

    async def find_pending(self, from_: str, to: str) -> Optional[FriendRequest]:
        with storage_errors("find pending friend request"):
            document = await self.collection.find_one(
                {"from": from_, "to": to, "status": FriendRequestStatus.PENDING.value}
            )
        return friend_request_helper(document) if document else None

    async def find_all_from(self, from_: str) -> List[FriendRequest]:
        with storage_errors("list friend requests"):
            documents = await self.collection.find({"from": from_}).to_list(length=None)
        return [friend_request_helper(document) for document in documents]

    async def find_all_to(self, to: str) -> List[FriendRequest]:
        with storage_errors("list friend requests"):
            documents = await self.collection.find({"to": to}).to_list(length=None)
        return [friend_request_helper(document) for document in documents]

    async def update_status(self, request_id: str, status: FriendRequestStatus) -> FriendRequest:
        object_id = to_object_id(request_id, "friend request")
        with storage_errors("update friend request"):
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": {"status": status.value, "updated_at": datetime.utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        if not document:
            raise NotFoundError(f"Friend request {request_id} not found")
        return friend_request_helper(document)

    async def transition_status(
        self,
        request_id: str,
        expected: FriendRequestStatus,
        status: FriendRequestStatus,
    ) -> FriendRequest:
        """Set the status only if the record currently has the expected one"""
        object_id = to_object_id(request_id, "friend request")
        with storage_errors("update friend request"):
            document = await self.collection.find_one_and_update(
                {"_id": object_id, "status": expected.value},
                {"$set": {"status": status.value, "updated_at": datetime.utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        if document:
            return friend_request_helper(document)

        current = await self.find_by_id(request_id)
        raise ConflictError(
            f"Friend request {request_id} is {current.status.value}, expected {expected.value}"
        )

    async def delete_by_id(self, request_id: str) -> None:
        object_id = to_object_id(request_id, "friend request")
        with storage_errors("delete friend request"):
            result = await self.collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise NotFoundError(f"Friend request {request_id} not found")

    async def delete_by_from_to(self, from_: str, to: str) -> None:
        # Same record find_by_from_to returns: the newest for the pair
        with storage_errors("delete friend request"):
            document = await self.collection.find_one_and_delete(
                {"from": from_, "to": to}, sort=[("created_at", DESCENDING)]
            )
        if not document:
            raise NotFoundError(f"No friend request from {from_} to {to}")

    async def delete_all_from(self, from_: str) -> int:
        with storage_errors("delete friend requests"):
            result = await self.collection.delete_many({"from": from_})
        return result.deleted_count

    async def delete_all_to(self, to: str) -> int:
        with storage_errors("delete friend requests"):
            result = await self.collection.delete_many({"to": to})
        return result.deleted_count
