"""
Friend request lifecycle.

A request is created PENDING and moves once to ACCEPTED or REFUSED. Accepting
also links both users through their friend lists. Status changes are
compare-and-set on PENDING, so of two concurrent accepts only one succeeds.
The friend list writes use $addToSet. If one of them fails, the entries added
by this call are pulled and the request goes back to PENDING.
"""

from typing import List, Tuple

from friend_api.core.errors import AppError, ConflictError, InvalidInputError
from friend_api.models.friend_request import (
    FriendRequest,
    FriendRequestCreate,
    FriendRequestStatus,
)
from friend_api.stores.friend_request_store import FriendRequestStore
from friend_api.stores.user_store import UserStore
from friend_api.utils.logging import get_logger

logger = get_logger(__name__)


class FriendRequestService:
    def __init__(self, friend_request_store: FriendRequestStore, user_store: UserStore):
        self.friend_request_store = friend_request_store
        self.user_store = user_store

    async def create_request(self, payload: FriendRequestCreate) -> FriendRequest:
        """Create a PENDING request from payload.from_ to payload.to"""
        if payload.from_ == payload.to:
            raise InvalidInputError("A user cannot send a friend request to themselves")

        existing = await self.friend_request_store.find_pending(payload.from_, payload.to)
        if existing:
            raise ConflictError(
                f"A pending friend request from {payload.from_} to {payload.to} already exists"
            )

        request = await self.friend_request_store.insert(payload.from_, payload.to)
        logger.info(f"Friend request {request.id} created: {request.from_} -> {request.to}")
        return request

    async def get_all_friend_requests(self) -> List[FriendRequest]:
        return await self.friend_request_store.find_all()

    async def get_one_by_id(self, request_id: str) -> FriendRequest:
        return await self.friend_request_store.find_by_id(request_id)

    async def get_one_by_from_to(self, from_: str, to: str) -> FriendRequest:
        return await self.friend_request_store.find_by_from_to(from_, to)

    async def get_friend_requests_from(self, from_: str) -> List[FriendRequest]:
        return await self.friend_request_store.find_all_from(from_)

    async def get_friend_requests_sent_to(self, to: str) -> List[FriendRequest]:
        return await self.friend_request_store.find_all_to(to)

    async def accept_request(self, request_id: str) -> str:
        request = await self.friend_request_store.transition_status(
            request_id, FriendRequestStatus.PENDING, FriendRequestStatus.ACCEPTED
        )
        await self._link_friends(request)
        logger.info(f"Friend request {request.id} accepted: {request.from_} <-> {request.to}")
        return f"Friend request from {request.from_} to {request.to} accepted"

    async def accept_request_from_to(self, from_: str, to: str) -> str:
        request = await self._resolve_pair(from_, to)
        return await self.accept_request(request.id)

    async def refuse_request(self, request_id: str) -> str:
        request = await self.friend_request_store.transition_status(
            request_id, FriendRequestStatus.PENDING, FriendRequestStatus.REFUSED
        )
        logger.info(f"Friend request {request.id} refused: {request.from_} -> {request.to}")
        return f"Friend request from {request.from_} to {request.to} refused"

    async def refuse_request_from_to(self, from_: str, to: str) -> str:
        request = await self._resolve_pair(from_, to)
        return await self.refuse_request(request.id)

    async def delete_one_by_id(self, request_id: str) -> str:
        await self.friend_request_store.delete_by_id(request_id)
        logger.info(f"Friend request {request_id} deleted")
        return f"Friend request {request_id} deleted"

    async def delete_all_from(self, from_: str) -> str:
        count = await self.friend_request_store.delete_all_from(from_)
        logger.info(f"Deleted {count} friend requests sent by {from_}")
        return f"{count} friend request(s) sent by {from_} deleted"

    async def delete_all_sent_to(self, to: str) -> str:
        count = await self.friend_request_store.delete_all_to(to)
        logger.info(f"Deleted {count} friend requests sent to {to}")
        return f"{count} friend request(s) sent to {to} deleted"

    async def delete_one_from_to(self, from_: str, to: str) -> str:
        await self.friend_request_store.delete_by_from_to(from_, to)
        logger.info(f"Friend request {from_} -> {to} deleted")
        return f"Friend request from {from_} to {to} deleted"

    async def _resolve_pair(self, from_: str, to: str) -> FriendRequest:
        # A pair may hold old terminal requests next to a new pending one
        pending = await self.friend_request_store.find_pending(from_, to)
        if pending:
            return pending
        return await self.friend_request_store.find_by_from_to(from_, to)

    async def _link_friends(self, request: FriendRequest) -> None:
        added: List[Tuple[str, str]] = []
        try:
            for pseudo, friend in ((request.from_, request.to), (request.to, request.from_)):
                if await self.user_store.add_friend(pseudo, friend):
                    added.append((pseudo, friend))
        except Exception as e:
            logger.warning(
                f"Linking friends for request {request.id} failed ({e}), rolling back"
            )
            await self._compensate(request, added)
            raise

    async def _compensate(self, request: FriendRequest, added: List[Tuple[str, str]]) -> None:
        try:
            for pseudo, friend in added:
                await self.user_store.remove_friend(pseudo, friend)
            await self.friend_request_store.transition_status(
                request.id, FriendRequestStatus.ACCEPTED, FriendRequestStatus.PENDING
            )
        except AppError:
            logger.exception(f"Rollback of friend request {request.id} failed")
