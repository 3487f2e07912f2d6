import pytest
from bson import ObjectId
from bson.errors import InvalidDocument

from friend_api.core.errors import ConflictError, InvalidInputError, NotFoundError, PersistenceError
from friend_api.models.friend_request import FriendRequestCreate, FriendRequestStatus


def payload(from_, to):
    return FriendRequestCreate(**{"from": from_, "to": to})


class TestCreateRequest:
    """Test suite for creating friend requests"""

    @pytest.mark.asyncio
    async def test_create_then_get_by_pair_is_pending(self, friend_request_service):
        created = await friend_request_service.create_request(payload("alice", "bob"))

        fetched = await friend_request_service.get_one_by_from_to("alice", "bob")

        assert fetched.id == created.id
        assert fetched.status == FriendRequestStatus.PENDING

    @pytest.mark.asyncio
    async def test_create_to_self_is_rejected(self, friend_request_service):
        with pytest.raises(InvalidInputError):
            await friend_request_service.create_request(payload("alice", "alice"))

    @pytest.mark.asyncio
    async def test_second_pending_request_for_same_pair_is_rejected(self, friend_request_service):
        await friend_request_service.create_request(payload("alice", "bob"))

        with pytest.raises(ConflictError):
            await friend_request_service.create_request(payload("alice", "bob"))

    @pytest.mark.asyncio
    async def test_reverse_pair_is_a_different_request(self, friend_request_service):
        await friend_request_service.create_request(payload("alice", "bob"))
        reverse = await friend_request_service.create_request(payload("bob", "alice"))

        assert reverse.from_ == "bob"
        assert reverse.status == FriendRequestStatus.PENDING

    @pytest.mark.asyncio
    async def test_new_request_allowed_after_refusal(self, friend_request_service):
        first = await friend_request_service.create_request(payload("alice", "bob"))
        await friend_request_service.refuse_request(first.id)

        second = await friend_request_service.create_request(payload("alice", "bob"))

        assert second.id != first.id
        latest = await friend_request_service.get_one_by_from_to("alice", "bob")
        assert latest.id == second.id


class TestReadRequests:
    """Test suite for read pass-throughs"""

    @pytest.mark.asyncio
    async def test_get_all_empty(self, friend_request_service):
        assert await friend_request_service.get_all_friend_requests() == []

    @pytest.mark.asyncio
    async def test_get_from_unknown_sender_is_empty(self, friend_request_service):
        await friend_request_service.create_request(payload("alice", "bob"))

        assert await friend_request_service.get_friend_requests_from("zoe") == []

    @pytest.mark.asyncio
    async def test_get_sent_to(self, friend_request_service):
        await friend_request_service.create_request(payload("alice", "carol"))
        await friend_request_service.create_request(payload("bob", "carol"))
        await friend_request_service.create_request(payload("carol", "alice"))

        received = await friend_request_service.get_friend_requests_sent_to("carol")

        assert sorted(r.from_ for r in received) == ["alice", "bob"]

    @pytest.mark.asyncio
    async def test_get_by_unknown_id_raises_not_found(self, friend_request_service):
        with pytest.raises(NotFoundError):
            await friend_request_service.get_one_by_id(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_get_by_malformed_id_raises_not_found(self, friend_request_service):
        with pytest.raises(NotFoundError):
            await friend_request_service.get_one_by_id("not-an-id")

    @pytest.mark.asyncio
    async def test_get_by_unknown_pair_raises_not_found(self, friend_request_service):
        with pytest.raises(NotFoundError):
            await friend_request_service.get_one_by_from_to("alice", "bob")


class TestAcceptRequest:
    """Test suite for accepting friend requests"""

    @pytest.mark.asyncio
    async def test_accept_links_both_users(self, friend_request_service, user_store):
        request = await friend_request_service.create_request(payload("alice", "bob"))

        message = await friend_request_service.accept_request(request.id)

        assert "accepted" in message
        stored = await friend_request_service.get_one_by_id(request.id)
        assert stored.status == FriendRequestStatus.ACCEPTED
        assert user_store.users["alice"].friendList == ["bob"]
        assert user_store.users["bob"].friendList == ["alice"]

    @pytest.mark.asyncio
    async def test_accept_does_not_duplicate_existing_friend(self, friend_request_service, user_store):
        user_store.users["alice"].friendList.append("bob")
        request = await friend_request_service.create_request(payload("alice", "bob"))

        await friend_request_service.accept_request(request.id)

        assert user_store.users["alice"].friendList.count("bob") == 1
        assert user_store.users["bob"].friendList.count("alice") == 1

    @pytest.mark.asyncio
    async def test_accept_twice_is_a_conflict(self, friend_request_service, user_store):
        request = await friend_request_service.create_request(payload("alice", "bob"))
        await friend_request_service.accept_request(request.id)

        with pytest.raises(ConflictError):
            await friend_request_service.accept_request(request.id)

        assert user_store.users["alice"].friendList == ["bob"]

    @pytest.mark.asyncio
    async def test_accept_refused_request_is_a_conflict(self, friend_request_service):
        request = await friend_request_service.create_request(payload("alice", "bob"))
        await friend_request_service.refuse_request(request.id)

        with pytest.raises(ConflictError):
            await friend_request_service.accept_request(request.id)

    @pytest.mark.asyncio
    async def test_accept_unknown_id_raises_not_found(self, friend_request_service):
        with pytest.raises(NotFoundError):
            await friend_request_service.accept_request(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_accept_from_to(self, friend_request_service, user_store):
        await friend_request_service.create_request(payload("bob", "carol"))

        await friend_request_service.accept_request_from_to("bob", "carol")

        stored = await friend_request_service.get_one_by_from_to("bob", "carol")
        assert stored.status == FriendRequestStatus.ACCEPTED
        assert "carol" in user_store.users["bob"].friendList
        assert "bob" in user_store.users["carol"].friendList

    @pytest.mark.asyncio
    async def test_accept_from_to_prefers_pending_request(self, friend_request_service):
        old = await friend_request_service.create_request(payload("alice", "bob"))
        await friend_request_service.refuse_request(old.id)
        new = await friend_request_service.create_request(payload("alice", "bob"))

        await friend_request_service.accept_request_from_to("alice", "bob")

        assert (await friend_request_service.get_one_by_id(old.id)).status == FriendRequestStatus.REFUSED
        assert (await friend_request_service.get_one_by_id(new.id)).status == FriendRequestStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_accept_from_to_unknown_pair_raises_not_found(self, friend_request_service):
        with pytest.raises(NotFoundError):
            await friend_request_service.accept_request_from_to("alice", "carol")

    @pytest.mark.asyncio
    async def test_failed_friend_list_write_rolls_back(self, friend_request_service, user_store):
        request = await friend_request_service.create_request(payload("alice", "bob"))
        user_store.broken.add("bob")

        with pytest.raises(PersistenceError):
            await friend_request_service.accept_request(request.id)

        stored = await friend_request_service.get_one_by_id(request.id)
        assert stored.status == FriendRequestStatus.PENDING
        assert user_store.users["alice"].friendList == []
        assert user_store.users["bob"].friendList == []

    @pytest.mark.asyncio
    async def test_driver_error_outside_pymongo_rolls_back(
        self, friend_request_service, user_store, monkeypatch
    ):
        request = await friend_request_service.create_request(payload("alice", "bob"))
        add_friend = user_store.add_friend

        async def failing_add_friend(pseudo, friend):
            if pseudo == "bob":
                raise InvalidDocument("cannot encode object")
            return await add_friend(pseudo, friend)

        monkeypatch.setattr(user_store, "add_friend", failing_add_friend)

        with pytest.raises(InvalidDocument):
            await friend_request_service.accept_request(request.id)

        stored = await friend_request_service.get_one_by_id(request.id)
        assert stored.status == FriendRequestStatus.PENDING
        assert user_store.users["alice"].friendList == []

    @pytest.mark.asyncio
    async def test_retry_after_rollback_links_once(self, friend_request_service, user_store):
        request = await friend_request_service.create_request(payload("alice", "bob"))
        user_store.broken.add("bob")
        with pytest.raises(PersistenceError):
            await friend_request_service.accept_request(request.id)

        user_store.broken.clear()
        await friend_request_service.accept_request(request.id)

        assert user_store.users["alice"].friendList == ["bob"]
        assert user_store.users["bob"].friendList == ["alice"]

    @pytest.mark.asyncio
    async def test_rollback_keeps_friendship_that_already_existed(self, friend_request_service, user_store):
        user_store.users["alice"].friendList.append("bob")
        request = await friend_request_service.create_request(payload("alice", "bob"))
        user_store.broken.add("bob")

        with pytest.raises(PersistenceError):
            await friend_request_service.accept_request(request.id)

        assert user_store.users["alice"].friendList == ["bob"]

    @pytest.mark.asyncio
    async def test_accept_with_missing_user_rolls_back(self, friend_request_service, user_store):
        request = await friend_request_service.create_request(payload("alice", "ghost"))

        with pytest.raises(NotFoundError):
            await friend_request_service.accept_request(request.id)

        stored = await friend_request_service.get_one_by_id(request.id)
        assert stored.status == FriendRequestStatus.PENDING
        assert user_store.users["alice"].friendList == []


class TestRefuseRequest:
    """Test suite for refusing friend requests"""

    @pytest.mark.asyncio
    async def test_refuse_leaves_friend_lists_alone(self, friend_request_service, user_store):
        request = await friend_request_service.create_request(payload("alice", "bob"))

        message = await friend_request_service.refuse_request(request.id)

        assert "refused" in message
        stored = await friend_request_service.get_one_by_id(request.id)
        assert stored.status == FriendRequestStatus.REFUSED
        assert user_store.users["alice"].friendList == []
        assert user_store.users["bob"].friendList == []

    @pytest.mark.asyncio
    async def test_refuse_accepted_request_is_a_conflict(self, friend_request_service):
        request = await friend_request_service.create_request(payload("alice", "bob"))
        await friend_request_service.accept_request(request.id)

        with pytest.raises(ConflictError):
            await friend_request_service.refuse_request(request.id)

    @pytest.mark.asyncio
    async def test_refuse_from_to(self, friend_request_service):
        await friend_request_service.create_request(payload("carol", "alice"))

        await friend_request_service.refuse_request_from_to("carol", "alice")

        stored = await friend_request_service.get_one_by_from_to("carol", "alice")
        assert stored.status == FriendRequestStatus.REFUSED


class TestDeleteRequests:
    """Test suite for deleting friend requests"""

    @pytest.mark.asyncio
    async def test_delete_by_id_then_get_raises_not_found(self, friend_request_service):
        request = await friend_request_service.create_request(payload("alice", "bob"))

        await friend_request_service.delete_one_by_id(request.id)

        with pytest.raises(NotFoundError):
            await friend_request_service.get_one_by_id(request.id)

    @pytest.mark.asyncio
    async def test_delete_unknown_id_raises_not_found(self, friend_request_service):
        with pytest.raises(NotFoundError):
            await friend_request_service.delete_one_by_id(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_delete_all_from_leaves_unrelated_records(self, friend_request_service):
        await friend_request_service.create_request(payload("alice", "bob"))
        await friend_request_service.create_request(payload("alice", "carol"))
        unrelated = await friend_request_service.create_request(payload("bob", "carol"))

        message = await friend_request_service.delete_all_from("alice")

        assert message.startswith("2 ")
        assert await friend_request_service.get_friend_requests_from("alice") == []
        remaining = await friend_request_service.get_all_friend_requests()
        assert [r.id for r in remaining] == [unrelated.id]

    @pytest.mark.asyncio
    async def test_delete_all_from_with_no_records(self, friend_request_service):
        message = await friend_request_service.delete_all_from("alice")

        assert message.startswith("0 ")

    @pytest.mark.asyncio
    async def test_delete_all_sent_to(self, friend_request_service):
        await friend_request_service.create_request(payload("alice", "carol"))
        await friend_request_service.create_request(payload("bob", "carol"))
        kept = await friend_request_service.create_request(payload("carol", "bob"))

        await friend_request_service.delete_all_sent_to("carol")

        remaining = await friend_request_service.get_all_friend_requests()
        assert [r.id for r in remaining] == [kept.id]

    @pytest.mark.asyncio
    async def test_delete_from_to(self, friend_request_service):
        await friend_request_service.create_request(payload("alice", "bob"))

        await friend_request_service.delete_one_from_to("alice", "bob")

        with pytest.raises(NotFoundError):
            await friend_request_service.get_one_by_from_to("alice", "bob")

    @pytest.mark.asyncio
    async def test_delete_from_to_removes_the_record_get_returns(self, friend_request_service):
        old = await friend_request_service.create_request(payload("alice", "bob"))
        await friend_request_service.refuse_request(old.id)
        new = await friend_request_service.create_request(payload("alice", "bob"))

        await friend_request_service.delete_one_from_to("alice", "bob")

        remaining = await friend_request_service.get_all_friend_requests()
        assert [r.id for r in remaining] == [old.id]
        assert new.id != old.id

    @pytest.mark.asyncio
    async def test_delete_from_to_unknown_pair_raises_not_found(self, friend_request_service):
        with pytest.raises(NotFoundError):
            await friend_request_service.delete_one_from_to("alice", "bob")
