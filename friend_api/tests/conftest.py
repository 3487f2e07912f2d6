import pytest
from fastapi.testclient import TestClient

from friend_api.api.dependencies import get_friend_request_store, get_user_store
from friend_api.main import app
from friend_api.services.friend_request_service import FriendRequestService
from friend_api.services.user_service import UserService
from friend_api.tests.fakes import FakeFriendRequestStore, FakeUserStore


@pytest.fixture
def friend_request_store():
    return FakeFriendRequestStore()


@pytest.fixture
def user_store():
    store = FakeUserStore()
    store.add("alice")
    store.add("bob")
    store.add("carol")
    return store


@pytest.fixture
def friend_request_service(friend_request_store, user_store):
    return FriendRequestService(friend_request_store, user_store)


@pytest.fixture
def user_service(user_store):
    return UserService(user_store)


@pytest.fixture
def client(friend_request_store, user_store):
    """TestClient wired to the in-memory stores; startup hooks are not run"""
    app.dependency_overrides[get_friend_request_store] = lambda: friend_request_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_request_data():
    return {"from": "alice", "to": "bob"}


@pytest.fixture
def sample_user_data():
    return {
        "pseudo": "dave",
        "email": "dave@example.com",
        "password": "secret123",
    }
