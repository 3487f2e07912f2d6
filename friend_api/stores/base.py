from contextlib import contextmanager

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from friend_api.core.errors import NotFoundError, PersistenceError
from friend_api.utils.logging import get_logger

logger = get_logger(__name__)


def to_object_id(value: str, label: str = "record") -> ObjectId:
    """Parse a hex id, treating a malformed one the same as a missing one"""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(f"Invalid {label} id: {value}")


@contextmanager
def storage_errors(action: str):
    """Re-raise driver failures as PersistenceError"""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"MongoDB failure while trying to {action}: {e}")
        raise PersistenceError(f"Failed to {action}: {e}") from e
