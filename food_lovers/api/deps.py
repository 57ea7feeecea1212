"""
API dependencies for dependency injection.
"""
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.asynchronous.database import AsyncDatabase

from food_lovers.core.config import settings
from food_lovers.core.exceptions import InternalException, InvalidArgumentException
from food_lovers.core.logging import log_error
from food_lovers.core.middleware import get_request_id
from food_lovers.db.database import mongo


async def get_db() -> AsyncDatabase:
    """
    Dependency returning the shared database handle.

    Usage:
        @router.get("/endpoint")
        async def endpoint(db: AsyncDatabase = Depends(get_db)):
            ...

    Raises:
        InternalException: If the connection cannot be established
    """
    try:
        return await mongo.get_database()
    except Exception as e:
        log_error("Database unavailable", e, request_id=get_request_id())
        raise InternalException("Database unavailable")


def parse_object_id(value: str) -> ObjectId:
    """
    Convert a path id to an ObjectId.

    With ``STRICT_OBJECT_IDS`` a malformed id is a client error (400).
    Otherwise ``InvalidId`` propagates so the caller reports it as a storage
    failure (500), which is what existing clients expect.
    """
    if ObjectId.is_valid(value):
        return ObjectId(value)
    if settings.STRICT_OBJECT_IDS:
        raise InvalidArgumentException("Invalid id", details={"id": value})
    raise InvalidId(f"{value!r} is not a valid ObjectId")
