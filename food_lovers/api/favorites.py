"""
Favorites API endpoints.
"""
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from food_lovers.api.deps import get_db, parse_object_id
from food_lovers.core.exceptions import (
    AppException,
    ConflictException,
    InternalException,
    NotFoundException,
)
from food_lovers.core.logging import log_error, log_info, log_warning
from food_lovers.core.middleware import get_request_id
from food_lovers.db.database import FAVORITES
from food_lovers.schemas.favorite import FavoriteCreate, FavoriteOut, FavoriteStatus
from food_lovers.schemas.result import DeleteAck, InsertAck


router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("/check/{email}/{review_id}", response_model=FavoriteStatus)
async def check_favorite(email: str, review_id: str, db: AsyncDatabase = Depends(get_db)):
    """
    Whether ``email`` has favorited ``review_id``. An unknown pair is
    ``isFavorite: false``, never 404.
    """
    try:
        favorite = await db[FAVORITES].find_one({"userEmail": email, "reviewId": review_id})
    except Exception as e:
        log_error("Failed to check favorite status", e, request_id=get_request_id())
        raise InternalException("Failed to check favorite status")

    return FavoriteStatus(is_favorite=favorite is not None)


@router.get("/{email}", response_model=List[FavoriteOut])
async def list_favorites(email: str, db: AsyncDatabase = Depends(get_db)):
    try:
        return await db[FAVORITES].find({"userEmail": email}).to_list()
    except Exception as e:
        log_error("Failed to fetch favorites", e, request_id=get_request_id())
        raise InternalException("Failed to fetch favorites")


@router.post("", response_model=InsertAck, status_code=status.HTTP_201_CREATED)
async def add_favorite(payload: FavoriteCreate, db: AsyncDatabase = Depends(get_db)):
    """
    Add a review to a user's favorites.

    The pair is checked before inserting. When the unique index is in place a
    concurrent duplicate that slips past the check is rejected by the insert
    and reported the same way.

    Raises:
        400: The pair is already a favorite
    """
    request_id = get_request_id()
    favorites = db[FAVORITES]

    try:
        existing = await favorites.find_one(payload.pair_filter())
        if existing is not None:
            raise ConflictException(
                "Already in favorites",
                details={"userEmail": payload.user_email, "reviewId": payload.review_id},
            )

        result = await favorites.insert_one(
            payload.to_document(added_at=datetime.now(timezone.utc))
        )
    except DuplicateKeyError:
        log_warning(
            "Duplicate favorite rejected by unique index",
            request_id=request_id,
            user_email=payload.user_email,
            review_id=payload.review_id,
        )
        raise ConflictException(
            "Already in favorites",
            details={"userEmail": payload.user_email, "reviewId": payload.review_id},
        )
    except AppException:
        raise
    except Exception as e:
        log_error("Failed to add favorite", e, request_id=request_id)
        raise InternalException("Failed to add favorite")

    log_info(
        "Favorite added",
        request_id=request_id,
        favorite_id=str(result.inserted_id),
        user_email=payload.user_email,
        review_id=payload.review_id,
    )
    return InsertAck.from_result(result)


@router.delete("/{favorite_id}", response_model=DeleteAck)
async def remove_favorite(favorite_id: str, db: AsyncDatabase = Depends(get_db)):
    """
    Raises:
        404: Favorite not found
    """
    try:
        result = await db[FAVORITES].delete_one({"_id": parse_object_id(favorite_id)})
    except AppException:
        raise
    except Exception as e:
        log_error("Failed to remove favorite", e, request_id=get_request_id())
        raise InternalException("Failed to remove favorite")

    if result.deleted_count == 0:
        raise NotFoundException("Favorite not found", details={"id": favorite_id})
    return DeleteAck.from_result(result)
