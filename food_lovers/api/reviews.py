"""
Review API endpoints.
"""
import re
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, status
from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from food_lovers.api.deps import get_db, parse_object_id
from food_lovers.core.exceptions import AppException, InternalException, NotFoundException
from food_lovers.core.logging import log_error, log_info
from food_lovers.core.middleware import get_request_id
from food_lovers.db.database import REVIEWS
from food_lovers.schemas.result import DeleteAck, InsertAck, UpdateAck
from food_lovers.schemas.review import ReviewCreate, ReviewOut, ReviewUpdate


router = APIRouter(prefix="/reviews", tags=["reviews"])

FEATURED_LIMIT = 6
NEWEST_FIRST = [("createdAt", DESCENDING)]


def _storage_failure(message: str, error: Exception) -> InternalException:
    log_error(message, error, request_id=get_request_id())
    return InternalException(message)


@router.get("", response_model=List[ReviewOut], response_model_exclude_none=True)
async def list_reviews(db: AsyncDatabase = Depends(get_db)):
    """All reviews, newest first."""
    try:
        return await db[REVIEWS].find().sort(NEWEST_FIRST).to_list()
    except Exception as e:
        raise _storage_failure("Failed to fetch reviews", e)


@router.get("/featured", response_model=List[ReviewOut], response_model_exclude_none=True)
async def list_featured_reviews(db: AsyncDatabase = Depends(get_db)):
    """Top rated reviews, newest first among equal ratings, at most six."""
    try:
        cursor = (
            db[REVIEWS]
            .find()
            .sort([("rating", DESCENDING), ("createdAt", DESCENDING)])
            .limit(FEATURED_LIMIT)
        )
        return await cursor.to_list()
    except Exception as e:
        raise _storage_failure("Failed to fetch featured reviews", e)


@router.get("/user/{email}", response_model=List[ReviewOut], response_model_exclude_none=True)
async def list_user_reviews(email: str, db: AsyncDatabase = Depends(get_db)):
    try:
        return await db[REVIEWS].find({"userEmail": email}).sort(NEWEST_FIRST).to_list()
    except Exception as e:
        raise _storage_failure("Failed to fetch user reviews", e)


@router.get("/search/{query}", response_model=List[ReviewOut], response_model_exclude_none=True)
async def search_reviews(query: str, db: AsyncDatabase = Depends(get_db)):
    """
    Case-insensitive substring match on ``foodName``.

    The query is matched literally, so characters such as ``.`` or ``(``
    carry no regex meaning.
    """
    try:
        name_filter = {"foodName": {"$regex": re.escape(query), "$options": "i"}}
        return await db[REVIEWS].find(name_filter).sort(NEWEST_FIRST).to_list()
    except Exception as e:
        raise _storage_failure("Failed to search reviews", e)


@router.get("/{review_id}", response_model=ReviewOut, response_model_exclude_none=True)
async def get_review(review_id: str, db: AsyncDatabase = Depends(get_db)):
    """
    Raises:
        404: Review not found
    """
    try:
        review = await db[REVIEWS].find_one({"_id": parse_object_id(review_id)})
    except AppException:
        raise
    except Exception as e:
        raise _storage_failure("Failed to fetch review", e)

    if review is None:
        raise NotFoundException("Review not found", details={"id": review_id})
    return review


@router.post("", response_model=InsertAck, status_code=status.HTTP_201_CREATED)
async def create_review(payload: ReviewCreate, db: AsyncDatabase = Depends(get_db)):
    """
    Insert a review. ``createdAt`` is always the server time.
    """
    document = payload.to_document(created_at=datetime.now(timezone.utc))
    try:
        result = await db[REVIEWS].insert_one(document)
    except Exception as e:
        raise _storage_failure("Failed to add review", e)

    log_info(
        "Review created",
        request_id=get_request_id(),
        review_id=str(result.inserted_id),
        user_email=payload.user_email,
    )
    return InsertAck.from_result(result)


@router.put("/{review_id}", response_model=UpdateAck)
async def update_review(
    review_id: str,
    payload: ReviewUpdate,
    db: AsyncDatabase = Depends(get_db),
):
    """
    Replace the editable fields of a review and stamp ``updatedAt``.

    Raises:
        404: Review not found
    """
    try:
        result = await db[REVIEWS].update_one(
            {"_id": parse_object_id(review_id)},
            {"$set": payload.to_set(updated_at=datetime.now(timezone.utc))},
        )
    except AppException:
        raise
    except Exception as e:
        raise _storage_failure("Failed to update review", e)

    if result.matched_count == 0:
        raise NotFoundException("Review not found", details={"id": review_id})

    log_info("Review updated", request_id=get_request_id(), review_id=review_id)
    return UpdateAck.from_result(result)


@router.delete("/{review_id}", response_model=DeleteAck)
async def delete_review(review_id: str, db: AsyncDatabase = Depends(get_db)):
    """
    Raises:
        404: Review not found
    """
    try:
        result = await db[REVIEWS].delete_one({"_id": parse_object_id(review_id)})
    except AppException:
        raise
    except Exception as e:
        raise _storage_failure("Failed to delete review", e)

    if result.deleted_count == 0:
        raise NotFoundException("Review not found", details={"id": review_id})

    log_info("Review deleted", request_id=get_request_id(), review_id=review_id)
    return DeleteAck.from_result(result)
