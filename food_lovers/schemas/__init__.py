"""
Pydantic schemas package.
Exports all request/response models.
"""
from food_lovers.schemas.review import ReviewCreate, ReviewUpdate, ReviewOut, REPLACEABLE_FIELDS
from food_lovers.schemas.favorite import FavoriteCreate, FavoriteOut, FavoriteStatus
from food_lovers.schemas.result import InsertAck, UpdateAck, DeleteAck
from food_lovers.schemas.error import ErrorCode, ErrorResponse, ERROR_CODE_TO_HTTP_STATUS

__all__ = [
    # Review
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewOut",
    "REPLACEABLE_FIELDS",
    # Favorite
    "FavoriteCreate",
    "FavoriteOut",
    "FavoriteStatus",
    # Write results
    "InsertAck",
    "UpdateAck",
    "DeleteAck",
    # Error
    "ErrorCode",
    "ErrorResponse",
    "ERROR_CODE_TO_HTTP_STATUS",
]
