"""
Pydantic schemas for Favorites requests and responses.
"""
from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, ConfigDict

# Never taken from the client
SERVER_FIELDS = ("_id", "addedAt")


class FavoriteCreate(BaseModel):
    """
    Request body for POST /favorites.

    Besides the pair, clients may send extra fields (typically a snapshot of
    the review such as ``foodName`` or ``foodImage``); they are stored as-is.
    """

    user_email: str = Field(..., alias="userEmail", min_length=1, description="Favoriting user")
    review_id: str = Field(..., alias="reviewId", min_length=1, description="Favorited review id")

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="allow",
    )

    def pair_filter(self) -> Dict[str, Any]:
        return {"userEmail": self.user_email, "reviewId": self.review_id}

    def to_document(self, added_at: datetime) -> Dict[str, Any]:
        document = {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key not in SERVER_FIELDS
        }
        document.update(self.pair_filter())
        document["addedAt"] = added_at
        return document


class FavoriteOut(BaseModel):
    """A stored favorite as returned to clients, extra stored fields included."""

    id: str = Field(..., alias="_id")
    user_email: Optional[str] = Field(None, alias="userEmail")
    review_id: Optional[str] = Field(None, alias="reviewId")
    added_at: Optional[datetime] = Field(None, alias="addedAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> str:
        return str(v)


class FavoriteStatus(BaseModel):
    """Response for GET /favorites/check/{email}/{reviewId}."""

    is_favorite: bool = Field(..., alias="isFavorite")

    model_config = ConfigDict(populate_by_name=True)
