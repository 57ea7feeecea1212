"""
Pydantic schemas for Review-related requests and responses.
"""
from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, ConfigDict

# Fields a PUT replaces; anything else in the body is ignored
REPLACEABLE_FIELDS = (
    "foodName",
    "foodImage",
    "restaurantName",
    "location",
    "rating",
    "reviewText",
)


class ReviewCreate(BaseModel):
    """
    Request body for POST /reviews.

    Unknown fields (including a client-supplied ``createdAt``) are dropped.
    """

    user_email: str = Field(..., alias="userEmail", min_length=1, description="Author email")
    food_name: str = Field(..., alias="foodName", min_length=1, description="Dish name")
    food_image: Optional[str] = Field(None, alias="foodImage", description="Image URL")
    restaurant_name: Optional[str] = Field(None, alias="restaurantName", description="Restaurant name")
    location: Optional[str] = Field(None, description="Restaurant location")
    rating: float = Field(..., description="Rating, no enforced range")
    review_text: Optional[str] = Field(None, alias="reviewText", description="Review body")

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_document(self, created_at: datetime) -> Dict[str, Any]:
        """Build the document to insert, stamped with the server time."""
        document = self.model_dump(by_alias=True, exclude_none=True)
        document["createdAt"] = created_at
        return document


class ReviewUpdate(BaseModel):
    """
    Request body for PUT /reviews/{id}.

    A full replace of the editable fields, so ``foodName`` and ``rating`` must
    be resent even when only ``reviewText`` changes (400 otherwise). Omitted
    optional fields are stored as null. ``userEmail`` and ``createdAt`` are
    never touched.
    """

    food_name: str = Field(..., alias="foodName", min_length=1)
    food_image: Optional[str] = Field(None, alias="foodImage")
    restaurant_name: Optional[str] = Field(None, alias="restaurantName")
    location: Optional[str] = None
    rating: float
    review_text: Optional[str] = Field(None, alias="reviewText")

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_set(self, updated_at: datetime) -> Dict[str, Any]:
        """Build the ``$set`` payload for the update."""
        fields = self.model_dump(by_alias=True)
        changes = {name: fields[name] for name in REPLACEABLE_FIELDS}
        changes["updatedAt"] = updated_at
        return changes


class ReviewOut(BaseModel):
    """A stored review as returned to clients."""

    id: str = Field(..., alias="_id")
    user_email: Optional[str] = Field(None, alias="userEmail")
    food_name: Optional[str] = Field(None, alias="foodName")
    food_image: Optional[str] = Field(None, alias="foodImage")
    restaurant_name: Optional[str] = Field(None, alias="restaurantName")
    location: Optional[str] = None
    rating: Optional[float] = None
    review_text: Optional[str] = Field(None, alias="reviewText")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> str:
        return str(v)
