"""
Write acknowledgments returned by the create, update and delete endpoints.
Field names follow the MongoDB driver result documents.
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


class InsertAck(BaseModel):
    acknowledged: bool
    inserted_id: str = Field(..., alias="insertedId")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(cls, result: InsertOneResult) -> "InsertAck":
        return cls(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))


class UpdateAck(BaseModel):
    acknowledged: bool
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")
    upserted_id: Optional[str] = Field(None, alias="upsertedId")
    upserted_count: int = Field(0, alias="upsertedCount")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(cls, result: UpdateResult) -> "UpdateAck":
        upserted_id = result.upserted_id
        return cls(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=str(upserted_id) if upserted_id is not None else None,
            upserted_count=0 if upserted_id is None else 1,
        )


class DeleteAck(BaseModel):
    acknowledged: bool
    deleted_count: int = Field(..., alias="deletedCount")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(cls, result: DeleteResult) -> "DeleteAck":
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
