"""
Standard error response schemas.
All API errors carry a top-level ``message`` string.
"""
from typing import Optional, Dict, Any
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes used throughout the API."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"  # 400
    NOT_FOUND = "NOT_FOUND"  # 404
    CONFLICT = "CONFLICT"  # 400
    INTERNAL = "INTERNAL"  # 500


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Example:
    {
        "message": "Review not found",
        "code": "NOT_FOUND",
        "requestId": "abc-123-def"
    }
    """

    message: str = Field(..., description="Human-readable error message")
    code: ErrorCode = Field(..., description="Error code")
    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


# Duplicate favorites are reported as 400, not 409, for existing clients
ERROR_CODE_TO_HTTP_STATUS = {
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 400,
    ErrorCode.INTERNAL: 500,
}
