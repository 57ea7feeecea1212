"""
Health check endpoints.
"""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from food_lovers.db.database import mongo


router = APIRouter(tags=["health"])

BANNER = "Local Food Lovers Network Server is Running! 🍕"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root():
    """Plain-text liveness banner."""
    return BANNER


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint. Reports whether a database handle is cached
    without issuing a query.

    Returns:
        200: Service is up
    """
    return HealthResponse(
        status="ok",
        database="connected" if mongo.is_connected else "disconnected",
    )
