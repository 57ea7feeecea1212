"""
API routers package.
"""
from food_lovers.api import health, reviews, favorites

__all__ = [
    "health",
    "reviews",
    "favorites",
]
