"""
Database package.
"""
from food_lovers.db.database import (
    FAVORITES,
    REVIEWS,
    MongoConnection,
    close_db,
    ensure_indexes,
    init_db,
    mongo,
)

__all__ = [
    "FAVORITES",
    "REVIEWS",
    "MongoConnection",
    "close_db",
    "ensure_indexes",
    "init_db",
    "mongo",
]
