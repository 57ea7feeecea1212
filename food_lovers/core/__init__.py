"""
Core utilities package.
Exports configuration, logging, middleware, and exceptions.
"""
from food_lovers.core.config import settings
from food_lovers.core.logging import logger, log_error, log_info, log_warning
from food_lovers.core.middleware import RequestIdMiddleware, get_request_id
from food_lovers.core.exceptions import (
    AppException,
    InvalidArgumentException,
    NotFoundException,
    ConflictException,
    InternalException,
)

__all__ = [
    "settings",
    "logger",
    "log_error",
    "log_info",
    "log_warning",
    "RequestIdMiddleware",
    "get_request_id",
    "AppException",
    "InvalidArgumentException",
    "NotFoundException",
    "ConflictException",
    "InternalException",
]
