"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from food_lovers.core.config import settings
from food_lovers.core.middleware import RequestIdMiddleware, get_request_id
from food_lovers.core.logging import logger
from food_lovers.core.exceptions import AppException
from food_lovers.schemas.error import ErrorResponse, ErrorCode, ERROR_CODE_TO_HTTP_STATUS
from food_lovers.db.database import init_db, close_db

from food_lovers.api import health, reviews, favorites


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up Local Food Lovers API")

    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        # Requests retry the connection through get_db
        logger.error(f"Failed to initialize database: {str(e)}", exc_info=True)

    yield

    logger.info("Shutting down Local Food Lovers API")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Reviews and favorites for the Local Food Lovers community",
    lifespan=lifespan,
)

app.add_middleware(RequestIdMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """
    Handle all custom application exceptions.

    Internal errors only carry details in debug mode.
    """
    request_id = get_request_id()

    logger.warning(
        f"Application exception: {exc.error_code.value}",
        extra={
            "request_id": request_id,
            "error_code": exc.error_code.value,
            "error_message": exc.message,
            "details": exc.details,
        },
    )

    details = exc.details or None
    if exc.error_code == ErrorCode.INTERNAL and not settings.DEBUG:
        details = None

    return _error_response(
        ERROR_CODE_TO_HTTP_STATUS.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        ErrorResponse(
            message=exc.message,
            code=exc.error_code,
            request_id=request_id,
            details=details,
        ),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors (missing fields, wrong types, bad JSON) as 400.
    """
    request_id = get_request_id()

    error_details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
    }

    logger.warning(
        "Validation error",
        extra={"request_id": request_id, "errors": error_details},
    )

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(
            message="Request validation failed",
            code=ErrorCode.INVALID_ARGUMENT,
            request_id=request_id,
            details=error_details,
        ),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle all uncaught exceptions with a generic 500.
    """
    request_id = get_request_id()

    logger.error(
        f"Uncaught exception: {str(exc)}",
        extra={"request_id": request_id, "exception_type": type(exc).__name__},
        exc_info=True,
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            message="Internal server error",
            code=ErrorCode.INTERNAL,
            request_id=request_id,
            details={"error": str(exc)} if settings.DEBUG else None,
        ),
    )


app.include_router(health.router)
app.include_router(reviews.router)
app.include_router(favorites.router)


def run() -> None:
    """
    Serve the app with uvicorn, unless an external platform dispatches
    requests to the ASGI ``app`` directly.
    """
    if settings.SERVERLESS:
        logger.info("SERVERLESS is set, not opening a listener")
        return

    import uvicorn

    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
