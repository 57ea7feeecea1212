"""
Custom middleware for the FastAPI application.
"""
import uuid
import time
from typing import Callable, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from contextvars import ContextVar

from food_lovers.core.logging import logger

REQUEST_ID_HEADER = "X-Request-Id"

# Request id visible to handlers and exception handlers of the same request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Attach a request id to each request.

    The id comes from the inbound ``X-Request-Id`` header when the caller
    supplies one, otherwise a UUID4 is generated. It is stored in a context
    variable, echoed back in the response headers and included in the
    request/response log lines.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request_id_var.set(request_id)
        request.state.request_id = request_id

        start_time = time.perf_counter()

        logger.info(
            "Incoming request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed with exception: {str(e)}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                },
                exc_info=True,
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_seconds": round(time.perf_counter() - start_time, 4),
            },
        )

        return response


def get_request_id() -> str:
    """
    Get the current request ID from context.
    Returns a fresh UUID if not in a request context.
    """
    request_id = request_id_var.get()
    if request_id is None:
        return str(uuid.uuid4())
    return request_id
