"""
Request middleware and error rendering for the Job Match API.

Every error leaves the service in one envelope:
{success: false, timestamp, request_id, status_code, ...}. Errors raised by
routes and services are caught by ExceptionHandlerMiddleware; the ones
FastAPI answers itself (bad query parameters, unknown routes) go through the
handlers installed by register_error_handlers.
"""
import time
import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.exceptions import JobMatchError, map_to_http_exception
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


def request_id_of(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def error_response(request_id: str, status_code: int, detail: Any) -> JSONResponse:
    body = detail if isinstance(detail, dict) else {"message": str(detail)}
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
            "status_code": status_code,
            **body,
        },
        headers={"X-Request-ID": request_id},
    )


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id, logs it and renders service errors"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"
        logger.info(f"{route} started", extra={"request_id": request_id, "query": dict(request.query_params)})

        try:
            response = await call_next(request)
        except JobMatchError as exc:
            log = logger.warning if exc.status_code < 500 else logger.error
            log(f"{route} failed with {exc.error_code}: {exc.message}",
                extra={"request_id": request_id, "details": exc.details})
            http_exc = map_to_http_exception(exc)
            return error_response(request_id, http_exc.status_code, http_exc.detail)
        except Exception as exc:
            logger.exception(f"{route} raised {type(exc).__name__}: {exc}", extra={"request_id": request_id})
            # Don't expose internal errors
            return error_response(request_id, 500, {
                "error": "Internal server error",
                "message": "An unexpected error occurred. Please try again later.",
            })

        response.headers["X-Request-ID"] = request_id
        logger.info(f"{route} -> {response.status_code}", extra={"request_id": request_id})
        return response


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Sets X-Processing-Time and warns about slow requests"""

    def __init__(self, app, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        if elapsed > self.slow_request_threshold:
            logger.warning(f"Slow request {request.method} {request.url.path}: {elapsed:.3f}s",
                           extra={"request_id": request_id_of(request)})

        response.headers["X-Processing-Time"] = f"{elapsed:.3f}"
        return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(request_id_of(request), exc.status_code, exc.detail)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: invalid request data",
                extra={"request_id": request_id_of(request)})
    return error_response(request_id_of(request), 422, {
        "error": "Validation failed",
        "message": "Request data validation failed",
        "validation_errors": jsonable_encoder(exc.errors()),
    })


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
