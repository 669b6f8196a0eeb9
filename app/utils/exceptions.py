"""
Errors raised by the Job Match API around the scorer.

The scorer itself never raises. These cover profile lookups, the job catalog
and settings; each class carries the HTTP status the middleware answers with.
"""
from contextlib import contextmanager
from typing import Any, Dict, Optional

from fastapi import HTTPException


def _present(**fields) -> Dict[str, str]:
    return {k: str(v) for k, v in fields.items() if v is not None}


class JobMatchError(Exception):
    """Base class; `details` ends up in the error envelope"""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.cause is not None:
            body["cause"] = str(self.cause)
        return body


class NotFoundError(JobMatchError):
    """The profile a request names does not exist"""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, message: str, resource: str = None, resource_id: str = None, **kwargs):
        super().__init__(message, details=_present(resource=resource, resource_id=resource_id), **kwargs)


class DatabaseError(JobMatchError):
    status_code = 500
    error_code = "DATABASE_ERROR"

    def __init__(self, message: str, operation: str = None, collection: str = None, **kwargs):
        details = {**kwargs.pop("details", {}), **_present(operation=operation, collection=collection)}
        super().__init__(message, details=details, **kwargs)


class ConfigurationError(JobMatchError):
    """An environment variable or scoring setting is invalid"""

    status_code = 500
    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, config_key: str = None, config_value: Any = None, **kwargs):
        super().__init__(message, details=_present(config_key=config_key, config_value=config_value), **kwargs)


def map_to_http_exception(exc: JobMatchError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail={"error": exc.to_dict(), "message": exc.message})


@contextmanager
def database_errors(operation: str, collection: str, logger=None, **context):
    """Re-raise driver failures inside the block as DatabaseError.

    `context` (e.g. the user id being looked up) is logged and kept in the
    error details.
    """
    try:
        yield
    except JobMatchError:
        raise
    except Exception as e:
        if logger:
            logger.error(f"{operation} on {collection} failed: {e}", extra={"operation": operation, **context})
        raise DatabaseError(
            f"Database error in {operation}: {e}",
            operation=operation,
            collection=collection,
            details=_present(**context),
            cause=e,
        ) from e
