"""
Logging setup for the Job Match API.

Modules log through get_logger(__name__), which puts them under the
"job_match" namespace. configure_for_environment() is called once from
app.main and picks a preset from ENVIRONMENT.
"""
import functools
import logging
import logging.config
import os
import time
from pathlib import Path
from typing import Optional

LOGGER_PREFIX = "job_match"

FORMATS = {
    "simple": "%(levelname)s %(name)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
}

# ENVIRONMENT -> (level, write a log file, console format); a None level defers to LOG_LEVEL
PRESETS = {
    "production": (None, True, "detailed"),
    "development": ("DEBUG", True, "detailed"),
    "testing": ("WARNING", False, "simple"),
}


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None, format_style: str = "detailed") -> None:
    """Log to stdout, and to a rotating file as well when log_file is given."""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": format_style,
            "stream": "ext://sys.stdout",
        }
    }
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "detailed",
            "filename": str(log_file),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "encoding": "utf8",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {name: {"format": fmt, "datefmt": "%Y-%m-%d %H:%M:%S"} for name, fmt in FORMATS.items()},
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
        # uvicorn ships its own handlers; send its records through ours
        "loggers": {
            name: {"level": "INFO", "handlers": list(handlers), "propagate": False}
            for name in ("uvicorn", "uvicorn.access")
        },
    })

    where = f" and {log_file}" if log_file is not None else ""
    get_logger("logging").info(f"Logging at {level} to stdout{where}")


def configure_for_environment() -> None:
    environment = os.getenv("ENVIRONMENT", "development").lower()
    level, to_file, style = PRESETS.get(environment, (None, False, "detailed"))
    level = level or os.getenv("LOG_LEVEL", "INFO").upper()
    log_file = Path(os.getenv("LOG_DIR", "logs")) / "job_match.log" if to_file else None
    setup_logging(level=level, log_file=log_file, format_style=style)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_api_call(operation: str):
    """
    Log a route's start, duration and failure.

    Records carry the request id set by ExceptionHandlerMiddleware and, for
    routes that take one, the user id, so a ranking can be traced back to
    the profile it was computed for.
    """
    def decorator(func):
        logger = get_logger(f"api.{operation}")

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            request = kwargs.get("request")
            context = {
                "operation": operation,
                "request_id": getattr(getattr(request, "state", None), "request_id", None),
                "user_id": kwargs.get("user_id"),
            }
            who = f" for user {context['user_id']}" if context["user_id"] else ""
            started = time.perf_counter()
            logger.info(f"{operation} started{who}", extra=context)

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.warning(f"{operation} failed{who} after {time.perf_counter() - started:.3f}s: {e}",
                               extra=context)
                raise

            logger.info(f"{operation} done{who} in {time.perf_counter() - started:.3f}s", extra=context)
            return result

        return wrapper
    return decorator


class PerformanceMonitor:
    """Times a block of work; warns when it runs past threshold_ms"""

    def __init__(self, operation_name: str, logger: logging.Logger = None, threshold_ms: float = 1000):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.threshold_ms = threshold_ms
        self.elapsed_ms = None

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        if exc_type is None:
            log = self.logger.warning if self.elapsed_ms > self.threshold_ms else self.logger.debug
            log(f"{self.operation_name} took {self.elapsed_ms:.1f}ms")
        return False
