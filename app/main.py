from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from app.routers import jobs, match

from app.utils.logging_config import configure_for_environment, get_logger
from app.middleware.error_handlers import ExceptionHandlerMiddleware, PerformanceMiddleware, register_error_handlers

# Configure logging first
configure_for_environment()
logger = get_logger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    logger.info("Job Match API starting up...")

    try:
        from app.services.db import init_indexes
        await init_indexes()
        logger.info("Database indexes initialized successfully")
    except Exception as e:
        logger.warning(f"Database index initialization had issues: {e}")
        logger.info("Application will continue - listings may be slower without indexes")

    yield

    logger.info("Job Match API shutting down...")


app = FastAPI(title="Job Match API", version=API_VERSION, lifespan=lifespan)
register_error_handlers(app)

# Middleware is LIFO: the exception handler wraps the performance timer
app.add_middleware(PerformanceMiddleware, slow_request_threshold=2.0)
app.add_middleware(ExceptionHandlerMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
@app.head("/")
async def root():
    """Root endpoint - handles both GET and HEAD requests for health checks"""
    return {"message": "Welcome to the Job Match API", "version": API_VERSION, "status": "ok"}


@app.get("/health")
@app.head("/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(match.router, prefix="/api/match", tags=["match"])

logger.info("Job Match API initialized successfully")
