import re
from typing import Any, Dict, List, Optional

import motor.motor_asyncio
from pymongo import ASCENDING, DESCENDING

from app.models.models import CandidateProfile, JobPosting
from app.utils.config import DB_NAME, MONGO_DETAILS
from app.utils.exceptions import database_errors
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

logger.info(f"Initializing MongoDB connection to database: {DB_NAME}")

# The client connects lazily on first use
client = motor.motor_asyncio.AsyncIOMotorClient(MONGO_DETAILS)
db = client[DB_NAME]

# Collections
profiles_coll = db["profiles"]
jobs_coll = db["jobs"]

OPEN_STATUS = "open"


async def init_indexes():
    """Index initialization for the read paths."""
    logger.info("Starting database index initialization")
    await profiles_coll.create_index([("user_id", ASCENDING)], unique=True)
    await jobs_coll.create_index([("status", ASCENDING), ("created_at", DESCENDING)])
    logger.info("Database index initialization completed")


def _contains(text: str) -> Dict[str, Any]:
    return {"$regex": re.escape(text.strip()), "$options": "i"}


def _equals(text: str) -> Dict[str, Any]:
    return {"$regex": f"^{re.escape(text.strip())}$", "$options": "i"}


def build_jobs_query(
    search: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    work_mode: Optional[str] = None,
) -> Dict[str, Any]:
    """Mongo filter for open jobs; blank filters are ignored."""
    query: Dict[str, Any] = {"status": OPEN_STATUS}
    if search and search.strip():
        query["$or"] = [
            {field: _contains(search)}
            for field in ("title", "description", "company", "requirements")
        ]
    if location and location.strip():
        query["location"] = _contains(location)
    if job_type and job_type.strip():
        query["job_type"] = _equals(job_type)
    if work_mode and work_mode.strip():
        query["work_mode"] = _equals(work_mode)
    return query


def _job_from_doc(doc: Dict[str, Any]) -> JobPosting:
    data = dict(doc)
    if "_id" in data:
        data.setdefault("id", str(data.pop("_id")))
    if data.get("id") is not None:
        data["id"] = str(data["id"])
    return JobPosting(**data)


async def get_profile(user_id: str) -> Optional[CandidateProfile]:
    with database_errors("get_profile", "profiles", logger=logger, user_id=user_id):
        doc = await profiles_coll.find_one({"user_id": user_id})
    if not doc:
        return None
    doc.pop("_id", None)
    return CandidateProfile(**doc)


async def list_open_jobs(
    search: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    work_mode: Optional[str] = None,
) -> List[JobPosting]:
    query = build_jobs_query(search, location, job_type, work_mode)
    with database_errors("list_open_jobs", "jobs", logger=logger):
        cursor = jobs_coll.find(query).sort("created_at", DESCENDING)
        docs = await cursor.to_list(length=None)
    logger.debug(f"Found {len(docs)} open jobs")
    return [_job_from_doc(d) for d in docs]
