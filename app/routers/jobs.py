from typing import Optional

from fastapi import APIRouter, Query, Request

from app.models.schemas import JobsList, RankedJobsPage
from app.services.db import get_profile, list_open_jobs
from app.services.ranking import paginate, rank_jobs
from app.utils.config import get_scoring_settings, page_size_limits
from app.utils.exceptions import NotFoundError
from app.utils.logging_config import get_logger, log_api_call

router = APIRouter()
logger = get_logger(__name__)

DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE = page_size_limits()


@router.get("/", response_model=JobsList)
@log_api_call("list_jobs")
async def list_jobs(
    request: Request,
    search: Optional[str] = Query(None, description="Free-text search over title, company, description and requirements"),
    location: Optional[str] = Query(None, description="Location substring"),
    job_type: Optional[str] = Query(None, description="Employment type, e.g. full-time"),
    work_mode: Optional[str] = Query(None, description="Work arrangement, e.g. remote"),
):
    """Open jobs, newest first"""
    jobs = await list_open_jobs(search, location, job_type, work_mode)
    return JobsList(jobs=jobs, count=len(jobs))


@router.get("/recommended", response_model=RankedJobsPage)
@log_api_call("recommended_jobs")
async def recommended_jobs(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Candidate whose profile ranks the jobs"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    search: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    job_type: Optional[str] = Query(None),
    work_mode: Optional[str] = Query(None),
):
    """Open jobs ranked by match score against the candidate's profile"""
    profile = await get_profile(user_id)
    if profile is None:
        raise NotFoundError("Profile not found", resource="profile", resource_id=user_id)

    jobs = await list_open_jobs(search, location, job_type, work_mode)
    ranked = rank_jobs(profile, jobs, settings=get_scoring_settings())
    items, total, total_pages = paginate(ranked, page, limit)

    logger.info(
        f"Ranked {total} jobs for user {user_id}, returning page {page}/{total_pages}",
        extra={"request_id": getattr(request.state, "request_id", None), "user_id": user_id}
    )
    return RankedJobsPage(jobs=items, page=page, limit=limit, total=total, total_pages=total_pages)
