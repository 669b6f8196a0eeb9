import math
from datetime import date
from typing import List, Optional, Sequence, Tuple, TypeVar

from app.models.models import CandidateProfile, JobPosting
from app.models.schemas import RankedJob
from app.models.scoring_settings import ScoringSettings
from app.services.matching import compute_match
from app.utils.logging_config import PerformanceMonitor, get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def rank_jobs(
    profile: CandidateProfile,
    jobs: List[JobPosting],
    now: Optional[date] = None,
    settings: Optional[ScoringSettings] = None,
) -> List[RankedJob]:
    """Score every job against one profile, best match first.

    The sort is stable, so equal scores keep the catalog order (newest first).
    """
    today = now or date.today()
    with PerformanceMonitor(f"rank {len(jobs)} jobs", logger=logger, threshold_ms=500):
        ranked = [RankedJob(job=job, match=compute_match(profile, job, today, settings)) for job in jobs]
        ranked.sort(key=lambda r: r.match.score, reverse=True)
    return ranked


def paginate(items: Sequence[T], page: int, limit: int) -> Tuple[List[T], int, int]:
    """Slice one 1-based page; returns (page_items, total, total_pages)."""
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    total = len(items)
    total_pages = math.ceil(total / limit) if total else 0
    start = (page - 1) * limit
    return list(items[start:start + limit]), total, total_pages
