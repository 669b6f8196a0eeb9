from pydantic import BaseModel, Field
from typing import List, Optional

from app.models.models import CandidateProfile, JobPosting, MatchResult


# -------- Match preview --------
class MatchRequest(BaseModel):
    profile: Optional[CandidateProfile] = None
    job: Optional[JobPosting] = None


# -------- Ranked listings --------
class RankedJob(BaseModel):
    job: JobPosting
    match: MatchResult


class RankedJobsPage(BaseModel):
    jobs: List[RankedJob] = Field(default_factory=list)
    page: int
    limit: int
    total: int
    total_pages: int


class JobsList(BaseModel):
    jobs: List[JobPosting] = Field(default_factory=list)
    count: int
