from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, validator


# Stored profiles and jobs are loosely typed: numbers where text is expected,
# nulls for lists, junk dates. These helpers read them as text or as missing
# so one odd record never stops a listing.
def _text(v):
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


def _list(v):
    return list(v) if isinstance(v, (list, tuple)) else []


def _coerce_date(v):
    """Accept dates, datetimes and ISO strings; anything unreadable becomes None."""
    if isinstance(v, datetime):
        return v.date()
    if v is None or isinstance(v, date):
        return v
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
        try:
            return date.fromisoformat(v[:10])
        except ValueError:
            return None
    return None


# -------- Candidate --------
class ExperienceEntry(BaseModel):
    position: str = ""
    company: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current: bool = False

    @validator("start_date", "end_date", pre=True)
    def parse_dates(cls, v):
        return _coerce_date(v)

    @validator("position", pre=True)
    def position_text(cls, v):
        return _text(v) or ""

    @validator("company", pre=True)
    def company_text(cls, v):
        return _text(v)

    @validator("current", pre=True)
    def current_flag(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "yes")
        return bool(v)


class EducationEntry(BaseModel):
    degree: str = ""
    institution: Optional[str] = None
    field_of_study: Optional[str] = None

    @validator("degree", pre=True)
    def degree_text(cls, v):
        return _text(v) or ""

    @validator("institution", "field_of_study", pre=True)
    def optional_text(cls, v):
        return _text(v)


class CandidateProfile(BaseModel):
    user_id: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    location: Optional[str] = None
    availability: Optional[str] = None
    expected_salary: Optional[str] = None

    @validator("user_id", "location", "availability", "expected_salary", pre=True)
    def scalar_text(cls, v):
        # expected_salary is stored either as text ("$80,000") or as a bare number
        return _text(v)

    @validator("skills", pre=True)
    def skill_names(cls, v):
        names = (_text(s) for s in _list(v))
        return [s for s in names if s and s.strip()]

    @validator("experience", "education", pre=True)
    def entries(cls, v):
        return [e for e in _list(v) if isinstance(e, (dict, BaseModel))]


# -------- Jobs --------
class JobPosting(BaseModel):
    id: Optional[str] = None
    title: str = ""
    company: Optional[str] = None
    description: str = ""
    requirements: str = ""
    location: Optional[str] = None
    job_type: Optional[str] = None
    work_mode: Optional[str] = None
    salary_range: Optional[str] = None
    status: str = "open"
    created_at: Optional[datetime] = None

    @validator("title", "description", "requirements", pre=True)
    def text_fields(cls, v):
        return _text(v) or ""

    @validator("id", "company", "location", "job_type", "work_mode", "salary_range", pre=True)
    def scalar_text(cls, v):
        return _text(v)

    @validator("status", pre=True)
    def status_text(cls, v):
        return _text(v) or "open"

    @validator("created_at", pre=True)
    def parse_created_at(cls, v):
        if isinstance(v, datetime) or v is None:
            return v
        if isinstance(v, str):
            try:
                return datetime.fromisoformat(v.strip().replace("Z", "+00:00"))
            except ValueError:
                return None
        return None


# -------- Scoring output --------
class FactorScore(BaseModel):
    score: int = 0

    @validator("score")
    def clamp(cls, v):
        return max(0, min(100, v))


class SkillsScore(FactorScore):
    matched_count: int = 0
    matched_skills: List[str] = Field(default_factory=list)


class ExperienceScore(FactorScore):
    years_of_experience: float = 0.0
    required_years: int = 0
    title_relevant: bool = False


class LocationScore(FactorScore):
    reason: str = ""


class JobTypeScore(FactorScore):
    pass


class SalaryScore(FactorScore):
    expected: int = 0
    offered: int = 0
    compared: bool = False


class EducationScore(FactorScore):
    candidate_rank: int = 0
    required_rank: int = 0


class MatchBreakdown(BaseModel):
    skills: SkillsScore
    experience: ExperienceScore
    location: LocationScore
    job_type: JobTypeScore
    salary: SalaryScore
    education: EducationScore


class MatchResult(BaseModel):
    score: int = 0
    reasons: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    breakdown: Optional[MatchBreakdown] = None
    level: str = "Low"
