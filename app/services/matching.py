from datetime import date
from typing import List, Optional

from app.helpers.signals import round_half_up
from app.models.models import CandidateProfile, JobPosting, MatchBreakdown, MatchResult
from app.models.scoring_settings import ScoringSettings
from app.services import factors
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SETTINGS = ScoringSettings()

MATCH_LEVELS = [(85, "Excellent"), (70, "Great"), (55, "Good"), (40, "Fair")]


def match_level(score: int) -> str:
    for floor, label in MATCH_LEVELS:
        if score >= floor:
            return label
    return "Low"


def score_breakdown(
    profile: CandidateProfile, job: JobPosting, today: date, settings: ScoringSettings
) -> MatchBreakdown:
    """Run the six factor scorers; each one only reads its own fields."""
    description = job.description if settings.include_description else ""
    return MatchBreakdown(
        skills=factors.skills_match(profile.skills, job.requirements, description),
        experience=factors.experience_match(profile.experience, job.requirements, job.title, today),
        location=factors.location_match(profile.location, job.location, job.work_mode, job.job_type),
        job_type=factors.job_type_match(profile.availability, job.job_type, job.work_mode),
        salary=factors.salary_match(profile.expected_salary, job.salary_range),
        education=factors.education_match(profile.education, job.requirements),
    )


def weighted_total(b: MatchBreakdown, settings: ScoringSettings) -> int:
    w = settings.weights
    total = (
        b.skills.score * w.skills
        + b.experience.score * w.experience
        + b.location.score * w.location
        + b.job_type.score * w.job_type
        + b.salary.score * w.salary
        + b.education.score * w.education
    )
    return max(0, min(100, round_half_up(total)))


def explain(b: MatchBreakdown, settings: ScoringSettings):
    """Reasons and warnings in factor priority order: skills, experience, location, salary."""
    t = settings.thresholds
    reasons: List[str] = []
    warnings: List[str] = []

    skills = b.skills
    if skills.score > t.skills_strong:
        reasons.append(f"Strong skills match: {skills.matched_count} relevant skills")
    elif skills.score > t.skills_moderate:
        reasons.append(f"Moderate skills match: {skills.matched_count} relevant skills")
    elif skills.score > 0:
        warnings.append("Limited skills match: consider developing more relevant skills")

    if b.experience.score > t.experience_strong:
        reasons.append("Your experience aligns well with this role")
    elif b.experience.score < t.experience_low:
        warnings.append("This role may require more experience than you currently have")

    if b.location.score == 100:
        reasons.append("Perfect location match")
    elif b.location.score > t.location_good:
        reasons.append("Good location compatibility")

    if b.salary.score > t.salary_good:
        reasons.append("Salary aligns with your expectations")
    elif b.salary.compared and b.salary.score < t.salary_low:
        warnings.append("Salary may be below your expectations")

    return reasons[:settings.max_reasons], warnings[:settings.max_warnings]


def compute_match(
    profile: Optional[CandidateProfile],
    job: Optional[JobPosting],
    now: Optional[date] = None,
    settings: Optional[ScoringSettings] = None,
) -> MatchResult:
    """Score how well a job posting fits a candidate profile.

    Returns a zero score with no reasons when either side is missing; that is
    the "not computable" signal, nothing is raised. `now` is the date current
    positions run to and defaults to today.
    """
    if profile is None or job is None:
        return MatchResult(score=0, level=match_level(0))

    settings = settings or DEFAULT_SETTINGS
    today = now or date.today()

    breakdown = score_breakdown(profile, job, today, settings)
    score = weighted_total(breakdown, settings)
    reasons, warnings = explain(breakdown, settings)

    logger.debug(f"Scored job {job.id or job.title!r}: {score}")
    return MatchResult(
        score=score,
        reasons=reasons,
        warnings=warnings,
        breakdown=breakdown,
        level=match_level(score),
    )
