from datetime import date
from typing import List, Optional

from app.helpers import signals
from app.models.models import (
    EducationEntry, EducationScore, ExperienceEntry, ExperienceScore,
    JobTypeScore, LocationScore, SalaryScore, SkillsScore,
)


def is_remote(*fields: Optional[str]) -> bool:
    return any("remote" in signals.normalize(f) for f in fields)


def unique_skills(skills: List[str]) -> List[str]:
    seen, out = set(), []
    for s in skills:
        key = s.strip().lower()
        if key and key not in seen:
            seen.add(key)
            out.append(s.strip())
    return out


def skills_match(skills: List[str], requirements: str, description: str = "") -> SkillsScore:
    skills = unique_skills(skills)
    if not skills:
        return SkillsScore(score=0)

    pool = (requirements + " " + description).lower()
    matched = [s for s in skills if s.lower() in pool]
    m = len(matched)

    score = min((m / len(skills)) * 100 + min(m * 10, 30), 100)
    return SkillsScore(score=signals.round_half_up(score), matched_count=m, matched_skills=matched)


def experience_match(
    experience: List[ExperienceEntry], requirements: str, title: str, today: date
) -> ExperienceScore:
    if not experience:
        return ExperienceScore(score=20)

    years = signals.total_experience_years(experience, today)
    required = signals.required_years(requirements + " " + title)

    if required == 0:
        score = min(50 + years * 10, 100)
    else:
        ratio = years / required
        if ratio >= 1:
            score = min(80 + ratio * 10, 100)
        elif ratio >= 0.7:
            score = 60 + ratio * 20
        else:
            score = 30 + ratio * 30

    words = signals.title_words(title)
    relevant = any(
        any(w in signals.normalize(e.position) for w in words) for e in experience
    )
    if relevant:
        score = min(score + 15, 100)

    return ExperienceScore(
        score=signals.round_half_up(score),
        years_of_experience=signals.round_half_up(years * 10) / 10,
        required_years=required,
        title_relevant=relevant,
    )


def location_match(
    candidate_location: Optional[str], job_location: Optional[str],
    work_mode: Optional[str] = None, job_type: Optional[str] = None,
) -> LocationScore:
    if is_remote(work_mode, job_type):
        return LocationScore(score=100, reason="Remote position")

    user_loc = signals.normalize(candidate_location)
    job_loc = signals.normalize(job_location)
    if not user_loc or not job_loc:
        return LocationScore(score=50, reason="Location not specified")

    if user_loc == job_loc:
        return LocationScore(score=100, reason="Exact location match")

    user_city = user_loc.split(",")[0].strip()
    job_city = job_loc.split(",")[0].strip()
    if user_city == job_city:
        return LocationScore(score=95, reason="Same city")
    if job_city in user_loc or user_city in job_loc:
        return LocationScore(score=70, reason="Same region")

    user_country = user_loc.split(",")[-1].strip()
    job_country = job_loc.split(",")[-1].strip()
    if user_country == job_country:
        return LocationScore(score=50, reason="Same country")

    return LocationScore(score=30, reason="Different location")


def job_type_match(
    availability: Optional[str], job_type: Optional[str], work_mode: Optional[str] = None
) -> JobTypeScore:
    avail = signals.normalize(availability)
    kind = signals.normalize(job_type)
    if not avail or not kind:
        return JobTypeScore(score=70)

    if is_remote(kind, work_mode) or "remote" in avail:
        return JobTypeScore(score=100)

    if "not actively looking" in avail and "available" not in avail:
        return JobTypeScore(score=40)

    if "available" in avail:
        if "full-time" in kind or "full time" in kind:
            return JobTypeScore(score=100)
        if "part-time" in kind or "part time" in kind:
            return JobTypeScore(score=85)
        if "contract" in kind:
            return JobTypeScore(score=80)

    return JobTypeScore(score=70)


def salary_match(expected_salary: Optional[str], salary_range: Optional[str]) -> SalaryScore:
    expected = signals.first_number(expected_salary)
    offered = signals.first_number(salary_range)
    if expected == 0 or offered == 0:
        return SalaryScore(score=70, expected=expected, offered=offered)

    ratio = offered / expected
    if ratio >= 1:
        score = 100
    elif ratio >= 0.9:
        score = 85
    elif ratio >= 0.8:
        score = 70
    elif ratio >= 0.7:
        score = 50
    else:
        score = 30
    return SalaryScore(score=score, expected=expected, offered=offered, compared=True)


def education_match(education: List[EducationEntry], requirements: str) -> EducationScore:
    required = signals.required_degree_rank(requirements)
    if not education:
        return EducationScore(score=40 if required else 50, required_rank=required)

    highest = signals.highest_degree_rank(e.degree for e in education)
    if required == 0:
        score = highest or 70
    elif highest >= required:
        score = 100
    elif highest > 0:
        score = 60
    else:
        score = 40
    return EducationScore(score=score, candidate_rank=highest, required_rank=required)
