"""
Pytest configuration and shared fixtures.
"""
import os

# Keep log output on the console only while testing
os.environ["ENVIRONMENT"] = "testing"

from datetime import date

import pytest

from app.models.models import CandidateProfile, EducationEntry, ExperienceEntry, JobPosting


@pytest.fixture
def today() -> date:
    return date(2025, 6, 1)


@pytest.fixture
def strong_profile() -> CandidateProfile:
    """Backend developer in Cairo with four years of experience."""
    return CandidateProfile(
        user_id="user-1",
        skills=["Python", "FastAPI", "Docker"],
        experience=[
            ExperienceEntry(
                position="Backend Engineer",
                company="Acme",
                start_date=date(2019, 1, 1),
                end_date=date(2023, 1, 1),
            )
        ],
        education=[EducationEntry(degree="Bachelor of Science")],
        location="Cairo, Egypt",
        availability="Available",
        expected_salary="$80,000",
    )


@pytest.fixture
def matching_job() -> JobPosting:
    return JobPosting(
        id="job-1",
        title="Backend Developer",
        company="Tech Corp",
        description="Build FastAPI services",
        requirements="Python and Docker, 3+ years. Bachelor degree required.",
        location="Cairo, Egypt",
        job_type="full-time",
        work_mode="on-site",
        salary_range="$90,000 - $100,000",
    )


@pytest.fixture
def unrelated_job() -> JobPosting:
    return JobPosting(
        id="job-2",
        title="Chef",
        company="Bistro",
        description="Prepare meals",
        requirements="Culinary school, 10 years in a kitchen",
        location="Berlin, Germany",
        job_type="part-time",
        work_mode="on-site",
        salary_range="$30,000",
    )
