from datetime import date

import pytest

from app.models.models import EducationEntry, ExperienceEntry
from app.services import factors


class TestSkillsMatch:
    """Skills scoring: coverage percentage plus a bonus per matched skill"""

    def test_partial_match(self):
        result = factors.skills_match(["Python", "React"], "Looking for a Python developer")
        assert result.matched_count == 1
        assert result.matched_skills == ["Python"]
        assert result.score == 60

    def test_empty_skills_score_zero(self):
        result = factors.skills_match([], "Python, React, everything")
        assert result.score == 0
        assert result.matched_count == 0

    def test_no_matches(self):
        assert factors.skills_match(["Go"], "Python developer").score == 0

    def test_case_insensitive_and_deduplicated(self):
        result = factors.skills_match(["python", "Python", " PYTHON "], "Senior Python role")
        assert result.matched_count == 1
        assert result.score == 100

    def test_bonus_capped_at_thirty(self):
        # 1 of 4 -> 25 + 10; 3 of 4 -> 75 + 30 capped at 100
        assert factors.skills_match(["a1", "b2", "c3", "d4"], "a1").score == 35
        assert factors.skills_match(["a1", "b2", "c3", "d4"], "a1 b2 c3").score == 100

    def test_description_is_searched_when_given(self):
        assert factors.skills_match(["Docker"], "", "We ship Docker images").score == 100
        assert factors.skills_match(["Docker"], "").score == 0


class TestExperienceMatch:
    """Experience scoring against required years and job title"""

    def test_no_experience_scores_twenty(self, today):
        result = factors.experience_match([], "5+ years", "Senior Engineer", today)
        assert result.score == 20
        assert result.years_of_experience == 0

    def test_below_requirement(self, today):
        entries = [ExperienceEntry(position="Developer", start_date=date(2020, 1, 1), end_date=date(2023, 1, 1))]
        result = factors.experience_match(entries, "5+ years senior engineer", "", today)
        assert result.required_years == 5
        assert result.years_of_experience == 3.0
        assert result.score == 48

    def test_no_requirement_rewards_any_experience(self, today):
        entries = [ExperienceEntry(position="Dev", start_date=date(2021, 1, 1), end_date=date(2023, 1, 1))]
        assert factors.experience_match(entries, "", "", today).score == 70

    def test_meets_requirement(self, today):
        entries = [ExperienceEntry(position="Dev", start_date=date(2017, 1, 1), end_date=date(2023, 1, 1))]
        # ratio 6/5 -> 80 + 12
        assert factors.experience_match(entries, "5 years", "", today).score == 92

    def test_close_to_requirement(self, today):
        entries = [ExperienceEntry(position="Dev", start_date=date(2019, 1, 1), end_date=date(2023, 1, 1))]
        # ratio 0.8 -> 60 + 16
        assert factors.experience_match(entries, "5 years", "", today).score == 76

    def test_title_bonus(self, today):
        entries = [ExperienceEntry(position="Backend Engineer", start_date=date(2020, 1, 1), end_date=date(2023, 1, 1))]
        result = factors.experience_match(entries, "", "Senior Backend Developer", today)
        assert result.title_relevant
        assert result.required_years == 5
        assert result.score == 63

    def test_title_bonus_capped(self, today):
        entries = [ExperienceEntry(position="Data Analyst", start_date=date(2010, 1, 1), end_date=date(2023, 1, 1))]
        assert factors.experience_match(entries, "2 years", "Data Analyst", today).score == 100

    def test_current_position_uses_injected_date(self, today):
        entries = [ExperienceEntry(position="Dev", start_date=date(2021, 6, 1), current=True)]
        result = factors.experience_match(entries, "", "", today)
        assert result.years_of_experience == 4.0
        assert result.score == 90

    def test_reported_years_round_half_up(self, today):
        # three months is 0.25 years, shown as 0.3 rather than 0.2
        entries = [ExperienceEntry(position="Dev", start_date=date(2024, 1, 1), end_date=date(2024, 4, 1))]
        assert factors.experience_match(entries, "", "", today).years_of_experience == 0.3

    def test_undated_entries(self, today):
        entries = [ExperienceEntry(position="Volunteer")]
        assert factors.experience_match(entries, "", "", today).score == 50


class TestLocationMatch:
    """Location scoring with remote short-circuit"""

    def test_remote_work_mode_wins(self):
        assert factors.location_match("", "", work_mode="Remote").score == 100
        assert factors.location_match("Cairo, Egypt", "Berlin, Germany", work_mode="remote").score == 100

    def test_remote_job_type_wins(self):
        assert factors.location_match(None, None, job_type="Remote contract").score == 100

    def test_missing_location_is_neutral(self):
        result = factors.location_match("", "Cairo, Egypt", work_mode="on-site")
        assert result.score == 50
        assert result.reason == "Location not specified"

    @pytest.mark.parametrize("candidate,job,expected", [
        ("Cairo, Egypt", "Cairo, Egypt", 100),
        (" cairo, egypt ", "Cairo, Egypt", 100),
        ("Cairo, Egypt", "Cairo, EG", 95),
        ("New Cairo, Egypt", "Cairo", 70),
        ("Alexandria, Egypt", "Cairo, Egypt", 50),
        ("Berlin, Germany", "Cairo, Egypt", 30),
    ])
    def test_location_tiers(self, candidate, job, expected):
        assert factors.location_match(candidate, job, work_mode="on-site").score == expected


class TestJobTypeMatch:
    """Availability against employment type"""

    @pytest.mark.parametrize("availability,job_type,work_mode,expected", [
        ("", "full-time", None, 70),
        ("Available", None, None, 70),
        ("Available", "full-time", None, 100),
        ("Available", "Full Time", None, 100),
        ("Available in 2 weeks", "part time", None, 85),
        ("Available", "Part-time", None, 85),
        ("Available", "Contract", None, 80),
        ("Available", "Internship", None, 70),
        ("Not actively looking", "full-time", None, 40),
        ("Not actively looking but available", "full-time", None, 100),
        ("Open to remote", "full-time", None, 100),
        ("Not actively looking", "full-time", "Remote", 100),
        ("Open to offers", "full-time", None, 70),
    ])
    def test_job_type_tiers(self, availability, job_type, work_mode, expected):
        assert factors.job_type_match(availability, job_type, work_mode).score == expected


class TestSalaryMatch:
    """Offered salary against expectation"""

    def test_offer_above_expectation(self):
        result = factors.salary_match("$80,000", "$90,000 - $100,000")
        assert result.expected == 80000
        assert result.offered == 90000
        assert result.compared
        assert result.score == 100

    @pytest.mark.parametrize("offered,expected_score", [
        ("92,000", 85),
        ("85,000", 70),
        ("75,000", 50),
        ("50,000", 30),
    ])
    def test_ratio_tiers(self, offered, expected_score):
        assert factors.salary_match("100,000", offered).score == expected_score

    @pytest.mark.parametrize("expected,offered", [
        (None, "$90,000"),
        ("$80,000", None),
        ("Negotiable", "$90,000"),
        ("$80,000", "Competitive"),
    ])
    def test_missing_numbers_are_neutral(self, expected, offered):
        result = factors.salary_match(expected, offered)
        assert result.score == 70
        assert not result.compared


class TestEducationMatch:
    """Degree rank against the requirement"""

    def test_below_requirement(self):
        result = factors.education_match([EducationEntry(degree="Bachelor")], "Master's degree required")
        assert result.candidate_rank == 70
        assert result.required_rank == 85
        assert result.score == 60

    def test_meets_requirement(self):
        entries = [EducationEntry(degree="Master of Science")]
        assert factors.education_match(entries, "Bachelor's degree").score == 100

    def test_no_requirement_uses_candidate_rank(self):
        assert factors.education_match([EducationEntry(degree="Bachelor of Arts")], "").score == 70

    def test_no_requirement_unranked_degree(self):
        assert factors.education_match([EducationEntry(degree="Bootcamp certificate")], "").score == 70

    def test_unranked_degree_with_requirement(self):
        assert factors.education_match([EducationEntry(degree="Diploma")], "Master's required").score == 40

    def test_no_entries(self):
        assert factors.education_match([], "Python developer").score == 50
        assert factors.education_match([], "Bachelor's required").score == 40
