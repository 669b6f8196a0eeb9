import pytest

from app.models.models import JobPosting
from app.services.ranking import paginate, rank_jobs


class TestRankJobs:
    """Ranking sorts by match score, best first"""

    def test_best_match_first(self, strong_profile, matching_job, unrelated_job, today):
        ranked = rank_jobs(strong_profile, [unrelated_job, matching_job], now=today)
        assert [r.job.id for r in ranked] == ["job-1", "job-2"]
        assert ranked[0].match.score == 100
        assert ranked[0].match.score > ranked[1].match.score

    def test_ties_keep_catalog_order(self, strong_profile, matching_job, today):
        first = JobPosting(id="a", title="Chef")
        second = JobPosting(id="b", title="Chef")
        ranked = rank_jobs(strong_profile, [first, matching_job, second], now=today)
        assert [r.job.id for r in ranked] == ["job-1", "a", "b"]

    def test_empty_catalog(self, strong_profile, today):
        assert rank_jobs(strong_profile, [], now=today) == []


class TestPaginate:
    """1-based page slicing"""

    def test_last_partial_page(self):
        items, total, pages = paginate(list(range(25)), page=3, limit=10)
        assert items == [20, 21, 22, 23, 24]
        assert total == 25
        assert pages == 3

    def test_page_past_end(self):
        items, total, pages = paginate(list(range(5)), page=4, limit=2)
        assert items == []
        assert total == 5
        assert pages == 3

    def test_empty(self):
        assert paginate([], page=1, limit=10) == ([], 0, 0)

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0)])
    def test_rejects_non_positive(self, page, limit):
        with pytest.raises(ValueError):
            paginate([1, 2, 3], page=page, limit=limit)
