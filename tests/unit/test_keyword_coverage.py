"""Unit tests for ATS keyword coverage."""

import pytest

from hemline.contexts.structuring import ExperienceEntry, ResumeContent
from hemline.contexts.targeting import AtsKeywords, keyword_coverage
from hemline.contexts.targeting.keyword_coverage import contains_keyword


@pytest.mark.unit
def test_coverage_score_and_partition():
    content = ResumeContent(
        profile_title="Backend Engineer",
        experience=[ExperienceEntry("Dev", "Co", bullets=["Built REST APIs in C++"])],
        skills=["Python", "Node.js"],
    )
    keywords = AtsKeywords(
        technical_skills=["python", "C++", "Node.js"],
        tools_and_technologies=["Kubernetes"],
    )

    coverage = keyword_coverage(content, keywords)

    assert coverage.matched == ["python", "C++", "Node.js"]
    assert coverage.missing == ["Kubernetes"]
    assert coverage.score == 75


@pytest.mark.unit
def test_no_keywords_scores_zero():
    assert keyword_coverage(ResumeContent(profile_title="X"), AtsKeywords()).score == 0


@pytest.mark.unit
def test_keyword_match_requires_whole_term():
    assert contains_keyword("java developer", "Java")
    assert not contains_keyword("javascript developer", "Java")
