"""Unit tests for strict AI response validation."""

import pytest

from hemline.contexts.targeting import AtsKeywords, validate_tailoring_response
from hemline.exceptions import UpstreamServiceError


@pytest.mark.unit
def test_valid_response(ai_payload):
    response = validate_tailoring_response(ai_payload)

    assert response.profile_title == "Senior Backend Engineer"
    assert response.skills_optimized == ["go", "Python", "Rust"]
    assert response.tailored_experience[0].company == "Acme Inc"
    assert response.ats_keywords.tools_and_technologies == ["Kubernetes"]


@pytest.mark.unit
def test_skills_optimized_is_optional(ai_payload):
    del ai_payload["skills_optimized"]
    assert validate_tailoring_response(ai_payload).skills_optimized is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "mutate,field",
    [
        (lambda p: p.pop("profile_title"), "'profile_title'"),
        (lambda p: p.update(profile_title="   "), "'profile_title'"),
        (lambda p: p.update(professional_summary=7), "'professional_summary'"),
        (lambda p: p.update(ats_keywords=["Python"]), "'ats_keywords'"),
        (lambda p: p["ats_keywords"].pop("industry_terms"), "'ats_keywords.industry_terms'"),
        (lambda p: p.update(skills_optimized="Python, Go"), "'skills_optimized'"),
        (lambda p: p.update(tailored_experience={}), "'tailored_experience'"),
        (lambda p: p["tailored_experience"][0].pop("company"), "'tailored_experience[0].company'"),
        (
            lambda p: p["tailored_experience"][0].update(bullets=["ok", ""]),
            "'tailored_experience[0].bullets[1]'",
        ),
    ],
)
def test_malformed_fields_reject_whole_response(ai_payload, mutate, field):
    mutate(ai_payload)

    with pytest.raises(UpstreamServiceError) as exc_info:
        validate_tailoring_response(ai_payload)

    assert field in exc_info.value.message
    assert exc_info.value.service == "ai"


@pytest.mark.unit
def test_non_object_response_is_rejected():
    with pytest.raises(UpstreamServiceError):
        validate_tailoring_response(["not", "an", "object"])


@pytest.mark.unit
def test_all_keywords_deduplicates_across_categories():
    keywords = AtsKeywords(
        technical_skills=["Python", " python "],
        tools_and_technologies=["Docker"],
        industry_terms=["docker", "FinTech"],
    )
    assert keywords.all_keywords() == ["Python", "Docker", "FinTech"]
