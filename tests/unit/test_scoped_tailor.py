"""Unit tests for the scoped tailoring engine (edit allow-list)."""

import pytest

from hemline.contexts.structuring import infer_structure, structure_to_content
from hemline.contexts.targeting import (
    AtsKeywords,
    TailoredExperience,
    TailoringResponse,
    apply_scoped_tailoring,
    filter_skills,
)


def make_response(**overrides):
    fields = dict(
        ats_keywords=AtsKeywords(),
        profile_title="",
        professional_summary="",
        tailored_experience=[],
        skills_optimized=None,
    )
    fields.update(overrides)
    return TailoringResponse(**fields)


@pytest.fixture
def scenario(scenario_text):
    structure = infer_structure(scenario_text)
    return structure, structure_to_content(structure)


@pytest.mark.unit
def test_company_is_preserved_and_bullets_replaced(scenario):
    structure, content = scenario
    response = make_response(
        tailored_experience=[
            TailoredExperience(
                job_title="Backend Engineer",
                company="Acme Inc",
                bullets=["Built 12 REST APIs", "Cut p95 latency by 30%"],
            )
        ]
    )

    tailored = apply_scoped_tailoring(structure, content, response)

    entry = tailored.experience[0]
    assert entry.company == "Acme Corp"
    assert entry.job_title == "Backend Engineer"
    assert entry.bullets == ["Built 12 REST APIs", "Cut p95 latency by 30%"]
    # Input untouched
    assert content.experience[0].bullets == ["Built APIs", "Reduced latency"]


@pytest.mark.unit
def test_unmatched_job_title_passes_through(scenario):
    structure, content = scenario
    response = make_response(
        tailored_experience=[
            TailoredExperience(job_title="Software Developer", company="Acme Corp", bullets=["New"])
        ]
    )

    tailored = apply_scoped_tailoring(structure, content, response)

    assert tailored.experience == content.experience


@pytest.mark.unit
def test_job_title_matching_ignores_case_and_whitespace(scenario):
    structure, content = scenario
    response = make_response(
        tailored_experience=[
            TailoredExperience(job_title="  backend ENGINEER ", company="X", bullets=[" Shipped ", " "])
        ]
    )

    tailored = apply_scoped_tailoring(structure, content, response)

    assert tailored.experience[0].bullets == ["Shipped"]
    assert tailored.experience[0].job_title == "Backend Engineer"


@pytest.mark.unit
def test_empty_ai_bullets_keep_original(scenario):
    structure, content = scenario
    response = make_response(
        tailored_experience=[TailoredExperience(job_title="Backend Engineer", company="X", bullets=[])]
    )
    assert apply_scoped_tailoring(structure, content, response).experience[0].bullets == [
        "Built APIs",
        "Reduced latency",
    ]


@pytest.mark.unit
def test_title_and_summary_replaced_only_when_non_empty(scenario):
    structure, content = scenario

    unchanged = apply_scoped_tailoring(structure, content, make_response())
    assert unchanged.profile_title == "John Doe"
    assert unchanged.professional_summary == "Experienced engineer."

    changed = apply_scoped_tailoring(
        structure,
        content,
        make_response(profile_title="Staff Engineer", professional_summary="Ships fast."),
    )
    assert changed.profile_title == "Staff Engineer"
    assert changed.professional_summary == "Ships fast."


@pytest.mark.unit
def test_invented_skills_are_dropped():
    structure = infer_structure("Jane\nSkills\nPython, Go\nExperience\nDev | Co\n- Code")
    content = structure_to_content(structure)

    tailored = apply_scoped_tailoring(
        structure, content, make_response(skills_optimized=["Python", "Rust"])
    )

    assert sorted(tailored.skills) == ["Go", "Python"]
    assert "Rust" not in tailored.skills


@pytest.mark.unit
def test_skills_ignored_without_skills_section(scenario):
    structure, content = scenario
    tailored = apply_scoped_tailoring(structure, content, make_response(skills_optimized=["Python"]))
    assert tailored.skills is None


@pytest.mark.unit
def test_filter_skills_reorders_and_normalizes():
    assert filter_skills(["Python", "Go", "SQL"], ["sql", "PYTHON", "sql", "Kotlin"]) == [
        "sql",
        "PYTHON",
        "Go",
    ]


@pytest.mark.unit
def test_repeated_titles_consume_suggestions_in_order():
    text = (
        "Jane\nExperience\n"
        "Engineer | First Co\n- a one\n"
        "Engineer | Second Co\n- b one\n"
        "Engineer | Third Co\n- c one"
    )
    structure = infer_structure(text)
    content = structure_to_content(structure)
    response = make_response(
        tailored_experience=[
            TailoredExperience(job_title="Engineer", company="?", bullets=["first"]),
            TailoredExperience(job_title="Engineer", company="?", bullets=["second"]),
        ]
    )

    tailored = apply_scoped_tailoring(structure, content, response)

    assert [e.bullets for e in tailored.experience] == [["first"], ["second"], ["second"]]
    assert [e.company for e in tailored.experience] == ["First Co", "Second Co", "Third Co"]


@pytest.mark.unit
def test_dates_education_and_certifications_are_preserved():
    text = (
        "Jane\nExperience\nDev | Co\nJan 2020 - Present\n- Code\n"
        "Education\nBS Math\nCertifications\nCKA"
    )
    structure = infer_structure(text)
    content = structure_to_content(structure)

    tailored = apply_scoped_tailoring(
        structure,
        content,
        make_response(
            tailored_experience=[TailoredExperience(job_title="Dev", company="Co", bullets=["New"])]
        ),
    )

    assert tailored.experience[0].dates == "Jan 2020 - Present"
    assert tailored.education == ["BS Math"]
    assert tailored.certifications == ["CKA"]
