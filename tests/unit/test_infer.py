"""Unit tests for structure inference."""

import pytest

from hemline.contexts.structuring import (
    SectionClassifier,
    SectionType,
    infer_structure,
    structure_to_content,
)


@pytest.mark.unit
def test_scenario_resume_structure(scenario_text):
    structure = infer_structure(scenario_text)

    assert structure.header.title == "John Doe"
    assert structure.header.contact_info == ["john@x.com"]
    assert [s.section_type for s in structure.sections] == [
        SectionType.SUMMARY,
        SectionType.EXPERIENCE,
    ]
    assert structure.sections[0].content == ["Experienced engineer."]

    experience = structure.sections[1]
    assert experience.title == "EXPERIENCE"
    assert experience.content == ["Backend Engineer | Acme Corp", "Built APIs", "Reduced latency"]
    assert experience.is_bullet_list
    assert experience.bullet_lines == [1, 2]

    content = structure_to_content(structure)
    assert len(content.experience) == 1
    entry = content.experience[0]
    assert entry.job_title == "Backend Engineer"
    assert entry.company == "Acme Corp"
    assert entry.bullets == ["Built APIs", "Reduced latency"]


@pytest.mark.unit
def test_inference_is_deterministic(scenario_text):
    assert infer_structure(scenario_text) == infer_structure(scenario_text)


@pytest.mark.unit
def test_section_order_follows_first_occurrence():
    text = "Jane\nSKILLS\nPython\nEDUCATION\nBS Math\nEXPERIENCE\nDev | Co\nSUMMARY\nHello."
    structure = infer_structure(text)

    assert [s.section_type for s in structure.sections] == [
        SectionType.SKILLS,
        SectionType.EDUCATION,
        SectionType.EXPERIENCE,
        SectionType.SUMMARY,
    ]
    assert [s.order for s in structure.sections] == [0, 1, 2, 3]


@pytest.mark.unit
def test_duplicate_headers_produce_separate_sections():
    text = "Jane\nEXPERIENCE\nDev | Co\n- Wrote code\nSKILLS\nGo\nWork Experience\nOps | Other Co\n- Ran servers"
    structure = infer_structure(text)

    experience = structure.sections_of_type(SectionType.EXPERIENCE)
    assert len(experience) == 2
    assert experience[0].order < experience[1].order

    content = structure_to_content(structure)
    assert [e.company for e in content.experience] == ["Co", "Other Co"]


@pytest.mark.unit
def test_no_headers_means_all_header():
    structure = infer_structure("Jane Roe\njane@example.com\nJust some text about me")

    assert structure.sections == []
    assert structure.header.title == "Jane Roe"
    assert structure.header.contact_info == ["jane@example.com"]
    assert structure_to_content(structure).experience == []


@pytest.mark.unit
def test_source_type_is_recorded():
    structure = infer_structure("Jane\nSKILLS\nGo", source_type="docx")
    assert structure.source_type == "docx"
    assert infer_structure("Jane").source_type is None


@pytest.mark.unit
def test_custom_classifier_replaces_keyword_heuristic():
    class ColonHeaders(SectionClassifier):
        def classify(self, line):
            if line == "JOBS:":
                return SectionType.EXPERIENCE
            return None

    structure = infer_structure("Jane\nJOBS:\nDev | Co\nSKILLS", classifier=ColonHeaders())

    assert [s.section_type for s in structure.sections] == [SectionType.EXPERIENCE]
    assert structure.sections[0].content == ["Dev | Co", "SKILLS"]


@pytest.mark.unit
def test_structure_round_trips_through_dict(scenario_text):
    structure = infer_structure(scenario_text, source_type="pdf")
    assert type(structure).from_dict(structure.to_dict()) == structure
