"""Unit tests for content mapping and experience segmentation."""

import pytest

from hemline.contexts.structuring import Section, SectionType, infer_structure, structure_to_content
from hemline.contexts.structuring.content_mapper import (
    is_date_range,
    is_delimiter_line,
    segment_experience_lines,
    split_job_line,
    split_skills,
)


def experience_section(lines, bullet_lines=()):
    section = Section(section_type=SectionType.EXPERIENCE)
    for index, line in enumerate(lines):
        section.add_line(line, is_bullet=index in bullet_lines)
    return section


@pytest.mark.unit
@pytest.mark.parametrize(
    "line,expected",
    [
        ("Backend Engineer | Acme Corp", ("Backend Engineer", "Acme Corp")),
        ("Backend Engineer at Acme Corp", ("Backend Engineer", "Acme Corp")),
        ("Backend Engineer - Acme Corp", ("Backend Engineer", "Acme Corp")),
        ("Backend Engineer–Acme Corp", ("Backend Engineer", "Acme Corp")),
        ("Engineer | Acme | Remote | 2020", ("Engineer", "Acme | Remote | 2020")),
        ("Engineer at Acme - Berlin", ("Engineer", "Acme - Berlin")),
    ],
)
def test_split_job_line(line, expected):
    assert is_delimiter_line(line)
    assert split_job_line(line) == expected


@pytest.mark.unit
def test_plain_sentence_is_not_delimiter():
    assert not is_delimiter_line("Designed the billing system")


@pytest.mark.unit
@pytest.mark.parametrize(
    "line", ["Jan 2020 - Present", "2019 – 2021", "03/2018 to 05/2020", "(Sept. 2017 - Current)"]
)
def test_date_ranges(line):
    assert is_date_range(line)


@pytest.mark.unit
def test_split_skills_flattens_all_separators():
    assert split_skills(["Python, Go; SQL", "Docker | Kubernetes • Terraform", " , "]) == [
        "Python",
        "Go",
        "SQL",
        "Docker",
        "Kubernetes",
        "Terraform",
    ]


@pytest.mark.unit
def test_segmentation_with_dates_and_markerless_bullets():
    section = experience_section(
        [
            "Backend Engineer | Acme Corp",
            "Jan 2020 - Present",
            "Built APIs",
            "Reduced latency",
            "Data Engineer at Beta LLC",
            "ok",
            "Wrote pipelines",
        ],
        bullet_lines={2},
    )

    entries, flags = segment_experience_lines(section)

    assert [(e.job_title, e.company, e.dates) for e in entries] == [
        ("Backend Engineer", "Acme Corp", "Jan 2020 - Present"),
        ("Data Engineer", "Beta LLC", None),
    ]
    assert entries[0].bullets == ["Built APIs", "Reduced latency"]
    # "ok" is too short to be a markerless bullet
    assert entries[1].bullets == ["Wrote pipelines"]
    assert flags == [False, False, True, True, False, False, True]


@pytest.mark.unit
def test_dates_before_job_line_attach_to_next_entry():
    entries, _ = segment_experience_lines(
        experience_section(["2018 - 2020", "Analyst | Gamma", "Built reports"])
    )
    assert entries[0].dates == "2018 - 2020"
    assert entries[0].bullets == ["Built reports"]


@pytest.mark.unit
def test_glyph_bullet_is_never_a_delimiter():
    entries, flags = segment_experience_lines(
        experience_section(["Engineer | Acme", "Moved to Go - saved money"], bullet_lines={1})
    )
    assert len(entries) == 1
    assert entries[0].bullets == ["Moved to Go - saved money"]
    assert flags == [False, True]


@pytest.mark.unit
def test_bullets_outside_entries_are_dropped():
    entries, flags = segment_experience_lines(
        experience_section(["Orphan bullet", "Engineer | Acme", "Real bullet"], bullet_lines={0, 2})
    )
    assert [e.bullets for e in entries] == [["Real bullet"]]
    assert flags == [False, False, True]


@pytest.mark.unit
def test_capitalized_line_opens_entry_with_empty_company():
    entries, _ = segment_experience_lines(
        experience_section(["Freelance Consultant", "Advised startups on cloud costs"])
    )
    assert entries[0].job_title == "Freelance Consultant"
    assert entries[0].company == ""
    assert entries[0].bullets == ["Advised startups on cloud costs"]


@pytest.mark.unit
def test_content_mapping_of_all_section_types():
    text = (
        "Jane Roe\n"
        "jane@example.com\n"
        "(555) 123-4567\n"
        "Summary\n"
        "First line.\n"
        "Second line.\n"
        "Experience\n"
        "Dev | Co\n"
        "- Wrote code\n"
        "Skills\n"
        "Python, Go\n"
        "SQL\n"
        "Education\n"
        "BS Math, State U\n"
        "Certifications\n"
        "AWS Solutions Architect\n"
        "Projects and Open Source\n"
    )
    content = structure_to_content(infer_structure(text))

    assert content.profile_title == "Jane Roe"
    assert content.contact_info == "jane@example.com\n(555) 123-4567"
    assert content.professional_summary == "First line.\nSecond line."
    assert content.skills == ["Python", "Go", "SQL"]
    assert content.education == ["BS Math, State U"]
    assert content.certifications == ["AWS Solutions Architect", "Projects and Open Source"]


@pytest.mark.unit
def test_missing_sections_map_to_none():
    content = structure_to_content(infer_structure("Jane\nExperience\nDev | Co\n- Wrote code"))

    assert content.professional_summary is None
    assert content.skills is None
    assert content.education is None
    assert content.certifications is None
    assert content.contact_info is None
