"""Unit tests for section header, contact and bullet patterns."""

import pytest

from hemline.contexts.structuring.data_structures import SectionType
from hemline.contexts.structuring.section_patterns import (
    KeywordSectionClassifier,
    is_contact_line,
    starts_with_bullet,
    strip_bullet_glyph,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "line,expected",
    [
        ("SUMMARY", SectionType.SUMMARY),
        ("Professional Summary", SectionType.SUMMARY),
        ("Career Objective", SectionType.SUMMARY),
        ("WORK EXPERIENCE", SectionType.EXPERIENCE),
        ("Employment History", SectionType.EXPERIENCE),
        ("Technical Skills", SectionType.SKILLS),
        ("Core Competencies", SectionType.SKILLS),
        ("Education", SectionType.EDUCATION),
        ("Licenses & Certifications", SectionType.CERTIFICATIONS),
    ],
)
def test_keyword_classifier_recognizes_headers(line, expected):
    assert KeywordSectionClassifier().classify(line) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "line",
    [
        "Experienced engineer.",
        "Backend Engineer | Acme Corp",
        "• Skills listed below",
        "Led a team that improved work experience for customers across regions",
    ],
)
def test_keyword_classifier_rejects_non_headers(line):
    assert KeywordSectionClassifier().classify(line) is None


@pytest.mark.unit
def test_short_line_threshold_is_configurable():
    classifier = KeywordSectionClassifier(max_header_length=10)
    assert classifier.classify("Skills") == SectionType.SKILLS
    assert classifier.classify("Technical Skills") is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "line",
    ["john@x.com", "Email: john at x dot com", "Phone: call me", "(555) 123-4567", "555.123.4567"],
)
def test_contact_lines(line):
    assert is_contact_line(line)


@pytest.mark.unit
def test_name_is_not_contact_line():
    assert not is_contact_line("John Doe")


@pytest.mark.unit
def test_bullet_glyphs():
    assert starts_with_bullet("• Built APIs")
    assert starts_with_bullet("- Built APIs")
    assert starts_with_bullet("* Built APIs")
    assert not starts_with_bullet("Built APIs")
    assert not starts_with_bullet("")
    assert strip_bullet_glyph("•   Built APIs") == "Built APIs"
