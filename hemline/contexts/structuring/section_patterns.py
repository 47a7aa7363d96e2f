"""
Pattern matching for resume section headers, contact lines and bullets.

Pattern classes follow one convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns

Section-header recognition sits behind the SectionClassifier interface so an
alternative heuristic (or a trained model) can replace the keyword matcher without
touching the scanner, the content mapper, tailoring or rendering.
"""

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from hemline.contexts.structuring.data_structures import SectionType

load_dotenv()

# Lines at least this long are prose, not headers
MAX_HEADER_LENGTH = int(os.getenv("HEMLINE_MAX_HEADER_LENGTH", "50"))

# =============================================================================
# SECTION HEADER KEYWORDS
# =============================================================================


@dataclass(frozen=True)
class SectionHeaderPatterns:
    """
    Keyword phrases that mark a section header, per section type.

    Matched case-insensitively on word boundaries, so "Experienced engineer" is not
    an experience header. Types are tried in declaration order; within a type the
    longer phrases come first.
    """

    SUMMARY: tuple = (
        r"professional summary",
        r"executive summary",
        r"summary",
        r"objective",
    )

    EXPERIENCE: tuple = (
        r"work experience",
        r"professional experience",
        r"work history",
        r"employment",
        r"experience",
    )

    SKILLS: tuple = (
        r"technical skills",
        r"core competencies",
        r"skills",
    )

    EDUCATION: tuple = (
        r"academic background",
        r"education",
    )

    CERTIFICATIONS: tuple = (
        r"certifications",
        r"certificates",
        r"licenses",
    )


HEADER_KEYWORDS: Tuple[Tuple[SectionType, Tuple[str, ...]], ...] = (
    (SectionType.SUMMARY, SectionHeaderPatterns.SUMMARY),
    (SectionType.EXPERIENCE, SectionHeaderPatterns.EXPERIENCE),
    (SectionType.SKILLS, SectionHeaderPatterns.SKILLS),
    (SectionType.EDUCATION, SectionHeaderPatterns.EDUCATION),
    (SectionType.CERTIFICATIONS, SectionHeaderPatterns.CERTIFICATIONS),
)

_COMPILED_HEADER_KEYWORDS = tuple(
    (section_type, tuple(re.compile(rf"\b{phrase}\b", re.IGNORECASE) for phrase in phrases))
    for section_type, phrases in HEADER_KEYWORDS
)

# =============================================================================
# CONTACT AND BULLET PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """Patterns identifying contact lines in the resume header."""

    CONTACT_WORD: str = r"\b(?:e-?mail|phone)\b"

    # 555-123-4567, 555.123.4567, (555) 123-4567, 5551234567
    PHONE_NUMBER: str = r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"


@dataclass(frozen=True)
class BulletPatterns:
    """Bullet glyph patterns."""

    GLYPHS: str = "•-*"

    # Leading glyph plus any whitespace after it
    LEADING_GLYPH: str = r"^[•\-\*]\s*"


_CONTACT_WORD_RE = re.compile(ContactPatterns.CONTACT_WORD, re.IGNORECASE)
_PHONE_RE = re.compile(ContactPatterns.PHONE_NUMBER)
_LEADING_GLYPH_RE = re.compile(BulletPatterns.LEADING_GLYPH)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def starts_with_bullet(line: str) -> bool:
    """Check if a (trimmed) line starts with a bullet glyph."""
    return bool(line) and line[0] in BulletPatterns.GLYPHS


def strip_bullet_glyph(line: str) -> str:
    """Remove a leading bullet glyph and the whitespace after it."""
    return _LEADING_GLYPH_RE.sub("", line, count=1)


def is_contact_line(line: str) -> bool:
    """
    Check if a header line carries contact details.

    A line qualifies if it contains '@', the word email/phone, or a phone-shaped
    digit run.
    """
    return "@" in line or bool(_CONTACT_WORD_RE.search(line)) or bool(_PHONE_RE.search(line))


class SectionClassifier(ABC):
    """Decides whether a line opens a new section, and of which type."""

    @abstractmethod
    def classify(self, line: str) -> Optional[SectionType]:
        """
        Classify a trimmed, non-empty line.

        Returns:
            The section type the line opens, or None if it is not a section header
        """
        pass

    def is_contact_line(self, line: str) -> bool:
        return is_contact_line(line)


class KeywordSectionClassifier(SectionClassifier):
    """
    Keyword heuristic: a short line containing a known section phrase is a header.

    Lines at or above max_header_length characters and lines starting with a bullet
    glyph are never headers.
    """

    def __init__(self, max_header_length: int = MAX_HEADER_LENGTH):
        self.max_header_length = max_header_length

    def classify(self, line: str) -> Optional[SectionType]:
        if len(line) >= self.max_header_length or starts_with_bullet(line):
            return None

        for section_type, patterns in _COMPILED_HEADER_KEYWORDS:
            if any(pattern.search(line) for pattern in patterns):
                return section_type

        return None
