"""
Content mapping: ResumeStructure -> ResumeContent.

Pure and deterministic. Only summary, experience, skills, education and
certifications sections contribute content; header/other sections exist for the
rebuild only. Sections of the same type accumulate in document order.

Experience sections are segmented into job entries. A delimiter line
("Title | Company", "Title at Company", "Title - Company", "Title–Company") opens an
entry; following lines are its bullets. Glyph bullets are never delimiters.
"""

import re
from typing import List, Optional, Tuple

from hemline.contexts.structuring.data_structures import (
    ExperienceEntry,
    ResumeContent,
    ResumeStructure,
    Section,
    SectionType,
)
from hemline.contexts.structuring.logger import _log_debug
from hemline.contexts.structuring.section_patterns import starts_with_bullet, strip_bullet_glyph

# Markerless lines longer than this are accepted as bullets
MIN_BULLET_LENGTH = 3

# Bounds for a separator-less line to open an entry as a job title
MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 80

# =============================================================================
# PATTERNS
# =============================================================================

PIPE_DELIMITER = re.compile(r"\s*\|\s*")
AT_DELIMITER = re.compile(r"\s+at\s+", re.IGNORECASE)
SPACED_DASH_DELIMITER = re.compile(r"\s+[-–—]\s+")
CAPITALIZED_DASH_LINE = re.compile(r"^[A-Z][^|]+[-–—]\s*[A-Z]")
CAPITALIZED_DASH_DELIMITER = re.compile(r"\s*[-–—]\s*(?=[A-Z])")

# Tried in this order; the first kind present splits the line once
DELIMITER_PRECEDENCE = (PIPE_DELIMITER, AT_DELIMITER, SPACED_DASH_DELIMITER)

_MONTH = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?"
_DATE_POINT = rf"(?:{_MONTH}\s+)?(?:\d{{1,2}}/)?\d{{4}}"
_DATE_END = rf"(?:{_DATE_POINT}|present|current|now)"
DATE_RANGE = re.compile(rf"^\(?{_DATE_POINT}\s*(?:[-–—]|to)\s*{_DATE_END}\)?$", re.IGNORECASE)

SKILL_SEPARATORS = re.compile(r"[•,;|]")


# =============================================================================
# LINE HELPERS
# =============================================================================


def is_date_range(line: str) -> bool:
    """Check if a line is only an employment date range (e.g., 'Jan 2020 – Present')."""
    return bool(DATE_RANGE.match(line.strip()))


def is_delimiter_line(line: str) -> bool:
    """Check if a line names a job and company separated by a delimiter."""
    return (
        "|" in line
        or bool(AT_DELIMITER.search(line))
        or " - " in line
        or bool(CAPITALIZED_DASH_LINE.match(line))
    )


def split_job_line(line: str) -> Tuple[str, str]:
    """
    Split a delimiter line into (job_title, company) at its first delimiter.

    Everything after the first delimiter stays in company, so trailing fields such
    as locations or dates are carried along unchanged.
    """
    for delimiter in DELIMITER_PRECEDENCE:
        parts = delimiter.split(line, maxsplit=1)
        if len(parts) == 2:
            return parts[0].strip(), parts[1].strip()

    parts = CAPITALIZED_DASH_DELIMITER.split(line, maxsplit=1)
    if len(parts) == 2:
        return parts[0].strip(), parts[1].strip()

    return line.strip(), ""


def _looks_like_job_title(line: str) -> bool:
    return (
        MIN_TITLE_LENGTH < len(line) < MAX_TITLE_LENGTH
        and line[0].isupper()
        and not starts_with_bullet(line)
    )


def split_skills(lines: List[str]) -> List[str]:
    """Flatten skill lines into tokens split on comma, semicolon, pipe or bullet."""
    tokens = []
    for line in lines:
        tokens.extend(t.strip() for t in SKILL_SEPARATORS.split(line))
    return [t for t in tokens if t]


# =============================================================================
# EXPERIENCE SEGMENTATION
# =============================================================================


def _close_entry(entry: Optional[ExperienceEntry], entries: List[ExperienceEntry]) -> bool:
    """Append entry if it names a job or company; return whether it was kept."""
    if entry is not None and (entry.job_title or entry.company):
        entries.append(entry)
        return True
    return False


def _flag(flags: List[bool], entry_lines: List[int], index: int) -> None:
    flags[index] = True
    entry_lines.append(index)


def _unflag(flags: List[bool], entry_lines: List[int]) -> None:
    for index in entry_lines:
        flags[index] = False


def segment_experience_lines(section: Section) -> Tuple[List[ExperienceEntry], List[bool]]:
    """
    Segment one experience section into job entries, tracking bullet lines.

    Args:
        section: Section of type experience

    Returns:
        (entries in document order, per content line: whether it became a bullet)
    """
    entries: List[ExperienceEntry] = []
    bullet_flags = [False] * len(section.content)
    current: Optional[ExperienceEntry] = None
    pending_dates: Optional[str] = None
    glyph_bullets = set(section.bullet_lines)
    current_bullet_lines: List[int] = []

    for index, raw_line in enumerate(section.content):
        line = raw_line.strip()
        if not line:
            continue

        if index in glyph_bullets:
            if current is None:
                _log_debug(f"Dropping bullet outside any job entry: '{line[:60]}'")
            else:
                current.bullets.append(line)
                _flag(bullet_flags, current_bullet_lines, index)
            continue

        if is_date_range(line):
            if current is None:
                pending_dates = line
            elif current.dates is None and not current.bullets:
                current.dates = line
            else:
                current.bullets.append(line)
                _flag(bullet_flags, current_bullet_lines, index)
            continue

        if is_delimiter_line(line):
            if not _close_entry(current, entries):
                _unflag(bullet_flags, current_bullet_lines)
            current_bullet_lines = []
            job_title, company = split_job_line(line)
            current = ExperienceEntry(job_title=job_title, company=company, dates=pending_dates)
            pending_dates = None
            continue

        if current is not None:
            if starts_with_bullet(line):
                bullet = strip_bullet_glyph(line).strip()
                if bullet:
                    current.bullets.append(bullet)
                    _flag(bullet_flags, current_bullet_lines, index)
            elif len(line) > MIN_BULLET_LENGTH:
                current.bullets.append(line)
                _flag(bullet_flags, current_bullet_lines, index)
        elif _looks_like_job_title(line):
            current = ExperienceEntry(job_title=line, company="", dates=pending_dates)
            pending_dates = None

    if not _close_entry(current, entries):
        _unflag(bullet_flags, current_bullet_lines)
    return entries, bullet_flags


def segment_experience(section: Section) -> List[ExperienceEntry]:
    """Segment one experience section into job entries."""
    entries, _ = segment_experience_lines(section)
    return entries


# =============================================================================
# MAPPING
# =============================================================================


def structure_to_content(structure: ResumeStructure) -> ResumeContent:
    """
    Map a ResumeStructure to flat semantic content.

    Args:
        structure: Inferred resume structure

    Returns:
        ResumeContent; list fields are None when the resume has no such section
    """
    summaries: List[str] = []
    experience: List[ExperienceEntry] = []
    skills: Optional[List[str]] = None
    education: Optional[List[str]] = None
    certifications: Optional[List[str]] = None

    for section in structure.sections:
        if section.section_type == SectionType.SUMMARY:
            if section.content:
                summaries.append("\n".join(section.content))
        elif section.section_type == SectionType.EXPERIENCE:
            experience.extend(segment_experience(section))
        elif section.section_type == SectionType.SKILLS:
            skills = (skills or []) + split_skills(section.content)
        elif section.section_type == SectionType.EDUCATION:
            education = (education or []) + list(section.content)
        elif section.section_type == SectionType.CERTIFICATIONS:
            certifications = (certifications or []) + list(section.content)

    contact_lines = structure.header.contact_info

    content = ResumeContent(
        profile_title=structure.header.title or "",
        experience=experience,
        professional_summary="\n".join(summaries) if summaries else None,
        contact_info="\n".join(contact_lines) if contact_lines else None,
        skills=skills,
        education=education,
        certifications=certifications,
    )

    _log_debug(
        f"Mapped {len(experience)} experience entries ({content.total_bullets()} bullets), "
        f"{len(skills or [])} skills"
    )
    return content
