"""
Resume data structures for HEMLINE.

Defines the structural model (what the document looks like: typed, ordered sections)
and the semantic model (what the resume says: title, summary, experience entries,
skills...). The structural model is produced by the inferencer, the semantic model by
the content mapper; the targeting and rendering contexts consume both.

ParagraphRecord captures per-paragraph formatting at ingestion for the format-preserving
rebuild and is never modified afterwards.

All classes round-trip through plain dicts (to_dict/from_dict) so a tailored session can
be persisted as YAML between the tailoring and rendering steps.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SectionType(Enum):
    """Semantic type of a resume section."""

    HEADER = "header"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    EDUCATION = "education"
    CERTIFICATIONS = "certifications"
    OTHER = "other"


# =============================================================================
# STRUCTURAL MODEL
# =============================================================================


@dataclass
class Section:
    """
    A typed, ordered block of the source document.

    Attributes:
        section_type: Semantic type of the section
        content: Content lines in document order (bullet glyphs stripped)
        order: Position among sections, strictly increasing in first-occurrence order
        title: The header line that opened the section, verbatim
        is_bullet_list: Whether any content line carried a bullet glyph
        bullet_lines: Indices into content of lines that carried a bullet glyph
    """

    section_type: SectionType
    content: List[str] = field(default_factory=list)
    order: int = 0
    title: Optional[str] = None
    is_bullet_list: bool = False
    bullet_lines: List[int] = field(default_factory=list)

    def add_line(self, text: str, is_bullet: bool = False) -> None:
        """Append a content line, recording its bullet flag."""
        if is_bullet:
            self.is_bullet_list = True
            self.bullet_lines.append(len(self.content))
        self.content.append(text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.section_type.value,
            "title": self.title,
            "content": list(self.content),
            "order": self.order,
            "is_bullet_list": self.is_bullet_list,
            "bullet_lines": list(self.bullet_lines),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        return cls(
            section_type=SectionType(data["type"]),
            content=list(data.get("content") or []),
            order=int(data.get("order", 0)),
            title=data.get("title"),
            is_bullet_list=bool(data.get("is_bullet_list", False)),
            bullet_lines=[int(i) for i in data.get("bullet_lines") or []],
        )


@dataclass
class ResumeHeader:
    """Lines before the first recognized section header."""

    title: Optional[str] = None
    contact_info: Optional[List[str]] = None


@dataclass
class OriginalFormat:
    """Container type the resume was ingested from ('pdf', 'docx' or 'text')."""

    source_type: str


@dataclass
class ResumeStructure:
    """
    Ordered semantic section tree of a resume.

    Sections are kept in first-occurrence order and are never merged or reordered,
    even when two sections share a type.
    """

    header: ResumeHeader = field(default_factory=ResumeHeader)
    sections: List[Section] = field(default_factory=list)
    original_format: Optional[OriginalFormat] = None

    @property
    def source_type(self) -> Optional[str]:
        return self.original_format.source_type if self.original_format else None

    def sections_of_type(self, section_type: SectionType) -> List[Section]:
        """All sections of the given type, in document order."""
        return [s for s in self.sections if s.section_type == section_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": {
                "title": self.header.title,
                "contact_info": list(self.header.contact_info)
                if self.header.contact_info
                else None,
            },
            "sections": [s.to_dict() for s in self.sections],
            "original_format": {"source_type": self.original_format.source_type}
            if self.original_format
            else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeStructure":
        header = data.get("header") or {}
        original_format = data.get("original_format")
        return cls(
            header=ResumeHeader(
                title=header.get("title"),
                contact_info=list(header["contact_info"]) if header.get("contact_info") else None,
            ),
            sections=[Section.from_dict(s) for s in data.get("sections") or []],
            original_format=OriginalFormat(source_type=original_format["source_type"])
            if original_format
            else None,
        )


# =============================================================================
# SEMANTIC MODEL
# =============================================================================


@dataclass
class ExperienceEntry:
    """One job: title and company (never tailored), dates (never tailored), bullets."""

    job_title: str
    company: str
    bullets: List[str] = field(default_factory=list)
    dates: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_title": self.job_title,
            "company": self.company,
            "dates": self.dates,
            "bullets": list(self.bullets),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExperienceEntry":
        return cls(
            job_title=data.get("job_title") or "",
            company=data.get("company") or "",
            bullets=list(data.get("bullets") or []),
            dates=data.get("dates"),
        )


@dataclass
class ResumeContent:
    """Flat semantic content of a resume."""

    profile_title: str
    experience: List[ExperienceEntry] = field(default_factory=list)
    professional_summary: Optional[str] = None
    contact_info: Optional[str] = None
    skills: Optional[List[str]] = None
    education: Optional[List[str]] = None
    certifications: Optional[List[str]] = None

    def copy(self) -> "ResumeContent":
        """Deep copy; tailoring never mutates its input."""
        return copy.deepcopy(self)

    def total_bullets(self) -> int:
        return sum(len(entry.bullets) for entry in self.experience)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile_title": self.profile_title,
            "contact_info": self.contact_info,
            "professional_summary": self.professional_summary,
            "experience": [entry.to_dict() for entry in self.experience],
            "skills": list(self.skills) if self.skills is not None else None,
            "education": list(self.education) if self.education is not None else None,
            "certifications": list(self.certifications)
            if self.certifications is not None
            else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeContent":
        def _optional_list(key: str) -> Optional[List[str]]:
            value = data.get(key)
            return list(value) if value is not None else None

        return cls(
            profile_title=data.get("profile_title") or "",
            experience=[ExperienceEntry.from_dict(e) for e in data.get("experience") or []],
            professional_summary=data.get("professional_summary"),
            contact_info=data.get("contact_info"),
            skills=_optional_list("skills"),
            education=_optional_list("education"),
            certifications=_optional_list("certifications"),
        )


# =============================================================================
# PARAGRAPH METADATA (format-preserving rebuild only)
# =============================================================================


@dataclass(frozen=True)
class ParagraphSpacing:
    """Paragraph spacing in points; None means inherited from the style."""

    before: Optional[float] = None
    after: Optional[float] = None


@dataclass(frozen=True)
class ParagraphRecord:
    """
    Formatting snapshot of one source paragraph, captured once at ingestion.

    Attributes:
        text: Paragraph text (bullet glyph stripped)
        position_index: Zero-based position among captured paragraphs
        is_heading: Section heading (style or recognized header line)
        is_bullet: List item (Word numbering, list style or leading glyph)
        section_type: Section the paragraph belongs to ('header' before the first heading)
        indent_level: List nesting level (0 = top level)
        spacing: Spacing before/after in points
    """

    text: str
    position_index: int
    is_heading: bool
    is_bullet: bool
    section_type: SectionType
    indent_level: int = 0
    spacing: ParagraphSpacing = field(default_factory=ParagraphSpacing)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "position_index": self.position_index,
            "is_heading": self.is_heading,
            "is_bullet": self.is_bullet,
            "section_type": self.section_type.value,
            "indent_level": self.indent_level,
            "spacing": {"before": self.spacing.before, "after": self.spacing.after},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParagraphRecord":
        spacing = data.get("spacing") or {}
        return cls(
            text=data["text"],
            position_index=int(data["position_index"]),
            is_heading=bool(data["is_heading"]),
            is_bullet=bool(data["is_bullet"]),
            section_type=SectionType(data["section_type"]),
            indent_level=int(data.get("indent_level", 0)),
            spacing=ParagraphSpacing(before=spacing.get("before"), after=spacing.get("after")),
        )
