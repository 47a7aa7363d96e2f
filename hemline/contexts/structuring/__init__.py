"""
Structuring Context

Responsibilities:
- Infers an ordered, typed section tree from raw resume text
- Maps the section tree to flat semantic content (title, summary, experience, skills...)
- Owns the resume data model shared by the other contexts

Owns: Section-header classification, line scanning, content mapping, resume data model
Never: Calls the AI collaborator or writes output documents
"""

from hemline.contexts.structuring.content_mapper import structure_to_content
from hemline.contexts.structuring.data_structures import (
    ExperienceEntry,
    OriginalFormat,
    ParagraphRecord,
    ParagraphSpacing,
    ResumeContent,
    ResumeHeader,
    ResumeStructure,
    Section,
    SectionType,
)
from hemline.contexts.structuring.infer import infer_structure
from hemline.contexts.structuring.scanner import StructureScanner
from hemline.contexts.structuring.section_patterns import (
    KeywordSectionClassifier,
    SectionClassifier,
)

__all__ = [
    # Operations
    "infer_structure",
    "structure_to_content",
    # Classification
    "SectionClassifier",
    "KeywordSectionClassifier",
    "StructureScanner",
    # Data model
    "SectionType",
    "Section",
    "ResumeHeader",
    "OriginalFormat",
    "ResumeStructure",
    "ExperienceEntry",
    "ResumeContent",
    "ParagraphSpacing",
    "ParagraphRecord",
]
