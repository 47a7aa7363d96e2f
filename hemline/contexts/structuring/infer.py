"""
Structure inference: raw resume text -> ResumeStructure.

Deterministic and side-effect free apart from debug logging. Sections are created in
first-occurrence order; two headers of the same type produce two sections.
"""

from typing import Optional

from hemline.contexts.structuring.data_structures import (
    OriginalFormat,
    ResumeHeader,
    ResumeStructure,
    Section,
)
from hemline.contexts.structuring.logger import _log_debug
from hemline.contexts.structuring.scanner import LineKind, StructureScanner
from hemline.contexts.structuring.section_patterns import SectionClassifier


def infer_structure(
    text: str,
    classifier: Optional[SectionClassifier] = None,
    source_type: Optional[str] = None,
) -> ResumeStructure:
    """
    Infer the section structure of a resume from plain text.

    Args:
        text: Resume text, one logical line per paragraph
        classifier: Section-header classifier (default: keyword heuristic)
        source_type: Container the text came from ('pdf', 'docx', 'text')

    Returns:
        ResumeStructure with header (title, contact lines) and ordered sections.
        If no section header is recognized the whole document is header and
        sections is empty.
    """
    header = ResumeHeader()
    contact_info = []
    sections = []
    dropped_header_lines = 0

    for scanned in StructureScanner(classifier).scan(text.split("\n")):
        if scanned.kind == LineKind.SECTION_HEADER:
            sections.append(
                Section(
                    section_type=scanned.section_type,
                    title=scanned.text,
                    order=len(sections),
                )
            )
        elif scanned.kind == LineKind.CONTACT:
            contact_info.append(scanned.text)
        elif scanned.kind == LineKind.TITLE:
            header.title = scanned.text
        elif scanned.kind == LineKind.HEADER_TEXT:
            dropped_header_lines += 1
        else:
            sections[-1].add_line(scanned.text, is_bullet=scanned.kind == LineKind.BULLET)

    header.contact_info = contact_info or None

    _log_debug(
        f"Inferred {len(sections)} sections "
        f"({', '.join(s.section_type.value for s in sections) or 'none'}); "
        f"{len(contact_info)} contact lines, {dropped_header_lines} extra header lines"
    )

    return ResumeStructure(
        header=header,
        sections=sections,
        original_format=OriginalFormat(source_type=source_type) if source_type else None,
    )
