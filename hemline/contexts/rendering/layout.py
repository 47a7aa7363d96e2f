"""
Format-neutral layout for structural rebuilds.

plan_layout walks structure.sections in original order and emits the blocks each
section should render as, using the tailored content for that section's type. The
DOCX and PDF builders only turn blocks into their own primitives, so both formats
always agree on what is shown and in which order.

Rules:
- Title and contact lines come first.
- A section whose type has no non-empty content is omitted entirely (heading too).
- Content for a type is emitted at the first section of that type; later sections of
  the same type are omitted.
- Header and other sections have no content and are never emitted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from hemline.contexts.rendering.presets import RenderPreset
from hemline.contexts.structuring.data_structures import (
    ResumeContent,
    ResumeStructure,
    Section,
    SectionType,
)

DEFAULT_SKILLS_SEPARATOR = " • "


class BlockKind(Enum):
    TITLE = "title"
    CONTACT = "contact"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    ENTRY = "entry"  # job title, company and dates of one experience entry
    BULLET = "bullet"


@dataclass(frozen=True)
class LayoutBlock:
    """
    One renderable unit.

    Attributes:
        kind: What the block is
        text: Main text (job title for ENTRY blocks)
        section_type: Section the block belongs to (None for title/contact)
        company: Company name (ENTRY only)
        dates: Date range (ENTRY only)
    """

    kind: BlockKind
    text: str
    section_type: Optional[SectionType] = None
    company: Optional[str] = None
    dates: Optional[str] = None


def _heading_text(section: Section, uppercase: bool) -> str:
    title = section.title or section.section_type.value.title()
    return title.upper() if uppercase else title


def _section_body(
    section_type: SectionType, content: ResumeContent, skills_separator: str
) -> List[LayoutBlock]:
    blocks = []

    if section_type == SectionType.SUMMARY and content.professional_summary:
        for line in content.professional_summary.split("\n"):
            if line.strip():
                blocks.append(LayoutBlock(BlockKind.PARAGRAPH, line.strip(), section_type))

    elif section_type == SectionType.EXPERIENCE:
        for entry in content.experience:
            blocks.append(
                LayoutBlock(
                    BlockKind.ENTRY,
                    entry.job_title,
                    section_type,
                    company=entry.company or None,
                    dates=entry.dates,
                )
            )
            blocks.extend(LayoutBlock(BlockKind.BULLET, b, section_type) for b in entry.bullets)

    elif section_type == SectionType.SKILLS and content.skills:
        blocks.append(
            LayoutBlock(BlockKind.PARAGRAPH, skills_separator.join(content.skills), section_type)
        )

    elif section_type == SectionType.EDUCATION and content.education:
        blocks.extend(LayoutBlock(BlockKind.PARAGRAPH, e, section_type) for e in content.education)

    elif section_type == SectionType.CERTIFICATIONS and content.certifications:
        blocks.extend(
            LayoutBlock(BlockKind.PARAGRAPH, c, section_type) for c in content.certifications
        )

    return blocks


def plan_layout(
    structure: ResumeStructure,
    content: ResumeContent,
    preset: Optional[RenderPreset] = None,
) -> List[LayoutBlock]:
    """
    Plan the blocks of a structural rebuild.

    Args:
        structure: Original resume structure (section order and titles)
        content: Tailored content
        preset: Render preset (heading case, skills separator)

    Returns:
        Ordered list of LayoutBlocks
    """
    uppercase = preset.uppercase_headings if preset else True
    separator = preset.skills_separator if preset else DEFAULT_SKILLS_SEPARATOR

    blocks: List[LayoutBlock] = []

    if content.profile_title:
        blocks.append(LayoutBlock(BlockKind.TITLE, content.profile_title))

    if content.contact_info:
        for line in content.contact_info.split("\n"):
            if line.strip():
                blocks.append(LayoutBlock(BlockKind.CONTACT, line.strip()))

    rendered_types = set()
    for section in structure.sections:
        if section.section_type in rendered_types:
            continue
        rendered_types.add(section.section_type)

        body = _section_body(section.section_type, content, separator)
        if not body:
            continue

        blocks.append(
            LayoutBlock(BlockKind.HEADING, _heading_text(section, uppercase), section.section_type)
        )
        blocks.extend(body)

    return blocks
