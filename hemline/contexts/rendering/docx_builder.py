"""
Structural DOCX builder (python-docx).

Renders LayoutBlocks into a fresh Word document. Headings use the built-in "Heading 1"
style and bullets the "List Bullet" style, so the output re-ingests with the same
section and bullet structure.
"""

from io import BytesIO
from typing import List

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt

from hemline.contexts.rendering.layout import BlockKind, LayoutBlock
from hemline.contexts.rendering.presets import RenderPreset

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
}


def new_document(preset: RenderPreset):
    """Create an empty document with the preset's margins and body font."""
    doc = Document()
    for section in doc.sections:
        margin = Inches(preset.margin_inches)
        section.left_margin = section.right_margin = margin
        section.top_margin = section.bottom_margin = margin

    style = doc.styles["Normal"]
    style.font.name = preset.font_name
    style.font.size = Pt(preset.font_size.body)
    return doc


def document_bytes(doc) -> bytes:
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _add_block(doc, block: LayoutBlock, preset: RenderPreset) -> None:
    item_spacing = Pt(preset.spacing.item)

    if block.kind == BlockKind.TITLE:
        paragraph = doc.add_paragraph()
        run = paragraph.add_run(block.text)
        run.bold = True
        run.font.size = Pt(preset.font_size.title)
        paragraph.alignment = ALIGNMENTS.get(preset.alignment, WD_ALIGN_PARAGRAPH.LEFT)
        paragraph.paragraph_format.space_after = item_spacing

    elif block.kind == BlockKind.CONTACT:
        paragraph = doc.add_paragraph(block.text)
        paragraph.alignment = ALIGNMENTS.get(preset.alignment, WD_ALIGN_PARAGRAPH.LEFT)
        paragraph.paragraph_format.space_after = Pt(0)

    elif block.kind == BlockKind.HEADING:
        paragraph = doc.add_paragraph(style="Heading 1")
        run = paragraph.add_run(block.text)
        run.font.size = Pt(preset.font_size.heading)
        paragraph.paragraph_format.space_before = Pt(preset.spacing.section)
        paragraph.paragraph_format.space_after = item_spacing

    elif block.kind == BlockKind.ENTRY:
        paragraph = doc.add_paragraph()
        paragraph.add_run(block.text).bold = True
        if block.company:
            paragraph.add_run(" | ")
            paragraph.add_run(block.company).italic = True
        paragraph.paragraph_format.space_before = item_spacing
        paragraph.paragraph_format.space_after = Pt(0)
        if block.dates:
            dates = doc.add_paragraph()
            dates.add_run(block.dates).italic = True
            dates.paragraph_format.space_after = Pt(0)

    elif block.kind == BlockKind.BULLET:
        paragraph = doc.add_paragraph(block.text, style="List Bullet")
        paragraph.paragraph_format.space_after = Pt(0)

    else:
        paragraph = doc.add_paragraph(block.text)
        paragraph.paragraph_format.space_after = item_spacing


def build_docx(blocks: List[LayoutBlock], preset: RenderPreset) -> bytes:
    """
    Render layout blocks to DOCX bytes.

    Args:
        blocks: Planned layout
        preset: Render preset

    Returns:
        DOCX file contents
    """
    doc = new_document(preset)
    for block in blocks:
        _add_block(doc, block, preset)
    return document_bytes(doc)
