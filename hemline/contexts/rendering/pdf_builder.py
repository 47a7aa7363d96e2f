"""
Structural PDF builder (reportlab platypus).

Renders LayoutBlocks into a single-column PDF. All text is XML-escaped before it is
handed to reportlab's mini-markup Paragraph parser.
"""

from io import BytesIO
from typing import Dict, List, Tuple
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate

from hemline.contexts.rendering.layout import BlockKind, LayoutBlock
from hemline.contexts.rendering.presets import RenderPreset

# Standard PDF font families: regular -> (bold, italic)
FONT_VARIANTS = {
    "Helvetica": ("Helvetica-Bold", "Helvetica-Oblique"),
    "Times-Roman": ("Times-Bold", "Times-Italic"),
    "Courier": ("Courier-Bold", "Courier-Oblique"),
}

ALIGNMENTS = {"left": TA_LEFT, "center": TA_CENTER}


def font_variants(preset: RenderPreset) -> Tuple[str, str]:
    """Bold and italic font names for the preset's PDF font (Helvetica if unknown)."""
    return FONT_VARIANTS.get(preset.pdf_font_name, FONT_VARIANTS["Helvetica"])


def build_styles(preset: RenderPreset) -> Dict[str, ParagraphStyle]:
    """Paragraph styles for every block kind."""
    regular = preset.pdf_font_name
    bold, italic = font_variants(preset)
    body_size = preset.font_size.body
    alignment = ALIGNMENTS.get(preset.alignment, TA_LEFT)

    return {
        "title": ParagraphStyle(
            name="Title",
            fontName=bold,
            fontSize=preset.font_size.title,
            leading=preset.font_size.title * 1.2,
            alignment=alignment,
            spaceAfter=preset.spacing.item,
        ),
        "contact": ParagraphStyle(
            name="Contact",
            fontName=regular,
            fontSize=body_size,
            leading=body_size * 1.2,
            alignment=alignment,
        ),
        "heading": ParagraphStyle(
            name="Heading",
            fontName=bold,
            fontSize=preset.font_size.heading,
            leading=preset.font_size.heading * 1.2,
            spaceBefore=preset.spacing.section,
            spaceAfter=preset.spacing.item,
        ),
        "body": ParagraphStyle(
            name="Body",
            fontName=regular,
            fontSize=body_size,
            leading=body_size * 1.3,
            spaceAfter=preset.spacing.item,
        ),
        "entry": ParagraphStyle(
            name="Entry",
            fontName=regular,
            fontSize=body_size,
            leading=body_size * 1.3,
            spaceBefore=preset.spacing.item,
        ),
        "dates": ParagraphStyle(
            name="Dates",
            fontName=italic,
            fontSize=body_size,
            leading=body_size * 1.3,
        ),
        "bullet": ParagraphStyle(
            name="Bullet",
            fontName=regular,
            fontSize=body_size,
            leading=body_size * 1.3,
            leftIndent=15,
            bulletIndent=5,
        ),
    }


def _flowables(
    block: LayoutBlock, styles: Dict[str, ParagraphStyle], preset: RenderPreset
) -> List[Paragraph]:
    text = escape(block.text)

    if block.kind == BlockKind.TITLE:
        return [Paragraph(text, styles["title"])]
    if block.kind == BlockKind.CONTACT:
        return [Paragraph(text, styles["contact"])]
    if block.kind == BlockKind.HEADING:
        return [Paragraph(text, styles["heading"])]
    if block.kind == BlockKind.BULLET:
        return [Paragraph(text, styles["bullet"], bulletText=preset.bullet_glyph)]
    if block.kind == BlockKind.ENTRY:
        bold, italic = font_variants(preset)
        markup = f'<font name="{bold}">{text}</font>'
        if block.company:
            markup += f' | <font name="{italic}">{escape(block.company)}</font>'
        flowables = [Paragraph(markup, styles["entry"])]
        if block.dates:
            flowables.append(Paragraph(escape(block.dates), styles["dates"]))
        return flowables
    return [Paragraph(text, styles["body"])]


def build_pdf(blocks: List[LayoutBlock], preset: RenderPreset) -> bytes:
    """
    Render layout blocks to PDF bytes.

    Args:
        blocks: Planned layout
        preset: Render preset

    Returns:
        PDF file contents
    """
    buffer = BytesIO()
    margin = preset.margin_inches * inch
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        leftMargin=margin,
        rightMargin=margin,
        topMargin=margin,
        bottomMargin=margin,
    )

    styles = build_styles(preset)
    story = []
    for block in blocks:
        story.extend(_flowables(block, styles, preset))

    doc.build(story)
    return buffer.getvalue()
