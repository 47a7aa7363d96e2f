"""
DOCX text extraction and paragraph formatting capture.

Uses python-docx. Every non-empty body paragraph becomes one line of resume text; list
paragraphs (Word numbering or a List* style) are prefixed with a bullet glyph so the
structure inferencer sees them as bullets even though the glyph is not in the text.

When requested, one ParagraphRecord is captured per non-empty paragraph for the
format-preserving rebuild. Section types come from the same StructureScanner the
inferencer uses, so records and the inferred structure always agree. Heading styles
only set a record's is_heading flag; a styled line opens a section only when the
classifier recognizes it, so job lines styled as headings stay experience content.
"""

import re
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from hemline.contexts.intake.logger import _log_debug
from hemline.contexts.structuring.data_structures import ParagraphRecord, ParagraphSpacing
from hemline.contexts.structuring.scanner import LineKind, StructureScanner
from hemline.contexts.structuring.section_patterns import (
    KeywordSectionClassifier,
    SectionClassifier,
    starts_with_bullet,
    strip_bullet_glyph,
)
from hemline.exceptions import CorruptedDocumentError, EmptyDocumentError, PasswordProtectedError

# Encrypted OOXML files are wrapped in an OLE compound document
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0"

LIST_BULLET_PREFIX = "• "

_WHITESPACE_RE = re.compile(r"\s+")
_LIST_STYLE_LEVEL_RE = re.compile(r"^List(?: \w+)? (\d)$")


@dataclass(frozen=True)
class DocxParagraph:
    """Text and formatting hints read from one python-docx paragraph."""

    text: str
    style_name: str
    is_list: bool
    indent_level: int
    spacing: ParagraphSpacing

    @property
    def is_heading_style(self) -> bool:
        return self.style_name.startswith("Heading")

    @property
    def line(self) -> str:
        """Text line fed to the structure inferencer."""
        if self.is_list and not starts_with_bullet(self.text):
            return LIST_BULLET_PREFIX + self.text
        return self.text


@dataclass
class DOCXExtraction:
    """
    Text extracted from a DOCX.

    Attributes:
        text: Non-empty paragraphs joined by newlines
        classifier: Section classifier the records were scanned with; use it
            when inferring structure from text so sections match the records
        paragraph_records: Per-paragraph formatting (only when capture was requested)
    """

    text: str
    classifier: SectionClassifier
    paragraph_records: Optional[List[ParagraphRecord]] = None


# =============================================================================
# PARAGRAPH READING
# =============================================================================


def _points(length) -> Optional[float]:
    return round(length.pt, 2) if length is not None else None


def _read_paragraph(paragraph) -> DocxParagraph:
    text = _WHITESPACE_RE.sub(" ", paragraph.text).strip()
    style_name = paragraph.style.name if paragraph.style is not None else ""

    indent_level = 0
    is_list = False

    p_pr = paragraph._p.pPr
    num_pr = p_pr.numPr if p_pr is not None else None
    if num_pr is not None:
        is_list = True
        if num_pr.ilvl is not None and num_pr.ilvl.val is not None:
            indent_level = int(num_pr.ilvl.val)

    if style_name.startswith("List"):
        is_list = True
        level_match = _LIST_STYLE_LEVEL_RE.match(style_name)
        if level_match and num_pr is None:
            indent_level = int(level_match.group(1)) - 1

    paragraph_format = paragraph.paragraph_format
    spacing = ParagraphSpacing(
        before=_points(paragraph_format.space_before),
        after=_points(paragraph_format.space_after),
    )

    return DocxParagraph(
        text=text,
        style_name=style_name,
        is_list=is_list,
        indent_level=indent_level,
        spacing=spacing,
    )


def _open_document(data: bytes):
    if data[: len(OLE_SIGNATURE)] == OLE_SIGNATURE:
        raise PasswordProtectedError("docx")

    try:
        return Document(BytesIO(data))
    except (BadZipFile, PackageNotFoundError, KeyError, ValueError) as e:
        raise CorruptedDocumentError("docx", detail=str(e)) from e


# =============================================================================
# RECORD CAPTURE
# =============================================================================


def capture_paragraph_records(
    paragraphs: List[DocxParagraph], classifier: SectionClassifier
) -> List[ParagraphRecord]:
    """
    Build one immutable ParagraphRecord per paragraph.

    Args:
        paragraphs: Non-empty paragraphs in document order
        classifier: Classifier used for structure inference of the same document

    Returns:
        Records with position_index 0..n-1
    """
    records = []
    scanned_lines = StructureScanner(classifier).scan(p.line for p in paragraphs)

    for position, (para, scanned) in enumerate(zip(paragraphs, scanned_lines)):
        has_glyph = starts_with_bullet(para.text)
        records.append(
            ParagraphRecord(
                text=strip_bullet_glyph(para.text) if has_glyph else para.text,
                position_index=position,
                is_heading=scanned.kind == LineKind.SECTION_HEADER or para.is_heading_style,
                is_bullet=para.is_list or has_glyph,
                section_type=scanned.section_type,
                indent_level=para.indent_level,
                spacing=para.spacing,
            )
        )

    return records


def extract_docx_text(
    data: bytes,
    capture_paragraphs: bool = False,
    classifier: Optional[SectionClassifier] = None,
) -> DOCXExtraction:
    """
    Extract text (and optionally paragraph records) from DOCX bytes.

    Args:
        data: Raw DOCX file contents
        capture_paragraphs: Also capture ParagraphRecords for in-place rebuild
        classifier: Section classifier (default: keyword heuristic)

    Returns:
        DOCXExtraction

    Raises:
        PasswordProtectedError: The DOCX is encrypted
        CorruptedDocumentError: The container cannot be opened
        EmptyDocumentError: No non-empty paragraphs
    """
    document = _open_document(data)

    paragraphs = [p for p in map(_read_paragraph, document.paragraphs) if p.text]
    if not paragraphs:
        raise EmptyDocumentError("docx")

    classifier = classifier or KeywordSectionClassifier()

    records = None
    if capture_paragraphs:
        records = capture_paragraph_records(paragraphs, classifier)

    _log_debug(
        f"Extracted {len(paragraphs)} DOCX paragraphs "
        f"({sum(p.is_list for p in paragraphs)} list items, "
        f"{sum(p.is_heading_style for p in paragraphs)} heading-styled)"
    )

    return DOCXExtraction(
        text="\n".join(p.line for p in paragraphs),
        classifier=classifier,
        paragraph_records=records,
    )
