"""
Ingestion: uploaded bytes -> resume text (+ optional paragraph records).
"""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from hemline.contexts.intake.docx_extractor import extract_docx_text
from hemline.contexts.intake.file_types import MAX_UPLOAD_BYTES, SupportedFileType, validate_upload
from hemline.contexts.intake.logger import _log_info
from hemline.contexts.intake.pdf_extractor import extract_pdf_text
from hemline.contexts.structuring.data_structures import ParagraphRecord
from hemline.contexts.structuring.section_patterns import SectionClassifier


@dataclass
class ResumeUpload:
    """An uploaded resume file."""

    filename: str
    data: bytes
    mime_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Path, mime_type: Optional[str] = None) -> "ResumeUpload":
        """Read a resume file from disk, guessing the MIME type from the extension."""
        path = Path(path)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)
        return cls(filename=path.name, data=path.read_bytes(), mime_type=mime_type)


@dataclass
class IngestionResult:
    """
    Output of ingestion.

    Attributes:
        text: Normalized resume text, one logical line per paragraph/line
        source_type: 'pdf' or 'docx'
        page_count: Number of pages (PDF only)
        paragraph_records: ParagraphRecords (DOCX with capture requested only)
        classifier: Section classifier to use for structure inference (None = default)
    """

    text: str
    source_type: str
    page_count: Optional[int] = None
    paragraph_records: Optional[List[ParagraphRecord]] = None
    classifier: Optional[SectionClassifier] = None


def ingest_resume(
    upload: ResumeUpload,
    capture_paragraphs: bool = False,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> IngestionResult:
    """
    Validate an upload and extract its text.

    Args:
        upload: Uploaded file
        capture_paragraphs: Capture ParagraphRecords (honored for DOCX only)
        max_bytes: Upload size limit

    Returns:
        IngestionResult

    Raises:
        ValidationError: Unsupported type, too large or empty upload
        UnrecognizedFormatError: Corrupted, password-protected or text-less document
    """
    file_type = validate_upload(upload.filename, len(upload.data), upload.mime_type, max_bytes)

    if file_type == SupportedFileType.PDF:
        extraction = extract_pdf_text(upload.data)
        result = IngestionResult(
            text=extraction.text,
            source_type=file_type.value,
            page_count=extraction.page_count,
        )
    else:
        extraction = extract_docx_text(upload.data, capture_paragraphs=capture_paragraphs)
        result = IngestionResult(
            text=extraction.text,
            source_type=file_type.value,
            paragraph_records=extraction.paragraph_records,
            classifier=extraction.classifier,
        )

    records_note = (
        f", {len(result.paragraph_records)} paragraph records"
        if result.paragraph_records is not None
        else ""
    )
    _log_info(
        f"Ingested {upload.filename} ({file_type.value.upper()}, {len(upload.data)} bytes): "
        f"{len(result.text.splitlines())} lines{records_note}"
    )
    return result
