"""
Intake Context

Responsibilities:
- Validates uploaded resume files (type, size, emptiness)
- Extracts plain text from PDF and DOCX containers
- Captures per-paragraph formatting from DOCX for the format-preserving rebuild

Owns: File type detection, text extraction, paragraph record capture
Never: Interprets resume sections or modifies content
"""

from hemline.contexts.intake.file_types import (
    SupportedFileType,
    detect_file_type,
    validate_upload,
)
from hemline.contexts.intake.ingest import IngestionResult, ResumeUpload, ingest_resume

__all__ = [
    "SupportedFileType",
    "detect_file_type",
    "validate_upload",
    "ResumeUpload",
    "IngestionResult",
    "ingest_resume",
]
