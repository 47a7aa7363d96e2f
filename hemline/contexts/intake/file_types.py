"""
Upload validation: file type detection and size limits.
"""

import os
from enum import Enum
from typing import Optional

from dotenv import load_dotenv

from hemline.exceptions import EmptyFileError, FileTooLargeError, UnsupportedFileTypeError

load_dotenv()

MAX_UPLOAD_BYTES = int(float(os.getenv("HEMLINE_MAX_UPLOAD_MB", "10")) * 1024 * 1024)

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class SupportedFileType(Enum):
    """Document containers the pipeline can ingest and render."""

    PDF = "pdf"
    DOCX = "docx"


def detect_file_type(filename: str, mime_type: Optional[str] = None) -> Optional[SupportedFileType]:
    """
    Detect file type from extension or MIME type.

    Args:
        filename: Uploaded file name
        mime_type: Declared MIME type, if any

    Returns:
        SupportedFileType, or None if neither extension nor MIME type is supported
    """
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""

    if extension == "pdf" or mime_type == PDF_MIME_TYPE:
        return SupportedFileType.PDF

    if extension == "docx" or mime_type == DOCX_MIME_TYPE:
        return SupportedFileType.DOCX

    return None


def validate_upload(
    filename: str,
    size_bytes: int,
    mime_type: Optional[str] = None,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> SupportedFileType:
    """
    Validate an upload before parsing.

    Checks run in order: type, size limit, emptiness.

    Returns:
        Detected SupportedFileType

    Raises:
        UnsupportedFileTypeError: Not a PDF or DOCX
        FileTooLargeError: Larger than max_bytes
        EmptyFileError: Zero bytes
    """
    file_type = detect_file_type(filename, mime_type)
    if file_type is None:
        raise UnsupportedFileTypeError(filename, mime_type)

    if size_bytes > max_bytes:
        raise FileTooLargeError(size_bytes, max_bytes)

    if size_bytes == 0:
        raise EmptyFileError(filename)

    return file_type
