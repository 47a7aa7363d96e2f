"""
Error taxonomy shared by every HEMLINE context.

All errors are fatal to the current pipeline run and are never retried. Each one
carries a specific, actionable message plus the context attributes needed to act on it.
"""

from typing import Optional


class HemlineError(Exception):
    """
    Base class for all pipeline errors.

    Attributes:
        message: Error description
        detail: Optional extra context appended to the rendered message
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail

        parts = [message]
        if detail:
            # Truncate detail if too long
            snippet = detail[:200] + "..." if len(detail) > 200 else detail
            parts.append(f"Detail: {snippet}")

        super().__init__("\n".join(parts))


# =============================================================================
# INPUT VALIDATION
# =============================================================================


class ValidationError(HemlineError):
    """
    Raised when a required input is missing, empty or malformed.

    Attributes:
        field: Name of the offending input (e.g., 'job_title', 'file')
    """

    def __init__(self, message: str, field: Optional[str] = None, detail: Optional[str] = None):
        self.field = field
        super().__init__(message, detail=detail)


class UnsupportedFileTypeError(ValidationError):
    """Raised when the uploaded file is neither PDF nor DOCX."""

    def __init__(self, filename: str, mime_type: Optional[str] = None):
        self.filename = filename
        self.mime_type = mime_type
        super().__init__(
            "Unsupported file type. Please upload a PDF or DOCX file.",
            field="file",
            detail=f"{filename} ({mime_type})" if mime_type else filename,
        )


class FileTooLargeError(ValidationError):
    """Raised when the uploaded file exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        max_mb = max_bytes / (1024 * 1024)
        super().__init__(f"File size exceeds {max_mb:.1f}MB limit.", field="file")


class EmptyFileError(ValidationError):
    """Raised when the uploaded file has zero bytes."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__("File is empty.", field="file", detail=filename)


# =============================================================================
# DOCUMENT FORMAT
# =============================================================================


class UnrecognizedFormatError(HemlineError):
    """Raised when the document cannot be turned into a usable resume structure."""

    pass


class CorruptedDocumentError(UnrecognizedFormatError):
    """Raised when the PDF/DOCX container cannot be opened."""

    def __init__(self, file_type: str, detail: Optional[str] = None):
        self.file_type = file_type
        super().__init__(
            f"Invalid {file_type.upper()} file. The file may be corrupted or not a valid "
            f"{file_type.upper()} document.",
            detail=detail,
        )


class PasswordProtectedError(UnrecognizedFormatError):
    """Raised when the document is encrypted."""

    def __init__(self, file_type: str):
        self.file_type = file_type
        super().__init__(
            f"{file_type.upper()} is password-protected. Please remove the password and try again."
        )


class EmptyDocumentError(UnrecognizedFormatError):
    """Raised when no text could be extracted from an otherwise valid document."""

    def __init__(self, file_type: str):
        self.file_type = file_type
        super().__init__(
            "Could not extract text from file. The file may be empty or contain only images."
        )


# =============================================================================
# COLLABORATORS AND INVARIANTS
# =============================================================================


class UpstreamServiceError(HemlineError):
    """
    Raised when the AI or rendering collaborator fails or returns a malformed result.

    Attributes:
        service: Collaborator identifier (e.g., 'ai', 'render:docx')
    """

    def __init__(self, message: str, service: str, detail: Optional[str] = None):
        self.service = service
        super().__init__(message, detail=detail)


class IntegrityError(HemlineError):
    """
    Raised when a format-preserving rebuild would change the paragraph count.

    Attributes:
        expected: Paragraph count captured at ingestion
        actual: Paragraph count the rebuild produced
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "Format preservation failed: paragraph count mismatch. "
            f"Original: {expected}, Generated: {actual}"
        )
