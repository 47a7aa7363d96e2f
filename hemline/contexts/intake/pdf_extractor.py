"""
PDF text extraction.

pdfplumber extracts the text; PyPDF2 probes encryption and page count before any
extraction is attempted.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import List

import pdfplumber
from PyPDF2 import PdfReader

from hemline.contexts.intake.logger import _log_debug
from hemline.exceptions import CorruptedDocumentError, EmptyDocumentError, PasswordProtectedError


@dataclass
class PDFExtraction:
    """Text extracted from a PDF."""

    text: str
    page_count: int


def normalize_lines(text: str) -> str:
    """Trim every line and drop blank ones."""
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def extract_pdf_text(data: bytes) -> PDFExtraction:
    """
    Extract normalized text from PDF bytes.

    Args:
        data: Raw PDF file contents

    Returns:
        PDFExtraction with one logical line per text line

    Raises:
        PasswordProtectedError: The PDF is encrypted
        CorruptedDocumentError: The container cannot be read
        EmptyDocumentError: No extractable text (e.g., scanned images only)
    """
    try:
        reader = PdfReader(BytesIO(data))
        is_encrypted = reader.is_encrypted
        page_count = 0 if is_encrypted else len(reader.pages)
    except Exception as e:
        raise CorruptedDocumentError("pdf", detail=str(e)) from e

    if is_encrypted:
        raise PasswordProtectedError("pdf")

    page_texts: List[str] = []
    try:
        with pdfplumber.open(BytesIO(data)) as pdf:
            for page in pdf.pages:
                page_texts.append(page.extract_text() or "")
    except Exception as e:
        raise CorruptedDocumentError("pdf", detail=str(e)) from e

    text = normalize_lines("\n".join(page_texts))
    if not text:
        raise EmptyDocumentError("pdf")

    _log_debug(f"Extracted {len(text.splitlines())} lines from {page_count} PDF page(s)")
    return PDFExtraction(text=text, page_count=page_count)
