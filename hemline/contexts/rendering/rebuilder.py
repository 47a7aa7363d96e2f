"""
Rebuild strategy selection and dispatch.

The strategy is an explicit tagged choice made from the source container, the target
container and whether paragraph records were captured:

    DOCX -> DOCX with records  => FORMAT_PRESERVING (in-place substitution)
    anything else              => STRUCTURAL (fresh layout)

Builders never return partial output: a builder failure or a zero-length result is
reported as UpstreamServiceError, and the paragraph-count invariant of the in-place
rebuild surfaces as IntegrityError unchanged.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from hemline.contexts.rendering.docx_builder import build_docx
from hemline.contexts.rendering.format_preserver import build_preserved_docx
from hemline.contexts.rendering.layout import plan_layout
from hemline.contexts.rendering.logger import _log_debug, _log_error, _log_success
from hemline.contexts.rendering.pdf_builder import build_pdf
from hemline.contexts.rendering.presets import RenderPreset, get_render_preset
from hemline.contexts.structuring.data_structures import (
    ParagraphRecord,
    ResumeContent,
    ResumeStructure,
)
from hemline.exceptions import HemlineError, UpstreamServiceError


class OutputFormat(Enum):
    DOCX = "docx"
    PDF = "pdf"


MIME_TYPES = {
    OutputFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    OutputFormat.PDF: "application/pdf",
}


class RebuildStrategy(Enum):
    """How an output document is produced."""

    STRUCTURAL = "structural"
    FORMAT_PRESERVING = "format_preserving"


@dataclass
class RenderedFile:
    """One rendered output document."""

    data: bytes
    output_format: OutputFormat
    strategy: RebuildStrategy

    @property
    def mime_type(self) -> str:
        return MIME_TYPES[self.output_format]

    @property
    def file_extension(self) -> str:
        return f".{self.output_format.value}"


def select_strategy(
    source_type: Optional[str], output_format: OutputFormat, has_records: bool
) -> RebuildStrategy:
    """
    Pick the rebuild strategy for one output format.

    Args:
        source_type: Container the resume was ingested from ('pdf', 'docx', ...)
        output_format: Target container
        has_records: Whether ParagraphRecords were captured at ingestion

    Returns:
        FORMAT_PRESERVING only for DOCX -> DOCX with records, otherwise STRUCTURAL
    """
    if (
        has_records
        and output_format == OutputFormat.DOCX
        and source_type == OutputFormat.DOCX.value
    ):
        return RebuildStrategy.FORMAT_PRESERVING
    return RebuildStrategy.STRUCTURAL


def rebuild_resume(
    structure: ResumeStructure,
    content: ResumeContent,
    output_format: OutputFormat,
    paragraph_records: Optional[List[ParagraphRecord]] = None,
    preset: Optional[RenderPreset] = None,
    source_docx: Optional[bytes] = None,
) -> RenderedFile:
    """
    Render tailored content to one output format.

    Args:
        structure: Original resume structure
        content: Tailored content
        output_format: Target container
        paragraph_records: Records captured at ingestion (enables in-place DOCX rebuild)
        preset: Render preset (default: HEMLINE_RENDER_PRESET)
        source_docx: Original DOCX bytes for in-place substitution

    Returns:
        RenderedFile

    Raises:
        IntegrityError: In-place rebuild changed the paragraph count
        UpstreamServiceError: Builder failed or produced an empty file
    """
    preset = preset or get_render_preset()
    strategy = select_strategy(structure.source_type, output_format, bool(paragraph_records))
    service = f"render:{output_format.value}"
    _log_debug(f"Rendering {output_format.value.upper()} with {strategy.value} strategy")

    try:
        if strategy == RebuildStrategy.FORMAT_PRESERVING:
            data = build_preserved_docx(
                paragraph_records, structure, content, preset, source_docx=source_docx
            )
        else:
            blocks = plan_layout(structure, content, preset)
            if output_format == OutputFormat.DOCX:
                data = build_docx(blocks, preset)
            else:
                data = build_pdf(blocks, preset)
    except HemlineError:
        raise
    except Exception as e:
        _log_error(f"{output_format.value.upper()} rendering failed: {e}")
        raise UpstreamServiceError(
            f"Failed to generate {output_format.value.upper()} file",
            service=service,
            detail=str(e),
        ) from e

    if not data:
        raise UpstreamServiceError(
            f"Generated {output_format.value.upper()} file is empty", service=service
        )

    _log_success(f"Rendered {output_format.value.upper()} ({len(data)} bytes, {strategy.value})")
    return RenderedFile(data=data, output_format=output_format, strategy=strategy)
