"""
Pipeline orchestrator: upload -> tailored content -> (on request) output files.

Stages only move forward:

    INGESTED -> STRUCTURED -> TAILORED -> FILES_GENERATED

run_pipeline() covers the first three. Rendering is a separate, explicit call
(render_files) so a caller can review the tailored preview before paying for DOCX/PDF
generation, possibly in a later process via a saved session.

The first error halts the run; nothing is retried and no partial result is returned.
"""

import base64
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from omegaconf import OmegaConf

from hemline.contexts.intake import ResumeUpload, ingest_resume
from hemline.contexts.rendering import (
    OutputFormat,
    RenderedFile,
    RenderPreset,
    format_tailored_text,
    rebuild_resume,
)
from hemline.contexts.structuring import (
    ParagraphRecord,
    ResumeContent,
    ResumeStructure,
    infer_structure,
    structure_to_content,
)
from hemline.contexts.targeting import (
    AtsKeywords,
    KeywordCoverage,
    apply_scoped_tailoring,
    keyword_coverage,
    request_tailoring,
)
from hemline.exceptions import HemlineError, UnrecognizedFormatError, ValidationError
from hemline.utils.event_logging import log_pipeline_event
from hemline.utils.llm import LLMProvider

CONTEXT_PREFIX = "[pipeline]"
EVENT_SOURCE = "pipeline"


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


# =============================================================================
# RUN STATE
# =============================================================================


class PipelineStage(Enum):
    INGESTED = "ingested"
    STRUCTURED = "structured"
    TAILORED = "tailored"
    FILES_GENERATED = "files_generated"


STAGE_ORDER = list(PipelineStage)


@dataclass
class PipelineRun:
    """
    Identity and stage of one pipeline run.

    Attributes:
        run_id: Short random identifier used in logs and events
        stage: Last stage reached (None before ingestion completes)
    """

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    stage: Optional[PipelineStage] = None

    def advance(self, new_stage: PipelineStage, **extra_fields) -> None:
        """
        Move to a later stage, logging the transition.

        Raises:
            ValueError: If new_stage is not after the current stage
        """
        if self.stage is not None and STAGE_ORDER.index(new_stage) <= STAGE_ORDER.index(self.stage):
            raise ValueError(
                f"Run {self.run_id} cannot move from {self.stage.value} to {new_stage.value}"
            )

        old_stage = self.stage
        self.stage = new_stage
        _log_info(f"Run {self.run_id}: {old_stage.value if old_stage else 'new'} -> {new_stage.value}")
        log_pipeline_event(
            event_type="stage_change",
            run_id=self.run_id,
            source=EVENT_SOURCE,
            old_stage=old_stage.value if old_stage else None,
            new_stage=new_stage.value,
            **extra_fields,
        )

    def fail(self, error: HemlineError) -> None:
        """Record a fatal error at the current stage."""
        stage = self.stage.value if self.stage else "new"
        _log_error(f"Run {self.run_id} failed after {stage}: {error.message}")
        log_pipeline_event(
            event_type="run_failed",
            run_id=self.run_id,
            source=EVENT_SOURCE,
            stage=stage,
            error_type=type(error).__name__,
            message=error.message,
        )


# =============================================================================
# RESULTS
# =============================================================================


@dataclass
class TailoringSession:
    """
    Accepted tailoring state needed to render files later.

    Serialized as YAML with OmegaConf; the original DOCX (if kept) is base64-encoded.
    """

    run_id: str
    structure: ResumeStructure
    tailored_content: ResumeContent
    paragraph_records: Optional[List[ParagraphRecord]] = None
    source_docx: Optional[bytes] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "structure": self.structure.to_dict(),
            "tailored_content": self.tailored_content.to_dict(),
            "paragraph_records": [r.to_dict() for r in self.paragraph_records]
            if self.paragraph_records is not None
            else None,
            "source_docx": base64.b64encode(self.source_docx).decode("ascii")
            if self.source_docx
            else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TailoringSession":
        records = data.get("paragraph_records")
        source_docx = data.get("source_docx")
        return cls(
            run_id=data["run_id"],
            structure=ResumeStructure.from_dict(data["structure"]),
            tailored_content=ResumeContent.from_dict(data["tailored_content"]),
            paragraph_records=[ParagraphRecord.from_dict(r) for r in records]
            if records is not None
            else None,
            source_docx=base64.b64decode(source_docx) if source_docx else None,
        )


@dataclass
class PipelineResult:
    """Everything a caller needs to review tailoring and request files."""

    run: PipelineRun
    structure: ResumeStructure
    original_content: ResumeContent
    tailored_content: ResumeContent
    tailored_text: str
    source_type: str
    ats_keywords: AtsKeywords
    keyword_coverage: KeywordCoverage
    paragraph_records: Optional[List[ParagraphRecord]] = None
    source_docx: Optional[bytes] = None

    def to_session(self) -> TailoringSession:
        return TailoringSession(
            run_id=self.run.run_id,
            structure=self.structure,
            tailored_content=self.tailored_content,
            paragraph_records=self.paragraph_records,
            source_docx=self.source_docx,
        )


@dataclass
class RenderedFiles:
    docx: RenderedFile
    pdf: RenderedFile


def save_session(session: TailoringSession, path: Path) -> Path:
    """Write a session to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(OmegaConf.create(session.to_dict()), path)
    return path


def load_session(path: Path) -> TailoringSession:
    """Read a session written by save_session."""
    config = OmegaConf.load(path)
    # Resume text may contain "${...}"; never resolve interpolations
    return TailoringSession.from_dict(OmegaConf.to_container(config, resolve=False))


# =============================================================================
# OPERATIONS
# =============================================================================


def _require_text(value: Optional[str], field_name: str, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required", field=field_name)
    return value.strip()


def run_pipeline(
    upload: ResumeUpload,
    job_title: str,
    job_description: str,
    provider: Optional[LLMProvider] = None,
    preserve_format: bool = True,
) -> PipelineResult:
    """
    Ingest, structure and tailor a resume for one job.

    Args:
        upload: Resume file (PDF or DOCX)
        job_title: Target job title
        job_description: Target job description
        provider: LLM provider (default: from environment)
        preserve_format: Capture paragraph records for an in-place DOCX rebuild

    Returns:
        PipelineResult at stage TAILORED

    Raises:
        ValidationError: Missing job title/description or invalid upload
        UnrecognizedFormatError: Unreadable document, no sections or no experience entries
        UpstreamServiceError: AI collaborator failure or malformed response
    """
    job_title = _require_text(job_title, "job_title", "Job title")
    job_description = _require_text(job_description, "job_description", "Job description")

    run = PipelineRun()
    _log_info(f"Run {run.run_id}: tailoring {upload.filename} for '{job_title}'")

    try:
        ingestion = ingest_resume(upload, capture_paragraphs=preserve_format)
        run.advance(PipelineStage.INGESTED, source_type=ingestion.source_type)

        structure = infer_structure(
            ingestion.text, classifier=ingestion.classifier, source_type=ingestion.source_type
        )
        if not structure.sections:
            raise UnrecognizedFormatError(
                "Resume format not recognized: no section headings recognized"
            )

        original_content = structure_to_content(structure)
        if not original_content.experience:
            raise UnrecognizedFormatError(
                "Resume format not recognized: no experience entries found"
            )
        run.advance(
            PipelineStage.STRUCTURED,
            sections=len(structure.sections),
            experience_entries=len(original_content.experience),
        )

        tailoring = request_tailoring(job_title, job_description, ingestion.text, provider=provider)
        tailored_content = apply_scoped_tailoring(structure, original_content, tailoring)
        coverage = keyword_coverage(tailored_content, tailoring.ats_keywords)
        run.advance(PipelineStage.TAILORED, keyword_score=coverage.score)
    except HemlineError as e:
        run.fail(e)
        raise

    keep_source = ingestion.paragraph_records is not None
    return PipelineResult(
        run=run,
        structure=structure,
        original_content=original_content,
        tailored_content=tailored_content,
        tailored_text=format_tailored_text(tailored_content),
        source_type=ingestion.source_type,
        ats_keywords=tailoring.ats_keywords,
        keyword_coverage=coverage,
        paragraph_records=ingestion.paragraph_records,
        source_docx=upload.data if keep_source else None,
    )


def render_files(
    structure: ResumeStructure,
    tailored_content: ResumeContent,
    paragraph_records: Optional[List[ParagraphRecord]] = None,
    preset: Optional[RenderPreset] = None,
    run: Optional[PipelineRun] = None,
    source_docx: Optional[bytes] = None,
) -> RenderedFiles:
    """
    Render accepted tailored content to DOCX and PDF.

    Args:
        structure: Original resume structure
        tailored_content: Tailored content the caller accepted
        paragraph_records: Records captured at ingestion (DOCX in-place rebuild)
        preset: Render preset for structural rebuilds
        run: Pipeline run to advance to FILES_GENERATED
        source_docx: Original DOCX bytes for in-place substitution

    Returns:
        RenderedFiles

    Raises:
        ValidationError: Tailored content has no profile title
        IntegrityError: In-place rebuild changed the paragraph count
        UpstreamServiceError: A builder failed or produced an empty file
    """
    if not tailored_content.profile_title or not tailored_content.profile_title.strip():
        raise ValidationError("Profile title is required to render files", field="profile_title")

    try:
        files = RenderedFiles(
            docx=rebuild_resume(
                structure,
                tailored_content,
                OutputFormat.DOCX,
                paragraph_records=paragraph_records,
                preset=preset,
                source_docx=source_docx,
            ),
            pdf=rebuild_resume(structure, tailored_content, OutputFormat.PDF, preset=preset),
        )
    except HemlineError as e:
        if run is not None:
            run.fail(e)
        raise

    if run is not None:
        run.advance(
            PipelineStage.FILES_GENERATED,
            docx_strategy=files.docx.strategy.value,
            docx_bytes=len(files.docx.data),
            pdf_bytes=len(files.pdf.data),
        )
    _log_success(f"Rendered DOCX ({files.docx.strategy.value}) and PDF")
    return files


def render_session(
    session: TailoringSession, preset: Optional[RenderPreset] = None
) -> RenderedFiles:
    """Render a saved session, resuming its run at stage TAILORED."""
    run = PipelineRun(run_id=session.run_id, stage=PipelineStage.TAILORED)
    return render_files(
        session.structure,
        session.tailored_content,
        paragraph_records=session.paragraph_records,
        preset=preset,
        run=run,
        source_docx=session.source_docx,
    )
