"""Unit tests for rebuild strategy selection and dispatch."""

import pytest

from hemline.contexts.rendering import (
    OutputFormat,
    RebuildStrategy,
    get_render_preset,
    rebuild_resume,
    select_strategy,
)
from hemline.contexts.rendering import rebuilder
from hemline.contexts.structuring import infer_structure, structure_to_content
from hemline.exceptions import IntegrityError, UpstreamServiceError


@pytest.mark.unit
@pytest.mark.parametrize(
    "source_type,output_format,has_records,expected",
    [
        ("docx", OutputFormat.DOCX, True, RebuildStrategy.FORMAT_PRESERVING),
        ("docx", OutputFormat.DOCX, False, RebuildStrategy.STRUCTURAL),
        ("docx", OutputFormat.PDF, True, RebuildStrategy.STRUCTURAL),
        ("pdf", OutputFormat.DOCX, True, RebuildStrategy.STRUCTURAL),
        ("pdf", OutputFormat.PDF, False, RebuildStrategy.STRUCTURAL),
        (None, OutputFormat.DOCX, True, RebuildStrategy.STRUCTURAL),
    ],
)
def test_select_strategy(source_type, output_format, has_records, expected):
    assert select_strategy(source_type, output_format, has_records) == expected


@pytest.fixture
def tailored(scenario_text):
    structure = infer_structure(scenario_text, source_type="pdf")
    return structure, structure_to_content(structure)


@pytest.mark.unit
def test_structural_docx_and_pdf(tailored):
    structure, content = tailored

    docx = rebuild_resume(structure, content, OutputFormat.DOCX)
    pdf = rebuild_resume(structure, content, OutputFormat.PDF, preset=get_render_preset("classic"))

    assert docx.data[:2] == b"PK"
    assert docx.strategy == RebuildStrategy.STRUCTURAL
    assert docx.file_extension == ".docx"
    assert pdf.data.startswith(b"%PDF")
    assert pdf.mime_type == "application/pdf"


@pytest.mark.unit
def test_builder_failure_becomes_upstream_error(tailored, monkeypatch):
    structure, content = tailored

    def broken(blocks, preset):
        raise RuntimeError("font missing")

    monkeypatch.setattr(rebuilder, "build_pdf", broken)

    with pytest.raises(UpstreamServiceError) as exc_info:
        rebuild_resume(structure, content, OutputFormat.PDF)

    assert exc_info.value.service == "render:pdf"


@pytest.mark.unit
def test_empty_output_is_rejected(tailored, monkeypatch):
    structure, content = tailored
    monkeypatch.setattr(rebuilder, "build_docx", lambda blocks, preset: b"")

    with pytest.raises(UpstreamServiceError, match="empty"):
        rebuild_resume(structure, content, OutputFormat.DOCX)


@pytest.mark.unit
def test_integrity_error_is_not_wrapped(tailored, monkeypatch):
    structure, content = tailored
    structure.original_format.source_type = "docx"

    def mismatched(*args, **kwargs):
        raise IntegrityError(10, 9)

    monkeypatch.setattr(rebuilder, "build_preserved_docx", mismatched)

    with pytest.raises(IntegrityError):
        rebuild_resume(structure, content, OutputFormat.DOCX, paragraph_records=["record"])
