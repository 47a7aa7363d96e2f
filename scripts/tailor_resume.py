#!/usr/bin/env python3
"""
Resume Tailoring CLI

Upload -> preview -> generate flow for tailoring a resume to one job.

Commands:
    inspect - Show the inferred structure and content of a resume (no AI call)
    tailor  - Tailor a resume to a job and save the session plus a text preview
    render  - Render DOCX and PDF files from a reviewed session

Examples:\n

    tailor_resume.py inspect resume.docx

    tailor_resume.py tailor resume.docx --job-title "Backend Engineer" --job-description job.txt

    tailor_resume.py render outs/sessions/resume.yaml --output-dir outs/tailored --preset classic
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from hemline.contexts.intake import ResumeUpload, ingest_resume
from hemline.contexts.rendering import format_tailored_text, get_render_preset
from hemline.contexts.structuring import infer_structure, structure_to_content
from hemline.exceptions import HemlineError
from hemline.pipeline import load_session, render_session, run_pipeline, save_session
from hemline.utils.logger import setup_logger
from hemline.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
SESSIONS_PATH = Path(os.getenv("HEMLINE_SESSIONS_PATH", "outs/sessions"))


app = typer.Typer(
    help="Tailor a resume to a job description and rebuild it as DOCX/PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _fail(error: HemlineError) -> None:
    typer.secho(str(error), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("inspect")
def inspect_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume file (.pdf or .docx)", exists=True, dir_okay=False, resolve_path=True),
    ],
):
    """Print the inferred structure and content of a resume."""
    try:
        ingestion = ingest_resume(ResumeUpload.from_path(resume_file))
    except HemlineError as e:
        _fail(e)

    structure = infer_structure(
        ingestion.text, classifier=ingestion.classifier, source_type=ingestion.source_type
    )
    content = structure_to_content(structure)

    typer.secho("Structure", bold=True)
    typer.echo(OmegaConf.to_yaml(OmegaConf.create(structure.to_dict())).rstrip())
    typer.secho("\nContent", bold=True)
    typer.echo(format_tailored_text(content))


@app.command("tailor")
def tailor_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume file (.pdf or .docx)", exists=True, dir_okay=False, resolve_path=True),
    ],
    job_title: Annotated[str, typer.Option("--job-title", "-t", help="Target job title")],
    job_description: Annotated[
        Path,
        typer.Option(
            "--job-description",
            "-j",
            help="Text file with the job description",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    session: Annotated[
        Optional[Path],
        typer.Option("--session", "-s", help="Session YAML to write (default: SESSIONS_PATH/<resume>.yaml)"),
    ] = None,
    preserve_format: Annotated[
        bool,
        typer.Option(help="Capture paragraph formatting for an in-place DOCX rebuild"),
    ] = True,
):
    """Tailor a resume and save the session for review."""
    setup_logger("tailor", LOGS_PATH / now(), {"Resume": resume_file, "Job title": job_title})

    try:
        result = run_pipeline(
            ResumeUpload.from_path(resume_file),
            job_title,
            job_description.read_text(encoding="utf-8"),
            preserve_format=preserve_format,
        )
    except HemlineError as e:
        _fail(e)

    session_path = save_session(result.to_session(), session or SESSIONS_PATH / f"{resume_file.stem}.yaml")
    preview_path = session_path.with_suffix(".txt")
    preview_path.write_text(result.tailored_text + "\n", encoding="utf-8")

    coverage = result.keyword_coverage
    typer.echo(result.tailored_text)
    typer.echo(f"\nATS keyword coverage: {coverage.score}% ({len(coverage.matched)} matched)")
    if coverage.missing:
        typer.echo(f"Missing: {', '.join(coverage.missing)}")
    typer.echo(f"\n✓ Session saved to {session_path}")
    typer.echo(f"✓ Preview saved to {preview_path}")


@app.command("render")
def render_command(
    session_file: Annotated[
        Path,
        typer.Argument(help="Session YAML written by 'tailor'", exists=True, dir_okay=False, resolve_path=True),
    ],
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for the DOCX and PDF files", file_okay=False),
    ] = Path("outs/tailored"),
    preset: Annotated[
        Optional[str],
        typer.Option("--preset", "-p", help="Render preset for structural rebuilds"),
    ] = None,
):
    """Render DOCX and PDF from a reviewed session."""
    setup_logger("render", LOGS_PATH / now(), {"Session": session_file})

    try:
        render_preset = get_render_preset(preset)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        files = render_session(load_session(session_file), preset=render_preset)
    except HemlineError as e:
        _fail(e)

    output_dir.mkdir(parents=True, exist_ok=True)
    for rendered in (files.docx, files.pdf):
        output_path = output_dir / f"{session_file.stem}{rendered.file_extension}"
        output_path.write_bytes(rendered.data)
        typer.echo(f"✓ {output_path} ({rendered.strategy.value})")


if __name__ == "__main__":
    app()
