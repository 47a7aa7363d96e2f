"""
Rendering Context

Responsibilities:
- Rebuilds tailored resumes as DOCX and PDF files
- Chooses between structural and format-preserving (in-place) rebuilds
- Enforces the paragraph-count invariant of in-place rebuilds
- Renders the plain-text preview of tailored content

Owns: Rebuild strategies, layout planning, render presets, output bytes
Never: Decides what content is tailored or calls the AI collaborator
"""

from hemline.contexts.rendering.format_preserver import (
    build_preserved_docx,
    substitute_paragraph_texts,
)
from hemline.contexts.rendering.layout import BlockKind, LayoutBlock, plan_layout
from hemline.contexts.rendering.presets import RenderPreset, get_render_preset, load_render_presets
from hemline.contexts.rendering.rebuilder import (
    OutputFormat,
    RebuildStrategy,
    RenderedFile,
    rebuild_resume,
    select_strategy,
)
from hemline.contexts.rendering.text_renderer import format_tailored_text

__all__ = [
    # Rebuild
    "rebuild_resume",
    "select_strategy",
    "RebuildStrategy",
    "OutputFormat",
    "RenderedFile",
    # Structural layout
    "plan_layout",
    "LayoutBlock",
    "BlockKind",
    # In-place
    "substitute_paragraph_texts",
    "build_preserved_docx",
    # Presets
    "RenderPreset",
    "get_render_preset",
    "load_render_presets",
    # Preview
    "format_tailored_text",
]
