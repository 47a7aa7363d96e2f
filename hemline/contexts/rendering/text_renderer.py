"""
Plain-text preview of tailored content.

Rendered from a Jinja2 template so the preview layout can change without touching code.
The preview is what a caller reviews before asking for DOCX/PDF files.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from hemline.contexts.structuring.data_structures import ResumeContent

TEMPLATES_PATH = Path(__file__).parent / "templates"
TEXT_TEMPLATE = "tailored_resume.txt.jinja"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_PATH)),
    # Catches silent failures
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def format_tailored_text(content: ResumeContent, bullet_glyph: str = "•") -> str:
    """
    Render tailored content as plain text.

    Args:
        content: Tailored (or original) resume content
        bullet_glyph: Glyph printed before each experience bullet

    Returns:
        Plain-text resume; sections without content are omitted
    """
    template = _env.get_template(TEXT_TEMPLATE)
    return template.render(content=content, bullet_glyph=bullet_glyph).strip()
