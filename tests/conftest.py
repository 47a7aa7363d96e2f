"""Shared fixtures: scenario resume text, a fake LLM provider and DOCX builders."""

import json
from io import BytesIO

import pytest
from docx import Document

from hemline.utils.llm import LLMProvider, LLMResponse

SCENARIO_TEXT = (
    "John Doe\n"
    "john@x.com\n"
    "SUMMARY\n"
    "Experienced engineer.\n"
    "EXPERIENCE\n"
    "Backend Engineer | Acme Corp\n"
    "• Built APIs\n"
    "• Reduced latency"
)

# (text, style) pairs of a small but complete resume
RESUME_PARAGRAPHS = [
    ("John Doe", "Normal"),
    ("john@x.com | 555-123-4567", "Normal"),
    ("SUMMARY", "Heading 1"),
    ("Experienced engineer. Builds reliable services.", "Normal"),
    ("EXPERIENCE", "Heading 1"),
    ("Backend Engineer | Acme Corp", "Normal"),
    ("Jan 2020 - Present", "Normal"),
    ("Built APIs", "List Bullet"),
    ("Reduced latency", "List Bullet"),
    ("Data Engineer | Beta LLC", "Normal"),
    ("Wrote pipelines", "List Bullet"),
    ("SKILLS", "Heading 1"),
    ("Python, Go, SQL", "Normal"),
    ("EDUCATION", "Heading 1"),
    ("BS Computer Science, State University", "Normal"),
]


class FakeProvider(LLMProvider):
    """LLM provider returning a canned response (or raising a canned error)."""

    _provider_prefix = "fake"

    def __init__(self, content: str = "", error: Exception = None):
        self.content = content
        self.error = error
        self.calls = []
        self.update_model("test-model")

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model=self.model, input_tokens=10, output_tokens=20)


def build_docx(paragraphs) -> bytes:
    doc = Document()
    for text, style in paragraphs:
        doc.add_paragraph(text, style=style)
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def scenario_text():
    return SCENARIO_TEXT


@pytest.fixture
def ai_payload():
    """A valid AI tailoring response for the resumes above."""
    return {
        "ats_keywords": {
            "technical_skills": ["Python", "REST"],
            "tools_and_technologies": ["Kubernetes"],
            "job_responsibilities": ["latency"],
            "industry_terms": [],
        },
        "profile_title": "Senior Backend Engineer",
        "professional_summary": "Backend engineer focused on APIs. Cuts latency.",
        "skills_optimized": ["go", "Python", "Rust"],
        "tailored_experience": [
            {
                "job_title": "Backend Engineer",
                "company": "Acme Inc",
                "bullets": ["Built 12 REST APIs", "Cut p95 latency by 30%"],
            }
        ],
    }


@pytest.fixture
def make_provider():
    """Factory: make_provider(payload_or_text=None, error=None) -> FakeProvider."""

    def _make(payload=None, error=None):
        content = payload if isinstance(payload, str) or payload is None else json.dumps(payload)
        return FakeProvider(content=content or "", error=error)

    return _make


@pytest.fixture
def make_docx():
    """Factory: make_docx([(text, style), ...]) -> DOCX bytes."""
    return build_docx


@pytest.fixture
def resume_docx():
    return build_docx(RESUME_PARAGRAPHS)
