"""
Targeting Context

Responsibilities:
- Requests job-specific improvements from the AI collaborator
- Validates the AI response strictly before anything uses it
- Applies suggestions only within the editable field set (scoped tailoring)
- Measures ATS keyword coverage of the tailored content

Owns: Prompts, AI response validation, edit allow-list policy, keyword coverage
Never: Reads files or renders output documents
"""

from hemline.contexts.targeting.ai_response import (
    AtsKeywords,
    TailoredExperience,
    TailoringResponse,
    validate_tailoring_response,
)
from hemline.contexts.targeting.keyword_coverage import KeywordCoverage, keyword_coverage
from hemline.contexts.targeting.scoped_tailor import apply_scoped_tailoring, filter_skills
from hemline.contexts.targeting.tailoring_client import request_tailoring

__all__ = [
    # AI collaborator
    "request_tailoring",
    "validate_tailoring_response",
    "TailoringResponse",
    "TailoredExperience",
    "AtsKeywords",
    # Scoped tailoring
    "apply_scoped_tailoring",
    "filter_skills",
    # Coverage
    "keyword_coverage",
    "KeywordCoverage",
]
