"""
Typed, strictly validated tailoring response.

The AI collaborator returns a JSON object. Validation is all-or-nothing: any malformed
field rejects the whole response with an UpstreamServiceError naming the field. Only a
validated TailoringResponse ever reaches the scoped tailoring engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from hemline.exceptions import UpstreamServiceError

AI_SERVICE = "ai"

KEYWORD_CATEGORIES = (
    "technical_skills",
    "tools_and_technologies",
    "job_responsibilities",
    "industry_terms",
)


@dataclass
class AtsKeywords:
    """ATS keywords extracted from the job description, by category."""

    technical_skills: List[str] = field(default_factory=list)
    tools_and_technologies: List[str] = field(default_factory=list)
    job_responsibilities: List[str] = field(default_factory=list)
    industry_terms: List[str] = field(default_factory=list)

    def all_keywords(self) -> List[str]:
        """All keywords in category order, de-duplicated case-insensitively."""
        seen = set()
        keywords = []
        for category in KEYWORD_CATEGORIES:
            for keyword in getattr(self, category):
                key = keyword.strip().lower()
                if key and key not in seen:
                    seen.add(key)
                    keywords.append(keyword.strip())
        return keywords

    def to_dict(self) -> Dict[str, List[str]]:
        return {category: list(getattr(self, category)) for category in KEYWORD_CATEGORIES}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AtsKeywords":
        return cls(**{category: list(data.get(category) or []) for category in KEYWORD_CATEGORIES})


@dataclass
class TailoredExperience:
    """One AI-suggested experience entry. Only bullets are ever used."""

    job_title: str
    company: str
    bullets: List[str] = field(default_factory=list)


@dataclass
class TailoringResponse:
    """Validated AI tailoring response."""

    ats_keywords: AtsKeywords
    profile_title: str
    professional_summary: str
    tailored_experience: List[TailoredExperience] = field(default_factory=list)
    skills_optimized: Optional[List[str]] = None


# =============================================================================
# VALIDATION
# =============================================================================


def _reject(field_name: str, problem: str) -> UpstreamServiceError:
    return UpstreamServiceError(
        f"AI response validation failed: '{field_name}' {problem}",
        service=AI_SERVICE,
    )


def _require_string_list(value: Any, field_name: str, non_empty_items: bool = False) -> List[str]:
    if not isinstance(value, list):
        raise _reject(field_name, "must be a list")
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise _reject(f"{field_name}[{index}]", "must be a string")
        if non_empty_items and not item.strip():
            raise _reject(f"{field_name}[{index}]", "must be a non-empty string")
    return list(value)


def _require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise _reject(field_name, "must be a non-empty string")
    return value.strip()


def validate_tailoring_response(data: Any) -> TailoringResponse:
    """
    Validate a parsed AI response and convert it to a TailoringResponse.

    Args:
        data: Parsed JSON value

    Returns:
        TailoringResponse

    Raises:
        UpstreamServiceError: Any required field missing or malformed
    """
    if not isinstance(data, dict):
        raise _reject("response", "must be a JSON object")

    keywords = data.get("ats_keywords")
    if not isinstance(keywords, dict):
        raise _reject("ats_keywords", "must be an object")
    ats_keywords = AtsKeywords(
        **{
            category: _require_string_list(keywords.get(category), f"ats_keywords.{category}")
            for category in KEYWORD_CATEGORIES
        }
    )

    profile_title = _require_text(data.get("profile_title"), "profile_title")
    professional_summary = _require_text(data.get("professional_summary"), "professional_summary")

    skills_optimized = data.get("skills_optimized")
    if skills_optimized is not None:
        skills_optimized = _require_string_list(skills_optimized, "skills_optimized")

    experience_data = data.get("tailored_experience")
    if not isinstance(experience_data, list):
        raise _reject("tailored_experience", "must be a list")

    tailored_experience = []
    for index, entry in enumerate(experience_data):
        prefix = f"tailored_experience[{index}]"
        if not isinstance(entry, dict):
            raise _reject(prefix, "must be an object")
        tailored_experience.append(
            TailoredExperience(
                job_title=_require_text(entry.get("job_title"), f"{prefix}.job_title"),
                company=_require_text(entry.get("company"), f"{prefix}.company"),
                bullets=_require_string_list(
                    entry.get("bullets"), f"{prefix}.bullets", non_empty_items=True
                ),
            )
        )

    return TailoringResponse(
        ats_keywords=ats_keywords,
        profile_title=profile_title,
        professional_summary=professional_summary,
        tailored_experience=tailored_experience,
        skills_optimized=skills_optimized,
    )
