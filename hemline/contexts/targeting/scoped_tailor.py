"""
Scoped tailoring engine: applies AI edits strictly inside the editable field set.

EDITABLE:
- Profile title
- Professional summary
- Skills (reorder and normalize existing tokens only)
- Experience bullet text

PRESERVED EXACTLY:
- Job titles, company names, dates
- Education, certifications, contact info
- Section order

The engine never raises for missing or partial AI fields; each field degrades to
"no change" on its own. The input content is never mutated.
"""

from collections import defaultdict
from typing import Dict, List

from hemline.contexts.structuring.data_structures import (
    ResumeContent,
    ResumeStructure,
    SectionType,
)
from hemline.contexts.targeting.ai_response import TailoredExperience, TailoringResponse
from hemline.contexts.targeting.logger import _log_debug, _log_info


def normalize_job_title(title: str) -> str:
    """Matching key for job titles: lowercase, trimmed."""
    return title.strip().lower()


def filter_skills(original: List[str], optimized: List[str]) -> List[str]:
    """
    Accept optimized skills only where they already exist in the original list.

    Accepted tokens keep the AI's order and spelling; duplicates are dropped
    case-insensitively, and original tokens the AI left out are appended in their
    original order so no skill is lost.

    Args:
        original: Skill tokens from the resume
        optimized: Skill tokens suggested by the AI

    Returns:
        Skill list containing only original tokens (case-insensitively)
    """
    original_keys = {skill.strip().lower() for skill in original}
    seen = set()
    result = []
    rejected = []

    for token in optimized:
        skill = token.strip()
        key = skill.lower()
        if not skill:
            continue
        if key not in original_keys:
            rejected.append(skill)
            continue
        if key not in seen:
            seen.add(key)
            result.append(skill)

    for skill in original:
        key = skill.strip().lower()
        if key and key not in seen:
            seen.add(key)
            result.append(skill)

    if rejected:
        _log_debug(f"Rejected {len(rejected)} invented skills: {', '.join(rejected)}")

    return result


def _clean_bullets(bullets: List[str]) -> List[str]:
    return [b.strip() for b in bullets if b and b.strip()]


def _index_by_title(entries: List[TailoredExperience]) -> Dict[str, List[TailoredExperience]]:
    index = defaultdict(list)
    for entry in entries:
        index[normalize_job_title(entry.job_title)].append(entry)
    return index


def apply_scoped_tailoring(
    structure: ResumeStructure,
    content: ResumeContent,
    response: TailoringResponse,
) -> ResumeContent:
    """
    Apply AI suggestions to resume content within the editable field set.

    Args:
        structure: Inferred structure of the original resume
        content: Original resume content (not modified)
        response: Validated AI tailoring response

    Returns:
        New ResumeContent with only editable fields changed
    """
    tailored = content.copy()
    changed = []

    profile_title = (response.profile_title or "").strip()
    if profile_title:
        tailored.profile_title = profile_title
        changed.append("profile_title")

    summary = (response.professional_summary or "").strip()
    if summary:
        tailored.professional_summary = summary
        changed.append("professional_summary")

    has_skills_section = bool(structure.sections_of_type(SectionType.SKILLS))
    if response.skills_optimized and has_skills_section and content.skills is not None:
        tailored.skills = filter_skills(content.skills, response.skills_optimized)
        changed.append("skills")

    by_title = _index_by_title(response.tailored_experience or [])
    consumed: Dict[str, int] = defaultdict(int)
    matched = 0

    for entry in tailored.experience:
        key = normalize_job_title(entry.job_title)
        candidates = by_title.get(key)
        if not candidates:
            continue

        # Repeated titles consume AI entries in order; extra originals reuse the last one
        suggestion = candidates[min(consumed[key], len(candidates) - 1)]
        consumed[key] += 1

        bullets = _clean_bullets(suggestion.bullets)
        if bullets:
            entry.bullets = bullets
            matched += 1

    if matched:
        changed.append("experience")

    _log_info(
        f"Scoped tailoring applied to {', '.join(changed) or 'nothing'}; "
        f"{matched}/{len(tailored.experience)} experience entries rewritten"
    )
    return tailored
