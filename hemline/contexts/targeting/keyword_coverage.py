"""
Deterministic ATS keyword coverage of tailored content.
"""

import re
from dataclasses import dataclass, field
from typing import List

from hemline.contexts.structuring.data_structures import ResumeContent
from hemline.contexts.targeting.ai_response import AtsKeywords


@dataclass
class KeywordCoverage:
    """
    Keyword presence check result.

    Attributes:
        matched: Keywords found in the content
        missing: Keywords not found
        score: Percentage of keywords found (0-100; 0 when there are no keywords)
    """

    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    score: int = 0

    def to_dict(self) -> dict:
        return {"matched": list(self.matched), "missing": list(self.missing), "score": self.score}


def content_search_text(content: ResumeContent) -> str:
    """All text of a ResumeContent, lowercased, one field per line."""
    parts = [content.profile_title, content.professional_summary or ""]
    for entry in content.experience:
        parts.append(entry.job_title)
        parts.append(entry.company)
        parts.extend(entry.bullets)
    for values in (content.skills, content.education, content.certifications):
        parts.extend(values or [])
    return "\n".join(parts).lower()


def contains_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive whole-term match (handles terms like 'C++' and 'Node.js')."""
    pattern = rf"(?<!\w){re.escape(keyword.strip().lower())}(?!\w)"
    return bool(re.search(pattern, text))


def keyword_coverage(content: ResumeContent, ats_keywords: AtsKeywords) -> KeywordCoverage:
    """
    Check which ATS keywords appear in resume content.

    Args:
        content: Tailored (or original) resume content
        ats_keywords: Keywords extracted from the job description

    Returns:
        KeywordCoverage
    """
    text = content_search_text(content)
    coverage = KeywordCoverage()

    keywords = ats_keywords.all_keywords()
    for keyword in keywords:
        if contains_keyword(text, keyword):
            coverage.matched.append(keyword)
        else:
            coverage.missing.append(keyword)

    if keywords:
        coverage.score = round(100 * len(coverage.matched) / len(keywords))

    return coverage
