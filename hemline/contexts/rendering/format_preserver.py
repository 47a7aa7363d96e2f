"""
Format-preserving (in-place) DOCX rebuild.

Substitutes tailored text into the original paragraphs one for one. Paragraph count,
order, heading flags, bullet levels and spacing are never changed; only the text of
editable paragraphs is.

Substitution rules, applied per paragraph in original order:
- Profile title: the first non-heading, non-bullet, non-contact paragraph of the header
  block receives the tailored profile title.
- Summary: summary content paragraphs receive the tailored summary, redistributed
  by sentence in proportion to each paragraph's original sentence count (a single
  paragraph receives the full text). Paragraphs left without a sentence are cleared.
- Skills: skills content paragraphs receive the tailored skills, split in proportion
  to each paragraph's original token count and joined with that paragraph's own
  separator style.
- Experience bullets: a global bullet cursor walks the experience lines the content
  mapper treated as bullets. Cumulative original bullet counts per entry decide which
  tailored entry and bullet index supply the text. Positions past the tailored list
  keep their original text; tailored bullets beyond the original count are logged as
  not placed.
- Everything else (headings, contact lines, job lines, education, certifications)
  keeps its original text.

HARD INVARIANT: the output has exactly as many paragraphs as the input records. Any
mismatch raises IntegrityError; a mismatched document is never returned.
"""

import bisect
import re
from io import BytesIO
from itertools import accumulate
from typing import Dict, List, Optional, Set

from docx import Document
from docx.shared import Pt

from hemline.contexts.rendering.docx_builder import document_bytes, new_document
from hemline.contexts.rendering.logger import _log_debug, _log_info, _log_warning
from hemline.contexts.rendering.presets import RenderPreset
from hemline.contexts.structuring.content_mapper import (
    segment_experience_lines,
    split_skills,
    structure_to_content,
)
from hemline.contexts.structuring.data_structures import (
    ParagraphRecord,
    ResumeContent,
    ResumeStructure,
    SectionType,
)
from hemline.contexts.structuring.section_patterns import (
    is_contact_line,
    starts_with_bullet,
    strip_bullet_glyph,
)
from hemline.exceptions import IntegrityError

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_WHITESPACE_RE = re.compile(r"\s+")

BULLET_STYLES = ("List Bullet", "List Bullet 2", "List Bullet 3")


# =============================================================================
# TEXT DISTRIBUTION
# =============================================================================


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text.strip()) if s.strip()]


def distribute(items: List[str], weights: List[int]) -> List[List[str]]:
    """
    Split items into consecutive chunks sized in proportion to weights.

    Every item lands in exactly one chunk and order is preserved. A single weight
    receives all items. While there are at least as many items as weights no chunk is
    empty; with fewer items the leading chunks get one item each and the rest are empty.
    """
    if len(weights) == 1:
        return [list(items)]

    if len(items) < len(weights):
        return [[item] for item in items] + [[] for _ in range(len(weights) - len(items))]

    if sum(weights) <= 0:
        weights = [1] * len(weights)

    total = sum(weights)
    chunks = []
    start = 0
    for i, cumulative in enumerate(accumulate(weights)):
        remaining = len(weights) - i - 1
        end = len(items) if remaining == 0 else round(len(items) * cumulative / total)
        end = min(max(end, start + 1), len(items) - remaining)
        chunks.append(list(items[start:end]))
        start = end
    return chunks


def skill_separator(text: str) -> str:
    """Separator style used by an original skills paragraph."""
    for glyph, separator in (("•", " • "), ("|", " | "), (";", "; ")):
        if glyph in text:
            return separator
    return ", "


# =============================================================================
# SUBSTITUTION
# =============================================================================


def _section_header_positions(
    records: List[ParagraphRecord], structure: ResumeStructure
) -> Set[int]:
    """Positions of the records that open a section, matched in order to section titles."""
    positions = set()
    titles = iter(section.title for section in structure.sections)
    expected = next(titles, None)
    for record in records:
        if expected is not None and record.text == expected:
            positions.add(record.position_index)
            expected = next(titles, None)
    return positions


def _content_records(
    records: List[ParagraphRecord], section_type: SectionType, headers: Set[int]
) -> List[ParagraphRecord]:
    # Heading-styled lines inside a section (e.g. job lines) are still content
    return [
        r for r in records if r.section_type == section_type and r.position_index not in headers
    ]


def _experience_bullet_flags(
    records: List[ParagraphRecord], structure: ResumeStructure, headers: Set[int]
) -> List[bool]:
    """Per experience content record: whether the content mapper made it a bullet."""
    experience_records = _content_records(records, SectionType.EXPERIENCE, headers)

    flags: List[bool] = []
    for section in structure.sections_of_type(SectionType.EXPERIENCE):
        flags.extend(segment_experience_lines(section)[1])

    if len(flags) != len(experience_records):
        _log_warning(
            f"Experience paragraphs ({len(experience_records)}) do not line up with "
            f"structure lines ({len(flags)}); using paragraph bullet flags"
        )
        flags = [r.is_bullet for r in experience_records]

    return flags


def _summary_texts(slots: List[ParagraphRecord], summary: Optional[str]) -> Dict[int, str]:
    if not slots or not summary:
        return {}

    if len(slots) == 1:
        return {slots[0].position_index: summary}

    # A slot left without sentences is cleared, never kept with the old summary
    sentences = split_sentences(summary)
    chunks = distribute(sentences, [len(split_sentences(r.text)) for r in slots])
    return {record.position_index: " ".join(chunk) for record, chunk in zip(slots, chunks)}


def _skills_texts(slots: List[ParagraphRecord], skills: Optional[List[str]]) -> Dict[int, str]:
    if not slots or not skills:
        return {}

    chunks = distribute(skills, [len(split_skills([r.text])) for r in slots])
    return {
        record.position_index: skill_separator(record.text).join(chunk)
        for record, chunk in zip(slots, chunks)
    }


def _profile_title_slot(records: List[ParagraphRecord]) -> Optional[int]:
    for record in records:
        if record.section_type != SectionType.HEADER:
            return None
        if not record.is_heading and not record.is_bullet and not is_contact_line(record.text):
            return record.position_index
    return None


def substitute_paragraph_texts(
    records: List[ParagraphRecord],
    structure: ResumeStructure,
    content: ResumeContent,
) -> List[str]:
    """
    Compute the output text of every paragraph.

    Args:
        records: ParagraphRecords captured at ingestion
        structure: Structure inferred from the same document
        content: Tailored content

    Returns:
        One text per record, in record order
    """
    replacements: Dict[int, str] = {}

    title_slot = _profile_title_slot(records)
    if title_slot is not None and content.profile_title:
        replacements[title_slot] = content.profile_title

    headers = _section_header_positions(records, structure)
    summary_slots = _content_records(records, SectionType.SUMMARY, headers)
    skills_slots = _content_records(records, SectionType.SKILLS, headers)
    replacements.update(_summary_texts(summary_slots, content.professional_summary))
    replacements.update(_skills_texts(skills_slots, content.skills))

    original_counts = [len(e.bullets) for e in structure_to_content(structure).experience]
    entry_starts = [0] + list(accumulate(original_counts))
    bullet_flags = iter(_experience_bullet_flags(records, structure, headers))
    cursor = 0

    texts = []
    for record in records:
        text = replacements.get(record.position_index, record.text)

        if record.section_type == SectionType.EXPERIENCE and record.position_index not in headers:
            if next(bullet_flags, False):
                entry_index = bisect.bisect_right(entry_starts, cursor) - 1
                bullet_index = cursor - entry_starts[entry_index]
                if entry_index < len(content.experience):
                    bullets = content.experience[entry_index].bullets
                    if bullet_index < len(bullets):
                        text = bullets[bullet_index]
                cursor += 1

        texts.append(text)

    for number, (entry, count) in enumerate(zip(content.experience, original_counts), start=1):
        if len(entry.bullets) > count:
            _log_warning(
                f"Experience entry {number} ({entry.job_title}) has {len(entry.bullets)} "
                f"tailored bullets but {count} bullet paragraphs; "
                f"{len(entry.bullets) - count} not placed in the DOCX"
            )

    _log_debug(
        f"Substituted {sum(t != r.text for t, r in zip(texts, records))} of "
        f"{len(records)} paragraphs ({cursor} experience bullet slots)"
    )
    return texts


# =============================================================================
# DOCX WRITERS
# =============================================================================


def _check_count(expected: int, actual: int) -> None:
    if expected != actual:
        raise IntegrityError(expected, actual)


def _collapsed(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _replace_paragraph_text(paragraph, text: str) -> None:
    """Replace text, keeping the first run's formatting and any leading bullet glyph."""
    original = _collapsed(paragraph.text)
    if starts_with_bullet(original):
        text = original[: len(original) - len(strip_bullet_glyph(original))] + text

    runs = paragraph.runs
    if not runs:
        paragraph.text = text
        return

    runs[0].text = text
    for run in runs[1:]:
        run.text = ""


def _substitute_into_source(source_docx: bytes, records: List[ParagraphRecord], texts: List[str]) -> bytes:
    doc = Document(BytesIO(source_docx))
    paragraphs = [p for p in doc.paragraphs if _collapsed(p.text)]
    _check_count(len(records), len(paragraphs))

    for paragraph, record, text in zip(paragraphs, records, texts):
        if text != record.text:
            _replace_paragraph_text(paragraph, text)

    return document_bytes(doc)


def _rebuild_from_records(
    records: List[ParagraphRecord], texts: List[str], preset: RenderPreset
) -> bytes:
    doc = new_document(preset)
    emitted = 0

    for record, text in zip(records, texts):
        if record.is_heading:
            paragraph = doc.add_paragraph(text, style="Heading 1")
        elif record.is_bullet:
            level = min(record.indent_level, len(BULLET_STYLES) - 1)
            paragraph = doc.add_paragraph(text, style=BULLET_STYLES[level])
        else:
            paragraph = doc.add_paragraph(text)

        if record.spacing.before is not None:
            paragraph.paragraph_format.space_before = Pt(record.spacing.before)
        if record.spacing.after is not None:
            paragraph.paragraph_format.space_after = Pt(record.spacing.after)
        emitted += 1

    _check_count(len(records), emitted)
    return document_bytes(doc)


def build_preserved_docx(
    records: List[ParagraphRecord],
    structure: ResumeStructure,
    content: ResumeContent,
    preset: RenderPreset,
    source_docx: Optional[bytes] = None,
) -> bytes:
    """
    Rebuild a DOCX in place, one output paragraph per captured record.

    With source_docx, text is substituted into the original document so every run,
    style and section property survives. Without it, a new document is written from
    the records (heading flag, bullet level and spacing preserved).

    Args:
        records: ParagraphRecords captured at ingestion
        structure: Structure inferred from the same document
        content: Tailored content
        preset: Render preset (margins and body font for record-only rebuilds)
        source_docx: Original DOCX bytes, if available

    Returns:
        DOCX file contents

    Raises:
        IntegrityError: Output paragraph count differs from the record count
    """
    texts = substitute_paragraph_texts(records, structure, content)
    _check_count(len(records), len(texts))

    if source_docx is not None:
        data = _substitute_into_source(source_docx, records, texts)
    else:
        data = _rebuild_from_records(records, texts, preset)

    _log_info(f"Format-preserving rebuild: {len(records)} paragraphs")
    return data
