"""
Finite-state line scanner shared by structure inference and paragraph capture.

The scanner walks trimmed, non-empty lines once. It has two phases:

    HEADER      before any section header is recognized
    IN_SECTION  after the first section header

The only transition is HEADER -> IN_SECTION on a section-header line; a header line
while IN_SECTION opens a new section but stays in the same phase. Transitions live in
an explicit table so the machine can be audited and tested in isolation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple

from hemline.contexts.structuring.data_structures import SectionType
from hemline.contexts.structuring.section_patterns import (
    KeywordSectionClassifier,
    SectionClassifier,
    starts_with_bullet,
    strip_bullet_glyph,
)


class ScanPhase(Enum):
    HEADER = "header"
    IN_SECTION = "in_section"


class LineKind(Enum):
    """What a scanned line contributes to the structure."""

    SECTION_HEADER = "section_header"
    CONTACT = "contact"
    TITLE = "title"
    HEADER_TEXT = "header_text"  # header line after the title; not kept
    BULLET = "bullet"
    TEXT = "text"


# (current phase, line is a section header) -> next phase
TRANSITIONS: Dict[Tuple[ScanPhase, bool], ScanPhase] = {
    (ScanPhase.HEADER, False): ScanPhase.HEADER,
    (ScanPhase.HEADER, True): ScanPhase.IN_SECTION,
    (ScanPhase.IN_SECTION, False): ScanPhase.IN_SECTION,
    (ScanPhase.IN_SECTION, True): ScanPhase.IN_SECTION,
}


@dataclass(frozen=True)
class ScannedLine:
    """
    One classified line.

    Attributes:
        raw: Trimmed source line
        text: Line text as stored (bullet glyph stripped for BULLET lines)
        kind: What the line contributes
        phase: Scanner phase after consuming the line
        section_type: Section the line belongs to (HEADER while in the header phase)
        section_index: Zero-based index of the enclosing section, None in the header
    """

    raw: str
    text: str
    kind: LineKind
    phase: ScanPhase
    section_type: SectionType
    section_index: Optional[int]


class StructureScanner:
    """Classifies lines with a SectionClassifier and the phase transition table."""

    def __init__(self, classifier: Optional[SectionClassifier] = None):
        self.classifier = classifier or KeywordSectionClassifier()

    def scan(self, lines: Iterable[str]) -> Iterator[ScannedLine]:
        """
        Scan lines in order, skipping blanks.

        Args:
            lines: Raw lines (trimmed here)

        Yields:
            ScannedLine for every non-empty line
        """
        phase = ScanPhase.HEADER
        section_type = SectionType.HEADER
        section_index: Optional[int] = None
        title_taken = False

        for raw_line in lines:
            line = raw_line.strip()
            if not line:
                continue

            detected = self.classifier.classify(line)
            phase = TRANSITIONS[(phase, detected is not None)]

            if detected is not None:
                section_type = detected
                section_index = 0 if section_index is None else section_index + 1
                kind = LineKind.SECTION_HEADER
                text = line
            elif phase == ScanPhase.HEADER:
                text = line
                if self.classifier.is_contact_line(line):
                    kind = LineKind.CONTACT
                elif not title_taken:
                    kind = LineKind.TITLE
                    title_taken = True
                else:
                    kind = LineKind.HEADER_TEXT
            elif starts_with_bullet(line):
                kind = LineKind.BULLET
                text = strip_bullet_glyph(line)
            else:
                kind = LineKind.TEXT
                text = line

            yield ScannedLine(
                raw=line,
                text=text,
                kind=kind,
                phase=phase,
                section_type=section_type,
                section_index=section_index,
            )
