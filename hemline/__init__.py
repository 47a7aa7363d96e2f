"""
HEMLINE - Heuristic Extraction, Mapping and Layout-preserving Editing

A resume tailoring system that infers the structure of an uploaded resume, applies
AI-suggested edits strictly inside an allow-list of fields, and rebuilds the document
either freshly composed or by substituting text into the original paragraphs.

Architecture:
- Intake Context: File validation, text extraction and paragraph capture
- Structuring Context: Section inference and semantic content mapping
- Targeting Context: AI tailoring requests and scoped edit enforcement
- Rendering Context: DOCX/PDF rebuild (structural or format-preserving)
"""

__version__ = "0.1.0"
