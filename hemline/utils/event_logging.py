"""
Pipeline event logging (JSON Lines).

Detailed within-context logging goes through loguru (hemline.utils.logger). This module
records one JSON object per pipeline stage transition so runs can be audited and
filtered after the fact.

Usage:
    from hemline.utils.event_logging import log_pipeline_event

    log_pipeline_event(
        event_type="stage_change",
        run_id="3f2a9c",
        source="pipeline",
        new_stage="structured",
    )

Events are only written when PIPELINE_EVENTS_FILE is set.
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from hemline.utils.timestamp import now_exact

load_dotenv()
_events_file = os.getenv("PIPELINE_EVENTS_FILE")
PIPELINE_EVENTS_FILE = Path(_events_file) if _events_file else None


def log_pipeline_event(
    event_type: str,
    run_id: str,
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """
    Append an event to the pipeline event log.

    Args:
        event_type: Type of event (e.g., "stage_change", "run_failed")
        run_id: Pipeline run identifier
        source: Event source (e.g., "pipeline", "cli")
        events_file: Override for PIPELINE_EVENTS_FILE
        **extra_fields: Additional event-specific fields
    """
    target = events_file or PIPELINE_EVENTS_FILE
    if target is None:
        return

    target.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "run_id": run_id,
        "source": source,
        **extra_fields,
    }

    with open(target, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def read_events(
    events_file: Optional[Path] = None,
    run_id: Optional[str] = None,
    event_type: Optional[str] = None,
) -> list[dict]:
    """
    Read events from the log, optionally filtered by run or type.

    Returns:
        List of event dicts in file order (empty if the log does not exist)
    """
    target = events_file or PIPELINE_EVENTS_FILE
    if target is None or not target.exists():
        return []

    events = []
    with open(target, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            event = json.loads(line)
            if run_id and event.get("run_id") != run_id:
                continue
            if event_type and event.get("event_type") != event_type:
                continue
            events.append(event)

    return events
