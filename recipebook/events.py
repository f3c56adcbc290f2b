# recipebook/events.py
"""
Interaction event logging for Recipe Studio.

Responsibilities:
- Provide a single log_event(...) function that writes a JSONL record to the
  event log file and never raises (logging is strictly non-blocking).

- Provide small helper functions for the events the UI emits:
  - log_recipe_submitted(...)
  - log_recipe_rejected(...)
  - log_page_changed(...)

- Read the log back for the analytics endpoints (recent_events, event_counts).
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# JSONL file with one event per line. Set EVENT_LOG_FILE in .env to move it.
EVENT_LOG_FILE = Path(os.getenv("EVENT_LOG_FILE", "events.log"))


def _write_to_file(record: Dict[str, Any]) -> None:
    """
    Append a single JSON record to the event log as JSONL.
    Never raise exceptions.
    """
    try:
        path = Path(EVENT_LOG_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    except Exception as exc:
        # Last-resort: log at debug level, never raise.
        logger.debug("Failed to write event to %s: %s", EVENT_LOG_FILE, exc)


def log_event(
    event: str,
    session_id: Optional[str],
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Core event logger.

    Builds a record with keys ts, event, session_id, payload and appends it
    to the event log. Never raises.
    """
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "session_id": session_id,
        "payload": payload or {},
    }
    _write_to_file(record)


# ---------------------------------------------------------------------------
# Helper functions for common event types
# ---------------------------------------------------------------------------

def log_recipe_submitted(
    session_id: Optional[str],
    title: str,
    ingredient_count: int,
    is_editing: bool,
    recipe_id: Optional[str] = None,
) -> None:
    """
    Log a recipe_submitted event.

    payload:
    {
        "title": "Pancakes",
        "ingredient_count": 4,
        "is_editing": false,
        "recipe_id": "664c8f..."   # optional, edit mode only
    }
    """
    payload: Dict[str, Any] = {
        "title": title,
        "ingredient_count": ingredient_count,
        "is_editing": is_editing,
    }
    if recipe_id is not None:
        payload["recipe_id"] = recipe_id
    log_event("recipe_submitted", session_id, payload)


def log_recipe_rejected(session_id: Optional[str], error: str) -> None:
    """
    Log a recipe_rejected event.

    payload:
    {
        "error": "negative_value" | "invalid_ingredient" | "invalid_recipe"
    }
    """
    log_event("recipe_rejected", session_id, {"error": error})


def log_page_changed(
    session_id: Optional[str],
    from_page: Optional[int],
    to_page: int,
    page_count: int,
) -> None:
    """
    Log a page_changed event.

    payload:
    {
        "from_page": 1,
        "to_page": 2,
        "page_count": 5
    }
    """
    payload = {
        "from_page": from_page,
        "to_page": to_page,
        "page_count": page_count,
    }
    log_event("page_changed", session_id, payload)


# ---------------------------------------------------------------------------
# Reading the log back
# ---------------------------------------------------------------------------

def read_events() -> List[Dict[str, Any]]:
    """
    Read every record from the event log, oldest first.

    Missing file means no events. Lines that are not a JSON object are
    skipped, and undecodable bytes are replaced rather than raised.
    """
    path = Path(EVENT_LOG_FILE)
    if not path.exists():
        return []

    records: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8", errors="replace") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.debug("Skipping malformed event log line: %r", line[:80])
                continue
            if not isinstance(record, dict):
                logger.debug("Skipping non-object event log line: %r", line[:80])
                continue
            records.append(record)
    return records


def _parse_ts(value: Any) -> Optional[datetime]:
    """Parse a record timestamp; naive values are taken as UTC."""
    try:
        ts = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def recent_events(limit: int = 100) -> List[Dict[str, Any]]:
    """Most recent events, newest first."""
    return list(reversed(read_events()))[:limit]


def event_counts(since: Optional[datetime] = None) -> Dict[str, int]:
    """
    Number of events per event name, optionally only those at or after since.

    A naive since is taken as UTC. Records without a parseable ts are skipped
    when since is given.
    """
    if since is not None and since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)

    counts: Dict[str, int] = {}
    for record in read_events():
        if since is not None:
            ts = _parse_ts(record.get("ts"))
            if ts is None or ts < since:
                continue
        name = str(record.get("event", ""))
        counts[name] = counts.get(name, 0) + 1
    return counts
