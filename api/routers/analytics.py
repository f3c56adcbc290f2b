"""
Analytics router for the interaction event log.

This router provides endpoints for querying logged events:
- GET /analytics/events/recent - Get recent events
- GET /analytics/events/counts - Get event counts by name

Both endpoints read the JSONL event log and fail gracefully, returning empty
data rather than raising when the log cannot be read.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import APIRouter, Query

from recipebook.events import event_counts, recent_events

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "/events/recent",
    summary="Get recent events",
    description="Retrieve the most recent interaction events, newest first.",
)
def get_recent_events(
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of events to return")
) -> Dict[str, Any]:
    """
    Get the most recent interaction events.

    Args:
        limit: Maximum number of events to return (default: 100, max: 1000)

    Returns:
        Dictionary with:
        - events: List of records with ts, event, session_id, payload

    Example response:
    {
        "events": [
            {
                "ts": "2024-01-15T10:30:00.123456+00:00",
                "event": "recipe_submitted",
                "session_id": "abc123",
                "payload": {"title": "Pancakes", "ingredient_count": 4, "is_editing": false}
            }
        ]
    }
    """
    try:
        return {"events": recent_events(limit=limit)}
    except Exception as e:
        logger.debug("Error reading event log: %s", e)
        return {"events": []}


@router.get(
    "/events/counts",
    summary="Get event counts",
    description="Get counts of events by name over the last N hours.",
)
def get_event_counts(
    since_hours: int = Query(24, ge=1, le=168, description="Number of hours to look back (default: 24, max: 168)")
) -> Dict[str, Any]:
    """
    Get event counts over the last N hours.

    Example response:
    {
        "since_hours": 24,
        "counts": {
            "recipe_submitted": 12,
            "recipe_rejected": 3,
            "page_changed": 40
        }
    }
    """
    since = datetime.now(timezone.utc) - timedelta(hours=since_hours)
    try:
        counts = event_counts(since=since)
    except Exception as e:
        logger.debug("Error reading event log: %s", e)
        counts = {}
    return {
        "since_hours": since_hours,
        "counts": counts,
    }
