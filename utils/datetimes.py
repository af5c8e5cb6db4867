"""
utils/datetimes.py
ISO 8601 helpers for timestamps exchanged with API clients.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 string into a naive UTC datetime.

    Raises ValueError when the value is present but cannot be parsed.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logging.warning("Unable to parse datetime value: %s", value)
        raise
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_iso_datetime(value: Optional[datetime]) -> Optional[str]:
    if not value:
        return None
    target = value
    if target.tzinfo is None:
        target = target.replace(tzinfo=timezone.utc)
    else:
        target = target.astimezone(timezone.utc)
    return target.isoformat().replace("+00:00", "Z")
