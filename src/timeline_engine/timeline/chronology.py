"""Chronological ordering of evidence.

An item's effective time is its "time happened" if present, else its "time
discovered". Items with neither (or with an unparseable value) get a far-future
sentinel so they sort after everything else instead of raising.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from ..models import EvidenceItem

logger = logging.getLogger(__name__)

SENTINEL_TIMESTAMP = "9999-12-31T23:59:59"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_timestamp(timestamp: str) -> Optional[datetime]:
    """Parse an ISO-8601 string into an aware datetime.

    Naive values are taken as UTC. Returns None if the string cannot be parsed.
    """
    text = timestamp.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _to_millis(moment: datetime) -> int:
    return (moment - _EPOCH) // _MILLISECOND


SENTINEL_MILLIS = _to_millis(parse_timestamp(SENTINEL_TIMESTAMP))


def effective_timestamp(item: EvidenceItem) -> Optional[str]:
    """Return the timestamp string used for ordering, if any.

    "Time happened" wins over "time discovered", but a value that cannot be
    parsed is skipped in favour of the other one.
    """
    for timestamp in (item.time_happened, item.time_discovered):
        if not timestamp:
            continue
        if parse_timestamp(timestamp) is not None:
            return timestamp
        logger.debug("Unparseable timestamp %r on evidence %s", timestamp, item.id)
    return None


def has_resolvable_time(item: EvidenceItem) -> bool:
    """True if the item has at least one parseable timestamp."""
    return effective_timestamp(item) is not None


def effective_time(item: EvidenceItem) -> int:
    """Epoch milliseconds of the item's effective time (sentinel if none)."""
    timestamp = effective_timestamp(item)
    if timestamp is None:
        return SENTINEL_MILLIS
    return _to_millis(parse_timestamp(timestamp))


def sort_chronologically(items: Iterable[EvidenceItem]) -> list[EvidenceItem]:
    """Return a new list sorted by effective time.

    ``sorted`` is stable, so items sharing a time keep their input order.
    """
    return sorted(items, key=effective_time)


def canonical_ids(items: Sequence[EvidenceItem]) -> list[str]:
    """Ids of ``items`` in chronological order."""
    return [item.id for item in sort_chronologically(items)]


def format_time_for_display(timestamp: Optional[str]) -> str:
    """Format a timestamp as e.g. ``"Mar 15, 2:30 PM"``.

    Empty input gives an empty string; unparseable input is returned as-is.
    The wall-clock time is shown in the timestamp's own offset.
    """
    if not timestamp:
        return ""

    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return timestamp

    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return f"{_MONTHS[parsed.month - 1]} {parsed.day}, {hour}:{parsed.minute:02d} {meridiem}"
