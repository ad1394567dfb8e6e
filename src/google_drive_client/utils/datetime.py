from datetime import datetime
from typing import Optional
import logging

import tzlocal

logger = logging.getLogger(__name__)


def convert_datetime_to_local_timezone(date_time: datetime) -> datetime:
    """
    Converts a given datetime object to a local-timezone-aware datetime.
    Args:
        date_time: The datetime object to be converted.

    Returns:
        A datetime object in the local timezone.
    """
    return datetime.astimezone(date_time, tzlocal.get_localzone())


def parse_rfc3339(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp as returned by the Drive API.

    Args:
        value: Timestamp string such as "2025-01-15T10:00:00.000Z".

    Returns:
        A local-timezone-aware datetime, or None if missing or unparseable.
    """
    if not value:
        return None

    try:
        if value.endswith('Z'):
            dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
        else:
            dt = datetime.fromisoformat(value)
        return convert_datetime_to_local_timezone(dt)
    except (ValueError, TypeError) as e:
        logger.warning("Failed to parse datetime: %s", e)
        return None
