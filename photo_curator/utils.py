"""
Utility functions for photo records.
"""

from datetime import datetime, timezone
from typing import Optional

from .models import PhotoRecord, payload_dict

TIMESTAMP_KEYS = ('captured_at', 'taken_at', 'date')
EXIF_TIMESTAMP_TAGS = ('DateTimeOriginal', 'DateTime')
EXIF_FORMAT = "%Y:%m:%d %H:%M:%S"


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse an ISO 8601 or EXIF ("2024:01:15 14:30:45") timestamp.

    Returns:
        Naive UTC datetime, or None if the value is not a timestamp
    """
    if not isinstance(value, str) or not value.strip():
        return None

    value = value.strip()
    try:
        dt = datetime.strptime(value, EXIF_FORMAT)
    except ValueError:
        try:
            dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None

    # Mixed naive/aware values must stay comparable
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def capture_time(record: PhotoRecord) -> Optional[datetime]:
    """Extract the capture time from a record's payload, checking EXIF data last."""
    data = payload_dict(record.metadata)

    for key in TIMESTAMP_KEYS:
        dt = parse_timestamp(data.get(key))
        if dt is not None:
            return dt

    exif = data.get('exif')
    if isinstance(exif, dict):
        for tag in EXIF_TIMESTAMP_TAGS:
            dt = parse_timestamp(exif.get(tag))
            if dt is not None:
                return dt

    return None
