"""Timezone helpers for turning user input into aware wall-clock timestamps."""

import datetime
from zoneinfo import ZoneInfo


def resolve_timezone(tz_name):
    """Return a ZoneInfo for an IANA name, or None if tz_name is empty or invalid.

    Args:
        tz_name: IANA timezone string (e.g., "America/New_York"), or None
    """
    if not tz_name:
        return None

    try:
        return ZoneInfo(tz_name)
    except (KeyError, ValueError, OSError):
        return None


def localize(ts, tz_name=None):
    """Make a timestamp timezone-aware.

    Naive timestamps are read as wall-clock time in tz_name; aware ones are
    converted into it. Without a usable tz_name the system local zone is used.

    Args:
        ts: datetime, naive or aware
        tz_name: IANA timezone string, or None

    Returns:
        Aware datetime.
    """
    tz = resolve_timezone(tz_name)
    if tz is None:
        return ts.astimezone()
    if ts.tzinfo is None:
        return ts.replace(tzinfo=tz)
    return ts.astimezone(tz)


def now_in(tz_name=None):
    tz = resolve_timezone(tz_name)
    if tz is None:
        return datetime.datetime.now().astimezone()
    return datetime.datetime.now(tz)


def utc_offset_hours(ts):
    """UTC offset of an aware timestamp in hours (e.g., -4.0 for EDT)."""
    return ts.utcoffset().total_seconds() / 3600
