"""UTC-minute bookkeeping, apparent solar time and clock formatting."""

import datetime
import math

MINUTES_PER_DAY = 1440


def utc_date(ts: datetime.datetime) -> datetime.date:
    """UTC calendar date of a timestamp (naive timestamps are system local)."""
    return ts.astimezone(datetime.timezone.utc).date()


def utc_midnight(d: datetime.date) -> datetime.datetime:
    return datetime.datetime(d.year, d.month, d.day, tzinfo=datetime.timezone.utc)


def minutes_since_utc_midnight(ts: datetime.datetime) -> float:
    """Minutes elapsed since 00:00 UTC of the timestamp's own UTC date."""
    ts_utc = ts.astimezone(datetime.timezone.utc)
    return (ts_utc - utc_midnight(ts_utc.date())).total_seconds() / 60


def utc_minutes_to_local(utc_min: float, base_utc_date: datetime.date, tz=None) -> datetime.datetime:
    """Turn an offset in minutes from a UTC midnight into a civil timestamp.

    Args:
        utc_min: Minutes since 00:00 UTC of base_utc_date (may be negative
                 or exceed a day)
        base_utc_date: UTC calendar date the offset is anchored to
        tz: tzinfo for the result; None means system local time

    Returns:
        Timezone-aware datetime in the requested zone.
    """
    ts = utc_midnight(base_utc_date) + datetime.timedelta(minutes=utc_min)
    return ts.astimezone(tz)


def apparent_solar_minutes(utc_min: float, lon_deg: float, eot_minutes: float) -> float:
    """Local apparent solar time, in minutes after apparent midnight [0, 1440)."""
    ast = utc_min + 4 * lon_deg + eot_minutes
    return ((ast % MINUTES_PER_DAY) + MINUTES_PER_DAY) % MINUTES_PER_DAY


def minutes_to_hhmmss(mins: float) -> str:
    total = ((mins % MINUTES_PER_DAY) + MINUTES_PER_DAY) % MINUTES_PER_DAY
    h = math.floor(total / 60)
    m = math.floor(total % 60)
    s = math.floor((total * 60) % 60)
    return f'{h:02d}:{m:02d}:{s:02d}'


def format_clock(hours: float) -> str:
    """Render an hour value as HH:MM:SS, wrapped into one 24-hour cycle."""
    total_min = (((hours % 24) + 24) % 24) * 60
    return minutes_to_hhmmss(total_min)
