"""Reference sunrise/sunset from astral, for checking the built-in solver."""
import datetime

from astral import LocationInfo
from astral.sun import noon, sunrise, sunset

from lib.solar_time import utc_midnight
from lib.sun_window import SunMode, solve_sun_window

HALF_DAY_MINUTES = 720


def _event_minutes(event, observer, day, midnight):
    """astral event on a UTC date as minutes after midnight, or None if it doesn't happen."""
    try:
        dt = event(observer, date=day)
    except ValueError:
        # astral raises ValueError when the sun never crosses the horizon
        return None
    return (dt - midnight).total_seconds() / 60


def get_reference_sun_window(utc_date, lat, lon):
    """Compute astral's sunrise and sunset around solar noon of utc_date.

    astral only reports events that fall inside a given UTC day, so the
    neighbouring days are searched too. The sunrise closest before noon and
    the sunset closest after it are kept, measured from 00:00 UTC of
    utc_date without wrapping, the same way NormalSunWindow measures them.

    Args:
        utc_date: UTC calendar date
        lat: Latitude in decimal degrees (positive = north)
        lon: Longitude in decimal degrees (positive = east)

    Returns:
        Dict with 'sunrise' and 'sunset' as float UTC minutes, or None if
        lat/lon is missing or the sun doesn't rise/set (polar regions).
    """
    if lat is None or lon is None:
        return None

    observer = LocationInfo(latitude=lat, longitude=lon).observer
    midnight = utc_midnight(utc_date)
    noon_min = (noon(observer, date=utc_date) - midnight).total_seconds() / 60

    days = [utc_date + datetime.timedelta(days=offset) for offset in (-1, 0, 1)]
    rises = [_event_minutes(sunrise, observer, day, midnight) for day in days]
    sets = [_event_minutes(sunset, observer, day, midnight) for day in days]

    rises = [m for m in rises if m is not None and noon_min - HALF_DAY_MINUTES < m <= noon_min]
    sets = [m for m in sets if m is not None and noon_min <= m < noon_min + HALF_DAY_MINUTES]
    if not rises or not sets:
        return None

    return {
        'sunrise': max(rises),
        'sunset': min(sets),
    }


def compare_with_reference(utc_date, lat, lon):
    """Differences (solver minus astral) in minutes, or None when either side is polar."""
    window = solve_sun_window(utc_date, lat, lon)
    if window.mode is not SunMode.NORMAL:
        return None
    reference = get_reference_sun_window(utc_date, lat, lon)
    if reference is None:
        return None
    return {
        'sunrise': window.sunrise_utc_min - reference['sunrise'],
        'sunset': window.sunset_utc_min - reference['sunset'],
    }
