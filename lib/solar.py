"""Solar declination and equation of time from the day of year."""

import datetime
import math
from typing import NamedTuple


class SolarParams(NamedTuple):
    decl_deg: float
    eot_minutes: float


def day_of_year(d) -> int:
    """Return the day of year (1 = Jan 1) for a date or datetime.

    Datetimes are reduced to their UTC calendar date first, so the day
    boundary is always UTC midnight regardless of the caller's timezone.
    Naive datetimes are taken as system local time.
    """
    if isinstance(d, datetime.datetime):
        d = d.astimezone(datetime.timezone.utc).date()
    return d.timetuple().tm_yday


def solar_params(n: int) -> SolarParams:
    """NOAA fractional-year approximation of declination and equation of time.

    Args:
        n: Day of year, 1-based. Values outside 1..366 are fine; the series
           is periodic in the fractional year angle.

    Returns:
        SolarParams with declination in degrees and equation of time in minutes.
    """
    gamma = 2 * math.pi * (n - 1) / 365.0

    decl_rad = math.asin(
        0.006918
        - 0.399912 * math.cos(gamma)
        + 0.070257 * math.sin(gamma)
        - 0.006758 * math.cos(2 * gamma)
        + 0.000907 * math.sin(2 * gamma)
        - 0.002697 * math.cos(3 * gamma)
        + 0.00148 * math.sin(3 * gamma)
    )

    eot = 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2 * gamma)
        - 0.040849 * math.sin(2 * gamma)
    )

    return SolarParams(decl_deg=math.degrees(decl_rad), eot_minutes=eot)


def solar_noon_utc_minutes(lon_deg: float, eot_minutes: float) -> float:
    """Minutes after 00:00 UTC at which the sun crosses the meridian."""
    return 720 - 4 * lon_deg - eot_minutes
