"""
Equilux fallback: an AUT mapping that needs no real sunrise or sunset.

Used whenever a horizon crossing is missing for today or an adjacent day.
The apparent solar day is cut into two fixed 12-hour halves around solar
noon, so the clock keeps running smoothly through polar day and polar night.
"""
import datetime

from lib.aut_result import (
    DAYLIGHT_EQUILUX,
    NIGHT_EQUILUX,
    AUTMode,
    AUTResult,
)
from lib.solar_time import (
    apparent_solar_minutes,
    format_clock,
    minutes_since_utc_midnight,
    utc_date,
    utc_minutes_to_local,
)

DAY_START_AST = 360   # 06:00 apparent solar time
DAY_END_AST = 1080    # 18:00 apparent solar time
HALF_DAY_MINUTES = 720


def compute_aut_equilux(local_ts: datetime.datetime, lon_deg: float, eot_minutes: float,
                        noon_utc_min: float) -> AUTResult:
    """Map a timestamp onto AUT using the 06:00/18:00 apparent solar split.

    Args:
        local_ts: Wall-clock timestamp (aware, or naive system local time)
        lon_deg: Longitude in decimal degrees (positive = east)
        eot_minutes: Equation of time for today's UTC date
        noon_utc_min: Today's solar noon in minutes after 00:00 UTC

    Returns:
        AUTResult in EQUILUX mode. The reported sunrise/sunset are virtual
        (noon -/+ 6 hours), not horizon crossings.
    """
    t_utc = minutes_since_utc_midnight(local_ts)
    ast_min = apparent_solar_minutes(t_utc, lon_deg, eot_minutes)

    if DAY_START_AST <= ast_min < DAY_END_AST:
        ratio = (ast_min - DAY_START_AST) / HALF_DAY_MINUTES
        aut_hours = 12 * ratio
        label = DAYLIGHT_EQUILUX
    else:
        if ast_min >= DAY_END_AST:
            delta = ast_min - DAY_END_AST
        else:
            delta = ast_min + (1440 - DAY_END_AST)
        ratio = delta / HALF_DAY_MINUTES
        aut_hours = 12 + 12 * ratio
        label = NIGHT_EQUILUX

    tz = local_ts.tzinfo
    today = utc_date(local_ts)
    tomorrow = today + datetime.timedelta(days=1)
    sunrise_virtual = noon_utc_min - 360
    sunset_virtual = noon_utc_min + 360

    return AUTResult(
        aut_hours=aut_hours,
        aut_clock_text=format_clock(aut_hours),
        sunrise_local=utc_minutes_to_local(sunrise_virtual, today, tz),
        sunset_local=utc_minutes_to_local(sunset_virtual, today, tz),
        next_sunrise_local=utc_minutes_to_local(sunrise_virtual, tomorrow, tz),
        segment_label=label,
        progress=ratio,
        segment_length_minutes=HALF_DAY_MINUTES,
        day_length_minutes=HALF_DAY_MINUTES,
        night_length_minutes=HALF_DAY_MINUTES,
        mode=AUTMode.EQUILUX,
    )
