"""
Alastizen Universal Time: sunrise -> 00:00, sunset -> 12:00, next sunrise -> 24:00.

The day is anchored on the UTC calendar date of the input timestamp, and the
yesterday/today/tomorrow sun windows are all solved on UTC dates so that they
share one minute axis with the timestamp itself.
"""
import datetime
import math

from lib.aut_result import DAYLIGHT, NIGHT, AUTComputationError, AUTMode, AUTResult
from lib.equilux import compute_aut_equilux
from lib.solar_time import (
    MINUTES_PER_DAY,
    format_clock,
    minutes_since_utc_midnight,
    utc_date,
    utc_minutes_to_local,
)
from lib.sun_window import SunMode, solve_sun_window

ONE_DAY = datetime.timedelta(days=1)


def _check_segment(length: float, what: str) -> float:
    if not math.isfinite(length) or length <= 0:
        raise AUTComputationError(f'{what} length is {length} minutes')
    return length


def compute_aut(local_ts: datetime.datetime, lat_deg: float, lon_deg: float) -> AUTResult:
    """Map a wall-clock timestamp onto the AUT cycle for an observer.

    Args:
        local_ts: Timestamp to map. Aware datetimes keep their zone in the
                  result; naive ones are read as system local time.
        lat_deg: Latitude in decimal degrees (positive = north)
        lon_deg: Longitude in decimal degrees (positive = east)

    Returns:
        AUTResult in NORMAL mode when yesterday, today and tomorrow all have a
        real sunrise and sunset, otherwise in EQUILUX mode.

    Raises:
        AUTComputationError: if the sun windows yield an empty or non-finite
            segment, which only happens for invalid coordinates.
    """
    today_date = utc_date(local_ts)
    yesterday_date = today_date - ONE_DAY
    tomorrow_date = today_date + ONE_DAY

    today = solve_sun_window(today_date, lat_deg, lon_deg)
    if today.mode is not SunMode.NORMAL:
        return compute_aut_equilux(local_ts, lon_deg, today.eot_minutes, today.noon_utc_min)

    yesterday = solve_sun_window(yesterday_date, lat_deg, lon_deg)
    tomorrow = solve_sun_window(tomorrow_date, lat_deg, lon_deg)
    if yesterday.mode is not SunMode.NORMAL or tomorrow.mode is not SunMode.NORMAL:
        return compute_aut_equilux(local_ts, lon_deg, today.eot_minutes, today.noon_utc_min)

    t_utc = minutes_since_utc_midnight(local_ts)
    sunrise = today.sunrise_utc_min
    sunset = today.sunset_utc_min

    # Each event is (UTC minutes from its own midnight, that midnight's date)
    rise = (sunrise, today_date)
    set_ = (sunset, today_date)
    next_rise = (tomorrow.sunrise_utc_min, tomorrow_date)

    if sunrise <= t_utc < sunset:
        seg_len = _check_segment(sunset - sunrise, 'Daylight')
        ratio = (t_utc - sunrise) / seg_len
        aut_hours = 12 * ratio
        label = DAYLIGHT
    elif t_utc >= sunset:
        night_end = tomorrow.sunrise_utc_min + MINUTES_PER_DAY
        if t_utc < night_end:
            seg_len = _check_segment(night_end - sunset, 'Night')
            ratio = (t_utc - sunset) / seg_len
            aut_hours = 12 + 12 * ratio
            label = NIGHT
        else:
            # Far east of Greenwich tomorrow's sunrise can fall before the
            # end of today's UTC day; that is tomorrow's daylight.
            after = solve_sun_window(tomorrow_date + ONE_DAY, lat_deg, lon_deg)
            if after.mode is not SunMode.NORMAL:
                return compute_aut_equilux(local_ts, lon_deg, today.eot_minutes, today.noon_utc_min)
            seg_len = _check_segment(tomorrow.sunset_utc_min - tomorrow.sunrise_utc_min, 'Daylight')
            ratio = (t_utc - night_end) / seg_len
            aut_hours = 12 * ratio
            label = DAYLIGHT
            rise = next_rise
            set_ = (tomorrow.sunset_utc_min, tomorrow_date)
            next_rise = (after.sunrise_utc_min, tomorrow_date + ONE_DAY)
    else:
        # Before today's sunrise: still inside last night, which began at
        # yesterday's sunset. Both ends are lifted onto yesterday's axis.
        night_start = yesterday.sunset_utc_min
        t_cont = t_utc + MINUTES_PER_DAY
        if t_cont >= night_start:
            seg_len = _check_segment(sunrise - night_start + MINUTES_PER_DAY, 'Night')
            ratio = (t_cont - night_start) / seg_len
            aut_hours = 12 + 12 * ratio
            label = NIGHT
        else:
            # West of Greenwich yesterday's sunset can land after today's UTC
            # midnight; until then it is still yesterday's daylight.
            seg_len = _check_segment(yesterday.sunset_utc_min - yesterday.sunrise_utc_min, 'Daylight')
            ratio = (t_cont - yesterday.sunrise_utc_min) / seg_len
            aut_hours = 12 * ratio
            label = DAYLIGHT
            rise = (yesterday.sunrise_utc_min, yesterday_date)
        set_ = (yesterday.sunset_utc_min, yesterday_date)
        next_rise = (sunrise, today_date)

    # Display lengths always describe today's window, even before sunrise
    day_len = max(0, sunset - sunrise)
    night_len = max(0, tomorrow.sunrise_utc_min + MINUTES_PER_DAY - sunset)

    tz = local_ts.tzinfo
    return AUTResult(
        aut_hours=aut_hours,
        aut_clock_text=format_clock(aut_hours),
        sunrise_local=utc_minutes_to_local(*rise, tz),
        sunset_local=utc_minutes_to_local(*set_, tz),
        next_sunrise_local=utc_minutes_to_local(*next_rise, tz),
        segment_label=label,
        progress=ratio,
        segment_length_minutes=seg_len,
        day_length_minutes=day_len,
        night_length_minutes=night_len,
        mode=AUTMode.NORMAL,
        noon_utc_min=today.noon_utc_min,
    )
