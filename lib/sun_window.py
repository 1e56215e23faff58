"""
Sunrise/sunset solver for a single UTC calendar day.

All minute values are measured from 00:00 UTC of the requested day and are
not wrapped: an observer far west can have a sunset later than 1440, and one
far east a sunrise below 0.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from lib.solar import day_of_year, solar_noon_utc_minutes, solar_params
from lib.utils import clamp

# Upper limb on the horizon, with standard refraction
SUNRISE_ALTITUDE_DEG = -0.8333


class SunMode(Enum):
    NORMAL = 'normal'
    POLAR_DAY = 'polar_day'
    POLAR_NIGHT = 'polar_night'


@dataclass(frozen=True)
class NormalSunWindow:
    sunrise_utc_min: float
    sunset_utc_min: float
    noon_utc_min: float
    eot_minutes: float
    decl_deg: float
    mode: SunMode = field(default=SunMode.NORMAL, init=False)


@dataclass(frozen=True)
class PolarSunWindow:
    mode: SunMode
    noon_utc_min: float
    eot_minutes: float
    decl_deg: float

    def __post_init__(self):
        if self.mode not in (SunMode.POLAR_DAY, SunMode.POLAR_NIGHT):
            raise ValueError('PolarSunWindow requires POLAR_DAY or POLAR_NIGHT')

    @property
    def is_polar_day(self) -> bool:
        return self.mode is SunMode.POLAR_DAY


SunWindow = Union[NormalSunWindow, PolarSunWindow]


def hour_angle_cosine(lat_deg: float, decl_deg: float) -> float:
    """Cosine of the sunrise hour angle; outside [-1, 1] means no crossing."""
    phi = math.radians(lat_deg)
    decl = math.radians(decl_deg)
    return ((math.sin(math.radians(SUNRISE_ALTITUDE_DEG)) - math.sin(phi) * math.sin(decl))
            / (math.cos(phi) * math.cos(decl)))


def solve_sun_window(utc_date, lat_deg: float, lon_deg: float) -> SunWindow:
    """Solve solar noon, sunrise and sunset for one UTC calendar day.

    Args:
        utc_date: date (or datetime, reduced to its UTC date); time of day
                  is ignored
        lat_deg: Latitude in decimal degrees (positive = north)
        lon_deg: Longitude in decimal degrees (positive = east)

    Returns:
        NormalSunWindow, or PolarSunWindow tagged POLAR_DAY / POLAR_NIGHT
        when the sun never sets or never rises that day.
    """
    params = solar_params(day_of_year(utc_date))
    noon = solar_noon_utc_minutes(lon_deg, params.eot_minutes)

    x = hour_angle_cosine(lat_deg, params.decl_deg)

    # Classification uses the raw cosine; the clamp below only absorbs
    # rounding right at the boundary.
    if x > 1:
        return PolarSunWindow(SunMode.POLAR_NIGHT, noon, params.eot_minutes, params.decl_deg)
    if x < -1:
        return PolarSunWindow(SunMode.POLAR_DAY, noon, params.eot_minutes, params.decl_deg)

    h0 = math.degrees(math.acos(clamp(x, -1.0, 1.0)))
    return NormalSunWindow(
        sunrise_utc_min=noon - 4 * h0,
        sunset_utc_min=noon + 4 * h0,
        noon_utc_min=noon,
        eot_minutes=params.eot_minutes,
        decl_deg=params.decl_deg,
    )
