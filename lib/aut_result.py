"""Result types shared by the normal and Equilux AUT mappings."""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DAYLIGHT = 'Daylight (Lux)'
NIGHT = 'Night (Umbra)'
DAYLIGHT_EQUILUX = 'Daylight (Lux, Equilux)'
NIGHT_EQUILUX = 'Night (Umbra, Equilux)'

SEGMENT_LABELS = (DAYLIGHT, NIGHT, DAYLIGHT_EQUILUX, NIGHT_EQUILUX)


class AUTComputationError(ValueError):
    """A sun window produced a segment the AUT mapping cannot use."""


class AUTMode(Enum):
    NORMAL = 'normal'
    EQUILUX = 'equilux'


@dataclass(frozen=True)
class AUTResult:
    """
    One moment mapped onto the sun-relative clock.

    ``mode`` discriminates the variant: NORMAL results come from real
    sunrise/sunset and carry ``noon_utc_min``; EQUILUX results come from the
    apparent-solar-time split and leave it as None.
    """
    aut_hours: float
    aut_clock_text: str
    sunrise_local: datetime.datetime
    sunset_local: datetime.datetime
    next_sunrise_local: datetime.datetime
    segment_label: str
    progress: float
    segment_length_minutes: float
    day_length_minutes: float
    night_length_minutes: float
    mode: AUTMode
    noon_utc_min: Optional[float] = None

    @property
    def is_daylight(self) -> bool:
        return self.segment_label.startswith('Daylight')

    @property
    def is_equilux(self) -> bool:
        return self.mode is AUTMode.EQUILUX
