"""The twelve ray windows: fixed 2-hour bands across the 24 AUT hours."""

import math
from typing import NamedTuple

from lib.aut_result import AUTResult
from lib.utils import clamp

# Values sitting exactly on a boundary fall into the later window
BOUNDARY_EPSILON = 1e-9


class RayWindow(NamedTuple):
    name: str
    start_hour: int
    end_hour: int
    tint: str


RAY_WINDOWS = (
    RayWindow('Red', 0, 2, 'red'),
    RayWindow('Orange', 2, 4, 'orange'),
    RayWindow('Yellow', 4, 6, 'gold'),
    RayWindow('Green', 6, 8, 'green'),
    RayWindow('Teal', 8, 10, 'teal'),
    RayWindow('Blue', 10, 12, 'blue'),
    RayWindow('Indigo', 12, 14, 'indigo'),
    RayWindow('Violet', 14, 16, 'violet'),
    RayWindow('Magenta', 16, 18, 'magenta'),
    RayWindow('Omni', 18, 20, 'silver'),
    RayWindow('Elemental', 20, 22, 'mediumseagreen'),
    RayWindow('Infinite of ALL', 22, 24, 'skyblue'),
)


class RayPosition(NamedTuple):
    index: int
    window: RayWindow
    progress: float


def wrap_hours(hours: float) -> float:
    return ((hours % 24) + 24) % 24


def ray_index_for_aut(hours: float) -> int:
    """Index of the window containing ``hours`` (wrapped; non-finite reads as 0)."""
    h = wrap_hours(hours) if math.isfinite(hours) else 0.0
    for i, ray in enumerate(RAY_WINDOWS):
        start = ray.start_hour - BOUNDARY_EPSILON
        end = ray.end_hour - BOUNDARY_EPSILON
        if start <= h < end:
            return i
    return 0


def classify_ray_window(aut_hours: float) -> RayPosition:
    """Find the active ray window and how far through it ``aut_hours`` is.

    Args:
        aut_hours: AUT hour value; any real number, wrapped into [0, 24)

    Returns:
        RayPosition with the window index, the window itself, and progress
        in [0, 1].
    """
    h = wrap_hours(aut_hours) if math.isfinite(aut_hours) else 0.0
    index = ray_index_for_aut(h)
    ray = RAY_WINDOWS[index]
    progress = (h - ray.start_hour) / (ray.end_hour - ray.start_hour)
    return RayPosition(index, ray, clamp(progress, 0.0, 1.0))


def remaining_aut_hours(aut_hours: float, position: RayPosition) -> float:
    return max(0.0, position.window.end_hour - wrap_hours(aut_hours))


def remaining_real_minutes(result: AUTResult, position: RayPosition) -> float:
    """Wall-clock minutes until the active ray window ends.

    One AUT hour lasts a twelfth of the current daylight or night, so the
    remaining AUT hours are scaled by the length of whichever half is active.
    """
    if result.is_daylight:
        minutes_per_aut_hour = result.day_length_minutes / 12
    else:
        minutes_per_aut_hour = result.night_length_minutes / 12
    return max(0.0, remaining_aut_hours(result.aut_hours, position) * minutes_per_aut_hour)
