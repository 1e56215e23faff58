"""
Persistence for the observer's manually entered location.

The clock falls back to a fixed default location when nothing has been
saved. Coordinates are validated here, at the boundary where they enter the
program; the solar code itself never checks them.
"""
import json
import math
import os
import tempfile
from typing import NamedTuple, Optional

import appdirs

LOCATION_FILENAME = 'location.json'


class Coordinates(NamedTuple):
    lat: float
    lon: float


# Charlotte, NoDa
DEFAULT_LOCATION = Coordinates(35.25, -80.8)


class InvalidCoordinatesError(ValueError):
    """Latitude/longitude that is non-finite or out of range."""


def validate_coordinates(lat, lon) -> Coordinates:
    """Check and normalize a latitude/longitude pair.

    Args:
        lat: Latitude in decimal degrees, -90..90 (numbers or numeric strings)
        lon: Longitude in decimal degrees, -180..180

    Returns:
        Coordinates with float fields.

    Raises:
        InvalidCoordinatesError: if either value is missing, non-numeric,
            non-finite, or out of range
    """
    try:
        lat = float(lat)
        lon = float(lon)
    except (TypeError, ValueError):
        raise InvalidCoordinatesError(f'Coordinates must be numbers, got {lat!r}, {lon!r}') from None

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinatesError('Coordinates must be finite')
    if not -90 <= lat <= 90:
        raise InvalidCoordinatesError(f'Latitude {lat} outside -90..90')
    if not -180 <= lon <= 180:
        raise InvalidCoordinatesError(f'Longitude {lon} outside -180..180')
    return Coordinates(lat, lon)


class LocationStore:
    """
    Saved location on the local filesystem.

    Uses atomic writes (write to .tmp, then rename) so a crash never leaves a
    half-written location file behind.
    """

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = base_dir or appdirs.user_config_dir('aut_clock')

    @property
    def path(self) -> str:
        return os.path.join(self.base_dir, LOCATION_FILENAME)

    def load(self) -> Coordinates:
        """Return the saved location, or DEFAULT_LOCATION if none was saved."""
        if not os.path.exists(self.path):
            return DEFAULT_LOCATION

        with open(self.path, 'r') as f:
            data = json.load(f)
        return validate_coordinates(data.get('lat'), data.get('lon'))

    def save(self, lat, lon) -> Coordinates:
        coords = validate_coordinates(lat, lon)

        if not os.path.exists(self.base_dir):
            os.makedirs(self.base_dir, exist_ok=True)

        # Temp file in the same directory so the rename stays atomic
        fd, temp_path = tempfile.mkstemp(dir=self.base_dir, prefix='.tmp_', suffix='')

        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(coords._asdict(), f)
            os.replace(temp_path, self.path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

        return coords
