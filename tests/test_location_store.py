import json
import os
import tempfile

import pytest

from lib.location_store import (
    DEFAULT_LOCATION,
    Coordinates,
    InvalidCoordinatesError,
    LocationStore,
    validate_coordinates,
)


@pytest.fixture
def store():
    """Create a LocationStore in a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield LocationStore(os.path.join(tmpdir, 'config'))


class TestValidateCoordinates:

    def test_accepts_numbers(self):
        assert validate_coordinates(35.25, -80.8) == Coordinates(35.25, -80.8)

    def test_accepts_numeric_strings(self):
        assert validate_coordinates('35.25', '-80.8') == Coordinates(35.25, -80.8)

    def test_poles_and_antimeridian(self):
        assert validate_coordinates(90, 180) == Coordinates(90.0, 180.0)
        assert validate_coordinates(-90, -180) == Coordinates(-90.0, -180.0)

    @pytest.mark.parametrize("lat,lon", [
        (91, 0), (-90.5, 0), (0, 180.1), (0, -181),
        (float('nan'), 0), (0, float('inf')),
        (None, 0), ('north', 0),
    ])
    def test_rejects(self, lat, lon):
        with pytest.raises(InvalidCoordinatesError):
            validate_coordinates(lat, lon)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_coordinates(100, 0)


class TestLocationStore:

    def test_default_when_nothing_saved(self, store):
        assert store.load() == DEFAULT_LOCATION

    def test_save_and_load(self, store):
        store.save(64.15, -21.94)
        assert store.load() == Coordinates(64.15, -21.94)

    def test_creates_directory(self, store):
        assert not os.path.exists(store.base_dir)
        store.save(1, 2)
        assert os.path.exists(store.path)

    def test_file_format(self, store):
        store.save(35.25, -80.8)
        with open(store.path) as f:
            assert json.load(f) == {'lat': 35.25, 'lon': -80.8}

    def test_overwrites(self, store):
        store.save(1, 2)
        store.save(3, 4)
        assert store.load() == Coordinates(3.0, 4.0)

    def test_no_temp_files_left(self, store):
        store.save(1, 2)
        leftovers = [f for f in os.listdir(store.base_dir) if f.startswith('.tmp_')]
        assert leftovers == []

    def test_invalid_save_writes_nothing(self, store):
        with pytest.raises(InvalidCoordinatesError):
            store.save(120, 0)
        assert not os.path.exists(store.path)

    def test_corrupt_file_is_rejected(self, store):
        os.makedirs(store.base_dir)
        with open(store.path, 'w') as f:
            json.dump({'lat': 200, 'lon': 0}, f)
        with pytest.raises(InvalidCoordinatesError):
            store.load()

    def test_default_directory_from_appdirs(self, monkeypatch):
        monkeypatch.setattr('appdirs.user_config_dir', lambda name: f'/tmp/{name}')
        assert LocationStore().base_dir == '/tmp/aut_clock'
