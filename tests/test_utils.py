"""Common test helpers, plus tests for lib.utils."""
import datetime
import math
from zoneinfo import ZoneInfo

from lib.utils import clamp, say

# Charlotte, NoDa
CHARLOTTE = (35.25, -80.8)
TOKYO = (35.68, 139.77)
LONDON = (51.47, -0.46)

PNG_MAGIC_BYTES = b'\x89PNG\r\n\x1a\n'


def local(year, month, day, hour=0, minute=0, tz='America/New_York'):
    """Aware wall-clock timestamp in the given IANA zone."""
    return datetime.datetime(year, month, day, hour, minute, tzinfo=ZoneInfo(tz))


def utc(year, month, day, hour=0, minute=0, second=0):
    return datetime.datetime(year, month, day, hour, minute, second, tzinfo=datetime.timezone.utc)


def count_decreases(values) -> int:
    values = list(values)
    return sum(1 for a, b in zip(values, values[1:]) if b < a)


def assert_valid_png(file_path: str) -> None:
    """Assert that a file is a valid PNG by checking magic bytes."""
    with open(file_path, 'rb') as f:
        assert f.read(8) == PNG_MAGIC_BYTES, f"{file_path} is not a valid PNG"


class TestClamp:
    def test_inside(self):
        assert clamp(0.5, 0.0, 1.0) == 0.5

    def test_limits(self):
        assert clamp(-3, -1, 1) == -1
        assert clamp(1.0000001, -1.0, 1.0) == 1.0

    def test_nan_passes_through(self):
        assert math.isnan(clamp(float('nan'), -1.0, 1.0))


class TestSay:
    def test_writes_to_stderr(self, capsys):
        say('hello')
        captured = capsys.readouterr()
        assert captured.out == ''
        assert captured.err.endswith(': hello\n')
