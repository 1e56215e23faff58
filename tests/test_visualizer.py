import datetime
import json
from unittest.mock import patch

import pytest

from lib.aut import compute_aut
from lib.day_profile import AUTDayProfile
from lib.rays import classify_ray_window
from lib.visualizer import AUTVisualizer
from .test_utils import CHARLOTTE, PNG_MAGIC_BYTES, local


@pytest.fixture(scope='module')
def samples():
    return AUTDayProfile(*CHARLOTTE, datetime.date(2025, 6, 10), 'America/New_York',
                         step_minutes=30).get_samples()


class TestFormatTable:

    def test_header_and_rows(self, samples):
        table = AUTVisualizer.format_table(samples)
        assert 'AUT at 35.25, -80.80 on 2025-06-10 (America/New_York)' in table
        lines = table.split('\n')
        rows = [line for line in lines if line[:1].isdigit()]
        assert len(rows) == 48
        assert rows[0].startswith('00:00')
        assert rows[-1].startswith('23:30')

    def test_mentions_rays_and_segments(self, samples):
        table = AUTVisualizer.format_table(samples)
        assert 'Red' in table
        assert 'Daylight (Lux)' in table
        assert 'Night (Umbra)' in table


class TestGeneratePng:

    @patch('plotly.graph_objects.Figure.to_image')
    def test_returns_image_bytes(self, mock_to_image, samples):
        mock_to_image.return_value = PNG_MAGIC_BYTES
        assert AUTVisualizer.generate_png(samples) == PNG_MAGIC_BYTES
        mock_to_image.assert_called_once_with(format='png')


class TestToDict:

    def test_normal_reading(self):
        result = compute_aut(local(2025, 6, 10, 15, 0), *CHARLOTTE)
        position = classify_ray_window(result.aut_hours)
        data = AUTVisualizer.to_dict(result, position)

        assert data['mode'] == 'normal'
        assert data['aut_hours'] == result.aut_hours
        assert data['segment'] == 'Daylight (Lux)'
        assert data['sunrise'].startswith('2025-06-10T0')
        assert data['noon_utc_min'] == result.noon_utc_min
        assert data['ray']['name'] == position.window.name
        assert data['ray']['remaining_minutes'] >= 0

    def test_is_json_serializable(self):
        result = compute_aut(local(2025, 12, 21, 12, 0, tz='Europe/Oslo'), 69.65, 18.96)
        data = AUTVisualizer.to_dict(result, classify_ray_window(result.aut_hours))
        decoded = json.loads(json.dumps(data))
        assert decoded['mode'] == 'equilux'
        assert decoded['noon_utc_min'] is None
        assert decoded['day_length_minutes'] == 720
