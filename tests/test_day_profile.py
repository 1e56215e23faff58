import datetime

import pandas as pd
import pytest

from lib.day_profile import AUTDayProfile
from lib.rays import RAY_WINDOWS
from .test_utils import CHARLOTTE, TOKYO, count_decreases

RAY_NAMES = [ray.name for ray in RAY_WINDOWS]


@pytest.fixture(scope='module')
def charlotte_profile():
    return AUTDayProfile(*CHARLOTTE, datetime.date(2025, 6, 10), 'America/New_York', step_minutes=10)


@pytest.fixture(scope='module')
def charlotte_samples(charlotte_profile):
    return charlotte_profile.get_samples()


class TestGetSamples:

    def test_structure(self, charlotte_samples):
        assert isinstance(charlotte_samples, pd.DataFrame)
        assert len(charlotte_samples) == 144
        assert all(col in charlotte_samples.columns
                   for col in ['aut_hours', 'aut_clock', 'segment', 'mode', 'ray', 'ray_progress'])
        assert charlotte_samples.index.name == 'local time'

    def test_attrs(self, charlotte_samples):
        assert charlotte_samples.attrs['lat'] == 35.25
        assert charlotte_samples.attrs['lon'] == -80.8
        assert charlotte_samples.attrs['date'] == '2025-06-10'
        assert charlotte_samples.attrs['tz'] == 'America/New_York'

    def test_index_covers_local_day(self, charlotte_samples):
        first = charlotte_samples.index[0]
        last = charlotte_samples.index[-1]
        assert (first.hour, first.minute) == (0, 0)
        assert (last.hour, last.minute) == (23, 50)

    def test_values_in_range(self, charlotte_samples):
        assert (charlotte_samples['aut_hours'] >= 0).all()
        assert (charlotte_samples['aut_hours'] < 24).all()
        assert charlotte_samples['ray_progress'].between(0, 1).all()
        assert (charlotte_samples['mode'] == 'normal').all()

    def test_single_wrap_at_sunrise(self, charlotte_samples):
        assert count_decreases(charlotte_samples['aut_hours']) == 1

    def test_far_east(self):
        samples = AUTDayProfile(*TOKYO, datetime.date(2025, 6, 21), 'Asia/Tokyo').get_samples()
        assert len(samples) == 144
        assert count_decreases(samples['aut_hours']) == 1
        assert set(samples['segment']) == {'Daylight (Lux)', 'Night (Umbra)'}

    def test_dst_day_is_short(self):
        samples = AUTDayProfile(*CHARLOTTE, datetime.date(2025, 3, 9), 'America/New_York').get_samples()
        assert len(samples) == 138

    def test_polar_night_is_equilux(self):
        samples = AUTDayProfile(69.65, 18.96, datetime.date(2025, 12, 21), 'Europe/Oslo',
                                step_minutes=30).get_samples()
        assert len(samples) == 48
        assert (samples['mode'] == 'equilux').all()


class TestRaySchedule:

    def test_runs_are_contiguous(self, charlotte_profile, charlotte_samples):
        schedule = charlotte_profile.ray_schedule(charlotte_samples)
        assert list(schedule.columns) == ['ray', 'start', 'end']
        for prev_end, next_start in zip(schedule['end'][:-1], schedule['start'][1:]):
            assert prev_end == next_start

    def test_spans_the_day(self, charlotte_profile, charlotte_samples):
        schedule = charlotte_profile.ray_schedule(charlotte_samples)
        assert schedule['start'].iloc[0] == charlotte_samples.index[0]
        assert schedule['end'].iloc[-1] - schedule['start'].iloc[0] == pd.Timedelta(hours=24)

    def test_rays_follow_catalog_order(self, charlotte_profile, charlotte_samples):
        schedule = charlotte_profile.ray_schedule(charlotte_samples)
        indices = [RAY_NAMES.index(name) for name in schedule['ray']]
        for a, b in zip(indices, indices[1:]):
            assert b == (a + 1) % 12

    def test_every_ray_appears(self, charlotte_profile, charlotte_samples):
        schedule = charlotte_profile.ray_schedule(charlotte_samples)
        assert set(schedule['ray']) == set(RAY_NAMES)

    def test_computes_samples_when_missing(self):
        profile = AUTDayProfile(*CHARLOTTE, datetime.date(2025, 1, 15), 'America/New_York', step_minutes=30)
        schedule = profile.ray_schedule()
        assert len(schedule) >= 12
        assert schedule.attrs['date'] == '2025-01-15'
