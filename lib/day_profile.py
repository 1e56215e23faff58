import datetime

import pandas as pd

from lib.aut import compute_aut
from lib.rays import classify_ray_window
from lib.timezone_utils import resolve_timezone


class AUTDayProfile:
    def __init__(self, lat: float, lon: float, day: datetime.date, tz_name: str = None,
                 step_minutes: int = 10):
        self.lat = lat
        self.lon = lon
        self.day = day
        self.tz_name = tz_name
        self.step_minutes = step_minutes
        self.tz = resolve_timezone(tz_name) or datetime.datetime.now().astimezone().tzinfo

    def _local_day_bounds(self):
        """UTC instants of this local day's midnight and the next one."""
        start = datetime.datetime(self.day.year, self.day.month, self.day.day, tzinfo=self.tz)
        next_day = self.day + datetime.timedelta(days=1)
        end = datetime.datetime(next_day.year, next_day.month, next_day.day, tzinfo=self.tz)
        return (start.astimezone(datetime.timezone.utc), end.astimezone(datetime.timezone.utc))

    def get_samples(self) -> pd.DataFrame:
        """Evaluate the AUT clock every step_minutes across the local day."""
        start, end = self._local_day_bounds()
        stamps = pd.date_range(start, end, freq=f'{self.step_minutes}min', inclusive='left')

        rows = []
        for ts in stamps:
            local_ts = ts.to_pydatetime().astimezone(self.tz)
            result = compute_aut(local_ts, self.lat, self.lon)
            position = classify_ray_window(result.aut_hours)
            rows.append({
                'local time': local_ts,
                'aut_hours': result.aut_hours,
                'aut_clock': result.aut_clock_text,
                'segment': result.segment_label,
                'mode': result.mode.value,
                'ray': position.window.name,
                'ray_progress': position.progress,
            })

        df = pd.DataFrame(rows).set_index('local time')

        df.attrs['lat'] = self.lat
        df.attrs['lon'] = self.lon
        df.attrs['date'] = self.day.isoformat()
        df.attrs['tz'] = str(self.tz)

        return df

    def ray_schedule(self, samples: pd.DataFrame = None) -> pd.DataFrame:
        """Consecutive runs of each ray window over the day, in local time.

        A ray can show up twice in one local day (once after midnight and
        again in the evening), so runs are split wherever the ray changes.
        """
        if samples is None:
            samples = self.get_samples()

        step = datetime.timedelta(minutes=self.step_minutes)
        flat = samples.reset_index()
        run_id = (flat['ray'] != flat['ray'].shift()).cumsum().rename('run')

        schedule = flat.groupby(run_id).agg(
            ray=('ray', 'first'),
            start=('local time', 'first'),
            end=('local time', 'last'),
        )
        schedule['end'] = schedule['end'] + step
        schedule = schedule.reset_index(drop=True)

        schedule.attrs.update(samples.attrs)
        return schedule
