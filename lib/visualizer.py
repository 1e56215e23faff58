import pandas as pd
import plotly.express as px

from lib.aut_result import AUTResult
from lib.rays import RAY_WINDOWS, RayPosition, remaining_real_minutes


class AUTVisualizer:
    COLORS = {ray.name: ray.tint for ray in RAY_WINDOWS}

    @staticmethod
    def _title(profile_df: pd.DataFrame) -> str:
        lat = profile_df.attrs.get('lat')
        lon = profile_df.attrs.get('lon')
        day = profile_df.attrs.get('date', 'Unknown')
        return f'AUT at {lat:.2f}, {lon:.2f} on {day}'

    @staticmethod
    def generate_png(profile_df: pd.DataFrame) -> bytes:
        flat = profile_df.reset_index()
        fig = px.scatter(
            flat,
            x='local time',
            y='aut_hours',
            color='ray',
            width=800,
            height=400,
            color_discrete_map=AUTVisualizer.COLORS,
        )
        fig.update_layout(
            yaxis={'dtick': 2, 'range': [0, 24]},
            yaxis_title='AUT hour',
            title=AUTVisualizer._title(profile_df),
        )
        return fig.to_image(format='png')

    @staticmethod
    def format_table(profile_df: pd.DataFrame) -> str:
        tz = profile_df.attrs.get('tz', '')

        lines = []
        lines.append(f"\n{AUTVisualizer._title(profile_df)} ({tz})")
        lines.append(f"{'Local':>5} {'AUT':>8} {'Ray':<16} {'Segment'}")
        lines.append("-" * 56)

        for ts, row in profile_df.iterrows():
            lines.append(f"{ts:%H:%M} {row['aut_clock']:>8} {row['ray']:<16} {row['segment']}")
        return '\n'.join(lines)

    @staticmethod
    def to_dict(result: AUTResult, position: RayPosition) -> dict:
        """JSON-ready view of one AUT reading and its ray window."""
        return {
            'mode': result.mode.value,
            'aut_hours': result.aut_hours,
            'aut_clock': result.aut_clock_text,
            'segment': result.segment_label,
            'progress': result.progress,
            'segment_length_minutes': result.segment_length_minutes,
            'day_length_minutes': result.day_length_minutes,
            'night_length_minutes': result.night_length_minutes,
            'sunrise': result.sunrise_local.isoformat(),
            'sunset': result.sunset_local.isoformat(),
            'next_sunrise': result.next_sunrise_local.isoformat(),
            'noon_utc_min': result.noon_utc_min,
            'ray': {
                'index': position.index,
                'name': position.window.name,
                'start_hour': position.window.start_hour,
                'end_hour': position.window.end_hour,
                'progress': position.progress,
                'remaining_minutes': remaining_real_minutes(result, position),
            },
        }
