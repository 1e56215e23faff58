#!/usr/bin/env python3
import argparse
import json
import os
import sys
import time

from dateutil import parser as date_parser

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from lib.aut import compute_aut  # noqa: E402
from lib.day_profile import AUTDayProfile  # noqa: E402
from lib.location_store import InvalidCoordinatesError, LocationStore, validate_coordinates  # noqa: E402
from lib.rays import classify_ray_window, remaining_real_minutes  # noqa: E402
from lib.solar_time import minutes_to_hhmmss, utc_date  # noqa: E402
from lib.sun_utils import compare_with_reference, get_reference_sun_window  # noqa: E402
from lib.timezone_utils import localize, now_in, resolve_timezone  # noqa: E402
from lib.utils import say  # noqa: E402
from lib.visualizer import AUTVisualizer  # noqa: E402


def format_reading(result, position):
    """Human-readable summary of one AUT reading."""
    lines = [
        f'AUT {result.aut_clock_text}  {result.segment_label}  ({result.progress:.0%} through segment)',
        f'Ray: {position.window.name} ({position.progress:.0%}, '
        f'{remaining_real_minutes(result, position):.0f} min remaining)',
        f'Sunrise {result.sunrise_local:%H:%M}  Sunset {result.sunset_local:%H:%M}  '
        f'Next sunrise {result.next_sunrise_local:%H:%M}',
        f'Day {result.day_length_minutes:.0f} min  Night {result.night_length_minutes:.0f} min',
    ]
    return '\n'.join(lines)


def format_comparison(ts, lat, lon):
    day = utc_date(ts)
    reference = get_reference_sun_window(day, lat, lon)
    if reference is None:
        return f'astral: no sunrise/sunset on {day} (polar)'
    diff = compare_with_reference(day, lat, lon)
    line = (f"astral ({day}): sunrise {minutes_to_hhmmss(reference['sunrise'])} UTC, "
            f"sunset {minutes_to_hhmmss(reference['sunset'])} UTC")
    if diff is not None:
        line += f"; solver differs by {diff['sunrise']:+.1f} / {diff['sunset']:+.1f} min"
    return line


def get_timestamp(args):
    if args.time:
        return localize(date_parser.parse(args.time), args.tz)
    return now_in(args.tz)


def main():
    parser = argparse.ArgumentParser(description='Alastizen Universal Time clock')
    parser.add_argument(
        '--lat',
        help='Latitude in decimal degrees (default: saved location)',
        type=float,
    )
    parser.add_argument(
        '--lon',
        help='Longitude in decimal degrees, positive east (default: saved location)',
        type=float,
    )
    parser.add_argument(
        '--time',
        help='Local time to evaluate (default: now)',
        type=str,
    )
    parser.add_argument(
        '--tz',
        help='IANA timezone for --time and output (default: system local)',
        type=str,
    )
    parser.add_argument(
        '-t', '--table',
        help='Print the AUT table for the whole local day',
        action='store_true',
    )
    parser.add_argument(
        '-c', '--chart',
        help='Generate PNG chart to aut-<date>.png',
        action='store_true',
    )
    parser.add_argument(
        '-d', '--directory',
        help='Directory for output files (default: current directory)',
        type=str,
        default='.',
    )
    parser.add_argument(
        '--step',
        help='Minutes between samples for --table/--chart',
        type=int,
        default=10,
    )
    parser.add_argument(
        '--json',
        help='Print the reading as JSON',
        action='store_true',
    )
    parser.add_argument(
        '--compare',
        help='Also print astral\'s sunrise/sunset for the same UTC day',
        action='store_true',
    )
    parser.add_argument(
        '--watch',
        help='Keep printing the current reading once per second',
        action='store_true',
    )
    parser.add_argument(
        '--save-location',
        help='Remember --lat/--lon as the default location',
        action='store_true',
    )
    args = parser.parse_args()

    if (args.lat is None) != (args.lon is None):
        parser.error('--lat and --lon must be given together')
    if args.tz and resolve_timezone(args.tz) is None:
        parser.error(f'Unknown timezone: {args.tz}')
    if args.watch and args.time:
        parser.error('--watch always uses the current time')
    if args.step <= 0:
        parser.error('--step must be positive')

    store = LocationStore()
    try:
        if args.lat is None:
            coords = store.load()
        else:
            coords = validate_coordinates(args.lat, args.lon)
        if args.save_location:
            store.save(*coords)
            say(f'Saved location {coords.lat}, {coords.lon}')
    except InvalidCoordinatesError as e:
        parser.error(str(e))

    try:
        ts = get_timestamp(args)
    except (ValueError, OverflowError) as e:
        parser.error(f'Could not parse --time: {e}')

    if args.table or args.chart:
        profile = AUTDayProfile(coords.lat, coords.lon, ts.date(), args.tz, args.step)
        samples = profile.get_samples()

        if args.table:
            print(AUTVisualizer.format_table(samples))

        if args.chart:
            output_path = os.path.join(args.directory, f'aut-{ts.date().isoformat()}.png')
            say(f'Writing chart to {output_path}')
            png_bytes = AUTVisualizer.generate_png(samples)
            with open(output_path, 'wb') as f:
                f.write(png_bytes)
        return

    try:
        while True:
            result = compute_aut(ts, coords.lat, coords.lon)
            position = classify_ray_window(result.aut_hours)

            if args.json:
                print(json.dumps(AUTVisualizer.to_dict(result, position)))
            else:
                print(format_reading(result, position))
            if args.compare:
                print(format_comparison(ts, coords.lat, coords.lon))

            if not args.watch:
                break
            time.sleep(1)
            ts = now_in(args.tz)
    except KeyboardInterrupt:
        say('Stopped')


if __name__ == '__main__':
    main()
