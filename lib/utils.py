import datetime
import sys


def say(msg):
    """Log a message to stderr with timestamp."""
    d = datetime.datetime.now().replace(microsecond=0)
    sys.stderr.write(f'{d}: {str(msg)}\n')
    sys.stderr.flush()


def clamp(x, lo, hi):
    """Limit x to [lo, hi]. A NaN x comes back as NaN."""
    return min(max(x, lo), hi)
