"""Time string parsing for course files."""

import math
import re

_CLOCK_PATTERN = re.compile(r'^(?:(\d+):)?(\d{1,2}):(\d{1,2}(?:\.\d+)?)$')
_SECONDS_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*s?$')


def parse_time_string(value: str) -> float:
    """Parse a time-of-day or duration string into seconds.

    Accepts ``HH:MM:SS``, ``MM:SS`` and plain seconds (``90``, ``90.5``,
    ``90s``). Minutes and seconds of clock values must be below 60.

    Args:
        value: Raw time cell

    Returns:
        Seconds as float

    Raises:
        ValueError: If the string is not a valid time
    """
    text = value.strip().lower()

    match = _CLOCK_PATTERN.match(text)
    if match:
        hours, minutes, seconds = match.groups()
        minutes = int(minutes)
        seconds = float(seconds)
        if hours is not None and minutes >= 60:
            raise ValueError(f"Invalid minutes in time {value!r}")
        if seconds >= 60:
            raise ValueError(f"Invalid seconds in time {value!r}")
        return int(hours or 0) * 3600 + minutes * 60 + seconds

    match = _SECONDS_PATTERN.match(text)
    if match:
        seconds = float(match.group(1))
        if math.isfinite(seconds):
            return seconds

    raise ValueError(f"Invalid time {value!r}")


def format_seconds(seconds: float) -> str:
    """Format seconds as ``H:MM:SS``."""
    total = int(round(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"
