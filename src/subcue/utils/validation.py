"""Validation utilities."""

import math
import re

from ..exceptions import ValidationError

_CLOCK_RE = re.compile(
    r"""
    ^
    (?:(?P<h>\d+):)?          # optional hours
    (?P<m>\d{1,2}):           # minutes
    (?P<s>\d{1,2})            # seconds
    (?:[.,](?P<frac>\d{1,3}))?  # optional fraction
    $
    """,
    re.VERBOSE,
)


def parse_time_ms(value: str) -> int:
    """Parse a playback time to milliseconds.

    Accepts ``HH:MM:SS.mmm``, ``MM:SS.mmm`` or plain seconds (``12.5``).
    """
    if value is None or not str(value).strip():
        raise ValidationError("Time cannot be empty")

    text = str(value).strip()
    match = _CLOCK_RE.match(text)
    if match:
        hours = int(match.group("h") or 0)
        minutes = int(match.group("m"))
        seconds = int(match.group("s"))
        if minutes >= 60 or seconds >= 60:
            raise ValidationError(f"Invalid time: {text}")
        frac = match.group("frac")
        millis = int(frac.ljust(3, "0")) if frac else 0
        return ((hours * 60 + minutes) * 60 + seconds) * 1000 + millis

    try:
        seconds_value = float(text)
    except ValueError:
        raise ValidationError(
            f"Invalid time: {text}. Use 'HH:MM:SS.mmm', 'MM:SS.mmm' or seconds"
        )
    if not math.isfinite(seconds_value):
        raise ValidationError(f"Invalid time: {text}")
    return validate_time_ms(round(seconds_value * 1000))


def validate_time_ms(time_ms: int) -> int:
    """Validate a playback time in milliseconds."""
    if time_ms < 0:
        raise ValidationError("Time must be non-negative")
    return time_ms
